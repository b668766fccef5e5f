"""Fragment motion styles: completion ∈ [0, 1] → presentation attributes"""

from typing import Any, Callable, Dict

FragmentStyle = Callable[[float], Dict[str, Any]]


def fade(completion: float) -> Dict[str, Any]:
    return {"opacity": completion, "visible": completion > 0.0}


def reveal(completion: float) -> Dict[str, Any]:
    # No in-between: a fragment pops in as soon as the cursor touches it
    shown = completion > 0.0
    return {"opacity": 1.0 if shown else 0.0, "visible": shown}


FRAGMENT_MOTIONS: Dict[str, FragmentStyle] = {
    "fade": fade,
    "reveal": reveal,
}
