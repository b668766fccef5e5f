"""
Presentation configuration models

Startup options recognised by the engine. ConfigManager builds these from
YAML; hosts embedding the engine can also construct them directly.
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Tuple

from slidedeck.engine.easing import EasingFunction, ease_in_out_cubic
from slidedeck.models.enums import NavActionType
from slidedeck.styles.fragment_motion import fade as fade_fragment
from slidedeck.styles.slide_motion import scroll

SlideMotionStyle = Callable[[Any], Dict[str, Any]]
FragmentMotionStyle = Callable[[float], Dict[str, Any]]


@dataclass(frozen=True)
class Size:
    width: float
    height: float


@dataclass(frozen=True)
class KeyBinding:
    """Keys (normalised names, e.g. 'RIGHT', 'SPACE', 'L') triggering one action"""
    action: NavActionType
    keys: Tuple[str, ...]


DEFAULT_KEY_BINDINGS: Tuple[KeyBinding, ...] = (
    KeyBinding(NavActionType.GO_FIRST, ("HOME",)),
    KeyBinding(NavActionType.GO_LAST, ("END",)),
    KeyBinding(NavActionType.GO_NEXT, ("ENTER", "SPACE", "RIGHT", "L", "D")),
    KeyBinding(NavActionType.GO_PREV, ("BACKSPACE", "LEFT", "H", "A")),
    KeyBinding(NavActionType.TOGGLE_PAUSE, ("P",)),
)

DEFAULT_DESIGN_SIZE = Size(1280, 720)


@dataclass
class PresentationConfig:
    """
    Options for one presentation session

    Attributes:
        design_size: size the slides are authored for (scale-to-fit reference)
        animation_duration_ms: time for a one-step slide or fragment move
        easing: [0,1] → [0,1] curve applied to slide transitions
        slide_motion: MotionDescriptor → presentation attributes
        fragment_motion: fragment completion → presentation attributes
        key_bindings: key name sets per navigation action
        fps: clock loop target rate
    """
    design_size: Size = DEFAULT_DESIGN_SIZE
    animation_duration_ms: float = 500.0
    easing: EasingFunction = ease_in_out_cubic
    slide_motion: SlideMotionStyle = scroll
    fragment_motion: FragmentMotionStyle = fade_fragment
    key_bindings: List[KeyBinding] = field(default_factory=lambda: list(DEFAULT_KEY_BINDINGS))
    fps: int = 60

    def __repr__(self):
        return (
            f"PresentationConfig({self.design_size.width:g}x{self.design_size.height:g}, "
            f"{self.animation_duration_ms:g}ms, {self.easing.__name__}, {self.fps} fps)"
        )
