"""
Easing Functions

Curves mapping transition progress t ∈ [0, 1] to an eased factor ∈ [0, 1].
RenderCompositor applies the configured curve to slide transitions, mirrored
when moving backwards.
"""

from typing import Callable, Dict, List

EasingFunction = Callable[[float], float]


def ease_linear(t: float) -> float:
    """
    Linear easing (constant speed)

    Args:
        t: Progress (0.0 = start, 1.0 = end)

    Returns:
        Eased factor (0.0 to 1.0)
    """
    return t


def ease_in_quad(t: float) -> float:
    """Quadratic ease-in (slow start → fast end)"""
    return t * t


def ease_out_quad(t: float) -> float:
    """Quadratic ease-out (fast start → slow end)"""
    return 1 - (1 - t) * (1 - t)


def ease_in_out_quad(t: float) -> float:
    """Quadratic ease-in-out (slow start → fast middle → slow end)"""
    return 2 * t * t if t < 0.5 else 1 - (-2 * t + 2) ** 2 / 2


def ease_in_cubic(t: float) -> float:
    """Cubic ease-in (very slow start)"""
    return t * t * t


def ease_out_cubic(t: float) -> float:
    """Cubic ease-out (very slow end)"""
    return 1 - (1 - t) ** 3


def ease_in_out_cubic(t: float) -> float:
    """Cubic ease-in-out (very smooth acceleration/deceleration)"""
    return 4 * t ** 3 if t < 0.5 else 1 - (-2 * t + 2) ** 3 / 2


def flip(easing: EasingFunction) -> EasingFunction:
    """
    Mirror an easing curve: flip(f)(t) = 1 - f(1 - t)

    Playing a transition backwards with the mirrored curve retraces the
    same visual path the forward transition took.
    """
    def flipped(t: float) -> float:
        return 1 - easing(1 - t)

    flipped.__name__ = f"flip_{getattr(easing, '__name__', 'easing')}"
    return flipped


EASINGS: Dict[str, EasingFunction] = {
    "linear": ease_linear,
    "ease_in_quad": ease_in_quad,
    "ease_out_quad": ease_out_quad,
    "ease_in_out_quad": ease_in_out_quad,
    "ease_in_cubic": ease_in_cubic,
    "ease_out_cubic": ease_out_cubic,
    "ease_in_out_cubic": ease_in_out_cubic,
}


def get_easing(name: str) -> EasingFunction:
    """
    Resolve an easing function by name.

    Raises:
        KeyError: unknown easing name
    """
    return EASINGS[name.lower()]


def list_easings() -> List[str]:
    return list(EASINGS.keys())
