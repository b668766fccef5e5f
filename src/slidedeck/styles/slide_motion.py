"""
Slide motion styles

Pure functions mapping a MotionDescriptor to presentation attributes.
Offsets are percentages of the design size; renderers decide how to
apply them.
"""

from typing import Any, Callable, Dict

from slidedeck.models.enums import MotionOrder
from slidedeck.models.motion import MotionDescriptor, Moving

SlideStyle = Callable[[MotionDescriptor], Dict[str, Any]]


def _rest() -> Dict[str, Any]:
    return {"translate_x": 0.0, "translate_y": 0.0, "opacity": 1.0, "z_index": 0}


def scroll(motion: MotionDescriptor) -> Dict[str, Any]:
    """Horizontal scroll: both slides travel left together as completion grows"""
    attrs = _rest()
    if not isinstance(motion, Moving):
        return attrs

    if motion.order is MotionOrder.EARLIER:
        attrs["translate_x"] = -100.0 * motion.completion
    else:
        attrs["translate_x"] = 100.0 * (1.0 - motion.completion)
    return attrs


def vertical_deck(motion: MotionDescriptor) -> Dict[str, Any]:
    """Later slide slides up over the earlier one, which stays in place"""
    attrs = _rest()
    if not isinstance(motion, Moving):
        return attrs

    if motion.order is MotionOrder.LATER:
        attrs["translate_y"] = 100.0 * (1.0 - motion.completion)
        attrs["z_index"] = 1
    return attrs


def fade(motion: MotionDescriptor) -> Dict[str, Any]:
    """Cross-fade between the two slides"""
    attrs = _rest()
    if not isinstance(motion, Moving):
        return attrs

    if motion.order is MotionOrder.EARLIER:
        attrs["opacity"] = 1.0 - motion.completion
    else:
        attrs["opacity"] = motion.completion
        attrs["z_index"] = 1
    return attrs


SLIDE_MOTIONS: Dict[str, SlideStyle] = {
    "scroll": scroll,
    "vertical_deck": vertical_deck,
    "fade": fade,
}
