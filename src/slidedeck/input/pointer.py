"""
Pointer regions

A click on the scaled, centred slide is split by the diagonal from its
bottom-left to its top-right corner: the upper/left triangle goes back,
the lower/right triangle goes forward. Clicks outside the slide are
classified the same way by extending the diagonal.
"""

from slidedeck.engine.compositor import scale_to_fit
from slidedeck.models.config import Size
from slidedeck.models.enums import NavActionType


def pointer_action(x: float, y: float, viewport: Size, design_size: Size) -> NavActionType:
    """
    Classify a click at viewport coordinates (origin top-left, y down).

    Returns:
        NavActionType.GO_PREV or NavActionType.GO_NEXT
    """
    scale = scale_to_fit(viewport, design_size)
    width = design_size.width * scale
    height = design_size.height * scale
    if width <= 0 or height <= 0:
        return NavActionType.GO_NEXT

    left = (viewport.width - width) / 2
    top = (viewport.height - height) / 2

    # Normalised slide coordinates: the diagonal is u + v == 1
    u = (x - left) / width
    v = (y - top) / height
    if u + v < 1:
        return NavActionType.GO_PREV
    return NavActionType.GO_NEXT
