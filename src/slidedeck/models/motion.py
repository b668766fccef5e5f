"""
Motion descriptors

Classification of a slide's visual role at one composition instant.
Derived from the navigation state by RenderCompositor; never stored.
"""

from dataclasses import dataclass
from typing import Union

from slidedeck.models.enums import MotionDirection, MotionOrder


@dataclass(frozen=True)
class Still:
    """Slide at rest (no slide transition in progress)"""


@dataclass(frozen=True)
class Moving:
    """
    Slide taking part in a transition.

    Attributes:
        direction: INCOMING (being revealed) or OUTGOING (being left)
        order: EARLIER (lower index of the pair) or LATER (higher index)
        completion: eased progress from the earlier slide (0.0) to the
            later slide (1.0)
    """
    direction: MotionDirection
    order: MotionOrder
    completion: float


MotionDescriptor = Union[Still, Moving]

STILL = Still()
