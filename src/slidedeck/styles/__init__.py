"""
Visual styles

Swappable presentation themes. The engine only ever calls these through
PresentationConfig.slide_motion / fragment_motion.
"""

from slidedeck.styles.slide_motion import SLIDE_MOTIONS, SlideStyle
from slidedeck.styles.fragment_motion import FRAGMENT_MOTIONS, FragmentStyle

__all__ = [
    "SLIDE_MOTIONS",
    "SlideStyle",
    "FRAGMENT_MOTIONS",
    "FragmentStyle",
]
