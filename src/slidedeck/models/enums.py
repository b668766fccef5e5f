"""
Enums for the slide navigation engine
"""

from enum import Enum, auto


class NavActionType(Enum):
    """
    Abstract navigation actions produced by input sources.

    Key bindings and pointer regions resolve to one of these; the
    parametrised actions (RESIZE, TICK, LOCATION_CHANGED) are never bound
    to keys.
    """
    GO_FIRST = auto()
    GO_LAST = auto()
    GO_NEXT = auto()
    GO_PREV = auto()
    TOGGLE_PAUSE = auto()
    RESIZE = auto()
    TICK = auto()
    LOCATION_CHANGED = auto()


class AnimatorID(Enum):
    """Which position animator a navigation intent is routed to"""
    SLIDE = auto()
    FRAGMENT = auto()


class MotionDirection(Enum):
    """Role of a slide during a transition"""
    INCOMING = auto()   # Slide being revealed
    OUTGOING = auto()   # Slide being left


class MotionOrder(Enum):
    """Relative position of a moving slide within the pair"""
    EARLIER = auto()    # Lower slide index
    LATER = auto()      # Higher slide index


class KeyboardSource(Enum):
    EVDEV = auto()
    STDIN = auto()


class LogLevel(Enum):
    """Log severity levels"""
    DEBUG = auto()
    INFO = auto()
    WARN = auto()
    ERROR = auto()


class LogCategory(Enum):
    """Log categories for grouping related events"""
    CONFIG = auto()      # Configuration and deck loading
    NAVIGATION = auto()  # Slide/fragment target changes, routing
    ANIMATION = auto()   # Clock loop, animator progress
    RENDER = auto()      # Composition and renderer output
    INPUT = auto()       # Keyboard and pointer adapters
    LOCATION = auto()    # Location sync reads/writes
    EVENT = auto()       # Event bus events and handling
    SYSTEM = auto()      # Startup, shutdown, errors
