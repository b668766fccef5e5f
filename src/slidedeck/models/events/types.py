from enum import Enum, auto


class EventType(Enum):
    # Raw input
    KEYBOARD_KEYPRESS = auto()
    POINTER_CLICK = auto()

    # Navigation
    NAVIGATION_ACTION = auto()

    # Location sync
    LOCATION_CHANGED = auto()   # external location changed (back/forward, direct link)
    LOCATION_UPDATED = auto()   # engine wrote a new location
