from enum import Enum, auto

from slidedeck.models.enums import KeyboardSource


class EventSource(Enum):
    """Event source identifiers for application events"""
    INPUT = auto()          # Keyboard and pointer adapters
    KEY_BINDINGS = auto()   # Raw input translated to navigation actions
    LOCATION = auto()       # LocationSync implementations
    PRESENTATION = auto()   # PresentationService (clock, engine outputs)


__all__ = ["EventSource", "KeyboardSource"]
