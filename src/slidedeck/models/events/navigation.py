"""Navigation and location events"""

from dataclasses import dataclass
from typing import Optional

from slidedeck.models.actions import NavigationAction
from slidedeck.models.events.base import Event
from slidedeck.models.events.types import EventType
from slidedeck.models.events.sources import EventSource


@dataclass(init=False)
class NavigationActionEvent(Event):
    """An abstract navigation action ready for the state machine"""
    action: NavigationAction

    def __init__(self, action: NavigationAction, source: EventSource = EventSource.KEY_BINDINGS):
        super().__init__(
            type=EventType.NAVIGATION_ACTION,
            source=source,
        )
        self.action = action


@dataclass(init=False)
class LocationChangedEvent(Event):
    """
    External location changed.

    raw is the location string as received; index is its parsed slide
    index, None when unparseable.
    """
    raw: str
    index: Optional[int]

    def __init__(self, raw: str, index: Optional[int]):
        super().__init__(
            type=EventType.LOCATION_CHANGED,
            source=EventSource.LOCATION,
        )
        self.raw = raw
        self.index = index


@dataclass(init=False)
class LocationUpdatedEvent(Event):
    """The engine rewrote the external location"""
    index: int
    location: str

    def __init__(self, index: int, location: str):
        super().__init__(
            type=EventType.LOCATION_UPDATED,
            source=EventSource.PRESENTATION,
        )
        self.index = index
        self.location = location
