"""
Event system for slidedeck

Raw input events are translated into navigation actions; location events
keep the external location and the slide target in sync.
"""

from slidedeck.models.events.types import EventType
from slidedeck.models.events.base import Event
from slidedeck.models.events.sources import EventSource, KeyboardSource

from slidedeck.models.events.input import KeyboardKeyPressEvent, PointerClickEvent
from slidedeck.models.events.navigation import (
    NavigationActionEvent,
    LocationChangedEvent,
    LocationUpdatedEvent,
)

__all__ = [
    "EventType",
    "Event",
    "EventSource",
    "KeyboardSource",

    "KeyboardKeyPressEvent",
    "PointerClickEvent",

    "NavigationActionEvent",
    "LocationChangedEvent",
    "LocationUpdatedEvent",
]
