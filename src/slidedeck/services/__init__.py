"""
Services Layer

Session-level services wired around the navigation engine.
"""

from slidedeck.services.event_bus import EventBus
from slidedeck.services.location_sync import (
    FileLocationSync,
    LocationSync,
    MemoryLocationSync,
    format_location,
    parse_location,
)
from slidedeck.services.presentation_service import PresentationService

__all__ = [
    "EventBus",
    "FileLocationSync",
    "LocationSync",
    "MemoryLocationSync",
    "format_location",
    "parse_location",
    "PresentationService",
]
