"""Raw input events (keyboard, pointer)"""

from dataclasses import dataclass
from typing import List, Optional

from slidedeck.models.events.base import Event
from slidedeck.models.events.types import EventType
from slidedeck.models.events.sources import EventSource, KeyboardSource


@dataclass(init=False)
class KeyboardKeyPressEvent(Event):
    """Keyboard key press event"""
    key: str
    modifiers: List[str]
    keyboard: KeyboardSource

    def __init__(self, key: str, modifiers: Optional[List[str]] = None, keyboard: KeyboardSource = KeyboardSource.STDIN):
        """
        Args:
            key: Normalised key name (e.g. 'L', 'ENTER', 'RIGHT', 'HOME')
            modifiers: List of modifier keys (e.g. ['CTRL', 'SHIFT'])
            keyboard: Adapter the key came from
        """
        super().__init__(
            type=EventType.KEYBOARD_KEYPRESS,
            source=EventSource.INPUT,
        )
        self.key = key
        self.modifiers = modifiers or []
        self.keyboard = keyboard


@dataclass(init=False)
class PointerClickEvent(Event):
    """Pointer click at viewport coordinates (pixels, origin top-left)"""
    x: float
    y: float

    def __init__(self, x: float, y: float):
        super().__init__(
            type=EventType.POINTER_CLICK,
            source=EventSource.INPUT,
        )
        self.x = x
        self.y = y
