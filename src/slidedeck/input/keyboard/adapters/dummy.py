"""
Dummy keyboard adapter for hosts without usable keyboard input
(e.g. stdin not a TTY). Does nothing - keeps the session alive so pointer
input and location changes still work.
"""

import asyncio
from typing import TYPE_CHECKING
from .base import IKeyboardAdapter

if TYPE_CHECKING:
    from slidedeck.services.event_bus import EventBus


class DummyKeyboardAdapter(IKeyboardAdapter):
    """Keyboard adapter that never emits events"""

    def __init__(self, event_bus: "EventBus"):
        self.event_bus = event_bus

    async def run(self) -> None:
        while True:
            await asyncio.sleep(1.0)
