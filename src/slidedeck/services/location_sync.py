"""
Location Sync

Keeps the navigable location identifier ('#<slide index>') in step with the
slide target. The engine asks a LocationSync to write; external changes
(back/forward, direct links from an embedding host) come in through
MemoryLocationSync.set_external(), which publishes LocationChangedEvent on
the EventBus. FileLocationSync only reads its state file at startup; edits
made to the file while a session runs are not picked up.
"""

import json
import re
from pathlib import Path
from typing import List, Optional, Protocol

import aiofiles

from slidedeck.models.events import LocationChangedEvent
from slidedeck.services.event_bus import EventBus
from slidedeck.utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.LOCATION)

_LOCATION_RE = re.compile(r"^#?(-?\d+)$")


def parse_location(raw: Optional[str]) -> Optional[int]:
    """
    Parse a location string into a slide index.

    '#3' and '3' both give 3. Anything else (empty, 'abc', '#1.5') gives
    None. Range is not checked here; the engine clamps and corrects.
    """
    if raw is None:
        return None
    match = _LOCATION_RE.match(raw.strip())
    if not match:
        return None
    return int(match.group(1))


def format_location(index: int) -> str:
    return f"#{index}"


class LocationSync(Protocol):
    """
    Bidirectional location store.

    Implementations:
    - read() the current raw location string (used once at startup)
    - write(index) to display a new slide index
    - publish LocationChangedEvent when the location changes externally
    """

    def read(self) -> str:
        ...

    async def write(self, index: int) -> None:
        ...


class MemoryLocationSync:
    """
    In-process location store.

    Stands in for a browser address bar: set_external() simulates the user
    typing a location or pressing back/forward.

    Example:
        sync = MemoryLocationSync(bus, initial="#2")
        await sync.set_external("#4")    # publishes LocationChangedEvent(index=4)
        await sync.write(3)              # sync.read() == "#3"
    """

    def __init__(self, event_bus: EventBus, initial: str = ""):
        self.event_bus = event_bus
        self.location = initial
        self.history: List[str] = []

    def read(self) -> str:
        return self.location

    async def write(self, index: int) -> None:
        self.location = format_location(index)
        self.history.append(self.location)
        log.debug("Location written", location=self.location)

    async def set_external(self, raw: str) -> None:
        """External change: store it and report it to the engine"""
        self.location = raw
        index = parse_location(raw)
        log.info("External location changed", location=raw, index=index)
        await self.event_bus.publish(LocationChangedEvent(raw, index))


class FileLocationSync(MemoryLocationSync):
    """
    Location persisted to a small JSON state file.

    Only the slide index survives a restart; animation state never does.

    State format:
    {
        "location": "#3"
    }
    """

    def __init__(self, event_bus: EventBus, path="state.json"):
        super().__init__(event_bus)
        self.path = Path(path)

    async def load(self) -> str:
        """
        Load the stored location; empty string if missing or unreadable.

        Returns:
            The raw location string (may be unparseable; the engine corrects it)
        """
        try:
            async with aiofiles.open(self.path, "r", encoding="utf-8") as f:
                content = await f.read()
            data = json.loads(content)
            self.location = str(data.get("location", ""))
        except FileNotFoundError:
            # First run
            self.location = ""
        except (OSError, ValueError, AttributeError) as ex:
            log.warn("Loading location state failed", path=str(self.path), error=str(ex))
            self.location = ""

        log.info("Location loaded", path=str(self.path), location=self.location or "<none>")
        return self.location

    async def write(self, index: int) -> None:
        await super().write(index)
        await self.save()

    async def save(self) -> None:
        """Write the current location to disk (indented for readability)"""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        async with aiofiles.open(self.path, "w", encoding="utf-8") as f:
            await f.write(json.dumps({"location": self.location}, indent=2))
