import asyncio
from slidedeck.services.event_bus import EventBus
from slidedeck.utils.logger import get_logger, LogCategory
from .adapters.base import IKeyboardAdapter

log = get_logger().for_category(LogCategory.INPUT)


async def start_keyboard(event_bus: EventBus, prefer_evdev: bool = False) -> None:
    """
    Run the first working keyboard adapter until cancelled.

    Priority:
    1. Evdev (Linux physical keyboard), only when prefer_evdev is set
    2. STDIN (SSH / terminal)
    3. Dummy (fallback)
    """

    adapters: list[IKeyboardAdapter] = []

    if prefer_evdev:
        try:
            from .adapters.evdev import EvdevKeyboardAdapter
            adapters.append(EvdevKeyboardAdapter(event_bus))
        except ImportError as e:
            log.info("Evdev adapter not available", reason=str(e))

    from .adapters.stdin import StdinKeyboardAdapter
    adapters.append(StdinKeyboardAdapter(event_bus))

    from .adapters.dummy import DummyKeyboardAdapter
    adapters.append(DummyKeyboardAdapter(event_bus))

    for adapter in adapters:
        try:
            log.info("Starting keyboard adapter", adapter=adapter.__class__.__name__)
            await adapter.run()
            return

        except asyncio.CancelledError:
            raise

        except (RuntimeError, ImportError, OSError) as e:
            log.warn(
                "Keyboard adapter failed, falling back",
                adapter=adapter.__class__.__name__,
                reason=str(e)
            )

    log.error("No keyboard adapter could be started")
    raise RuntimeError("Keyboard input unavailable")
