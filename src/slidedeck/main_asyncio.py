"""
main_asyncio.py — Application entry point for slidedeck
-------------------------------------------------------

Responsible for:
- loading configuration and the slide deck
- wiring event bus, input, location sync and the presentation service
- running the clock loop until Ctrl+C
"""

import argparse
import asyncio
import shutil
import signal
import sys

from slidedeck.input import InputService, KeyBindings
from slidedeck.input.keyboard import start_keyboard
from slidedeck.managers import ConfigManager
from slidedeck.models.config import Size
from slidedeck.models.enums import LogCategory, LogLevel
from slidedeck.renderers.text_renderer import TextRenderer
from slidedeck.services.event_bus import EventBus
from slidedeck.services.location_sync import FileLocationSync, MemoryLocationSync
from slidedeck.services.middleware import log_middleware
from slidedeck.services.presentation_service import PresentationService
from slidedeck.utils.logger import get_logger, configure_logger

# Unicode symbols in log output
if hasattr(sys.stdout, 'reconfigure') and sys.stdout.encoding != 'UTF-8':
    sys.stdout.reconfigure(encoding='utf-8')  # type: ignore

log = get_logger().for_category(LogCategory.SYSTEM)


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="slidedeck", description="Animated terminal slide presenter")
    parser.add_argument("deck", nargs="?", help="Deck YAML (default: deck from config)")
    parser.add_argument("-c", "--config", help="config.yaml (default: factory defaults)")
    parser.add_argument("-l", "--location", help="Start location, e.g. '#3'")
    parser.add_argument("--evdev", action="store_true", help="Read a physical keyboard via evdev")
    parser.add_argument("--debug", action="store_true", help="Verbose logging")
    return parser.parse_args(argv)


def terminal_viewport() -> Size:
    columns, lines = shutil.get_terminal_size()
    return Size(columns, lines)


def _watch_terminal_size(service: PresentationService) -> None:
    """Feed terminal resizes (SIGWINCH) to the engine as Resize actions."""
    loop = asyncio.get_running_loop()

    def on_resize():
        viewport = terminal_viewport()
        loop.create_task(service.resize(viewport.width, viewport.height))

    try:
        loop.add_signal_handler(signal.SIGWINCH, on_resize)
    except (AttributeError, NotImplementedError):
        log.debug("Terminal resize notifications unavailable on this platform")


async def main(argv=None) -> None:
    args = parse_args(argv)
    configure_logger(LogLevel.DEBUG if args.debug else LogLevel.INFO)

    config_manager = ConfigManager(args.config)
    config_manager.load()
    config = config_manager.get_presentation_config()
    catalog = config_manager.load_deck(args.deck)

    event_bus = EventBus()
    event_bus.add_middleware(log_middleware)

    state_file = config_manager.location_state_file
    if state_file:
        location_sync = FileLocationSync(event_bus, state_file)
        await location_sync.load()
    else:
        location_sync = MemoryLocationSync(event_bus)
    if args.location is not None:
        location_sync.location = args.location

    service = PresentationService(
        catalog,
        config,
        event_bus,
        location_sync,
        renderer=TextRenderer(len(catalog)),
        viewport=terminal_viewport(),
    )
    InputService(event_bus, KeyBindings(config.key_bindings), service.geometry)

    await service.start()
    _watch_terminal_size(service)
    keyboard_task = asyncio.create_task(start_keyboard(event_bus, prefer_evdev=args.evdev))

    try:
        await keyboard_task
    finally:
        keyboard_task.cancel()
        await service.stop()
        log.info("Presentation closed")


def run() -> None:
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        pass


if __name__ == "__main__":
    run()
