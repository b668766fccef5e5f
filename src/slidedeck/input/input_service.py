"""
Input Service

Translates raw input events (key presses, pointer clicks) into
NavigationActionEvents using the configured key bindings and the
pointer-region rule.
"""

from typing import Callable, Tuple

from slidedeck.input.bindings import KeyBindings
from slidedeck.input.pointer import pointer_action
from slidedeck.models.actions import action_from_type
from slidedeck.models.config import Size
from slidedeck.models.events import (
    EventType,
    KeyboardKeyPressEvent,
    NavigationActionEvent,
    PointerClickEvent,
)
from slidedeck.services.event_bus import EventBus
from slidedeck.utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.INPUT)


class InputService:
    """
    InputSource for the navigation engine.

    Subscribes to KEYBOARD_KEYPRESS and POINTER_CLICK, publishes
    NAVIGATION_ACTION. Key presses with modifiers (e.g. CTRL+L) are left
    to other handlers.

    Args:
        event_bus: shared EventBus
        bindings: key → action lookup
        geometry: returns (viewport, design_size) for pointer classification
    """

    def __init__(
        self,
        event_bus: EventBus,
        bindings: KeyBindings,
        geometry: Callable[[], Tuple[Size, Size]],
    ):
        self.event_bus = event_bus
        self.bindings = bindings
        self.geometry = geometry

        event_bus.subscribe(
            EventType.KEYBOARD_KEYPRESS,
            self._on_key_press,
            filter_fn=lambda e: not e.modifiers,
        )
        event_bus.subscribe(EventType.POINTER_CLICK, self._on_pointer_click)

    async def _on_key_press(self, event: KeyboardKeyPressEvent) -> None:
        action_type = self.bindings.action_for(event.key)
        if action_type is None:
            log.debug("Unbound key", key=event.key)
            return

        log.debug("Key bound", key=event.key, action=action_type.name)
        await self.event_bus.publish(NavigationActionEvent(action_from_type(action_type)))

    async def _on_pointer_click(self, event: PointerClickEvent) -> None:
        viewport, design_size = self.geometry()
        action_type = pointer_action(event.x, event.y, viewport, design_size)
        log.debug("Pointer click", x=event.x, y=event.y, action=action_type.name)
        await self.event_bus.publish(NavigationActionEvent(action_from_type(action_type)))
