"""
Event Bus - Central event routing system

Pub-sub with run-to-completion delivery:
- Publishers: publish(event)
- Subscribers: subscribe(event_type, handler, priority, filter_fn)
- Middleware: add_middleware(middleware_fn)

Events are queued and delivered one at a time. An event published while
another is being delivered (from inside a handler, or from another task
while a handler awaits) waits in the queue until every handler of the
current event has returned.
"""

import asyncio
from collections import deque
from dataclasses import dataclass
from typing import Callable, Deque, Dict, List, Optional

from slidedeck.models.events import Event, EventType
from slidedeck.utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.EVENT)

Handler = Callable[[Event], None]
Middleware = Callable[[Event], Optional[Event]]


@dataclass
class EventHandler:
    """Event handler registration"""
    handler: Handler
    priority: int
    filter_fn: Optional[Callable[[Event], bool]]

    def accepts(self, event: Event) -> bool:
        return self.filter_fn is None or self.filter_fn(event)


class EventBus:
    """
    Central event bus

    Features:
    - Priority-based handler execution (high priority first)
    - Per-handler filtering
    - Middleware pipeline (observe, rewrite or drop events)
    - Async/sync handler support (auto-detected)
    - One crashing handler doesn't stop the others

    Example:
        bus = EventBus()

        bus.subscribe(
            EventType.KEYBOARD_KEYPRESS,
            on_key,
            priority=10,
            filter_fn=lambda e: not e.modifiers
        )

        await bus.publish(KeyboardKeyPressEvent("RIGHT"))
    """

    def __init__(self, history_limit: int = 100):
        self._handlers: Dict[EventType, List[EventHandler]] = {}
        self._middleware: List[Middleware] = []

        self._queue: Deque[Event] = deque()
        self._delivering = False

        self._history: Deque[Event] = deque(maxlen=history_limit)

    # ------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------

    def subscribe(
        self,
        event_type: EventType,
        handler: Handler,
        priority: int = 0,
        filter_fn: Optional[Callable[[Event], bool]] = None
    ) -> None:
        """
        Args:
            event_type: Which events to listen for
            handler: Function to call (can be async or sync)
            priority: Execution priority (higher = called first, default: 0)
            filter_fn: Optional filter (return True = handle, False = skip)
        """
        handlers = self._handlers.setdefault(event_type, [])
        handlers.append(EventHandler(handler, priority, filter_fn))
        # Stable sort: equal priorities keep subscription order
        handlers.sort(key=lambda h: h.priority, reverse=True)

        log.debug(
            "Event handler subscribed",
            event_type=event_type.name,
            handler=getattr(handler, "__qualname__", repr(handler)),
            priority=priority
        )

    def unsubscribe(self, event_type: EventType, handler: Handler) -> None:
        handlers = self._handlers.get(event_type, [])
        self._handlers[event_type] = [h for h in handlers if h.handler != handler]

    def add_middleware(self, middleware: Middleware) -> None:
        """Middleware runs in registration order; returning None drops the event."""
        self._middleware.append(middleware)
        log.debug("Middleware registered", middleware=middleware.__name__)

    # ------------------------------------------------------------
    # Delivery
    # ------------------------------------------------------------

    async def publish(self, event: Event) -> None:
        """
        Queue an event and, unless a delivery is already in progress,
        deliver the queue until it is empty.
        """
        for middleware in self._middleware:
            event = middleware(event)
            if event is None:
                return

        self._queue.append(event)
        if self._delivering:
            return

        self._delivering = True
        try:
            while self._queue:
                await self._deliver(self._queue.popleft())
        finally:
            self._delivering = False

    async def _deliver(self, event: Event) -> None:
        self._history.append(event)

        handlers = [h for h in self._handlers.get(event.type, []) if h.accepts(event)]
        if not handlers:
            log.debug("No handlers for event", event_type=event.type.name)
            return

        for entry in handlers:
            try:
                if asyncio.iscoroutinefunction(entry.handler):
                    await entry.handler(event)
                else:
                    entry.handler(event)
            except Exception as e:
                log.error(
                    f"Event handler failed: {getattr(entry.handler, '__qualname__', '?')} for {event.type.name}",
                    exception=repr(e)
                )

    @property
    def pending(self) -> int:
        """Events queued behind the one being delivered"""
        return len(self._queue)

    def get_event_history(self, limit: int = 10) -> List[Event]:
        """Recent delivered events, newest last"""
        return list(self._history)[-limit:]

    def clear_history(self) -> None:
        self._history.clear()
