"""
Tests for EventBus.

Covers publishing, subscription, filtering, middleware, priority order,
fault tolerance and run-to-completion ordering.
"""

import asyncio

import pytest

from slidedeck.models.actions import GoNext
from slidedeck.models.events import (
    EventType,
    KeyboardKeyPressEvent,
    NavigationActionEvent,
)
from slidedeck.services.middleware import log_middleware


@pytest.mark.asyncio
class TestEventBus:

    async def test_basic_pub_sub(self, bus):
        received = []

        async def handler(event):
            received.append(event)

        bus.subscribe(EventType.KEYBOARD_KEYPRESS, handler)
        await bus.publish(KeyboardKeyPressEvent("RIGHT"))

        assert len(received) == 1
        assert received[0].key == "RIGHT"

    async def test_sync_handler(self, bus):
        received = []
        bus.subscribe(EventType.NAVIGATION_ACTION, received.append)

        await bus.publish(NavigationActionEvent(GoNext()))

        assert received[0].action == GoNext()

    async def test_filtering(self, bus):
        plain = []
        modified = []

        bus.subscribe(EventType.KEYBOARD_KEYPRESS, plain.append, filter_fn=lambda e: not e.modifiers)
        bus.subscribe(EventType.KEYBOARD_KEYPRESS, modified.append, filter_fn=lambda e: bool(e.modifiers))

        await bus.publish(KeyboardKeyPressEvent("L"))
        await bus.publish(KeyboardKeyPressEvent("L", ["CTRL"]))
        await bus.publish(KeyboardKeyPressEvent("H"))

        assert [e.key for e in plain] == ["L", "H"]
        assert len(modified) == 1

    async def test_middleware_blocking(self, bus):
        received = []

        def block_escape(event):
            if getattr(event, "key", None) == "ESCAPE":
                return None
            return event

        bus.add_middleware(block_escape)
        bus.subscribe(EventType.KEYBOARD_KEYPRESS, received.append)

        await bus.publish(KeyboardKeyPressEvent("ESCAPE"))
        await bus.publish(KeyboardKeyPressEvent("SPACE"))

        assert [e.key for e in received] == ["SPACE"]

    async def test_log_middleware_passes_events_through(self, bus):
        received = []
        bus.add_middleware(log_middleware)
        bus.subscribe(EventType.NAVIGATION_ACTION, received.append)

        event = NavigationActionEvent(GoNext())
        await bus.publish(event)

        assert received == [event]

    async def test_priority_order(self, bus):
        order = []

        bus.subscribe(EventType.KEYBOARD_KEYPRESS, lambda e: order.append("low"), priority=0)
        bus.subscribe(EventType.KEYBOARD_KEYPRESS, lambda e: order.append("high"), priority=10)
        bus.subscribe(EventType.KEYBOARD_KEYPRESS, lambda e: order.append("mid"), priority=5)

        await bus.publish(KeyboardKeyPressEvent("L"))

        assert order == ["high", "mid", "low"]

    async def test_fault_tolerance(self, bus):
        received = []

        def crashing(event):
            raise RuntimeError("boom")

        bus.subscribe(EventType.KEYBOARD_KEYPRESS, crashing, priority=10)
        bus.subscribe(EventType.KEYBOARD_KEYPRESS, received.append)

        await bus.publish(KeyboardKeyPressEvent("L"))

        assert len(received) == 1

    async def test_unsubscribe(self, bus):
        received = []
        bus.subscribe(EventType.KEYBOARD_KEYPRESS, received.append)
        bus.unsubscribe(EventType.KEYBOARD_KEYPRESS, received.append)

        await bus.publish(KeyboardKeyPressEvent("L"))

        assert received == []

    async def test_event_history(self, bus):
        for key in ("A", "B", "C"):
            await bus.publish(KeyboardKeyPressEvent(key))

        assert [e.key for e in bus.get_event_history(2)] == ["B", "C"]
        bus.clear_history()
        assert bus.get_event_history() == []

    async def test_event_payload(self):
        event = KeyboardKeyPressEvent("L", ["SHIFT"])
        assert event.to_data()["key"] == "L"
        assert "timestamp" not in event.to_data()

    async def test_nested_publish_runs_after_current_event(self, bus):
        order = []

        async def on_key(event):
            order.append(f"key:{event.key}:start")
            await bus.publish(NavigationActionEvent(GoNext()))
            order.append(f"key:{event.key}:end")

        bus.subscribe(EventType.KEYBOARD_KEYPRESS, on_key)
        bus.subscribe(EventType.NAVIGATION_ACTION, lambda e: order.append("nav"))

        await bus.publish(KeyboardKeyPressEvent("RIGHT"))

        assert order == ["key:RIGHT:start", "key:RIGHT:end", "nav"]

    async def test_publish_from_other_task_waits_for_delivery(self, bus):
        order = []
        gate = asyncio.Event()

        async def slow(event):
            order.append(f"start:{event.key}")
            await gate.wait()
            order.append(f"end:{event.key}")

        bus.subscribe(EventType.KEYBOARD_KEYPRESS, slow)

        first = asyncio.create_task(bus.publish(KeyboardKeyPressEvent("A")))
        await asyncio.sleep(0)
        await bus.publish(KeyboardKeyPressEvent("B"))
        assert bus.pending == 1

        gate.set()
        await first

        assert order == ["start:A", "end:A", "start:B", "end:B"]
        assert bus.pending == 0
