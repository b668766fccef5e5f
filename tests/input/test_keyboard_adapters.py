"""
Tests for keyboard adapters.

The stdin decoder is driven through feed(); run() is also exercised
against a pseudo-terminal so the raw fd read path is covered.
"""

import asyncio
import os

import pytest

from slidedeck.input.keyboard import start_keyboard
from slidedeck.input.keyboard.adapters.stdin import StdinKeyboardAdapter
from slidedeck.models.events import EventType, KeyboardSource


@pytest.fixture
def keys(bus):
    received = []
    bus.subscribe(EventType.KEYBOARD_KEYPRESS, received.append)
    return received


@pytest.fixture
def adapter(bus):
    return StdinKeyboardAdapter(bus)


@pytest.mark.asyncio
class TestStdinDecoding:
    @pytest.mark.parametrize("data, expected", [
        ("\x1b[C", "RIGHT"),
        ("\x1b[D", "LEFT"),
        ("\x1b[H", "HOME"),
        ("\x1b[F", "END"),
        ("\x1b[1~", "HOME"),
        ("\x1b[4~", "END"),
        ("\x1bOH", "HOME"),
        ("\x1b[6~", "PAGEDOWN"),
        (" ", "SPACE"),
        ("\r", "ENTER"),
        ("\n", "ENTER"),
        ("\x7f", "BACKSPACE"),
        ("l", "L"),
    ])
    async def test_single_keys(self, adapter, keys, data, expected):
        await adapter.feed(data)

        assert [k.key for k in keys] == [expected]
        assert keys[0].modifiers == []
        assert keys[0].keyboard is KeyboardSource.STDIN

    async def test_split_escape_sequence(self, adapter, keys):
        await adapter.feed("\x1b[")
        assert keys == []

        await adapter.feed("D")
        assert [k.key for k in keys] == ["LEFT"]

    async def test_burst(self, adapter, keys):
        await adapter.feed("l\x1b[Ch ")
        assert [k.key for k in keys] == ["L", "RIGHT", "H", "SPACE"]

    async def test_ctrl_and_shift(self, adapter, keys):
        await adapter.feed("\x0cP")
        assert [(k.key, k.modifiers) for k in keys] == [("L", ["CTRL"]), ("P", ["SHIFT"])]

    async def test_lone_escape_is_flushed(self, adapter, keys):
        await adapter.feed("\x1b")
        assert keys == []

        await adapter._flush_lone_escape()
        assert [k.key for k in keys] == ["ESCAPE"]

    async def test_escape_followed_by_key(self, adapter, keys):
        await adapter.feed("\x1bq")
        assert [k.key for k in keys] == ["ESCAPE", "Q"]


@pytest.mark.skipif(not hasattr(os, "openpty"), reason="needs a pseudo-terminal")
@pytest.mark.asyncio
class TestStdinTerminal:
    """run() against a real pseudo-terminal, bytes written by the master side."""

    async def wait_for(self, keys, count, timeout=2.0):
        loop = asyncio.get_running_loop()
        deadline = loop.time() + timeout
        while len(keys) < count and loop.time() < deadline:
            await asyncio.sleep(0.01)

    async def run_with(self, bus, keys, chunks, count):
        master, slave = os.openpty()
        with os.fdopen(slave, "r") as terminal:
            adapter = StdinKeyboardAdapter(bus, stream=terminal)
            task = asyncio.create_task(adapter.run())
            try:
                await asyncio.sleep(0.05)
                for chunk in chunks:
                    os.write(master, chunk)
                await self.wait_for(keys, count)
            finally:
                task.cancel()
                with pytest.raises(asyncio.CancelledError):
                    await task
                os.close(master)
        return [(k.key, k.modifiers) for k in keys]

    async def test_arrow_keys(self, bus, keys):
        result = await self.run_with(bus, keys, [b"\x1b[C", b"\x1b[D"], 2)
        assert result == [("RIGHT", []), ("LEFT", [])]

    async def test_home_end_and_letters(self, bus, keys):
        result = await self.run_with(bus, keys, [b"\x1b[H", b"l", b"\x1b[4~"], 3)
        assert result == [("HOME", []), ("L", []), ("END", [])]

    async def test_multibyte_input(self, bus, keys):
        result = await self.run_with(bus, keys, ["é".encode("utf-8")], 1)
        assert [k for k, _ in result] == ["É"]


@pytest.mark.asyncio
class TestFactory:
    async def test_falls_back_to_dummy(self, bus, monkeypatch):
        async def failing_run(self):
            raise RuntimeError("STDIN is not a TTY")

        monkeypatch.setattr(StdinKeyboardAdapter, "run", failing_run)

        task = asyncio.create_task(start_keyboard(bus))
        await asyncio.sleep(0.05)
        assert not task.done()

        task.cancel()
        with pytest.raises(asyncio.CancelledError):
            await task


class TestEvdevKeyNames:
    def test_normalize(self):
        pytest.importorskip("evdev")
        from slidedeck.input.keyboard.adapters.evdev import normalize_key_name

        assert normalize_key_name("KEY_RIGHT") == "RIGHT"
        assert normalize_key_name(["KEY_HOME", "KEY_HOMEPAGE"]) == "HOME"
        assert normalize_key_name("KEY_LEFTSHIFT") == ""
        assert normalize_key_name("") == ""
