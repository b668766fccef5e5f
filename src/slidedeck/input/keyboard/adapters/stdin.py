import asyncio
import codecs
import os
import select
import sys
from typing import List, Optional, TextIO
from slidedeck.services.event_bus import EventBus
from slidedeck.models.events import KeyboardKeyPressEvent, KeyboardSource
from slidedeck.utils.logger import get_logger, LogCategory
from .base import IKeyboardAdapter

log = get_logger().for_category(LogCategory.INPUT)

# CSI sequences: ESC [ <final>  and  ESC [ <n> ~
ESCAPE_SEQUENCES = {
    '\x1b[A': 'UP',
    '\x1b[B': 'DOWN',
    '\x1b[C': 'RIGHT',
    '\x1b[D': 'LEFT',
    '\x1b[H': 'HOME',
    '\x1b[F': 'END',
    '\x1b[1~': 'HOME',
    '\x1b[4~': 'END',
    '\x1b[7~': 'HOME',
    '\x1b[8~': 'END',
    '\x1b[5~': 'PAGEUP',
    '\x1b[6~': 'PAGEDOWN',
    '\x1bOH': 'HOME',
    '\x1bOF': 'END',
}


class StdinKeyboardAdapter(IKeyboardAdapter):
    """
    Terminal standard keyboard adapter

    Intended for:
    - SSH sessions
    - Local Unix terminals

    Features:
    - Async-friendly (select + asyncio)
    - Escape sequence handling (arrows, Home/End, PageUp/PageDown)
    - Ctrl+Key detection
    - Proper terminal mode handling (cbreak)

    Publishes KeyboardKeyPressEvent to EventBus on key press.
    Terminal settings are restored on exit.
    """

    def __init__(self, event_bus: EventBus, stream: Optional[TextIO] = None):
        self.event_bus = event_bus
        self.stream = stream or sys.stdin
        self._old_settings = None
        self._buffer = ""
        self._decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")

    async def run(self) -> None:
        """
        Read stdin until cancelled.

        Raises:
            RuntimeError: STDIN is not a TTY or cannot be read
        """
        # termios/tty only exist on Unix; import failure means "not available"
        import termios
        import tty

        log.info("Starting STDIN keyboard adapter")

        if not self.stream.isatty():
            log.info("STDIN is not a TTY, cannot use stdin keyboard adapter")
            raise RuntimeError("STDIN is not a TTY")

        fd = self.stream.fileno()
        self._old_settings = termios.tcgetattr(fd)
        tty.setcbreak(fd)

        log.info("STDIN keyboard adapter active (cbreak mode enabled)")

        try:
            while True:
                ready, _, _ = select.select([fd], [], [], 0)

                if not ready:
                    # Yield to the event loop; a lone ESC gets one pass to be completed
                    await asyncio.sleep(0.01)
                    await self._flush_lone_escape()
                    continue

                # Raw fd read: a buffered text read would pull a whole escape
                # sequence off the fd and leave select() reporting not-ready
                try:
                    data = os.read(fd, 1024)
                except OSError as e:
                    log.info("STDIN read error, stopping adapter", reason=str(e))
                    raise RuntimeError("STDIN read failed") from e

                if not data:
                    raise RuntimeError("STDIN closed")

                await self.feed(self._decoder.decode(data))

        except asyncio.CancelledError:
            log.info("STDIN keyboard adapter cancelled")
            raise

        finally:
            if self._old_settings:
                termios.tcsetattr(fd, termios.TCSADRAIN, self._old_settings)
                log.debug("Terminal settings restored")

    async def feed(self, data: str) -> None:
        """Push raw terminal input through the decoder (used by tests and replay)"""
        self._buffer += data
        await self._process_buffer()

    async def _flush_lone_escape(self) -> None:
        if self._buffer == '\x1b':
            self._buffer = ""
            await self._publish_key("ESCAPE")

    async def _process_buffer(self) -> None:
        """
        Consume buffered stdin input and emit keyboard events.

        Emits as soon as a full token is available; an incomplete escape
        sequence stays buffered until more input arrives.
        """
        while self._buffer:
            # ------------------------------------------------------------
            # Escape sequences: ESC [ ... / ESC O ...
            # ------------------------------------------------------------
            if self._buffer.startswith('\x1b[') or self._buffer.startswith('\x1bO'):
                seq = self._match_escape_sequence()
                if seq is None:
                    return  # wait for full sequence

                self._buffer = self._buffer[len(seq):]
                key = ESCAPE_SEQUENCES.get(seq)
                if key:
                    await self._publish_key(key)
                else:
                    log.debug("Unknown escape sequence", sequence=repr(seq))
                continue

            if self._buffer == '\x1b':
                return  # wait one tick for possible continuation

            if self._buffer.startswith('\x1b'):
                self._buffer = self._buffer[1:]
                await self._publish_key("ESCAPE")
                continue

            # ------------------------------------------------------------
            # Normal single-character handling
            # ------------------------------------------------------------
            char = self._buffer[0]
            self._buffer = self._buffer[1:]

            if char in ('\r', '\n'):
                await self._publish_key("ENTER")
            elif char == '\t':
                await self._publish_key("TAB")
            elif char in ('\x7f', '\x08'):
                await self._publish_key("BACKSPACE")
            elif char == ' ':
                await self._publish_key("SPACE")
            elif '\x01' <= char <= '\x1a':
                key = chr(ord(char) + 96).upper()
                await self._publish_key(key, modifiers=["CTRL"])
            elif char.isprintable():
                if char.isupper():
                    await self._publish_key(char, modifiers=["SHIFT"])
                else:
                    await self._publish_key(char.upper())

    def _match_escape_sequence(self) -> Optional[str]:
        """
        Return the complete escape sequence at the start of the buffer,
        or None if more input is needed.
        """
        if len(self._buffer) < 3:
            return None

        # ESC O <final> (application cursor mode)
        if self._buffer[1] == 'O':
            return self._buffer[:3]

        # ESC [ <params> <final>, final byte in @..~
        for i in range(2, len(self._buffer)):
            if '@' <= self._buffer[i] <= '~':
                return self._buffer[:i + 1]
        return None

    async def _publish_key(self, key: str, modifiers: Optional[List[str]] = None) -> None:
        log.debug(
            f"Keyboard key pressed (stdin): {key}",
            modifiers=modifiers if modifiers else None
        )

        await self.event_bus.publish(
            KeyboardKeyPressEvent(key, modifiers, keyboard=KeyboardSource.STDIN)
        )
