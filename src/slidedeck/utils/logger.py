"""
Structured terminal logger

Log lines go to stderr by default: stdout belongs to the slide renderer,
so the presentation stays readable when logs are redirected
(`slidedeck deck.yaml 2> presenter.log`).
"""

import sys
from datetime import datetime
from typing import List, Optional, TextIO

from slidedeck.models.enums import LogLevel, LogCategory


class Colors:
    """ANSI escape codes"""
    RESET = '\033[0m'
    DIM = '\033[2m'

    RED = '\033[31m'
    GREEN = '\033[32m'
    YELLOW = '\033[33m'
    MAGENTA = '\033[35m'
    CYAN = '\033[36m'
    WHITE = '\033[37m'

    BRIGHT_GREEN = '\033[92m'
    BRIGHT_YELLOW = '\033[93m'
    BRIGHT_BLUE = '\033[94m'
    BRIGHT_MAGENTA = '\033[95m'
    BRIGHT_CYAN = '\033[96m'
    BRIGHT_WHITE = '\033[97m'


CATEGORY_COLORS = {
    LogCategory.CONFIG: Colors.CYAN,
    LogCategory.NAVIGATION: Colors.BRIGHT_CYAN,
    LogCategory.ANIMATION: Colors.BRIGHT_YELLOW,
    LogCategory.RENDER: Colors.MAGENTA,
    LogCategory.INPUT: Colors.BRIGHT_BLUE,
    LogCategory.LOCATION: Colors.BRIGHT_GREEN,
    LogCategory.EVENT: Colors.BRIGHT_MAGENTA,
    LogCategory.SYSTEM: Colors.BRIGHT_WHITE,
}

# (symbol, color) per level
LEVEL_STYLE = {
    LogLevel.DEBUG: ('·', Colors.DIM),
    LogLevel.INFO: ('✓', Colors.GREEN),
    LogLevel.WARN: ('⚠', Colors.YELLOW),
    LogLevel.ERROR: ('✗', Colors.RED),
}

LEVEL_ORDER = [LogLevel.DEBUG, LogLevel.INFO, LogLevel.WARN, LogLevel.ERROR]

CATEGORY_WIDTH = max(len(c.name) for c in LogCategory)
DETAIL_INDENT = " " * 11


class Logger:
    """
    Structured logger with compact output format

    Format:
    [HH:MM:SS] CATEGORY   ✓ Message
               ├─ key: value
               └─ key: value

    Example:
    [14:23:45] NAVIGATION · Slide target changed
               ├─ action: GO_NEXT
               └─ target: 2 → 3
    """

    def __init__(
        self,
        min_level: LogLevel = LogLevel.INFO,
        use_colors: bool = True,
        stream: Optional[TextIO] = None,
    ):
        """
        Args:
            min_level: Minimum log level to display
            use_colors: Enable ANSI color codes (disable for file output)
            stream: Output stream (None = current sys.stderr)
        """
        self.min_level = min_level
        self.use_colors = use_colors
        self.stream = stream

    def is_enabled(self, level: LogLevel) -> bool:
        return LEVEL_ORDER.index(level) >= LEVEL_ORDER.index(self.min_level)

    def _paint(self, text: str, color: str) -> str:
        return f"{color}{text}{Colors.RESET}" if self.use_colors else text

    def format(
        self,
        category: LogCategory,
        message: str,
        level: LogLevel,
        details: Optional[list] = None,
        **kwargs
    ) -> List[str]:
        """Render one record as output lines (header first, then the detail tree)"""
        symbol, level_color = LEVEL_STYLE.get(level, ('·', Colors.WHITE))
        header = " ".join((
            datetime.now().strftime('[%H:%M:%S]'),
            self._paint(category.name.ljust(CATEGORY_WIDTH), CATEGORY_COLORS.get(category, Colors.WHITE)),
            self._paint(symbol, level_color),
            self._paint(message, level_color),
        ))

        items = list(details or []) + [f"{k}: {v}" for k, v in kwargs.items()]
        lines = [header]
        for i, item in enumerate(items):
            branch = "└─" if i == len(items) - 1 else "├─"
            lines.append(f"{DETAIL_INDENT}{self._paint(branch, Colors.DIM)} {item}")
        return lines

    def log(
        self,
        category: LogCategory,
        message: str,
        level: LogLevel = LogLevel.INFO,
        details: Optional[list] = None,
        **kwargs
    ):
        """
        Log a structured message

        Args:
            category: Log category (NAVIGATION, LOCATION, ...)
            message: Main message text
            level: Log level (DEBUG, INFO, WARN, ERROR)
            details: List of detail strings to show below message
            **kwargs: Additional key-value pairs to show as details
        """
        if not self.is_enabled(level):
            return

        stream = self.stream or sys.stderr
        for line in self.format(category, message, level, details, **kwargs):
            print(line, file=stream)

    def debug(self, category: LogCategory, message: str, **kw): self.log(category, message, LogLevel.DEBUG, **kw)
    def info(self, category: LogCategory, message: str, **kw): self.log(category, message, LogLevel.INFO, **kw)
    def warn(self, category: LogCategory, message: str, **kw): self.log(category, message, LogLevel.WARN, **kw)
    def error(self, category: LogCategory, message: str, **kw): self.log(category, message, LogLevel.ERROR, **kw)

    def for_category(self, category: LogCategory) -> 'BoundLogger':
        """Return a contextual logger bound to a specific category."""
        return BoundLogger(self, category)


class BoundLogger:
    """Logger bound to a default category; `category=` overrides it per call."""

    def __init__(self, base: Logger, category: LogCategory):
        self._base = base
        self._category = category

    def log(self, message: str, level: LogLevel = LogLevel.INFO, category: Optional[LogCategory] = None, **kw):
        self._base.log(category or self._category, message, level, **kw)

    def debug(self, message: str, **kw): self.log(message, LogLevel.DEBUG, **kw)
    def info(self, message: str, **kw): self.log(message, LogLevel.INFO, **kw)
    def warn(self, message: str, **kw): self.log(message, LogLevel.WARN, **kw)
    def error(self, message: str, **kw): self.log(message, LogLevel.ERROR, **kw)


_logger = Logger()


def get_logger() -> Logger:
    return _logger


def get_category_logger(category: LogCategory) -> BoundLogger:
    return _logger.for_category(category)


def configure_logger(min_level: LogLevel = LogLevel.INFO, use_colors: bool = True, stream: Optional[TextIO] = None):
    """
    Configure the logger singleton in place.

    Module-level `log = get_logger().for_category(...)` objects hold the
    same Logger, so they pick up the new settings.
    """
    _logger.min_level = min_level
    _logger.use_colors = use_colors
    _logger.stream = stream
