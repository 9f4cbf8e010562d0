"""
Console Logging – Structured Formatter
======================================

A :class:`logging.Formatter` that lays a record out as::

    2024-05-01 12:00:00  Info   board_locator.detection.extractor: Found 2 chessboard candidate(s)
                                                                   x=10 y=12 w=160 h=160
                                                                   x=200 y=40 w=96 h=96

  • optional date and time prefix,
  • the level name (``Fatal``/``Error``/``Warn``/``Info``/``Debug``)
    padded to five columns, coloured when writing to a terminal,
  • the sender (logger name) dimmed, followed by ``": "``,
  • the message,
  • an optional multi-line ``detail`` (``extra={"detail": "..."}``)
    whose lines are aligned under the first character of the message.
"""

from __future__ import annotations

import logging
import sys
from typing import Dict, Optional, TextIO

LEVEL_NAMES: Dict[int, str] = {
    logging.CRITICAL: "Fatal",
    logging.ERROR: "Error",
    logging.WARNING: "Warn",
    logging.INFO: "Info",
    logging.DEBUG: "Debug",
}

_RESET = "\033[0m"
_SENDER_COLOR = "\033[90m"  # dark grey
LEVEL_COLORS: Dict[str, str] = {
    "Fatal": "\033[97;41m",  # white on red
    "Error": "\033[31m",
    "Warn": "\033[33m",
    "Info": "\033[97m",
    "Debug": "\033[37m",
}


def level_name(levelno: int) -> str:
    """Short display name for a numeric level (nearest standard level below)."""
    for threshold in sorted(LEVEL_NAMES, reverse=True):
        if levelno >= threshold:
            return LEVEL_NAMES[threshold]
    return LEVEL_NAMES[logging.DEBUG]


class ConsoleFormatter(logging.Formatter):
    """Format records with level, sender, message and aligned detail lines.

    Parameters
    ----------
    include_date, include_time : bool
        Prefix each record with its date and/or time.
    use_color : bool
        Emit ANSI colour codes for the level and sender.
    date_format, time_format : str
        ``strftime`` patterns for the prefix.
    """

    def __init__(
        self,
        include_date: bool = False,
        include_time: bool = True,
        use_color: bool = False,
        date_format: str = "%Y-%m-%d",
        time_format: str = "%H:%M:%S",
    ) -> None:
        super().__init__()
        self.include_date = include_date
        self.include_time = include_time
        self.use_color = use_color
        self.date_format = date_format
        self.time_format = time_format

    def format(self, record: logging.LogRecord) -> str:
        prefix = ""
        if self.include_date:
            prefix += self.formatTime(record, self.date_format) + " "
        if self.include_time:
            prefix += self.formatTime(record, self.time_format) + " "
        if prefix:
            prefix += " "

        name = level_name(record.levelno)
        head = prefix + name.ljust(5) + "  "
        visible = len(head)
        if self.use_color:
            head = prefix + LEVEL_COLORS[name] + name.ljust(5) + _RESET + "  "

        if record.name and record.name != "root":
            sender = f"{record.name}: "
            visible += len(sender)
            head += f"{_SENDER_COLOR}{sender}{_RESET}" if self.use_color else sender

        lines = [head + record.getMessage()]

        detail = getattr(record, "detail", None)
        if detail:
            indent = " " * visible
            lines.extend(indent + line for line in str(detail).split("\n"))

        if record.exc_info:
            lines.append(self.formatException(record.exc_info))

        return "\n".join(lines)


def configure_logging(
    level: int = logging.INFO,
    stream: Optional[TextIO] = None,
    use_color: Optional[bool] = None,
    include_date: bool = False,
    include_time: bool = True,
) -> logging.Handler:
    """Install a :class:`ConsoleFormatter` on the root logger.

    Colour defaults to on when *stream* is a terminal.  Returns the
    installed handler.
    """
    stream = stream or sys.stderr
    if use_color is None:
        use_color = hasattr(stream, "isatty") and stream.isatty()

    handler = logging.StreamHandler(stream)
    handler.setFormatter(ConsoleFormatter(
        include_date=include_date,
        include_time=include_time,
        use_color=use_color,
    ))
    logging.basicConfig(level=level, handlers=[handler], force=True)
    return handler
