"""
Logging helpers for ros2-bootstrap.

Progress messages are the tool's user interface, so INFO is shown by
default. Level prefixes are coloured only when stderr is a terminal.
"""

from __future__ import annotations

import logging
import sys
from typing import Optional

_PREFIXES = {
    logging.DEBUG: ("[DEBUG]", "\033[2m"),
    logging.INFO: ("[INFO]", "\033[1;34m"),
    logging.WARNING: ("[WARN]", "\033[1;33m"),
    logging.ERROR: ("[ERROR]", "\033[1;31m"),
    logging.CRITICAL: ("[ERROR]", "\033[1;31m"),
}
_RESET = "\033[0m"


class PrefixFormatter(logging.Formatter):
    """Render records as ``[LEVEL] message`` with optional ANSI colour."""

    def __init__(self, color: bool = False) -> None:
        super().__init__("%(message)s")
        self.color = color

    def format(self, record: logging.LogRecord) -> str:
        prefix, code = _PREFIXES.get(record.levelno, (f"[{record.levelname}]", ""))
        if self.color and code:
            prefix = f"{code}{prefix}{_RESET}"
        return f"{prefix} {super().format(record)}"


def level_for_verbosity(verbosity: int) -> int:
    """
    Map a verbosity count to a logging level.

    verbosity < 0  -> WARNING
    verbosity == 0 -> INFO
    verbosity >= 1 -> DEBUG
    """

    if verbosity < 0:
        return logging.WARNING
    if verbosity == 0:
        return logging.INFO
    return logging.DEBUG


def configure_logging(verbosity: int, color: Optional[bool] = None) -> None:
    """
    Configure the root logger based on a verbosity count.

    When color is None it is enabled only if stderr is a TTY.
    """

    if color is None:
        color = sys.stderr.isatty()

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(PrefixFormatter(color=color))

    logging.basicConfig(
        level=level_for_verbosity(verbosity),
        handlers=[handler],
        force=True,
    )
