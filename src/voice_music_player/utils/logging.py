"""Console formatting for engine logs."""

from __future__ import annotations

import logging
import os
import sys
from typing import TextIO


class ColoredFormatter(logging.Formatter):
    """Tints the level name when the log stream is an interactive terminal.

    ``NO_COLOR`` switches tinting off. Without an explicit ``stream`` the check
    runs against stderr, where the command line host sends its logs.
    """

    COLORS: dict[int, str] = {
        logging.DEBUG: "\033[36m",  # cyan
        logging.INFO: "\033[32m",  # green
        logging.WARNING: "\033[33m",  # yellow
        logging.ERROR: "\033[31m",  # red
        logging.CRITICAL: "\033[1;31m",  # bold red
    }
    RESET = "\033[0m"

    def __init__(
        self,
        fmt: str | None = None,
        datefmt: str | None = None,
        *,
        stream: TextIO | None = None,
    ) -> None:
        super().__init__(fmt, datefmt)
        self._stream = stream

    @property
    def colors_enabled(self) -> bool:
        if os.environ.get("NO_COLOR") is not None:
            return False
        stream = self._stream or sys.stderr
        isatty = getattr(stream, "isatty", None)
        return isatty is not None and isatty()

    def format(self, record: logging.LogRecord) -> str:
        if not self.colors_enabled:
            return super().format(record)

        # Colour a copy; other handlers may format the same record.
        tinted = logging.makeLogRecord(record.__dict__)
        tinted.levelname = f"{self.COLORS.get(record.levelno, '')}{record.levelname}{self.RESET}"
        return super().format(tinted)
