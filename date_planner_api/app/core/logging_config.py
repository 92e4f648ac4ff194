"""
Logging setup for the Date Planner API.

Two kinds of lines go to the console:

* application messages, ``2026-01-31 21:05:03 [INFO] module: message``;
* request summaries from the ``date_planner_api.http`` logger, in the
  short form ``9:05:03 PM [http] GET /api/date-options 200 in 1ms``.

A request line can carry a different tag through
``extra={"source": ...}``.  Both kinds share one handler so nothing is
printed twice.
"""

import logging
import time
from pathlib import Path
from typing import Optional

ACCESS_LOGGER = "date_planner_api.http"
DEFAULT_SOURCE = "http"

APP_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
APP_DATEFMT = "%Y-%m-%d %H:%M:%S"
ACCESS_FORMAT = "%(asctime)s [%(source)s] %(message)s"


def is_access_record(record: logging.LogRecord) -> bool:
    return record.name == ACCESS_LOGGER or record.name.startswith(ACCESS_LOGGER + ".")


class AccessFormatter(logging.Formatter):
    """``h:mm:ss AM [source] message``, without a leading zero on the hour."""

    def __init__(self, default_source: str = DEFAULT_SOURCE) -> None:
        super().__init__(fmt=ACCESS_FORMAT)
        self.default_source = default_source

    def formatTime(self, record, datefmt=None):
        return time.strftime("%I:%M:%S %p", self.converter(record.created)).lstrip("0")

    def format(self, record):
        if not hasattr(record, "source"):
            record.source = self.default_source
        return super().format(record)


class ConsoleFormatter(logging.Formatter):
    """Pick the access or the application layout per record."""

    def __init__(self) -> None:
        super().__init__(fmt=APP_FORMAT, datefmt=APP_DATEFMT)
        self._access = AccessFormatter()

    def format(self, record):
        if is_access_record(record):
            return self._access.format(record)
        return super().format(record)


def setup_logging(level: str = "INFO", logfile: Optional[str] = None) -> None:
    """Configure the root logger once.

    Parameters
    ----------
    level : str
        Logging level name, case insensitive.  Unknown names fall back
        to ``INFO``.
    logfile : Optional[str]
        Also write every record to this file, using the same layouts
        as the console.

    Calling this again when the root logger already has handlers (a
    second ``create_app`` in tests, or a host that configured logging
    itself) changes nothing.
    """
    root = logging.getLogger()
    if root.handlers:
        return

    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    formatter = ConsoleFormatter()

    handlers = [logging.StreamHandler()]
    if logfile:
        handlers.append(logging.FileHandler(Path(logfile).resolve(), encoding="utf-8"))
    for handler in handlers:
        handler.setFormatter(formatter)
        root.addHandler(handler)
