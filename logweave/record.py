"""Logging levels and the record passed between layouts, filters and appenders."""

from __future__ import annotations

import enum
import threading
import time
from dataclasses import dataclass, field


class Level(enum.IntEnum):
    """Severity of a logging record, ordered from silent to everything."""

    NONE = 0x00
    FATAL = 0x1F
    ERROR = 0x3F
    WARN = 0x7F
    INFO = 0x9F
    DEBUG = 0xBF
    ALL = 0xFF


@dataclass
class Record:
    """A single logging event.

    ``timestamp`` is in nanoseconds since the epoch (UTC). ``raw`` holds the
    bytes produced by a layout; it stays empty until a layout has run.
    """

    timestamp: int = field(default_factory=time.time_ns)
    thread: int = field(default_factory=threading.get_ident)
    level: Level = Level.INFO
    logger: str = ""
    message: str = ""
    buffer: bytes = b""
    raw: bytes = b""