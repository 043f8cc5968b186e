"""Appenders that write laid-out records to streams and the system log."""

from __future__ import annotations

import io
from abc import ABC, abstractmethod
from typing import IO, Any

from logweave.record import Level, Record

try:
    import syslog as _syslog
except ImportError:  # platforms without a system log
    _syslog = None


class Appender(ABC):
    """Base class for record appenders."""

    @abstractmethod
    def append_record(self, record: Record) -> None:
        """Output the record's raw content."""

    def flush(self) -> None:
        """Flush any buffered output."""


class OstreamAppender(Appender):
    """Write record content to a binary or text stream."""

    def __init__(self, stream: IO[Any]) -> None:
        self._stream = stream
        self._text = isinstance(stream, io.TextIOBase)

    def append_record(self, record: Record) -> None:
        if not record.raw:
            return
        raw = bytes(record.raw)
        self._stream.write(raw.decode("utf-8", errors="replace") if self._text else raw)

    def flush(self) -> None:
        self._stream.flush()


class SyslogAppender(Appender):
    """Send record content to the system log; does nothing where none exists."""

    def __init__(self) -> None:
        self._open = False
        if _syslog is not None:
            _syslog.openlog(
                logoption=_syslog.LOG_NDELAY | _syslog.LOG_PID,
                facility=_syslog.LOG_USER,
            )
            self._open = True

    @staticmethod
    def _priority(level: Level) -> int:
        mapping = {
            Level.FATAL: _syslog.LOG_CRIT,
            Level.ERROR: _syslog.LOG_ERR,
            Level.WARN: _syslog.LOG_WARNING,
            Level.INFO: _syslog.LOG_INFO,
            Level.DEBUG: _syslog.LOG_DEBUG,
        }
        return mapping.get(level, _syslog.LOG_INFO)

    def append_record(self, record: Record) -> None:
        if not record.raw or _syslog is None:
            return
        message = bytes(record.raw).decode("utf-8", errors="replace")
        _syslog.syslog(self._priority(record.level), message)

    def close(self) -> None:
        """Close the connection to the system log."""
        if self._open and _syslog is not None:
            _syslog.closelog()
        self._open = False

    def __enter__(self) -> SyslogAppender:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()