"""Appenders that write records into files rolled over by time, with optional zip archiving."""

from __future__ import annotations

import enum
import queue
import threading
import time
import zipfile
from abc import abstractmethod
from datetime import datetime, timezone
from pathlib import Path
from typing import BinaryIO

from logweave.appenders import Appender
from logweave.record import Record
from logweave.text_pattern import (
    DATETIME_PLACEHOLDERS,
    Placeholder,
    PlaceholderType,
    convert_number,
    convert_timezone,
    parse_pattern,
)

_NS_PER_SECOND = 1_000_000_000
_RETRY_DELAY_NS = 100_000_000


class TimeRollingPolicy(enum.Enum):
    """How often a time-rolling appender starts a new file."""

    SECOND = "second"
    MINUTE = "minute"
    HOUR = "hour"
    DAY = "day"


_ROLL_DELAY = {
    TimeRollingPolicy.SECOND: _NS_PER_SECOND,
    TimeRollingPolicy.MINUTE: 60 * _NS_PER_SECOND,
    TimeRollingPolicy.HOUR: 60 * 60 * _NS_PER_SECOND,
    TimeRollingPolicy.DAY: 24 * 60 * 60 * _NS_PER_SECOND,
}


class RollingFileAppender(Appender):
    """Common machinery of rolling file appenders.

    Subclasses decide when to roll and how to name files. Closed files can be
    handed to a background thread that packs each one into ``<file>.zip``.
    """

    ARCHIVE_EXTENSION = "zip"

    def __init__(
        self,
        path: str | Path,
        archive: bool = False,
        truncate: bool = False,
        auto_flush: bool = False,
        auto_start: bool = True,
    ) -> None:
        self._path = Path(path)
        self._archive = archive
        self._truncate = truncate
        self._auto_flush = auto_flush
        self._started = False
        self._retry = 0
        self._file: BinaryIO | None = None
        self._file_path: Path | None = None
        self._written = 0
        self._archive_thread: threading.Thread | None = None
        self._archive_queue: queue.Queue[Path | None] = queue.Queue()
        if auto_start:
            self.start()

    # Lifecycle

    def is_started(self) -> bool:
        """Return True while the appender is running."""
        return self._started

    def start(self) -> bool:
        """Start the appender; return False if it was already running."""
        if self._started:
            return False
        if self._archive:
            self._archive_queue = queue.Queue()
            self._archive_thread = threading.Thread(
                target=self._archivation_loop, name="rolling-archive", daemon=True
            )
            self._archive_thread.start()
        self._started = True
        return True

    def stop(self) -> bool:
        """Close the current file and stop archiving; return False if not running."""
        if not self._started:
            return False
        self._close_file()
        if self._archive and self._archive_thread is not None:
            self._archive_queue.put(None)
            self._archive_thread.join()
            self._archive_thread = None
        self._started = False
        return True

    def __enter__(self) -> RollingFileAppender:
        self.start()
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.stop()

    # Hooks

    def on_archive_thread_initialize(self) -> None:
        """Called in the archive thread before it begins its work."""

    def on_archive_thread_cleanup(self) -> None:
        """Called in the archive thread after it has finished its work."""

    @abstractmethod
    def append_record(self, record: Record) -> None:
        """Write the record's raw content into the current rolling file."""

    @abstractmethod
    def flush(self) -> None:
        """Flush the current rolling file, rolling it over if due."""

    # File handling shared by the policies

    @property
    def current_file(self) -> Path | None:
        """Path of the file currently open for writing, if any."""
        return self._file_path if self._file is not None else None

    def _retry_pending(self) -> bool:
        return (time.time_ns() - self._retry) < _RETRY_DELAY_NS

    def _mark_retry(self) -> None:
        self._retry = time.time_ns()

    def _open_file(self, path: Path) -> None:
        self._file_path = path
        path.parent.mkdir(parents=True, exist_ok=True)
        self._file = open(path, "wb" if self._truncate else "ab")
        self._written = 0
        self._retry = 0

    def _close_current(self) -> Path:
        """Flush and close the open file and return its path."""
        handle, path = self._file, self._file_path
        assert handle is not None and path is not None
        self._file = None
        try:
            handle.flush()
        finally:
            handle.close()
        return path

    def _discard_file(self) -> None:
        handle, self._file = self._file, None
        if handle is not None:
            try:
                handle.close()
            except OSError:
                pass

    def _close_file(self) -> bool:
        try:
            if self._file is not None:
                path = self._close_current()
                if self._archive:
                    self._enqueue_archive(path)
            return True
        except OSError:
            return False

    def _write_raw(self, raw: bytes) -> None:
        assert self._file is not None
        try:
            self._file.write(raw)
            self._written += len(raw)
            if self._auto_flush:
                self._file.flush()
        except OSError:
            self._discard_file()

    def _flush_open(self) -> None:
        assert self._file is not None
        try:
            self._file.flush()
        except OSError:
            self._discard_file()

    # Archiving

    def _enqueue_archive(self, path: Path) -> None:
        self._archive_queue.put(path)

    def _archive_file(self, path: Path, filename: str | None = None) -> None:
        """Pack ``path`` into ``<path>.zip`` under ``filename`` and remove the original."""
        path = Path(path)
        target = path.with_name(f"{path.name}.{self.ARCHIVE_EXTENSION}")
        arcname = filename if filename else path.name
        with zipfile.ZipFile(target, "w", compression=zipfile.ZIP_DEFLATED) as archive:
            archive.write(path, arcname)
        path.unlink()

    def _archivation_loop(self) -> None:
        self.on_archive_thread_initialize()
        work = self._archive_queue
        while (path := work.get()) is not None:
            self._archive_file(path)
        self.on_archive_thread_cleanup()


class TimeRollingFileAppender(RollingFileAppender):
    """Roll files every second, minute, hour or day.

    File names come from ``pattern`` with ``{UtcDate}``, ``{LocalTime}`` and the
    other date and time placeholders; ``/`` in the pattern makes sub-directories.
    """

    def __init__(
        self,
        path: str | Path,
        policy: TimeRollingPolicy = TimeRollingPolicy.DAY,
        pattern: str = "{UtcDateTime}.log",
        archive: bool = False,
        truncate: bool = False,
        auto_flush: bool = False,
        auto_start: bool = True,
    ) -> None:
        self._policy = TimeRollingPolicy(policy)
        self._pattern = pattern
        self._tokens: list[Placeholder] = parse_pattern(pattern, DATETIME_PLACEHOLDERS)
        self._rolldelay = _ROLL_DELAY[self._policy]
        self._rollstamp = 0
        self._first = True
        super().__init__(path, archive, truncate, auto_flush, auto_start)

    @property
    def policy(self) -> TimeRollingPolicy:
        """The rolling policy of this appender."""
        return self._policy

    @property
    def pattern(self) -> str:
        """The file name pattern of this appender."""
        return self._pattern

    def append_record(self, record: Record) -> None:
        if not record.raw:
            return
        if self._prepare_file(record.timestamp):
            self._write_raw(bytes(record.raw))

    def flush(self) -> None:
        if self._flush_file(time.time_ns()):
            self._flush_open()

    def _flush_file(self, timestamp: int) -> bool:
        try:
            if self._file is not None:
                if timestamp < self._rollstamp + self._rolldelay:
                    return True
                path = self._close_current()
                if self._archive:
                    self._enqueue_archive(path)
        except OSError:
            self._mark_retry()
        return False

    def _prepare_file(self, timestamp: int) -> bool:
        try:
            if self._flush_file(timestamp):
                return True
            if self._retry_pending():
                return False
            rollstamp = (timestamp // self._rolldelay) * self._rolldelay
            if self._first:
                self._first = False
            else:
                timestamp = rollstamp
            self._open_file(self._path / self._render_filename(timestamp))
            self._rollstamp = rollstamp
            return True
        except OSError:
            self._mark_retry()
            return False

    def _render_filename(self, timestamp: int) -> str:
        utc = datetime.fromtimestamp(timestamp // _NS_PER_SECOND, timezone.utc)
        local = utc.astimezone()
        offset = local.utcoffset()
        minutes = int(offset.total_seconds() // 60) if offset is not None else 0
        local_zone = convert_timezone(minutes, 5, separator="")

        def date(moment: datetime) -> str:
            return "-".join(
                (
                    convert_number(moment.year, 4),
                    convert_number(moment.month, 2),
                    convert_number(moment.day, 2),
                )
            )

        def clock(moment: datetime) -> str:
            return (
                convert_number(moment.hour, 2)
                + convert_number(moment.minute, 2)
                + convert_number(moment.second, 2)
            )

        utc_time = clock(utc) + "Z"
        local_time = clock(local) + local_zone
        values = {
            PlaceholderType.UTC_DATETIME: date(utc) + "T" + utc_time,
            PlaceholderType.UTC_DATE: date(utc),
            PlaceholderType.UTC_TIME: utc_time,
            PlaceholderType.UTC_YEAR: convert_number(utc.year, 4),
            PlaceholderType.UTC_MONTH: convert_number(utc.month, 2),
            PlaceholderType.UTC_DAY: convert_number(utc.day, 2),
            PlaceholderType.UTC_HOUR: convert_number(utc.hour, 2),
            PlaceholderType.UTC_MINUTE: convert_number(utc.minute, 2),
            PlaceholderType.UTC_SECOND: convert_number(utc.second, 2),
            PlaceholderType.UTC_TIMEZONE: "Z",
            PlaceholderType.LOCAL_DATETIME: date(local) + "T" + local_time,
            PlaceholderType.LOCAL_DATE: date(local),
            PlaceholderType.LOCAL_TIME: local_time,
            PlaceholderType.LOCAL_YEAR: convert_number(local.year, 4),
            PlaceholderType.LOCAL_MONTH: convert_number(local.month, 2),
            PlaceholderType.LOCAL_DAY: convert_number(local.day, 2),
            PlaceholderType.LOCAL_HOUR: convert_number(local.hour, 2),
            PlaceholderType.LOCAL_MINUTE: convert_number(local.minute, 2),
            PlaceholderType.LOCAL_SECOND: convert_number(local.second, 2),
            PlaceholderType.LOCAL_TIMEZONE: local_zone,
        }
        return "".join(
            token.value if token.type is PlaceholderType.STRING else values[token.type]
            for token in self._tokens
        )