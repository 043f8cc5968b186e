"""Text layout that renders a record through a ``{Placeholder}`` pattern."""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime, timezone
from functools import cached_property

from logweave.layouts import Layout
from logweave.record import Record
from logweave.text_pattern import (
    TEXT_PLACEHOLDERS,
    Placeholder,
    PlaceholderType,
    convert_level,
    convert_number,
    convert_thread,
    convert_timezone,
    parse_pattern,
)

_NS_PER_SECOND = 1_000_000_000
_THREAD_WIDTH = 10
_LEVEL_WIDTH = 5
_TIMEZONE_WIDTH = 6


class _Fields:
    """Lazily computed text fields of one record."""

    def __init__(self, record: Record) -> None:
        self.record = record
        self.seconds = record.timestamp // _NS_PER_SECOND

    @cached_property
    def utc(self) -> datetime:
        return datetime.fromtimestamp(self.seconds, timezone.utc)

    @cached_property
    def local(self) -> datetime:
        return self.utc.astimezone()

    @cached_property
    def millisecond(self) -> str:
        return convert_number((self.record.timestamp // 1_000_000) % 1000, 3)

    @cached_property
    def microsecond(self) -> str:
        return convert_number((self.record.timestamp // 1000) % 1000, 3)

    @cached_property
    def nanosecond(self) -> str:
        return convert_number(self.record.timestamp % 1000, 3)

    @cached_property
    def local_timezone(self) -> str:
        offset = self.local.utcoffset()
        minutes = int(offset.total_seconds() // 60) if offset is not None else 0
        return convert_timezone(minutes, _TIMEZONE_WIDTH)

    @staticmethod
    def _date(moment: datetime) -> str:
        return "-".join(
            (
                convert_number(moment.year, 4),
                convert_number(moment.month, 2),
                convert_number(moment.day, 2),
            )
        )

    def _clock(self, moment: datetime) -> str:
        return ":".join(
            (
                convert_number(moment.hour, 2),
                convert_number(moment.minute, 2),
                convert_number(moment.second, 2),
            )
        ) + "." + self.millisecond

    @cached_property
    def utc_date(self) -> str:
        return self._date(self.utc)

    @cached_property
    def utc_time(self) -> str:
        return self._clock(self.utc) + "Z"

    @cached_property
    def local_date(self) -> str:
        return self._date(self.local)

    @cached_property
    def local_time(self) -> str:
        return self._clock(self.local) + self.local_timezone


_RENDERERS: dict[PlaceholderType, Callable[[_Fields], str]] = {
    PlaceholderType.UTC_DATETIME: lambda f: f.utc_date + "T" + f.utc_time,
    PlaceholderType.UTC_DATE: lambda f: f.utc_date,
    PlaceholderType.UTC_TIME: lambda f: f.utc_time,
    PlaceholderType.UTC_YEAR: lambda f: convert_number(f.utc.year, 4),
    PlaceholderType.UTC_MONTH: lambda f: convert_number(f.utc.month, 2),
    PlaceholderType.UTC_DAY: lambda f: convert_number(f.utc.day, 2),
    PlaceholderType.UTC_HOUR: lambda f: convert_number(f.utc.hour, 2),
    PlaceholderType.UTC_MINUTE: lambda f: convert_number(f.utc.minute, 2),
    PlaceholderType.UTC_SECOND: lambda f: convert_number(f.utc.second, 2),
    PlaceholderType.UTC_TIMEZONE: lambda f: "Z",
    PlaceholderType.LOCAL_DATETIME: lambda f: f.local_date + "T" + f.local_time,
    PlaceholderType.LOCAL_DATE: lambda f: f.local_date,
    PlaceholderType.LOCAL_TIME: lambda f: f.local_time,
    PlaceholderType.LOCAL_YEAR: lambda f: convert_number(f.local.year, 4),
    PlaceholderType.LOCAL_MONTH: lambda f: convert_number(f.local.month, 2),
    PlaceholderType.LOCAL_DAY: lambda f: convert_number(f.local.day, 2),
    PlaceholderType.LOCAL_HOUR: lambda f: convert_number(f.local.hour, 2),
    PlaceholderType.LOCAL_MINUTE: lambda f: convert_number(f.local.minute, 2),
    PlaceholderType.LOCAL_SECOND: lambda f: convert_number(f.local.second, 2),
    PlaceholderType.LOCAL_TIMEZONE: lambda f: f.local_timezone,
    PlaceholderType.MILLISECOND: lambda f: f.millisecond,
    PlaceholderType.MICROSECOND: lambda f: f.microsecond,
    PlaceholderType.NANOSECOND: lambda f: f.nanosecond,
    PlaceholderType.THREAD: lambda f: convert_thread(f.record.thread, _THREAD_WIDTH),
    PlaceholderType.LEVEL: lambda f: convert_level(f.record.level, _LEVEL_WIDTH),
    PlaceholderType.LOGGER: lambda f: f.record.logger,
    PlaceholderType.MESSAGE: lambda f: f.record.message,
}


class TextLayout(Layout):
    """Render records as UTF-8 text according to a placeholder pattern.

    Known placeholders are replaced by record fields, ``{EndLine}`` by the
    platform line separator; unknown placeholders are kept as written.
    """

    def __init__(self, pattern: str) -> None:
        self._pattern = pattern
        self._tokens: list[Placeholder] = parse_pattern(pattern, TEXT_PLACEHOLDERS)

    @property
    def pattern(self) -> str:
        """The pattern this layout was built from."""
        return self._pattern

    def render(self, record: Record) -> str:
        """Return the record formatted as text."""
        fields = _Fields(record)
        return "".join(
            token.value if token.type is PlaceholderType.STRING else _RENDERERS[token.type](fields)
            for token in self._tokens
        )

    def layout_record(self, record: Record) -> None:
        record.raw = self.render(record).encode("utf-8")