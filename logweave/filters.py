"""Filters that decide whether a logging record passes on."""

from __future__ import annotations

import re
from abc import ABC, abstractmethod

from logweave.record import Level, Record


class Filter(ABC):
    """Base class for record filters."""

    @abstractmethod
    def filter_record(self, record: Record) -> bool:
        """Return True if the record should be processed further."""


class LevelFilter(Filter):
    """Pass records whose level lies inside (or, if negative, outside) a range.

    With only ``level`` given the range is ``NONE .. level``; with ``to`` as
    well the range spans both bounds in either order.
    """

    def __init__(self, level: Level, to: Level | None = None, positive: bool = True) -> None:
        self._from = Level.NONE
        self._to = level
        self._positive = positive
        self.update(level, to, positive)

    def update(self, level: Level, to: Level | None = None, positive: bool = True) -> None:
        """Reconfigure the level range and its polarity."""
        self._positive = positive
        if to is None:
            self._from, self._to = Level.NONE, level
        else:
            self._from, self._to = min(level, to), max(level, to)

    @property
    def positive(self) -> bool:
        return self._positive

    @property
    def range(self) -> tuple[Level, Level]:
        return self._from, self._to

    def filter_record(self, record: Record) -> bool:
        inside = self._from <= record.level <= self._to
        return inside if self._positive else not inside


class LoggerFilter(Filter):
    """Pass records whose logger name equals (or differs from) a given name."""

    def __init__(self, pattern: str, positive: bool = True) -> None:
        self.pattern = pattern
        self.positive = positive

    def filter_record(self, record: Record) -> bool:
        result = record.logger == self.pattern
        return result if self.positive else not result


class MessageFilter(Filter):
    """Pass records whose whole message matches (or fails) a regular expression."""

    def __init__(self, pattern: str | re.Pattern[str], positive: bool = True) -> None:
        self.pattern = re.compile(pattern) if isinstance(pattern, str) else pattern
        self.positive = positive

    def filter_record(self, record: Record) -> bool:
        result = self.pattern.fullmatch(record.message) is not None
        return result if self.positive else not result


class SwitchFilter(Filter):
    """Pass every record while enabled and none while disabled."""

    def __init__(self, enabled: bool = True) -> None:
        self._enabled = enabled

    @property
    def enabled(self) -> bool:
        return self._enabled

    def update(self, enabled: bool) -> None:
        """Turn the switch on or off."""
        self._enabled = enabled

    def filter_record(self, record: Record) -> bool:
        return self._enabled