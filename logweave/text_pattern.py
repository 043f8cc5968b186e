"""Tokenizing of placeholder patterns and the fixed-width field formatters."""

from __future__ import annotations

import enum
import os
from collections.abc import Mapping
from dataclasses import dataclass

from logweave.record import Level


class PlaceholderType(enum.Enum):
    """Kind of a token in a parsed pattern; values are the placeholder names."""

    STRING = "String"
    UTC_DATETIME = "UtcDateTime"
    UTC_DATE = "UtcDate"
    UTC_TIME = "UtcTime"
    UTC_YEAR = "UtcYear"
    UTC_MONTH = "UtcMonth"
    UTC_DAY = "UtcDay"
    UTC_HOUR = "UtcHour"
    UTC_MINUTE = "UtcMinute"
    UTC_SECOND = "UtcSecond"
    UTC_TIMEZONE = "UtcTimezone"
    LOCAL_DATETIME = "LocalDateTime"
    LOCAL_DATE = "LocalDate"
    LOCAL_TIME = "LocalTime"
    LOCAL_YEAR = "LocalYear"
    LOCAL_MONTH = "LocalMonth"
    LOCAL_DAY = "LocalDay"
    LOCAL_HOUR = "LocalHour"
    LOCAL_MINUTE = "LocalMinute"
    LOCAL_SECOND = "LocalSecond"
    LOCAL_TIMEZONE = "LocalTimezone"
    MILLISECOND = "Millisecond"
    MICROSECOND = "Microsecond"
    NANOSECOND = "Nanosecond"
    THREAD = "Thread"
    LEVEL = "Level"
    LOGGER = "Logger"
    MESSAGE = "Message"


@dataclass
class Placeholder:
    """One token of a parsed pattern; ``value`` holds the text of a STRING token."""

    type: PlaceholderType
    value: str = ""


_DATETIME_TYPES = (
    PlaceholderType.UTC_DATETIME,
    PlaceholderType.UTC_DATE,
    PlaceholderType.UTC_TIME,
    PlaceholderType.UTC_YEAR,
    PlaceholderType.UTC_MONTH,
    PlaceholderType.UTC_DAY,
    PlaceholderType.UTC_HOUR,
    PlaceholderType.UTC_MINUTE,
    PlaceholderType.UTC_SECOND,
    PlaceholderType.UTC_TIMEZONE,
    PlaceholderType.LOCAL_DATETIME,
    PlaceholderType.LOCAL_DATE,
    PlaceholderType.LOCAL_TIME,
    PlaceholderType.LOCAL_YEAR,
    PlaceholderType.LOCAL_MONTH,
    PlaceholderType.LOCAL_DAY,
    PlaceholderType.LOCAL_HOUR,
    PlaceholderType.LOCAL_MINUTE,
    PlaceholderType.LOCAL_SECOND,
    PlaceholderType.LOCAL_TIMEZONE,
)

#: Placeholders understood in rolling file name patterns.
DATETIME_PLACEHOLDERS: Mapping[str, PlaceholderType | str] = {
    kind.value: kind for kind in _DATETIME_TYPES
}

#: Placeholders understood in text layout patterns; ``EndLine`` expands to text.
TEXT_PLACEHOLDERS: Mapping[str, PlaceholderType | str] = {
    **{kind.value: kind for kind in PlaceholderType if kind is not PlaceholderType.STRING},
    "EndLine": os.linesep,
}

_LEVEL_NAMES = {
    Level.NONE: "NONE",
    Level.FATAL: "FATAL",
    Level.ERROR: "ERROR",
    Level.WARN: "WARN",
    Level.INFO: "INFO",
    Level.DEBUG: "DEBUG",
    Level.ALL: "ALL",
}


def _append_text(tokens: list[Placeholder], text: str) -> None:
    if not text:
        return
    if tokens and tokens[-1].type is PlaceholderType.STRING:
        tokens[-1].value += text
    else:
        tokens.append(Placeholder(PlaceholderType.STRING, text))


def _append_placeholder(
    tokens: list[Placeholder], name: str, names: Mapping[str, PlaceholderType | str]
) -> None:
    if not name:
        return
    kind = names.get(name)
    if kind is None:
        _append_text(tokens, "{" + name + "}")
    elif isinstance(kind, PlaceholderType):
        tokens.append(Placeholder(kind))
    else:
        _append_text(tokens, kind)


def parse_pattern(pattern: str, names: Mapping[str, PlaceholderType | str]) -> list[Placeholder]:
    """Split a ``{Name}`` pattern into tokens.

    ``names`` maps each known placeholder name to its type, or to literal text
    that replaces it. Unknown placeholders stay in the output as written, empty
    ``{}`` pairs are dropped and adjacent text is merged into one token.
    """
    tokens: list[Placeholder] = []
    placeholder = ""
    text = ""
    reading = False
    for ch in pattern:
        if ch == "{":
            _append_text(tokens, placeholder if reading else text)
            placeholder = ""
            text = ""
            reading = True
        elif ch == "}":
            if reading:
                _append_placeholder(tokens, placeholder, names)
                reading = False
            else:
                text += ch
        elif reading:
            placeholder += ch
        else:
            text += ch
    _append_text(tokens, placeholder if reading else text)
    return tokens


def convert_number(number: int, size: int) -> str:
    """Format a non-negative number zero-padded to ``size`` digits, keeping the lowest ones."""
    if number < 0:
        raise ValueError("number must not be negative")
    if size < 1:
        raise ValueError("size must be positive")
    return str(number).zfill(size)[-size:]


def convert_thread(thread: int, size: int) -> str:
    """Format a thread id as ``0x`` followed by ``size - 2`` upper-case hex digits."""
    digits = size - 2
    if digits < 1:
        raise ValueError("size must leave room for at least one hex digit")
    value = (thread & 0xFFFFFFFFFFFFFFFF) & ((1 << (4 * digits)) - 1)
    return "0x" + format(value, f"0{digits}X")


def convert_timezone(offset: int, size: int, separator: str = ":") -> str:
    """Format an offset in minutes as ``+HH:MM`` (or with another separator) of ``size`` chars."""
    width = size - 1 - len(separator) - 2
    if width < 1:
        raise ValueError("size is too small for a timezone offset")
    sign = "-" if offset < 0 else "+"
    hours, minutes = divmod(abs(offset), 60)
    return f"{sign}{convert_number(hours, width)}{separator}{minutes:02d}"


def convert_level(level: Level | int, size: int) -> str:
    """Format a level name left-aligned and space-padded to ``size`` characters."""
    try:
        name = _LEVEL_NAMES[Level(level)]
    except ValueError:
        name = "<???>"
    return name.ljust(size)[:size]