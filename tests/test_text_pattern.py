import os

import pytest

from logweave.record import Level
from logweave.text_pattern import (
    DATETIME_PLACEHOLDERS,
    TEXT_PLACEHOLDERS,
    Placeholder,
    PlaceholderType,
    convert_level,
    convert_number,
    convert_thread,
    convert_timezone,
    parse_pattern,
)


def test_parse_mixed_pattern():
    tokens = parse_pattern("{UtcDateTime} - {Level}", TEXT_PLACEHOLDERS)
    assert tokens == [
        Placeholder(PlaceholderType.UTC_DATETIME),
        Placeholder(PlaceholderType.STRING, " - "),
        Placeholder(PlaceholderType.LEVEL),
    ]


def test_parse_unknown_placeholder_kept_literally():
    assert parse_pattern("{Foo}", TEXT_PLACEHOLDERS) == [Placeholder(PlaceholderType.STRING, "{Foo}")]


def test_parse_merges_adjacent_text():
    assert parse_pattern("a{Foo}b", TEXT_PLACEHOLDERS) == [
        Placeholder(PlaceholderType.STRING, "a{Foo}b")
    ]


def test_parse_drops_empty_braces():
    assert parse_pattern("a{}b", TEXT_PLACEHOLDERS) == [Placeholder(PlaceholderType.STRING, "ab")]


def test_parse_stray_closing_brace_kept():
    assert parse_pattern("a}b", TEXT_PLACEHOLDERS) == [Placeholder(PlaceholderType.STRING, "a}b")]


def test_parse_unterminated_placeholder_becomes_text():
    assert parse_pattern("ab{Lev", TEXT_PLACEHOLDERS) == [
        Placeholder(PlaceholderType.STRING, "abLev")
    ]


def test_parse_endline_expands_to_line_separator():
    tokens = parse_pattern("{Message}{EndLine}", TEXT_PLACEHOLDERS)
    assert tokens == [
        Placeholder(PlaceholderType.MESSAGE),
        Placeholder(PlaceholderType.STRING, os.linesep),
    ]


def test_parse_respects_given_names():
    tokens = parse_pattern("{UtcDate}-{Thread}", DATETIME_PLACEHOLDERS)
    assert tokens == [
        Placeholder(PlaceholderType.UTC_DATE),
        Placeholder(PlaceholderType.STRING, "-{Thread}"),
    ]


def test_parse_empty_pattern():
    assert parse_pattern("", TEXT_PLACEHOLDERS) == []


@pytest.mark.parametrize("kind", [k for k in PlaceholderType if k is not PlaceholderType.STRING])
def test_every_text_placeholder_recognised(kind):
    assert parse_pattern("{" + kind.value + "}", TEXT_PLACEHOLDERS) == [Placeholder(kind)]


def test_convert_number_values():
    assert convert_number(1970, 4) == "1970"
    assert convert_number(1, 2) == "01"
    assert convert_number(0, 3) == "000"


@pytest.mark.parametrize("number", [0, 5, 42, 999])
def test_convert_number_round_trip(number):
    text = convert_number(number, 3)
    assert len(text) == 3
    assert int(text) == number


def test_convert_number_rejects_negative():
    with pytest.raises(ValueError):
        convert_number(-1, 2)


def test_convert_thread_zero():
    assert convert_thread(0, 10) == "0x00000000"


def test_convert_thread_hex():
    assert convert_thread(0xABCDEF, 10) == "0x00ABCDEF"


@pytest.mark.parametrize("thread", [1, 0xDEADBEEF, 0x123456789ABCDEF0])
def test_convert_thread_keeps_low_digits(thread):
    text = convert_thread(thread, 10)
    assert len(text) == 10
    assert text.startswith("0x")
    assert int(text, 16) == thread & 0xFFFFFFFF


def test_convert_timezone_zero():
    assert convert_timezone(0, 6) == "+00:00"
    assert convert_timezone(0, 5, "") == "+0000"


def test_convert_timezone_negative():
    assert convert_timezone(-90, 6) == "-01:30"


@pytest.mark.parametrize("offset", [-720, -345, -59, 0, 9, 60, 330, 545, 840])
def test_convert_timezone_round_trip(offset):
    text = convert_timezone(offset, 6)
    assert len(text) == 6
    sign = -1 if text[0] == "-" else 1
    hours, minutes = text[1:].split(":")
    assert sign * (int(hours) * 60 + int(minutes)) == offset


def test_convert_timezone_rejects_small_size():
    with pytest.raises(ValueError):
        convert_timezone(0, 3)


def test_convert_level_names():
    assert convert_level(Level.FATAL, 5) == "FATAL"
    text = convert_level(Level.WARN, 5)
    assert len(text) == 5
    assert text.rstrip() == "WARN"


def test_convert_level_unknown():
    assert convert_level(5, 5) == "<???>"