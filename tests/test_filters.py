import re

import pytest

from logweave.filters import Filter, LevelFilter, LoggerFilter, MessageFilter, SwitchFilter
from logweave.record import Level, Record


def test_filter_is_abstract():
    with pytest.raises(TypeError):
        Filter()


def test_level_filter_single_level_covers_none_up_to_level():
    flt = LevelFilter(Level.WARN)
    assert flt.range == (Level.NONE, Level.WARN)
    assert flt.filter_record(Record(level=Level.FATAL)) is True
    assert flt.filter_record(Record(level=Level.WARN)) is True
    assert flt.filter_record(Record(level=Level.INFO)) is False


def test_level_filter_range_bounds_are_swapped_when_reversed():
    flt = LevelFilter(Level.DEBUG, Level.ERROR)
    assert flt.range == (Level.ERROR, Level.DEBUG)
    assert flt.filter_record(Record(level=Level.INFO)) is True
    assert flt.filter_record(Record(level=Level.FATAL)) is False


def test_level_filter_negative_inverts_result():
    flt = LevelFilter(Level.ERROR, Level.WARN, positive=False)
    assert flt.filter_record(Record(level=Level.WARN)) is False
    assert flt.filter_record(Record(level=Level.DEBUG)) is True
    assert flt.filter_record(Record(level=Level.FATAL)) is True


def test_level_filter_update_replaces_configuration():
    flt = LevelFilter(Level.FATAL)
    flt.update(Level.ALL, positive=False)
    assert flt.positive is False
    assert flt.range == (Level.NONE, Level.ALL)
    assert flt.filter_record(Record(level=Level.DEBUG)) is False


def test_logger_filter_exact_match():
    flt = LoggerFilter("net")
    assert flt.filter_record(Record(logger="net")) is True
    assert flt.filter_record(Record(logger="network")) is False


def test_logger_filter_negative():
    flt = LoggerFilter("net", positive=False)
    assert flt.filter_record(Record(logger="net")) is False
    assert flt.filter_record(Record(logger="db")) is True


def test_message_filter_requires_full_match():
    flt = MessageFilter(r"error \d+")
    assert flt.filter_record(Record(message="error 42")) is True
    assert flt.filter_record(Record(message="fatal error 42")) is False


def test_message_filter_accepts_compiled_pattern_and_negation():
    flt = MessageFilter(re.compile("ok.*"), positive=False)
    assert flt.filter_record(Record(message="ok fine")) is False
    assert flt.filter_record(Record(message="bad")) is True


def test_switch_filter_toggles():
    flt = SwitchFilter(True)
    record = Record()
    assert flt.filter_record(record) is True
    flt.update(False)
    assert flt.enabled is False
    assert flt.filter_record(record) is False