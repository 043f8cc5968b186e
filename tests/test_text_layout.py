import os
import re
from datetime import datetime, timezone

from logweave.record import Level, Record
from logweave.text_layout import TextLayout

SECONDS = int(datetime(2021, 12, 13, 10, 20, 30, tzinfo=timezone.utc).timestamp())
TIMESTAMP = SECONDS * 1_000_000_000 + 123_456_789


def _record(**kwargs):
    values = dict(timestamp=TIMESTAMP, thread=0xABCD, level=Level.WARN, logger="app", message="hello")
    values.update(kwargs)
    return Record(**values)


def _render(pattern, **kwargs):
    record = _record(**kwargs)
    TextLayout(pattern).layout_record(record)
    return record.raw.decode("utf-8")


def test_pattern_property_returns_given_pattern():
    layout = TextLayout("{Level} {Message}")
    assert layout.pattern == "{Level} {Message}"


def test_utc_datetime():
    assert _render("{UtcDateTime}") == "2021-12-13T10:20:30.123Z"


def test_utc_parts_compose_datetime():
    parts = _render("{UtcYear}-{UtcMonth}-{UtcDay}T{UtcHour}:{UtcMinute}:{UtcSecond}.{Millisecond}{UtcTimezone}")
    assert parts == _render("{UtcDateTime}")
    assert _render("{UtcDate}T{UtcTime}") == _render("{UtcDateTime}")


def test_utc_timezone_is_z():
    assert _render("{UtcTimezone}") == "Z"


def test_subsecond_fields():
    assert _render("{Millisecond}{Microsecond}{Nanosecond}") == "123456789"


def test_thread_hex():
    assert _render("{Thread}") == "0x0000ABCD"


def test_level_padded():
    assert _render("[{Level}]") == "[WARN ]"
    assert len(_render("{Level}", level=Level.ERROR)) == 5


def test_logger_and_message_pass_through():
    assert _render("{Logger}: {Message}", logger="db", message="ready") == "db: ready"


def test_endline_is_line_separator():
    assert _render("{Message}{EndLine}") == "hello" + os.linesep


def test_unknown_placeholder_kept():
    assert _render("{Foo} {Message}") == "{Foo} hello"


def test_local_datetime_consistency():
    local = _render("{LocalDateTime}")
    assert local == _render("{LocalDate}T{LocalTime}")
    assert local.endswith(_render("{LocalTimezone}"))
    assert re.fullmatch(r"[+-]\d\d:\d\d", _render("{LocalTimezone}"))
    assert _render("{LocalYear}-{LocalMonth}-{LocalDay}") == _render("{LocalDate}")
    assert re.fullmatch(r"\d{4}-\d\d-\d\dT\d\d:\d\d:\d\d\.\d{3}[+-]\d\d:\d\d", local)


def test_raw_is_utf8_bytes():
    record = _record(message="grüße")
    TextLayout("{Message}").layout_record(record)
    assert record.raw == "grüße".encode("utf-8")


def test_plain_text_pattern():
    assert _render("just text") == "just text"


def test_render_matches_layout_record():
    layout = TextLayout("{UtcDateTime} [{Thread}] {Level} {Logger} - {Message}")
    record = _record()
    layout.layout_record(record)
    assert record.raw.decode("utf-8") == layout.render(_record())