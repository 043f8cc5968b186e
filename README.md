# logweave

Building blocks for a logging pipeline. A `Record` carries a timestamp in nanoseconds, a thread id, a `Level`, a logger name, a message and an optional binary buffer. Filters decide which records go on. Layouts turn a record into raw bytes in `record.raw`. Appenders write those bytes somewhere.

## Install

```
pip install logweave
```

To run the tests, install the `test` extra:

```
pip install "logweave[test]"
```

## Pieces

### Records (`logweave.record`)

- `Level`: an integer enum, `NONE < FATAL < ERROR < WARN < INFO < DEBUG < ALL`.
- `Record`: a dataclass. `timestamp` defaults to the current time and `thread` to the current thread id. `raw` stays empty until a layout has run.

### Filters (`logweave.filters`)

Each filter has `filter_record(record)`, which returns `True` if the record should go on.

- `LevelFilter(level, to=None, positive=True)`: with only `level`, it keeps levels from `NONE` up to `level`. With `to` as well, it keeps levels between the two bounds, given in either order. With `positive=False` it keeps the levels outside the range instead. `update()` takes the same arguments and reconfigures the filter.
- `LoggerFilter(pattern, positive=True)`: the logger name must equal `pattern`.
- `MessageFilter(pattern, positive=True)`: the whole message must match the regular expression. It takes a string or a compiled pattern.
- `SwitchFilter(enabled=True)`: passes everything or nothing. Change it with `update(enabled)`.

### Layouts

- `logweave.layouts.BinaryLayout` writes a little-endian frame: u32 size, u64 timestamp, u64 thread, u8 level, u8 logger length, logger, u16 message length, message, u32 buffer length, buffer. It raises `ValueError` if the logger name is longer than 255 bytes or the message is longer than 65535 bytes.
- `logweave.layouts.HashLayout` writes the same frame. The logger name and the message are replaced by their 32-bit FNV-1a hashes (`hash_message`).
- `logweave.text_layout.TextLayout(pattern)` renders a `{Placeholder}` pattern as UTF-8 text. `render(record)` returns the text; `layout_record(record)` stores it in `record.raw`.
  - Date and time placeholders: `UtcDateTime`, `UtcDate`, `UtcTime`, `UtcYear`, `UtcMonth`, `UtcDay`, `UtcHour`, `UtcMinute`, `UtcSecond`, `UtcTimezone`, and the same set with the `Local` prefix.
  - Sub-second placeholders: `Millisecond`, `Microsecond`, `Nanosecond`.
  - Record placeholders: `Thread` (hex, for example `0x0000ABCD`), `Level` (padded to five characters), `Logger`, `Message`.
  - `EndLine` is replaced by the platform line separator. Unknown placeholders are kept as written.
- `logweave.text_pattern` holds the pattern tokenizer (`parse_pattern`) and the fixed-width formatters (`convert_number`, `convert_thread`, `convert_timezone`, `convert_level`).

### Appenders

- `logweave.appenders.OstreamAppender(stream)` writes `record.raw` to a binary or text stream. Records with an empty `raw` are skipped.
- `logweave.appenders.SyslogAppender()` sends records to the system log. The priority follows the record's level. On platforms without a system log it does nothing. Call `close()` when done, or use the appender as a context manager.
- `logweave.rolling.TimeRollingFileAppender(path, policy=TimeRollingPolicy.DAY, pattern="{UtcDateTime}.log", archive=False, truncate=False, auto_flush=False, auto_start=True)` writes records into files under `path`.
  - It starts a new file each second, minute, hour or day, as set by `TimeRollingPolicy`.
  - File names come from the pattern's date and time placeholders, in a compact form such as `2024-01-02T030405Z`. A `/` in the pattern creates sub-directories.
  - With `archive=True`, each closed file is packed into `<file>.zip` on a background thread and the original is removed.
  - After an I/O error it waits 100 ms before trying to open a file again.
  - It has `start()`, `stop()`, `is_started()` and `flush()`, and it is a context manager. `current_file` gives the path of the file that is open.
  - Subclasses of `RollingFileAppender` may override `on_archive_thread_initialize` and `on_archive_thread_cleanup`.

## Example

```python
import sys

from logweave.appenders import OstreamAppender
from logweave.filters import LevelFilter
from logweave.record import Level, Record
from logweave.text_layout import TextLayout

layout = TextLayout("{UtcDateTime} {Level} {Logger} - {Message}{EndLine}")
keep = LevelFilter(Level.WARN)
out = OstreamAppender(sys.stdout.buffer)

record = Record(level=Level.ERROR, logger="app", message="disk full")
if keep.filter_record(record):
    layout.layout_record(record)
    out.append_record(record)
    out.flush()
```

## What it does not do

- There is no logger front end, processor or configuration registry. You build the pipeline yourself: filter, lay out, then append, as in the example above.
- Files roll by time only. There is no appender that rolls files by size or keeps numbered backups.
- There is no command-line tool.