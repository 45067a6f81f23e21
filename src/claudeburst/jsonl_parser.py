import io
import json
from typing import Any, Iterable, Iterator

from claudeburst.models import UsageEntry
from claudeburst.timeutil import parse_timestamp

# (field in message.usage, UsageEntry attribute)
USAGE_FIELDS: "tuple[tuple[str, str], ...]" = (
    ("input_tokens", "input_tokens"),
    ("output_tokens", "output_tokens"),
    ("cache_creation_input_tokens", "cache_creation_tokens"),
    ("cache_read_input_tokens", "cache_read_tokens"),
)


def _token_count(value: "Any") -> "int":
    # bool is an int subclass; true/false are not token counts
    if isinstance(value, bool) or not isinstance(value, int):
        return 0
    return max(value, 0)


def _entry_from_line(line: "str") -> "UsageEntry | None":
    """
    converts one JSONL line into a UsageEntry. Only the timestamp is
    load-bearing: everything else falls back to defaults.
    """
    try:
        record = json.loads(line)
    except (ValueError, RecursionError):
        return None

    if not isinstance(record, dict):
        return None

    raw_timestamp = record.get("timestamp")
    if not isinstance(raw_timestamp, str):
        return None

    timestamp = parse_timestamp(raw_timestamp)
    if timestamp is None:
        return None

    kind = record.get("type")
    counts: "dict[str, int]" = {}

    message = record.get("message")
    usage = message.get("usage") if isinstance(message, dict) else None
    if isinstance(usage, dict):
        for field, attr in USAGE_FIELDS:
            counts[attr] = _token_count(usage.get(field))

    return UsageEntry(
        timestamp=timestamp,
        kind=kind if isinstance(kind, str) else "",
        **counts,
    )


def iter_entries(lines: "Iterable[str]") -> "Iterator[UsageEntry]":
    """
    lazily yields entries from an iterable of lines. Blank lines,
    invalid JSON, non-object values and lines without a parseable
    timestamp are skipped silently.
    """
    for line in lines:
        line = line.strip()
        if not line:
            continue

        entry = _entry_from_line(line)
        if entry is not None:
            yield entry


def parse_entries(data: "bytes | str") -> "list[UsageEntry]":
    """
    parses the contents of a JSONL log file. Returns an empty list when
    the bytes are not valid UTF-8. Line order is preserved.
    """
    if isinstance(data, bytes):
        try:
            text = data.decode("utf-8")
        except UnicodeDecodeError:
            return []
    else:
        text = data

    # StringIO iterates line by line without building a list of lines;
    # newline=None accepts \n, \r\n and \r
    return list(iter_entries(io.StringIO(text, newline=None)))
