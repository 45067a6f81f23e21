"""
Builds a UsageWindow from a source that reports its own period
instead of requiring derivation from raw log events, e.g.

    {"period_start": "2026-01-08T00:00:00Z", "period_end": 1767844800}
"""

import json
from collections.abc import Mapping
from datetime import datetime, timedelta, timezone
from typing import Any

from claudeburst.models import UsageWindow
from claudeburst.timeutil import parse_timestamp

# used when the source reports no period_start. Differs from the
# 5-hour SESSION_DURATION of the window builder on purpose
FALLBACK_SESSION_DURATION: "timedelta" = timedelta(hours=4)


def parse_date_value(value: "Any") -> "datetime | None":
    """
    accepts an ISO-8601 string or epoch seconds (int or float).
    """
    if isinstance(value, str):
        return parse_timestamp(value)

    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None

    try:
        return datetime.fromtimestamp(value, tz=timezone.utc)
    except (OverflowError, OSError, ValueError):
        return None


def parse_usage_window(
    source: "bytes | str | Mapping[str, Any]",
) -> "UsageWindow | None":
    """
    parses a single {period_start, period_end} object, raw or already
    decoded. period_end is required. A start after the end collapses
    onto the end.
    """
    if isinstance(source, (bytes, str)):
        try:
            source = json.loads(source)
        except (ValueError, RecursionError):
            return None

    if not isinstance(source, Mapping):
        return None

    end = parse_date_value(source.get("period_end"))
    if end is None:
        return None

    start = parse_date_value(source.get("period_start"))
    if start is None:
        try:
            start = end - FALLBACK_SESSION_DURATION
        except OverflowError:
            return None

    return UsageWindow(start=min(start, end), end=end)
