"""
Formats session windows into the strings shown to the user, e.g.
"Current: 8am–1pm" or "Next session in 13m".

Every function takes the reference time and the display timezone
explicitly. When tz is None the machine's local timezone is used.
"""

import math
from datetime import datetime, tzinfo

from claudeburst.models import UsageWindow
from claudeburst.timeutil import ensure_aware, truncate_to_hour_utc, utcnow
from claudeburst.window_builder import SESSION_DURATION

NOTIFICATION_TITLE = "A new Claude Code session has begun!"

# en dash, never a hyphen
RANGE_SEPARATOR = "–"

# at or under this many minutes remaining, show a countdown
COUNTDOWN_THRESHOLD_MINUTES = 60


def _localize(moment: "datetime", tz: "tzinfo | None") -> "datetime":
    moment = ensure_aware(moment)
    if tz is None:
        return moment.astimezone()
    return moment.astimezone(tz)


def format_time(moment: "datetime", tz: "tzinfo | None" = None) -> "str":
    """
    formats a time of day as '8am' or '1:45pm'. Minutes are left out
    when they are exactly zero.
    """
    local = _localize(moment, tz)
    hour = local.hour % 12 or 12
    suffix = "am" if local.hour < 12 else "pm"

    if local.minute == 0:
        return f"{hour}{suffix}"
    return f"{hour}:{local.minute:02d}{suffix}"


def format_session_range(
    start: "datetime",
    end: "datetime",
    tz: "tzinfo | None" = None,
) -> "str":
    return f"{format_time(start, tz)}{RANGE_SEPARATOR}{format_time(end, tz)}"


def current_session_description(
    window: "UsageWindow",
    tz: "tzinfo | None" = None,
) -> "str":
    return f"Current: {format_session_range(window.start, window.end, tz)}"


def next_session_description(
    window: "UsageWindow | None",
    now: "datetime | None" = None,
    tz: "tzinfo | None" = None,
) -> "str":
    """
    describes when the next session becomes available. Remaining
    minutes are rounded up, so 30 seconds left reads as '1m'.
    """
    if window is None:
        return "Next: Start a session"

    now = utcnow() if now is None else ensure_aware(now)
    end = ensure_aware(window.end)

    if now < end:
        minutes_remaining = math.ceil((end - now).total_seconds() / 60)
        if minutes_remaining <= COUNTDOWN_THRESHOLD_MINUTES:
            return f"Next session in {minutes_remaining}m"
        return f"Next session at {format_time(end, tz)}"

    return "Next session soon"


def estimated_next_window(
    moment: "datetime",
    tz: "tzinfo | None" = None,
) -> "str":
    """
    best guess at the window a new session starting at `moment` would
    get, used before fresh activity confirms the real one.
    """
    start = truncate_to_hour_utc(moment)
    return format_session_range(start, start + SESSION_DURATION, tz)


def current_session_status(
    window: "UsageWindow | None",
    data_found: "bool" = True,
    tz: "tzinfo | None" = None,
) -> "str":
    """
    the 'Current' status line, telling a missing Claude data directory
    apart from a directory with no recent activity.
    """
    if window is not None:
        return current_session_description(window, tz)
    if not data_found:
        return "Current: Claude data not found"
    return "Current: No recent activity"


def next_session_status(
    window: "UsageWindow | None",
    now: "datetime | None" = None,
    data_found: "bool" = True,
    tz: "tzinfo | None" = None,
) -> "str":
    if window is None and not data_found:
        return "Next: Start Claude Code"
    return next_session_description(window, now, tz)
