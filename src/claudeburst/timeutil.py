import re
from datetime import datetime, timezone

# tried in order, fractional seconds first
_TIMESTAMP_FORMATS: "tuple[str, ...]" = (
    "%Y-%m-%dT%H:%M:%S.%f%z",
    "%Y-%m-%dT%H:%M:%S%z",
)

_RFC3339_PATTERN = re.compile(
    r"\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}"
    r"(?:\.(?P<fraction>\d+))?"
    r"(?:Z|[+-]\d{2}:\d{2})"
)

# strptime's %f takes microseconds at most
_MAX_FRACTION_DIGITS = 6


def parse_timestamp(text: "str") -> "datetime | None":
    """
    parses an RFC 3339 timestamp such as '2026-01-08T10:00:00.000Z'.
    An explicit offset (or 'Z') is required and digits beyond
    microseconds are dropped. Returns None when the text matches
    neither the fractional nor the whole-second form, or when the
    moment cannot be expressed in UTC.
    """
    match = _RFC3339_PATTERN.fullmatch(text)
    if match is None:
        return None

    fraction = match.group("fraction")
    if fraction is not None and len(fraction) > _MAX_FRACTION_DIGITS:
        start, end = match.span("fraction")
        text = text[: start + _MAX_FRACTION_DIGITS] + text[end:]

    for fmt in _TIMESTAMP_FORMATS:
        try:
            parsed = datetime.strptime(text, fmt)
        except ValueError:
            continue

        try:
            parsed.astimezone(timezone.utc)
        except OverflowError:
            return None
        return parsed
    return None


def ensure_aware(moment: "datetime") -> "datetime":
    """
    naive datetimes are interpreted as UTC.
    """
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment


def truncate_to_hour_utc(moment: "datetime") -> "datetime":
    """
    floors a datetime to the start of its hour in UTC, whatever the
    local timezone is. 8:56 becomes 8:00, never 9:00.
    """
    utc = ensure_aware(moment).astimezone(timezone.utc)
    return utc.replace(minute=0, second=0, microsecond=0)


def utcnow() -> "datetime":
    return datetime.now(timezone.utc)
