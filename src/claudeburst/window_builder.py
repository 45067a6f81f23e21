from datetime import datetime, timedelta
from typing import Sequence

from claudeburst.models import UsageEntry, UsageWindow
from claudeburst.timeutil import ensure_aware, truncate_to_hour_utc, utcnow

# Claude Code uses 5-hour windows for usage limits
SESSION_DURATION: "timedelta" = timedelta(hours=5)

# how far back file discovery looks for activity; slightly more than
# one session so a window boundary is never missed
LOOKBACK_DURATION: "timedelta" = timedelta(hours=6)


def build_blocks(entries: "Sequence[UsageEntry]") -> "list[UsageWindow]":
    """
    partitions entries into consecutive 5-hour blocks. A new block
    starts with the first entry, once the open block's end has passed,
    or after an idle gap of at least SESSION_DURATION. Block starts
    are floored to the UTC hour of the entry that opened them.
    """
    # sorted() is stable, entries with equal timestamps keep their order
    ordered = sorted(entries, key=lambda e: ensure_aware(e.timestamp))

    blocks: "list[UsageWindow]" = []
    current: "UsageWindow | None" = None
    last_timestamp: "datetime | None" = None

    for entry in ordered:
        timestamp = ensure_aware(entry.timestamp)

        needs_new_block = (
            current is None
            or current.end <= timestamp
            or (
                last_timestamp is not None
                and timestamp - last_timestamp >= SESSION_DURATION
            )
        )

        if needs_new_block:
            if current is not None:
                blocks.append(current)

            try:
                start = truncate_to_hour_utc(timestamp)
                end = start + SESSION_DURATION
            except OverflowError:
                # no block fits before the end of the calendar
                current = None
                continue

            current = UsageWindow(start=start, end=end)

        last_timestamp = timestamp

    if current is not None:
        blocks.append(current)

    return blocks


def calculate_current_window(
    entries: "Sequence[UsageEntry]",
    now: "datetime | None" = None,
) -> "UsageWindow | None":
    """
    returns the most recent block still active at `now` (end > now),
    or the most recent block overall when every block has ended.
    Returns None when there are no entries.
    """
    if not entries:
        return None

    now = utcnow() if now is None else ensure_aware(now)
    blocks = build_blocks(entries)

    for block in reversed(blocks):
        if block.end > now:
            return block

    if not blocks:
        return None

    return blocks[-1]
