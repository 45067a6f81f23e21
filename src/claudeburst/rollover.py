import threading
from datetime import datetime

from claudeburst.models import UsageWindow
from claudeburst.timeutil import ensure_aware


class RolloverTracker:
    """
    RolloverTracker: Is a thread-safe approach for detecting
    that a new usage window has started.

    Keeps the last observed window and the end of the last period
    a notification was sent for, so each rollover is reported once
    no matter how many scans observe it.
    """

    def __init__(self) -> "None":
        self._lock: "threading.Lock" = threading.Lock()
        self._window: "UsageWindow | None" = None
        self._last_notified_end: "datetime | None" = None

    @property
    def window(self) -> "UsageWindow | None":
        with self._lock:
            return self._window

    def needs_rollover_check(self, now: "datetime") -> "bool":
        """
        returns True once the known window has ended, meaning the
        next scan should notify if a newer window shows up.
        """
        with self._lock:
            return self._window is not None and ensure_aware(now) >= self._window.end

    def update(
        self,
        window: "UsageWindow | None",
        now: "datetime",
        trigger: "bool" = False,
    ) -> "UsageWindow | None":
        """
        records the latest window. Returns it when it replaces a window
        whose period has ended (or `trigger` is set) and that period has
        not been reported yet; returns None otherwise.
        """
        now = ensure_aware(now)
        with self._lock:
            previous = self._window
            self._window = window

            if window is None or previous is None:
                return None

            if window.end <= previous.end:
                return None

            if not (trigger or now >= previous.end):
                return None

            if self._last_notified_end == previous.end:
                return None

            self._last_notified_end = previous.end
            return window
