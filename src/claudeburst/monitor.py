import asyncio
import time
from datetime import datetime
from pathlib import Path
from typing import Sequence

import structlog

from claudeburst.discovery import ScanResult, load_current_window_async
from claudeburst.formatter import NOTIFICATION_TITLE, format_session_range
from claudeburst.metrics import MetricsUpdater
from claudeburst.models import UsageWindow
from claudeburst.notifier.base import Notifier
from claudeburst.rollover import RolloverTracker
from claudeburst.timeutil import ensure_aware, utcnow

logger = structlog.get_logger()


class SessionMonitor:
    """
    SessionMonitor is responsible for periodically recomputing the
    current usage window from the Claude projects directory and
    announcing new sessions through the configured notifiers.
    The loop runs until stop() is called, sleeping for the poll
    interval between checks.
    """

    def __init__(
        self,
        notifiers: "Sequence[Notifier]",
        metrics_updater: "MetricsUpdater",
        tracker: "RolloverTracker",
        projects_dir: "Path | None" = None,
        poll_interval_seconds: "int" = 60,
    ) -> "None":
        self._notifiers = list(notifiers)
        self._metrics = metrics_updater
        self._tracker = tracker
        self._projects_dir = projects_dir
        self._interval = poll_interval_seconds
        self._stop_event: "asyncio.Event" = asyncio.Event()

    @property
    def window(self) -> "UsageWindow | None":
        return self._tracker.window

    def stop(self) -> "None":
        """
        signals the monitor loop to stop after the current check.
        """
        self._stop_event.set()

    async def close(self) -> "None":
        """
        closes all notifiers.
        """
        for n in self._notifiers:
            await n.close()

    async def run(self) -> "None":
        """
        runs the main monitor loop. Runs until stop() is called.
        """
        while not self._stop_event.is_set():
            await self.check()

            try:
                await asyncio.wait_for(self._stop_event.wait(), timeout=self._interval)
            except TimeoutError:
                pass

    async def check(self, now: "datetime | None" = None) -> "UsageWindow | None":
        """
        scans once and notifies if a new session has started.
        Returns the window that was announced, if any.
        """
        now = utcnow() if now is None else ensure_aware(now)
        # once the known window has ended, a newer window means a new session
        trigger = self._tracker.needs_rollover_check(now)

        scan_start = time.monotonic()
        try:
            result: "ScanResult" = await load_current_window_async(
                self._projects_dir, now
            )
        except Exception:
            logger.exception("usage_scan_error", projects_dir=str(self._projects_dir))
            self._metrics.inc_scan_error("scan")
            return None

        self._metrics.observe_scan_duration(time.monotonic() - scan_start)
        self._metrics.update_scan(result)
        self._metrics.set_last_scan_success(time.time())

        if not result.data_found:
            logger.debug("claude_data_not_found", projects_dir=str(self._projects_dir))

        rolled_over = self._tracker.update(result.window, now, trigger=trigger)
        if rolled_over is None:
            return None

        subtitle = format_session_range(rolled_over.start, rolled_over.end)
        logger.info(
            "session_rollover",
            start=rolled_over.start.isoformat(),
            end=rolled_over.end.isoformat(),
        )
        await self._notify(subtitle)
        return rolled_over

    async def _notify(self, subtitle: "str") -> "None":
        tasks = [n.notify(NOTIFICATION_TITLE, subtitle) for n in self._notifiers]
        results = await asyncio.gather(*tasks, return_exceptions=True)

        for notifier, result in zip(self._notifiers, results):
            if isinstance(result, BaseException):
                logger.error(
                    "notification_error",
                    notifier=notifier.name,
                    exc_info=result,
                )
                self._metrics.inc_notification_error(notifier.name)
                continue

            self._metrics.inc_notification(notifier.name)
