from prometheus_client import REGISTRY, CollectorRegistry, Counter, Gauge, Histogram

from claudeburst.discovery import ScanResult


class MetricsUpdater:
    """
    exposes the current usage window and scan health
    as Prometheus metrics.
    """

    def __init__(self, registry: "CollectorRegistry" = REGISTRY) -> "None":
        self._window_start: "Gauge" = Gauge(
            "claudeburst_window_start_timestamp_seconds",
            "Unix timestamp of the current usage window start (0 if none)",
            registry=registry,
        )
        self._window_end: "Gauge" = Gauge(
            "claudeburst_window_end_timestamp_seconds",
            "Unix timestamp of the current usage window end (0 if none)",
            registry=registry,
        )
        self._files_scanned: "Gauge" = Gauge(
            "claudeburst_files_scanned",
            "Number of JSONL files read during the last scan",
            registry=registry,
        )
        self._entries_parsed: "Gauge" = Gauge(
            "claudeburst_entries_parsed",
            "Number of usage entries parsed during the last scan",
            registry=registry,
        )
        self._scan_duration: "Histogram" = Histogram(
            "claudeburst_scan_duration_seconds",
            "Duration of usage scans",
            registry=registry,
        )
        self._scan_errors: "Counter" = Counter(
            "claudeburst_scan_errors_total",
            "Total number of errors by stage",
            ["stage"],
            registry=registry,
        )
        self._notifications: "Counter" = Counter(
            "claudeburst_notifications_total",
            "Total session notifications delivered by notifier",
            ["notifier"],
            registry=registry,
        )
        self._notification_errors: "Counter" = Counter(
            "claudeburst_notification_errors_total",
            "Total failed session notifications by notifier",
            ["notifier"],
            registry=registry,
        )
        self._last_scan_success: "Gauge" = Gauge(
            "claudeburst_last_scan_success_timestamp_seconds",
            "Unix timestamp of the last successful scan",
            registry=registry,
        )

    def update_scan(self, result: "ScanResult") -> "None":
        """
        updates the window and scan gauges from a scan result.
        """
        if result.window is None:
            self._window_start.set(0)
            self._window_end.set(0)
        else:
            self._window_start.set(result.window.start.timestamp())
            self._window_end.set(result.window.end.timestamp())

        self._files_scanned.set(result.files_scanned)
        self._entries_parsed.set(result.entries_parsed)

    def observe_scan_duration(self, duration_seconds: "float") -> "None":
        self._scan_duration.observe(duration_seconds)

    def inc_scan_error(self, stage: "str") -> "None":
        self._scan_errors.labels(stage=stage).inc()

    def inc_notification(self, notifier: "str") -> "None":
        self._notifications.labels(notifier=notifier).inc()

    def inc_notification_error(self, notifier: "str") -> "None":
        self._notification_errors.labels(notifier=notifier).inc()

    def set_last_scan_success(self, timestamp: "float") -> "None":
        self._last_scan_success.set(timestamp)
