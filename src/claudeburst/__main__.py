import asyncio
import signal

import structlog
from prometheus_client import start_http_server

from claudeburst.cli import parse_args
from claudeburst.config import Config
from claudeburst.discovery import load_current_window
from claudeburst.formatter import (
    NOTIFICATION_TITLE,
    current_session_status,
    format_session_range,
    next_session_status,
)
from claudeburst.logging import setup_logging
from claudeburst.metrics import MetricsUpdater
from claudeburst.monitor import SessionMonitor
from claudeburst.notifier.base import Notifier
from claudeburst.notifier.bell import BellNotifier
from claudeburst.notifier.command import CommandNotifier
from claudeburst.notifier.log import LogNotifier
from claudeburst.rollover import RolloverTracker
from claudeburst.timeutil import utcnow

logger = structlog.get_logger()


def _parse_listen_address(addr: "str") -> "tuple[str, int]":
    """
    parses listen address in format ':9186' or '0.0.0.0:9186'.
    """
    if addr.startswith(":"):
        return ("0.0.0.0", int(addr[1:]))

    host, port = addr.rsplit(":", 1)
    return (host, int(port))


def build_notifiers(config: "Config") -> "list[Notifier]":
    notifiers: "list[Notifier]" = [LogNotifier()]
    if config.notify_command:
        notifiers.append(CommandNotifier(config.notify_command))
    if config.bell:
        notifiers.append(BellNotifier())
    return notifiers


def print_status(config: "Config") -> "None":
    """
    prints the same two lines a menubar would show.
    """
    now = utcnow()
    result = load_current_window(config.projects_dir, now)
    print(current_session_status(result.window, data_found=result.data_found))
    print(next_session_status(result.window, now, data_found=result.data_found))


async def send_test_notification(
    config: "Config",
    notifiers: "list[Notifier]",
) -> "None":
    result = load_current_window(config.projects_dir)
    window = result.window
    subtitle = (
        format_session_range(window.start, window.end) if window else "Session"
    )
    try:
        for notifier in notifiers:
            await notifier.notify(NOTIFICATION_TITLE, subtitle)
    finally:
        for notifier in notifiers:
            await notifier.close()


def main() -> "None":
    config = parse_args()
    setup_logging(config.log_level, config.log_format)

    if config.poll_interval <= 0:
        raise SystemExit("--poll.interval must be a positive number of seconds")

    if config.once:
        print_status(config)
        return

    notifiers = build_notifiers(config)
    for notifier in notifiers:
        logger.info("notifier_enabled", notifier=notifier.name)

    if config.test_notification:
        asyncio.run(send_test_notification(config, notifiers))
        return

    metrics_updater = MetricsUpdater()
    if config.metrics_enabled:
        try:
            host, port = _parse_listen_address(config.listen_address)
        except ValueError:
            raise SystemExit(f"invalid listen address: {config.listen_address!r}")
        start_http_server(port, addr=host)
        logger.info("metrics_server_started", host=host, port=port)

    monitor = SessionMonitor(
        notifiers,
        metrics_updater,
        RolloverTracker(),
        config.projects_dir,
        config.poll_interval,
    )
    logger.info(
        "monitor_started",
        projects_dir=str(config.projects_dir),
        poll_interval=config.poll_interval,
    )

    async def _run() -> "None":
        loop = asyncio.get_running_loop()
        # for SIGINT and SIGTERM, signal the monitor
        # to stop gracefully
        for sig in (signal.SIGINT, signal.SIGTERM):
            loop.add_signal_handler(sig, monitor.stop)

        try:
            await monitor.run()
        finally:
            logger.info("shutting_down")
            await monitor.close()
            logger.info("shutdown_complete")

    asyncio.run(_run())


if __name__ == "__main__":
    main()
