import argparse
import shlex
from pathlib import Path

from claudeburst.config import Config
from claudeburst.logging import LOG_FORMATS


def parse_args(argv: "list[str] | None" = None) -> "Config":
    parser = argparse.ArgumentParser(
        prog="claudeburst",
        description="Track Claude Code 5-hour usage windows and announce new sessions",
    )
    parser.add_argument(
        "--claude.dir",
        dest="claude_dir",
        default=None,
        help="Claude config directory (default: $CLAUDE_CONFIG_DIR or ~/.claude)",
    )
    parser.add_argument(
        "--poll.interval",
        dest="poll_interval",
        type=int,
        default=60,
        help="Seconds between usage scans (default: 60)",
    )
    parser.add_argument(
        "--web.listen-address",
        dest="listen_address",
        default="",
        help="Address to serve Prometheus metrics on, e.g. :9186 (default: disabled)",
    )
    parser.add_argument(
        "--log.level",
        dest="log_level",
        default="info",
        choices=["debug", "info", "warning", "error"],
        help="Log level (default: info)",
    )
    parser.add_argument(
        "--log.format",
        dest="log_format",
        default="console",
        choices=list(LOG_FORMATS),
        help="Log output format (default: console)",
    )
    parser.add_argument(
        "--notify.command",
        dest="notify_command",
        default=None,
        help=(
            "Command run on each new session; {title} and {subtitle} are "
            "substituted (default: $CLAUDEBURST_NOTIFY_COMMAND)"
        ),
    )
    parser.add_argument(
        "--notify.bell",
        dest="bell",
        action="store_true",
        help="Ring the terminal bell on each new session",
    )
    parser.add_argument(
        "--notify.test",
        dest="test_notification",
        action="store_true",
        help="Send a test notification for the current window and exit",
    )
    parser.add_argument(
        "--once",
        action="store_true",
        help="Print the current and next session lines and exit",
    )

    args = parser.parse_args(argv)
    config = Config.from_env()
    if args.claude_dir:
        config.claude_dir = Path(args.claude_dir).expanduser()
    if args.notify_command is not None:
        config.notify_command = shlex.split(args.notify_command)
    config.poll_interval = args.poll_interval
    config.listen_address = args.listen_address
    config.log_level = args.log_level
    config.log_format = args.log_format
    config.bell = args.bell
    config.test_notification = args.test_notification
    config.once = args.once
    return config
