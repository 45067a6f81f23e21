import os
import shlex
from dataclasses import dataclass, field
from pathlib import Path

from claudeburst.discovery import default_claude_dir


@dataclass
class Config:
    # directory holding Claude Code's projects/ folder
    claude_dir: "Path" = field(default_factory=default_claude_dir)
    # seconds between usage scans
    poll_interval: "int" = 60
    # listen_address: format ":9186" or
    # "0.0.0.0:9186"; empty disables the metrics server
    listen_address: "str" = ""
    log_level: "str" = "info"
    # "console" or "json"
    log_format: "str" = "console"

    # e.g. ["notify-send", "{title}", "{subtitle}"]
    notify_command: "list[str]" = field(default_factory=list)
    bell: "bool" = False
    once: "bool" = False
    test_notification: "bool" = False

    @classmethod
    def from_env(cls) -> "Config":
        claude_dir = os.environ.get("CLAUDE_CONFIG_DIR", "")
        return cls(
            claude_dir=Path(claude_dir).expanduser() if claude_dir else default_claude_dir(),
            notify_command=shlex.split(os.environ.get("CLAUDEBURST_NOTIFY_COMMAND", "")),
        )

    @property
    def projects_dir(self) -> "Path":
        return self.claude_dir / "projects"

    @property
    def metrics_enabled(self) -> "bool":
        return bool(self.listen_address)
