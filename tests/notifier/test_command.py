import io
import sys
from pathlib import Path

import pytest

from claudeburst.errors import NotificationError
from claudeburst.notifier.bell import BellNotifier
from claudeburst.notifier.command import CommandNotifier
from claudeburst.notifier.log import LogNotifier

# writes its last two arguments to the file named by the first one
_RECORD_ARGS = (
    "import pathlib, sys; "
    "pathlib.Path(sys.argv[1]).write_text(sys.argv[2] + '|' + sys.argv[3], encoding='utf-8')"
)


class TestCommandNotifierRender:
    def test_substitutes_placeholders(self) -> "None":
        notifier = CommandNotifier(["notify-send", "{title}", "Window {subtitle}"])
        assert notifier.render("New session", "8am–1pm") == [
            "notify-send",
            "New session",
            "Window 8am–1pm",
        ]

    def test_leaves_other_braces_alone(self) -> "None":
        notifier = CommandNotifier(["echo", "{unknown}", "{subtitle}"])
        assert notifier.render("t", "{title}") == ["echo", "{unknown}", "{title}"]

    def test_rejects_empty_command(self) -> "None":
        with pytest.raises(ValueError):
            CommandNotifier([])


class TestCommandNotifierNotify:
    @pytest.mark.asyncio
    async def test_runs_command(self, tmp_path: "Path") -> "None":
        out = tmp_path / "out.txt"
        notifier = CommandNotifier(
            [sys.executable, "-c", _RECORD_ARGS, str(out), "{title}", "{subtitle}"]
        )

        await notifier.notify("New session", "8am–1pm")

        assert out.read_text(encoding="utf-8") == "New session|8am–1pm"

    @pytest.mark.asyncio
    async def test_non_zero_exit_raises(self) -> "None":
        notifier = CommandNotifier(
            [sys.executable, "-c", "import sys; sys.stderr.write('nope'); sys.exit(3)"]
        )

        with pytest.raises(NotificationError, match="exited with 3: nope"):
            await notifier.notify("t", "s")

    @pytest.mark.asyncio
    async def test_missing_program_raises(self, tmp_path: "Path") -> "None":
        notifier = CommandNotifier([str(tmp_path / "no-such-program")])

        with pytest.raises(NotificationError, match="could not start"):
            await notifier.notify("t", "s")

    @pytest.mark.asyncio
    async def test_timeout_kills_command(self) -> "None":
        notifier = CommandNotifier(
            [sys.executable, "-c", "import time; time.sleep(30)"],
            timeout=0.2,
        )

        with pytest.raises(NotificationError, match="timed out"):
            await notifier.notify("t", "s")


class TestBellNotifier:
    @pytest.mark.asyncio
    async def test_rings_bell(self) -> "None":
        stream = io.StringIO()
        notifier = BellNotifier(stream)

        await notifier.notify("t", "s")

        assert stream.getvalue() == "\a"


class TestLogNotifier:
    @pytest.mark.asyncio
    async def test_notify_does_not_raise(self) -> "None":
        notifier = LogNotifier()
        await notifier.notify("New session", "8am–1pm")
        await notifier.close()
        assert notifier.name == "log"
