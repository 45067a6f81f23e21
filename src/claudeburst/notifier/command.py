import asyncio
from typing import Sequence

import structlog

from claudeburst.errors import NotificationError

logger = structlog.get_logger()

_DEFAULT_TIMEOUT_SECONDS = 10.0


class CommandNotifier:
    """
    CommandNotifier delivers notifications by running an external
    program such as notify-send or osascript. Each argument may use
    the {title} and {subtitle} placeholders, e.g.

        ["notify-send", "{title}", "{subtitle}"]
    """

    def __init__(
        self,
        argv: "Sequence[str]",
        timeout: "float" = _DEFAULT_TIMEOUT_SECONDS,
    ) -> "None":
        if not argv:
            raise ValueError("notification command must not be empty")
        self._argv = list(argv)
        self._timeout = timeout

    @property
    def name(self) -> "str":
        return "command"

    def render(self, title: "str", subtitle: "str") -> "list[str]":
        """
        substitutes the placeholders into every argument.
        """
        # str.replace so braces in titles or other arguments are left alone
        return [
            arg.replace("{title}", title).replace("{subtitle}", subtitle)
            for arg in self._argv
        ]

    async def notify(self, title: "str", subtitle: "str") -> "None":
        argv = self.render(title, subtitle)
        logger.debug("notify_command_run", argv=argv)

        try:
            proc = await asyncio.create_subprocess_exec(
                *argv,
                stdout=asyncio.subprocess.DEVNULL,
                stderr=asyncio.subprocess.PIPE,
            )
        except OSError as e:
            raise NotificationError(f"could not start {argv[0]}: {e}") from e

        try:
            _, stderr = await asyncio.wait_for(
                proc.communicate(), timeout=self._timeout
            )
        except TimeoutError as e:
            proc.kill()
            await proc.wait()
            raise NotificationError(
                f"{argv[0]} timed out after {self._timeout}s"
            ) from e

        if proc.returncode != 0:
            raise NotificationError(
                f"{argv[0]} exited with {proc.returncode}: "
                f"{stderr.decode(errors='replace').strip()}"
            )

    async def close(self) -> "None":
        pass
