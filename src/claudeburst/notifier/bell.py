import sys
from typing import TextIO


class BellNotifier:
    """
    BellNotifier rings the terminal bell, standing in for
    the notification sound of a desktop app.
    """

    def __init__(self, stream: "TextIO | None" = None) -> "None":
        self._stream = stream

    @property
    def name(self) -> "str":
        return "bell"

    async def notify(self, title: "str", subtitle: "str") -> "None":
        stream = self._stream or sys.stderr
        stream.write("\a")
        stream.flush()

    async def close(self) -> "None":
        pass
