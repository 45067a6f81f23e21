import structlog

logger = structlog.get_logger()


class LogNotifier:
    """
    LogNotifier reports new sessions as structured log events.
    """

    @property
    def name(self) -> "str":
        return "log"

    async def notify(self, title: "str", subtitle: "str") -> "None":
        logger.info("session_started", title=title, subtitle=subtitle)

    async def close(self) -> "None":
        pass
