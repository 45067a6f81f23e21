from typing import Protocol


class Notifier(Protocol):
    """
    Notifier stands as a common protocol that all
    notification channels must satisfy.

    Notifiers receive an already formatted title and subtitle
    and are only responsible for presenting them.
    """

    @property
    def name(self) -> "str": ...

    async def notify(self, title: "str", subtitle: "str") -> "None": ...

    async def close(self) -> "None": ...
