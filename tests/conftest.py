from collections.abc import Callable, Iterator
from datetime import datetime, timezone

import pytest
import structlog
from prometheus_client import CollectorRegistry

from claudeburst.logging import setup_logging


@pytest.fixture(autouse=True)
def _structlog_via_stdlib() -> "Iterator[None]":
    """
    routes structlog through stdlib logging as main() does, so log
    events stay off stdout.
    """
    setup_logging("info")
    yield
    structlog.reset_defaults()


@pytest.fixture()
def registry() -> "CollectorRegistry":
    """
    fresh Prometheus registry to avoid cross-test state.
    """
    return CollectorRegistry()


@pytest.fixture()
def at() -> "Callable[..., datetime]":
    """
    builds UTC datetimes on a fixed day: at(8, 56) is 2026-01-08 08:56Z.
    """

    def _at(hour: "int", minute: "int" = 0, second: "int" = 0, day: "int" = 8) -> "datetime":
        return datetime(2026, 1, day, hour, minute, second, tzinfo=timezone.utc)

    return _at
