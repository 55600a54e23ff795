from datetime import datetime
from zoneinfo import ZoneInfo

import pytest

from reminders.services.clock import FixedClock, reset_clock
from reminders.services.parser import reset_parser

UTC = ZoneInfo("UTC")


@pytest.fixture(autouse=True)
def _reset_singletons():
    reset_clock()
    reset_parser()
    yield
    reset_clock()
    reset_parser()


@pytest.fixture
def clock_at():
    """Factory for clocks pinned to a given moment (UTC unless tz is given)."""

    def _make(year, month, day, hour=9, minute=0, tz=UTC):
        return FixedClock(datetime(year, month, day, hour, minute, tzinfo=tz))

    return _make


@pytest.fixture
def tuesday(clock_at):
    """Tuesday 2024-01-16, 09:00 UTC."""
    return clock_at(2024, 1, 16)
