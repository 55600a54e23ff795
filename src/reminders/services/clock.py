"""Clock service: the parser's only view of "now".

Everything that depends on the current date or time asks a Clock instead of
calling datetime.now() directly, so tests can pin a moment with FixedClock.
All dates handed out are local calendar dates in the clock's timezone.
"""

import logging
from datetime import date, datetime, timedelta, tzinfo
from zoneinfo import ZoneInfo

from reminders.config import settings

logger = logging.getLogger(__name__)


def resolve_timezone(name: str | None) -> tzinfo | None:
    """Resolve an IANA timezone name.

    Returns None for an empty name, meaning the system local zone.
    Unknown names fall back to UTC.
    """
    if not name:
        return None
    try:
        return ZoneInfo(name)
    except (KeyError, ValueError):
        logger.warning(f"Unknown timezone {name!r}, falling back to UTC")
        return ZoneInfo("UTC")


class Clock:
    """Wall-clock time in the user's timezone."""

    def __init__(self, timezone: str | None = None):
        """Initialize clock.

        Args:
            timezone: IANA timezone name. Defaults to settings.user_timezone,
                and to the system local zone when that is empty too.
        """
        self._timezone_name = timezone if timezone is not None else settings.user_timezone
        self._tz = resolve_timezone(self._timezone_name)

    @property
    def timezone_name(self) -> str:
        return self._timezone_name or "local"

    def now(self) -> datetime:
        """Current moment, timezone-aware."""
        if self._tz is None:
            return datetime.now().astimezone()
        return datetime.now(self._tz)

    def today(self) -> date:
        """Current local calendar date."""
        return self.now().date()

    def after(self, delta: timedelta) -> datetime:
        """The local moment `delta` from now.

        Computed on the absolute timeline so a DST change in between shifts
        the wall-clock result rather than the elapsed time.
        """
        current = self.now()
        moment = (current.astimezone(ZoneInfo("UTC")) + delta).astimezone(current.tzinfo)
        if self._tz is None:
            # Local offsets can differ on the far side of a DST change
            moment = moment.astimezone()
        return moment


class FixedClock(Clock):
    """A clock pinned to one moment."""

    def __init__(self, moment: datetime):
        """Pin the clock.

        Args:
            moment: The moment to report as now. A naive datetime is read as
                wall-clock time in UTC, so its calendar date is kept as given.
        """
        if moment.tzinfo is None:
            moment = moment.replace(tzinfo=ZoneInfo("UTC"))
        self._moment = moment
        self._tz = moment.tzinfo
        self._timezone_name = getattr(moment.tzinfo, "key", None) or moment.tzname() or "UTC"

    def now(self) -> datetime:
        return self._moment


# Module-level singleton
_clock: Clock | None = None


def get_clock() -> Clock:
    """Get the singleton Clock instance."""
    global _clock
    if _clock is None:
        _clock = Clock()
    return _clock


def set_clock(clock: Clock | None) -> None:
    """Replace the singleton (None restores the default on next access)."""
    global _clock
    _clock = clock


def reset_clock() -> None:
    """Reset the singleton (useful for testing)."""
    set_clock(None)
