"""When a suspended account is usable again.

The unsuspend job runs daily at 06:51 UTC; a suspension is shown as lifted
twelve hours later, at 18:51 UTC, on the stored end date or the day after.
"""

import logging
from dataclasses import dataclass
from datetime import UTC, date, datetime, time, timedelta
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

logger = logging.getLogger(__name__)

UNBAN_CUTOFF = time(18, 51, 0, tzinfo=UTC)

DEFAULT_TIME_FORMAT = "%a %d %b %Y %I:%M%p %Z"


def _as_utc(suspended_until: datetime | date) -> datetime:
    """Interpret a stored end value as a UTC instant.

    A bare date lasts the whole day, so it ends at the following midnight UTC.
    """
    if isinstance(suspended_until, datetime):
        if suspended_until.tzinfo is None:
            return suspended_until.replace(tzinfo=UTC)
        return suspended_until.astimezone(UTC)
    return datetime.combine(suspended_until + timedelta(days=1), time.min, tzinfo=UTC)


def unban_cutoff(day: date) -> datetime:
    """18:51:00 UTC on the given day."""
    return datetime.combine(day, UNBAN_CUTOFF)


def effective_unban_instant(suspended_until: datetime | date) -> datetime:
    """Return the UTC instant a suspension is considered over.

    The result is always 18:51:00 UTC, on the end date when the stored end is
    at or before that day's cutoff and on the following day otherwise. A
    date-only end therefore always lands on the day after.
    """
    end = _as_utc(suspended_until)
    cutoff = unban_cutoff(end.date())
    if end > cutoff:
        return cutoff + timedelta(days=1)
    return cutoff


def localize(instant: datetime, time_zone: str | None) -> datetime:
    """Convert a UTC instant to the viewer's zone; unknown zones render as UTC."""
    if not time_zone:
        return instant.astimezone(UTC)
    try:
        return instant.astimezone(ZoneInfo(time_zone))
    except (ZoneInfoNotFoundError, ValueError):
        logger.warning("Unknown time zone %r, rendering in UTC", time_zone)
        return instant.astimezone(UTC)


def format_in_zone(
    instant: datetime,
    time_zone: str | None,
    fmt: str = DEFAULT_TIME_FORMAT,
) -> str:
    return localize(instant, time_zone).strftime(fmt)


@dataclass(frozen=True)
class SuspensionWindow:
    """Derived, never persisted: stored end value and the effective unban instant."""

    suspended_until: datetime | date
    unban_at: datetime

    @classmethod
    def for_end(cls, suspended_until: datetime | date) -> "SuspensionWindow":
        return cls(
            suspended_until=suspended_until,
            unban_at=effective_unban_instant(suspended_until),
        )

    def is_over(self, now: datetime) -> bool:
        return now >= self.unban_at

    def display(self, time_zone: str | None, fmt: str = DEFAULT_TIME_FORMAT) -> str:
        return format_in_zone(self.unban_at, time_zone, fmt)
