from __future__ import annotations

import calendar
from datetime import date, datetime, timedelta, timezone
from typing import Optional, Tuple

from tourdesk.core.config import get_settings
from tourdesk.core.errors import BadRequestError


def civil_timezone() -> timezone:
    hours = get_settings().civil_utc_offset_hours
    return timezone(timedelta(hours=hours), name=f"UTC{hours:+d}")


def now_utc() -> datetime:
    return datetime.now(timezone.utc)


def to_civil_wall_clock(instant: datetime) -> datetime:
    """Return ``instant`` as naive wall-clock time in the civil calendar."""
    if instant.tzinfo is None:
        instant = instant.replace(tzinfo=timezone.utc)
    return instant.astimezone(civil_timezone()).replace(tzinfo=None)


def to_stored_wall_clock(value: datetime) -> datetime:
    """Stored instants are compared by their UTC wall-clock value.

    A tour entered for ``2024-06-01`` is persisted as midnight UTC and means the
    civil day 2024-06-01, so the UTC fields are read as local ones.
    """
    if value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def civil_today(now: Optional[datetime] = None) -> date:
    return to_civil_wall_clock(now or now_utc()).date()


def month_bounds(year: int, month: int) -> Tuple[datetime, datetime]:
    if month < 1 or month > 12 or year < 1:
        raise BadRequestError("Invalid month or year")
    last_day = calendar.monthrange(year, month)[1]
    start = datetime(year, month, 1, tzinfo=timezone.utc)
    end = datetime(year, month, last_day, 23, 59, 59, 999000, tzinfo=timezone.utc)
    return start, end


def validate_date_window(start_date: Optional[date], end_date: Optional[date]) -> None:
    if start_date and end_date and start_date > end_date:
        raise BadRequestError("startDate must not be after endDate")


def ensure_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Treat naive request datetimes as UTC so stored instants stay comparable."""
    if value is None or value.tzinfo is not None:
        return value
    return value.replace(tzinfo=timezone.utc)
