"""
Date and time helpers

Calendar days (streaks, daily logs, month boundaries) follow the
configured TZ; timestamps are stored in UTC.
"""
from datetime import datetime, date, time, timedelta, timezone
from typing import Optional, Tuple
import pytz

from fittrack.config import settings

LOCAL_TZ = pytz.timezone(settings.TZ)


def now_utc() -> datetime:
    """Current aware UTC time"""
    return datetime.now(timezone.utc)


def now_local() -> datetime:
    """Current time in the configured timezone"""
    return datetime.now(LOCAL_TZ)


def today_local() -> date:
    """Current calendar date in the configured timezone"""
    return now_local().date()


def to_local(dt: datetime) -> datetime:
    """Convert a timestamp to the configured timezone (naive values are UTC)"""
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(LOCAL_TZ)


def local_date(dt: datetime) -> date:
    """Calendar date of a timestamp in the configured timezone"""
    return to_local(dt).date()


def start_of_day(d: date) -> datetime:
    """Local midnight of ``d`` as an aware UTC datetime"""
    return LOCAL_TZ.localize(datetime.combine(d, time.min)).astimezone(timezone.utc)


def day_bounds(d: date) -> Tuple[datetime, datetime]:
    """[start, end) of a local calendar day, in UTC"""
    return start_of_day(d), start_of_day(d + timedelta(days=1))


def range_bounds(start: date, end: date) -> Tuple[datetime, datetime]:
    """[start, end) covering every local day from ``start`` to ``end`` inclusive"""
    return start_of_day(start), start_of_day(end + timedelta(days=1))


def month_start(d: date) -> date:
    """First day of the month containing ``d``"""
    return d.replace(day=1)


def previous_month_start(d: date) -> date:
    """First day of the month before the one containing ``d``"""
    return (month_start(d) - timedelta(days=1)).replace(day=1)


def subtract_months(d, months: int):
    """Same day ``months`` earlier, clamped to the end of shorter months; keeps the time of datetimes"""
    year, month = divmod(d.year * 12 + d.month - 1 - months, 12)
    month += 1
    for day in (d.day, 30, 29, 28):
        try:
            return d.replace(year=year, month=month, day=day)
        except ValueError:
            continue
    return d.replace(year=year, month=month, day=28)


def age_on(birth: date, today: Optional[date] = None) -> int:
    """Age in full years"""
    today = today or today_local()
    years = today.year - birth.year
    if (today.month, today.day) < (birth.month, birth.day):
        years -= 1
    return years
