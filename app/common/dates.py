"""
Business-day helpers.

The workshop runs on a fixed UTC offset (PKT, UTC+5 by default). Timestamps
are stored in UTC; day buckets for dashboards, reports and reminders are
computed in the business timezone. Naive datetimes are read as UTC.
"""
from datetime import date, datetime, time, timedelta, timezone
from typing import Optional, Tuple

from app.core.config import settings


def business_tz() -> timezone:
    return timezone(timedelta(hours=settings.BUSINESS_UTC_OFFSET_HOURS))


def as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def to_business_date(value: datetime) -> date:
    return as_utc(value).astimezone(business_tz()).date()


def business_now(now: Optional[datetime] = None) -> datetime:
    now = as_utc(now) if now else datetime.now(timezone.utc)
    return now.astimezone(business_tz())


def business_today(now: Optional[datetime] = None) -> date:
    return business_now(now).date()


def business_day_bounds(day: date) -> Tuple[datetime, datetime]:
    """[start, end) of a business day, expressed in UTC."""
    start = datetime.combine(day, time.min, tzinfo=business_tz()).astimezone(timezone.utc)
    return start, start + timedelta(days=1)


def period_start(period: str, now: Optional[datetime] = None) -> datetime:
    """Start of a reporting period (today, week, month, year) in UTC."""
    local_now = business_now(now)
    today = local_now.date()
    if period == "today":
        start_day = today
    elif period == "week":
        start_day = today - timedelta(days=7)
    elif period == "year":
        start_day = today.replace(month=1, day=1)
    else:
        start_day = today.replace(day=1)
    return business_day_bounds(start_day)[0]


def month_start(day: date, months_back: int) -> date:
    year, month = day.year, day.month - months_back
    while month <= 0:
        month += 12
        year -= 1
    return date(year, month, 1)
