"""
Calendar date helpers for the contribution grid.

All dates are timezone-free calendar days, serialized as YYYY-MM-DD and
interpreted as midnight UTC.
"""

import re
from dataclasses import dataclass
from datetime import date, datetime, timedelta, timezone
from typing import Iterator, Optional

DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")

SUNDAY = 0
MONDAY = 1


class InvalidDateFormat(ValueError):
    """Raised when a string is not a real YYYY-MM-DD calendar date."""

    pass


class InvalidDateRange(ValueError):
    """Raised when a date range starts after it ends."""

    pass


@dataclass(frozen=True)
class DateRange:
    """Inclusive range of calendar dates."""

    start: date
    end: date

    def __post_init__(self):
        if self.start > self.end:
            raise InvalidDateRange(
                f"Start date {format_date(self.start)} is after end date "
                f"{format_date(self.end)}"
            )

    @property
    def num_days(self) -> int:
        return days_between(self.start, self.end) + 1

    def contains(self, day: date) -> bool:
        return self.start <= day <= self.end


def parse(value: str) -> date:
    """
    Parse a strict YYYY-MM-DD string.

    Args:
        value: Date string

    Returns:
        The calendar date

    Raises:
        InvalidDateFormat: If the string has another shape or names a day
            that does not exist (e.g. 2024-02-30)
    """
    if not isinstance(value, str) or not DATE_PATTERN.match(value):
        raise InvalidDateFormat(f"Invalid date: {value!r}. Expected YYYY-MM-DD.")

    try:
        return datetime.strptime(value, "%Y-%m-%d").date()
    except ValueError as e:
        raise InvalidDateFormat(f"Invalid date: {value!r}. {e}") from e


def format_date(day: date) -> str:
    """Format a calendar date as YYYY-MM-DD."""
    return day.strftime("%Y-%m-%d")


def add_days(day: date, n: int) -> date:
    return day + timedelta(days=n)


def weekday(day: date) -> int:
    """Day of week with 0 = Sunday, 6 = Saturday."""
    return (day.weekday() + 1) % 7


def days_between(start: date, end: date) -> int:
    return (end - start).days


def enumerate_dates(date_range: DateRange) -> Iterator[date]:
    """Yield every date in the range, oldest first, both ends included."""
    current = date_range.start
    while current <= date_range.end:
        yield current
        current = add_days(current, 1)


def align_to_week_start(day: date, week_start: int) -> date:
    """
    Walk back to the nearest day on or before `day` that starts a week.

    Args:
        day: Any calendar date
        week_start: 0 for Sunday-first weeks, 1 for Monday-first weeks

    Returns:
        Date whose weekday equals week_start, never after `day`
    """
    if week_start not in (SUNDAY, MONDAY):
        raise ValueError(f"week_start must be 0 (Sunday) or 1 (Monday), got {week_start!r}")

    current = day
    while weekday(current) != week_start:
        current = add_days(current, -1)
    return current


def utc_today() -> date:
    return datetime.now(timezone.utc).date()


def _one_year_before(day: date) -> date:
    try:
        return day.replace(year=day.year - 1)
    except ValueError:
        # Feb 29 has no counterpart in the previous year
        return day.replace(year=day.year - 1, day=28)


def default_range(today: Optional[date] = None) -> DateRange:
    """The last year of activity, ending today (UTC)."""
    if today is None:
        today = utc_today()
    return DateRange(_one_year_before(today), today)


def resolve_range(
    start: Optional[str] = None,
    end: Optional[str] = None,
    today: Optional[date] = None,
) -> DateRange:
    """
    Build a DateRange from optional YYYY-MM-DD strings.

    A missing end defaults to today, a missing start to one year before end.

    Raises:
        InvalidDateFormat: If either string is malformed
        InvalidDateRange: If start is after end
    """
    if not start and not end:
        return default_range(today)
    end_date = parse(end) if end else (today or utc_today())
    start_date = parse(start) if start else _one_year_before(end_date)
    return DateRange(start_date, end_date)
