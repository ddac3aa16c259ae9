"""
Aggregate raw commit timestamps into per-day activity counts.

A series is a plain dict mapping YYYY-MM-DD to a positive count. Days with
no activity are simply absent; lookups treat a missing date as zero.
"""

import logging
import math
from datetime import datetime, timezone
from typing import Iterable

from gh_heatmap.date_index import (
    DATE_PATTERN,
    DateRange,
    InvalidDateFormat,
    enumerate_dates,
    format_date,
    parse,
)

logger = logging.getLogger(__name__)


def _event_timestamp(event: dict) -> str | None:
    """Pull the timestamp string out of a raw event or GitHub commit object."""
    for key in ("timestamp", "timestampUTC"):
        value = event.get(key)
        if value:
            return value

    # GitHub REST commit payload: {"commit": {"author": {"date": ...}}}
    commit = event.get("commit") or {}
    author = commit.get("author") or {}
    return author.get("date")


def timestamp_to_date(timestamp: str) -> str | None:
    """
    Convert a timestamp to its UTC calendar date.

    Args:
        timestamp: ISO-8601 timestamp (e.g. 2024-01-01T10:00:00Z) or a bare
            YYYY-MM-DD date

    Returns:
        Date in YYYY-MM-DD format, or None if the timestamp is unusable
    """
    if not isinstance(timestamp, str) or not timestamp:
        return None

    if DATE_PATTERN.match(timestamp):
        try:
            return format_date(parse(timestamp))
        except InvalidDateFormat:
            return None

    try:
        moment = datetime.fromisoformat(timestamp.replace("Z", "+00:00"))
    except ValueError:
        # Forms fromisoformat rejects (e.g. a +0000 offset) keep their written date
        prefix = timestamp[:10]
        if not DATE_PATTERN.match(prefix):
            return None
        try:
            return format_date(parse(prefix))
        except InvalidDateFormat:
            return None

    if moment.tzinfo is not None:
        moment = moment.astimezone(timezone.utc)
    return format_date(moment.date())


def aggregate_by_date(events: Iterable[dict]) -> dict[str, int]:
    """
    Count events per UTC calendar date.

    Args:
        events: Raw events, each with a `timestamp` (or `timestampUTC`) key,
            or GitHub commit objects carrying `commit.author.date`

    Returns:
        Series of date -> count, keys in ascending date order. Dates with no
        events are not present.
    """
    counts: dict[str, int] = {}
    skipped = 0

    for event in events:
        day = timestamp_to_date(_event_timestamp(event or {}))
        if day is None:
            skipped += 1
            continue
        counts[day] = counts.get(day, 0) + 1

    if skipped:
        logger.debug("Skipped %d events without a usable timestamp", skipped)

    return {day: counts[day] for day in sorted(counts)}


def aggregate_commits(commits: list[dict]) -> dict[str, int]:
    """Aggregate raw GitHub commit objects by their author date."""
    return aggregate_by_date(commits)


def count_authors(commits: list[dict]) -> list[dict]:
    """
    Count commits per author.

    Args:
        commits: Raw GitHub commit objects

    Returns:
        List of {login, commits} sorted by commit count, busiest first
    """
    authors: dict[str, int] = {}
    for commit in commits:
        if timestamp_to_date(_event_timestamp(commit)) is None:
            continue
        login = (
            (commit.get("author") or {}).get("login")
            or ((commit.get("commit") or {}).get("author") or {}).get("name")
            or "unknown"
        )
        authors[login] = authors.get(login, 0) + 1

    ranked = [{"login": login, "commits": count} for login, count in authors.items()]
    ranked.sort(key=lambda a: a["commits"], reverse=True)
    return ranked


def merge(series_list: Iterable[dict[str, int]]) -> dict[str, int]:
    """
    Sum several series into one.

    For each date present in any input, the result holds the sum of that
    date's counts across all inputs. Merging nothing gives an empty series.
    """
    merged: dict[str, int] = {}
    for series in series_list:
        for day, count in series.items():
            merged[day] = merged.get(day, 0) + count
    return {day: merged[day] for day in sorted(merged)}


def max_count(series: dict[str, int]) -> int:
    return max(series.values(), default=0)


def total_count(series: dict[str, int]) -> int:
    return sum(series.values())


def series_to_list(series: dict[str, int]) -> list[dict]:
    """Convert a series to a date-sorted list of {date, count} points."""
    return [{"date": day, "count": series[day]} for day in sorted(series)]


def series_from_list(points: Iterable[dict]) -> dict[str, int]:
    """
    Build a series from {date, count} points.

    Raises:
        InvalidDateFormat: If a point's date is not YYYY-MM-DD
        ValueError: If a count is negative
    """
    series: dict[str, int] = {}
    for point in points:
        day = format_date(parse(point["date"]))
        count = int(point["count"])
        if count < 0:
            raise ValueError(f"Count for {day} must be non-negative, got {count}")
        series[day] = series.get(day, 0) + count
    return {day: series[day] for day in sorted(series)}


def _round_one_decimal(value: float) -> float:
    # Half-up, so 0.25 -> 0.3 rather than banker's 0.2
    return math.floor(value * 10 + 0.5) / 10


def summarize(series: dict[str, int], date_range: DateRange) -> dict:
    """
    Calculate summary statistics for a series over a date range.

    Every date in the range is visited; dates missing from the series count
    as zero and break streaks.

    Args:
        series: Date -> count mapping
        date_range: Inclusive range to summarize

    Returns:
        Dictionary with:
        - totalCommits: Sum of counts in the range
        - activeDays: Dates in the range with a nonzero count
        - longestStreak: Longest run of consecutive active dates
        - currentStreak: Run of active dates ending at the range end
        - averageCommitsPerDay: totalCommits / days in range, one decimal
        - mostActiveDay: {date, count} of the busiest date, earliest on ties
    """
    total = 0
    active_days = 0
    longest = 0
    run = 0
    busiest = {"date": "", "count": 0}
    num_days = 0

    for day in enumerate_dates(date_range):
        num_days += 1
        day_str = format_date(day)
        count = series.get(day_str, 0)
        total += count

        if count > 0:
            active_days += 1
            run += 1
            longest = max(longest, run)
            # Strictly greater keeps the earliest date on ties
            if count > busiest["count"]:
                busiest = {"date": day_str, "count": count}
        else:
            run = 0

    average = _round_one_decimal(total / num_days) if num_days else 0

    return {
        "totalCommits": total,
        "activeDays": active_days,
        "longestStreak": longest,
        "currentStreak": run,
        "averageCommitsPerDay": average,
        "mostActiveDay": busiest,
    }
