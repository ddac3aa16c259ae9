"""
Tests for calendar date helpers.
"""

from datetime import date

import pytest

from gh_heatmap.date_index import (
    DateRange,
    InvalidDateFormat,
    InvalidDateRange,
    add_days,
    align_to_week_start,
    days_between,
    default_range,
    enumerate_dates,
    format_date,
    parse,
    resolve_range,
    weekday,
)


class TestParse:
    """Tests for strict YYYY-MM-DD parsing."""

    def test_parses_valid_date(self):
        assert parse("2024-01-01") == date(2024, 1, 1)

    def test_parses_leap_day(self):
        assert parse("2024-02-29") == date(2024, 2, 29)

    def test_rejects_nonexistent_day(self):
        with pytest.raises(InvalidDateFormat):
            parse("2024-02-30")

    def test_rejects_leap_day_in_common_year(self):
        with pytest.raises(InvalidDateFormat):
            parse("2023-02-29")

    @pytest.mark.parametrize(
        "value",
        ["not-a-date", "2024-1-01", "2024/01/01", "2024-01-01T00:00:00Z", "", " 2024-01-01"],
    )
    def test_rejects_other_shapes(self, value):
        with pytest.raises(InvalidDateFormat):
            parse(value)

    def test_rejects_non_string(self):
        with pytest.raises(InvalidDateFormat):
            parse(None)

    def test_invalid_format_is_value_error(self):
        """Callers catching ValueError also catch format errors."""
        with pytest.raises(ValueError):
            parse("nope")


def test_format_date():
    assert format_date(date(2024, 3, 5)) == "2024-03-05"


def test_parse_format_round_trip():
    day = date(1999, 12, 31)
    assert parse(format_date(day)) == day


def test_add_days_does_not_mutate():
    day = date(2024, 2, 28)
    assert add_days(day, 1) == date(2024, 2, 29)
    assert add_days(day, -28) == date(2024, 1, 31)
    assert day == date(2024, 2, 28)


def test_weekday_zero_is_sunday():
    assert weekday(date(2024, 1, 7)) == 0  # Sunday
    assert weekday(date(2024, 1, 1)) == 1  # Monday
    assert weekday(date(2024, 6, 15)) == 6  # Saturday


def test_days_between():
    assert days_between(date(2024, 1, 1), date(2024, 1, 10)) == 9
    assert days_between(date(2024, 6, 15), date(2024, 6, 15)) == 0


class TestDateRange:
    """Tests for the DateRange value type."""

    def test_start_after_end_raises(self):
        with pytest.raises(InvalidDateRange):
            DateRange(date(2024, 12, 31), date(2024, 1, 1))

    def test_same_day_is_valid(self):
        date_range = DateRange(date(2024, 6, 15), date(2024, 6, 15))
        assert date_range.num_days == 1

    def test_contains_both_ends(self):
        date_range = DateRange(date(2024, 1, 1), date(2024, 1, 3))
        assert date_range.contains(date(2024, 1, 1))
        assert date_range.contains(date(2024, 1, 3))
        assert not date_range.contains(date(2024, 1, 4))


class TestEnumerateDates:
    """Tests for day-range enumeration."""

    def test_inclusive_range(self):
        date_range = DateRange(date(2024, 1, 1), date(2024, 1, 3))
        assert list(enumerate_dates(date_range)) == [
            date(2024, 1, 1),
            date(2024, 1, 2),
            date(2024, 1, 3),
        ]

    def test_single_day(self):
        date_range = DateRange(date(2024, 6, 15), date(2024, 6, 15))
        assert list(enumerate_dates(date_range)) == [date(2024, 6, 15)]

    def test_restartable(self):
        date_range = DateRange(date(2024, 2, 27), date(2024, 3, 1))
        assert list(enumerate_dates(date_range)) == list(enumerate_dates(date_range))
        assert len(list(enumerate_dates(date_range))) == 4


class TestAlignToWeekStart:
    """Tests for week-start alignment."""

    def test_sunday_start(self):
        # 2024-06-15 is a Saturday
        assert align_to_week_start(date(2024, 6, 15), 0) == date(2024, 6, 9)

    def test_monday_start(self):
        assert align_to_week_start(date(2024, 6, 15), 1) == date(2024, 6, 10)

    def test_already_aligned(self):
        assert align_to_week_start(date(2024, 1, 7), 0) == date(2024, 1, 7)
        assert align_to_week_start(date(2024, 1, 1), 1) == date(2024, 1, 1)

    def test_crosses_year_boundary(self):
        assert align_to_week_start(date(2024, 1, 1), 0) == date(2023, 12, 31)

    def test_rejects_other_week_starts(self):
        with pytest.raises(ValueError):
            align_to_week_start(date(2024, 1, 1), 3)


class TestRangeDefaults:
    """Tests for default and resolved ranges."""

    def test_default_range_is_one_year(self):
        date_range = default_range(today=date(2026, 1, 26))
        assert date_range.start == date(2025, 1, 26)
        assert date_range.end == date(2026, 1, 26)

    def test_default_range_from_leap_day(self):
        date_range = default_range(today=date(2024, 2, 29))
        assert date_range.start == date(2023, 2, 28)

    def test_resolve_explicit_bounds(self):
        date_range = resolve_range("2024-01-01", "2024-01-31")
        assert date_range == DateRange(date(2024, 1, 1), date(2024, 1, 31))

    def test_resolve_missing_bounds(self):
        date_range = resolve_range(None, None, today=date(2026, 1, 26))
        assert date_range.end == date(2026, 1, 26)
        assert date_range.start == date(2025, 1, 26)
        assert date_range == default_range(today=date(2026, 1, 26))

    def test_resolve_missing_start_uses_end(self):
        date_range = resolve_range(None, "2024-06-30")
        assert date_range.start == date(2023, 6, 30)

    def test_resolve_inverted_raises(self):
        with pytest.raises(InvalidDateRange):
            resolve_range("2024-12-31", "2024-01-01")

    def test_resolve_malformed_raises(self):
        with pytest.raises(InvalidDateFormat):
            resolve_range("2024-13-01", "2024-12-31")
