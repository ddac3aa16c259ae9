"""
Lay out a date range as a week-aligned contribution grid.

The grid is a sequence of week columns with exactly 7 day cells each. Cells
outside the requested range are placeholders that keep the grid rectangular.
"""

import math
from dataclasses import dataclass, field
from datetime import date

from gh_heatmap.activity_aggregator import max_count, total_count
from gh_heatmap.date_index import (
    DateRange,
    add_days,
    align_to_week_start,
    days_between,
    format_date,
)
from gh_heatmap.intensity import bucket

DAYS_PER_WEEK = 7


@dataclass
class DayCell:
    """One day in the grid. count and level are None for placeholder cells."""

    date: date
    in_range: bool
    week_index: int
    row: int
    count: int | None = None
    level: int | None = None

    def to_dict(self) -> dict:
        return {
            "date": format_date(self.date),
            "in_range": self.in_range,
            "week_index": self.week_index,
            "row": self.row,
            "count": self.count,
            "level": self.level,
        }


@dataclass
class WeekColumn:
    index: int
    days: list[DayCell] = field(default_factory=list)

    @property
    def first_day(self) -> date:
        return self.days[0].date


@dataclass
class GridGeometry:
    """Pixel geometry a renderer needs to place cells and labels."""

    weeks: int
    cell_size: int = 10
    cell_gap: int = 3
    day_label_width: int = 32
    month_label_height: int = 18
    header_height: int = 24
    legend_height: int = 22

    @property
    def week_width(self) -> int:
        return self.cell_size + self.cell_gap

    @property
    def grid_offset_x(self) -> int:
        return self.day_label_width

    @property
    def grid_offset_y(self) -> int:
        return self.header_height + self.month_label_height

    @property
    def grid_width(self) -> int:
        return self.weeks * self.week_width

    @property
    def grid_height(self) -> int:
        return DAYS_PER_WEEK * self.week_width

    @property
    def width(self) -> int:
        return self.grid_offset_x + self.grid_width + 2

    @property
    def height(self) -> int:
        return self.grid_offset_y + self.grid_height + self.legend_height + 8

    def cell_position(self, week_index: int, row: int) -> tuple[int, int]:
        return (
            self.grid_offset_x + week_index * self.week_width,
            self.grid_offset_y + row * self.week_width,
        )


@dataclass
class GridLayout:
    date_range: DateRange
    week_start: int
    weeks: list[WeekColumn]
    max_count: int
    total_count: int

    def in_range_cells(self) -> list[DayCell]:
        return [cell for week in self.weeks for cell in week.days if cell.in_range]

    def to_dict(self) -> dict:
        return {
            "start": format_date(self.date_range.start),
            "end": format_date(self.date_range.end),
            "week_start": self.week_start,
            "max_count": self.max_count,
            "total_count": self.total_count,
            "weeks": [
                {
                    "index": week.index,
                    "days": [cell.to_dict() for cell in week.days],
                }
                for week in self.weeks
            ],
        }


def week_count(date_range: DateRange, week_start: int) -> int:
    """Number of week columns needed to cover the range."""
    grid_start = align_to_week_start(date_range.start, week_start)
    return math.ceil((days_between(grid_start, date_range.end) + 1) / DAYS_PER_WEEK)


def build_grid(
    series: dict[str, int],
    date_range: DateRange,
    week_start: int = 0,
) -> GridLayout:
    """
    Build the week-aligned grid for a series over a date range.

    Args:
        series: Date -> count mapping; missing dates count as zero
        date_range: Inclusive range to display
        week_start: 0 for Sunday-first weeks, 1 for Monday-first weeks

    Returns:
        GridLayout whose first column starts on the week-start day at or
        before the range start
    """
    # Levels are relative to the busiest day of the whole series
    series_max = max_count(series)

    grid_start = align_to_week_start(date_range.start, week_start)
    weeks = []

    for index in range(week_count(date_range, week_start)):
        cursor = add_days(grid_start, index * DAYS_PER_WEEK)
        week = WeekColumn(index=index)
        for row in range(DAYS_PER_WEEK):
            day = add_days(cursor, row)
            cell = DayCell(
                date=day,
                in_range=date_range.contains(day),
                week_index=week.index,
                row=row,
            )
            if cell.in_range:
                cell.count = series.get(format_date(day), 0)
                cell.level = bucket(cell.count, series_max)
            week.days.append(cell)
        weeks.append(week)

    return GridLayout(
        date_range=date_range,
        week_start=week_start,
        weeks=weeks,
        max_count=series_max,
        total_count=total_count(series),
    )


def build_geometry(
    grid: GridLayout,
    cell_size: int = 10,
    cell_gap: int = 3,
    show_day_labels: bool = True,
    show_month_labels: bool = True,
    show_header: bool = True,
    show_legend: bool = True,
) -> GridGeometry:
    """Derive pixel geometry for a grid from display options."""
    return GridGeometry(
        weeks=len(grid.weeks),
        cell_size=cell_size,
        cell_gap=cell_gap,
        day_label_width=32 if show_day_labels else 0,
        month_label_height=18 if show_month_labels else 0,
        header_height=24 if show_header else 0,
        legend_height=22 if show_legend else 0,
    )
