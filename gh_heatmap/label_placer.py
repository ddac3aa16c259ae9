"""
Decide where month and weekday labels go on the grid.
"""

from dataclasses import dataclass

from gh_heatmap.grid_layout import GridLayout

MONTH_NAMES = ["Jan", "Feb", "Mar", "Apr", "May", "Jun",
               "Jul", "Aug", "Sep", "Oct", "Nov", "Dec"]
DAY_NAMES = ["Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat"]

# Only every other row is labelled
LABELLED_ROWS = (1, 3, 5)


@dataclass
class MonthLabel:
    week_index: int
    text: str


@dataclass
class DayLabel:
    row_index: int
    text: str


@dataclass
class LabelPlan:
    month_labels: list[MonthLabel]
    day_labels: list[DayLabel]

    def to_dict(self) -> dict:
        return {
            "month_labels": [
                {"week_index": label.week_index, "text": label.text}
                for label in self.month_labels
            ],
            "day_labels": [
                {"row_index": label.row_index, "text": label.text}
                for label in self.day_labels
            ],
        }


def default_min_spacing(week_width: int) -> int:
    """Minimum pixel gap between month labels, about three columns."""
    return max(week_width * 3, 40)


def month_labels(
    grid: GridLayout,
    min_spacing: float,
    week_width: float = 1,
) -> list[MonthLabel]:
    """
    Place month labels with a greedy left-to-right scan.

    A column is labelled when its first day falls in a month that has not been
    labelled yet and it sits at least `min_spacing` units after the previous
    label. A month that starts too close is tried again on its later columns,
    so only months shorter than the spacing go unlabelled.

    Args:
        grid: Grid from build_grid()
        min_spacing: Minimum distance between labels, in the same units as
            week_width
        week_width: Width of one week column (1 measures in columns)

    Returns:
        Month labels in column order
    """
    labels = []
    last_month = None
    last_label_x = float("-inf")

    for week in grid.weeks:
        month = week.first_day.month
        if month == last_month:
            continue

        x = week.index * week_width
        if x - last_label_x >= min_spacing:
            labels.append(MonthLabel(week_index=week.index, text=MONTH_NAMES[month - 1]))
            last_month = month
            last_label_x = x

    return labels


def day_labels(week_start: int = 0) -> list[DayLabel]:
    """Weekday labels for rows 1, 3 and 5, rotated to the week start."""
    ordered = DAY_NAMES[week_start:] + DAY_NAMES[:week_start]
    return [DayLabel(row_index=row, text=ordered[row]) for row in LABELLED_ROWS]


def build_label_plan(
    grid: GridLayout,
    week_width: int,
    min_spacing: float | None = None,
) -> LabelPlan:
    if min_spacing is None:
        min_spacing = default_min_spacing(week_width)
    return LabelPlan(
        month_labels=month_labels(grid, min_spacing, week_width),
        day_labels=day_labels(grid.week_start),
    )
