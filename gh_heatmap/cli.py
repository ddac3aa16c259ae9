"""
CLI display functions for gh-heatmap.
"""

from gh_heatmap.grid_layout import GridLayout
from gh_heatmap.label_placer import build_label_plan

LEVEL_GLYPHS = [" . ", "[-]", "[=]", "[#]", "[@]"]

# Each grid column is 3 characters wide in the text calendar
COLUMN_WIDTH = 3


def display_summary(summary: dict) -> None:
    """
    Display activity summary statistics to the console.

    Args:
        summary: Dictionary from summarize() containing:
            - totalCommits, activeDays, longestStreak, currentStreak: int
            - averageCommitsPerDay: float
            - mostActiveDay: {date, count}
    """
    total = summary["totalCommits"]
    current = summary["currentStreak"]
    longest = summary["longestStreak"]
    busiest = summary["mostActiveDay"]

    active = summary["activeDays"]
    commit_word = "commit" if total == 1 else "commits"
    day_word = "day" if active == 1 else "days"
    print(f"📊 {total} {commit_word} on {active} active {day_word}")
    print(f"   Average:        {summary['averageCommitsPerDay']} per day")
    print(f"🔥 Current streak: {current} day{'s' if current != 1 else ''}")
    print(f"   Longest streak: {longest} day{'s' if longest != 1 else ''}")
    if busiest["date"]:
        print(f"   Busiest day:    {busiest['date']} ({busiest['count']})")
    print()


def render_calendar(grid: GridLayout) -> list[str]:
    """
    Render a grid as text lines: a month header, then one line per weekday.

    Args:
        grid: Grid from build_grid()

    Returns:
        Lines of text, without trailing newlines
    """
    # Three-letter month names need two columns of clearance
    plan = build_label_plan(grid, week_width=COLUMN_WIDTH, min_spacing=2 * COLUMN_WIDTH)
    gutter = "     "

    header = [" "] * (len(grid.weeks) * COLUMN_WIDTH)
    for label in plan.month_labels:
        start = label.week_index * COLUMN_WIDTH
        for i, char in enumerate(label.text):
            if start + i < len(header):
                header[start + i] = char
    lines = [gutter + "".join(header).rstrip()]

    day_texts = {label.row_index: label.text for label in plan.day_labels}
    for row in range(7):
        row_label = day_texts.get(row, "")
        glyphs = [
            LEVEL_GLYPHS[week.days[row].level] if week.days[row].in_range else None
            for week in grid.weeks
        ]
        # Trailing out-of-range columns are dropped, painted glyphs stay whole
        while glyphs and glyphs[-1] is None:
            glyphs.pop()
        row_text = f"{row_label:<4} " + "".join(glyph or " " * COLUMN_WIDTH for glyph in glyphs)
        lines.append(row_text if glyphs else row_text.rstrip())

    return lines


def display_calendar(grid: GridLayout) -> None:
    """Display a text-based activity calendar with a Less/More legend."""
    print("Activity:")
    for line in render_calendar(grid):
        print(line)
    print("     Less " + " ".join(LEVEL_GLYPHS) + " More")
    print()


def display_authors(authors: list[dict], limit: int = 5) -> None:
    """Display the busiest commit authors."""
    if not authors:
        return
    print("Top authors:")
    for author in authors[:limit]:
        plural = "commit" if author["commits"] == 1 else "commits"
        print(f"  {author['login']:<30} {author['commits']} {plural}")
    print()
