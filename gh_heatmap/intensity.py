"""
Map daily counts to heatmap intensity levels.

Levels are relative to the busiest day of the series being shown, so the
same count can land in different levels for different series.
"""

LEVEL_NAMES = ["empty", "level1", "level2", "level3", "level4"]


def bucket(count: int, max_count: int) -> int:
    """
    Calculate intensity level for heatmap coloring.

    Args:
        count: Number of commits for the day
        max_count: Highest daily count in the rendered series

    Returns:
        Level from 0-4:
            0: No commits
            1: up to 25% of the maximum
            2: up to 50%
            3: up to 75%
            4: above 75%
    """
    if count <= 0:
        return 0

    ratio = count / max(max_count, 1)
    if ratio <= 0.25:
        return 1
    elif ratio <= 0.5:
        return 2
    elif ratio <= 0.75:
        return 3
    else:
        return 4
