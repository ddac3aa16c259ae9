"""
Color themes for rendered heatmaps.

Palettes match GitHub's own contribution graph colors.
"""

from gh_heatmap.intensity import LEVEL_NAMES

_GRID = {"gap": 3, "cell_size": 10, "border_radius": 2}
_TOOLTIP = {"background": "#24292f", "text": "#ffffff", "border": "transparent"}

THEMES = {
    "dark": {
        "colors": {
            "empty": "#161b22",
            "level1": "#0e4429",
            "level2": "#006d32",
            "level3": "#26a641",
            "level4": "#39d353",
        },
        "text": "#8b949e",
        "grid": _GRID,
        "tooltip": _TOOLTIP,
    },
    "light": {
        "colors": {
            "empty": "#ebedf0",
            "level1": "#9be9a8",
            "level2": "#40c463",
            "level3": "#30a14e",
            "level4": "#216e39",
        },
        "text": "#57606a",
        "grid": _GRID,
        "tooltip": _TOOLTIP,
    },
    "github": {
        "colors": {
            "empty": "#ebedf0",
            "level1": "#9be9a8",
            "level2": "#40c463",
            "level3": "#30a14e",
            "level4": "#216e39",
        },
        "text": "#57606a",
        "grid": _GRID,
        "tooltip": _TOOLTIP,
    },
    "minimal": {
        "colors": {
            "empty": "#f6f8fa",
            "level1": "#d0d7de",
            "level2": "#afb8c1",
            "level3": "#8c959f",
            "level4": "#6e7781",
        },
        "text": "#8b949e",
        "grid": _GRID,
        "tooltip": _TOOLTIP,
    },
}

DEFAULT_THEME = "dark"


def resolve_theme(theme: str | dict | None) -> dict:
    """
    Look up a theme by name, or pass a custom theme dict through.

    Unknown names fall back to the dark theme.
    """
    if not theme:
        return THEMES[DEFAULT_THEME]
    if isinstance(theme, str):
        return THEMES.get(theme, THEMES[DEFAULT_THEME])
    return theme


def level_colors(theme: dict) -> list[str]:
    """Colors for levels 0-4, in order."""
    colors = theme["colors"]
    return [colors[name] for name in LEVEL_NAMES]
