"""
Render a contribution heatmap as a standalone SVG document.

The SVG needs no external CSS, JS or fonts, so it can be served as
image/svg+xml or embedded in a README.
"""

from dataclasses import dataclass

from jinja2 import Environment

from gh_heatmap.date_index import format_date, resolve_range
from gh_heatmap.grid_layout import build_geometry, build_grid
from gh_heatmap.label_placer import MONTH_NAMES, build_label_plan
from gh_heatmap.themes import level_colors, resolve_theme

DEFAULT_FONT_FAMILY = (
    "-apple-system, BlinkMacSystemFont, 'Segoe UI', 'Noto Sans', "
    "Helvetica, Arial, sans-serif"
)

SVG_TEMPLATE = """\
<svg xmlns="http://www.w3.org/2000/svg" width="{{ g.width }}" height="{{ g.height }}" \
viewBox="0 0 {{ g.width }} {{ g.height }}" font-family="{{ font_family }}">
{% if background %}<rect width="100%" height="100%" fill="{{ background }}" rx="6"/>
{% endif %}
{%- if header %}<text x="{{ g.grid_offset_x }}" y="16" fill="{{ text_color }}" font-size="14" \
font-weight="normal">{{ header }}</text>
{% endif %}
{%- for label in month_labels %}<text x="{{ label.x }}" y="{{ g.header_height + 12 }}" \
fill="{{ text_color }}" font-size="12">{{ label.text }}</text>
{% endfor %}
{%- for label in day_labels %}<text x="{{ g.day_label_width - 6 }}" y="{{ label.y }}" \
fill="{{ text_color }}" font-size="12" text-anchor="end">{{ label.text }}</text>
{% endfor %}
{%- for cell in cells %}<rect x="{{ cell.x }}" y="{{ cell.y }}" width="{{ g.cell_size }}" \
height="{{ g.cell_size }}" rx="{{ radius }}" ry="{{ radius }}" fill="{{ cell.color }}" \
data-date="{{ cell.date }}" data-count="{{ cell.count }}"><title>{{ cell.title }}</title></rect>
{% endfor %}
{%- if legend %}<text x="{{ legend.x }}" y="{{ legend.text_y }}" fill="{{ text_color }}" \
font-size="11">Less</text>
{% for swatch in legend.swatches %}<rect x="{{ swatch.x }}" y="{{ legend.y }}" \
width="{{ g.cell_size }}" height="{{ g.cell_size }}" rx="{{ radius }}" ry="{{ radius }}" \
fill="{{ swatch.color }}"/>
{% endfor %}<text x="{{ legend.more_x }}" y="{{ legend.text_y }}" fill="{{ text_color }}" \
font-size="11">More</text>
{% endif %}</svg>
"""

_env = Environment(autoescape=True, keep_trailing_newline=True)
_template = _env.from_string(SVG_TEMPLATE)


@dataclass
class SVGOptions:
    """Display options for render_svg()."""

    theme: str | dict = "dark"
    cell_size: int = 10
    cell_gap: int = 3
    border_radius: int = 2
    week_start: int = 0
    show_month_labels: bool = True
    show_day_labels: bool = True
    show_legend: bool = True
    show_header: bool = True
    header_text: str = "{{count}} contributions in the last year"
    background_color: str = "transparent"
    font_family: str = DEFAULT_FONT_FAMILY
    start_date: str | None = None
    end_date: str | None = None


def format_tooltip(date_str: str, count: int) -> str:
    """Tooltip text such as '3 contributions on Jan 5, 2024'."""
    year, month, day = (int(part) for part in date_str.split("-"))
    formatted = f"{MONTH_NAMES[month - 1]} {day}, {year}"

    if count == 0:
        return f"No contributions on {formatted}"
    plural = "contribution" if count == 1 else "contributions"
    return f"{count} {plural} on {formatted}"


def render_svg(series: dict[str, int], options: SVGOptions | None = None) -> str:
    """
    Render a series as a GitHub-style contribution heatmap.

    Args:
        series: Date -> count mapping
        options: Display options; defaults to the dark theme over the last year

    Returns:
        SVG document as a string

    Raises:
        InvalidDateFormat: If start_date or end_date is malformed
        InvalidDateRange: If start_date is after end_date
    """
    if options is None:
        options = SVGOptions()

    theme = resolve_theme(options.theme)
    colors = level_colors(theme)
    text_color = theme.get("text", "#8b949e")

    date_range = resolve_range(options.start_date, options.end_date)
    grid = build_grid(series, date_range, options.week_start)
    geometry = build_geometry(
        grid,
        cell_size=options.cell_size,
        cell_gap=options.cell_gap,
        show_day_labels=options.show_day_labels,
        show_month_labels=options.show_month_labels,
        show_header=options.show_header,
        show_legend=options.show_legend,
    )
    plan = build_label_plan(grid, geometry.week_width)

    cells = []
    for cell in grid.in_range_cells():
        x, y = geometry.cell_position(cell.week_index, cell.row)
        date_str = format_date(cell.date)
        cells.append({
            "x": x,
            "y": y,
            "color": colors[cell.level],
            "date": date_str,
            "count": cell.count,
            "title": format_tooltip(date_str, cell.count),
        })

    month_labels = []
    if options.show_month_labels:
        for label in plan.month_labels:
            x, _ = geometry.cell_position(label.week_index, 0)
            month_labels.append({"x": x, "text": label.text})

    day_labels = []
    if options.show_day_labels:
        for label in plan.day_labels:
            _, y = geometry.cell_position(0, label.row_index)
            day_labels.append({"y": y + geometry.cell_size - 1, "text": label.text})

    header = None
    if options.show_header:
        header = options.header_text.replace("{{count}}", f"{grid.total_count:,}")

    legend = None
    if options.show_legend:
        legend_y = geometry.grid_offset_y + geometry.grid_height + 6
        swatch_step = geometry.cell_size + 3
        legend_x = geometry.grid_offset_x + geometry.grid_width - (5 * swatch_step + 60)
        swatches = [
            {"x": legend_x + 30 + i * swatch_step, "color": color}
            for i, color in enumerate(colors)
        ]
        legend = {
            "x": legend_x,
            "y": legend_y,
            "text_y": legend_y + geometry.cell_size - 1,
            "swatches": swatches,
            "more_x": legend_x + 30 + 5 * swatch_step + 2,
        }

    background = None
    if options.background_color != "transparent":
        background = options.background_color

    return _template.render(
        g=geometry,
        font_family=options.font_family,
        background=background,
        header=header,
        text_color=text_color,
        month_labels=month_labels,
        day_labels=day_labels,
        cells=cells,
        radius=options.border_radius,
        legend=legend,
    )
