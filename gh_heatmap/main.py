"""
gh-heatmap: GitHub-style contribution heatmaps

Entry point for the command line.
"""

import argparse
import logging
import sys
from pathlib import Path

from gh_heatmap.config import GITHUB_REPOSITORY, GITHUB_TOKEN, THEME, validate_config
from gh_heatmap.github_client import GitHubClient, GitHubClientError
from gh_heatmap.activity_aggregator import aggregate_commits, count_authors, summarize
from gh_heatmap.date_index import format_date, resolve_range
from gh_heatmap.grid_layout import build_grid
from gh_heatmap.svg_renderer import SVGOptions, render_svg
from gh_heatmap.cli import display_authors, display_calendar, display_summary


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="gh-heatmap",
        description="Show a contribution heatmap for a GitHub repository.",
    )
    parser.add_argument("repository", nargs="?", default=GITHUB_REPOSITORY,
                        help="Repository as owner/repo (default: $GITHUB_REPOSITORY)")
    parser.add_argument("--start", help="First day, YYYY-MM-DD (default: one year ago)")
    parser.add_argument("--end", help="Last day, YYYY-MM-DD (default: today)")
    parser.add_argument("--author", help="Only count commits by this author")
    parser.add_argument("--week-start", type=int, choices=[0, 1], default=0,
                        help="0 = Sunday, 1 = Monday")
    parser.add_argument("--svg", type=Path, help="Write an SVG heatmap to this file")
    parser.add_argument("--theme", default=THEME, help="SVG theme name")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    print("gh-heatmap - Repository activity at a glance")
    print("-" * 50)

    try:
        validate_config()
    except ValueError as e:
        print(f"\nConfiguration Error:\n{e}")
        return 1

    if not args.repository:
        print("\nError: no repository given and GITHUB_REPOSITORY is not set.")
        return 1

    try:
        date_range = resolve_range(args.start, args.end)
    except ValueError as e:
        print(f"\nError: {e}")
        return 1

    client = GitHubClient(GITHUB_TOKEN)
    start, end = format_date(date_range.start), format_date(date_range.end)

    try:
        print(f"\nFetching commits for {args.repository} ({start} to {end})...\n")
        commits = client.list_commits(args.repository, start, end, author=args.author)
    except GitHubClientError as e:
        print(f"\nError: {e}")
        return 1

    series = aggregate_commits(commits)

    display_summary(summarize(series, date_range))
    display_calendar(build_grid(series, date_range, args.week_start))
    display_authors(count_authors(commits))

    if args.svg:
        options = SVGOptions(
            theme=args.theme,
            week_start=args.week_start,
            start_date=start,
            end_date=end,
        )
        args.svg.write_text(render_svg(series, options), encoding="utf-8")
        print(f"Wrote {args.svg}")

    return 0


def run() -> None:
    sys.exit(main())


if __name__ == "__main__":
    run()
