"""
Configuration management for gh-heatmap.

Loads settings from environment variables.
"""

import os
from dotenv import load_dotenv

# Load .env file from project root
load_dotenv()

GITHUB_TOKEN = os.getenv("GITHUB_TOKEN")
GITHUB_REPOSITORY = os.getenv("GITHUB_REPOSITORY")
CACHE_STRATEGY = os.getenv("GH_HEATMAP_CACHE", "memory")
CACHE_TTL_SECONDS = os.getenv("GH_HEATMAP_CACHE_TTL", "300")
WEEK_START = os.getenv("GH_HEATMAP_WEEK_START", "0")
THEME = os.getenv("GH_HEATMAP_THEME", "dark")


def get_cache_ttl() -> int:
    return int(CACHE_TTL_SECONDS)


def get_week_start() -> int:
    return int(WEEK_START)


def validate_config():
    """Validate that configured values are usable."""
    problems = []

    if CACHE_STRATEGY not in ("memory", "sqlite"):
        problems.append("GH_HEATMAP_CACHE must be 'memory' or 'sqlite'")

    if not str(CACHE_TTL_SECONDS).isdigit():
        problems.append("GH_HEATMAP_CACHE_TTL must be a whole number of seconds")

    if str(WEEK_START) not in ("0", "1"):
        problems.append("GH_HEATMAP_WEEK_START must be 0 (Sunday) or 1 (Monday)")

    if GITHUB_TOKEN == "your_token_here":
        problems.append("GITHUB_TOKEN is still the placeholder value")

    if problems:
        raise ValueError(
            "Invalid configuration:\n"
            + "\n".join(f"  - {problem}" for problem in problems)
            + "\nPlease check your .env file."
        )
