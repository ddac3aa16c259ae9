"""
GitHub API client for fetching repository commits.
"""

import logging
import re

import requests

logger = logging.getLogger(__name__)

REPOSITORY_PATTERN = re.compile(r"^[a-zA-Z0-9._-]+/[a-zA-Z0-9._-]+$")


class GitHubClientError(Exception):
    """Base exception for GitHub client errors."""

    pass


def is_valid_repository(repository: str) -> bool:
    """Check a repository name is in owner/repo format."""
    return bool(repository) and bool(REPOSITORY_PATTERN.match(repository))


class GitHubClient:
    """Client for the GitHub commits API."""

    BASE_URL = "https://api.github.com"
    PER_PAGE = 100

    def __init__(self, token: str | None = None):
        """
        Initialize the GitHub client.

        Args:
            token: GitHub personal access token. Public repositories can be
                read without one, at a lower rate limit.
        """
        self.token = token
        self.session = requests.Session()
        self.session.headers.update(
            {
                "Accept": "application/vnd.github+json",
                "X-GitHub-Api-Version": "2022-11-28",
                "User-Agent": "gh-heatmap",
            }
        )
        if token:
            self.session.headers["Authorization"] = f"Bearer {token}"

    def list_commits(
        self,
        repository: str,
        start_date: str,
        end_date: str,
        author: str | None = None,
        branch: str | None = None,
        path: str | None = None,
        max_pages: int = 10,
    ) -> list[dict]:
        """
        Fetch commits for a repository within a date range.

        Pages through results until a short page or max_pages. If GitHub
        reports the rate limit is exhausted, the commits fetched so far are
        returned.

        Args:
            repository: Repository in "owner/repo" format
            start_date: First day to include (YYYY-MM-DD)
            end_date: Last day to include (YYYY-MM-DD)
            author: Optional GitHub login or email to filter by
            branch: Optional branch name or SHA to list from
            path: Optional file or directory path filter
            max_pages: Maximum number of pages to request

        Returns:
            List of raw commit dictionaries from the GitHub API

        Raises:
            GitHubClientError: If the repository is malformed or a request fails
        """
        if not is_valid_repository(repository):
            raise GitHubClientError(
                f'Invalid repository format: "{repository}". Expected "owner/repo".'
            )

        url = f"{self.BASE_URL}/repos/{repository}/commits"
        params = {
            "since": f"{start_date}T00:00:00Z",
            "until": f"{end_date}T23:59:59Z",
            "per_page": self.PER_PAGE,
        }
        if author:
            params["author"] = author
        if branch:
            params["sha"] = branch
        if path:
            params["path"] = path

        commits: list[dict] = []
        for page in range(1, max_pages + 1):
            response = self.session.get(url, params={**params, "page": page})

            if not response.ok:
                remaining = response.headers.get("X-RateLimit-Remaining")
                if remaining == "0":
                    logger.warning(
                        "GitHub rate limit exhausted after %d commits from %s",
                        len(commits),
                        repository,
                    )
                    break
                self._raise_for_status(response, repository)

            data = response.json()
            commits.extend(data)
            if len(data) < self.PER_PAGE:
                break

        logger.debug("Fetched %d commits from %s", len(commits), repository)
        return commits

    def _raise_for_status(self, response: requests.Response, repository: str) -> None:
        if response.status_code == 401:
            raise GitHubClientError(
                "Authentication failed. Check your GITHUB_TOKEN is valid."
            )
        elif response.status_code == 404:
            raise GitHubClientError(f"Repository '{repository}' not found on GitHub.")
        elif response.status_code == 403:
            remaining = response.headers.get("X-RateLimit-Remaining", "unknown")
            raise GitHubClientError(
                f"API rate limit exceeded or access forbidden. "
                f"Remaining requests: {remaining}"
            )
        raise GitHubClientError(
            f"GitHub API error: {response.status_code} - {response.text}"
        )
