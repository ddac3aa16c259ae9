"""
Tests for the GitHub client.
"""

import pytest
from unittest.mock import patch, MagicMock

from gh_heatmap.github_client import GitHubClient, GitHubClientError, is_valid_repository


def _response(status_code=200, json_data=None, headers=None, text=""):
    mock_response = MagicMock()
    mock_response.ok = status_code < 400
    mock_response.status_code = status_code
    mock_response.json.return_value = json_data if json_data is not None else []
    mock_response.headers = headers or {}
    mock_response.text = text
    return mock_response


def _page(size, day="2024-01-01"):
    return [{"commit": {"author": {"date": f"{day}T10:00:00Z"}}} for _ in range(size)]


class TestRepositoryFormat:
    """Tests for owner/repo validation."""

    def test_valid(self):
        assert is_valid_repository("octocat/Hello-World")
        assert is_valid_repository("my.org/my_repo")

    def test_invalid(self):
        assert not is_valid_repository("octocat")
        assert not is_valid_repository("a/b/c")
        assert not is_valid_repository("")


class TestGitHubClient:
    """Tests for the GitHub API client."""

    def test_client_with_token(self):
        """Client should send a bearer token when given one."""
        client = GitHubClient("test_token")

        assert client.token == "test_token"
        assert "Bearer test_token" in client.session.headers["Authorization"]
        assert client.session.headers["Accept"] == "application/vnd.github+json"

    def test_client_without_token(self):
        """Public repositories can be read anonymously."""
        client = GitHubClient()

        assert "Authorization" not in client.session.headers

    @patch("requests.Session.get")
    def test_list_commits_single_page(self, mock_get):
        mock_get.return_value = _response(json_data=_page(3))

        commits = GitHubClient("t").list_commits("owner/repo", "2024-01-01", "2024-01-31")

        assert len(commits) == 3
        mock_get.assert_called_once()
        url = mock_get.call_args[0][0]
        params = mock_get.call_args[1]["params"]
        assert url == "https://api.github.com/repos/owner/repo/commits"
        assert params["since"] == "2024-01-01T00:00:00Z"
        assert params["until"] == "2024-01-31T23:59:59Z"
        assert params["per_page"] == 100
        assert params["page"] == 1

    @patch("requests.Session.get")
    def test_list_commits_paginates(self, mock_get):
        mock_get.side_effect = [
            _response(json_data=_page(100)),
            _response(json_data=_page(100)),
            _response(json_data=_page(7)),
        ]

        commits = GitHubClient("t").list_commits("owner/repo", "2024-01-01", "2024-01-31")

        assert len(commits) == 207
        assert [c[1]["params"]["page"] for c in mock_get.call_args_list] == [1, 2, 3]

    @patch("requests.Session.get")
    def test_list_commits_stops_at_max_pages(self, mock_get):
        mock_get.return_value = _response(json_data=_page(100))

        commits = GitHubClient("t").list_commits(
            "owner/repo", "2024-01-01", "2024-01-31", max_pages=2
        )

        assert len(commits) == 200
        assert mock_get.call_count == 2

    @patch("requests.Session.get")
    def test_list_commits_passes_filters(self, mock_get):
        mock_get.return_value = _response(json_data=[])

        GitHubClient("t").list_commits(
            "owner/repo", "2024-01-01", "2024-01-31",
            author="alice", branch="dev", path="src/",
        )

        params = mock_get.call_args[1]["params"]
        assert params["author"] == "alice"
        assert params["sha"] == "dev"
        assert params["path"] == "src/"

    @patch("requests.Session.get")
    def test_rate_limit_returns_partial_results(self, mock_get):
        mock_get.side_effect = [
            _response(json_data=_page(100)),
            _response(403, headers={"X-RateLimit-Remaining": "0"}),
        ]

        commits = GitHubClient("t").list_commits("owner/repo", "2024-01-01", "2024-01-31")

        assert len(commits) == 100

    @patch("requests.Session.get")
    def test_auth_failure(self, mock_get):
        mock_get.return_value = _response(401)

        with pytest.raises(GitHubClientError, match="Authentication failed"):
            GitHubClient("bad").list_commits("owner/repo", "2024-01-01", "2024-01-31")

    @patch("requests.Session.get")
    def test_repository_not_found(self, mock_get):
        mock_get.return_value = _response(404)

        with pytest.raises(GitHubClientError, match="not found"):
            GitHubClient("t").list_commits("owner/missing", "2024-01-01", "2024-01-31")

    @patch("requests.Session.get")
    def test_forbidden_with_quota_left(self, mock_get):
        mock_get.return_value = _response(403, headers={"X-RateLimit-Remaining": "12"})

        with pytest.raises(GitHubClientError, match="Remaining requests: 12"):
            GitHubClient("t").list_commits("owner/repo", "2024-01-01", "2024-01-31")

    @patch("requests.Session.get")
    def test_server_error(self, mock_get):
        mock_get.return_value = _response(500, text="oops")

        with pytest.raises(GitHubClientError, match="500 - oops"):
            GitHubClient("t").list_commits("owner/repo", "2024-01-01", "2024-01-31")

    @patch("requests.Session.get")
    def test_invalid_repository_makes_no_request(self, mock_get):
        with pytest.raises(GitHubClientError, match="Invalid repository format"):
            GitHubClient("t").list_commits("not-a-repo", "2024-01-01", "2024-01-31")

        mock_get.assert_not_called()
