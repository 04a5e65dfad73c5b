"""Unit tests for github_api.py - GitHubAPI wrapper methods."""

from unittest.mock import MagicMock, patch

import pytest
from github.GithubException import GithubException

from latest_tag.github_api import GitHubAPI
from tests.conftest import make_tag


class TestGitHubAPIInit:
    """Tests for GitHubAPI initialization and token handling."""

    def test_init_with_explicit_token_and_repo(self):
        """GitHubAPI initializes with explicit token and repository."""
        with patch("latest_tag.github_api.Github") as mock_github:
            mock_repo = MagicMock()
            mock_github.return_value.get_repo.return_value = mock_repo

            GitHubAPI(token="test-token", repository="owner/repo")

            mock_github.assert_called_once_with("test-token")
            mock_github.return_value.get_repo.assert_called_once_with("owner/repo")

    def test_init_with_env_vars(self, monkeypatch):
        """GitHubAPI uses environment variables when parameters not provided."""
        monkeypatch.setenv("GITHUB_TOKEN", "env-token")
        monkeypatch.setenv("GITHUB_REPOSITORY", "env-owner/env-repo")

        with patch("latest_tag.github_api.Github") as mock_github:
            GitHubAPI()

            mock_github.assert_called_once_with("env-token")
            mock_github.return_value.get_repo.assert_called_once_with("env-owner/env-repo")

    def test_init_missing_token_raises_error(self, monkeypatch):
        """GitHubAPI raises ValueError when token is missing."""
        monkeypatch.delenv("GITHUB_TOKEN", raising=False)
        monkeypatch.setenv("GITHUB_REPOSITORY", "owner/repo")

        with pytest.raises(ValueError, match="GitHub token is required"):
            GitHubAPI()

    def test_init_missing_token_skips_client(self, monkeypatch):
        """GitHubAPI never builds a client without a token."""
        monkeypatch.delenv("GITHUB_TOKEN", raising=False)

        with patch("latest_tag.github_api.Github") as mock_github:
            with pytest.raises(ValueError, match="to list remote tags"):
                GitHubAPI(repository="owner/repo")

            mock_github.assert_not_called()

    def test_init_missing_repository_raises_error(self, monkeypatch):
        """GitHubAPI raises ValueError when repository is missing."""
        monkeypatch.setenv("GITHUB_TOKEN", "test-token")
        monkeypatch.delenv("GITHUB_REPOSITORY", raising=False)

        with pytest.raises(ValueError, match="Repository is required"):
            GitHubAPI()

    def test_init_unknown_repository_propagates(self):
        """GitHubAPI lets repository lookup failures propagate."""
        with patch("latest_tag.github_api.Github") as mock_github:
            mock_github.return_value.get_repo.side_effect = GithubException(404, "Not Found", None)

            with pytest.raises(GithubException):
                GitHubAPI(token="test-token", repository="owner/missing")


class TestListTags:
    """Tests for GitHubAPI.list_tags method."""

    def test_list_tags_returns_names(self, mock_pygithub):
        """list_tags returns the names of all repository tags."""
        mock_pygithub["repo"].get_tags.return_value = [make_tag("v1.0.0"), make_tag("v1.0.1")]

        api = GitHubAPI(token="test-token", repository="owner/repo")
        result = api.list_tags()

        assert result == ["v1.0.0", "v1.0.1"]
        mock_pygithub["repo"].get_tags.assert_called_once()

    def test_list_tags_empty_repository(self, mock_pygithub):
        """list_tags returns empty list for repository with no tags."""
        mock_pygithub["repo"].get_tags.return_value = []

        api = GitHubAPI(token="test-token", repository="owner/repo")

        assert api.list_tags() == []

    def test_list_tags_consumes_paginated_list(self, mock_pygithub):
        """list_tags iterates the paginated result to the end."""
        mock_pygithub["repo"].get_tags.return_value = iter(make_tag(f"v1.0.{i}") for i in range(150))

        api = GitHubAPI(token="test-token", repository="owner/repo")
        result = api.list_tags()

        assert len(result) == 150
        assert result[-1] == "v1.0.149"

    def test_list_tags_error_propagates(self, mock_pygithub):
        """list_tags raises GithubException on API failure."""
        mock_pygithub["repo"].get_tags.side_effect = GithubException(500, "Server Error", None)

        api = GitHubAPI(token="test-token", repository="owner/repo")

        with pytest.raises(GithubException):
            api.list_tags()
