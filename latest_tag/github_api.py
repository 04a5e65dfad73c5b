# Copyright (c) 2026 Mark Ferrell. MIT License.
"""GitHub API wrapper for remote tag listing.

References:
    - GitHub REST API: https://docs.github.com/en/rest
    - PyGithub Documentation: https://pygithub.readthedocs.io/
"""

from __future__ import annotations

import os

from github import Github


class GitHubAPI:
    """Remote tag source backed by PyGithub.

    Used instead of a local checkout when the job has no tags fetched
    (shallow clones) or no checkout at all.
    """

    def __init__(self, token: str | None = None, repository: str | None = None) -> None:
        """Connect to a repository on GitHub.

        Args:
            token: Token with read access to the repository. Falls back to GITHUB_TOKEN.
            repository: 'owner/repo' to list tags from. Falls back to GITHUB_REPOSITORY.

        Raises:
            ValueError: If token or repository is missing.
            GithubException: If the repository lookup fails (bad token, unknown repo).
        """
        token = token or os.environ.get("GITHUB_TOKEN", "")
        repository = repository or os.environ.get("GITHUB_REPOSITORY", "")

        if not token:
            raise ValueError("GitHub token is required to list remote tags. Set GITHUB_TOKEN or pass --token.")
        if not repository:
            raise ValueError("Repository is required to list remote tags. Set GITHUB_REPOSITORY.")

        self._repo = Github(token).get_repo(repository)

    def list_tags(self) -> list[str]:
        """List all tag names in the repository.

        Returns:
            Tag names, following pagination to the end.

        References:
            - List repository tags: https://docs.github.com/en/rest/repos/repos#list-repository-tags
        """
        return [tag.name for tag in self._repo.get_tags()]
