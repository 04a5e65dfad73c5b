"""Shared pytest fixtures for the test suite."""

import shutil
from collections.abc import Generator
from pathlib import Path
from typing import Any
from unittest.mock import MagicMock, patch

import pytest


def make_tag(name: str) -> MagicMock:
    """Create a mock tag object with the given name.

    Stands in for both GitPython TagReference and PyGithub Tag objects,
    which expose the tag name the same way.
    """
    tag = MagicMock()
    tag.name = name
    return tag


@pytest.fixture
def mock_local_repo() -> MagicMock:
    """Create a mock LocalRepository instance for unit tests."""
    mock_repo = MagicMock()
    mock_repo.list_tags.return_value = []
    mock_repo.current_branch.return_value = "main"
    return mock_repo


@pytest.fixture
def mock_github_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> dict[str, str]:
    """Set up mock GitHub environment variables with a real output file."""
    env_vars = {
        "GITHUB_HEAD_REF": "",
        "GITHUB_REF_NAME": "main",
        "GITHUB_REPOSITORY": "owner/repo",
        "GITHUB_OUTPUT": str(tmp_path / "github_output"),
    }
    for key, value in env_vars.items():
        monkeypatch.setenv(key, value)
    for key in (
        "INPUT_RELEASE_BRANCH",
        "INPUT_TAG_PREFIX",
        "INPUT_PRERELEASE_SUFFIX",
        "INPUT_WORKING_DIRECTORY",
        "INPUT_SOURCE",
        "INPUT_ALLOW_MISSING",
        "INPUT_DEBUG",
    ):
        monkeypatch.delenv(key, raising=False)
    return env_vars


@pytest.fixture
def mock_pygithub() -> Generator[dict[str, Any], None, None]:
    """Patch PyGithub for unit tests."""
    with patch("latest_tag.github_api.Github") as mock_github:
        mock_repo = MagicMock()
        mock_github.return_value.get_repo.return_value = mock_repo
        yield {"github": mock_github, "repo": mock_repo}


@pytest.fixture
def sample_tags() -> list[str]:
    """Sample tag data for testing."""
    return [
        "v0.9.0",
        "v1.0.0-prerelease.1",
        "v1.0.0-prerelease.2",
        "v1.0.0",
        "v1.0.1",
        "v1.1.0-prerelease.1",
        "v1.1.0-prerelease.10",
        "v1.1.0-prerelease.2",
        "pkg-v3.0.0",
        "latest",
    ]


@pytest.fixture
def dummy_repo(tmp_path: Path) -> Any:
    """Create a small git repository with a few commits and tags.

    Tags 'v0.1' (lightweight) and 'v1.0' (annotated) are deliberately not
    X.Y.Z, so tests add the version tags they need.
    """
    if shutil.which("git") is None:
        pytest.skip("git executable not available")

    from git import Repo

    repo = Repo.init(tmp_path / "dummy-repo")
    with repo.config_writer() as config:
        config.set_value("user", "name", "Demo User")
        config.set_value("user", "email", "demo@example.com")

    readme = Path(repo.working_tree_dir) / "file.txt"
    for i, line in enumerate(["Hello World", "Second line", "Third line", "Fourth line"]):
        with readme.open("a") as f:
            f.write(f"{line}\n")
        repo.index.add(["file.txt"])
        repo.index.commit(f"Commit {i + 1}")
        if i == 1:
            repo.create_tag("v0.1")

    repo.create_tag("v1.0", message="Release version 1.0")
    return repo
