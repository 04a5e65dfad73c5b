# Copyright (c) 2026 Mark Ferrell. MIT License.
"""Local git repository access for tag and branch lookups.

References:
    - GitPython Documentation: https://gitpython.readthedocs.io/
"""

from __future__ import annotations

import logging
import os

from git import Repo
from git.exc import InvalidGitRepositoryError, NoSuchPathError

logger = logging.getLogger(__name__)


class RepositoryNotFoundError(Exception):
    """Raised when no git repository encloses the working directory."""


class LocalRepository:
    """Wrapper around GitPython for tag listing and branch identity.

    The repository is discovered from the working directory upwards, so the
    action can be pointed at any subdirectory of a checkout.
    """

    def __init__(self, working_directory: str | os.PathLike[str] = ".") -> None:
        """Open the repository enclosing working_directory.

        Args:
            working_directory: Directory to start discovery from (default: '.').

        Raises:
            RepositoryNotFoundError: If neither the directory nor any of its
                parents is a git repository.
        """
        try:
            self._repo = Repo(working_directory, search_parent_directories=True)
        except (InvalidGitRepositoryError, NoSuchPathError) as e:
            raise RepositoryNotFoundError(
                "No git repository found in working directory or parent directories"
            ) from e

        logger.debug("Using repository at %s", self._repo.working_tree_dir)

    def list_tags(self) -> list[str]:
        """List all tag names in the repository.

        Returns:
            Names of lightweight and annotated tags alike.
        """
        return [tag.name for tag in self._repo.tags]

    def current_branch(self) -> str | None:
        """Get the short name of the checked-out branch.

        Returns:
            Branch name (e.g., 'main'), or None if HEAD is detached.
        """
        if self._repo.head.is_detached:
            logger.debug("HEAD is detached")
            return None
        return self._repo.active_branch.name
