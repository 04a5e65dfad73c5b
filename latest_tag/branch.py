# Copyright (c) 2026 Mark Ferrell. MIT License.
"""Branch policy and input validation.

This module decides whether prerelease tags take part in resolution based on
the checked-out branch, and validates the tag prefix and prerelease suffix
before they are turned into patterns.

References:
    - git-check-ref-format: https://git-scm.com/docs/git-check-ref-format
    - Semantic Versioning 2.0.0: https://semver.org/#spec-item-9
"""

from __future__ import annotations

import logging
import re

logger = logging.getLogger(__name__)

# Characters invalid in git refs (branch names and tags)
# See: https://git-scm.com/docs/git-check-ref-format
INVALID_PREFIX_CHARS = ["..", "~", "^", ":", "\\", " ", "\t", "\n", "*", "?", "["]

# SemVer 2.0.0 prerelease identifiers: [0-9A-Za-z-]
PRERELEASE_SUFFIX_PATTERN = re.compile(r"^[0-9A-Za-z-]+$")


def validate_prefix(prefix: str, allow_empty: bool = False) -> bool:
    """Validate that a prefix is valid for git branch names and tags.

    Args:
        prefix: The prefix string to validate.
        allow_empty: Accept an empty prefix (tags without any prefix).

    Returns:
        True if the prefix is valid, False otherwise.

    Examples:
        >>> validate_prefix("v")
        True
        >>> validate_prefix("", allow_empty=True)
        True
        >>> validate_prefix("")
        False
        >>> validate_prefix("bad..prefix")
        False
    """
    if not prefix:
        if allow_empty:
            return True
        logger.warning("Empty prefix provided")
        return False

    for invalid_char in INVALID_PREFIX_CHARS:
        if invalid_char in prefix:
            logger.warning(
                "Prefix '%s' contains invalid character %s",
                prefix,
                repr(invalid_char),
            )
            return False

    return True


def validate_suffix(suffix: str) -> bool:
    """Validate a prerelease suffix token.

    Examples:
        >>> validate_suffix("prerelease")
        True
        >>> validate_suffix("beta.1")
        False
    """
    if not suffix:
        logger.warning("Empty prerelease suffix provided")
        return False

    if not PRERELEASE_SUFFIX_PATTERN.match(suffix):
        logger.warning("Prerelease suffix '%s' must only contain [0-9A-Za-z-]", suffix)
        return False

    return True


def include_prerelease(current_branch: str, release_branch: str) -> bool:
    """Determine if prerelease tags should be considered.

    Only the release branch resolves against release tags alone; every other
    branch sees prereleases too.

    Args:
        current_branch: Name of the checked-out branch (e.g., 'feature/x').
        release_branch: Name of the configured release branch (e.g., 'main').

    Returns:
        True if the current branch is not the release branch.

    Examples:
        >>> include_prerelease("main", "main")
        False
        >>> include_prerelease("develop", "main")
        True
    """
    if current_branch == release_branch:
        logger.info("Current branch (%s) is the release branch. Excluding prerelease tags.", current_branch)
        return False

    logger.info(
        "Current branch (%s) is not the release branch (%s). Including prerelease tags.",
        current_branch,
        release_branch,
    )
    return True
