# Copyright (c) 2026 Mark Ferrell. MIT License.
"""Tag parsing and latest-tag resolution.

This module turns raw tag names into comparable versions and picks the most
recent one according to SemVer 2.0.0 precedence, restricted to the simple
{prefix}X.Y.Z[-{suffix}[.N]] form used for release and prerelease tags.

Nothing here performs I/O: callers hand in an already materialized list of
tag names and get back the winning name, or None.

References:
    - Semantic Versioning 2.0.0: https://semver.org/
    - Precedence rules: https://semver.org/#spec-item-11
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable
from dataclasses import dataclass

logger = logging.getLogger(__name__)

DEFAULT_PRERELEASE_SUFFIX = "prerelease"

# SemVer 2.0.0 numeric identifier: 0 or no leading zero, at most as many
# digits as int() converts under the default sys.get_int_max_str_digits()
MAX_NUMBER_DIGITS = 4300
_NUMBER = f"(0|[1-9][0-9]{{0,{MAX_NUMBER_DIGITS - 1}}})"


def create_tag_pattern(tag_prefix: str = "", prerelease_suffix: str = DEFAULT_PRERELEASE_SUFFIX) -> re.Pattern[str]:
    """Create regex pattern for version tags with given prefix and suffix.

    Args:
        tag_prefix: The prefix for tags (e.g., 'v', 'pkg-v', or '').
        prerelease_suffix: The prerelease marker (e.g., 'prerelease', 'beta').
            An empty suffix disables prerelease matching.

    Returns:
        Compiled regex pattern matching {prefix}X.Y.Z and
        {prefix}X.Y.Z-{suffix}[.N], with groups major, minor, patch,
        pre and ordinal.

    Examples:
        >>> pattern = create_tag_pattern("v", "beta")
        >>> bool(pattern.match("v1.2.3-beta.4"))
        True
        >>> bool(pattern.match("v1.2.3-rc.4"))
        False
    """
    escaped_prefix = re.escape(tag_prefix)
    core = f"(?P<major>{_NUMBER})\\.(?P<minor>{_NUMBER})\\.(?P<patch>{_NUMBER})"
    if not prerelease_suffix:
        return re.compile(f"^{escaped_prefix}{core}\\Z")

    escaped_suffix = re.escape(prerelease_suffix)
    return re.compile(f"^{escaped_prefix}{core}(?P<pre>-{escaped_suffix}(?:\\.(?P<ordinal>{_NUMBER}))?)?\\Z")


@dataclass(frozen=True)
class ParsedVersion:
    """Version information extracted from a tag name."""

    major: int
    minor: int
    patch: int
    prerelease: bool = False
    ordinal: int = 0

    @property
    def sort_key(self) -> tuple[int, int, int, bool, int]:
        """Ranking key: core version, then release over prerelease, then ordinal."""
        return (self.major, self.minor, self.patch, not self.prerelease, self.ordinal)

    def __str__(self) -> str:
        """Return the core version as a string (e.g., '1.2.3')."""
        return f"{self.major}.{self.minor}.{self.patch}"


def parse_tag(
    tag_name: str,
    tag_prefix: str = "",
    prerelease_suffix: str = DEFAULT_PRERELEASE_SUFFIX,
) -> ParsedVersion | None:
    """Parse a tag name into a ParsedVersion.

    Args:
        tag_name: The tag name to parse (e.g., 'v1.2.3', 'v1.2.3-prerelease.4').
        tag_prefix: The tag prefix to strip (default: '').
        prerelease_suffix: The prerelease marker (default: 'prerelease').

    Returns:
        ParsedVersion, or None if the tag does not carry the prefix or the
        remainder is not a valid version.

    Examples:
        >>> parse_tag("v1.2.3", "v")
        ParsedVersion(major=1, minor=2, patch=3, prerelease=False, ordinal=0)
        >>> parse_tag("v1.2.3-prerelease", "v").ordinal
        0
        >>> parse_tag("release-1.2", "release-") is None
        True
    """
    return _parse_with(create_tag_pattern(tag_prefix, prerelease_suffix), tag_name)


def _parse_with(pattern: re.Pattern[str], tag_name: str) -> ParsedVersion | None:
    match = pattern.fullmatch(tag_name)
    if not match:
        return None

    groups = match.groupdict()
    ordinal = groups.get("ordinal")
    try:
        return ParsedVersion(
            major=int(groups["major"]),
            minor=int(groups["minor"]),
            patch=int(groups["patch"]),
            prerelease=groups.get("pre") is not None,
            ordinal=int(ordinal) if ordinal is not None else 0,
        )
    except ValueError:
        # Numbers past sys.get_int_max_str_digits() cannot be converted
        logger.debug("Skipping tag '%s': version number too long", tag_name[:80])
        return None


def is_prerelease_tag(
    tag_name: str,
    tag_prefix: str = "",
    prerelease_suffix: str = DEFAULT_PRERELEASE_SUFFIX,
) -> bool:
    """Check if a tag is a prerelease tag.

    Examples:
        >>> is_prerelease_tag("v1.0.0-prerelease.2", "v")
        True
        >>> is_prerelease_tag("v1.0.0", "v")
        False
    """
    version = parse_tag(tag_name, tag_prefix, prerelease_suffix)
    return version is not None and version.prerelease


def resolve_latest_tag(
    tags: Iterable[str],
    tag_prefix: str = "",
    prerelease_suffix: str = DEFAULT_PRERELEASE_SUFFIX,
    include_prerelease: bool = False,
) -> str | None:
    """Find the most recent tag under SemVer precedence.

    Tags that do not start with the prefix or do not parse are skipped.
    Prerelease tags are only considered when include_prerelease is True; a
    release always outranks a prerelease of the same X.Y.Z. Equal versions
    (e.g. 'v1.0.0-prerelease' and 'v1.0.0-prerelease.0') are settled by
    the higher raw tag string so the result never depends on input order.

    Args:
        tags: Raw tag names from the repository.
        tag_prefix: The tag prefix to match (default: '').
        prerelease_suffix: The prerelease marker (default: 'prerelease').
        include_prerelease: Whether prerelease tags may be selected.

    Returns:
        The winning tag name exactly as given, or None if no tag qualifies.

    Examples:
        >>> resolve_latest_tag(["v1.0.0", "v1.2.0", "v1.1.5"], "v")
        'v1.2.0'
        >>> resolve_latest_tag(["v1.0.0", "v1.0.0-prerelease.9"], "v", include_prerelease=True)
        'v1.0.0'
        >>> resolve_latest_tag([], "v") is None
        True
    """
    pattern = create_tag_pattern(tag_prefix, prerelease_suffix)
    best: tuple[tuple[int, int, int, bool, int], str] | None = None

    for tag in tags:
        version = _parse_with(pattern, tag)
        if version is None:
            logger.debug("Skipping tag '%s': does not match %sX.Y.Z pattern", tag, tag_prefix)
            continue
        if version.prerelease and not include_prerelease:
            logger.debug("Skipping prerelease tag '%s'", tag)
            continue

        candidate = (version.sort_key, tag)
        if best is None or candidate > best:
            best = candidate

    if best is None:
        return None

    logger.debug("Selected tag '%s'", best[1])
    return best[1]
