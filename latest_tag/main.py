# Copyright (c) 2026 Mark Ferrell. MIT License.
"""Main entry point for the Latest Tag Action.

This module reads the action inputs, collects tag names and the current
branch from the repository, resolves the latest tag and writes it to the
step outputs.

References:
    - GitHub Actions Environment Variables:
      https://docs.github.com/en/actions/writing-workflows/choosing-what-your-workflow-does/store-information-in-variables#default-environment-variables
    - GitHub Actions Outputs:
      https://docs.github.com/en/actions/writing-workflows/choosing-what-your-workflow-does/passing-information-between-jobs#setting-an-output-parameter
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
from collections.abc import Iterable
from dataclasses import dataclass

from github.GithubException import GithubException

from latest_tag.branch import include_prerelease, validate_prefix, validate_suffix
from latest_tag.git_repo import LocalRepository, RepositoryNotFoundError
from latest_tag.github_api import GitHubAPI
from latest_tag.tags import DEFAULT_PRERELEASE_SUFFIX, resolve_latest_tag

logger = logging.getLogger(__name__)

SOURCES = ("local", "github")


@dataclass
class ActionInputs:
    """Parsed action inputs from CLI arguments or environment variables."""

    release_branch: str
    tag_prefix: str = ""
    prerelease_suffix: str = DEFAULT_PRERELEASE_SUFFIX
    working_directory: str = "."
    source: str = "local"
    token: str = ""
    allow_missing: bool = False
    debug: bool = False


@dataclass
class GitHubContext:
    """GitHub event context from environment variables."""

    head_ref: str
    ref_name: str
    repository: str


@dataclass
class ActionOutputs:
    """Action outputs to be written to GITHUB_OUTPUT."""

    latest_tag: str | None = None

    @property
    def found(self) -> bool:
        return self.latest_tag is not None


def _env_flag(name: str) -> bool:
    return os.environ.get(name, "false").lower() == "true"


def parse_inputs(args: list[str] | None = None) -> ActionInputs:
    """Parse action inputs from CLI arguments or environment variables.

    CLI arguments take precedence over environment variables.

    Args:
        args: Optional list of CLI arguments. If None, uses environment
              variables only (GitHub Actions mode).

    Returns:
        ActionInputs with parsed values.
    """
    parser = argparse.ArgumentParser(
        prog="latest-tag",
        description="Latest Tag Action - Report the most recent SemVer tag",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Environment Variables (used as defaults when CLI args not provided):
  INPUT_RELEASE_BRANCH         Branch that only considers release tags
  INPUT_TAG_PREFIX             Prefix of version tags (default: none)
  INPUT_PRERELEASE_SUFFIX      Prerelease marker (default: prerelease)
  INPUT_WORKING_DIRECTORY      Directory inside the repository (default: .)
  INPUT_SOURCE                 Tag source: local or github (default: local)
  INPUT_TOKEN, GITHUB_TOKEN    GitHub token, required for the github source
  INPUT_ALLOW_MISSING          Succeed with an empty output if no tag matches
  INPUT_DEBUG                  Enable debug logging (true/false)

Examples:
  # Run with environment variables (GitHub Actions mode)
  python -m latest_tag.main

  # Run with CLI arguments (local testing)
  latest-tag --release-branch main --tag-prefix v --debug
        """,
    )

    parser.add_argument(
        "--release-branch",
        default=os.environ.get("INPUT_RELEASE_BRANCH", ""),
        help="Release branch; every other branch also considers prerelease tags",
    )
    parser.add_argument(
        "--tag-prefix",
        default=os.environ.get("INPUT_TAG_PREFIX", ""),
        help="Prefix for version tags (default: none)",
    )
    parser.add_argument(
        "--prerelease-suffix",
        default=os.environ.get("INPUT_PRERELEASE_SUFFIX", DEFAULT_PRERELEASE_SUFFIX),
        help="Suffix marking prerelease tags, as in X.Y.Z-SUFFIX.N (default: prerelease)",
    )
    parser.add_argument(
        "--working-directory",
        default=os.environ.get("INPUT_WORKING_DIRECTORY", "."),
        help="Directory inside the repository to inspect (default: .)",
    )
    parser.add_argument(
        "--source",
        default=os.environ.get("INPUT_SOURCE", "local"),
        help="Where to list tags from: local or github (default: local)",
    )
    parser.add_argument(
        "--token",
        default=os.environ.get("INPUT_TOKEN", os.environ.get("GITHUB_TOKEN", "")),
        help="GitHub token for the github source (default: from INPUT_TOKEN or GITHUB_TOKEN env)",
    )
    parser.add_argument(
        "--allow-missing",
        action="store_true",
        default=_env_flag("INPUT_ALLOW_MISSING"),
        help="Write an empty latest_tag instead of failing when no tag matches",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        default=_env_flag("INPUT_DEBUG"),
        help="Enable debug logging",
    )

    parsed = parser.parse_args(args if args is not None else [])

    if not parsed.release_branch:
        logger.error("release-branch is required. Set INPUT_RELEASE_BRANCH or pass --release-branch.")
        sys.exit(1)

    if not validate_prefix(parsed.tag_prefix, allow_empty=True):
        logger.error(
            "Invalid tag-prefix '%s': must not contain "
            "invalid git ref characters (.. ~ ^ : \\ space tab newline * ? [)",
            parsed.tag_prefix,
        )
        sys.exit(1)

    if not validate_suffix(parsed.prerelease_suffix):
        logger.error(
            "Invalid prerelease-suffix '%s': must be non-empty and only contain [0-9A-Za-z-]",
            parsed.prerelease_suffix,
        )
        sys.exit(1)

    if parsed.source not in SOURCES:
        logger.error("Invalid source '%s': must be one of %s", parsed.source, ", ".join(SOURCES))
        sys.exit(1)

    return ActionInputs(
        release_branch=parsed.release_branch,
        tag_prefix=parsed.tag_prefix,
        prerelease_suffix=parsed.prerelease_suffix,
        working_directory=parsed.working_directory,
        source=parsed.source,
        token=parsed.token,
        allow_missing=parsed.allow_missing,
        debug=parsed.debug,
    )


def parse_context() -> GitHubContext:
    """Parse GitHub context from environment variables.

    Returns:
        GitHubContext with ref information.

    References:
        - https://docs.github.com/en/actions/writing-workflows/choosing-what-your-workflow-does/store-information-in-variables#default-environment-variables
    """
    return GitHubContext(
        head_ref=os.environ.get("GITHUB_HEAD_REF", ""),
        ref_name=os.environ.get("GITHUB_REF_NAME", ""),
        repository=os.environ.get("GITHUB_REPOSITORY", ""),
    )


def set_outputs(outputs: ActionOutputs) -> None:
    """Write action outputs to GITHUB_OUTPUT file.

    A missing tag is written as an empty value.

    Args:
        outputs: ActionOutputs to write.
    """
    output_file = os.environ.get("GITHUB_OUTPUT", "")
    if not output_file:
        logger.warning("GITHUB_OUTPUT not set, outputs will not be written")
        return

    latest_tag = outputs.latest_tag or ""
    with open(output_file, "a") as f:
        f.write(f"latest_tag={latest_tag}\n")

    logger.info("Set outputs: latest_tag=%s", latest_tag)


def configure_logging(debug: bool) -> None:
    """Configure logging based on debug flag.

    Args:
        debug: If True, enable DEBUG level logging.
    """
    level = logging.DEBUG if debug else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(levelname)s: %(message)s",
    )


def current_branch(repo: LocalRepository | None, context: GitHubContext) -> str | None:
    """Determine the checked-out branch name.

    actions/checkout leaves HEAD detached, so a detached (or remote-only)
    lookup falls back to GITHUB_HEAD_REF for pull requests and then to
    GITHUB_REF_NAME.

    Args:
        repo: Local repository, or None when tags come from the GitHub API.
        context: GitHub event context.

    Returns:
        The branch name, or None if it cannot be determined.
    """
    branch = repo.current_branch() if repo is not None else None
    if branch:
        return branch

    return context.head_ref or context.ref_name or None


def find_latest_tag(tags: Iterable[str], inputs: ActionInputs, branch: str) -> ActionOutputs:
    """Resolve the latest tag for the current branch.

    Args:
        tags: Tag names from the repository.
        inputs: Action inputs.
        branch: Name of the checked-out branch.

    Returns:
        ActionOutputs with the resolved tag, or an unset tag if none matched.
    """
    prerelease = include_prerelease(branch, inputs.release_branch)
    latest = resolve_latest_tag(
        tags,
        tag_prefix=inputs.tag_prefix,
        prerelease_suffix=inputs.prerelease_suffix,
        include_prerelease=prerelease,
    )

    if latest is None:
        logger.warning(
            "No tags found matching %sX.Y.Z%s",
            inputs.tag_prefix,
            f"[-{inputs.prerelease_suffix}.N]" if prerelease else "",
        )
    else:
        logger.info("Latest tag found: %s", latest)

    return ActionOutputs(latest_tag=latest)


def main(args: list[str] | None = None) -> None:
    """Main entry point for the action.

    Args:
        args: CLI arguments. Defaults to sys.argv[1:].
    """
    inputs = parse_inputs(sys.argv[1:] if args is None else args)
    configure_logging(inputs.debug)

    context = parse_context()
    logger.debug("Source: %s, Working directory: %s", inputs.source, inputs.working_directory)

    repo: LocalRepository | None = None
    try:
        if inputs.source == "github":
            tags = GitHubAPI(token=inputs.token, repository=context.repository).list_tags()
        else:
            repo = LocalRepository(inputs.working_directory)
            tags = repo.list_tags()
    except (RepositoryNotFoundError, ValueError) as e:
        logger.error("%s", e)
        sys.exit(1)
    except GithubException as e:
        logger.error("Failed to list tags from GitHub: %s", e)
        sys.exit(1)

    logger.debug("Found %d tags", len(tags))

    branch = current_branch(repo, context)
    if branch is None:
        logger.error("Failed to get current branch name")
        sys.exit(1)

    outputs = find_latest_tag(tags, inputs, branch)
    if not outputs.found and not inputs.allow_missing:
        logger.error("No matching tag found. Pass --allow-missing to succeed with an empty output.")
        sys.exit(1)

    set_outputs(outputs)


if __name__ == "__main__":  # pragma: no cover
    main()
