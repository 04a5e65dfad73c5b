# Copyright (c) 2026 Mark Ferrell. MIT License.
"""Latest Tag Action - Core modules."""

from latest_tag.tags import ParsedVersion, parse_tag, resolve_latest_tag

__all__ = ["ParsedVersion", "parse_tag", "resolve_latest_tag"]
