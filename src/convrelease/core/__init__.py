"""Core business logic for convrelease.

This module contains the fundamental building blocks:
- Conventional commit parsing and formatting
- Version increment classification
- Commit history resolution (current and next version)
- Changelog structure
"""

from __future__ import annotations

from convrelease.core.changelog import build_changelog, render_changelog
from convrelease.core.commits import (
    Commit,
    ValidationResult,
    calculate_increment,
    classify,
    get_breaking_changes,
    group_commits_by_type,
    validate_message,
)
from convrelease.core.formatter import format_message
from convrelease.core.history import (
    CommitHistory,
    HistoryWarning,
    latest_stable_version,
    resolve_history,
)
from convrelease.core.message import ConventionalMessage
from convrelease.core.parser import parse_message
from convrelease.core.version import Version, VersionIncrement, apply_increment, parse_version

__all__ = [
    # Messages
    "ConventionalMessage",
    "format_message",
    "parse_message",
    "validate_message",
    "ValidationResult",
    # Classification
    "VersionIncrement",
    "calculate_increment",
    "classify",
    # History
    "Commit",
    "CommitHistory",
    "HistoryWarning",
    "latest_stable_version",
    "resolve_history",
    "get_breaking_changes",
    "group_commits_by_type",
    # Version
    "Version",
    "apply_increment",
    "parse_version",
    # Changelog
    "build_changelog",
    "render_changelog",
]
