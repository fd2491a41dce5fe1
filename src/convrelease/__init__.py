"""convrelease: conventional commits and semantic versioning from git history."""

from __future__ import annotations

from convrelease.core import (
    CommitHistory,
    ConventionalMessage,
    Version,
    VersionIncrement,
    format_message,
    latest_stable_version,
    parse_message,
    resolve_history,
)

__version__ = "0.1.0"

__all__ = [
    "CommitHistory",
    "ConventionalMessage",
    "Version",
    "VersionIncrement",
    "__version__",
    "format_message",
    "latest_stable_version",
    "parse_message",
    "resolve_history",
]
