"""Shared constants for conventional commits and versioning."""

from __future__ import annotations

# Footer key signalling a breaking change
BREAKING_CHANGE_KEY = "BREAKING CHANGE"

# Default conventional commit types (type -> description)
DEFAULT_COMMIT_TYPES: dict[str, str] = {
    "feat": "New features",
    "fix": "Bug fixes",
    "docs": "Documentation",
    "style": "Code styling",
    "refactor": "Code refactoring",
    "perf": "Performance improvements",
    "test": "Testing",
    "build": "Build system",
    "ci": "Continuous integration",
    "cd": "Continuous delivery",
    "chore": "Other changes",
}

# Commit types which increment the minor version
DEFAULT_MINOR_TYPES: tuple[str, ...] = ("feat",)

# Footer keys whose values must be issue references (e.g. "#12")
ISSUE_REFERENCE_KEYS: frozenset[str] = frozenset({"Closes", "Fixes", "Refs"})

# Changelog sections (label -> commit types), in display order
DEFAULT_CHANGELOG_SECTIONS: dict[str, list[str]] = {
    "New features": ["feat"],
    "Bug fixes": ["fix"],
    "Documentation": ["docs"],
    "Performance improvements": ["perf"],
    "Tooling": ["build", "ci", "cd"],
}

UNCATEGORIZED_SECTION = "Uncategorized"

DEFAULT_TAG_PREFIX = "v"
DEFAULT_INITIAL_VERSION = "0.1.0"
