"""Exception hierarchy for convrelease.

All errors raised by the package derive from :class:`ConvReleaseError`
so callers can catch everything with a single ``except`` clause.
"""

from __future__ import annotations

from enum import Enum


class ConvReleaseError(Exception):
    """Base class for all convrelease errors."""


# =============================================================================
# Configuration
# =============================================================================


class ConfigError(ConvReleaseError):
    """Configuration could not be loaded."""


class ConfigNotFoundError(ConfigError):
    """No configuration file was found."""


class ConfigValidationError(ConfigError):
    """Configuration content is invalid."""


# =============================================================================
# Commit messages
# =============================================================================


class MessageErrorKind(Enum):
    """Structured reason for a rejected commit message."""

    EMPTY_MESSAGE = "empty_message"
    MISSING_SEPARATOR = "missing_separator"
    MISSING_TYPE = "missing_type"
    INVALID_TYPE = "invalid_type"
    INVALID_SCOPE = "invalid_scope"
    MISSING_DESCRIPTION = "missing_description"
    INVALID_DESCRIPTION = "invalid_description"
    MISSING_BODY_SEPARATOR = "missing_body_separator"
    INVALID_FOOTER_LINE = "invalid_footer_line"
    INVALID_FOOTER_KEY = "invalid_footer_key"
    INVALID_FOOTER_VALUE = "invalid_footer_value"
    DUPLICATE_BREAKING_CHANGE = "duplicate_breaking_change"
    INVALID_ISSUE_REFERENCE = "invalid_issue_reference"
    MISSING_SCOPE = "missing_scope"
    SUBJECT_TOO_LONG = "subject_too_long"


class MessageError(ConvReleaseError):
    """A commit message violates the conventional commit grammar.

    Attributes:
        kind: Machine-readable reason
        line: 0-based line number of the offending line, if known
    """

    def __init__(self, kind: MessageErrorKind, message: str, *, line: int | None = None) -> None:
        self.kind = kind
        self.line = line
        super().__init__(message)


class MessageParseError(MessageError):
    """Raw commit text could not be parsed."""


class MessageValidationError(MessageError):
    """A message was rejected at authoring/format time."""


# =============================================================================
# Versions and changelog
# =============================================================================


class InvalidVersionError(ConvReleaseError):
    """A string is not a valid semantic version."""


class ChangelogError(ConvReleaseError):
    """Changelog could not be built."""
