"""Conventional commit classification and validation.

This module turns parsed messages into version increments and checks
newly authored messages against the project rules.
"""

from __future__ import annotations

import re
from collections import defaultdict
from dataclasses import dataclass, field
from datetime import datetime
from typing import TYPE_CHECKING

from convrelease.constants import (
    BREAKING_CHANGE_KEY,
    DEFAULT_COMMIT_TYPES,
    DEFAULT_MINOR_TYPES,
    ISSUE_REFERENCE_KEYS,
)
from convrelease.core.message import ConventionalMessage
from convrelease.core.parser import find_footer_start, parse_message, split_lines
from convrelease.core.version import VersionIncrement
from convrelease.exceptions import MessageError, MessageErrorKind

if TYPE_CHECKING:
    from collections.abc import Collection, Iterable

    from convrelease.config.models import CommitsConfig
    from convrelease.vcs.models import GitTag

DEFAULT_ALLOWED_TYPES: frozenset[str] = frozenset(DEFAULT_COMMIT_TYPES)

_ISSUE_REFERENCE_RE = re.compile(r"#\d+(?:\s*,\s*#\d+)*")


def classify(
    msg: ConventionalMessage | None,
    minor_types: Collection[str] = DEFAULT_MINOR_TYPES,
    *,
    unparseable: VersionIncrement = VersionIncrement.PATCH,
) -> VersionIncrement:
    """Determine the version increment for a single message.

    Args:
        msg: Parsed message, or None if the commit is not conventional
        minor_types: Commit types which increment the minor version
        unparseable: Increment used when ``msg`` is None

    Returns:
        MAJOR for breaking changes, MINOR for ``minor_types``,
        PATCH otherwise
    """
    if msg is None:
        return unparseable
    if msg.is_breaking_change():
        return VersionIncrement.MAJOR
    if msg.type in minor_types:
        return VersionIncrement.MINOR
    return VersionIncrement.PATCH


def calculate_increment(
    messages: Iterable[ConventionalMessage | None],
    minor_types: Collection[str] = DEFAULT_MINOR_TYPES,
    *,
    unparseable: VersionIncrement = VersionIncrement.PATCH,
) -> VersionIncrement:
    """Aggregate increments: the strongest one wins, NONE if empty."""
    return max(
        (classify(m, minor_types, unparseable=unparseable) for m in messages),
        default=VersionIncrement.NONE,
    )


@dataclass(frozen=True)
class Commit:
    """A commit decorated with its parsed message and release.

    Attributes:
        id: Full commit hash
        date: Commit date
        author_name: Author name
        author_email: Author email
        raw_message: Message as recorded in the log
        parsed: Parsed message, None if not a conventional commit
        tag: Tag pointing directly at this commit, if any
        release_tag: Nearest version tag at or after this commit
            (None = unreleased)
        bump: Increment this commit adds to the next version, set by
            the history resolver for unreleased commits (None otherwise)

    Commits are snapshots: ``parsed`` belongs to the commit and must not
    be modified through the message builder methods. It is left out of
    the hash since messages are mutable.
    """

    id: str
    date: datetime
    author_name: str
    author_email: str
    raw_message: str
    parsed: ConventionalMessage | None = field(default=None, hash=False)
    tag: GitTag | None = None
    release_tag: GitTag | None = None
    bump: VersionIncrement | None = None

    @property
    def short_id(self) -> str:
        return self.id[:7]

    @property
    def subject(self) -> str:
        return self.raw_message.split("\n", 1)[0].rstrip("\r")

    @property
    def is_conventional(self) -> bool:
        return self.parsed is not None

    @property
    def is_released(self) -> bool:
        return self.release_tag is not None

    @property
    def is_breaking(self) -> bool:
        return self.parsed is not None and self.parsed.is_breaking_change()

    @property
    def commit_type(self) -> str | None:
        return self.parsed.type if self.parsed else None

    def increment(
        self,
        minor_types: Collection[str] = DEFAULT_MINOR_TYPES,
        *,
        unparseable: VersionIncrement = VersionIncrement.PATCH,
    ) -> VersionIncrement:
        return classify(self.parsed, minor_types, unparseable=unparseable)


def group_commits_by_type(commits: Iterable[Commit]) -> dict[str, list[Commit]]:
    """Group commits by type. Non-conventional commits go under ``other``."""
    grouped: dict[str, list[Commit]] = defaultdict(list)
    for commit in commits:
        grouped[commit.commit_type or "other"].append(commit)
    return dict(grouped)


def get_breaking_changes(commits: Iterable[Commit]) -> list[Commit]:
    return [c for c in commits if c.is_breaking]


# =============================================================================
# Authoring-time validation
# =============================================================================


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of :func:`validate_message`.

    The parsed fields are filled in whenever the subject could be parsed,
    even if a later rule failed.
    """

    is_valid: bool
    error: str | None = None
    kind: MessageErrorKind | None = None
    message: ConventionalMessage | None = None

    @property
    def commit_type(self) -> str | None:
        return self.message.type if self.message else None

    @property
    def scope(self) -> str | None:
        return self.message.scope if self.message else None

    @property
    def description(self) -> str | None:
        return self.message.description if self.message else None

    @property
    def is_breaking(self) -> bool:
        return self.message is not None and self.message.is_breaking_change()


def _invalid(
    kind: MessageErrorKind, error: str, message: ConventionalMessage | None = None
) -> ValidationResult:
    return ValidationResult(is_valid=False, error=error, kind=kind, message=message)


def validate_message(
    text: str,
    *,
    allowed_types: Collection[str] | None = DEFAULT_ALLOWED_TYPES,
    max_subject_length: int | None = None,
    require_scope: bool = False,
    strict_scope_case: bool = True,
    config: CommitsConfig | None = None,
) -> ValidationResult:
    """Validate a newly authored commit message.

    This is stricter than parsing: on top of the grammar it checks the
    type against a whitelist, the subject length, the scope requirement,
    repeated ``BREAKING CHANGE`` trailers and issue references.

    Args:
        text: Commit message to validate
        allowed_types: Valid commit types (None allows any type)
        max_subject_length: Maximum subject length (None = unlimited)
        require_scope: Whether a scope is mandatory
        strict_scope_case: Require the whole scope to be lowercase
        config: Commit rules from the project configuration; when given,
            they replace the four options above

    Returns:
        ValidationResult; never raises for invalid input
    """
    if config is not None:
        allowed_types = config.types.keys()
        max_subject_length = config.max_subject_length
        require_scope = config.require_scope
        strict_scope_case = config.strict_scope_case

    if not text.strip():
        return _invalid(MessageErrorKind.EMPTY_MESSAGE, "Commit message cannot be empty")

    try:
        msg = parse_message(text, strict_scope_case=strict_scope_case)
    except MessageError as e:
        return _invalid(e.kind, f"Message does not follow conventional commit format: {e}")

    lines = split_lines(text)
    subject = lines[0]

    if allowed_types is not None and msg.type not in allowed_types:
        return _invalid(
            MessageErrorKind.INVALID_TYPE,
            f"Invalid commit type '{msg.type}'. Allowed types: {', '.join(sorted(allowed_types))}",
            msg,
        )

    if max_subject_length is not None and len(subject) > max_subject_length:
        return _invalid(
            MessageErrorKind.SUBJECT_TOO_LONG,
            f"Subject exceeds {max_subject_length} characters ({len(subject)})",
            msg,
        )

    if require_scope and msg.scope is None:
        return _invalid(MessageErrorKind.MISSING_SCOPE, "Subject must include a scope", msg)

    footer_start = find_footer_start(lines)
    footer_lines = lines[footer_start:] if footer_start is not None else []
    breaking_count = sum(1 for line in footer_lines if line.startswith(f"{BREAKING_CHANGE_KEY}: "))
    if breaking_count > 1:
        return _invalid(
            MessageErrorKind.DUPLICATE_BREAKING_CHANGE,
            f"'{BREAKING_CHANGE_KEY}' must appear only once",
            msg,
        )

    for key, value in msg.footer.items():
        if key in ISSUE_REFERENCE_KEYS and not _ISSUE_REFERENCE_RE.fullmatch(value.strip()):
            return _invalid(
                MessageErrorKind.INVALID_ISSUE_REFERENCE,
                f"'{key}' must reference issues as #<number>: {value!r}",
                msg,
            )

    return ValidationResult(is_valid=True, message=msg)


def validate_messages_batch(texts: Iterable[str], **kwargs) -> list[ValidationResult]:
    """Validate several messages with the same options."""
    return [validate_message(text, **kwargs) for text in texts]
