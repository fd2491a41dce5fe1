"""Conventional commit message model.

See https://www.conventionalcommits.org/en/v1.0.0/ for the format:

    type(scope)!: description

    body

    Key: value
    BREAKING CHANGE: value
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field

from convrelease.constants import BREAKING_CHANGE_KEY
from convrelease.exceptions import MessageErrorKind, MessageValidationError

_TYPE_RE = re.compile(r"\w+")
_WHITESPACE_RE = re.compile(r"\s")
_SCOPE_FORBIDDEN_RE = re.compile(r"[\s()]")


def is_valid_footer_key(key: str) -> bool:
    """Check a footer key.

    A key is a token without whitespace or colons, except for
    ``BREAKING CHANGE``.
    """
    if not key or ":" in key:
        return False
    if _WHITESPACE_RE.search(key):
        return key == BREAKING_CHANGE_KEY
    return True


def is_valid_type(value: str) -> bool:
    return bool(_TYPE_RE.fullmatch(value)) and value == value.lower()


def is_valid_scope(value: str, *, strict_case: bool = True) -> bool:
    """Check a scope: non-empty, starts lowercase, and is fully lowercase if strict."""
    if not value or _SCOPE_FORBIDDEN_RE.search(value):
        return False
    if not value[0].islower():
        return False
    return not strict_case or value == value.lower()


def starts_with_lowercase(value: str) -> bool:
    return bool(value) and value[0].islower()


def is_single_line(value: str) -> bool:
    return "\n" not in value and "\r" not in value


@dataclass
class ConventionalMessage:
    """A parsed conventional commit message.

    Attributes:
        type: Commit type (e.g. ``feat``)
        description: Subject text after ``": "``
        scope: Optional scope (e.g. ``api``)
        is_breaking: ``!`` marker present in the subject
        body: Free text between subject and footer
        footer: Trailers, in insertion order. Re-inserting a key
            replaces its value without moving it.
    """

    type: str
    description: str
    scope: str | None = None
    is_breaking: bool = False
    body: str | None = None
    footer: dict[str, str] = field(default_factory=dict)

    @classmethod
    def parse(cls, text: str, *, strict_scope_case: bool = True) -> ConventionalMessage:
        """Parse raw commit text. See :func:`convrelease.core.parser.parse_message`."""
        from convrelease.core.parser import parse_message

        return parse_message(text, strict_scope_case=strict_scope_case)

    def is_breaking_change(self) -> bool:
        """True if the subject has ``!`` or the footer has ``BREAKING CHANGE``."""
        return self.is_breaking or BREAKING_CHANGE_KEY in self.footer

    def add_footer_note(self, key: str, value: str) -> ConventionalMessage:
        """Insert or update a footer entry.

        Raises:
            MessageValidationError: If the key is not a valid footer token
        """
        if not is_valid_footer_key(key):
            raise MessageValidationError(
                MessageErrorKind.INVALID_FOOTER_KEY,
                f"invalid footer key: {key!r}",
            )
        self.footer[key] = value
        return self

    def add_breaking_change(self, description: str) -> ConventionalMessage:
        """Mark the message as breaking and record the description in the footer."""
        self.is_breaking = True
        self.footer[BREAKING_CHANGE_KEY] = description
        return self

    @property
    def breaking_description(self) -> str | None:
        return self.footer.get(BREAKING_CHANGE_KEY)

    @property
    def header(self) -> str:
        """The subject line (``type(scope)!: description``)."""
        scope = f"({self.scope})" if self.scope else ""
        marker = "!" if self.is_breaking else ""
        return f"{self.type}{scope}{marker}: {self.description}"

    def __str__(self) -> str:
        from convrelease.core.formatter import format_message

        return format_message(self)
