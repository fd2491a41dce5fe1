"""Conventional commit message parser.

The message is read line by line through three sections::

    SUBJECT --(blank line)--> BODY --(blank line + "Key: value")--> FOOTER

Splitting the body from the footer is a heuristic: a ``Key: value``
line starts the footer only when the previous line is blank and the key
is a valid footer token. The same line without a blank line before it
stays part of the body.
"""

from __future__ import annotations

import re
from enum import Enum, auto

from convrelease.core.message import (
    ConventionalMessage,
    is_valid_footer_key,
    is_valid_scope,
    is_valid_type,
    starts_with_lowercase,
)
from convrelease.exceptions import MessageErrorKind, MessageParseError

SUBJECT_SEPARATOR = ": "

# type, optional (scope), optional breaking marker
_PREFIX_RE = re.compile(r"(?P<type>\w+)(?:\((?P<scope>[^()]*)\))?(?P<breaking>!)?")

# Split at the first ": "
_FOOTER_RE = re.compile(r"(?P<key>[^:]+?): (?P<value>.*)")


class _Section(Enum):
    SUBJECT = auto()
    BODY = auto()
    FOOTER = auto()


def split_lines(text: str) -> list[str]:
    """Split commit text into lines, ignoring trailing newlines."""
    return [line.removesuffix("\r") for line in text.rstrip("\r\n").split("\n")]


def match_footer_line(line: str) -> tuple[str, str] | None:
    """Return ``(key, value)`` if the line is a valid ``Key: value`` trailer."""
    match = _FOOTER_RE.fullmatch(line)
    if match is None or not is_valid_footer_key(match["key"]):
        return None
    return match["key"], match["value"]


def find_footer_start(lines: list[str]) -> int | None:
    """Return the index of the first footer line of a parsed message.

    This is the line where :func:`parse_message` leaves the body: a
    valid trailer right after a blank line, from line 2 on.
    """
    for number in range(2, len(lines)):
        if not lines[number - 1] and match_footer_line(lines[number]) is not None:
            return number
    return None


def parse_subject(line: str, *, strict_scope_case: bool = True) -> ConventionalMessage:
    """Parse the subject line into a message with no body or footer.

    Raises:
        MessageParseError: If the line is not ``type(scope)!: description``
    """
    prefix, sep, description = line.partition(SUBJECT_SEPARATOR)
    if not sep:
        raise MessageParseError(
            MessageErrorKind.MISSING_SEPARATOR,
            f"subject must contain '{SUBJECT_SEPARATOR.strip()} ' after the type: {line!r}",
            line=0,
        )

    match = _PREFIX_RE.fullmatch(prefix)
    if match is None:
        raise MessageParseError(
            MessageErrorKind.MISSING_TYPE,
            f"missing or malformed commit type in {prefix!r}",
            line=0,
        )

    commit_type = match["type"]
    if not is_valid_type(commit_type):
        raise MessageParseError(
            MessageErrorKind.INVALID_TYPE,
            f"type must be lowercase: {commit_type!r}",
            line=0,
        )

    scope = match["scope"]
    if scope is not None and not is_valid_scope(scope, strict_case=strict_scope_case):
        raise MessageParseError(
            MessageErrorKind.INVALID_SCOPE,
            f"scope must be non-empty and lowercase: {scope!r}",
            line=0,
        )

    if not description.strip():
        raise MessageParseError(
            MessageErrorKind.MISSING_DESCRIPTION,
            "missing subject description",
            line=0,
        )
    if not starts_with_lowercase(description):
        raise MessageParseError(
            MessageErrorKind.INVALID_DESCRIPTION,
            f"description must start with a lowercase letter: {description!r}",
            line=0,
        )

    return ConventionalMessage(
        type=commit_type,
        scope=scope,
        is_breaking=match["breaking"] is not None,
        description=description,
    )


def parse_message(text: str, *, strict_scope_case: bool = True) -> ConventionalMessage:
    """Parse a raw commit message.

    Args:
        text: Full commit message
        strict_scope_case: Require the whole scope to be lowercase

    Returns:
        Parsed message. ``body`` is None and ``footer`` is empty when absent.

    Raises:
        MessageParseError: With the failing rule in ``kind`` and the
            0-based line number in ``line``
    """
    if not text.strip():
        raise MessageParseError(MessageErrorKind.EMPTY_MESSAGE, "empty commit message", line=0)

    lines = split_lines(text)
    msg = parse_subject(lines[0], strict_scope_case=strict_scope_case)

    section = _Section.SUBJECT
    body: list[str] | None = None
    prev_blank = False

    for number, line in enumerate(lines[1:], start=1):
        if section is _Section.SUBJECT:
            if line:
                raise MessageParseError(
                    MessageErrorKind.MISSING_BODY_SEPARATOR,
                    "subject must be followed by an empty line",
                    line=number,
                )
            section = _Section.BODY
            prev_blank = True

        elif section is _Section.BODY:
            trailer = match_footer_line(line) if prev_blank else None
            if trailer is not None:
                # Footer starts; the blank line before it is not part of the body
                key, value = trailer
                msg.footer[key] = value
                section = _Section.FOOTER
                continue
            if body is None:
                body = []
            body.append(line)
            prev_blank = not line

        else:
            trailer = match_footer_line(line)
            if trailer is None:
                raise MessageParseError(
                    MessageErrorKind.INVALID_FOOTER_LINE,
                    f"invalid footer line: {line!r}",
                    line=number,
                )
            key, value = trailer
            msg.footer[key] = value

    if body is not None:
        msg.body = "\n".join(body).rstrip("\n") or None

    return msg
