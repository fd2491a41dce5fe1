"""Conventional commit message formatter.

Produces the canonical text of a :class:`ConventionalMessage`::

    type(scope)!: description

    body

    Key: value

Blocks that are absent are omitted together with their blank line.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from convrelease.core.message import (
    is_single_line,
    is_valid_footer_key,
    is_valid_scope,
    is_valid_type,
    starts_with_lowercase,
)
from convrelease.exceptions import MessageErrorKind, MessageValidationError

if TYPE_CHECKING:
    from collections.abc import Collection

    from convrelease.config.models import CommitsConfig
    from convrelease.core.message import ConventionalMessage


def validate_fields(
    msg: ConventionalMessage,
    *,
    allowed_types: Collection[str] | None = None,
    strict_scope_case: bool = True,
) -> None:
    """Check that a message can be written as a valid conventional commit.

    Args:
        msg: Message to check
        allowed_types: If given, the type must be one of these
        strict_scope_case: Require the whole scope to be lowercase

    Raises:
        MessageValidationError: On the first violated rule
    """
    if not msg.type:
        raise MessageValidationError(MessageErrorKind.MISSING_TYPE, "missing commit type")
    if not is_valid_type(msg.type):
        raise MessageValidationError(
            MessageErrorKind.INVALID_TYPE,
            f"type must be a lowercase word: {msg.type!r}",
        )
    if allowed_types is not None and msg.type not in allowed_types:
        raise MessageValidationError(
            MessageErrorKind.INVALID_TYPE,
            f"Invalid commit type '{msg.type}'. Allowed: {', '.join(sorted(allowed_types))}",
        )
    if msg.scope is not None and not is_valid_scope(msg.scope, strict_case=strict_scope_case):
        raise MessageValidationError(
            MessageErrorKind.INVALID_SCOPE,
            f"scope must be non-empty and lowercase: {msg.scope!r}",
        )
    if not msg.description.strip():
        raise MessageValidationError(
            MessageErrorKind.MISSING_DESCRIPTION,
            "missing subject description",
        )
    if not is_single_line(msg.description) or not starts_with_lowercase(msg.description):
        raise MessageValidationError(
            MessageErrorKind.INVALID_DESCRIPTION,
            f"description must be one line starting with a lowercase letter: {msg.description!r}",
        )
    for key, value in msg.footer.items():
        if not is_valid_footer_key(key):
            raise MessageValidationError(
                MessageErrorKind.INVALID_FOOTER_KEY,
                f"invalid footer key: {key!r}",
            )
        # A trailer occupies exactly one line
        if not is_single_line(value):
            raise MessageValidationError(
                MessageErrorKind.INVALID_FOOTER_VALUE,
                f"footer value for {key!r} must be a single line: {value!r}",
            )


def format_message(
    msg: ConventionalMessage,
    *,
    allowed_types: Collection[str] | None = None,
    strict_scope_case: bool = True,
    config: CommitsConfig | None = None,
) -> str:
    """Render a message as commit text.

    Args:
        msg: Message to render
        allowed_types: If given, the type must be one of these
        strict_scope_case: Require the whole scope to be lowercase
        config: Commit rules; when given, its type catalogue and scope
            case rule replace ``allowed_types`` and ``strict_scope_case``

    Raises:
        MessageValidationError: If the message breaks a grammar rule or
            its type is not allowed
    """
    if config is not None:
        allowed_types = config.types.keys()
        strict_scope_case = config.strict_scope_case
    validate_fields(msg, allowed_types=allowed_types, strict_scope_case=strict_scope_case)

    blocks = [msg.header]
    if msg.body:
        blocks.append(msg.body)
    if msg.footer:
        blocks.append("\n".join(f"{key}: {value}" for key, value in msg.footer.items()))
    return "\n\n".join(blocks)
