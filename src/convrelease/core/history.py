"""Commit history resolution.

Walks the commit log from HEAD backwards, attaches each commit to the
release that contains it and computes the next version from the
unreleased commits.

Two notions of "latest version" exist and are kept apart:

- :attr:`CommitHistory.current_version` is the version of the *nearest*
  annotated version tag reachable from HEAD. It drives release grouping.
- :func:`latest_stable_version` is the *highest* version among all
  annotated version tags, wherever they sit in the history.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from itertools import groupby
from typing import TYPE_CHECKING

from convrelease.core.commits import Commit, classify
from convrelease.core.parser import parse_message
from convrelease.core.version import Version, VersionIncrement, apply_increment, parse_tag_version
from convrelease.exceptions import MessageParseError
from convrelease.logging import get_logger

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping, Sequence

    from convrelease.config.models import ConvReleaseConfig
    from convrelease.core.message import ConventionalMessage
    from convrelease.vcs.models import GitCommit, GitTag

log = get_logger(__name__)


class WarningKind(Enum):
    UNPARSEABLE_MESSAGE = "unparseable_message"
    INVALID_TAG = "invalid_tag"
    LIGHTWEIGHT_TAG = "lightweight_tag"


@dataclass(frozen=True)
class HistoryWarning:
    """A non-fatal problem found while resolving the history."""

    commit_id: str
    kind: WarningKind
    message: str


@dataclass(frozen=True)
class CommitHistory:
    """Resolved commit history.

    Attributes:
        commits: Decorated commits, newest first
        current_version: Version of the nearest release tag (None if unreleased)
        next_version: Version for the unreleased commits
        increment: Aggregated increment of the unreleased commits
        warnings: Commits and tags that could not be used as-is
    """

    commits: tuple[Commit, ...]
    current_version: Version | None
    next_version: Version
    increment: VersionIncrement = VersionIncrement.NONE
    warnings: tuple[HistoryWarning, ...] = ()

    def current_version_str(self) -> str | None:
        if self.current_version is None:
            return None
        return self.current_version.format("v")

    def next_version_str(self) -> str:
        return self.next_version.format("v")

    @property
    def has_unreleased_changes(self) -> bool:
        return self.increment is not VersionIncrement.NONE

    def unreleased_commits(self) -> list[Commit]:
        return [c for c in self.commits if not c.is_released]

    def releases(self) -> list[tuple[GitTag | None, list[Commit]]]:
        """Group commits by release, newest release first.

        The unreleased group (tag None) comes first when present.
        """
        groups = []
        for _, group in groupby(self.commits, key=lambda c: c.release_tag):
            commits = list(group)
            groups.append((commits[0].release_tag, commits))
        return groups


def _parse_commit_message(
    raw: GitCommit,
    *,
    strict_scope_case: bool,
    known_types: Mapping[str, str],
) -> tuple[ConventionalMessage | None, MessageParseError | None]:
    try:
        msg = parse_message(raw.message, strict_scope_case=strict_scope_case)
    except MessageParseError as e:
        log.debug("commit is not a conventional commit", commit=raw.id[:7], error=str(e))
        return None, e
    if known_types and msg.type not in known_types:
        log.debug("commit has an unknown type", commit=raw.id[:7], type=msg.type)
    return msg, None


def resolve_history(
    commits: Iterable[GitCommit],
    tags: Mapping[str, GitTag],
    config: ConvReleaseConfig | None = None,
) -> CommitHistory:
    """Resolve a commit log into a versioned history.

    Args:
        commits: Raw commits, newest first
        tags: Commit ID -> tag pointing at that commit
        config: Configuration (default: built-in defaults)

    Returns:
        A new :class:`CommitHistory`. Bad messages and tags are reported
        in ``warnings``; they never abort the resolution.
    """
    if config is None:
        from convrelease.config.models import ConvReleaseConfig

        config = ConvReleaseConfig()

    prefix = config.version.tag_prefix
    minor_types = config.minor_types
    unparseable = VersionIncrement.from_name(config.version.unparseable_increment)

    decorated: list[Commit] = []
    warnings: list[HistoryWarning] = []
    current_version: Version | None = None
    latest_release_tag: GitTag | None = None
    increment = VersionIncrement.NONE
    seen_release = False

    for raw in commits:
        parsed, parse_error = _parse_commit_message(
            raw,
            strict_scope_case=config.commits.strict_scope_case,
            known_types=config.commits.types,
        )

        tag = tags.get(raw.id)
        if tag is not None:
            version = parse_tag_version(tag.name, prefix) if tag.is_annotated else None
            if version is not None:
                latest_release_tag = tag
                if current_version is None:
                    current_version = version
                seen_release = True
            elif not tag.is_annotated:
                log.debug("lightweight tag ignored for versioning", tag=tag.name, commit=raw.id[:7])
                if parse_tag_version(tag.name, prefix) is not None:
                    warnings.append(
                        HistoryWarning(
                            raw.id,
                            WarningKind.LIGHTWEIGHT_TAG,
                            f"tag {tag.name} looks like a version but is not annotated",
                        )
                    )
            else:
                log.debug("tag is not a semantic version", tag=tag.name, commit=raw.id[:7])
                warnings.append(
                    HistoryWarning(
                        raw.id,
                        WarningKind.INVALID_TAG,
                        f"tag {tag.name} is not a semantic version",
                    )
                )

        commit_increment: VersionIncrement | None = None
        if not seen_release:
            commit_increment = classify(parsed, minor_types, unparseable=unparseable)
            increment = max(increment, commit_increment)
            if parsed is None:
                log.warning(
                    "unreleased commit is not conventional",
                    commit=raw.id[:7],
                    increment=str(unparseable),
                )
                warnings.append(
                    HistoryWarning(
                        raw.id,
                        WarningKind.UNPARSEABLE_MESSAGE,
                        f"counted as {unparseable}: {parse_error}",
                    )
                )

        decorated.append(
            Commit(
                id=raw.id,
                date=raw.date,
                author_name=raw.author_name,
                author_email=raw.author_email,
                raw_message=raw.message,
                parsed=parsed,
                tag=tag,
                release_tag=latest_release_tag,
                bump=commit_increment,
            )
        )

    next_version = apply_increment(
        increment,
        current_version,
        config.version.initial,
    )
    log.debug(
        "history resolved",
        commits=len(decorated),
        current=str(current_version) if current_version else None,
        next=str(next_version),
        increment=str(increment),
    )

    return CommitHistory(
        commits=tuple(decorated),
        current_version=current_version,
        next_version=next_version,
        increment=increment,
        warnings=tuple(warnings),
    )


def latest_stable_version(
    tags: Iterable[GitTag],
    *,
    prefix: str = "v",
    include_prereleases: bool = True,
) -> Version | None:
    """Return the highest version among annotated version tags.

    This ignores where the tags sit in the history, so it can differ from
    :attr:`CommitHistory.current_version` when tags were created out of
    order.
    """
    versions: Sequence[Version] = [
        v
        for v in (parse_tag_version(t.name, prefix) for t in tags if t.is_annotated)
        if v is not None and (include_prereleases or not v.is_prerelease)
    ]
    return max(versions, default=None)
