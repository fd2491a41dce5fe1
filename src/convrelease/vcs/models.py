"""Records exchanged with the version-control collaborator.

convrelease does not run git itself. Callers load the commit log and the
tag index and hand them over as these plain records.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import TYPE_CHECKING, Any

from convrelease.constants import DEFAULT_TAG_PREFIX
from convrelease.core.version import parse_tag_version
from convrelease.logging import get_logger

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

log = get_logger(__name__)


@dataclass(frozen=True)
class GitCommit:
    """A raw commit from the log (newest first)."""

    id: str
    message: str
    author_name: str
    author_email: str
    date: datetime


@dataclass(frozen=True)
class GitTag:
    """A tag pointing at a commit.

    Attributes:
        name: Short tag name (e.g. ``v1.2.0``)
        commit_id: ID of the commit the tag resolves to
        message: Annotation message, None for lightweight tags
        date: Tagger date, if annotated
    """

    name: str
    commit_id: str
    message: str | None = None
    date: datetime | None = None

    @property
    def is_annotated(self) -> bool:
        return self.message is not None


def _parse_timestamp(value: Any) -> datetime | None:
    if value is None or isinstance(value, datetime):
        return value
    if isinstance(value, int | float):
        return datetime.fromtimestamp(value).astimezone()
    return datetime.fromisoformat(str(value))


def tags_from_index(index: Mapping[str, Mapping[str, Any]]) -> list[GitTag]:
    """Build tags from a raw tag index.

    Args:
        index: ``tag name -> {target_commit_id, is_annotated,
            annotation_message, tag_timestamp}``

    Returns:
        Tags in index order. Entries with a malformed timestamp or no
        target are logged and dropped.
    """
    tags = []
    for name, entry in index.items():
        commit_id = entry.get("target_commit_id")
        if not commit_id:
            log.warning("tag has no target commit, skipped", tag=name)
            continue
        try:
            date = _parse_timestamp(entry.get("tag_timestamp"))
        except (ValueError, TypeError, OverflowError, OSError) as e:
            log.warning("tag has a malformed date, skipped", tag=name, error=str(e))
            continue

        message = None
        if entry.get("is_annotated", False):
            message = (entry.get("annotation_message") or "").strip()
        tags.append(GitTag(name=name, commit_id=commit_id, message=message, date=date))
    return tags


def index_tags(tags: Iterable[GitTag], prefix: str = DEFAULT_TAG_PREFIX) -> dict[str, GitTag]:
    """Map commit IDs to the tag that identifies them.

    When a commit carries several tags, an annotated version tag wins
    over anything else, and the highest version wins among those.
    Otherwise the first tag seen is kept.
    """
    by_commit: dict[str, GitTag] = {}
    for tag in tags:
        existing = by_commit.get(tag.commit_id)
        if existing is None or _tag_rank(tag, prefix) > _tag_rank(existing, prefix):
            by_commit[tag.commit_id] = tag
    return by_commit


def _tag_rank(tag: GitTag, prefix: str) -> tuple:
    version = parse_tag_version(tag.name, prefix) if tag.is_annotated else None
    if version is None:
        return (0,)
    return (1, version)
