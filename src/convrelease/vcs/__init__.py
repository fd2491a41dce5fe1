"""Version-control records consumed by convrelease."""

from __future__ import annotations

from convrelease.vcs.models import GitCommit, GitTag, index_tags, tags_from_index

__all__ = [
    "GitCommit",
    "GitTag",
    "index_tags",
    "tags_from_index",
]
