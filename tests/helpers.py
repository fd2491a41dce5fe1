"""Builders for commit logs and tags used across the test suite."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

from convrelease.vcs.models import GitCommit, GitTag

BASE_DATE = datetime(2024, 1, 1, tzinfo=UTC)


def make_log(*messages: str) -> list[GitCommit]:
    """Build a commit log, newest first, from messages given newest first."""
    count = len(messages)
    return [
        GitCommit(
            id=f"{count - i:02d}" + "a" * 38,
            message=message,
            author_name="Test",
            author_email="test@test.com",
            date=BASE_DATE + timedelta(days=count - i),
        )
        for i, message in enumerate(messages)
    ]


def annotated(name: str, commit: GitCommit) -> GitTag:
    return GitTag(name=name, commit_id=commit.id, message=f"Release {name}", date=commit.date)


def lightweight(name: str, commit: GitCommit) -> GitTag:
    return GitTag(name=name, commit_id=commit.id)
