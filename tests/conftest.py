"""Shared fixtures for convrelease tests."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from convrelease.vcs.models import GitCommit
from tests.helpers import BASE_DATE, make_log

if TYPE_CHECKING:
    from pathlib import Path


@pytest.fixture
def feat_commit() -> GitCommit:
    return GitCommit(
        "feat1234567890",
        "feat: add user authentication",
        "Test",
        "test@test.com",
        BASE_DATE,
    )


@pytest.fixture
def fix_commit() -> GitCommit:
    return GitCommit(
        "fix1234567890",
        "fix(core): handle null response",
        "Test",
        "test@test.com",
        BASE_DATE,
    )


@pytest.fixture
def breaking_commit() -> GitCommit:
    return GitCommit(
        "break1234567890",
        "feat(api)!: redesign endpoints\n\nBREAKING CHANGE: v1 routes removed",
        "Test",
        "test@test.com",
        BASE_DATE,
    )


@pytest.fixture
def sample_log() -> list[GitCommit]:
    """Log with a v0.1.0 release and four commits on top of it."""
    return make_log(
        "docs: update readme",
        "feat(api)!: redesign endpoints",
        "fix(core): handle null response",
        "Merge branch 'main'",
        "chore(release): prepare 0.1.0",
        "feat: initial feature",
    )


@pytest.fixture
def temp_project_with_pyproject(tmp_path: Path) -> Path:
    pyproject = tmp_path / "pyproject.toml"
    pyproject.write_text(
        """\
[project]
name = "test-project"
version = "1.0.0"

[tool.convrelease.version]
types_minor = ["feat", "perf"]
tag_prefix = "v"

[tool.convrelease.commits]
strict_scope_case = false
"""
    )
    return tmp_path
