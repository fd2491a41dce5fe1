"""Configuration models for convrelease.

All models are pydantic models with sensible defaults, so an empty
``[tool.convrelease]`` table (or none at all) yields a working setup.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from convrelease.constants import (
    DEFAULT_CHANGELOG_SECTIONS,
    DEFAULT_COMMIT_TYPES,
    DEFAULT_INITIAL_VERSION,
    DEFAULT_MINOR_TYPES,
    DEFAULT_TAG_PREFIX,
)
from convrelease.core.version import Version
from convrelease.exceptions import InvalidVersionError

IncrementName = Literal["none", "patch", "minor", "major"]


class _Model(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)


class CommitsConfig(_Model):
    """Commit message rules."""

    types: dict[str, str] = Field(default_factory=lambda: dict(DEFAULT_COMMIT_TYPES))
    """Valid commit types and their descriptions."""

    strict_scope_case: bool = True
    """Require the whole scope to be lowercase (not only its first character)."""

    max_subject_length: int | None = Field(default=None, gt=0)
    require_scope: bool = False

    @field_validator("types")
    @classmethod
    def _types_lowercase(cls, value: dict[str, str]) -> dict[str, str]:
        for key in value:
            if not key or key != key.lower():
                raise ValueError(f"commit type must be a non-empty lowercase word: {key!r}")
        return value


class VersionConfig(_Model):
    """Version resolution rules."""

    types_minor: list[str] = Field(default_factory=lambda: list(DEFAULT_MINOR_TYPES))
    tag_prefix: str = DEFAULT_TAG_PREFIX
    initial_version: str = DEFAULT_INITIAL_VERSION
    unparseable_increment: IncrementName = "patch"
    """Increment applied to unreleased commits which are not conventional."""

    @field_validator("initial_version")
    @classmethod
    def _initial_version_semver(cls, value: str) -> str:
        try:
            Version.parse(value)
        except InvalidVersionError as e:
            raise ValueError(str(e)) from e
        return value

    @property
    def initial(self) -> Version:
        return Version.parse(self.initial_version)


class ChangelogConfig(_Model):
    """Changelog grouping rules."""

    sections: dict[str, list[str]] = Field(
        default_factory=lambda: {k: list(v) for k, v in DEFAULT_CHANGELOG_SECTIONS.items()}
    )
    """Section label -> commit types. Insertion order is the display order."""

    include_scope: bool = True


class ConvReleaseConfig(_Model):
    """Root configuration (``[tool.convrelease]``)."""

    commits: CommitsConfig = Field(default_factory=CommitsConfig)
    version: VersionConfig = Field(default_factory=VersionConfig)
    changelog: ChangelogConfig = Field(default_factory=ChangelogConfig)

    @property
    def effective_tag_prefix(self) -> str:
        return self.version.tag_prefix

    @property
    def minor_types(self) -> frozenset[str]:
        return frozenset(self.version.types_minor)
