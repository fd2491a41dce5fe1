"""Tests for semantic version parsing and bumping."""

from __future__ import annotations

import pytest

from convrelease.core.version import (
    Version,
    VersionIncrement,
    apply_increment,
    parse_tag_version,
    parse_version,
)
from convrelease.exceptions import InvalidVersionError


class TestVersionParse:
    """Tests for Version.parse()."""

    def test_parse_simple(self):
        assert Version.parse("1.2.3") == Version(1, 2, 3)

    def test_parse_prerelease_and_build(self):
        version = parse_version("1.0.0-rc.1+build.5")

        assert version.prerelease == ("rc", "1")
        assert version.build == ("build", "5")
        assert version.is_prerelease
        assert str(version) == "1.0.0-rc.1+build.5"

    @pytest.mark.parametrize("text", ["1.2", "v1.2.3", "01.2.3", "1.2.3-", "nightly", ""])
    def test_invalid(self, text: str):
        with pytest.raises(InvalidVersionError):
            Version.parse(text)

    def test_format_with_prefix(self):
        assert Version(1, 2, 0).format() == "v1.2.0"
        assert Version(1, 2, 0).format("release-") == "release-1.2.0"


class TestVersionOrdering:
    """SemVer precedence."""

    def test_numeric_fields(self):
        assert Version(1, 2, 3) < Version(1, 10, 0) < Version(2, 0, 0)

    def test_prerelease_before_release(self):
        assert Version.parse("1.0.0-rc.1") < Version(1, 0, 0)

    def test_prerelease_identifiers(self):
        ordered = [
            "1.0.0-alpha",
            "1.0.0-alpha.1",
            "1.0.0-alpha.beta",
            "1.0.0-beta",
            "1.0.0-beta.2",
            "1.0.0-beta.11",
            "1.0.0-rc.1",
            "1.0.0",
        ]
        versions = [Version.parse(v) for v in ordered]

        assert sorted(reversed(versions)) == versions

    def test_build_ignored(self):
        assert Version.parse("1.0.0+a") == Version.parse("1.0.0+b")


class TestBump:
    """Tests for Version.bump() and apply_increment()."""

    @pytest.mark.parametrize(
        ("increment", "expected"),
        [
            (VersionIncrement.NONE, Version(2, 3, 4)),
            (VersionIncrement.PATCH, Version(2, 3, 5)),
            (VersionIncrement.MINOR, Version(2, 4, 0)),
            (VersionIncrement.MAJOR, Version(3, 0, 0)),
        ],
    )
    def test_stable_series(self, increment: VersionIncrement, expected: Version):
        assert Version(2, 3, 4).bump(increment) == expected

    @pytest.mark.parametrize(
        ("increment", "expected"),
        [
            (VersionIncrement.NONE, Version(0, 5, 2)),
            (VersionIncrement.PATCH, Version(0, 5, 3)),
            (VersionIncrement.MINOR, Version(0, 6, 0)),
            (VersionIncrement.MAJOR, Version(0, 6, 0)),
        ],
    )
    def test_pre_1_0_series(self, increment: VersionIncrement, expected: Version):
        """Major never bumps automatically before 1.0."""
        assert Version(0, 5, 2).bump(increment) == expected

    @pytest.mark.parametrize("increment", list(VersionIncrement))
    def test_no_current_version(self, increment: VersionIncrement):
        assert apply_increment(increment, None) == Version(0, 1, 0)

    def test_custom_initial_version(self):
        assert apply_increment(VersionIncrement.MAJOR, None, Version(1, 0, 0)) == Version(1, 0, 0)

    def test_prerelease_dropped_on_bump(self):
        assert Version.parse("1.0.0-rc.1").bump(VersionIncrement.PATCH) == Version(1, 0, 1)


class TestParseTagVersion:
    """Tests for parse_tag_version()."""

    def test_with_prefix(self):
        assert parse_tag_version("v1.2.0") == Version(1, 2, 0)

    def test_prefix_is_optional(self):
        assert parse_tag_version("1.2.0") == Version(1, 2, 0)

    def test_custom_prefix(self):
        assert parse_tag_version("release-1.2.0", "release-") == Version(1, 2, 0)

    def test_not_a_version(self):
        assert parse_tag_version("nightly") is None
        assert parse_tag_version("v1.2") is None
