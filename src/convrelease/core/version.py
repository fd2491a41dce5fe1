"""Semantic version parsing and manipulation.

Versions follow SemVer 2.0.0 (``MAJOR.MINOR.PATCH[-PRERELEASE][+BUILD]``)
with the standard precedence rules.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import IntEnum
from functools import total_ordering

from convrelease.constants import DEFAULT_TAG_PREFIX
from convrelease.exceptions import InvalidVersionError

# https://semver.org/#is-there-a-suggested-regular-expression-regex-to-check-a-semver-string
_SEMVER_RE = re.compile(
    r"(?P<major>0|[1-9]\d*)\.(?P<minor>0|[1-9]\d*)\.(?P<patch>0|[1-9]\d*)"
    r"(?:-(?P<prerelease>(?:0|[1-9]\d*|\d*[a-zA-Z-][0-9a-zA-Z-]*)"
    r"(?:\.(?:0|[1-9]\d*|\d*[a-zA-Z-][0-9a-zA-Z-]*))*))?"
    r"(?:\+(?P<build>[0-9a-zA-Z-]+(?:\.[0-9a-zA-Z-]+)*))?"
)


class VersionIncrement(IntEnum):
    """Kind of version increment, ordered from weakest to strongest.

    The increment for a set of commits is the ``max()`` of the
    increments of each commit.
    """

    NONE = 0
    PATCH = 1
    MINOR = 2
    MAJOR = 3

    def __str__(self) -> str:
        return self.name.lower()

    @classmethod
    def from_name(cls, name: str) -> VersionIncrement:
        return cls[name.upper()]


def _prerelease_key(identifiers: tuple[str, ...]) -> tuple[tuple[int, int | str], ...]:
    # Numeric identifiers sort before alphanumeric ones
    return tuple((0, int(i)) if i.isdigit() else (1, i) for i in identifiers)


@total_ordering
@dataclass(frozen=True)
class Version:
    """A semantic version.

    Build metadata is kept for display but ignored for ordering and
    equality, as SemVer requires.
    """

    major: int
    minor: int
    patch: int
    prerelease: tuple[str, ...] = ()
    build: tuple[str, ...] = field(default=(), compare=False)

    @classmethod
    def parse(cls, text: str) -> Version:
        """Parse a version string such as ``1.2.3-rc.1+build.5``.

        Raises:
            InvalidVersionError: If the string is not a SemVer version
        """
        match = _SEMVER_RE.fullmatch(text.strip())
        if match is None:
            raise InvalidVersionError(f"Invalid semantic version: {text!r}")
        prerelease = match["prerelease"]
        build = match["build"]
        return cls(
            major=int(match["major"]),
            minor=int(match["minor"]),
            patch=int(match["patch"]),
            prerelease=tuple(prerelease.split(".")) if prerelease else (),
            build=tuple(build.split(".")) if build else (),
        )

    @property
    def is_prerelease(self) -> bool:
        return bool(self.prerelease)

    def _precedence(self) -> tuple:
        # A release sorts after all of its pre-releases
        if self.prerelease:
            return (self.major, self.minor, self.patch, 0, _prerelease_key(self.prerelease))
        return (self.major, self.minor, self.patch, 1, ())

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return self._precedence() < other._precedence()

    def __str__(self) -> str:
        text = f"{self.major}.{self.minor}.{self.patch}"
        if self.prerelease:
            text += "-" + ".".join(self.prerelease)
        if self.build:
            text += "+" + ".".join(self.build)
        return text

    def format(self, prefix: str = DEFAULT_TAG_PREFIX) -> str:
        """Render with a tag prefix, e.g. ``v1.2.0``."""
        return f"{prefix}{self}"

    def bump(self, increment: VersionIncrement) -> Version:
        """Apply an increment.

        Before 1.0.0, breaking changes and features both bump the minor
        field; the major field is never bumped automatically.
        """
        if increment is VersionIncrement.NONE:
            return self
        if increment is VersionIncrement.PATCH:
            return Version(self.major, self.minor, self.patch + 1)
        if self.major == 0 or increment is VersionIncrement.MINOR:
            return Version(self.major, self.minor + 1, 0)
        return Version(self.major + 1, 0, 0)


def parse_version(text: str) -> Version:
    """Parse a version string. See :meth:`Version.parse`."""
    return Version.parse(text)


def parse_tag_version(name: str, prefix: str = DEFAULT_TAG_PREFIX) -> Version | None:
    """Return the version named by a tag, or None if it is not a version.

    The prefix is optional: with the default prefix both ``v1.2.0`` and
    ``1.2.0`` are accepted.
    """
    name = name.strip()
    if prefix:
        name = name.removeprefix(prefix)
    try:
        return Version.parse(name)
    except InvalidVersionError:
        return None


def apply_increment(
    increment: VersionIncrement,
    current: Version | None,
    initial: Version | None = None,
) -> Version:
    """Compute the next version.

    Args:
        increment: Aggregated increment of the unreleased commits
        current: Current released version, or None if nothing was released
        initial: Version used when there is no release yet (default 0.1.0)

    Returns:
        ``initial`` when ``current`` is None, whatever the increment;
        otherwise ``current.bump(increment)``.
    """
    if current is None:
        return initial if initial is not None else Version(0, 1, 0)
    return current.bump(increment)
