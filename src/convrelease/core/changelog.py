"""Changelog generation from a resolved commit history.

Commits are grouped by release (the nearest version tag), then by the
sections configured in :class:`ChangelogConfig`. The result is a plain
data structure that callers can render with their own templates;
:func:`render_changelog` provides a simple Markdown rendering.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import TYPE_CHECKING

from convrelease.constants import UNCATEGORIZED_SECTION
from convrelease.core.version import parse_tag_version
from convrelease.exceptions import ChangelogError

if TYPE_CHECKING:
    from convrelease.config.models import ConvReleaseConfig
    from convrelease.core.commits import Commit
    from convrelease.core.history import CommitHistory

UNRELEASED = "Unreleased"


@dataclass
class ReleaseSection:
    label: str
    items: list[str] = field(default_factory=list)


@dataclass
class Release:
    """One release entry of the changelog.

    ``version`` is the rendered version (e.g. ``v1.2.0``) or ``None`` for
    unreleased changes.
    """

    version: str | None
    date: datetime | None = None
    url: str | None = None
    sections: list[ReleaseSection] = field(default_factory=list)

    @property
    def title(self) -> str:
        return self.version or UNRELEASED


@dataclass
class Changelog:
    releases: list[Release] = field(default_factory=list)


def find_section(sections: dict[str, list[str]], commit_type: str) -> str | None:
    """Return the label of the section listing ``commit_type``."""
    for label, types in sections.items():
        if commit_type in types:
            return label
    return None


def format_commit_for_changelog(
    commit: Commit,
    *,
    include_scope: bool = True,
    include_sha: bool = True,
    origin_url: str | None = None,
) -> str:
    """Format a commit as a changelog line.

    Args:
        commit: Commit to format
        include_scope: Prefix with the bold scope
        include_sha: Append the short commit ID
        origin_url: Repository URL used to link the commit ID

    Returns:
        e.g. ``**api:** add pagination [abc1234](https://host/repo/commit/abc1234...)``
    """
    msg = commit.parsed
    if msg is None:
        text = commit.subject
    else:
        scope = f"**{msg.scope}:** " if include_scope and msg.scope else ""
        breaking = "[BREAKING] " if msg.is_breaking_change() else ""
        text = f"{breaking}{scope}{msg.description}"

    if include_sha:
        if origin_url:
            text += f" [{commit.short_id}]({origin_url}/commit/{commit.id})"
        else:
            text += f" ({commit.short_id})"
    return text


def build_release_url(origin_url: str, from_ref: str, to_ref: str) -> str:
    """Build a compare URL, e.g. ``https://github.com/org/repo/compare/v0.1.1...v0.1.2``."""
    return f"{origin_url}/compare/{from_ref}...{to_ref}"


def build_changelog(
    history: CommitHistory,
    config: ConvReleaseConfig,
    *,
    origin_url: str | None = None,
) -> Changelog:
    """Build the changelog structure for a history.

    Args:
        history: Resolved history (newest first)
        config: Configuration providing the section layout
        origin_url: Repository URL used for commit and compare links

    Returns:
        Releases newest first. Sections follow the configured order,
        followed by ``Uncategorized`` for non-conventional commits.

    Raises:
        ChangelogError: If no sections are configured
    """
    sections_config = config.changelog.sections
    if not sections_config:
        raise ChangelogError("No changelog sections configured")

    prefix = config.version.tag_prefix
    groups = history.releases()
    releases = []

    for index, (tag, commits) in enumerate(groups):
        by_section: dict[str, list[str]] = {label: [] for label in sections_config}
        by_section[UNCATEGORIZED_SECTION] = []

        for commit in commits:
            if commit.parsed is None:
                label = UNCATEGORIZED_SECTION
            else:
                label = find_section(sections_config, commit.parsed.type)
                if label is None:
                    continue
            by_section[label].append(
                format_commit_for_changelog(
                    commit,
                    include_scope=config.changelog.include_scope,
                    origin_url=origin_url,
                )
            )

        if tag is None:
            version = None
            to_ref = "HEAD"
            date = None
        else:
            parsed = parse_tag_version(tag.name, prefix)
            version = parsed.format("v") if parsed else tag.name
            to_ref = tag.name
            date = tag.date or commits[0].date

        url = None
        if origin_url:
            previous = groups[index + 1][0] if index + 1 < len(groups) else None
            if previous is not None:
                url = build_release_url(origin_url, previous.name, to_ref)

        releases.append(
            Release(
                version=version,
                date=date,
                url=url,
                sections=[
                    ReleaseSection(label=label, items=items)
                    for label, items in by_section.items()
                    if items
                ],
            )
        )

    return Changelog(releases=releases)


def render_changelog(changelog: Changelog, *, title: str = "Changelog") -> str:
    """Render a changelog as Markdown."""
    lines = [f"# {title}", ""]

    for release in changelog.releases:
        heading = f"[{release.title}]({release.url})" if release.url else release.title
        if release.date is not None:
            heading += f" - {release.date.strftime('%Y-%m-%d')}"
        lines.append(f"## {heading}")
        lines.append("")

        if not release.sections:
            lines.append("No notable changes.")
            lines.append("")

        for section in release.sections:
            lines.append(f"### {section.label}")
            lines.append("")
            lines.extend(f"- {item}" for item in section.items)
            lines.append("")

    return "\n".join(lines).rstrip("\n") + "\n"
