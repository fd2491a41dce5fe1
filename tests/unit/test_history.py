"""Tests for commit history resolution."""

from __future__ import annotations

from convrelease.config.models import ConvReleaseConfig, VersionConfig
from convrelease.core.history import (
    CommitHistory,
    WarningKind,
    latest_stable_version,
    resolve_history,
)
from convrelease.core.version import Version, VersionIncrement
from convrelease.vcs.models import GitTag, index_tags
from tests.helpers import annotated, lightweight, make_log


class TestResolveHistory:
    """Tests for resolve_history()."""

    def test_empty_log(self):
        history = resolve_history([], {})

        assert history.commits == ()
        assert history.current_version is None
        assert history.next_version == Version(0, 1, 0)
        assert history.increment is VersionIncrement.NONE

    def test_no_tags_gives_initial_version(self):
        """Without a release the next version is 0.1.0 whatever the increment."""
        log = make_log("feat!: big change", "fix: small fix")
        history = resolve_history(log, {})

        assert history.current_version is None
        assert history.increment is VersionIncrement.MAJOR
        assert history.next_version == Version(0, 1, 0)
        assert all(c.release_tag is None for c in history.commits)

    def test_pre_1_0_minor_bump(self):
        """fix, feat, chore on top of v0.5.0 -> 0.6.0."""
        log = make_log("chore: tidy", "feat: add x", "fix: repair y", "chore(release): prepare 0.5.0")
        tags = index_tags([annotated("v0.5.0", log[3])])

        history = resolve_history(log, tags)

        assert history.current_version == Version(0, 5, 0)
        assert history.increment is VersionIncrement.MINOR
        assert history.next_version == Version(0, 6, 0)
        assert history.next_version_str() == "v0.6.0"
        assert history.current_version_str() == "v0.5.0"

    def test_stable_minor_bump(self):
        """Same history on a 2.x series -> minor bump."""
        log = make_log("chore: tidy", "feat: add x", "fix: repair y", "chore(release): prepare 2.3.1")
        tags = index_tags([annotated("v2.3.1", log[3])])

        history = resolve_history(log, tags)

        assert history.next_version == Version(2, 4, 0)

    def test_stable_major_bump(self):
        log = make_log("fix: a\n\nBREAKING CHANGE: removed b", "chore(release): prepare 2.3.1")
        tags = index_tags([annotated("v2.3.1", log[1])])

        assert resolve_history(log, tags).next_version == Version(3, 0, 0)

    def test_pre_1_0_patch_bump(self):
        log = make_log("fix: a", "chore(release): prepare 0.5.0")
        tags = index_tags([annotated("v0.5.0", log[1])])

        assert resolve_history(log, tags).next_version == Version(0, 5, 1)

    def test_no_unreleased_changes(self):
        """HEAD is tagged: next version equals current version."""
        log = make_log("chore(release): prepare 1.0.0", "feat: a")
        tags = index_tags([annotated("v1.0.0", log[0])])

        history = resolve_history(log, tags)

        assert history.increment is VersionIncrement.NONE
        assert history.next_version == Version(1, 0, 0)
        assert not history.has_unreleased_changes

    def test_released_commits_do_not_count(self):
        """A breaking change before the tag does not affect the next version."""
        log = make_log("fix: after", "chore(release): prepare 1.0.0", "feat!: before")
        tags = index_tags([annotated("v1.0.0", log[1])])

        history = resolve_history(log, tags)

        assert history.increment is VersionIncrement.PATCH
        assert history.next_version == Version(1, 0, 1)

    def test_release_tags_attached(self):
        """Each commit belongs to the nearest tag at or after it."""
        log = make_log("fix: e", "feat: d", "chore(release): prepare 0.2.0", "feat: c", "chore(release): prepare 0.1.0", "feat: a")
        v020 = annotated("v0.2.0", log[2])
        v010 = annotated("v0.1.0", log[4])
        history = resolve_history(log, index_tags([v020, v010]))

        release_names = [c.release_tag.name if c.release_tag else None for c in history.commits]
        assert release_names == [None, None, "v0.2.0", "v0.2.0", "v0.1.0", "v0.1.0"]
        assert history.current_version == Version(0, 2, 0)
        assert history.commits[2].tag == v020

    def test_releases_grouping(self):
        log = make_log("fix: e", "chore(release): prepare 0.2.0", "feat: c", "chore(release): prepare 0.1.0")
        history = resolve_history(
            log, index_tags([annotated("v0.2.0", log[1]), annotated("v0.1.0", log[3])])
        )

        groups = history.releases()

        assert [(tag.name if tag else None, len(commits)) for tag, commits in groups] == [
            (None, 1),
            ("v0.2.0", 2),
            ("v0.1.0", 1),
        ]
        assert [c.id for c in history.unreleased_commits()] == [log[0].id]

    def test_lightweight_tag_ignored(self):
        log = make_log("feat: b", "chore(release): prepare 1.0.0", "feat: a")
        tags = index_tags([lightweight("v1.0.0", log[1])])

        history = resolve_history(log, tags)

        assert history.current_version is None
        assert history.next_version == Version(0, 1, 0)
        assert history.commits[1].tag is not None
        assert history.commits[1].release_tag is None
        assert [w.kind for w in history.warnings] == [WarningKind.LIGHTWEIGHT_TAG]

    def test_non_semver_tag_ignored(self):
        log = make_log("fix: b", "chore: nightly build", "chore(release): prepare 1.0.0")
        tags = index_tags([annotated("nightly", log[1]), annotated("v1.0.0", log[2])])

        history = resolve_history(log, tags)

        assert history.current_version == Version(1, 0, 0)
        assert history.next_version == Version(1, 0, 1)
        assert [w.kind for w in history.warnings] == [WarningKind.INVALID_TAG]

    def test_unparseable_commit_counts_as_patch_with_warning(self):
        log = make_log("Updated the readme file", "chore(release): prepare 1.0.0")
        tags = index_tags([annotated("v1.0.0", log[1])])

        history = resolve_history(log, tags)

        assert history.commits[0].parsed is None
        assert history.increment is VersionIncrement.PATCH
        assert history.next_version == Version(1, 0, 1)
        assert len(history.warnings) == 1
        assert history.warnings[0].kind is WarningKind.UNPARSEABLE_MESSAGE
        assert history.warnings[0].commit_id == log[0].id

    def test_unparseable_policy_none(self):
        config = ConvReleaseConfig(version=VersionConfig(unparseable_increment="none"))
        log = make_log("Updated the readme file", "chore(release): prepare 1.0.0")
        tags = index_tags([annotated("v1.0.0", log[1])])

        history = resolve_history(log, tags, config)

        assert history.increment is VersionIncrement.NONE
        assert history.next_version == Version(1, 0, 0)

    def test_released_unparseable_commit_not_warned(self):
        log = make_log("chore(release): prepare 1.0.0", "Initial commit")
        tags = index_tags([annotated("v1.0.0", log[0])])

        assert resolve_history(log, tags).warnings == ()

    def test_custom_minor_types(self):
        config = ConvReleaseConfig(version=VersionConfig(types_minor=["feat", "perf"]))
        log = make_log("perf: faster", "chore(release): prepare 1.0.0")
        tags = index_tags([annotated("v1.0.0", log[1])])

        assert resolve_history(log, tags, config).next_version == Version(1, 1, 0)

    def test_custom_initial_version(self):
        config = ConvReleaseConfig(version=VersionConfig(initial_version="1.0.0"))

        assert resolve_history(make_log("feat: a"), {}, config).next_version == Version(1, 0, 0)

    def test_commit_bump_recorded(self):
        """Unreleased commits keep the increment they counted for."""
        config = ConvReleaseConfig(version=VersionConfig(types_minor=["feat", "perf"]))
        log = make_log("perf: faster", "Updated the readme file", "chore(release): prepare 1.0.0", "feat: a")
        tags = index_tags([annotated("v1.0.0", log[2])])

        history = resolve_history(log, tags, config)

        assert [c.bump for c in history.commits] == [
            VersionIncrement.MINOR,
            VersionIncrement.PATCH,
            None,
            None,
        ]

    def test_custom_tag_prefix(self):
        config = ConvReleaseConfig(version=VersionConfig(tag_prefix="release-"))
        log = make_log("feat: a", "chore: release")
        tags = index_tags([annotated("release-1.4.0", log[1])], prefix="release-")

        history = resolve_history(log, tags, config)

        assert history.current_version == Version(1, 4, 0)
        assert history.next_version_str() == "v1.5.0"

    def test_nearest_tag_sets_current_version(self):
        """Current version comes from the nearest tag, not the highest one."""
        log = make_log("fix: a", "chore: hotfix", "chore: release")
        tags = index_tags([annotated("v1.0.1", log[1]), annotated("v2.0.0", log[2])])

        history = resolve_history(log, tags)

        assert history.current_version == Version(1, 0, 1)
        assert latest_stable_version(tags.values()) == Version(2, 0, 0)

    def test_result_is_immutable_snapshot(self):
        history = resolve_history(make_log("feat: a"), {})

        assert isinstance(history, CommitHistory)
        assert isinstance(history.commits, tuple)


class TestLatestStableVersion:
    """Tests for latest_stable_version()."""

    def test_highest_annotated(self):
        commit = make_log("chore: x")[0]
        tags = [
            annotated("v1.2.0", commit),
            annotated("v1.10.0", commit),
            annotated("v1.9.9", commit),
        ]

        assert latest_stable_version(tags) == Version(1, 10, 0)

    def test_ignores_lightweight_and_invalid(self):
        commit = make_log("chore: x")[0]
        tags = [
            lightweight("v9.0.0", commit),
            annotated("latest", commit),
            annotated("v1.0.0", commit),
        ]

        assert latest_stable_version(tags) == Version(1, 0, 0)

    def test_prereleases(self):
        commit = make_log("chore: x")[0]
        tags = [annotated("v1.0.0", commit), annotated("v1.1.0-rc.1", commit)]

        assert latest_stable_version(tags) == Version.parse("1.1.0-rc.1")
        assert latest_stable_version(tags, include_prereleases=False) == Version(1, 0, 0)

    def test_no_tags(self):
        assert latest_stable_version([]) is None
        assert latest_stable_version([GitTag("v1.0.0", "abc")]) is None
