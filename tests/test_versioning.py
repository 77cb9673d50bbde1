"""Tests for git_ai_commit.utils.versioning module."""

import pytest

from git_ai_commit.utils.versioning import (
    INITIAL_VERSION,
    BumpType,
    Version,
    latest_version,
    next_tag,
)


class TestVersionBump:
    """Tests for the triple transform."""

    @pytest.mark.parametrize("start, bump, expected", [
        ((0, 1, 2), BumpType.MINOR, (0, 2, 0)),
        ((1, 2, 3), BumpType.MAJOR, (2, 0, 0)),
        ((0, 1, 2), BumpType.PATCH, (0, 1, 3)),
        ((9, 9, 9), BumpType.PATCH, (9, 9, 10)),
        ((0, 0, 0), BumpType.MINOR, (0, 1, 0)),
    ])
    def test_bump(self, start, bump, expected):
        assert Version(*start).bump(bump).as_tuple() == expected

    def test_bump_accepts_plain_string(self):
        assert Version(1, 0, 0).bump("major") == Version(2, 0, 0)

    def test_bump_does_not_mutate(self):
        version = Version(1, 2, 3)
        version.bump(BumpType.MAJOR)
        assert version == Version(1, 2, 3)

    def test_negative_component_rejected(self):
        with pytest.raises(ValueError):
            Version(0, -1, 0)

    def test_str(self):
        assert str(Version(1, 20, 3)) == "v1.20.3"


class TestVersionParse:
    """Tests for Version.parse."""

    @pytest.mark.parametrize("tag, expected", [
        ("v1.2.3", Version(1, 2, 3)),
        ("1.2.3", Version(1, 2, 3)),
        ("v10.0.11", Version(10, 0, 11)),
        (" v0.1.0 ", Version(0, 1, 0)),
    ])
    def test_valid(self, tag, expected):
        assert Version.parse(tag) == expected

    @pytest.mark.parametrize("tag", [
        "release-1",
        "v1.2",
        "v1.2.3-rc1",
        "v1.2.3.4",
        "vx.y.z",
        "",
    ])
    def test_invalid(self, tag):
        assert Version.parse(tag) is None


class TestLatestVersion:
    """Tests for latest_version."""

    def test_numeric_not_lexical_order(self):
        assert latest_version(["v1.9.0", "v1.10.0", "v1.2.0"]) == Version(1, 10, 0)

    def test_malformed_tags_ignored(self):
        assert latest_version(["nightly", "v2.0.0-beta", "v1.4.2"]) == Version(1, 4, 2)

    def test_only_malformed(self):
        assert latest_version(["nightly", "release"]) is None

    def test_empty(self):
        assert latest_version([]) is None


class TestNextTag:
    """Tests for next_tag."""

    def test_patch_default(self):
        assert next_tag(["v0.1.2"]) == "v0.1.3"

    def test_minor(self):
        assert next_tag(["v0.1.2", "v0.1.1"], BumpType.MINOR) == "v0.2.0"

    def test_major(self):
        assert next_tag(["v1.2.3"], BumpType.MAJOR) == "v2.0.0"

    def test_highest_tag_wins_regardless_of_order(self):
        assert next_tag(["v0.9.0", "v0.10.1", "v0.2.5"]) == "v0.10.2"

    @pytest.mark.parametrize("bump", list(BumpType))
    def test_no_tags_gives_baseline(self, bump):
        assert next_tag([], bump) == "v0.1.0"
        assert str(INITIAL_VERSION) == "v0.1.0"

    def test_only_malformed_tags_gives_baseline(self):
        assert next_tag(["latest", "stable"], BumpType.MINOR) == "v0.1.0"

    def test_unprefixed_tag_output_is_prefixed(self):
        assert next_tag(["2.3.4"]) == "v2.3.5"
