"""Tests for workspace_versions.versions."""

from __future__ import annotations

import pytest

from workspace_versions.versions import bump_version, is_version, parse_version


class TestParseVersion:
    def test_full_semver(self) -> None:
        v = parse_version("1.2.3")
        assert v.major == 1
        assert v.minor == 2
        assert v.patch == 3

    def test_two_part_version(self) -> None:
        v = parse_version("1.2")
        assert (v.major, v.minor, v.patch) == (1, 2, 0)

    def test_single_part_version(self) -> None:
        v = parse_version("5")
        assert (v.major, v.minor, v.patch) == (5, 0, 0)

    def test_keeps_prerelease(self) -> None:
        v = parse_version("1.3.0-rc.2")
        assert v.prerelease == "rc.2"

    def test_malformed_raises(self) -> None:
        with pytest.raises(ValueError):
            parse_version("not-a-version")


class TestIsVersion:
    def test_accepts_versions(self) -> None:
        assert is_version("1.2.0")
        assert is_version("1.2")
        assert is_version("2.0.0-rc.1")

    def test_rejects_suffixed_names(self) -> None:
        """What is left of ``pkg-a-1.2.0`` after stripping ``pkg-``."""
        assert not is_version("a-1.2.0")
        assert not is_version("latest")


class TestBumpVersion:
    def test_major(self) -> None:
        assert bump_version("1.2.3", "major") == "2.0.0"

    def test_minor(self) -> None:
        assert bump_version("1.2.0", "minor") == "1.3.0"

    def test_patch(self) -> None:
        assert bump_version("1.0.99", "patch") == "1.0.100"

    def test_incomplete_version(self) -> None:
        assert bump_version("1.2", "patch") == "1.2.1"

    def test_prerelease_from_release(self) -> None:
        assert bump_version("1.2.3", "prerelease") == "1.2.4-rc.1"

    def test_prerelease_custom_token(self) -> None:
        assert bump_version("1.2.3", "prerelease", "beta") == "1.2.4-beta.1"

    def test_prerelease_increments(self) -> None:
        assert bump_version("1.2.4-rc.1", "prerelease") == "1.2.4-rc.2"

    def test_patch_finalizes_prerelease(self) -> None:
        assert bump_version("1.3.0-rc.1", "patch") == "1.3.0"

    def test_unknown_release_type_raises(self) -> None:
        with pytest.raises(ValueError, match="Unknown release type"):
            bump_version("1.0.0", "huge")
