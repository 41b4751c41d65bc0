"""Tests for semantic version bumping."""

import pytest

from template_registry.types import BumpCategory
from template_registry.versioning import bump_semver, is_semver, parse_semver


class TestBumpSemver:
    """Test bump_semver component arithmetic."""

    def test_minor_bump_from_1_0_0(self):
        assert bump_semver("1.0.0", "minor") == "1.1.0"

    def test_minor_bump_from_1_1_0(self):
        assert bump_semver("1.1.0", "minor") == "1.2.0"

    def test_patch_bump(self):
        assert bump_semver("1.1.0", "patch") == "1.1.1"

    def test_major_bump(self):
        assert bump_semver("1.1.0", "major") == "2.0.0"

    def test_default_is_minor(self):
        assert bump_semver("3.4.5") == "3.5.0"

    def test_accepts_enum_category(self):
        assert bump_semver("0.9.9", BumpCategory.MAJOR) == "1.0.0"
        assert bump_semver("0.9.9", BumpCategory.PATCH) == "0.9.10"

    def test_major_resets_lower_components(self):
        assert bump_semver("4.7.12", "major") == "5.0.0"

    def test_minor_resets_patch(self):
        assert bump_semver("4.7.12", "minor") == "4.8.0"

    def test_multi_digit_components(self):
        assert bump_semver("10.20.30", "patch") == "10.20.31"

    def test_prerelease_suffix_dropped(self):
        """Pre-release metadata is stripped from the bumped version."""
        assert bump_semver("1.2.3-beta.1", "minor") == "1.3.0"

    def test_dot_suffix_dropped(self):
        assert bump_semver("1.2.3.4", "patch") == "1.2.4"

    @pytest.mark.parametrize("version", ["invalid", "", "1.2", "v1.2.3", "1.2.3+build", " 1.2.3", "a.b.c"])
    def test_malformed_falls_back(self, version):
        """Anything without a leading numeric triple yields 1.0.0."""
        assert bump_semver(version, "major") == "1.0.0"

    def test_non_string_input_is_coerced(self):
        assert bump_semver(None) == "1.0.0"

    def test_unknown_category_bumps_minor(self):
        assert bump_semver("1.1.0", "huge") == "1.2.0"


class TestParseSemver:
    """Test version parsing helpers."""

    def test_parse_plain(self):
        assert parse_semver("1.2.3") == (1, 2, 3)

    def test_parse_with_suffix(self):
        assert parse_semver("2.0.0-rc.1") == (2, 0, 0)

    def test_parse_invalid(self):
        assert parse_semver("latest") is None

    def test_is_semver(self):
        assert is_semver("1.2.3")
        assert not is_semver("1.2.3-beta")
        assert not is_semver("1.2")
