"""Semantic version bumping for registry releases."""

import re

from .types import DEFAULT_VERSION, BumpCategory

# Leading MAJOR.MINOR.PATCH, optionally followed by a pre-release/build suffix
SEMVER_PATTERN = re.compile(r"(\d+)\.(\d+)\.(\d+)(?:[.-].*)?", re.ASCII)
BARE_SEMVER_PATTERN = re.compile(r"\d+\.\d+\.\d+", re.ASCII)


def parse_semver(version) -> tuple[int, int, int] | None:
    """Return the numeric (major, minor, patch) triple, or None if unparseable."""
    match = SEMVER_PATTERN.fullmatch(str(version))
    if not match:
        return None
    major, minor, patch = (int(part) for part in match.groups())
    return major, minor, patch


def is_semver(version) -> bool:
    """Check for a bare ``MAJOR.MINOR.PATCH`` string."""
    return bool(BARE_SEMVER_PATTERN.fullmatch(str(version)))


def bump_semver(version, category: BumpCategory | str = BumpCategory.MINOR) -> str:
    """Return the next version for the given bump category.

    Any pre-release or build suffix is dropped. Input that does not start with
    a numeric triple yields ``1.0.0`` instead of raising.

    Args:
        version: Current version string
        category: ``major``, ``minor`` or ``patch`` (default ``minor``)

    Returns:
        Normalized ``MAJOR.MINOR.PATCH`` string
    """
    parsed = parse_semver(version)
    if parsed is None:
        return DEFAULT_VERSION

    major, minor, patch = parsed
    part = category.value if isinstance(category, BumpCategory) else str(category).lower()

    if part == BumpCategory.MAJOR.value:
        major, minor, patch = major + 1, 0, 0
    elif part == BumpCategory.PATCH.value:
        patch += 1
    else:
        minor, patch = minor + 1, 0

    return f"{major}.{minor}.{patch}"
