"""Registry diff evaluation: decide the next registry version."""

from collections.abc import Iterable

from .types import DEFAULT_VERSION, BumpCategory, DiffResult, RegistrySnapshot
from .versioning import bump_semver


def evaluate(
    previous: RegistrySnapshot | None,
    local_identifiers: Iterable[str],
    category: BumpCategory | str = BumpCategory.MINOR,
) -> DiffResult:
    """Compare the last published snapshot with the local template ids.

    Templates missing locally are ignored: removals never trigger a bump.
    Any number of new templates bumps the version exactly once.

    Args:
        previous: Last published snapshot, or None if nothing was published yet
        local_identifiers: Template ids discovered locally, in caller order
        category: Bump category applied when new templates exist

    Returns:
        DiffResult with the base version, next version and new ids
    """
    if previous is None:
        base_version = DEFAULT_VERSION
        known: frozenset[str] = frozenset()
    else:
        base_version = previous.version
        known = previous.templates

    new_identifiers = [identifier for identifier in local_identifiers if identifier not in known]
    next_version = bump_semver(base_version, category) if new_identifiers else base_version

    return DiffResult(
        base_version=base_version,
        next_version=next_version,
        new_identifiers=new_identifiers,
    )


def removed_identifiers(
    previous: RegistrySnapshot | None, local_identifiers: Iterable[str]
) -> list[str]:
    """Published template ids that no longer exist locally (report only)."""
    if previous is None:
        return []
    return sorted(previous.templates.difference(local_identifiers))
