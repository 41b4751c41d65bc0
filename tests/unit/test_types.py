"""Unit tests for core types."""

import json

import pytest

from template_registry.types import (
    BumpCategory, DiffResult, RegistryFile, RegistrySnapshot, ValidationError, ValidationResult
)


def test_snapshot_from_registry_file_dict():
    """Test building a snapshot from the wire form."""
    snapshot = RegistrySnapshot.from_registry_file({
        "version": "1.5.0",
        "templates": [{"id": "homepage"}, {"id": "jellyfin-server", "name": "Jellyfin"}],
    })

    assert snapshot.version == "1.5.0"
    assert snapshot.templates == frozenset({"homepage", "jellyfin-server"})


def test_snapshot_missing_version_defaults():
    """Registry without a version is treated as 1.0.0."""
    snapshot = RegistrySnapshot.from_registry_file({"templates": [{"id": "a"}]})
    assert snapshot.version == "1.0.0"

    snapshot = RegistrySnapshot.from_registry_file(RegistryFile(version="", templates=[]))
    assert snapshot.version == "1.0.0"
    assert snapshot.templates == frozenset()


def test_snapshot_is_immutable():
    """Test snapshots are frozen."""
    snapshot = RegistrySnapshot(version="1.0.0", templates={"a"})

    with pytest.raises(Exception):
        snapshot.version = "2.0.0"


def test_snapshot_to_registry_file_sorted():
    """Test serialization sorts template ids."""
    snapshot = RegistrySnapshot(version="2.0.0", templates={"b", "a"})

    assert snapshot.to_registry_file() == {
        "version": "2.0.0",
        "templates": [{"id": "a"}, {"id": "b"}],
    }


def test_registry_file_requires_template_id():
    """Test template entries without an id are rejected."""
    with pytest.raises(Exception):
        RegistryFile(version="1.0.0", templates=[{"name": "no id"}])


def test_diff_result_json_uses_camel_case():
    """Test DiffResult serialization keys."""
    result = DiffResult(base_version="1.0.0", next_version="1.1.0", new_identifiers=["a"])

    data = json.loads(result.to_json())

    assert data == {"baseVersion": "1.0.0", "nextVersion": "1.1.0", "newIds": ["a"]}


def test_diff_result_bumped():
    """Test bumped flag."""
    assert DiffResult(base_version="1.0.0", next_version="1.1.0", new_identifiers=["a"]).bumped
    assert not DiffResult(base_version="1.0.0", next_version="1.0.0").bumped


def test_validation_result():
    """Test ValidationResult with errors."""
    result = ValidationResult(
        ok=False,
        errors=[ValidationError(json_pointer="/templates/0", message="'id' is a required property")],
    )

    assert not result.ok
    assert result.errors[0].json_pointer == "/templates/0"


def test_enum_values():
    """Test enum value conversion."""
    assert BumpCategory("major") is BumpCategory.MAJOR
    assert BumpCategory.MINOR.value == "minor"
    assert BumpCategory.PATCH.value == "patch"


def test_snapshot_null_templates_is_empty():
    """A registry with ``templates: null`` has no published templates."""
    snapshot = RegistrySnapshot.from_registry_file({"version": "1.2.0", "templates": None})

    assert snapshot.version == "1.2.0"
    assert snapshot.templates == frozenset()
