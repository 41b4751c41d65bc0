"""Core types and enums for the template registry."""

from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_VERSION = "1.0.0"


class BumpCategory(Enum):
    """Which semantic version component to increment."""
    MAJOR = "major"
    MINOR = "minor"
    PATCH = "patch"


class TemplateEntry(BaseModel):
    """A single template record in a serialized registry."""
    model_config = ConfigDict(extra="allow")

    id: str


class RegistryFile(BaseModel):
    """Wire form of a published registry: ``{version, templates: [{id}, ...]}``."""
    model_config = ConfigDict(extra="allow")

    version: str | None = None
    templates: list[TemplateEntry] | None = Field(default_factory=list)


class RegistrySnapshot(BaseModel):
    """Last known published state of the registry."""
    model_config = ConfigDict(frozen=True)

    version: str
    templates: frozenset[str] = Field(default_factory=frozenset)

    @classmethod
    def from_registry_file(cls, registry: RegistryFile | dict[str, Any]) -> "RegistrySnapshot":
        """Build a snapshot from the serialized registry form."""
        if isinstance(registry, dict):
            registry = RegistryFile.model_validate(registry)
        return cls(
            version=registry.version or DEFAULT_VERSION,
            templates=frozenset(entry.id for entry in registry.templates or []),
        )

    def to_registry_file(self) -> dict[str, Any]:
        """Serialize back to the registry wire form with sorted template ids."""
        return {
            "version": self.version,
            "templates": [{"id": template_id} for template_id in sorted(self.templates)],
        }


class DiffResult(BaseModel):
    """Outcome of comparing a registry snapshot against local templates."""
    base_version: str = Field(serialization_alias="baseVersion")
    next_version: str = Field(serialization_alias="nextVersion")
    new_identifiers: list[str] = Field(default_factory=list, serialization_alias="newIds")

    @property
    def bumped(self) -> bool:
        """Whether a new version should be published."""
        return bool(self.new_identifiers) or self.next_version != self.base_version

    def to_json(self) -> str:
        """Serialize with the registry's camelCase keys."""
        return self.model_dump_json(by_alias=True, indent=2)


class ValidationError(BaseModel):
    """Validation error with JSON pointer."""
    json_pointer: str
    message: str


class ValidationResult(BaseModel):
    """Result of registry payload validation."""
    ok: bool
    errors: list[ValidationError] = Field(default_factory=list)


class CachedSnapshot(BaseModel):
    """A registry snapshot as held by the snapshot cache."""
    snapshot: RegistrySnapshot
    source: str
    cached_at: datetime
    stale: bool = False
