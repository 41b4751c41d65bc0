"""Configuration for registry version checks."""

import json
from datetime import timedelta
from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import BaseModel, Field, field_validator
from pydantic import ValidationError as PydanticValidationError

from .adapters.registry_source import DEFAULT_REGISTRY_URL
from .exceptions import ConfigError
from .types import BumpCategory


class RegistryConfig(BaseModel):
    """Where to read the published registry and local templates from."""
    registry_url: str = DEFAULT_REGISTRY_URL
    registry_file: Path | None = None
    templates_dir: Path = Path("templates")
    bump_part: BumpCategory = BumpCategory.MINOR
    timeout_seconds: int = Field(default=10, gt=0)
    cache_dir: Path = Path(".cache/registry")
    cache_ttl_hours: float = Field(default=1.0, ge=0)
    offline: bool = False
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "WARNING"
    schema_dir: Path | None = None

    @field_validator("log_level", mode="before")
    @classmethod
    def _upper_log_level(cls, value):
        return value.upper() if isinstance(value, str) else value

    @property
    def cache_ttl(self) -> timedelta:
        return timedelta(hours=self.cache_ttl_hours)


def load_config(path: Path | None = None, **overrides: Any) -> RegistryConfig:
    """Load config from a YAML or JSON file and apply overrides.

    Overrides set to None are ignored, so unset CLI options keep file values.

    Raises:
        ConfigError: If the file cannot be read or values are invalid
    """
    data: dict[str, Any] = {}

    if path is not None:
        path = Path(path)
        try:
            with open(path) as f:
                if path.suffix.lower() in ['.yaml', '.yml']:
                    data = yaml.safe_load(f) or {}
                else:
                    data = json.load(f)
        except (OSError, yaml.YAMLError, json.JSONDecodeError) as e:
            raise ConfigError(f"Failed to load config {path}: {e}") from e

        if not isinstance(data, dict):
            raise ConfigError(f"Config {path} must contain a mapping")

    data.update({key: value for key, value in overrides.items() if value is not None})

    try:
        return RegistryConfig(**data)
    except PydanticValidationError as e:
        raise ConfigError(f"Invalid config: {e}") from e
