"""Schema validation for serialized registry payloads."""

import json
from pathlib import Path
from typing import Any

import jsonschema

from .types import ValidationError, ValidationResult

REGISTRY_SCHEMA: dict[str, Any] = {
    "$schema": "https://json-schema.org/draft/2020-12/schema",
    "type": "object",
    "properties": {
        "version": {"type": ["string", "null"]},
        "templates": {
            "type": ["array", "null"],
            "items": {
                "type": "object",
                "properties": {"id": {"type": "string"}},
                "required": ["id"],
            },
        },
    },
}


class RegistryValidator:
    """Validates decoded registry JSON against the registry schema."""

    def __init__(self, schema_dir: Path = None):
        """Initialize validator, optionally loading schemas from a directory."""
        self.schema_dir = schema_dir
        self._schemas = {}

    def _load_schema(self, schema_name: str) -> dict[str, Any]:
        """Load a JSON schema by name, falling back to the built-in one."""
        if schema_name not in self._schemas:
            schema_path = self.schema_dir / f"{schema_name}.schema.json" if self.schema_dir else None
            if schema_path is not None and schema_path.exists():
                with open(schema_path) as f:
                    self._schemas[schema_name] = json.load(f)
            else:
                self._schemas[schema_name] = REGISTRY_SCHEMA
        return self._schemas[schema_name]

    def validate(self, payload: Any) -> ValidationResult:
        """Validate a decoded registry payload."""
        schema = self._load_schema("registry")
        validator = jsonschema.Draft202012Validator(schema)

        errors = []
        for error in sorted(validator.iter_errors(payload), key=lambda e: [str(part) for part in e.absolute_path]):
            pointer = "/" + "/".join(str(part) for part in error.absolute_path) if error.absolute_path else "/"
            errors.append(ValidationError(json_pointer=pointer, message=str(error.message)))

        return ValidationResult(ok=len(errors) == 0, errors=errors)
