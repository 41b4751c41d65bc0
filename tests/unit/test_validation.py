"""Tests for registry payload validation."""

import json

from template_registry.validation import RegistryValidator


class TestRegistryValidator:
    """Test RegistryValidator."""

    def test_valid_registry(self):
        validator = RegistryValidator()

        result = validator.validate({"version": "1.0.0", "templates": [{"id": "homepage"}]})

        assert result.ok
        assert result.errors == []

    def test_extra_keys_allowed(self):
        validator = RegistryValidator()

        result = validator.validate({
            "version": "1.0.0",
            "author": "someone",
            "templates": [{"id": "homepage", "name": "Homepage", "tags": ["web"]}],
        })

        assert result.ok

    def test_missing_template_id(self):
        validator = RegistryValidator()

        result = validator.validate({"version": "1.0.0", "templates": [{"id": "ok"}, {"name": "x"}]})

        assert not result.ok
        assert result.errors[0].json_pointer == "/templates/1"
        assert "'id' is a required property" in result.errors[0].message

    def test_wrong_types(self):
        validator = RegistryValidator()

        result = validator.validate({"version": 3, "templates": "homepage"})

        assert not result.ok
        pointers = [error.json_pointer for error in result.errors]
        assert "/templates" in pointers
        assert "/version" in pointers

    def test_non_object_payload(self):
        validator = RegistryValidator()

        result = validator.validate(["not", "a", "registry"])

        assert not result.ok
        assert result.errors[0].json_pointer == "/"

    def test_schema_from_directory(self, tmp_path):
        """A registry.schema.json in schema_dir replaces the built-in schema."""
        schema = {"type": "object", "required": ["version"]}
        (tmp_path / "registry.schema.json").write_text(json.dumps(schema))
        validator = RegistryValidator(schema_dir=tmp_path)

        result = validator.validate({"templates": []})

        assert not result.ok
        assert "'version' is a required property" in result.errors[0].message
