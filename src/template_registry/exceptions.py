"""Exceptions raised by the registry collaborators.

The versioning and diff functions never raise; these cover fetching,
scanning and configuration.
"""


class TemplateRegistryError(Exception):
    """Base exception for template registry operations."""

    pass


class RegistryFetchError(TemplateRegistryError):
    """Previous registry snapshot could not be retrieved or decoded."""

    pass


class TemplateScanError(TemplateRegistryError):
    """Local templates directory could not be enumerated."""

    pass


class ConfigError(TemplateRegistryError):
    """Configuration file is unreadable or invalid."""

    pass
