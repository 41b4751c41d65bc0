"""Template registry version checks.

Compares the last published registry snapshot with the templates found
locally and decides whether, and how, the registry version is bumped.
"""

from .diff import evaluate, removed_identifiers
from .exceptions import ConfigError, RegistryFetchError, TemplateRegistryError, TemplateScanError
from .types import BumpCategory, DiffResult, RegistrySnapshot
from .versioning import bump_semver, parse_semver

__all__ = [
    'BumpCategory', 'DiffResult', 'RegistrySnapshot',
    'bump_semver', 'parse_semver', 'evaluate', 'removed_identifiers',
    'TemplateRegistryError', 'RegistryFetchError', 'TemplateScanError', 'ConfigError',
]
