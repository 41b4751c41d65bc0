"""Registry source adapters."""

from .registry_source import (
    DEFAULT_REGISTRY_URL,
    CachedRegistrySource,
    CacheOnlyRegistrySource,
    FileRegistrySource,
    HttpRegistrySource,
    RegistrySource,
    StubRegistrySource,
)

__all__ = [
    'DEFAULT_REGISTRY_URL',
    'RegistrySource', 'HttpRegistrySource', 'FileRegistrySource',
    'StubRegistrySource', 'CachedRegistrySource', 'CacheOnlyRegistrySource',
]
