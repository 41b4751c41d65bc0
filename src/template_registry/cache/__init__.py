"""Snapshot cache for previously fetched registries."""

from .registry_cache import RegistryCache

__all__ = ['RegistryCache']
