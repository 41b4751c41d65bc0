"""Registry sources: where the previously published snapshot comes from."""

import json
import time
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Optional

import requests

from ..cache.registry_cache import RegistryCache
from ..exceptions import RegistryFetchError
from ..logging import RegistryLogger
from ..types import RegistrySnapshot
from ..validation import RegistryValidator

DEFAULT_REGISTRY_URL = "https://registry.getarcane.app/registry.json"


def snapshot_from_payload(payload: Any, source: str,
                          validator: RegistryValidator = None) -> Optional[RegistrySnapshot]:
    """Validate a decoded registry payload and convert it to a snapshot.

    A JSON null payload means nothing was published and yields None.

    Raises:
        RegistryFetchError: If the payload does not match the registry schema
    """
    if payload is None:
        return None

    validator = validator or RegistryValidator()
    result = validator.validate(payload)
    if not result.ok:
        details = "; ".join(f"{err.json_pointer}: {err.message}" for err in result.errors)
        raise RegistryFetchError(f"Invalid registry from {source}: {details}")
    return RegistrySnapshot.from_registry_file(payload)


class RegistrySource(ABC):
    """Abstract source of the last published registry snapshot."""

    @property
    @abstractmethod
    def location(self) -> str:
        """URL or path identifying this source."""
        pass

    @abstractmethod
    def fetch(self) -> Optional[RegistrySnapshot]:
        """Return the published snapshot, or None if nothing was published yet."""
        pass

    @abstractmethod
    def health_check(self) -> bool:
        """Check if the source is reachable."""
        pass


class HttpRegistrySource(RegistrySource):
    """Fetches registry.json from a remote URL."""

    def __init__(self, url: str = DEFAULT_REGISTRY_URL, timeout: int = 10,
                 logger: Optional[RegistryLogger] = None,
                 validator: Optional[RegistryValidator] = None):
        """Initialize HTTP source.

        Args:
            url: Registry JSON URL
            timeout: Request timeout in seconds
            logger: Optional structured logger
            validator: Payload validator (default: built-in registry schema)
        """
        self.url = url
        self.timeout = timeout
        self.logger = logger
        self.validator = validator or RegistryValidator()
        self.session = requests.Session()
        self.session.headers.update({
            'User-Agent': 'template-registry version check',
            'Accept': 'application/json',
        })

    @property
    def location(self) -> str:
        return self.url

    def health_check(self) -> bool:
        """Check if the registry URL answers."""
        try:
            response = self.session.get(self.url, timeout=self.timeout)
            return response.status_code in (200, 404)
        except requests.RequestException:
            return False

    def fetch(self) -> Optional[RegistrySnapshot]:
        """Fetch and decode the live registry.

        Returns:
            Snapshot, or None when the registry responds 404

        Raises:
            RegistryFetchError: On connection errors, non-2xx responses or bad payloads
        """
        if self.logger:
            self.logger.fetch_started(self.url)
        start_time = time.time()

        try:
            response = self.session.get(self.url, timeout=self.timeout)
        except requests.RequestException as e:
            if self.logger:
                self.logger.fetch_failed(self.url, str(e))
            raise RegistryFetchError(f"Failed to fetch {self.url}: {e}") from e

        if response.status_code == 404:
            if self.logger:
                self.logger.fetch_completed(self.url, None, 0, int((time.time() - start_time) * 1000))
            return None

        if not response.ok:
            if self.logger:
                self.logger.fetch_failed(self.url, response.reason or "HTTP error", response.status_code)
            raise RegistryFetchError(f"Failed to fetch {self.url}: {response.status_code}")

        try:
            payload = response.json()
        except ValueError as e:
            if self.logger:
                self.logger.fetch_failed(self.url, "invalid JSON", response.status_code)
            raise RegistryFetchError(f"Registry at {self.url} is not valid JSON") from e

        snapshot = snapshot_from_payload(payload, self.url, self.validator)

        if self.logger:
            duration_ms = int((time.time() - start_time) * 1000)
            self.logger.fetch_completed(
                self.url,
                snapshot.version if snapshot else None,
                len(snapshot.templates) if snapshot else 0,
                duration_ms,
            )

        return snapshot


class FileRegistrySource(RegistrySource):
    """Reads a registry.json snapshot from disk."""

    def __init__(self, path: Path, logger: Optional[RegistryLogger] = None,
                 validator: Optional[RegistryValidator] = None):
        self.path = Path(path)
        self.logger = logger
        self.validator = validator or RegistryValidator()

    @property
    def location(self) -> str:
        return str(self.path)

    def health_check(self) -> bool:
        return self.path.is_file()

    def fetch(self) -> Optional[RegistrySnapshot]:
        """Load the snapshot; a missing file means nothing was published."""
        if not self.path.exists():
            if self.logger:
                self.logger.info("Registry file not found", source=str(self.path))
            return None

        try:
            with open(self.path, encoding='utf-8') as f:
                payload = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            if self.logger:
                self.logger.fetch_failed(str(self.path), str(e))
            raise RegistryFetchError(f"Failed to read {self.path}: {e}") from e

        snapshot = snapshot_from_payload(payload, str(self.path), self.validator)
        if self.logger:
            self.logger.fetch_completed(
                str(self.path),
                snapshot.version if snapshot else None,
                len(snapshot.templates) if snapshot else 0,
                0,
            )
        return snapshot


class StubRegistrySource(RegistrySource):
    """Fixed snapshot for offline runs and tests."""

    def __init__(self, snapshot: Optional[RegistrySnapshot] = None, location: str = "stub://registry"):
        self.snapshot = snapshot
        self._location = location
        self.fetch_count = 0

    @property
    def location(self) -> str:
        return self._location

    def health_check(self) -> bool:
        return True

    def fetch(self) -> Optional[RegistrySnapshot]:
        self.fetch_count += 1
        return self.snapshot


class CachedRegistrySource(RegistrySource):
    """Wraps a source with the snapshot cache.

    A fresh cache entry is served without touching the wrapped source. When
    the wrapped source fails, a stale entry is served instead if one exists.
    """

    def __init__(self, source: RegistrySource, cache: RegistryCache,
                 logger: Optional[RegistryLogger] = None):
        self.source = source
        self.cache = cache
        self.logger = logger

    @property
    def location(self) -> str:
        return self.source.location

    def health_check(self) -> bool:
        return self.source.health_check()

    def fetch(self) -> Optional[RegistrySnapshot]:
        key = self.source.location

        cached = self.cache.get(key)
        if cached is not None:
            if self.logger:
                self.logger.cache_operation("get", key, hit=True, stale=False)
            return cached.snapshot

        try:
            snapshot = self.source.fetch()
        except RegistryFetchError as e:
            stale = self.cache.get(key, allow_stale=True)
            if stale is None:
                raise
            if self.logger:
                self.logger.cache_operation("get", key, hit=True, stale=True)
                self.logger.warning(
                    "Using stale cached registry",
                    source=key,
                    cached_at=stale.cached_at.isoformat(),
                    error=str(e),
                )
            return stale.snapshot

        if snapshot is not None:
            self.cache.set(key, snapshot)
            if self.logger:
                self.logger.cache_operation("set", key)
        return snapshot


class CacheOnlyRegistrySource(RegistrySource):
    """Offline source that only consults the cache, stale entries included."""

    def __init__(self, location: str, cache: RegistryCache,
                 logger: Optional[RegistryLogger] = None):
        self._location = location
        self.cache = cache
        self.logger = logger

    @property
    def location(self) -> str:
        return self._location

    def health_check(self) -> bool:
        return self.cache.get(self._location, allow_stale=True) is not None

    def fetch(self) -> Optional[RegistrySnapshot]:
        """Return the cached snapshot.

        Raises:
            RegistryFetchError: If nothing is cached for this location
        """
        cached = self.cache.get(self._location, allow_stale=True)
        if self.logger:
            self.logger.cache_operation("get", self._location, hit=cached is not None,
                                        stale=cached.stale if cached else None)
        if cached is None:
            raise RegistryFetchError(
                f"Offline mode: no cached registry for {self._location}"
            )
        return cached.snapshot
