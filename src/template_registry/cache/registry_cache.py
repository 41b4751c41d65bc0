"""File-backed cache for the last fetched registry snapshot."""

import hashlib
import json
import re
from datetime import datetime, timedelta
from pathlib import Path
from typing import Any, Dict, Optional

from pydantic import ValidationError as PydanticValidationError

from ..types import CachedSnapshot, RegistrySnapshot

# Entry files are named after the SHA-256 of their source
ENTRY_NAME_PATTERN = re.compile(r"[0-9a-f]{64}\.(json|tmp)")


def _parse_cached_at(value: str) -> datetime:
    """Naive local timestamp; aware values are converted to local time."""
    cached_at = datetime.fromisoformat(value)
    if cached_at.tzinfo is not None:
        cached_at = cached_at.astimezone().replace(tzinfo=None)
    return cached_at


class RegistryCache:
    """TTL cache of registry snapshots keyed by source location."""

    def __init__(self, cache_dir: Path = None, ttl: timedelta = timedelta(hours=1)):
        """Initialize cache.

        Args:
            cache_dir: Cache directory (default: .cache/registry)
            ttl: Age after which an entry is stale
        """
        if cache_dir is None:
            cache_dir = Path.cwd() / ".cache" / "registry"

        self.cache_dir = Path(cache_dir)
        self.ttl = ttl

    def _cache_key(self, source: str) -> str:
        """SHA-256 of the source location."""
        return hashlib.sha256(source.encode()).hexdigest()

    def _cache_path(self, source: str) -> Path:
        return self.cache_dir / f"{self._cache_key(source)}.json"

    def get(self, source: str, allow_stale: bool = False) -> Optional[CachedSnapshot]:
        """Get the cached snapshot for a source.

        Args:
            source: Registry URL or file path the snapshot came from
            allow_stale: Return entries older than the TTL instead of dropping them

        Returns:
            CachedSnapshot, or None on a miss
        """
        cache_path = self._cache_path(source)

        if not cache_path.exists():
            return None

        try:
            with open(cache_path, 'r', encoding='utf-8') as f:
                cache_data = json.load(f)

            cached_at = _parse_cached_at(cache_data['cached_at'])
            snapshot = RegistrySnapshot.from_registry_file(cache_data['data'])
            stale = datetime.now() - cached_at > self.ttl

        except (json.JSONDecodeError, KeyError, ValueError, TypeError, OSError, PydanticValidationError):
            # Corrupted entry
            self._remove_cache_file(cache_path)
            return None

        if stale and not allow_stale:
            return None

        return CachedSnapshot(snapshot=snapshot, source=source, cached_at=cached_at, stale=stale)

    def set(self, source: str, snapshot: RegistrySnapshot) -> bool:
        """Cache a snapshot with the current timestamp.

        Returns:
            True if cached successfully, False otherwise
        """
        cache_path = self._cache_path(source)

        try:
            cache_path.parent.mkdir(parents=True, exist_ok=True)

            cache_entry = {
                'cached_at': datetime.now().isoformat(),
                'source': source,
                'data': snapshot.to_registry_file(),
            }

            # Write then rename so readers never see a partial file
            temp_path = cache_path.with_suffix('.tmp')
            with open(temp_path, 'w', encoding='utf-8') as f:
                json.dump(cache_entry, f, indent=2, ensure_ascii=False)
            temp_path.replace(cache_path)
            return True

        except (OSError, TypeError):
            return False

    def _remove_cache_file(self, cache_path: Path) -> None:
        try:
            if cache_path.exists():
                cache_path.unlink()
        except OSError:
            pass

    def _entry_files(self, suffixes=(".json",)) -> list[Path]:
        """Files in cache_dir written by this cache; anything else is left alone."""
        if not self.cache_dir.is_dir():
            return []
        return sorted(
            path for path in self.cache_dir.iterdir()
            if path.is_file() and path.suffix in suffixes and ENTRY_NAME_PATTERN.fullmatch(path.name)
        )

    def clear(self) -> int:
        """Remove every cached snapshot and leftover temp file.

        Returns:
            Number of cached snapshots cleared
        """
        cleared = 0
        for cache_file in self._entry_files(suffixes=(".json", ".tmp")):
            try:
                cache_file.unlink()
            except OSError:
                continue
            if cache_file.suffix == ".json":
                cleared += 1
        return cleared

    def stats(self) -> Dict[str, Any]:
        """Entry count, total size and number of stale or unreadable entries."""
        stats = {'count': 0, 'size_mb': 0.0, 'stale': 0, 'sources': []}
        current_time = datetime.now()

        for cache_file in self._entry_files():
            stats['count'] += 1

            try:
                stats['size_mb'] += cache_file.stat().st_size / 1024 / 1024
                with open(cache_file, 'r', encoding='utf-8') as f:
                    cache_data = json.load(f)
                cached_at = _parse_cached_at(cache_data['cached_at'])
                stats['sources'].append(str(cache_data.get('source', 'unknown')))
                if current_time - cached_at > self.ttl:
                    stats['stale'] += 1
            except (json.JSONDecodeError, KeyError, ValueError, TypeError, AttributeError, OSError):
                stats['stale'] += 1

        stats['sources'].sort()
        return stats
