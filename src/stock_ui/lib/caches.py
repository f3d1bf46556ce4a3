"""
Disk-backed key-value storage.

DiskCache wraps a diskcache.Cache directory. The session layer keeps the
bearer token here, with an expiry matching the token lifetime, so a login
survives server restarts but not the token itself.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Any

import diskcache


@dataclass
class CacheEntry:
    """
    A value found in the cache.

    Attributes:
        value: The stored value.
    """

    value: Any


class DiskCache:
    """
    Key-value store persisted under ``cache_dir``.

    Safe to share between threads and processes.

    Attributes:
        cache_dir: Directory holding the cache files, created on demand.
    """

    def __init__(self, cache_dir: str | Path) -> None:
        self.cache_dir = Path(cache_dir)
        self._cache = diskcache.Cache(str(self.cache_dir))

    def get(self, key: str) -> CacheEntry | None:
        """Return the entry stored under ``key``; expired keys read as missing."""
        value = self._cache.get(key, default=None)
        return None if value is None else CacheEntry(value=value)

    def set(self, key: str, value: Any, expire: float | None = None) -> None:
        """
        Store ``value`` under ``key``.

        Args:
            key: Cache key.
            value: Any picklable value.
            expire: Seconds until the entry disappears; None keeps it forever.
        """
        self._cache.set(key, value, expire=expire)

    def delete(self, key: str) -> None:
        """Remove ``key``; missing keys are ignored."""
        self._cache.delete(key)

    def close(self) -> None:
        self._cache.close()
