"""diskcache-backed implementation of CacheClient."""

from __future__ import annotations

import asyncio
from pathlib import Path

import diskcache


class DiskCacheClient:
    """Cache shared by processes on one host, stored in SQLite via diskcache."""

    def __init__(self, cache_dir: Path, namespace: str = "expboard") -> None:
        """Open (or create) the cache under ``cache_dir``."""
        cache_dir.mkdir(parents=True, exist_ok=True)
        self._cache = diskcache.Cache(str(cache_dir))
        self._namespace = namespace

    def _key(self, key: str) -> str:
        return f"{self._namespace}:{key}"

    async def get(self, key: str) -> str | None:
        """Return a stored value, or None if absent or expired."""
        value = await asyncio.to_thread(self._cache.get, self._key(key))
        return None if value is None else str(value)

    async def set(self, key: str, value: str, ttl_seconds: int) -> None:
        """Store a value that expires after ``ttl_seconds``."""
        await asyncio.to_thread(self._cache.set, self._key(key), value, expire=ttl_seconds)

    async def delete(self, key: str) -> None:
        """Remove a key if present."""
        await asyncio.to_thread(self._cache.delete, self._key(key))

    def close(self) -> None:
        """Release the underlying SQLite handle."""
        self._cache.close()
