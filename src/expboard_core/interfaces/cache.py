"""Abstract key/value cache interface for shared resolver state."""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class CacheClient(Protocol):
    """String key/value store with per-entry expiry."""

    async def get(self, key: str) -> str | None:
        """Return the stored value, or None when absent or expired."""
        ...

    async def set(self, key: str, value: str, ttl_seconds: int) -> None:
        """Store a value that expires after ``ttl_seconds``."""
        ...

    async def delete(self, key: str) -> None:
        """Remove a key; missing keys are ignored."""
        ...
