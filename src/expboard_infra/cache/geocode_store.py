"""Shared second-tier store for geocoding results."""

from __future__ import annotations

import json

import structlog
from pydantic import ValidationError

from expboard_core.interfaces.cache import CacheClient
from expboard_core.models.search import GeocodedLocation

logger = structlog.get_logger()

# Stored for locations the geocoder could not resolve
UNRESOLVABLE = "null"


class GeocodeStore:
    """Persists resolved (and unresolvable) locations in a CacheClient."""

    def __init__(self, cache: CacheClient, ttl_hours: int = 24 * 30) -> None:
        """Initialize with a CacheClient implementation."""
        self._cache = cache
        self._ttl_seconds = ttl_hours * 3600

    def _key(self, normalized: str) -> str:
        return f"geocode:{normalized}"

    async def get(self, normalized: str) -> tuple[bool, GeocodedLocation | None]:
        """Look up a normalized location.

        Returns ``(found, value)``; ``(True, None)`` means the location is
        known to be unresolvable.
        """
        raw = await self._cache.get(self._key(normalized))
        if raw is None:
            return False, None
        if raw == UNRESOLVABLE:
            return True, None
        try:
            return True, GeocodedLocation.model_validate_json(raw)
        except ValidationError:
            logger.warning("geocode_store_corrupt_entry", key=normalized)
            await self._cache.delete(self._key(normalized))
            return False, None

    async def put(self, normalized: str, value: GeocodedLocation | None) -> None:
        """Store a resolution result, including "unresolvable"."""
        payload = UNRESOLVABLE if value is None else json.dumps(value.model_dump())
        await self._cache.set(self._key(normalized), payload, ttl_seconds=self._ttl_seconds)
