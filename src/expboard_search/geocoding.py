"""Geocoding resolver: known places, bounded cache, coalesced external lookups."""

from __future__ import annotations

import asyncio

import structlog

from expboard_core.constants import (
    GEOCODE_BATCH_DELAY_MS,
    GEOCODE_BATCH_SIZE,
    KNOWN_LOCATIONS,
    REMOTE_KEYWORD,
)
from expboard_core.interfaces.geocoder import GeocodingProvider
from expboard_core.models.results import GeocodeOutcome
from expboard_core.models.search import GeocodedLocation
from expboard_infra.cache.geocode_store import GeocodeStore
from expboard_infra.cache.memory_cache import MISSING, LRUCache
from expboard_search.observability.tracing import traced_stage

logger = structlog.get_logger()

DEFAULT_CACHE_CAPACITY = 1024


def normalize_location(text: str) -> str:
    """Cache key for a location string."""
    return text.strip().lower()


def is_remote_or_empty(text: str | None) -> bool:
    """True for input that is never geocoded."""
    return not text or not text.strip() or normalize_location(text) == REMOTE_KEYWORD


class GeocodingResolver:
    """Resolves free-text locations to coordinates.

    Resolution order: remote/empty short-circuit, cache, exact known place,
    partial known place, in-flight request, shared store, external lookup.
    Failures are logged and cached as unresolvable, never raised.
    """

    def __init__(
        self,
        provider: GeocodingProvider,
        cache: LRUCache[str, GeocodedLocation | None] | None = None,
        store: GeocodeStore | None = None,
        known_locations: dict[str, tuple[float, float]] | None = None,
        batch_size: int = GEOCODE_BATCH_SIZE,
        batch_delay_ms: int = GEOCODE_BATCH_DELAY_MS,
    ) -> None:
        """Initialize with a lookup provider and optional cache tiers."""
        self._provider = provider
        self._cache = cache if cache is not None else LRUCache(DEFAULT_CACHE_CAPACITY)
        self._store = store
        self._known = KNOWN_LOCATIONS if known_locations is None else known_locations
        self._batch_size = max(1, batch_size)
        self._batch_delay = batch_delay_ms / 1000
        self._pending: dict[str, asyncio.Task[GeocodeOutcome]] = {}

    @property
    def is_geocoding(self) -> bool:
        """True while any external lookup is in flight."""
        return bool(self._pending)

    async def resolve(self, location: str) -> GeocodedLocation | None:
        """Resolve a location, or None when remote, empty or unresolvable."""
        outcome = await self.resolve_outcome(location)
        return outcome.location

    async def resolve_outcome(self, location: str) -> GeocodeOutcome:
        """Resolve a location and report which stage produced the answer."""
        if is_remote_or_empty(location):
            return GeocodeOutcome.skipped()

        key = normalize_location(location)

        cached = self._cache.get(key)
        if cached is not MISSING:
            logger.debug("geocode_cache_hit", location=key)
            return GeocodeOutcome.from_value(cached, source="cache")  # type: ignore[arg-type]

        known = self._match_known(key, display_name=location)
        if known is not None:
            self._cache.set(key, known)
            return GeocodeOutcome.from_value(known, source="known")

        pending = self._pending.get(key)
        if pending is None:
            pending = asyncio.ensure_future(self._lookup(key, location))
            self._pending[key] = pending
        else:
            logger.debug("geocode_request_coalesced", location=key)
        return await asyncio.shield(pending)

    async def resolve_many(self, locations: list[str]) -> dict[str, GeocodedLocation | None]:
        """Resolve many locations in rate-limited batches.

        Duplicates are resolved once; batches run concurrently and are
        separated by the configured delay.
        """
        unique = list(dict.fromkeys(locations))
        results: dict[str, GeocodedLocation | None] = {}

        for i in range(0, len(unique), self._batch_size):
            batch = unique[i : i + self._batch_size]
            resolved = await asyncio.gather(*(self.resolve(loc) for loc in batch))
            results.update(zip(batch, resolved, strict=True))

            if i + self._batch_size < len(unique):
                await asyncio.sleep(self._batch_delay)

        return results

    def _match_known(self, key: str, display_name: str) -> GeocodedLocation | None:
        """Exact, then partial (either direction) match against known places."""
        coords = self._known.get(key)
        if coords is None:
            coords = next(
                (c for name, c in self._known.items() if name in key or key in name),
                None,
            )
        if coords is None:
            return None
        lat, lng = coords
        return GeocodedLocation(lat=lat, lng=lng, display_name=display_name)

    @traced_stage("geocode_lookup")
    async def _lookup(self, key: str, location: str) -> GeocodeOutcome:
        """Consult the shared store, then the external geocoder; cache the result."""
        try:
            found, stored = await self._read_store(key)
            if found:
                self._cache.set(key, stored)
                return GeocodeOutcome.from_value(stored, source="store")

            value: GeocodedLocation | None = None
            failed = False
            try:
                matches = await self._provider.lookup(location, limit=1)
                value = matches[0] if matches else None
            except Exception as e:
                failed = True
                logger.warning(
                    "geocode_lookup_failed",
                    location=key,
                    error=str(e),
                    error_type=type(e).__name__,
                )

            self._cache.set(key, value)
            # Transient failures stay out of the shared tier
            if not failed:
                await self._write_store(key, value)
            logger.info("geocode_lookup", location=key, resolved=value is not None)
            return GeocodeOutcome.from_value(value, source="lookup")
        finally:
            self._pending.pop(key, None)

    async def _read_store(self, key: str) -> tuple[bool, GeocodedLocation | None]:
        if self._store is None:
            return False, None
        try:
            return await self._store.get(key)
        except Exception as e:
            logger.warning("geocode_store_read_failed", location=key, error=str(e))
            return False, None

    async def _write_store(self, key: str, value: GeocodedLocation | None) -> None:
        if self._store is None:
            return
        try:
            await self._store.put(key, value)
        except Exception as e:
            logger.warning("geocode_store_write_failed", location=key, error=str(e))
