"""Abstract geocoding lookup interface."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from expboard_core.models.search import GeocodedLocation


@runtime_checkable
class GeocodingProvider(Protocol):
    """Resolves a free-text place name to candidate coordinates."""

    async def lookup(self, query_text: str, limit: int = 1) -> list[GeocodedLocation]:
        """Return up to ``limit`` matches, best first; empty when nothing matched.

        Raises GeocodingError (or UpstreamTimeoutError) on transport failure.
        """
        ...
