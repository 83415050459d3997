"""Geocoding lookups against a Nominatim-compatible search API."""

from __future__ import annotations

from typing import Any

import httpx
import structlog

from expboard_core.exceptions import GeocodingError, UpstreamTimeoutError
from expboard_core.models.search import GeocodedLocation

logger = structlog.get_logger()

NOMINATIM_SEARCH_URL = "https://nominatim.openstreetmap.org/search"

_CITY_KEYS = ("city", "town", "village", "hamlet", "suburb", "municipality")


def _short_name(item: dict[str, Any]) -> str:
    """Build 'City, State, Country' from address details, else the full name."""
    address = item.get("address")
    if isinstance(address, dict):
        city = next((address[k] for k in _CITY_KEYS if address.get(k)), None)
        parts = [p for p in (city, address.get("state"), address.get("country")) if p]
        if parts:
            return ", ".join(parts)
    return str(item.get("display_name", ""))


class NominatimGeocoder:
    """GeocodingProvider backed by OpenStreetMap Nominatim."""

    def __init__(
        self,
        base_url: str = NOMINATIM_SEARCH_URL,
        user_agent: str = "expboard-search/0.1",
        timeout: float = 30.0,
    ) -> None:
        """Initialize with endpoint, User-Agent and request timeout."""
        self._base_url = base_url
        self._headers = {"Accept-Language": "en", "User-Agent": user_agent}
        self._timeout = timeout

    async def lookup(self, query_text: str, limit: int = 1) -> list[GeocodedLocation]:
        """Resolve a place name; returns an empty list when nothing matched."""
        params: dict[str, str | int] = {
            "format": "json",
            "q": query_text,
            "limit": limit,
            "addressdetails": 1,
        }
        try:
            async with httpx.AsyncClient(timeout=self._timeout) as client:
                response = await client.get(self._base_url, params=params, headers=self._headers)
                response.raise_for_status()
                data = response.json()
        except httpx.TimeoutException as e:
            msg = f"Geocoding request timed out for {query_text!r}"
            raise UpstreamTimeoutError(msg) from e
        except httpx.HTTPError as e:
            msg = f"Geocoding request failed for {query_text!r}: {e}"
            raise GeocodingError(msg) from e
        except ValueError as e:
            msg = f"Geocoder returned invalid JSON for {query_text!r}"
            raise GeocodingError(msg) from e

        if not isinstance(data, list):
            msg = f"Unexpected geocoder payload type: {type(data).__name__}"
            raise GeocodingError(msg)

        results: list[GeocodedLocation] = []
        for item in data[:limit]:
            try:
                results.append(
                    GeocodedLocation(
                        lat=float(item["lat"]),
                        lng=float(item["lon"]),
                        display_name=_short_name(item),
                    )
                )
            except (KeyError, TypeError, ValueError):
                logger.debug("geocoder_item_skipped", query=query_text)
        logger.debug("geocoder_lookup", query=query_text, results=len(results))
        return results
