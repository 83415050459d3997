"""Deep-link query parameters for a search request."""

from __future__ import annotations

from collections.abc import Mapping
from urllib.parse import urlencode

import structlog
from pydantic import ValidationError

from expboard_core.constants import RADIUS_ANY
from expboard_core.exceptions import InvalidSearchRequestError
from expboard_core.models.search import Coordinates, SearchRequest

logger = structlog.get_logger()

QUERY_KEY = "q"
LOCATION_KEY = "location"
RADIUS_KEY = "radius"
LAT_KEY = "lat"
LNG_KEY = "lng"


def to_query_params(request: SearchRequest) -> dict[str, str]:
    """Encode a request; unset values are omitted."""
    params: dict[str, str] = {}
    if request.query.strip():
        params[QUERY_KEY] = request.query.strip()
    if request.location.strip():
        params[LOCATION_KEY] = request.location.strip()
    if request.has_radius:
        params[RADIUS_KEY] = str(request.radius_km)
    if request.origin is not None:
        params[LAT_KEY] = repr(request.origin.lat)
        params[LNG_KEY] = repr(request.origin.lng)
    return params


def to_query_string(request: SearchRequest) -> str:
    """URL-encoded form of ``to_query_params``."""
    return urlencode(to_query_params(request))


def from_query_params(params: Mapping[str, str], strict: bool = False) -> SearchRequest:
    """Decode a request from query parameters.

    Missing parameters mean unset. Malformed values are logged and treated
    as unset, unless ``strict`` is set, in which case
    ``InvalidSearchRequestError`` is raised.
    """
    query = params.get(QUERY_KEY, "").strip()
    location = params.get(LOCATION_KEY, "").strip()
    radius = _parse_radius(params.get(RADIUS_KEY), strict)
    origin = _parse_origin(params.get(LAT_KEY), params.get(LNG_KEY), strict)
    return SearchRequest(query=query, location=location, radius_km=radius, origin=origin)


def _parse_radius(raw: str | None, strict: bool) -> int:
    if raw is None or not raw.strip():
        return RADIUS_ANY
    try:
        value = int(raw.strip())
    except ValueError:
        return _reject(RADIUS_KEY, raw, strict, RADIUS_ANY)
    if value != RADIUS_ANY and value < 0:
        return _reject(RADIUS_KEY, raw, strict, RADIUS_ANY)
    return value


def _parse_origin(lat: str | None, lng: str | None, strict: bool) -> Coordinates | None:
    if not lat or not lng:
        return None
    try:
        return Coordinates(lat=float(lat), lng=float(lng))
    except (ValueError, ValidationError):
        return _reject(f"{LAT_KEY},{LNG_KEY}", f"{lat},{lng}", strict, None)


def _reject(key: str, raw: str, strict: bool, default):  # type: ignore[no-untyped-def]
    if strict:
        msg = f"Invalid value for '{key}': {raw!r}"
        raise InvalidSearchRequestError(msg)
    logger.warning("query_param_ignored", key=key, value=raw)
    return default
