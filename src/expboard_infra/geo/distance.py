"""Great-circle distance between coordinates (haversine)."""

from __future__ import annotations

import math

from expboard_core.constants import EARTH_RADIUS_KM
from expboard_core.models.search import Coordinates


def distance_km(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Compute the great-circle distance between two points.

    Args:
        lat1: Latitude of the first point in degrees.
        lon1: Longitude of the first point in degrees.
        lat2: Latitude of the second point in degrees.
        lon2: Longitude of the second point in degrees.

    Returns:
        Distance in kilometres, never negative.
    """
    d_lat = math.radians(lat2 - lat1)
    d_lon = math.radians(lon2 - lon1)
    a = (
        math.sin(d_lat / 2) ** 2
        + math.cos(math.radians(lat1)) * math.cos(math.radians(lat2)) * math.sin(d_lon / 2) ** 2
    )
    # Rounding can push `a` a hair past 1 for antipodal points
    a = min(1.0, max(0.0, a))
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_KM * c


def is_within_radius(origin: Coordinates, point: Coordinates, radius_km: float) -> bool:
    """Check whether ``point`` lies within ``radius_km`` of ``origin``."""
    return distance_km(origin.lat, origin.lng, point.lat, point.lng) <= radius_km
