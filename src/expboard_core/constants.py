"""Shared constants for the search pipeline."""

from __future__ import annotations

# Mean Earth radius used by the haversine formula
EARTH_RADIUS_KM = 6371.0

# Radius sentinel meaning "any distance"
RADIUS_ANY = -1

# Radius choices offered by the search form (km); -1 is "Any distance"
RADIUS_OPTIONS: tuple[tuple[int, str], ...] = (
    (5, "5 km"),
    (10, "10 km"),
    (25, "25 km"),
    (50, "50 km"),
    (100, "100 km"),
    (RADIUS_ANY, "Any distance"),
)

REMOTE_KEYWORD = "remote"

# Page sizes offered by the listing page
PAGE_SIZE_OPTIONS: tuple[int, ...] = (10, 20, 50)
DEFAULT_PAGE_SIZE = 10

# Geocoding batch defaults (Nominatim allows roughly one request per second)
GEOCODE_BATCH_SIZE = 5
GEOCODE_BATCH_DELAY_MS = 200

# Coordinates for common locations, resolved without an external lookup
KNOWN_LOCATIONS: dict[str, tuple[float, float]] = {
    "san francisco": (37.7749, -122.4194),
    "san francisco, ca": (37.7749, -122.4194),
    "new york": (40.7128, -74.006),
    "new york, ny": (40.7128, -74.006),
    "austin": (30.2672, -97.7431),
    "austin, tx": (30.2672, -97.7431),
    "seattle": (47.6062, -122.3321),
    "seattle, wa": (47.6062, -122.3321),
    "chicago": (41.8781, -87.6298),
    "chicago, il": (41.8781, -87.6298),
    "los angeles": (34.0522, -118.2437),
    "los angeles, ca": (34.0522, -118.2437),
    "boston": (42.3601, -71.0589),
    "boston, ma": (42.3601, -71.0589),
    "denver": (39.7392, -104.9903),
    "denver, co": (39.7392, -104.9903),
    "portland": (45.5152, -122.6784),
    "portland, or": (45.5152, -122.6784),
    "miami": (25.7617, -80.1918),
    "miami, fl": (25.7617, -80.1918),
    "london": (51.5074, -0.1278),
    "london, uk": (51.5074, -0.1278),
    "london, united kingdom": (51.5074, -0.1278),
    "mitcham": (51.4009, -0.1677),
    "mitcham, london": (51.4009, -0.1677),
    "croydon": (51.3762, -0.0982),
    "wimbledon": (51.4214, -0.2064),
    "berlin": (52.52, 13.405),
    "paris": (48.8566, 2.3522),
    "tokyo": (35.6762, 139.6503),
    "sydney": (-33.8688, 151.2093),
    "toronto": (43.6532, -79.3832),
    "vancouver": (49.2827, -123.1207),
}

# Semantic oracle payload limits
SEMANTIC_DESCRIPTION_CHARS = 200
SEMANTIC_TEMPERATURE = 0.3
SEMANTIC_PROMPT_VERSION = "v1"
