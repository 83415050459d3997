"""Public interface re-exports for expboard_core."""

from expboard_core.interfaces.cache import CacheClient
from expboard_core.interfaces.geocoder import GeocodingProvider
from expboard_core.interfaces.semantic import SemanticMatchProvider
from expboard_core.interfaces.session import SessionProvider
from expboard_core.interfaces.source import OpportunitySource

__all__ = [
    "CacheClient",
    "GeocodingProvider",
    "OpportunitySource",
    "SemanticMatchProvider",
    "SessionProvider",
]
