"""Factory functions for creating tool instances from settings."""

from __future__ import annotations

from typing import TYPE_CHECKING

from expboard_core.interfaces.geocoder import GeocodingProvider
from expboard_core.interfaces.semantic import SemanticMatchProvider
from expboard_core.interfaces.session import SessionProvider
from expboard_core.interfaces.source import OpportunitySource

if TYPE_CHECKING:
    from expboard_core.config.settings import Settings
    from expboard_infra.cache.geocode_store import GeocodeStore


def create_geocoding_provider(settings: Settings) -> GeocodingProvider:
    """Create the Nominatim geocoder configured by settings."""
    from expboard_search.tools.nominatim import NominatimGeocoder

    return NominatimGeocoder(
        base_url=settings.geocoder_url,
        user_agent=settings.geocoder_user_agent,
        timeout=settings.http_timeout_seconds,
    )


def create_geocode_store(settings: Settings) -> GeocodeStore | None:
    """Create the shared second-tier geocode store, or None for ``memory``."""
    if settings.geocode_cache_backend == "memory":
        return None

    from expboard_infra.cache.geocode_store import GeocodeStore

    if settings.geocode_cache_backend == "redis":
        from expboard_infra.cache.redis_cache import RedisCacheClient

        return GeocodeStore(
            RedisCacheClient.from_url(settings.redis_url),
            ttl_hours=settings.geocode_cache_ttl_hours,
        )

    from expboard_infra.cache.disk_cache import DiskCacheClient

    return GeocodeStore(
        DiskCacheClient(settings.cache_dir),
        ttl_hours=settings.geocode_cache_ttl_hours,
    )


def create_semantic_provider(
    settings: Settings, source: OpportunitySource
) -> SemanticMatchProvider | None:
    """Create the semantic oracle selected by ``settings.semantic_provider``.

    Returns None when semantic search is disabled.
    """
    if settings.semantic_provider == "http" and settings.semantic_search_url:
        from expboard_search.tools.semantic_client import HttpSemanticMatchClient

        return HttpSemanticMatchClient(
            url=settings.semantic_search_url,
            timeout=settings.http_timeout_seconds,
        )

    if settings.semantic_provider == "llm" and settings.anthropic_api_key:
        from expboard_search.tools.llm_ranker import LLMSemanticRanker

        return LLMSemanticRanker(
            api_key=settings.anthropic_api_key.get_secret_value(),
            model=settings.semantic_model,
            source=source,
            timeout=settings.http_timeout_seconds,
        )

    return None


def create_session_provider(settings: Settings) -> SessionProvider:
    """Create a session provider holding the configured access token."""
    from expboard_search.tools.session import StaticSessionProvider

    token = settings.access_token.get_secret_value() if settings.access_token else None
    return StaticSessionProvider(token)
