"""Tests for tool factory functions."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import MagicMock

import pytest
from pydantic import SecretStr

from expboard_infra.cache.disk_cache import DiskCacheClient
from expboard_infra.cache.geocode_store import GeocodeStore
from expboard_search.tools.factories import (
    create_geocode_store,
    create_geocoding_provider,
    create_semantic_provider,
    create_session_provider,
)
from expboard_search.tools.llm_ranker import LLMSemanticRanker
from expboard_search.tools.nominatim import NominatimGeocoder
from expboard_search.tools.semantic_client import HttpSemanticMatchClient
from tests.mocks.mock_settings import make_settings


@pytest.mark.unit
class TestFactories:
    """Test provider selection from settings."""

    def test_geocoding_provider(self) -> None:
        """The geocoder is Nominatim."""
        assert isinstance(create_geocoding_provider(make_settings()), NominatimGeocoder)

    def test_memory_backend_has_no_store(self) -> None:
        """The memory backend disables the shared store."""
        assert create_geocode_store(make_settings()) is None

    def test_disk_backend(self, tmp_path: Path) -> None:
        """The disk backend wraps diskcache."""
        settings = make_settings(geocode_cache_backend="disk", cache_dir=tmp_path / "c")
        store = create_geocode_store(settings)
        assert isinstance(store, GeocodeStore)
        assert isinstance(store._cache, DiskCacheClient)
        store._cache.close()

    def test_semantic_disabled(self) -> None:
        """Provider 'none' yields no oracle."""
        assert create_semantic_provider(make_settings(), MagicMock()) is None

    def test_semantic_http(self) -> None:
        """Provider 'http' yields the HTTP client."""
        settings = make_settings(
            semantic_provider="http", semantic_search_url="https://fn.test/search"
        )
        assert isinstance(create_semantic_provider(settings, MagicMock()), HttpSemanticMatchClient)

    def test_semantic_llm(self) -> None:
        """Provider 'llm' yields the LLM ranker."""
        settings = make_settings(
            semantic_provider="llm", anthropic_api_key=SecretStr("sk-ant-test")
        )
        assert isinstance(create_semantic_provider(settings, MagicMock()), LLMSemanticRanker)

    @pytest.mark.asyncio
    async def test_session_provider_token(self) -> None:
        """The configured token is exposed by the session provider."""
        settings = make_settings(access_token=SecretStr("tok"))
        session = create_session_provider(settings)
        assert await session.get_access_token() == "tok"

    @pytest.mark.asyncio
    async def test_session_provider_signed_out(self) -> None:
        """No configured token means signed out."""
        session = create_session_provider(make_settings())
        assert await session.get_access_token() is None
