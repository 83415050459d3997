"""Shared pytest fixtures for unit tests."""

from __future__ import annotations

from collections.abc import Iterator
from unittest.mock import MagicMock

import pytest

from expboard_core.models.opportunity import Opportunity
from expboard_core.state import SearchSession
from expboard_search.observability import tracing
from tests.mocks.mock_factories import make_opportunity
from tests.mocks.mock_settings import make_settings


@pytest.fixture
def mock_settings() -> MagicMock:
    """Return a MagicMock Settings with sensible defaults."""
    return make_settings()


@pytest.fixture
def sample_opportunity() -> Opportunity:
    """Return a minimal valid Opportunity."""
    return make_opportunity()


@pytest.fixture
def search_session() -> SearchSession:
    """Return a fresh SearchSession."""
    return SearchSession()


@pytest.fixture(autouse=True)
def _no_tracer() -> Iterator[None]:
    """Keep tests independent of any tracer another test configured."""
    original = tracing._tracer
    tracing._tracer = None
    yield
    tracing._tracer = original
