"""Tests for the search pipeline."""

from __future__ import annotations

import asyncio
from unittest.mock import MagicMock

import pytest

from expboard_core.models.results import SemanticMatchResult, StageStatus
from expboard_core.models.search import SearchRequest
from expboard_core.state import SearchSession
from expboard_search.composer import ComposedResults
from expboard_search.pipeline import SearchPipeline, create_search_pipeline
from tests.mocks.mock_factories import make_composer, make_opportunities, make_opportunity
from tests.mocks.mock_settings import make_settings


def _gated_composer(gate: asyncio.Event) -> MagicMock:
    """Composer whose 'slow' queries wait for the gate."""

    async def _compose(request, postings, filters=None):  # type: ignore[no-untyped-def]
        if request.query == "slow":
            await gate.wait()
        return ComposedResults(
            postings=list(postings),
            semantic=SemanticMatchResult(status=StageStatus.SKIPPED),
        )

    composer = MagicMock()
    composer.compose_detailed = _compose
    return composer


@pytest.mark.unit
class TestSearchPipeline:
    """Test paging and stale-result handling."""

    @pytest.mark.asyncio
    async def test_run_returns_first_page(self) -> None:
        """A run yields the requested page with diagnostics."""
        pipeline = SearchPipeline(make_composer())
        result = await pipeline.run(SearchRequest(), make_opportunities(25))

        assert result is not None
        assert result.generation == 1
        assert result.page.total_items == 25
        assert result.page.total_pages == 3
        assert [p.id for p in result.page.items] == [f"job-{i}" for i in range(10)]
        assert result.semantic.status is StageStatus.SKIPPED

    @pytest.mark.asyncio
    async def test_page_number_clamped(self) -> None:
        """Out-of-range pages show the last page."""
        pipeline = SearchPipeline(make_composer())
        result = await pipeline.run(
            SearchRequest(), make_opportunities(25), page_size=10, page_number=4
        )
        assert result is not None
        assert result.page.page_number == 3
        assert len(result.page.items) == 5

    @pytest.mark.asyncio
    async def test_default_page_size(self) -> None:
        """The pipeline default applies when no page size is given."""
        pipeline = SearchPipeline(make_composer(), default_page_size=20)
        result = await pipeline.run(SearchRequest(), make_opportunities(25))
        assert result is not None
        assert len(result.page.items) == 20

    @pytest.mark.asyncio
    async def test_stale_generation_discarded(self) -> None:
        """A search finishing after a newer one started returns None."""
        gate = asyncio.Event()
        pipeline = SearchPipeline(_gated_composer(gate))
        postings = [make_opportunity()]

        slow = asyncio.ensure_future(pipeline.run(SearchRequest(query="slow"), postings))
        await asyncio.sleep(0)
        fast = await pipeline.run(SearchRequest(query="fast"), postings)
        gate.set()

        assert await slow is None
        assert fast is not None
        assert fast.generation == 2
        assert pipeline.generation == 2

    @pytest.mark.asyncio
    async def test_run_session_syncs_page(self) -> None:
        """run_session writes the clamped page back to the session."""
        session = SearchSession()
        session.go_to_page(9)
        pipeline = SearchPipeline(make_composer())
        result = await pipeline.run_session(session, make_opportunities(15))
        assert result is not None
        assert session.page_number == 2

    @pytest.mark.asyncio
    async def test_create_from_settings(self) -> None:
        """The settings factory wires a working pipeline."""
        source = MagicMock()
        pipeline = create_search_pipeline(make_settings(default_page_size=5), source)
        postings = [
            make_opportunity(id="1", title="Video Editor", skills=[]),
            make_opportunity(id="2", title="Backend Engineer"),
        ]
        result = await pipeline.run(SearchRequest(query="editor"), postings)
        assert result is not None
        assert [p.id for p in result.page.items] == ["1"]
        assert result.page.page_size == 5
