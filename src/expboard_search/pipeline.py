"""Search pipeline: compose, paginate, and drop superseded results."""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

from expboard_core.models.opportunity import Opportunity
from expboard_core.models.results import SearchPage
from expboard_core.models.search import Filters, SearchRequest
from expboard_infra.cache.memory_cache import LRUCache
from expboard_search.composer import SearchComposer
from expboard_search.geocoding import GeocodingResolver
from expboard_search.observability import bind_search_context, clear_search_context
from expboard_search.observability.tracing import traced_stage
from expboard_search.pagination import paginate
from expboard_search.semantic import SemanticQueryMatcher
from expboard_search.tools.factories import (
    create_geocode_store,
    create_geocoding_provider,
    create_semantic_provider,
    create_session_provider,
)

if TYPE_CHECKING:
    from expboard_core.config.settings import Settings
    from expboard_core.interfaces.source import OpportunitySource
    from expboard_core.state import SearchSession

logger = structlog.get_logger()


class SearchPipeline:
    """Runs searches and keeps only the newest one.

    Every ``run`` takes a new generation number. When a run finishes after
    a newer run has started, its result is discarded and ``None`` returned.
    """

    def __init__(self, composer: SearchComposer, default_page_size: int = 10) -> None:
        """Initialize with a composer and the default page size."""
        self._composer = composer
        self._default_page_size = default_page_size
        self._generation = 0

    @property
    def generation(self) -> int:
        """Generation of the most recently started search."""
        return self._generation

    async def run(
        self,
        request: SearchRequest,
        postings: list[Opportunity],
        filters: Filters | None = None,
        page_size: int | None = None,
        page_number: int = 1,
    ) -> SearchPage | None:
        """Compose and paginate one search; None when superseded."""
        self._generation += 1
        generation = self._generation
        bind_search_context(generation)

        try:
            logger.info(
                "search_start",
                query=request.query,
                location=request.location,
                radius_km=request.radius_km,
                candidates=len(postings),
            )
            page = await self._run_traced(
                generation, request, postings, filters, page_size, page_number
            )
            if page is not None:
                logger.info(
                    "search_complete",
                    total_items=page.page.total_items,
                    page_number=page.page.page_number,
                    total_pages=page.page.total_pages,
                )
            return page
        finally:
            clear_search_context()

    async def run_session(
        self, session: SearchSession, postings: list[Opportunity]
    ) -> SearchPage | None:
        """Run the search a session describes and sync its page number."""
        page = await self.run(
            session.request,
            postings,
            filters=session.filters,
            page_size=session.page_size,
            page_number=session.page_number,
        )
        if page is not None:
            session.page_number = page.page.page_number
        return page

    @traced_stage("search")
    async def _run_traced(
        self,
        generation: int,
        request: SearchRequest,
        postings: list[Opportunity],
        filters: Filters | None,
        page_size: int | None,
        page_number: int,
    ) -> SearchPage | None:
        composed = await self._composer.compose_detailed(request, postings, filters)

        if generation != self._generation:
            logger.info("search_superseded", latest_generation=self._generation)
            return None

        page = paginate(
            composed.postings,
            page_size or self._default_page_size,
            page_number,
        )
        return SearchPage(
            generation=generation,
            page=page,
            semantic=composed.semantic,
            origin=composed.origin,
        )


def create_resolver(settings: Settings) -> GeocodingResolver:
    """Geocoding resolver with the cache tiers configured by settings."""
    return GeocodingResolver(
        provider=create_geocoding_provider(settings),
        cache=LRUCache(settings.geocode_cache_capacity),
        store=create_geocode_store(settings),
        batch_size=settings.geocode_batch_size,
        batch_delay_ms=settings.geocode_batch_delay_ms,
    )


def create_search_pipeline(settings: Settings, source: OpportunitySource) -> SearchPipeline:
    """Wire resolver, matcher and composer from settings."""
    resolver = create_resolver(settings)
    matcher = SemanticQueryMatcher(
        provider=create_semantic_provider(settings, source),
        session=create_session_provider(settings),
    )
    return SearchPipeline(
        SearchComposer(resolver, matcher),
        default_page_size=settings.default_page_size,
    )
