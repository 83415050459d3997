"""Search composer: merges semantic, text and location matches, then applies facets."""

from __future__ import annotations

from dataclasses import dataclass

import structlog

from expboard_core.constants import REMOTE_KEYWORD
from expboard_core.models.opportunity import Opportunity
from expboard_core.models.results import SemanticMatchResult, StageStatus
from expboard_core.models.search import Coordinates, Filters, GeocodedLocation, SearchRequest
from expboard_infra.geo.distance import is_within_radius
from expboard_search.filters import FilterEngine
from expboard_search.geocoding import GeocodingResolver
from expboard_search.semantic import SemanticQueryMatcher

logger = structlog.get_logger()


def matches_text(posting: Opportunity, needle: str) -> bool:
    """Case-insensitive substring match on title, company name, or any skill.

    ``needle`` must already be lower-cased.
    """
    if needle in posting.title.lower() or needle in posting.company_name.lower():
        return True
    return any(needle in skill.lower() for skill in posting.skills)


def matches_location_text(posting: Opportunity, needle: str) -> bool:
    """Case-insensitive substring match of ``needle`` in the raw location."""
    return needle in posting.location_text.lower()


def is_remote_compatible(posting: Opportunity) -> bool:
    """Remote postings, or postings whose location text says remote."""
    return posting.is_remote or REMOTE_KEYWORD in posting.location_text.lower()


@dataclass
class ComposedResults:
    """Composer output plus the stage results that shaped it."""

    postings: list[Opportunity]
    semantic: SemanticMatchResult
    origin: GeocodedLocation | None = None


class SearchComposer:
    """Turns a search request and the posting list into an ordered result list."""

    def __init__(
        self,
        resolver: GeocodingResolver,
        matcher: SemanticQueryMatcher,
        filter_engine: FilterEngine | None = None,
    ) -> None:
        """Initialize with the resolver, the semantic matcher and a filter engine."""
        self._resolver = resolver
        self._matcher = matcher
        self._filters = filter_engine or FilterEngine()

    async def compose(
        self,
        request: SearchRequest,
        postings: list[Opportunity],
        filters: Filters | None = None,
    ) -> list[Opportunity]:
        """Ordered, deduplicated postings matching the request and filters."""
        composed = await self.compose_detailed(request, postings, filters)
        return composed.postings

    async def compose_detailed(
        self,
        request: SearchRequest,
        postings: list[Opportunity],
        filters: Filters | None = None,
    ) -> ComposedResults:
        """Same as ``compose`` but also returns stage diagnostics."""
        if request.normalized_query:
            semantic = await self._matcher.match_result(request.query, request.location or None)
        else:
            semantic = SemanticMatchResult(status=StageStatus.SKIPPED)

        matched = self.merge_query_matches(request, postings, semantic)
        located, origin = await self._apply_location(request, matched)
        final = self._filters.apply(located, filters or Filters())

        logger.debug(
            "search_composed",
            candidates=len(postings),
            query_matched=len(matched),
            location_matched=len(located),
            final=len(final),
            semantic_status=semantic.status.value,
        )
        return ComposedResults(postings=final, semantic=semantic, origin=origin)

    def merge_query_matches(
        self,
        request: SearchRequest,
        postings: list[Opportunity],
        semantic: SemanticMatchResult,
    ) -> list[Opportunity]:
        """Semantic hits in oracle order, then remaining text matches in list order."""
        needle = request.normalized_query
        if not needle:
            return _dedupe(postings)

        if not semantic.has_signal:
            return _dedupe([p for p in postings if matches_text(p, needle)])

        by_id = {p.id: p for p in postings}
        merged: list[Opportunity] = []
        seen: set[str] = set()
        for job_id in semantic.matching_ids:
            posting = by_id.get(job_id)
            if posting is not None and job_id not in seen:
                merged.append(posting)
                seen.add(job_id)

        for posting in postings:
            if posting.id not in seen and matches_text(posting, needle):
                merged.append(posting)
                seen.add(posting.id)
        return merged

    async def _apply_location(
        self, request: SearchRequest, postings: list[Opportunity]
    ) -> tuple[list[Opportunity], GeocodedLocation | None]:
        """Location stage: remote bypass, radius search, or substring match."""
        if not request.location.strip():
            return postings, None

        if request.is_remote_search:
            return [p for p in postings if is_remote_compatible(p)], None

        needle = request.normalized_location
        if request.has_radius:
            origin = await self._resolve_origin(request)
            if origin is not None:
                kept = await self._within_radius(postings, origin, request.radius_km, needle)
                return kept, origin

        return [p for p in postings if matches_location_text(p, needle)], None

    async def _resolve_origin(self, request: SearchRequest) -> GeocodedLocation | None:
        if request.origin is not None:
            return GeocodedLocation(
                lat=request.origin.lat,
                lng=request.origin.lng,
                display_name=request.location,
            )
        return await self._resolver.resolve(request.location)

    async def _within_radius(
        self,
        postings: list[Opportunity],
        origin: GeocodedLocation,
        radius_km: int,
        needle: str,
    ) -> list[Opportunity]:
        """Keep remote postings and those geocoded inside the radius.

        Postings whose location cannot be geocoded fall back to a substring
        match against the search location.
        """
        to_resolve = [p.location_text for p in postings if not p.is_remote and p.location_text]
        resolved = await self._resolver.resolve_many(to_resolve)
        centre = Coordinates(lat=origin.lat, lng=origin.lng)

        kept: list[Opportunity] = []
        for posting in postings:
            if posting.is_remote:
                kept.append(posting)
                continue
            geo = resolved.get(posting.location_text)
            if geo is not None:
                if is_within_radius(centre, geo.coordinates, radius_km):
                    kept.append(posting)
            elif matches_location_text(posting, needle):
                kept.append(posting)
        return kept


def _dedupe(postings: list[Opportunity]) -> list[Opportunity]:
    """Drop repeated IDs, keeping the first occurrence."""
    seen: set[str] = set()
    unique: list[Opportunity] = []
    for posting in postings:
        if posting.id not in seen:
            seen.add(posting.id)
            unique.append(posting)
    return unique
