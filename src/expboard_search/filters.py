"""Facet filter engine: OR within a facet, AND across facets."""

from __future__ import annotations

from enum import StrEnum

from expboard_core.models.opportunity import Duration, Opportunity
from expboard_core.models.search import FacetName, Filters


def _duration_matches(label: str | None, selected: set[Duration]) -> bool:
    if not label:
        return False
    folded = label.strip().lower()
    return any(folded == d.value.lower() for d in selected)


class FilterEngine:
    """Applies and edits facet filters. Stateless; ``Filters`` holds the selection."""

    def apply(self, postings: list[Opportunity], filters: Filters) -> list[Opportunity]:
        """Keep postings that satisfy every non-empty facet, preserving order."""
        if filters.is_empty:
            return list(postings)
        return [p for p in postings if self.matches(p, filters)]

    def matches(self, posting: Opportunity, filters: Filters) -> bool:
        """True when the posting passes all facets."""
        if filters.industry and posting.industry not in filters.industry:
            return False
        if filters.skill_level and posting.skill_level not in filters.skill_level:
            return False
        if filters.location_type and posting.location_type not in filters.location_type:
            return False
        return not filters.duration or _duration_matches(posting.duration_label, filters.duration)

    def toggle(self, filters: Filters, facet: FacetName | str, value: StrEnum | str) -> bool:
        """Add or remove one facet value; returns whether it is now active."""
        return filters.toggle(facet, value)

    def clear(self, filters: Filters) -> None:
        """Remove all facet selections."""
        filters.clear()
