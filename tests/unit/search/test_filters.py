"""Tests for the facet filter engine."""

from __future__ import annotations

import pytest

from expboard_core.models.opportunity import Industry
from expboard_core.models.search import FacetName, Filters
from expboard_search.filters import FilterEngine
from tests.mocks.mock_factories import make_opportunity


@pytest.fixture
def postings() -> list:  # type: ignore[type-arg]
    """Postings covering each facet."""
    return [
        make_opportunity(id="1", industry="tech", skill_level="beginner", location_type="remote",
                         duration_label="1 month"),
        make_opportunity(id="2", industry="design", skill_level="advanced",
                         location_type="on-site", duration_label="3 Months "),
        make_opportunity(id="3", industry="media", skill_level="beginner",
                         location_type="hybrid", duration_label=None),
        make_opportunity(id="4", industry=None, skill_level="intermediate",
                         location_type="remote", duration_label="Ongoing"),
    ]


def _ids(items: list) -> list[str]:  # type: ignore[type-arg]
    return [p.id for p in items]


@pytest.mark.unit
class TestFilterEngine:
    """Test OR-within, AND-across facet semantics."""

    def test_empty_filters_pass_everything(self, postings: list) -> None:  # type: ignore[type-arg]
        """No selection keeps every posting in order."""
        assert _ids(FilterEngine().apply(postings, Filters())) == ["1", "2", "3", "4"]

    def test_or_within_facet(self, postings: list) -> None:  # type: ignore[type-arg]
        """Two industries keep postings of either."""
        filters = Filters()
        filters.toggle(FacetName.INDUSTRY, "tech")
        filters.toggle(FacetName.INDUSTRY, "media")
        assert _ids(FilterEngine().apply(postings, filters)) == ["1", "3"]

    def test_and_across_facets(self, postings: list) -> None:  # type: ignore[type-arg]
        """Different facets must all match."""
        filters = Filters()
        filters.toggle(FacetName.SKILL_LEVEL, "beginner")
        filters.toggle(FacetName.LOCATION_TYPE, "remote")
        assert _ids(FilterEngine().apply(postings, filters)) == ["1"]

    def test_missing_industry_excluded(self, postings: list) -> None:  # type: ignore[type-arg]
        """Postings without an industry fail an industry filter."""
        filters = Filters(industry={Industry.TECH, Industry.DESIGN, Industry.MEDIA})
        assert "4" not in _ids(FilterEngine().apply(postings, filters))

    def test_duration_matches_label_loosely(self, postings: list) -> None:  # type: ignore[type-arg]
        """Duration labels compare case-insensitively and trimmed."""
        filters = Filters()
        filters.toggle(FacetName.DURATION, "3 months")
        assert _ids(FilterEngine().apply(postings, filters)) == ["2"]

    def test_toggle_twice_restores(self, postings: list) -> None:  # type: ignore[type-arg]
        """Toggling a value twice leaves the result unchanged."""
        engine = FilterEngine()
        filters = Filters()
        before = _ids(engine.apply(postings, filters))
        engine.toggle(filters, FacetName.SKILL_LEVEL, "advanced")
        engine.toggle(filters, FacetName.SKILL_LEVEL, "advanced")
        assert filters.is_empty
        assert _ids(engine.apply(postings, filters)) == before

    def test_clear(self, postings: list) -> None:  # type: ignore[type-arg]
        """clear removes every restriction."""
        engine = FilterEngine()
        filters = Filters()
        engine.toggle(filters, FacetName.INDUSTRY, "design")
        engine.clear(filters)
        assert len(engine.apply(postings, filters)) == 4

    def test_apply_returns_copy(self, postings: list) -> None:  # type: ignore[type-arg]
        """The input list is never mutated."""
        result = FilterEngine().apply(postings, Filters())
        result.pop()
        assert len(postings) == 4
