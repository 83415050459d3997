"""Tests for SearchRequest, Coordinates and Filters."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from expboard_core.models.opportunity import Duration, Industry, SkillLevel
from expboard_core.models.search import Coordinates, FacetName, Filters, SearchRequest


@pytest.mark.unit
class TestCoordinates:
    """Test coordinate range validation."""

    def test_valid(self) -> None:
        """Coordinates inside the valid ranges are accepted."""
        c = Coordinates(lat=-33.87, lng=151.21)
        assert c.lat == -33.87

    @pytest.mark.parametrize(("lat", "lng"), [(91.0, 0.0), (-91.0, 0.0), (0.0, 181.0)])
    def test_out_of_range(self, lat: float, lng: float) -> None:
        """Out-of-range values raise."""
        with pytest.raises(ValidationError):
            Coordinates(lat=lat, lng=lng)


@pytest.mark.unit
class TestSearchRequest:
    """Test SearchRequest defaults and validation."""

    def test_defaults(self) -> None:
        """An empty request has no radius and no origin."""
        req = SearchRequest()
        assert req.query == ""
        assert req.radius_km == -1
        assert req.has_radius is False
        assert req.origin is None

    def test_negative_radius_rejected(self) -> None:
        """Only -1 is allowed below zero."""
        with pytest.raises(ValidationError):
            SearchRequest(location="Austin", radius_km=-5)

    def test_zero_radius_allowed(self) -> None:
        """A radius of zero is a concrete radius."""
        assert SearchRequest(location="Austin", radius_km=0).has_radius is True

    def test_origin_dropped_without_location(self) -> None:
        """Origin is cleared when the location is blank."""
        req = SearchRequest(location="  ", origin=Coordinates(lat=1.0, lng=2.0))
        assert req.origin is None

    def test_remote_search_detection(self) -> None:
        """Location 'Remote' in any case is a remote search."""
        assert SearchRequest(location=" REMOTE ").is_remote_search is True
        assert SearchRequest(location="Remote, US").is_remote_search is False

    def test_normalized_query(self) -> None:
        """normalized_query trims and lower-cases."""
        assert SearchRequest(query="  Data Science ").normalized_query == "data science"


@pytest.mark.unit
class TestFilters:
    """Test facet toggling."""

    def test_toggle_adds_then_removes(self) -> None:
        """Toggling twice restores the original selection."""
        filters = Filters()
        assert filters.toggle(FacetName.INDUSTRY, "tech") is True
        assert filters.industry == {Industry.TECH}
        assert filters.toggle("industry", Industry.TECH) is False
        assert filters.is_empty

    def test_toggle_invalid_value(self) -> None:
        """Values outside the facet vocabulary raise ValueError."""
        with pytest.raises(ValueError):
            Filters().toggle(FacetName.SKILL_LEVEL, "expert")

    def test_toggle_unknown_facet(self) -> None:
        """Unknown facet names raise ValueError."""
        with pytest.raises(ValueError):
            Filters().toggle("salary", "high")

    def test_clear(self) -> None:
        """clear empties every facet."""
        filters = Filters()
        filters.toggle(FacetName.DURATION, "1 month")
        filters.toggle(FacetName.SKILL_LEVEL, "advanced")
        filters.clear()
        assert filters.is_empty

    def test_active_values_in_facet_order(self) -> None:
        """active_values lists facets in declaration order."""
        filters = Filters()
        filters.toggle(FacetName.DURATION, Duration.ONE_MONTH)
        filters.toggle(FacetName.SKILL_LEVEL, SkillLevel.BEGINNER)
        assert filters.active_values() == [
            (FacetName.SKILL_LEVEL, SkillLevel.BEGINNER),
            (FacetName.DURATION, Duration.ONE_MONTH),
        ]
