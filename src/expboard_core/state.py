"""Search session state: what the listing page currently shows."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum

from expboard_core.constants import DEFAULT_PAGE_SIZE, RADIUS_ANY
from expboard_core.models.search import Coordinates, FacetName, Filters, SearchRequest


@dataclass
class SearchSession:
    """Mutable listing state. Any change to what is searched resets paging."""

    request: SearchRequest = field(default_factory=SearchRequest)
    filters: Filters = field(default_factory=Filters)
    page_number: int = 1
    page_size: int = DEFAULT_PAGE_SIZE

    def set_query(self, query: str) -> None:
        """Replace the free-text query."""
        self.request = self.request.model_copy(update={"query": query})
        self.page_number = 1

    def set_location(self, location: str) -> None:
        """Replace the location text; a previously resolved origin is dropped."""
        self.request = SearchRequest(
            query=self.request.query,
            location=location,
            radius_km=self.request.radius_km,
        )
        self.page_number = 1

    def set_origin(self, origin: Coordinates | None) -> None:
        """Attach resolved coordinates for the current location."""
        self.request = SearchRequest(
            query=self.request.query,
            location=self.request.location,
            radius_km=self.request.radius_km,
            origin=origin,
        )
        self.page_number = 1

    def set_radius(self, radius_km: int) -> None:
        """Replace the radius; -1 means any distance."""
        self.request = SearchRequest(
            query=self.request.query,
            location=self.request.location,
            radius_km=radius_km,
            origin=self.request.origin,
        )
        self.page_number = 1

    def set_page_size(self, page_size: int) -> None:
        """Change results per page."""
        if page_size < 1:
            msg = f"page_size must be >= 1, got {page_size}"
            raise ValueError(msg)
        self.page_size = page_size
        self.page_number = 1

    def toggle_filter(self, facet: FacetName | str, value: StrEnum | str) -> bool:
        """Toggle a facet value; returns whether it is now active."""
        active = self.filters.toggle(facet, value)
        self.page_number = 1
        return active

    def clear_filters(self) -> None:
        """Remove every facet restriction."""
        self.filters.clear()
        self.page_number = 1

    def go_to_page(self, page_number: int) -> None:
        """Move to a page; the paginator clamps out-of-range values."""
        self.page_number = page_number

    def reset(self) -> None:
        """Return to an empty search on page 1."""
        self.request = SearchRequest(radius_km=RADIUS_ANY)
        self.filters = Filters()
        self.page_number = 1
