"""Tagged stage results and paged search output."""

from __future__ import annotations

from enum import StrEnum
from typing import Generic, TypeVar

from pydantic import BaseModel, Field

from expboard_core.models.search import GeocodedLocation

T = TypeVar("T")


class StageStatus(StrEnum):
    """How a fallible pipeline stage concluded."""

    RESOLVED = "resolved"
    UNRESOLVED = "unresolved"
    SKIPPED = "skipped"


class GeocodeOutcome(BaseModel):
    """Result of resolving one location string."""

    status: StageStatus = Field(description="Resolved, unresolved, or skipped")
    location: GeocodedLocation | None = Field(
        default=None, description="Coordinates when resolved"
    )
    source: str | None = Field(
        default=None, description="cache, known, store, or lookup"
    )

    @classmethod
    def skipped(cls) -> GeocodeOutcome:
        """Outcome for empty or remote input."""
        return cls(status=StageStatus.SKIPPED)

    @classmethod
    def from_value(cls, value: GeocodedLocation | None, source: str) -> GeocodeOutcome:
        """Outcome for a cached or freshly looked-up value."""
        if value is None:
            return cls(status=StageStatus.UNRESOLVED, source=source)
        return cls(status=StageStatus.RESOLVED, location=value, source=source)


class SemanticMatchResult(BaseModel):
    """Ordered candidate IDs from the semantic match oracle."""

    status: StageStatus = Field(description="Resolved, unresolved, or skipped")
    matching_ids: list[str] = Field(
        default_factory=list, description="Candidate IDs, most relevant first"
    )
    error: str | None = Field(default=None, description="Diagnostic detail on failure")

    @property
    def has_signal(self) -> bool:
        """True when the oracle returned at least one ID."""
        return self.status is StageStatus.RESOLVED and bool(self.matching_ids)


class Page(BaseModel, Generic[T]):
    """One page of a result list."""

    items: list[T] = Field(default_factory=list)
    page_number: int = Field(ge=1, description="1-indexed page, clamped to range")
    page_size: int = Field(ge=1)
    total_pages: int = Field(ge=1, description="At least 1, even for no results")
    total_items: int = Field(ge=0)

    @property
    def has_next(self) -> bool:
        """True when a later page exists."""
        return self.page_number < self.total_pages

    @property
    def has_previous(self) -> bool:
        """True when an earlier page exists."""
        return self.page_number > 1

    @property
    def is_empty(self) -> bool:
        """True when the full result list is empty."""
        return self.total_items == 0


class SearchPage(BaseModel):
    """A page of composed search results with stage diagnostics."""

    generation: int = Field(description="Request generation that produced this page")
    page: Page = Field(description="Current page of composed postings")
    semantic: SemanticMatchResult
    origin: GeocodedLocation | None = Field(
        default=None, description="Resolved search origin, when radius search applied"
    )
