"""Domain models for the ExpBoard search pipeline."""

from expboard_core.models.opportunity import (
    Duration,
    Industry,
    LocationType,
    Opportunity,
    SkillLevel,
)
from expboard_core.models.results import (
    GeocodeOutcome,
    Page,
    SearchPage,
    SemanticMatchResult,
    StageStatus,
)
from expboard_core.models.search import (
    Coordinates,
    FacetName,
    Filters,
    GeocodedLocation,
    SearchRequest,
)

__all__ = [
    "Coordinates",
    "Duration",
    "FacetName",
    "Filters",
    "GeocodeOutcome",
    "GeocodedLocation",
    "Industry",
    "LocationType",
    "Opportunity",
    "Page",
    "SearchPage",
    "SearchRequest",
    "SemanticMatchResult",
    "SkillLevel",
    "StageStatus",
]
