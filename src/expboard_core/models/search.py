"""Search request, coordinates and facet filter models."""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, Field, field_validator, model_validator

from expboard_core.constants import RADIUS_ANY, REMOTE_KEYWORD
from expboard_core.models.opportunity import Duration, Industry, LocationType, SkillLevel


class Coordinates(BaseModel):
    """A latitude/longitude pair in degrees."""

    lat: float = Field(ge=-90.0, le=90.0, description="Latitude in degrees")
    lng: float = Field(ge=-180.0, le=180.0, description="Longitude in degrees")


class GeocodedLocation(BaseModel):
    """A free-text place resolved to coordinates."""

    lat: float = Field(description="Latitude in degrees")
    lng: float = Field(description="Longitude in degrees")
    display_name: str = Field(description="Normalized short name of the place")

    @property
    def coordinates(self) -> Coordinates:
        """Coordinates of this location."""
        return Coordinates(lat=self.lat, lng=self.lng)


class SearchRequest(BaseModel):
    """Free-text query, location and radius entered by the user."""

    query: str = Field(default="", description="Free-text search, may be empty")
    location: str = Field(default="", description="Free-text location or 'Remote'")
    radius_km: int = Field(
        default=RADIUS_ANY, description="Search radius in km; -1 means any distance"
    )
    origin: Coordinates | None = Field(
        default=None, description="Resolved coordinates of `location`, when known"
    )

    @field_validator("radius_km")
    @classmethod
    def validate_radius(cls, value: int) -> int:
        """Accept the any-distance sentinel or a non-negative radius."""
        if value != RADIUS_ANY and value < 0:
            msg = f"radius_km must be {RADIUS_ANY} or >= 0, got {value}"
            raise ValueError(msg)
        return value

    @model_validator(mode="after")
    def drop_origin_without_location(self) -> SearchRequest:
        """An origin only makes sense alongside a location."""
        if not self.location.strip():
            self.origin = None
        return self

    @property
    def normalized_query(self) -> str:
        """Trimmed, lower-cased query."""
        return self.query.strip().lower()

    @property
    def normalized_location(self) -> str:
        """Trimmed, lower-cased location."""
        return self.location.strip().lower()

    @property
    def has_radius(self) -> bool:
        """True when a concrete radius was chosen."""
        return self.radius_km != RADIUS_ANY

    @property
    def is_remote_search(self) -> bool:
        """True when the user searched for remote roles."""
        return self.normalized_location == REMOTE_KEYWORD


class FacetName(StrEnum):
    """Independent filterable dimensions."""

    INDUSTRY = "industry"
    SKILL_LEVEL = "skill_level"
    LOCATION_TYPE = "location_type"
    DURATION = "duration"


FACET_VALUE_TYPES: dict[FacetName, type[StrEnum]] = {
    FacetName.INDUSTRY: Industry,
    FacetName.SKILL_LEVEL: SkillLevel,
    FacetName.LOCATION_TYPE: LocationType,
    FacetName.DURATION: Duration,
}


class Filters(BaseModel):
    """Selected facet values; an empty facet imposes no restriction."""

    industry: set[Industry] = Field(default_factory=set)
    skill_level: set[SkillLevel] = Field(default_factory=set)
    location_type: set[LocationType] = Field(default_factory=set)
    duration: set[Duration] = Field(default_factory=set)

    def values_for(self, facet: FacetName | str) -> set[StrEnum]:
        """Return the live set backing a facet."""
        return getattr(self, FacetName(facet).value)  # type: ignore[no-any-return]

    def toggle(self, facet: FacetName | str, value: StrEnum | str) -> bool:
        """Add the value if absent, remove it if present.

        Returns True when the value is active after the toggle.
        """
        facet = FacetName(facet)
        member = FACET_VALUE_TYPES[facet](value)
        selected = self.values_for(facet)
        if member in selected:
            selected.discard(member)
            return False
        selected.add(member)
        return True

    def clear(self) -> None:
        """Remove every selected value."""
        for facet in FacetName:
            self.values_for(facet).clear()

    @property
    def is_empty(self) -> bool:
        """True when no facet restricts the results."""
        return not any(self.values_for(facet) for facet in FacetName)

    def active_values(self) -> list[tuple[FacetName, StrEnum]]:
        """Selected values in facet order, sorted within each facet."""
        active: list[tuple[FacetName, StrEnum]] = []
        for facet in FacetName:
            for value in sorted(self.values_for(facet), key=str):
                active.append((facet, value))
        return active
