"""Opportunity (job posting) model and its closed vocabularies."""

from __future__ import annotations

from datetime import UTC, datetime
from enum import StrEnum

from pydantic import BaseModel, Field, field_validator


class _LenientStrEnum(StrEnum):
    """StrEnum that also accepts values differing in case or separators."""

    @classmethod
    def _missing_(cls, value: object) -> _LenientStrEnum | None:
        if not isinstance(value, str):
            return None
        wanted = _fold(value)
        for member in cls:
            if _fold(member.value) == wanted or _fold(member.name) == wanted:
                return member
        return None


def _fold(text: str) -> str:
    return text.strip().lower().replace("_", "").replace("-", "").replace(" ", "")


class LocationType(_LenientStrEnum):
    """Where the work happens."""

    REMOTE = "remote"
    ON_SITE = "on-site"
    HYBRID = "hybrid"


class SkillLevel(_LenientStrEnum):
    """Experience level the posting targets."""

    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"


class Industry(_LenientStrEnum):
    """Industry a posting belongs to."""

    TECH = "tech"
    DESIGN = "design"
    MARKETING = "marketing"
    BUSINESS = "business"
    MEDIA = "media"
    OTHER = "other"


class Duration(StrEnum):
    """Duration labels offered by the duration facet."""

    ONE_TO_TWO_WEEKS = "1-2 weeks"
    ONE_MONTH = "1 month"
    THREE_MONTHS = "3 months"
    SIX_PLUS_MONTHS = "6+ months"
    ONGOING = "Ongoing"

    @classmethod
    def _missing_(cls, value: object) -> Duration | None:
        if not isinstance(value, str):
            return None
        wanted = value.strip().lower()
        for member in cls:
            if member.value.lower() == wanted:
                return member
        return None


class Opportunity(BaseModel):
    """A single experience opportunity evaluated against a search request."""

    id: str = Field(min_length=1, description="Unique posting identifier")
    title: str = Field(description="Role title")
    company_name: str = Field(description="Name of the offering company")
    location: str | None = Field(
        default=None, description="Free-text location, may be 'Remote'"
    )
    location_type: LocationType = Field(description="Remote, on-site or hybrid")
    duration_label: str | None = Field(
        default=None, description="Free-text duration from the duration vocabulary"
    )
    skill_level: SkillLevel = Field(description="Targeted experience level")
    industry: Industry | None = Field(default=None, description="Industry category")
    skills: list[str] = Field(default_factory=list, description="Skills, in display order")
    description: str = Field(default="", description="Role description")
    company_id: str | None = Field(default=None, description="Owning company profile ID")
    hours_per_week: str | None = Field(default=None, description="Expected weekly hours")
    status: str = Field(default="active", description="Posting status")
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(UTC), description="When the posting was created"
    )

    @field_validator("skills")
    @classmethod
    def strip_blank_skills(cls, value: list[str]) -> list[str]:
        """Drop empty skill entries while keeping order."""
        return [s.strip() for s in value if s and s.strip()]

    @property
    def is_remote(self) -> bool:
        """True when the posting is fully remote."""
        return self.location_type is LocationType.REMOTE

    @property
    def location_text(self) -> str:
        """Raw location text, empty when unset."""
        return self.location or ""
