"""Abstract opportunity source interface."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from expboard_core.models.opportunity import Opportunity


@runtime_checkable
class OpportunitySource(Protocol):
    """Supplies the postings a search runs against."""

    async def list_active(self) -> list[Opportunity]:
        """Return all active postings, newest first."""
        ...
