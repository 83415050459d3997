"""Abstract semantic match oracle interface."""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class SemanticMatchProvider(Protocol):
    """Ranks postings against a free-text query."""

    async def match(
        self, query: str, location_hint: str | None, access_token: str
    ) -> list[str]:
        """Return matching posting IDs, most relevant first."""
        ...
