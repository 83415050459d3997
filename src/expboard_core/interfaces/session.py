"""Abstract authenticated-session interface."""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class SessionProvider(Protocol):
    """Source of the current user's bearer token."""

    async def get_access_token(self) -> str | None:
        """Return the active session token, or None when signed out."""
        ...
