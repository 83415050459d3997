"""Session providers supplying the user's bearer token."""

from __future__ import annotations


class StaticSessionProvider:
    """Session holding a fixed token (CLI, tests, service accounts)."""

    def __init__(self, access_token: str | None = None) -> None:
        """Initialize with a token, or None for a signed-out session."""
        self._token = access_token or None

    async def get_access_token(self) -> str | None:
        """Return the token, or None when signed out."""
        return self._token

    def sign_in(self, access_token: str) -> None:
        """Replace the active token."""
        self._token = access_token

    def sign_out(self) -> None:
        """Drop the active token."""
        self._token = None
