"""HTTP client for the hosted semantic-job-search function."""

from __future__ import annotations

import httpx
import structlog

from expboard_core.exceptions import SemanticSearchError, UpstreamTimeoutError

logger = structlog.get_logger()


class HttpSemanticMatchClient:
    """SemanticMatchProvider that POSTs to a bearer-authenticated endpoint."""

    def __init__(self, url: str, timeout: float = 30.0) -> None:
        """Initialize with the function URL and request timeout."""
        self._url = url
        self._timeout = timeout

    async def match(
        self, query: str, location_hint: str | None, access_token: str
    ) -> list[str]:
        """Return matching posting IDs, most relevant first."""
        body: dict[str, str] = {"query": query}
        if location_hint:
            body["location"] = location_hint
        headers = {
            "Authorization": f"Bearer {access_token}",
            "Content-Type": "application/json",
        }
        try:
            async with httpx.AsyncClient(timeout=self._timeout) as client:
                response = await client.post(self._url, json=body, headers=headers)
                response.raise_for_status()
                data = response.json()
        except httpx.TimeoutException as e:
            msg = "Request timed out"
            raise UpstreamTimeoutError(msg) from e
        except httpx.HTTPStatusError as e:
            msg = f"Request failed with status {e.response.status_code}"
            raise SemanticSearchError(msg) from e
        except httpx.HTTPError as e:
            raise SemanticSearchError(str(e) or type(e).__name__) from e
        except ValueError as e:
            msg = "Semantic search returned invalid JSON"
            raise SemanticSearchError(msg) from e

        ids = data.get("matchingJobIds") if isinstance(data, dict) else None
        if not isinstance(ids, list):
            msg = "Semantic search response missing matchingJobIds"
            raise SemanticSearchError(msg)
        logger.debug("semantic_oracle_response", count=len(ids))
        return [str(i) for i in ids]
