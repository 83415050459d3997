"""Semantic query matcher: session-gated, never-raising access to the ranking oracle."""

from __future__ import annotations

import structlog

from expboard_core.exceptions import UpstreamTimeoutError
from expboard_core.interfaces.semantic import SemanticMatchProvider
from expboard_core.interfaces.session import SessionProvider
from expboard_core.models.results import SemanticMatchResult, StageStatus
from expboard_search.observability.tracing import traced_stage

logger = structlog.get_logger()


class SemanticQueryMatcher:
    """Asks the semantic oracle which postings match a free-text query.

    Blank queries, a missing session, or a disabled oracle skip the call.
    Oracle failures yield an empty, unresolved result with the error kept in
    ``last_error`` for display. No retries.

    Overlapping calls are counted, so ``loading`` stays true until the last
    one finishes. ``last_error`` reflects the most recently started call.
    """

    def __init__(
        self,
        provider: SemanticMatchProvider | None,
        session: SessionProvider,
    ) -> None:
        """Initialize with an oracle (None disables semantic search) and a session."""
        self._provider = provider
        self._session = session
        self._in_flight = 0
        self._latest_call = 0
        self.last_error: str | None = None

    @property
    def loading(self) -> bool:
        """Whether any oracle call is still running."""
        return self._in_flight > 0

    async def match(self, query: str, location_hint: str | None = None) -> list[str]:
        """Matching posting IDs, most relevant first; empty on any degrade path."""
        result = await self.match_result(query, location_hint)
        return result.matching_ids

    async def match_result(
        self, query: str, location_hint: str | None = None
    ) -> SemanticMatchResult:
        """Tagged form of ``match``."""
        if not query.strip():
            return SemanticMatchResult(status=StageStatus.SKIPPED)

        if self._provider is None:
            return SemanticMatchResult(status=StageStatus.SKIPPED)

        try:
            token = await self._session.get_access_token()
        except Exception as e:
            logger.warning("semantic_session_failed", error=str(e), error_type=type(e).__name__)
            return SemanticMatchResult(status=StageStatus.SKIPPED)
        if not token:
            logger.info("semantic_search_requires_auth")
            return SemanticMatchResult(status=StageStatus.SKIPPED)

        return await self._call_oracle(query, location_hint or None, token)

    @traced_stage("semantic_match")
    async def _call_oracle(
        self, query: str, location_hint: str | None, token: str
    ) -> SemanticMatchResult:
        self._latest_call += 1
        call_id = self._latest_call
        self._in_flight += 1
        self.last_error = None
        try:
            ids = await self._provider.match(query, location_hint, token)  # type: ignore[union-attr]
        except UpstreamTimeoutError as e:
            error = str(e) or "Request timed out"
            logger.warning("semantic_search_timeout", error=error)
            self._record_error(call_id, error)
            return SemanticMatchResult(status=StageStatus.UNRESOLVED, error=error)
        except Exception as e:
            error = str(e) or "Search failed"
            logger.error(
                "semantic_search_failed",
                error=error,
                error_type=type(e).__name__,
            )
            self._record_error(call_id, error)
            return SemanticMatchResult(status=StageStatus.UNRESOLVED, error=error)
        finally:
            self._in_flight -= 1

        logger.info("semantic_search_complete", matches=len(ids))
        return SemanticMatchResult(status=StageStatus.RESOLVED, matching_ids=ids)

    def _record_error(self, call_id: int, error: str) -> None:
        if call_id == self._latest_call:
            self.last_error = error
