"""In-process semantic match oracle backed by an Anthropic model."""

from __future__ import annotations

import time

import instructor
import structlog
from anthropic import APIError, APITimeoutError, AsyncAnthropic
from instructor.core import InstructorRetryException
from pydantic import BaseModel, Field
from tenacity import retry, retry_if_not_exception_type, stop_after_attempt, wait_exponential

from expboard_core.constants import (
    SEMANTIC_DESCRIPTION_CHARS,
    SEMANTIC_PROMPT_VERSION,
    SEMANTIC_TEMPERATURE,
)
from expboard_core.exceptions import SemanticSearchError, UpstreamTimeoutError
from expboard_core.interfaces.source import OpportunitySource
from expboard_core.models.opportunity import Opportunity
from expboard_search.prompts.semantic_search import (
    SEMANTIC_SEARCH_SYSTEM,
    build_semantic_search_user_prompt,
)

logger = structlog.get_logger()


class MatchingPostings(BaseModel):
    """Structured model output: matching IDs, most relevant first."""

    matching_job_ids: list[str] = Field(
        default_factory=list, description="IDs of matching postings ordered by relevance"
    )


def summarize_posting(posting: Opportunity) -> dict[str, str]:
    """Compact view of a posting sent to the model."""
    return {
        "id": posting.id,
        "title": posting.title,
        "description": posting.description[:SEMANTIC_DESCRIPTION_CHARS],
        "skills": ", ".join(posting.skills),
        "industry": posting.industry.value if posting.industry else "general",
        "skill_level": posting.skill_level.value,
        "location": posting.location or "Remote",
        "location_type": posting.location_type.value,
        "company_name": posting.company_name or "Unknown",
    }


class LLMSemanticRanker:
    """SemanticMatchProvider that ranks active postings with an LLM."""

    def __init__(
        self,
        api_key: str,
        model: str,
        source: OpportunitySource,
        max_retries: int = 3,
        timeout: float = 30.0,
    ) -> None:
        """Initialize with model credentials and the posting source."""
        self._client = AsyncAnthropic(api_key=api_key, timeout=timeout)
        self._instructor = instructor.from_anthropic(self._client)
        self._model = model
        self._source = source
        self._max_retries = max_retries

    async def match(
        self, query: str, location_hint: str | None, access_token: str
    ) -> list[str]:
        """Rank active postings against the query.

        ``access_token`` is unused; the caller already checked the session.
        """
        if not query.strip():
            return []

        postings = await self._source.list_active()
        if not postings:
            logger.info("semantic_rank_no_postings")
            return []

        summaries = [summarize_posting(p) for p in postings]
        messages = [
            {
                "role": "user",
                "content": build_semantic_search_user_prompt(query, location_hint, summaries),
            }
        ]

        start = time.monotonic()
        try:
            result = await self._call_llm(messages)
        except APITimeoutError as e:
            msg = "Request timed out"
            raise UpstreamTimeoutError(msg) from e
        except (APIError, InstructorRetryException) as e:
            msg = f"Semantic ranking failed: {e}"
            raise SemanticSearchError(msg) from e

        known = {p.id for p in postings}
        ids: list[str] = []
        for job_id in result.matching_job_ids:
            if job_id in known and job_id not in ids:
                ids.append(job_id)

        logger.info(
            "semantic_rank_complete",
            postings=len(postings),
            matches=len(ids),
            prompt_version=SEMANTIC_PROMPT_VERSION,
            duration=round(time.monotonic() - start, 2),
        )
        return ids

    async def _call_llm(self, messages: list[dict[str, str]]) -> MatchingPostings:
        """Call the model with structured output, retrying transient failures."""

        @retry(
            stop=stop_after_attempt(self._max_retries),
            wait=wait_exponential(multiplier=1, min=1, max=10),
            retry=retry_if_not_exception_type(APITimeoutError),
            reraise=True,
        )
        async def _do_call() -> MatchingPostings:
            response: MatchingPostings = await self._instructor.messages.create(
                model=self._model,
                max_tokens=1024,
                system=SEMANTIC_SEARCH_SYSTEM,
                messages=messages,
                temperature=SEMANTIC_TEMPERATURE,
                response_model=MatchingPostings,
            )
            return response

        return await _do_call()
