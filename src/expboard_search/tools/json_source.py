"""Opportunity source reading postings from a JSON file."""

from __future__ import annotations

import asyncio
import json
from pathlib import Path

import structlog
from pydantic import ValidationError

from expboard_core.models.opportunity import Opportunity

logger = structlog.get_logger()


class JsonFileOpportunitySource:
    """OpportunitySource over a JSON array of posting objects."""

    def __init__(self, path: Path) -> None:
        """Initialize with the path to the JSON file."""
        self._path = path

    async def list_active(self) -> list[Opportunity]:
        """Active postings in file order; invalid entries are skipped."""
        text = await asyncio.to_thread(self._path.read_text, encoding="utf-8")
        raw = json.loads(text)
        if not isinstance(raw, list):
            msg = f"{self._path} must contain a JSON array of postings"
            raise ValueError(msg)

        postings: list[Opportunity] = []
        for index, item in enumerate(raw):
            try:
                posting = Opportunity.model_validate(item)
            except ValidationError as e:
                logger.warning(
                    "posting_skipped", path=str(self._path), index=index, errors=e.error_count()
                )
                continue
            if posting.status == "active":
                postings.append(posting)
        return postings
