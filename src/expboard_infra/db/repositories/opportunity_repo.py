"""Opportunity repository: postings joined with their company profile."""

from __future__ import annotations

from collections.abc import Sequence

import structlog
from pydantic import ValidationError
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from sqlalchemy.orm import selectinload

from expboard_core.exceptions import OpportunityNotFoundError
from expboard_core.models.opportunity import Industry, Opportunity
from expboard_infra.db.models import CompanyProfileModel, JobModel

logger = structlog.get_logger()


def _industry(raw: str | None) -> Industry | None:
    """Map a stored industry onto the closed vocabulary; unknown values become OTHER."""
    if not raw:
        return None
    try:
        return Industry(raw)
    except ValueError:
        return Industry.OTHER


def to_opportunity(model: JobModel) -> Opportunity:
    """Convert a loaded JobModel (company eager-loaded) to the domain model."""
    company_name = model.company.company_name if model.company else "Unknown"
    return Opportunity(
        id=model.id,
        title=model.title,
        company_name=company_name,
        company_id=model.company_id,
        location=model.location,
        location_type=model.location_type,
        duration_label=model.duration,
        skill_level=model.skill_level,
        industry=_industry(model.industry),
        skills=list(model.skills or []),
        description=model.description,
        hours_per_week=model.hours_per_week,
        status=model.status,
        created_at=model.created_at,
    )


def _convert_rows(models: Sequence[JobModel]) -> list[Opportunity]:
    """Convert rows, skipping any whose stored values fail validation."""
    postings: list[Opportunity] = []
    for model in models:
        try:
            postings.append(to_opportunity(model))
        except ValidationError as e:
            logger.warning("posting_skipped", job_id=model.id, errors=e.error_count())
    return postings


class OpportunityRepository:
    """CRUD operations for postings."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize with an async session."""
        self._session = session

    async def create_company(self, model: CompanyProfileModel) -> CompanyProfileModel:
        """Create a company profile record."""
        self._session.add(model)
        await self._session.flush()
        return model

    async def create(self, model: JobModel) -> JobModel:
        """Create a posting record."""
        self._session.add(model)
        await self._session.flush()
        return model

    async def get_by_id(self, job_id: str) -> Opportunity:
        """Fetch one posting, raising OpportunityNotFoundError if missing."""
        stmt = (
            select(JobModel)
            .options(selectinload(JobModel.company))
            .where(JobModel.id == job_id)
        )
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        if model is None:
            msg = f"No posting with id {job_id}"
            raise OpportunityNotFoundError(msg)
        return to_opportunity(model)

    async def list_active(self) -> list[Opportunity]:
        """Active postings, newest first."""
        stmt = (
            select(JobModel)
            .options(selectinload(JobModel.company))
            .where(JobModel.status == "active")
            .order_by(JobModel.created_at.desc())
        )
        result = await self._session.execute(stmt)
        return _convert_rows(result.scalars().all())

    async def list_by_company(self, company_id: str) -> list[Opportunity]:
        """All postings of one company regardless of status, newest first."""
        stmt = (
            select(JobModel)
            .options(selectinload(JobModel.company))
            .where(JobModel.company_id == company_id)
            .order_by(JobModel.created_at.desc())
        )
        result = await self._session.execute(stmt)
        return _convert_rows(result.scalars().all())


class RepositoryOpportunitySource:
    """OpportunitySource that opens a short-lived session per listing."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        """Initialize with a session factory."""
        self._session_factory = session_factory

    async def list_active(self) -> list[Opportunity]:
        """Active postings, newest first."""
        async with self._session_factory() as session:
            return await OpportunityRepository(session).list_active()
