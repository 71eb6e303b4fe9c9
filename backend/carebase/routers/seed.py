"""Demo data endpoint. Destroys all existing records."""

from __future__ import annotations

import datetime
import logging

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from carebase.dependencies import get_session_factory
from carebase.models.schemas import SeedResponse
from carebase.services.seed_service import seed_database

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/seed", tags=["seed"])


@router.api_route("", methods=["POST", "GET"], response_model=SeedResponse)
async def seed(
    session_factory: async_sessionmaker[AsyncSession] = Depends(get_session_factory),
) -> SeedResponse:
    logger.warning("Seeding database: all patients and appointments will be replaced")
    result = await seed_database(session_factory)
    return SeedResponse(
        success=True,
        message="Database seeded successfully",
        patients=result.patients,
        appointments=result.appointments,
        timestamp=datetime.datetime.now(datetime.UTC),
    )
