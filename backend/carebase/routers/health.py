"""Service info and health endpoints."""

from __future__ import annotations

import datetime

from fastapi import APIRouter, Depends

from carebase.database import ConnectionManager
from carebase.dependencies import get_connection
from carebase.models.schemas import HealthResponse

router = APIRouter(tags=["health"])

API_VERSION = "1.0.0"


@router.get("/")
async def root() -> dict[str, str]:
    return {
        "message": "Healthcare Backend API is running!",
        "version": API_VERSION,
        "timestamp": datetime.datetime.now(datetime.UTC).isoformat(),
    }


@router.get("/api/health", response_model=HealthResponse)
async def health_check(
    connection: ConnectionManager = Depends(get_connection),
) -> HealthResponse:
    """Report the last known database state; runs no query of its own."""
    return HealthResponse(
        status="OK",
        database="Connected" if connection.is_connected else "Disconnected",
        timestamp=datetime.datetime.now(datetime.UTC),
        endpoints=["/api/patients", "/api/appointments", "/api/medical", "/api/seed"],
    )
