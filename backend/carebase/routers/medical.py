"""Dashboard statistics endpoint."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from carebase.dependencies import get_appointment_store
from carebase.models.schemas import ApiResponse, MedicalStats
from carebase.services.appointment_service import AppointmentStore

router = APIRouter(prefix="/api/medical", tags=["medical"])


@router.get(
    "", response_model=ApiResponse[MedicalStats], response_model_exclude_none=True
)
async def get_medical_stats(
    store: AppointmentStore = Depends(get_appointment_store),
) -> ApiResponse[MedicalStats]:
    return ApiResponse(data=await store.get_stats())
