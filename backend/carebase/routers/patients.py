"""Patient API endpoints."""

from __future__ import annotations

import uuid

from fastapi import APIRouter, Depends

from carebase.dependencies import get_patient_store, patient_id_param
from carebase.models.schemas import (
    ApiResponse,
    PatientCreate,
    PatientResponse,
    PatientUpdate,
)
from carebase.services.patient_service import PatientStore

router = APIRouter(prefix="/api/patients", tags=["patients"])


@router.get(
    "", response_model=ApiResponse[list[PatientResponse]], response_model_exclude_none=True
)
async def list_patients(
    store: PatientStore = Depends(get_patient_store),
) -> ApiResponse[list[PatientResponse]]:
    patients = await store.list_patients()
    return ApiResponse(
        count=len(patients),
        data=[PatientResponse.model_validate(p) for p in patients],
    )


@router.get(
    "/{patient_id}",
    response_model=ApiResponse[PatientResponse],
    response_model_exclude_none=True,
)
async def get_patient(
    patient_id: uuid.UUID = Depends(patient_id_param),
    store: PatientStore = Depends(get_patient_store),
) -> ApiResponse[PatientResponse]:
    patient = await store.get_patient(patient_id)
    return ApiResponse(data=PatientResponse.model_validate(patient))


@router.post(
    "",
    status_code=201,
    response_model=ApiResponse[PatientResponse],
    response_model_exclude_none=True,
)
async def create_patient(
    body: PatientCreate,
    store: PatientStore = Depends(get_patient_store),
) -> ApiResponse[PatientResponse]:
    patient = await store.create_patient(body)
    return ApiResponse(
        message="Patient created successfully",
        data=PatientResponse.model_validate(patient),
    )


@router.put(
    "/{patient_id}",
    response_model=ApiResponse[PatientResponse],
    response_model_exclude_none=True,
)
async def update_patient(
    body: PatientUpdate,
    patient_id: uuid.UUID = Depends(patient_id_param),
    store: PatientStore = Depends(get_patient_store),
) -> ApiResponse[PatientResponse]:
    patient = await store.update_patient(patient_id, body.model_dump(exclude_unset=True))
    return ApiResponse(
        message="Patient updated successfully",
        data=PatientResponse.model_validate(patient),
    )


@router.delete(
    "/{patient_id}",
    response_model=ApiResponse[PatientResponse],
    response_model_exclude_none=True,
)
async def delete_patient(
    patient_id: uuid.UUID = Depends(patient_id_param),
    store: PatientStore = Depends(get_patient_store),
) -> ApiResponse[PatientResponse]:
    patient = await store.delete_patient(patient_id)
    return ApiResponse(
        message="Patient deleted successfully",
        data=PatientResponse.model_validate(patient),
    )
