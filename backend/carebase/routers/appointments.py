"""Appointment API endpoints."""

from __future__ import annotations

import uuid

from fastapi import APIRouter, Depends

from carebase.dependencies import appointment_id_param, get_appointment_store
from carebase.models.schemas import (
    ApiResponse,
    AppointmentCreate,
    AppointmentResponse,
    AppointmentUpdate,
    PatientResponse,
)
from carebase.services.appointment_service import AppointmentRecord, AppointmentStore

router = APIRouter(prefix="/api/appointments", tags=["appointments"])


def to_response(record: AppointmentRecord) -> AppointmentResponse:
    response = AppointmentResponse.model_validate(record.appointment)
    if record.patient is not None:
        response.patient = PatientResponse.model_validate(record.patient)
    return response


@router.get(
    "",
    response_model=ApiResponse[list[AppointmentResponse]],
    response_model_exclude_none=True,
)
async def list_appointments(
    populate: bool = True,
    store: AppointmentStore = Depends(get_appointment_store),
) -> ApiResponse[list[AppointmentResponse]]:
    records = await store.list_appointments(include_patient=populate)
    return ApiResponse(count=len(records), data=[to_response(r) for r in records])


@router.get(
    "/{appointment_id}",
    response_model=ApiResponse[AppointmentResponse],
    response_model_exclude_none=True,
)
async def get_appointment(
    appointment_id: uuid.UUID = Depends(appointment_id_param),
    store: AppointmentStore = Depends(get_appointment_store),
) -> ApiResponse[AppointmentResponse]:
    record = await store.get_appointment(appointment_id)
    return ApiResponse(data=to_response(record))


@router.post(
    "",
    status_code=201,
    response_model=ApiResponse[AppointmentResponse],
    response_model_exclude_none=True,
)
async def create_appointment(
    body: AppointmentCreate,
    store: AppointmentStore = Depends(get_appointment_store),
) -> ApiResponse[AppointmentResponse]:
    record = await store.create_appointment(body)
    return ApiResponse(
        message="Appointment created successfully", data=to_response(record)
    )


@router.put(
    "/{appointment_id}",
    response_model=ApiResponse[AppointmentResponse],
    response_model_exclude_none=True,
)
async def update_appointment(
    body: AppointmentUpdate,
    appointment_id: uuid.UUID = Depends(appointment_id_param),
    store: AppointmentStore = Depends(get_appointment_store),
) -> ApiResponse[AppointmentResponse]:
    record = await store.update_appointment(
        appointment_id, body.model_dump(exclude_unset=True)
    )
    return ApiResponse(
        message="Appointment updated successfully", data=to_response(record)
    )


@router.delete(
    "/{appointment_id}",
    response_model=ApiResponse[AppointmentResponse],
    response_model_exclude_none=True,
)
async def delete_appointment(
    appointment_id: uuid.UUID = Depends(appointment_id_param),
    store: AppointmentStore = Depends(get_appointment_store),
) -> ApiResponse[AppointmentResponse]:
    record = await store.delete_appointment(appointment_id)
    return ApiResponse(
        message="Appointment deleted successfully", data=to_response(record)
    )
