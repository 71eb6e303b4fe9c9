"""Pydantic request/response schemas."""

from __future__ import annotations

import datetime
import uuid
from typing import Annotated, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field, StringConstraints
from pydantic.alias_generators import to_camel

DataT = TypeVar("DataT")

# Required text: surrounding whitespace is dropped and nothing may remain blank
NonBlankStr = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]

MAX_AGE = 150


class CamelModel(BaseModel):
    """Base for API payloads: camelCase on the wire, snake_case in Python."""

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, from_attributes=True
    )


# --- Patient schemas ---


class EmergencyContact(CamelModel):
    name: str | None = None
    phone: str | None = None
    relationship: str | None = None


class PatientCreate(CamelModel):
    name: NonBlankStr
    age: int = Field(ge=0, le=MAX_AGE)
    gender: NonBlankStr
    phone: NonBlankStr
    email: NonBlankStr
    blood_type: str | None = None
    allergies: list[str] = Field(default_factory=list)
    condition: str | None = None
    last_visit: datetime.datetime | None = None
    emergency_contact: EmergencyContact | None = None


class PatientUpdate(CamelModel):
    name: NonBlankStr | None = None
    age: int | None = Field(default=None, ge=0, le=MAX_AGE)
    gender: NonBlankStr | None = None
    phone: NonBlankStr | None = None
    email: NonBlankStr | None = None
    blood_type: str | None = None
    allergies: list[str] | None = None
    condition: str | None = None
    last_visit: datetime.datetime | None = None
    emergency_contact: EmergencyContact | None = None


class PatientResponse(CamelModel):
    id: uuid.UUID
    name: str
    age: int
    gender: str
    phone: str
    email: str
    blood_type: str | None = None
    allergies: list[str]
    condition: str | None = None
    last_visit: datetime.datetime | None = None
    emergency_contact: EmergencyContact | None = None
    created_at: datetime.datetime
    updated_at: datetime.datetime


# --- Appointment schemas ---


class AppointmentCreate(CamelModel):
    patient_id: uuid.UUID
    patient_name: NonBlankStr
    doctor_name: NonBlankStr
    date: datetime.datetime
    status: str = "Scheduled"
    type: str | None = None
    notes: str | None = None


class AppointmentUpdate(CamelModel):
    patient_id: uuid.UUID | None = None
    patient_name: NonBlankStr | None = None
    doctor_name: NonBlankStr | None = None
    date: datetime.datetime | None = None
    status: str | None = None
    type: str | None = None
    notes: str | None = None


class AppointmentResponse(CamelModel):
    id: uuid.UUID
    patient_id: uuid.UUID
    patient_name: str
    doctor_name: str
    date: datetime.datetime
    status: str
    type: str | None = None
    notes: str | None = None
    created_at: datetime.datetime
    updated_at: datetime.datetime
    # Resolved reference, present only when the patient was joined in
    patient: PatientResponse | None = None


# --- Dashboard / utility schemas ---


class MedicalStats(CamelModel):
    total_patients: int
    total_appointments: int
    pending_appointments: int
    completed_appointments: int
    urgent_cases: int


class HealthResponse(BaseModel):
    status: str
    database: str
    timestamp: datetime.datetime
    endpoints: list[str]


class SeedResponse(BaseModel):
    success: bool
    message: str
    patients: int
    appointments: int
    timestamp: datetime.datetime


# --- Response envelope ---


class ApiResponse(BaseModel, Generic[DataT]):
    success: bool = True
    message: str | None = None
    count: int | None = None
    data: DataT | None = None
    error: str | None = None
