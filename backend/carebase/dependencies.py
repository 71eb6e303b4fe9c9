"""FastAPI dependencies that hand routers the objects built in create_app."""

from __future__ import annotations

import uuid

from fastapi import Request
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from carebase.database import ConnectionManager
from carebase.exceptions import MalformedIdError
from carebase.services.appointment_service import AppointmentStore
from carebase.services.patient_service import PatientStore


def get_connection(request: Request) -> ConnectionManager:
    return request.app.state.connection


def get_session_factory(request: Request) -> async_sessionmaker[AsyncSession]:
    return request.app.state.session_factory


def get_patient_store(request: Request) -> PatientStore:
    return request.app.state.patient_store


def get_appointment_store(request: Request) -> AppointmentStore:
    return request.app.state.appointment_store


def parse_id(raw_id: str, resource: str) -> uuid.UUID:
    try:
        return uuid.UUID(raw_id)
    except ValueError:
        raise MalformedIdError(resource, raw_id) from None


def patient_id_param(patient_id: str) -> uuid.UUID:
    return parse_id(patient_id, "patient")


def appointment_id_param(appointment_id: str) -> uuid.UUID:
    return parse_id(appointment_id, "appointment")
