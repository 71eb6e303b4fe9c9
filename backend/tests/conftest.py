"""Test fixtures and configuration."""

from __future__ import annotations

import datetime
from collections.abc import AsyncIterator
from pathlib import Path

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine

from carebase.main import create_app
from carebase.models.orm import Appointment, Base, Patient
from carebase.services.appointment_service import AppointmentStore
from carebase.services.cascade import CascadeCoordinator
from carebase.services.patient_service import PatientStore


@pytest.fixture
def patient_payload() -> dict:
    return {
        "name": "John Doe",
        "age": 25,
        "gender": "male",
        "phone": "+1234567890",
        "email": "john@email.com",
    }


@pytest.fixture
async def engine(tmp_path: Path) -> AsyncIterator[AsyncEngine]:
    # File-backed so concurrent sessions see the same data
    test_engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'test.db'}", echo=False
    )
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield test_engine
    await test_engine.dispose()


@pytest.fixture
def app(engine: AsyncEngine) -> FastAPI:
    return create_app(engine)


@pytest.fixture
async def client(app: FastAPI) -> AsyncIterator[AsyncClient]:
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
def patient_store(app: FastAPI) -> PatientStore:
    return app.state.patient_store


@pytest.fixture
def appointment_store(app: FastAPI) -> AppointmentStore:
    return app.state.appointment_store


@pytest.fixture
def cascade() -> CascadeCoordinator:
    return CascadeCoordinator()


@pytest.fixture
async def seed_patient(app: FastAPI) -> Patient:
    async with app.state.session_factory() as session:
        patient = Patient(
            name="Test Patient",
            age=67,
            gender="female",
            phone="+1555000111",
            email="test.patient@email.com",
            blood_type="A+",
            allergies=["Penicillin"],
            condition="Stable",
            last_visit=datetime.datetime(2024, 1, 15, tzinfo=datetime.UTC),
            emergency_contact={
                "name": "Sam Patient",
                "phone": "+1555000112",
                "relationship": "Son",
            },
        )
        session.add(patient)
        await session.commit()
        await session.refresh(patient)
        return patient


@pytest.fixture
async def seed_appointment(app: FastAPI, seed_patient: Patient) -> Appointment:
    async with app.state.session_factory() as session:
        appointment = Appointment(
            patient_id=seed_patient.id,
            patient_name=seed_patient.name,
            doctor_name="Dr. Test",
            date=datetime.datetime(2024, 2, 1, 9, 30),
            type="Checkup",
        )
        session.add(appointment)
        await session.commit()
        await session.refresh(appointment)
        return appointment
