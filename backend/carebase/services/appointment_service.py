"""Appointment data access service and dashboard statistics."""

from __future__ import annotations

import asyncio
import logging
import uuid
from dataclasses import dataclass

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from carebase.database import session_scope
from carebase.exceptions import AppointmentNotFoundError
from carebase.models.orm import Appointment, Patient, utcnow
from carebase.models.schemas import AppointmentCreate, MedicalStats
from carebase.services.validation import check_required

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("patient_id", "patient_name", "doctor_name", "date")

# Status is free text; these are the values the dashboard counts
STATUS_SCHEDULED = "Scheduled"
STATUS_COMPLETED = "Completed"
STATUS_URGENT = "Urgent"


@dataclass
class AppointmentRecord:
    """An appointment with its referenced patient, if it was resolved."""

    appointment: Appointment
    patient: Patient | None = None


class AppointmentStore:
    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    @staticmethod
    async def _load(session: AsyncSession, appointment_id: uuid.UUID) -> Appointment:
        appointment = await session.get(Appointment, appointment_id)
        if appointment is None:
            raise AppointmentNotFoundError()
        return appointment

    async def list_appointments(
        self, include_patient: bool = True
    ) -> list[AppointmentRecord]:
        """All appointments, earliest date first.

        With ``include_patient`` the referenced patient is joined in; an
        appointment whose patient no longer exists is still returned.
        """
        async with session_scope(self._session_factory) as session:
            if not include_patient:
                result = await session.execute(
                    select(Appointment).order_by(Appointment.date)
                )
                return [AppointmentRecord(a) for a in result.scalars().all()]

            result = await session.execute(
                select(Appointment, Patient)
                .outerjoin(Patient, Patient.id == Appointment.patient_id)
                .order_by(Appointment.date)
            )
            return [AppointmentRecord(a, p) for a, p in result.all()]

    async def get_appointment(self, appointment_id: uuid.UUID) -> AppointmentRecord:
        async with session_scope(self._session_factory) as session:
            appointment = await self._load(session, appointment_id)
            patient = await session.get(Patient, appointment.patient_id)
            return AppointmentRecord(appointment, patient)

    async def create_appointment(self, data: AppointmentCreate) -> AppointmentRecord:
        appointment = Appointment(**data.model_dump())
        async with session_scope(self._session_factory) as session:
            session.add(appointment)
            await session.flush()
            patient = await session.get(Patient, appointment.patient_id)
        if patient is None:
            logger.warning(
                "Appointment %s references unknown patient %s",
                appointment.id,
                appointment.patient_id,
            )
        logger.info("Created appointment %s", appointment.id)
        return AppointmentRecord(appointment, patient)

    async def update_appointment(
        self, appointment_id: uuid.UUID, changes: dict
    ) -> AppointmentRecord:
        async with session_scope(self._session_factory) as session:
            appointment = await self._load(session, appointment_id)
            for key, value in changes.items():
                setattr(appointment, key, value)
            check_required(appointment, REQUIRED_FIELDS)
            if appointment.status is None:
                appointment.status = STATUS_SCHEDULED
            appointment.updated_at = utcnow()
        logger.info("Updated appointment %s", appointment_id)
        return AppointmentRecord(appointment)

    async def delete_appointment(self, appointment_id: uuid.UUID) -> AppointmentRecord:
        async with session_scope(self._session_factory) as session:
            appointment = await self._load(session, appointment_id)
            await session.delete(appointment)
        logger.info("Deleted appointment %s", appointment_id)
        return AppointmentRecord(appointment)

    async def _count(self, model: type, *criteria) -> int:
        # Own session per count so the queries can run side by side
        async with session_scope(self._session_factory) as session:
            result = await session.execute(
                select(func.count()).select_from(model).where(*criteria)
            )
            return result.scalar_one()

    async def get_stats(self) -> MedicalStats:
        total_patients, total, pending, completed, urgent = await asyncio.gather(
            self._count(Patient),
            self._count(Appointment),
            self._count(Appointment, Appointment.status == STATUS_SCHEDULED),
            self._count(Appointment, Appointment.status == STATUS_COMPLETED),
            self._count(Appointment, Appointment.status == STATUS_URGENT),
        )
        return MedicalStats(
            total_patients=total_patients,
            total_appointments=total,
            pending_appointments=pending,
            completed_appointments=completed,
            urgent_cases=urgent,
        )
