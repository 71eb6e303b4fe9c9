"""Patient data access service."""

from __future__ import annotations

import logging
import uuid
from collections.abc import Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from carebase.database import session_scope
from carebase.exceptions import PatientNotFoundError
from carebase.models.orm import Patient, utcnow
from carebase.models.schemas import PatientCreate
from carebase.services.cascade import CascadeCoordinator
from carebase.services.validation import check_required

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("name", "age", "gender", "phone", "email")


class PatientStore:
    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        cascade: CascadeCoordinator,
    ) -> None:
        self._session_factory = session_factory
        self._cascade = cascade

    @staticmethod
    async def _load(session: AsyncSession, patient_id: uuid.UUID) -> Patient:
        patient = await session.get(Patient, patient_id)
        if patient is None:
            raise PatientNotFoundError()
        return patient

    async def list_patients(self) -> Sequence[Patient]:
        """All patients, newest first."""
        async with session_scope(self._session_factory) as session:
            result = await session.execute(
                select(Patient).order_by(Patient.created_at.desc())
            )
            return result.scalars().all()

    async def get_patient(self, patient_id: uuid.UUID) -> Patient:
        async with session_scope(self._session_factory) as session:
            return await self._load(session, patient_id)

    async def create_patient(self, data: PatientCreate) -> Patient:
        fields = data.model_dump()
        if fields["last_visit"] is None:
            fields["last_visit"] = utcnow()
        patient = Patient(**fields)
        async with session_scope(self._session_factory) as session:
            session.add(patient)
        logger.info("Created patient %s", patient.id)
        return patient

    async def update_patient(self, patient_id: uuid.UUID, changes: dict) -> Patient:
        """Merge only the supplied fields, then re-check the required ones."""
        async with session_scope(self._session_factory) as session:
            patient = await self._load(session, patient_id)
            for key, value in changes.items():
                setattr(patient, key, value)
            if patient.allergies is None:
                patient.allergies = []
            check_required(patient, REQUIRED_FIELDS)
            patient.updated_at = utcnow()
        logger.info("Updated patient %s (%s)", patient_id, ", ".join(changes) or "no fields")
        return patient

    async def delete_patient(self, patient_id: uuid.UUID) -> Patient:
        """Delete a patient and, in the same transaction, its appointments."""
        async with session_scope(self._session_factory) as session:
            patient = await self._load(session, patient_id)
            await session.delete(patient)
            await self._cascade.patient_deleted(session, patient_id)
        logger.info("Deleted patient %s", patient_id)
        return patient
