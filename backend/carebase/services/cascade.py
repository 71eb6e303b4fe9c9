"""Referential cleanup between patients and their appointments."""

from __future__ import annotations

import logging
import uuid

from sqlalchemy import delete
from sqlalchemy.ext.asyncio import AsyncSession

from carebase.models.orm import Appointment

logger = logging.getLogger(__name__)


class CascadeCoordinator:
    """Removes appointments left behind by a deleted patient.

    Runs on the caller's session, so the cleanup commits or rolls back
    together with the patient deletion.
    """

    async def patient_deleted(self, session: AsyncSession, patient_id: uuid.UUID) -> int:
        result = await session.execute(
            delete(Appointment).where(Appointment.patient_id == patient_id)
        )
        removed = result.rowcount or 0
        logger.info("Removed %d appointment(s) for deleted patient %s", removed, patient_id)
        return removed
