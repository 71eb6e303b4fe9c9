"""Replace all data with a fixed set of demo patients and appointments."""

from __future__ import annotations

import datetime
import logging
from dataclasses import dataclass

from sqlalchemy import delete
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from carebase.database import session_scope
from carebase.models.orm import Appointment, Patient

logger = logging.getLogger(__name__)


SAMPLE_PATIENTS = [
    {
        "name": "John Smith",
        "age": 45,
        "gender": "male",
        "phone": "+1234567890",
        "email": "john.smith@email.com",
        "blood_type": "A+",
        "allergies": ["Penicillin", "Shellfish"],
        "condition": "Stable",
        "last_visit": datetime.datetime(2024, 1, 10, tzinfo=datetime.UTC),
        "emergency_contact": {
            "name": "Jane Smith",
            "phone": "+1234567891",
            "relationship": "Wife",
        },
    },
    {
        "name": "Maria Garcia",
        "age": 32,
        "gender": "female",
        "phone": "+1234567892",
        "email": "maria.garcia@email.com",
        "blood_type": "O-",
        "allergies": ["None"],
        "condition": "Good",
        "last_visit": datetime.datetime(2024, 1, 12, tzinfo=datetime.UTC),
        "emergency_contact": {
            "name": "Carlos Garcia",
            "phone": "+1234567893",
            "relationship": "Husband",
        },
    },
    {
        "name": "Ahmed Hassan",
        "age": 28,
        "gender": "male",
        "phone": "+1234567894",
        "email": "ahmed.hassan@email.com",
        "blood_type": "B+",
        "allergies": ["Ibuprofen"],
        "condition": "Critical",
        "last_visit": datetime.datetime(2024, 1, 14, tzinfo=datetime.UTC),
        "emergency_contact": {
            "name": "Fatima Hassan",
            "phone": "+1234567895",
            "relationship": "Sister",
        },
    },
]

# One appointment per sample patient, matched by position
SAMPLE_APPOINTMENTS = [
    {
        "doctor_name": "Dr. Ahmed Mohamed",
        "date": datetime.datetime(2024, 1, 15, 10, 0, tzinfo=datetime.UTC),
        "status": "Scheduled",
        "type": "Checkup",
        "notes": "Regular annual checkup",
    },
    {
        "doctor_name": "Dr. Sarah Wilson",
        "date": datetime.datetime(2024, 1, 15, 14, 30, tzinfo=datetime.UTC),
        "status": "Completed",
        "type": "Follow-up",
        "notes": "Asthma treatment follow-up",
    },
    {
        "doctor_name": "Dr. Michael Brown",
        "date": datetime.datetime(2024, 1, 16, 9, 15, tzinfo=datetime.UTC),
        "status": "Urgent",
        "type": "Consultation",
        "notes": "Critical condition monitoring",
    },
]


@dataclass
class SeedResult:
    patients: int
    appointments: int


async def seed_database(session_factory: async_sessionmaker[AsyncSession]) -> SeedResult:
    """Delete every patient and appointment, then insert the sample set.

    Not safe to run concurrently with itself or with other writes.
    """
    async with session_scope(session_factory) as session:
        await session.execute(delete(Appointment))
        await session.execute(delete(Patient))

        patients = [Patient(**fields) for fields in SAMPLE_PATIENTS]
        session.add_all(patients)
        await session.flush()

        appointments = [
            Appointment(patient_id=patient.id, patient_name=patient.name, **fields)
            for patient, fields in zip(patients, SAMPLE_APPOINTMENTS, strict=True)
        ]
        session.add_all(appointments)

    logger.info(
        "Seeded %d patients and %d appointments", len(patients), len(appointments)
    )
    return SeedResult(patients=len(patients), appointments=len(appointments))
