"""SQLAlchemy ORM models."""

from __future__ import annotations

import datetime
import uuid

from sqlalchemy import JSON, DateTime, String, Text
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


def utcnow() -> datetime.datetime:
    return datetime.datetime.now(datetime.UTC)


class Base(DeclarativeBase):
    type_annotation_map = {datetime.datetime: DateTime(timezone=True)}


class Patient(Base):
    __tablename__ = "patients"

    id: Mapped[uuid.UUID] = mapped_column(primary_key=True, default=uuid.uuid4)
    name: Mapped[str] = mapped_column(String)
    age: Mapped[int]
    gender: Mapped[str] = mapped_column(String)
    phone: Mapped[str] = mapped_column(String)
    email: Mapped[str] = mapped_column(String)
    blood_type: Mapped[str | None] = mapped_column(String)
    allergies: Mapped[list] = mapped_column(JSON, default=list)
    condition: Mapped[str | None] = mapped_column(String)
    last_visit: Mapped[datetime.datetime | None]
    emergency_contact: Mapped[dict | None] = mapped_column(JSON)
    created_at: Mapped[datetime.datetime] = mapped_column(default=utcnow)
    updated_at: Mapped[datetime.datetime] = mapped_column(
        default=utcnow, onupdate=utcnow
    )


class Appointment(Base):
    __tablename__ = "appointments"

    id: Mapped[uuid.UUID] = mapped_column(primary_key=True, default=uuid.uuid4)
    # Not a foreign key: a dangling reference is allowed and cleaned up on
    # patient deletion only.
    patient_id: Mapped[uuid.UUID] = mapped_column(index=True)
    patient_name: Mapped[str] = mapped_column(String)
    doctor_name: Mapped[str] = mapped_column(String)
    date: Mapped[datetime.datetime] = mapped_column(index=True)
    status: Mapped[str] = mapped_column(String, default="Scheduled")
    type: Mapped[str | None] = mapped_column(String)
    notes: Mapped[str | None] = mapped_column(Text)
    created_at: Mapped[datetime.datetime] = mapped_column(default=utcnow)
    updated_at: Mapped[datetime.datetime] = mapped_column(
        default=utcnow, onupdate=utcnow
    )
