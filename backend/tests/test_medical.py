"""Dashboard statistics tests."""

from __future__ import annotations

import datetime

from httpx import AsyncClient

from carebase.models.orm import Appointment
from carebase.services import appointment_service


async def test_stats_empty(client: AsyncClient) -> None:
    response = await client.get("/api/medical")
    assert response.status_code == 200
    assert response.json() == {
        "success": True,
        "data": {
            "totalPatients": 0,
            "totalAppointments": 0,
            "pendingAppointments": 0,
            "completedAppointments": 0,
            "urgentCases": 0,
        },
    }


async def test_stats_counts_by_status(app, client: AsyncClient, seed_patient) -> None:
    statuses = ["Scheduled", "Scheduled", "Completed", "Urgent", "Cancelled", "Confirmed"]
    async with app.state.session_factory() as session:
        session.add_all(
            Appointment(
                patient_id=seed_patient.id,
                patient_name=seed_patient.name,
                doctor_name="Dr. Test",
                date=datetime.datetime(2024, 4, day, 9, 0),
                status=status,
            )
            for day, status in enumerate(statuses, start=1)
        )
        await session.commit()

    data = (await client.get("/api/medical")).json()["data"]
    assert data == {
        "totalPatients": 1,
        "totalAppointments": 6,
        "pendingAppointments": 2,
        "completedAppointments": 1,
        "urgentCases": 1,
    }


async def test_stats_runs_counts_concurrently(appointment_store, mocker) -> None:
    gather = mocker.spy(appointment_service.asyncio, "gather")
    stats = await appointment_store.get_stats()
    assert stats.total_patients == 0
    assert gather.call_count == 1
    assert len(gather.call_args.args) == 5
