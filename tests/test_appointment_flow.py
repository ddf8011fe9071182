# End-to-end appointment lifecycle through the ASGI app:
#   * admin registers a patient and schedules a future appointment
#   * the patient sees it under upcoming, not history
#   * admin marks it completed; it moves to history and counts as revenue

from datetime import datetime, timedelta

import pytest
from httpx import ASGITransport, AsyncClient

from conftest import patient_form
from dentalcare.main import create_app
from dentalcare.services import views
from dentalcare.services.identity import IdentityStore
from dentalcare.utils.passwords import hash_password


@pytest.mark.anyio
async def test_scheduled_appointment_moves_to_history_when_completed(
    settings, storage, seeded_store
) -> None:
    identity_store = IdentityStore(
        storage,
        seed_factory=lambda: [
            {
                "id": "admin",
                "role": "Admin",
                "email": "desk@clinic.test",
                "passwordHash": hash_password("desk-pass"),
            },
        ],
    )
    app = create_app(settings, identity_store=identity_store, clinic_store=seeded_store)
    transport = ASGITransport(app=app)
    future = (datetime.now() + timedelta(days=7)).replace(microsecond=0)

    async with AsyncClient(transport=transport, base_url="http://testserver") as ac:
        resp = await ac.post("/auth/login", json={"email": "desk@clinic.test", "password": "desk-pass"})
        assert resp.status_code == 200

        resp = await ac.post("/patients", json=patient_form())
        assert resp.status_code == 201
        patient_id = resp.json()["id"]

        resp = await ac.post(
            "/incidents",
            json={
                "patientId": patient_id,
                "title": "Implant consult",
                "description": "Lower left",
                "appointmentDate": future.isoformat(),
                "cost": 300,
            },
        )
        assert resp.status_code == 201
        incident_id = resp.json()["id"]

        now = datetime.now()
        incidents = seeded_store.incidents_for_patient(patient_id)
        assert [i.id for i in views.upcoming(incidents, now)] == [incident_id]
        assert views.history(incidents, now) == []

        resp = await ac.patch(f"/incidents/{incident_id}", json={"status": "Completed"})
        assert resp.status_code == 200

        incidents = seeded_store.incidents_for_patient(patient_id)
        assert views.upcoming(incidents, now) == []
        assert [i.id for i in views.history(incidents, now)] == [incident_id]

        stats = (await ac.get("/dashboard/stats")).json()
        assert stats["completedTreatments"] == 9
        assert stats["totalRevenue"] == 1495
