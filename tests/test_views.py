"""Upcoming / history partitions and list filters."""

from datetime import date, datetime, timedelta, timezone

from dentalcare.schemas.incident import Incident
from dentalcare.schemas.patient import Patient
from dentalcare.services import views

NOW = datetime(2026, 10, 19, 12, 0)
STAMP = datetime(2026, 1, 1, tzinfo=timezone.utc)


def _incident(incident_id: str, when: datetime, status: str = "Scheduled", **extra) -> Incident:
    return Incident(
        id=incident_id,
        patient_id=extra.pop("patient_id", "p1"),
        title=extra.pop("title", "Checkup"),
        description=extra.pop("description", "Routine"),
        appointment_date=when,
        status=status,
        created_at=STAMP,
        updated_at=STAMP,
        **extra,
    )


def _patient(patient_id: str, name: str, created_at: datetime, **extra) -> Patient:
    return Patient(
        id=patient_id,
        name=name,
        dob=date(1990, 1, 1),
        contact=extra.pop("contact", "1234567890"),
        health_info="None",
        created_at=created_at,
        updated_at=created_at,
        **extra,
    )


def test_upcoming_is_future_scheduled_sorted_ascending() -> None:
    incidents = [
        _incident("later", NOW + timedelta(days=5)),
        _incident("past", NOW - timedelta(days=1)),
        _incident("soon", NOW + timedelta(hours=1)),
        _incident("done", NOW + timedelta(days=2), status="Completed"),
        _incident("exactly-now", NOW),
    ]

    assert [i.id for i in views.upcoming(incidents, NOW)] == ["exactly-now", "soon", "later"]
    assert [i.id for i in views.upcoming(incidents, NOW, limit=1)] == ["exactly-now"]


def test_history_is_completed_or_past_sorted_descending() -> None:
    incidents = [
        _incident("old", NOW - timedelta(days=30)),
        _incident("future-done", NOW + timedelta(days=3), status="Completed"),
        _incident("recent-cancelled", NOW - timedelta(days=1), status="Cancelled"),
        _incident("future", NOW + timedelta(days=1)),
    ]

    assert [i.id for i in views.history(incidents, NOW)] == ["future-done", "recent-cancelled", "old"]


def test_aware_dates_are_compared_in_clinic_time() -> None:
    # 06:00 UTC is 11:30 in Kolkata, before a clinic-local noon
    incident = _incident("utc", datetime(2026, 10, 19, 6, 0, tzinfo=timezone.utc))

    assert views.upcoming([incident], NOW, "Asia/Kolkata") == []
    assert [i.id for i in views.history([incident], NOW, "Asia/Kolkata")] == ["utc"]


def test_recent_patients_newest_first() -> None:
    patients = [
        _patient(f"p{n}", f"Patient {n}", STAMP + timedelta(days=n)) for n in range(7)
    ]

    recent = views.recent_patients(patients)

    assert [p.id for p in recent] == ["p6", "p5", "p4", "p3", "p2"]


def test_search_patients_matches_name_contact_and_email() -> None:
    patients = [
        _patient("p1", "Vikas Gupta", STAMP, email="vikas@example.com"),
        _patient("p2", "Jane Smith", STAMP, contact="5550001111"),
    ]

    assert [p.id for p in views.search_patients(patients, "GUPTA")] == ["p1"]
    assert [p.id for p in views.search_patients(patients, "5550")] == ["p2"]
    assert [p.id for p in views.search_patients(patients, "VIKAS@")] == ["p1"]
    assert len(views.search_patients(patients, "")) == 2


def test_filter_incidents_by_term_and_status() -> None:
    patients = [_patient("p1", "Jane Smith", STAMP)]
    incidents = [
        _incident("i1", NOW, title="Crown Preparation"),
        _incident("i2", NOW, status="Completed", description="Crown fitting"),
        _incident("i3", NOW, patient_id="p9", title="Cleaning"),
    ]

    assert [i.id for i in views.filter_incidents(incidents, patients, "crown")] == ["i1", "i2"]
    assert [i.id for i in views.filter_incidents(incidents, patients, "jane")] == ["i1", "i2"]
    assert [i.id for i in views.filter_incidents(incidents, patients, "", "Completed")] == ["i2"]
    assert views.filter_incidents(incidents, patients, "nobody") == []
