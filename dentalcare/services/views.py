"""Filtering and ordering helpers shared by the dashboard and list views."""

from __future__ import annotations

from datetime import datetime
from typing import Dict, Iterable, List, Optional

from dentalcare.schemas.incident import STATUS_COMPLETED, STATUS_SCHEDULED, Incident
from dentalcare.schemas.patient import Patient
from dentalcare.utils.timeutil import to_clinic_time

ADMIN_UPCOMING_LIMIT = 10
RECENT_PATIENTS_LIMIT = 5


def upcoming(
    incidents: Iterable[Incident],
    now: datetime,
    tz_name: str = "UTC",
    limit: Optional[int] = None,
) -> List[Incident]:
    """Scheduled incidents at or after ``now``, soonest first."""

    current = to_clinic_time(now, tz_name)
    selected = [
        item
        for item in incidents
        if item.status == STATUS_SCHEDULED
        and to_clinic_time(item.appointment_date, tz_name) >= current
    ]
    selected.sort(key=lambda item: to_clinic_time(item.appointment_date, tz_name))
    return selected[:limit] if limit is not None else selected


def history(
    incidents: Iterable[Incident],
    now: datetime,
    tz_name: str = "UTC",
) -> List[Incident]:
    """Completed or already-past incidents, most recent first."""

    current = to_clinic_time(now, tz_name)
    selected = [
        item
        for item in incidents
        if item.status == STATUS_COMPLETED
        or to_clinic_time(item.appointment_date, tz_name) < current
    ]
    selected.sort(
        key=lambda item: to_clinic_time(item.appointment_date, tz_name),
        reverse=True,
    )
    return selected


def recent_patients(
    patients: Iterable[Patient],
    limit: int = RECENT_PATIENTS_LIMIT,
) -> List[Patient]:
    """Most recently registered patients first."""

    return sorted(patients, key=lambda item: item.created_at, reverse=True)[:limit]


def search_patients(patients: Iterable[Patient], term: str = "") -> List[Patient]:
    """Match ``term`` against name and email (case-insensitive) or contact."""

    needle = term.lower()
    return [
        item
        for item in patients
        if needle in item.name.lower()
        or term in item.contact
        or (item.email is not None and needle in item.email.lower())
    ]


def filter_incidents(
    incidents: Iterable[Incident],
    patients: Iterable[Patient],
    term: str = "",
    status: Optional[str] = None,
) -> List[Incident]:
    """Match ``term`` against title, description or patient name, then status."""

    names: Dict[str, str] = {item.id: item.name.lower() for item in patients}
    needle = term.lower()
    result: List[Incident] = []
    for item in incidents:
        matches_term = (
            needle in item.title.lower()
            or needle in item.description.lower()
            or needle in names.get(item.patient_id, "")
        )
        matches_status = not status or item.status == status
        if matches_term and matches_status:
            result.append(item)
    return result
