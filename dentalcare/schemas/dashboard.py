"""Derived aggregate payloads."""

from typing import List

from dentalcare.schemas.base import CamelModel
from dentalcare.schemas.incident import Incident
from dentalcare.schemas.patient import Patient


class DashboardStats(CamelModel):
    """Clinic-wide counts and revenue, computed on demand."""

    total_patients: int
    total_appointments: int
    completed_treatments: int
    pending_treatments: int
    total_revenue: float
    monthly_revenue: float


class PatientSummary(CamelModel):
    """Per-patient counts shown on the patient dashboard."""

    upcoming_count: int
    completed_count: int
    total_spent: float


class DashboardOverview(CamelModel):
    """Admin dashboard payload."""

    stats: DashboardStats
    upcoming: List[Incident]
    recent_patients: List[Patient]


class PatientAppointments(CamelModel):
    """A patient's appointments split into upcoming and history."""

    upcoming: List[Incident]
    history: List[Incident]
