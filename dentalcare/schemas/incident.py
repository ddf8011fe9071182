"""Incident (appointment / treatment) models."""

from __future__ import annotations

from datetime import datetime
from typing import List, Literal, Optional

from pydantic import Field, field_validator

from dentalcare.schemas.base import CamelModel

STATUS_SCHEDULED = "Scheduled"
STATUS_IN_PROGRESS = "In Progress"
STATUS_COMPLETED = "Completed"
STATUS_CANCELLED = "Cancelled"

INCIDENT_STATUSES = (
    STATUS_SCHEDULED,
    STATUS_IN_PROGRESS,
    STATUS_COMPLETED,
    STATUS_CANCELLED,
)

IncidentStatus = Literal["Scheduled", "In Progress", "Completed", "Cancelled"]


class FileAttachment(CamelModel):
    """An uploaded file embedded in the incident as a data URL."""

    name: str
    url: str
    type: str
    size: int = Field(ge=0)
    uploaded_at: datetime


class IncidentFields(CamelModel):
    """Fields supplied when scheduling an incident."""

    patient_id: str
    title: str
    description: str
    comments: str = ""
    appointment_date: datetime
    cost: Optional[float] = Field(default=None, ge=0, allow_inf_nan=False)
    treatment: Optional[str] = None
    status: IncidentStatus = STATUS_SCHEDULED
    next_appointment_date: Optional[datetime] = None
    files: List[FileAttachment] = Field(default_factory=list)

    @field_validator("comments", mode="before")
    @classmethod
    def _blank_comments(cls, value: Optional[str]) -> str:
        return value or ""


class Incident(IncidentFields):
    """A stored incident record."""

    id: str
    created_at: datetime
    updated_at: datetime


class IncidentUpdate(CamelModel):
    """Partial incident update; only explicitly set fields are applied."""

    patient_id: Optional[str] = None
    title: Optional[str] = None
    description: Optional[str] = None
    comments: Optional[str] = None
    appointment_date: Optional[datetime] = None
    cost: Optional[float] = Field(default=None, ge=0, allow_inf_nan=False)
    treatment: Optional[str] = None
    status: Optional[IncidentStatus] = None
    next_appointment_date: Optional[datetime] = None
    files: Optional[List[FileAttachment]] = None
