"""Patient record models."""

from __future__ import annotations

from datetime import date, datetime
from typing import Optional

from dentalcare.schemas.base import CamelModel


class PatientFields(CamelModel):
    """Fields supplied when registering a patient."""

    name: str
    dob: date
    contact: str
    health_info: str
    email: Optional[str] = None
    address: Optional[str] = None
    emergency_contact: Optional[str] = None


class Patient(PatientFields):
    """A stored patient record."""

    id: str
    created_at: datetime
    updated_at: datetime


class PatientUpdate(CamelModel):
    """Partial patient update; only explicitly set fields are applied."""

    name: Optional[str] = None
    dob: Optional[date] = None
    contact: Optional[str] = None
    health_info: Optional[str] = None
    email: Optional[str] = None
    address: Optional[str] = None
    emergency_contact: Optional[str] = None


class ProfileUpdate(CamelModel):
    """Fields a patient may change on their own profile."""

    name: Optional[str] = None
    contact: Optional[str] = None
    health_info: Optional[str] = None
    email: Optional[str] = None
    address: Optional[str] = None
    emergency_contact: Optional[str] = None
