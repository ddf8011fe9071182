"""Endpoints for the signed-in patient."""

import logging
from typing import Any, Dict

from fastapi import APIRouter, Body, Depends
from pydantic import ValidationError

from dentalcare.routers.deps import (
    get_clinic_store,
    normalize_form,
    not_found,
    reject_invalid,
    require_patient,
    validation_failed,
)
from dentalcare.schemas.dashboard import PatientAppointments, PatientSummary
from dentalcare.schemas.patient import Patient, ProfileUpdate
from dentalcare.schemas.user import User
from dentalcare.services import views
from dentalcare.services.clinic import ClinicStore
from dentalcare.services.validation import validate_profile_form
from dentalcare.utils.timeutil import clinic_now

LOGGER = logging.getLogger(__name__)

router = APIRouter()


def _own_patient(user: User, store: ClinicStore) -> Patient:
    patient = store.get_patient(user.patient_id or "")
    if patient is None:
        LOGGER.warning("User %s references missing patient %s", user.id, user.patient_id)
        raise not_found("Patient")
    return patient


@router.get("/profile", response_model=Patient)
def get_profile(
    user: User = Depends(require_patient),
    store: ClinicStore = Depends(get_clinic_store),
) -> Patient:
    return _own_patient(user, store)


@router.patch("/profile", response_model=Patient)
def update_profile(
    payload: Dict[str, Any] = Body(...),
    user: User = Depends(require_patient),
    store: ClinicStore = Depends(get_clinic_store),
) -> Patient:
    """Let a patient edit their own contact and health details."""

    current = _own_patient(user, store)
    changes = normalize_form(payload)
    unknown = set(changes) - set(ProfileUpdate.model_fields)
    reject_invalid({field: "Field cannot be changed" for field in sorted(unknown)})
    reject_invalid(validate_profile_form({**current.model_dump(), **changes}))

    try:
        partial = ProfileUpdate.model_validate(changes)
        updated = store.update_patient(current.id, partial)
    except ValidationError as exc:
        raise validation_failed(exc) from exc
    if updated is None:
        raise not_found("Patient")
    return updated


@router.get("/appointments", response_model=PatientAppointments)
def my_appointments(
    user: User = Depends(require_patient),
    store: ClinicStore = Depends(get_clinic_store),
) -> PatientAppointments:
    """Split the patient's incidents into upcoming and history."""

    patient = _own_patient(user, store)
    incidents = store.incidents_for_patient(patient.id)
    now = clinic_now(store.clinic_timezone)
    return PatientAppointments(
        upcoming=views.upcoming(incidents, now, store.clinic_timezone),
        history=views.history(incidents, now, store.clinic_timezone),
    )


@router.get("/summary", response_model=PatientSummary)
def my_summary(
    user: User = Depends(require_patient),
    store: ClinicStore = Depends(get_clinic_store),
) -> PatientSummary:
    patient = _own_patient(user, store)
    return store.patient_summary(patient.id)
