"""Admin patient management endpoints."""

from typing import Any, Dict, List

from fastapi import APIRouter, Body, Depends, status
from pydantic import ValidationError

from dentalcare.routers.deps import (
    get_clinic_store,
    normalize_form,
    not_found,
    reject_invalid,
    require_admin,
    validation_failed,
)
from dentalcare.schemas.incident import Incident
from dentalcare.schemas.patient import Patient, PatientFields, PatientUpdate
from dentalcare.services.clinic import ClinicStore
from dentalcare.services.validation import validate_patient_form
from dentalcare.services.views import search_patients

router = APIRouter(dependencies=[Depends(require_admin)])


@router.get("", response_model=List[Patient])
def list_patients(q: str = "", store: ClinicStore = Depends(get_clinic_store)) -> List[Patient]:
    """List patients, optionally filtered by name, contact or email."""

    return search_patients(store.patients(), q)


@router.post("", response_model=Patient, status_code=status.HTTP_201_CREATED)
def create_patient(
    payload: Dict[str, Any] = Body(...),
    store: ClinicStore = Depends(get_clinic_store),
) -> Patient:
    form = normalize_form(payload)
    reject_invalid(validate_patient_form(form))
    try:
        fields = PatientFields.model_validate(form)
    except ValidationError as exc:
        raise validation_failed(exc) from exc
    return store.create_patient(fields)


@router.get("/{patient_id}", response_model=Patient)
def get_patient(patient_id: str, store: ClinicStore = Depends(get_clinic_store)) -> Patient:
    patient = store.get_patient(patient_id)
    if patient is None:
        raise not_found("Patient")
    return patient


@router.patch("/{patient_id}", response_model=Patient)
def update_patient(
    patient_id: str,
    payload: Dict[str, Any] = Body(...),
    store: ClinicStore = Depends(get_clinic_store),
) -> Patient:
    current = store.get_patient(patient_id)
    if current is None:
        raise not_found("Patient")

    changes = normalize_form(payload)
    reject_invalid(validate_patient_form({**current.model_dump(), **changes}))
    try:
        partial = PatientUpdate.model_validate(changes)
        updated = store.update_patient(patient_id, partial)
    except ValidationError as exc:
        raise validation_failed(exc) from exc
    if updated is None:
        raise not_found("Patient")
    return updated


@router.delete("/{patient_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_patient(patient_id: str, store: ClinicStore = Depends(get_clinic_store)) -> None:
    """Delete the patient together with all of their incidents."""

    if not store.delete_patient(patient_id):
        raise not_found("Patient")


@router.get("/{patient_id}/incidents", response_model=List[Incident])
def patient_incidents(patient_id: str, store: ClinicStore = Depends(get_clinic_store)) -> List[Incident]:
    if store.get_patient(patient_id) is None:
        raise not_found("Patient")
    return store.incidents_for_patient(patient_id)
