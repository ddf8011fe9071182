"""Admin incident (appointment) endpoints."""

import logging
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Body, Depends, File, Query, UploadFile, status
from fastapi.concurrency import run_in_threadpool
from pydantic import ValidationError

from dentalcare.routers.deps import (
    get_clinic_store,
    normalize_form,
    not_found,
    reject_invalid,
    require_admin,
    validation_failed,
)
from dentalcare.schemas.incident import FileAttachment, Incident, IncidentFields, IncidentUpdate
from dentalcare.services.attachments import encode_attachment
from dentalcare.services.clinic import ClinicStore
from dentalcare.services.validation import validate_incident_form
from dentalcare.services.views import filter_incidents

LOGGER = logging.getLogger(__name__)

router = APIRouter(dependencies=[Depends(require_admin)])


async def _read_uploads(files: List[UploadFile]) -> List[FileAttachment]:
    attachments: List[FileAttachment] = []
    for upload in files:
        content = await upload.read()
        attachments.append(
            encode_attachment(upload.filename or "upload", content, upload.content_type)
        )
    return attachments


@router.get("", response_model=List[Incident])
def list_incidents(
    q: str = "",
    status_filter: Optional[str] = Query(default=None, alias="status"),
    store: ClinicStore = Depends(get_clinic_store),
) -> List[Incident]:
    """List incidents matching a search term and optional status."""

    return filter_incidents(store.incidents(), store.patients(), q, status_filter)


@router.post("", response_model=Incident, status_code=status.HTTP_201_CREATED)
def create_incident(
    payload: Dict[str, Any] = Body(...),
    store: ClinicStore = Depends(get_clinic_store),
) -> Incident:
    form = normalize_form(payload)
    errors = validate_incident_form(form)
    if "patient_id" not in errors and store.get_patient(str(form["patient_id"])) is None:
        errors["patient_id"] = "Patient not found"
    reject_invalid(errors)

    try:
        fields = IncidentFields.model_validate(form)
    except ValidationError as exc:
        raise validation_failed(exc) from exc
    return store.create_incident(fields)


@router.post("/attachments", response_model=List[FileAttachment])
async def encode_uploads(files: List[UploadFile] = File(...)) -> List[FileAttachment]:
    """Encode uploads as attachments for inclusion in a later save."""

    return await _read_uploads(files)


@router.get("/{incident_id}", response_model=Incident)
def get_incident(incident_id: str, store: ClinicStore = Depends(get_clinic_store)) -> Incident:
    incident = store.get_incident(incident_id)
    if incident is None:
        raise not_found("Incident")
    return incident


@router.patch("/{incident_id}", response_model=Incident)
def update_incident(
    incident_id: str,
    payload: Dict[str, Any] = Body(...),
    store: ClinicStore = Depends(get_clinic_store),
) -> Incident:
    current = store.get_incident(incident_id)
    if current is None:
        raise not_found("Incident")

    changes = normalize_form(payload)
    errors = validate_incident_form({**current.model_dump(), **changes})
    if "patient_id" in changes and store.get_patient(str(changes["patient_id"])) is None:
        errors.setdefault("patient_id", "Patient not found")
    reject_invalid(errors)

    try:
        partial = IncidentUpdate.model_validate(changes)
        updated = store.update_incident(incident_id, partial)
    except ValidationError as exc:
        raise validation_failed(exc) from exc
    if updated is None:
        raise not_found("Incident")
    return updated


@router.delete("/{incident_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_incident(incident_id: str, store: ClinicStore = Depends(get_clinic_store)) -> None:
    if not store.delete_incident(incident_id):
        raise not_found("Incident")


@router.post("/{incident_id}/files", response_model=Incident)
async def upload_files(
    incident_id: str,
    files: List[UploadFile] = File(...),
    store: ClinicStore = Depends(get_clinic_store),
) -> Incident:
    """Append uploaded files to the incident's attachment list."""

    if store.get_incident(incident_id) is None:
        raise not_found("Incident")

    attachments = await _read_uploads(files)
    LOGGER.info("Attaching %d files to incident %s", len(attachments), incident_id)
    updated = await run_in_threadpool(store.append_attachments, incident_id, attachments)
    if updated is None:
        raise not_found("Incident")
    return updated


@router.delete("/{incident_id}/files/{index}", response_model=Incident)
def remove_file(
    incident_id: str,
    index: int,
    store: ClinicStore = Depends(get_clinic_store),
) -> Incident:
    """Remove one attachment by its position in the incident's file list."""

    try:
        updated = store.detach_file(incident_id, index)
    except IndexError as exc:
        raise not_found("Attachment") from exc
    if updated is None:
        raise not_found("Incident")
    return updated
