"""Clinical data store: patients, incidents and derived aggregates."""

from __future__ import annotations

import logging
import threading
from datetime import datetime
from typing import Any, Callable, Dict, List, Mapping, Optional, Type, TypeVar, Union
from uuid import uuid4

from pydantic import BaseModel, ValidationError

from dentalcare.schemas.dashboard import DashboardStats, PatientSummary
from dentalcare.schemas.incident import (
    STATUS_COMPLETED,
    FileAttachment,
    Incident,
    IncidentFields,
    IncidentUpdate,
)
from dentalcare.schemas.patient import Patient, PatientFields, PatientUpdate
from dentalcare.services import views
from dentalcare.services.attachments import remove_attachment
from dentalcare.services.errors import PersistenceError
from dentalcare.services.seed import SEED_INCIDENTS, SEED_PATIENTS
from dentalcare.services.storage import INCIDENTS_KEY, PATIENTS_KEY, KeyValueStorage
from dentalcare.utils.timeutil import clinic_now, to_clinic_time, utcnow

LOGGER = logging.getLogger(__name__)

RecordT = TypeVar("RecordT", Patient, Incident)

IMMUTABLE_FIELDS = {"id", "created_at", "updated_at"}


def generate_id() -> str:
    """Return a new unique record identifier."""

    return uuid4().hex


def _as_changes(partial: Union[BaseModel, Mapping[str, Any]]) -> Dict[str, Any]:
    if isinstance(partial, BaseModel):
        changes = partial.model_dump(exclude_unset=True)
    else:
        changes = dict(partial)
    return {key: value for key, value in changes.items() if key not in IMMUTABLE_FIELDS}


class ClinicStore:
    """Owns the patient and incident collections and mirrors them to storage.

    Every mutation writes the complete updated collection before the
    in-memory copy is replaced. A failed write raises ``PersistenceError``
    and leaves the in-memory collection as it was. Mutations hold a
    re-entrant lock for the whole read-modify-write.

    Stored documents that fail validation are kept aside and written back
    unchanged with every later write of their collection.
    """

    def __init__(
        self,
        storage: KeyValueStorage,
        *,
        clinic_timezone: str = "UTC",
        clock: Callable[[], datetime] = utcnow,
        id_factory: Callable[[], str] = generate_id,
        seed_on_first_load: bool = True,
    ) -> None:
        self._storage = storage
        self.clinic_timezone = clinic_timezone
        self._clock = clock
        self._id_factory = id_factory
        self._lock = threading.RLock()
        self._unreadable: Dict[str, List[Any]] = {}
        self._patients: List[Patient] = self._load(
            PATIENTS_KEY, Patient, SEED_PATIENTS if seed_on_first_load else []
        )
        self._incidents: List[Incident] = self._load(
            INCIDENTS_KEY, Incident, SEED_INCIDENTS if seed_on_first_load else []
        )

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------
    def patients(self) -> List[Patient]:
        return list(self._patients)

    def incidents(self) -> List[Incident]:
        return list(self._incidents)

    def get_patient(self, patient_id: str) -> Optional[Patient]:
        return next((item for item in self._patients if item.id == patient_id), None)

    def get_incident(self, incident_id: str) -> Optional[Incident]:
        return next((item for item in self._incidents if item.id == incident_id), None)

    def incidents_for_patient(self, patient_id: str) -> List[Incident]:
        """Return the patient's incidents in store order."""

        return [item for item in self._incidents if item.patient_id == patient_id]

    # ------------------------------------------------------------------
    # Patient mutations
    # ------------------------------------------------------------------
    def create_patient(self, fields: Union[PatientFields, Mapping[str, Any]]) -> Patient:
        """Register a new patient with fresh id and timestamps."""

        with self._lock:
            patient = self._new_record(Patient, PatientFields, fields)
            self._commit_patients(self._patients + [patient])
        LOGGER.info("Created patient %s", patient.id)
        return patient

    def update_patient(
        self,
        patient_id: str,
        partial: Union[PatientUpdate, Mapping[str, Any]],
    ) -> Optional[Patient]:
        """Merge ``partial`` into the patient; None when the id is unknown."""

        with self._lock:
            updated_list, updated = self._merge(self._patients, patient_id, Patient, partial)
            if updated is None:
                LOGGER.debug("Update skipped; patient %s not found", patient_id)
                return None

            self._commit_patients(updated_list)
        LOGGER.info("Updated patient %s", patient_id)
        return updated

    def delete_patient(self, patient_id: str) -> bool:
        """Remove the patient and every incident that references them."""

        with self._lock:
            remaining = [item for item in self._patients if item.id != patient_id]
            if len(remaining) == len(self._patients):
                LOGGER.debug("Delete skipped; patient %s not found", patient_id)
                return False

            remaining_incidents = [
                item for item in self._incidents if item.patient_id != patient_id
            ]
            removed = len(self._incidents) - len(remaining_incidents)

            # Incidents first so a failed patient write never leaves orphans behind.
            self._commit_incidents(remaining_incidents)
            self._commit_patients(remaining)
        LOGGER.info("Deleted patient %s and %d incidents", patient_id, removed)
        return True

    # ------------------------------------------------------------------
    # Incident mutations
    # ------------------------------------------------------------------
    def create_incident(self, fields: Union[IncidentFields, Mapping[str, Any]]) -> Incident:
        """Schedule a new incident. The referenced patient is not checked."""

        with self._lock:
            incident = self._new_record(Incident, IncidentFields, fields)
            self._commit_incidents(self._incidents + [incident])
        LOGGER.info("Created incident %s for patient %s", incident.id, incident.patient_id)
        return incident

    def update_incident(
        self,
        incident_id: str,
        partial: Union[IncidentUpdate, Mapping[str, Any]],
    ) -> Optional[Incident]:
        with self._lock:
            updated_list, updated = self._merge(self._incidents, incident_id, Incident, partial)
            if updated is None:
                LOGGER.debug("Update skipped; incident %s not found", incident_id)
                return None

            self._commit_incidents(updated_list)
        LOGGER.info("Updated incident %s", incident_id)
        return updated

    def append_attachments(
        self, incident_id: str, attachments: List[FileAttachment]
    ) -> Optional[Incident]:
        """Add files to an incident's existing attachments."""

        with self._lock:
            current = self.get_incident(incident_id)
            if current is None:
                return None
            return self.update_incident(
                incident_id, {"files": list(current.files) + list(attachments)}
            )

    def detach_file(self, incident_id: str, index: int) -> Optional[Incident]:
        """Drop the attachment at ``index``; IndexError when there is none."""

        with self._lock:
            current = self.get_incident(incident_id)
            if current is None:
                return None
            return self.update_incident(
                incident_id, {"files": remove_attachment(list(current.files), index)}
            )

    def delete_incident(self, incident_id: str) -> bool:
        with self._lock:
            remaining = [item for item in self._incidents if item.id != incident_id]
            if len(remaining) == len(self._incidents):
                LOGGER.debug("Delete skipped; incident %s not found", incident_id)
                return False

            self._commit_incidents(remaining)
        LOGGER.info("Deleted incident %s", incident_id)
        return True

    # ------------------------------------------------------------------
    # Derived queries
    # ------------------------------------------------------------------
    def dashboard_stats(self, now: Optional[datetime] = None) -> DashboardStats:
        """Compute clinic-wide counts and revenue from current state."""

        current = self._now(now)
        completed = [item for item in self._incidents if item.status == STATUS_COMPLETED]
        this_month = [
            item
            for item in completed
            if self._local(item.appointment_date).year == current.year
            and self._local(item.appointment_date).month == current.month
        ]

        return DashboardStats(
            total_patients=len(self._patients),
            total_appointments=len(self._incidents),
            completed_treatments=len(completed),
            pending_treatments=len(self._incidents) - len(completed),
            total_revenue=_revenue(self._incidents),
            monthly_revenue=_revenue(this_month),
        )

    def patient_summary(self, patient_id: str, now: Optional[datetime] = None) -> PatientSummary:
        """Counts and spend for a single patient's dashboard."""

        incidents = self.incidents_for_patient(patient_id)
        completed = [item for item in incidents if item.status == STATUS_COMPLETED]
        upcoming = views.upcoming(incidents, self._now(now), self.clinic_timezone)

        return PatientSummary(
            upcoming_count=len(upcoming),
            completed_count=len(completed),
            total_spent=_revenue(completed),
        )

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _now(self, now: Optional[datetime]) -> datetime:
        if now is None:
            return clinic_now(self.clinic_timezone)
        return to_clinic_time(now, self.clinic_timezone)

    def _local(self, value: datetime) -> datetime:
        return to_clinic_time(value, self.clinic_timezone)

    def _new_record(
        self,
        record_type: Type[RecordT],
        fields_type: Type[BaseModel],
        fields: Union[BaseModel, Mapping[str, Any]],
    ) -> RecordT:
        if not isinstance(fields, BaseModel):
            fields = fields_type.model_validate(fields)

        timestamp = self._clock()
        return record_type(
            **fields.model_dump(),
            id=self._id_factory(),
            created_at=timestamp,
            updated_at=timestamp,
        )

    def _merge(
        self,
        records: List[RecordT],
        record_id: str,
        record_type: Type[RecordT],
        partial: Union[BaseModel, Mapping[str, Any]],
    ) -> tuple[List[RecordT], Optional[RecordT]]:
        changes = _as_changes(partial)
        updated: Optional[RecordT] = None
        result: List[RecordT] = []
        for record in records:
            if record.id == record_id and updated is None:
                merged = {**record.model_dump(), **changes, "updated_at": self._clock()}
                updated = record_type.model_validate(merged)
                result.append(updated)
            else:
                result.append(record)
        return result, updated

    def _commit_patients(self, patients: List[Patient]) -> None:
        self._write(PATIENTS_KEY, patients)
        self._patients = patients

    def _commit_incidents(self, incidents: List[Incident]) -> None:
        self._write(INCIDENTS_KEY, incidents)
        self._incidents = incidents

    def _write(self, key: str, records: List[BaseModel]) -> None:
        documents = [record.to_storage() for record in records]
        documents.extend(self._unreadable.get(key, []))
        if not self._storage.set_json(key, documents):
            raise PersistenceError(key)

    def _load(self, key: str, record_type: Type[RecordT], seed: List[dict]) -> List[RecordT]:
        documents = self._storage.get_json(key)
        if documents is None:
            LOGGER.info("No stored %s found; writing %d seed records", key, len(seed))
            documents = seed
            if not self._storage.set_json(key, documents):
                raise PersistenceError(key)

        records: List[RecordT] = []
        unreadable: List[Any] = []
        for document in documents:
            try:
                records.append(record_type.model_validate(document))
            except ValidationError as exc:
                LOGGER.warning("Keeping unreadable %s record aside: %s", key, exc)
                unreadable.append(document)
        self._unreadable[key] = unreadable
        return records


def _revenue(incidents: List[Incident]) -> float:
    return float(sum(item.cost or 0 for item in incidents))
