"""Per-field form validation.

Each validator returns a mapping of field name to message. An empty mapping
means the form may be submitted; validators never raise.
"""

from __future__ import annotations

import math
import re
from typing import Any, Dict, Mapping

from dentalcare.schemas.incident import INCIDENT_STATUSES

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
NON_DIGITS = re.compile(r"\D")
CONTACT_DIGITS = 10


def _blank(value: Any) -> bool:
    return value is None or not str(value).strip()


def _check_contact(form: Mapping[str, Any], errors: Dict[str, str]) -> None:
    contact = form.get("contact")
    if _blank(contact):
        errors["contact"] = "Contact number is required"
    elif len(NON_DIGITS.sub("", str(contact))) != CONTACT_DIGITS:
        errors["contact"] = "Please enter a valid 10-digit phone number"


def _check_email(form: Mapping[str, Any], errors: Dict[str, str]) -> None:
    email = form.get("email")
    if not _blank(email) and not EMAIL_PATTERN.match(str(email)):
        errors["email"] = "Please enter a valid email address"


def validate_patient_form(form: Mapping[str, Any]) -> Dict[str, str]:
    """Validate the admin patient registration / edit form."""

    errors: Dict[str, str] = {}
    if _blank(form.get("name")):
        errors["name"] = "Name is required"
    if _blank(form.get("dob")):
        errors["dob"] = "Date of birth is required"
    _check_contact(form, errors)
    _check_email(form, errors)
    if _blank(form.get("health_info")):
        errors["health_info"] = "Health information is required"
    return errors


def validate_profile_form(form: Mapping[str, Any]) -> Dict[str, str]:
    """Validate a patient's edit of their own profile."""

    errors: Dict[str, str] = {}
    if _blank(form.get("name")):
        errors["name"] = "Name is required"
    _check_contact(form, errors)
    _check_email(form, errors)
    if _blank(form.get("health_info")):
        errors["health_info"] = "Health information is required"
    return errors


def validate_incident_form(form: Mapping[str, Any]) -> Dict[str, str]:
    """Validate the appointment scheduling form."""

    errors: Dict[str, str] = {}
    if _blank(form.get("patient_id")):
        errors["patient_id"] = "Patient is required"
    if _blank(form.get("title")):
        errors["title"] = "Title is required"
    if _blank(form.get("description")):
        errors["description"] = "Description is required"
    if _blank(form.get("appointment_date")):
        errors["appointment_date"] = "Appointment date is required"

    cost = form.get("cost")
    if not _blank(cost):
        try:
            amount = float(cost)
        except (TypeError, ValueError):
            amount = math.nan
        if not math.isfinite(amount):
            errors["cost"] = "Cost must be a valid number"
        elif amount < 0:
            errors["cost"] = "Cost cannot be negative"

    if "status" in form and form["status"] not in INCIDENT_STATUSES:
        errors["status"] = "Unknown status"
    return errors
