"""Request dependencies: injected stores and role checks."""

from typing import Any, Dict, Mapping

from fastapi import Depends, HTTPException, Request, status
from pydantic import ValidationError
from pydantic.alias_generators import to_snake

from dentalcare.schemas.user import ADMIN_ROLE, PATIENT_ROLE, User
from dentalcare.services.clinic import ClinicStore
from dentalcare.services.identity import IdentityStore

INVALID_CREDENTIALS = "Invalid email or password"


def get_identity_store(request: Request) -> IdentityStore:
    """Return the identity store attached to the application."""

    return request.app.state.identity_store


def get_clinic_store(request: Request) -> ClinicStore:
    """Return the clinical data store attached to the application."""

    return request.app.state.clinic_store


def require_session(identity: IdentityStore = Depends(get_identity_store)) -> User:
    user = identity.current_session()
    if user is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Not authenticated")
    return user


def require_admin(user: User = Depends(require_session)) -> User:
    if user.role != ADMIN_ROLE:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Admin access required")
    return user


def require_patient(user: User = Depends(require_session)) -> User:
    if user.role != PATIENT_ROLE:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Patient access required")
    return user


def normalize_form(payload: Mapping[str, Any]) -> Dict[str, Any]:
    """Convert camelCase form keys to field names; empty strings become None."""

    return {to_snake(key): None if value == "" else value for key, value in payload.items()}


def reject_invalid(errors: Dict[str, str]) -> None:
    """Raise a 422 carrying the per-field messages when any are present."""

    if errors:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail={"errors": errors},
        )


def not_found(kind: str) -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"{kind} not found")


def validation_failed(exc: ValidationError) -> HTTPException:
    """Translate a model validation error into the per-field 422 shape."""

    errors = {
        ".".join(str(part) for part in error["loc"]) or "__root__": error["msg"]
        for error in exc.errors()
    }
    return HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail={"errors": errors})
