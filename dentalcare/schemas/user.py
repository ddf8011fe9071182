"""User and session payload models."""

from __future__ import annotations

from typing import Literal, Optional

from pydantic import Field, model_validator

from dentalcare.schemas.base import CamelModel

ADMIN_ROLE = "Admin"
PATIENT_ROLE = "Patient"

Role = Literal["Admin", "Patient"]


class User(CamelModel):
    """An account from the fixed seed list."""

    id: str
    role: Role
    email: str
    password_hash: str = Field(repr=False)
    patient_id: Optional[str] = None
    name: Optional[str] = None

    @model_validator(mode="after")
    def _patient_link_matches_role(self) -> "User":
        if self.role == PATIENT_ROLE and not self.patient_id:
            raise ValueError("Patient users must reference a patient record")
        if self.role == ADMIN_ROLE and self.patient_id:
            raise ValueError("Admin users cannot reference a patient record")
        return self

    @property
    def is_admin(self) -> bool:
        return self.role == ADMIN_ROLE


class UserPublic(CamelModel):
    """User representation safe to return to clients."""

    id: str
    role: Role
    email: str
    patient_id: Optional[str] = None
    name: Optional[str] = None

    @classmethod
    def from_user(cls, user: User) -> "UserPublic":
        return cls.model_validate(user.model_dump(exclude={"password_hash"}))


class LoginRequest(CamelModel):
    """Credentials submitted to the login endpoint."""

    email: str
    password: str
