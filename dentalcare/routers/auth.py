"""Login, logout and session endpoints."""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, status

from dentalcare.routers.deps import INVALID_CREDENTIALS, get_identity_store
from dentalcare.schemas.user import LoginRequest, UserPublic
from dentalcare.services.identity import IdentityStore

router = APIRouter()


@router.post("/login", response_model=UserPublic)
def login(
    payload: LoginRequest,
    identity: IdentityStore = Depends(get_identity_store),
) -> UserPublic:
    """Authenticate with email and password and start a session."""

    user = identity.authenticate(payload.email, payload.password)
    if user is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=INVALID_CREDENTIALS)
    return UserPublic.from_user(user)


@router.post("/logout")
def logout(identity: IdentityStore = Depends(get_identity_store)) -> dict[str, str]:
    """End the active session."""

    identity.end_session()
    return {"status": "logged_out"}


@router.get("/session", response_model=Optional[UserPublic])
def current_session(identity: IdentityStore = Depends(get_identity_store)) -> Optional[UserPublic]:
    """Return the authenticated user, or null."""

    user = identity.current_session()
    return UserPublic.from_user(user) if user else None
