"""Identity store: seed users, authentication and the active session."""

from __future__ import annotations

import logging
import threading
from typing import Callable, Iterable, List, Optional

from pydantic import ValidationError

from dentalcare.schemas.user import PATIENT_ROLE, User
from dentalcare.services.errors import PersistenceError
from dentalcare.services.seed import seed_users
from dentalcare.services.storage import CURRENT_USER_KEY, USERS_KEY, KeyValueStorage
from dentalcare.utils.passwords import verify_password

LOGGER = logging.getLogger(__name__)


class IdentityStore:
    """Authenticates principals against the seed user list."""

    def __init__(
        self,
        storage: KeyValueStorage,
        *,
        seed_factory: Callable[[], List[dict]] = seed_users,
        seed_on_first_load: bool = True,
    ) -> None:
        self._storage = storage
        self._lock = threading.RLock()
        self._users = self._load_users(seed_factory, seed_on_first_load)
        self._current: Optional[User] = self._load_session()

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    def users(self) -> List[User]:
        """Return the seed users."""

        return list(self._users)

    def authenticate(self, email: str, password: str) -> Optional[User]:
        """Return the matching user and start a session, or None.

        A failed attempt leaves any existing session untouched.
        """

        for user in self._users:
            if user.email == email and verify_password(password, user.password_hash):
                with self._lock:
                    if not self._storage.set_json(CURRENT_USER_KEY, user.to_storage()):
                        raise PersistenceError(CURRENT_USER_KEY)
                    self._current = user
                LOGGER.info("User %s authenticated as %s", user.id, user.role)
                return user

        LOGGER.info("Authentication failed for email=%s", email)
        return None

    def end_session(self) -> None:
        """Clear the active session and its persisted record."""

        with self._lock:
            if not self._storage.delete(CURRENT_USER_KEY):
                raise PersistenceError(CURRENT_USER_KEY)
            if self._current is not None:
                LOGGER.info("Session ended for user %s", self._current.id)
            self._current = None

    def current_session(self) -> Optional[User]:
        """Return the authenticated user, if any."""

        return self._current

    def dangling_patient_links(self, patient_ids: Iterable[str]) -> List[User]:
        """Return Patient users whose patient record does not exist."""

        known = set(patient_ids)
        return [
            user
            for user in self._users
            if user.role == PATIENT_ROLE and user.patient_id not in known
        ]

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _load_users(
        self,
        seed_factory: Callable[[], List[dict]],
        seed_on_first_load: bool,
    ) -> List[User]:
        documents = self._storage.get_json(USERS_KEY)
        if documents is None:
            documents = seed_factory() if seed_on_first_load else []
            LOGGER.info("No stored users found; writing %d seed users", len(documents))
            self._write_users(documents)

        try:
            users = [User.model_validate(document) for document in documents]
        except ValidationError as exc:
            LOGGER.warning("Stored users invalid; restoring seed users: %s", exc)
            documents = seed_factory() if seed_on_first_load else []
            self._write_users(documents)
            users = [User.model_validate(document) for document in documents]
        emails = [user.email for user in users]
        if len(set(emails)) != len(emails):
            raise ValueError("Seed user emails must be unique")
        return users

    def _write_users(self, documents: List[dict]) -> None:
        if not self._storage.set_json(USERS_KEY, documents):
            raise PersistenceError(USERS_KEY)

    def _load_session(self) -> Optional[User]:
        document = self._storage.get_json(CURRENT_USER_KEY)
        if document is None:
            return None

        try:
            return User.model_validate(document)
        except ValidationError:
            LOGGER.warning("Stored session payload invalid; discarding")
            return None
