"""Durable key/value storage for JSON documents.

Each collection (users, active session, patients, incidents) lives under its
own key as one JSON document. Writes report success explicitly so callers can
keep in-memory state consistent with what was actually persisted.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Optional

import redis
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from dentalcare.models.record import StoredRecord
from dentalcare.services.cache import cache_delete, cache_get, cache_set, create_redis_client
from dentalcare.services.db import create_session_factory, get_session
from dentalcare.utils.config import Settings

LOGGER = logging.getLogger(__name__)

USERS_KEY = "users"
CURRENT_USER_KEY = "current_user"
PATIENTS_KEY = "patients"
INCIDENTS_KEY = "incidents"


class KeyValueStorage:
    """Base interface for JSON document storage."""

    def __init__(self, prefix: str = "") -> None:
        self.prefix = prefix

    def _full_key(self, key: str) -> str:
        return f"{self.prefix}{key}"

    def get_raw(self, key: str) -> Optional[str]:
        raise NotImplementedError

    def set_raw(self, key: str, value: str) -> bool:
        raise NotImplementedError

    def delete(self, key: str) -> bool:
        raise NotImplementedError

    def get_json(self, key: str) -> Optional[Any]:
        """Return the decoded document for ``key`` or None when absent.

        A payload that is not valid JSON is logged and treated as absent.
        """

        raw_value = self.get_raw(key)
        if raw_value is None:
            return None

        try:
            return json.loads(raw_value)
        except json.JSONDecodeError:
            LOGGER.warning("Stored payload for key=%s is invalid JSON; ignoring", key)
            return None

    def set_json(self, key: str, value: Any) -> bool:
        """Encode and write ``value``; return False when the write failed."""

        return self.set_raw(key, json.dumps(value))


class SqlKeyValueStorage(KeyValueStorage):
    """Stores documents in a single SQLAlchemy-managed table."""

    def __init__(self, session_factory: sessionmaker, prefix: str = "") -> None:
        super().__init__(prefix)
        self._session_factory = session_factory

    def get_raw(self, key: str) -> Optional[str]:
        with get_session(self._session_factory) as session:
            return session.scalar(
                select(StoredRecord.value).where(StoredRecord.key == self._full_key(key))
            )

    def set_raw(self, key: str, value: str) -> bool:
        try:
            with get_session(self._session_factory) as session:
                record = session.get(StoredRecord, self._full_key(key))
                if record is None:
                    session.add(StoredRecord(key=self._full_key(key), value=value))
                else:
                    record.value = value
        except SQLAlchemyError as exc:
            LOGGER.error("Failed to persist key=%s: %s", key, exc)
            return False
        return True

    def delete(self, key: str) -> bool:
        try:
            with get_session(self._session_factory) as session:
                record = session.get(StoredRecord, self._full_key(key))
                if record is not None:
                    session.delete(record)
        except SQLAlchemyError as exc:
            LOGGER.error("Failed to delete key=%s: %s", key, exc)
            return False
        return True


class RedisKeyValueStorage(KeyValueStorage):
    """Stores documents as plain Redis strings without expiry."""

    def __init__(self, client: redis.Redis, prefix: str = "") -> None:
        super().__init__(prefix)
        self._client = client

    def get_raw(self, key: str) -> Optional[str]:
        return cache_get(self._client, self._full_key(key))

    def set_raw(self, key: str, value: str) -> bool:
        try:
            return cache_set(self._client, self._full_key(key), value)
        except redis.RedisError as exc:
            LOGGER.error("Failed to persist key=%s: %s", key, exc)
            return False

    def delete(self, key: str) -> bool:
        try:
            cache_delete(self._client, self._full_key(key))
        except redis.RedisError as exc:
            LOGGER.error("Failed to delete key=%s: %s", key, exc)
            return False
        return True


def build_storage(settings: Settings) -> KeyValueStorage:
    """Construct the storage backend selected in settings."""

    LOGGER.info(
        "Using %s storage backend with prefix=%s",
        settings.storage_backend,
        settings.storage_prefix,
    )

    if settings.storage_backend == "redis":
        return RedisKeyValueStorage(
            create_redis_client(settings.redis_url),
            prefix=settings.storage_prefix,
        )

    return SqlKeyValueStorage(
        create_session_factory(settings.database_url),
        prefix=settings.storage_prefix,
    )
