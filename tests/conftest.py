"""Shared fixtures: isolated storage and stores per test."""

from datetime import datetime, timedelta, timezone
from typing import Callable, Iterator

import pytest
from fastapi.testclient import TestClient

from dentalcare.main import create_app
from dentalcare.services.clinic import ClinicStore
from dentalcare.services.db import create_session_factory
from dentalcare.services.identity import IdentityStore
from dentalcare.services.storage import SqlKeyValueStorage
from dentalcare.utils.config import Settings

TEST_TIMEZONE = "UTC"


class TickingClock:
    """Clock that advances one second per call."""

    def __init__(self, start: datetime) -> None:
        self.current = start

    def __call__(self) -> datetime:
        self.current = self.current + timedelta(seconds=1)
        return self.current


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        database_url=f"sqlite+pysqlite:///{tmp_path / 'dentalcare.db'}",
        storage_backend="sql",
        clinic_timezone=TEST_TIMEZONE,
    )


@pytest.fixture
def storage(settings: Settings) -> SqlKeyValueStorage:
    return SqlKeyValueStorage(
        create_session_factory(settings.database_url),
        prefix=settings.storage_prefix,
    )


@pytest.fixture
def clock() -> TickingClock:
    return TickingClock(datetime(2026, 1, 1, 9, 0, tzinfo=timezone.utc))


@pytest.fixture
def make_store(storage: SqlKeyValueStorage, clock: TickingClock) -> Callable[..., ClinicStore]:
    def _make(seed: bool = False) -> ClinicStore:
        return ClinicStore(
            storage,
            clinic_timezone=TEST_TIMEZONE,
            clock=clock,
            seed_on_first_load=seed,
        )

    return _make


@pytest.fixture
def store(make_store) -> ClinicStore:
    """An empty clinic store."""

    return make_store(seed=False)


@pytest.fixture
def seeded_store(make_store) -> ClinicStore:
    return make_store(seed=True)


@pytest.fixture
def identity_store(storage: SqlKeyValueStorage) -> IdentityStore:
    return IdentityStore(storage)


@pytest.fixture
def client(settings: Settings, identity_store: IdentityStore, seeded_store: ClinicStore) -> Iterator[TestClient]:
    app = create_app(settings, identity_store=identity_store, clinic_store=seeded_store)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def admin_client(client: TestClient) -> TestClient:
    response = client.post("/auth/login", json={"email": "admin@entnt.in", "password": "admin123"})
    assert response.status_code == 200
    return client


@pytest.fixture
def patient_client(client: TestClient) -> TestClient:
    response = client.post("/auth/login", json={"email": "jane@gmail.com", "password": "patient123"})
    assert response.status_code == 200
    return client


def patient_form(**overrides) -> dict:
    form = {
        "name": "Asha Rao",
        "dob": "1991-04-02",
        "contact": "98765 43210",
        "healthInfo": "No known allergies",
        "email": "asha@example.com",
    }
    form.update(overrides)
    return form
