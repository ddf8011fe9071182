"""Identity store: authentication and persisted sessions."""

import threading

import pytest

from dentalcare.services.identity import IdentityStore
from dentalcare.services.seed import SEED_CREDENTIALS
from dentalcare.services.storage import CURRENT_USER_KEY, USERS_KEY


@pytest.mark.parametrize("credential", SEED_CREDENTIALS, ids=lambda c: c["email"])
def test_every_seed_credential_authenticates(identity_store: IdentityStore, credential) -> None:
    user = identity_store.authenticate(credential["email"], credential["password"])

    assert user is not None
    assert user.id == credential["id"]
    assert identity_store.current_session() == user


@pytest.mark.parametrize(
    "email,password",
    [
        ("admin@entnt.in", "wrong"),
        ("ADMIN@entnt.in", "admin123"),
        ("nobody@entnt.in", "admin123"),
        ("", ""),
    ],
)
def test_failed_login_keeps_existing_session(identity_store: IdentityStore, email, password) -> None:
    existing = identity_store.authenticate("jane@gmail.com", "patient123")

    assert identity_store.authenticate(email, password) is None
    assert identity_store.current_session() == existing


def test_passwords_are_not_stored_in_plaintext(identity_store: IdentityStore, storage) -> None:
    documents = storage.get_json(USERS_KEY)

    assert all("password" not in document for document in documents)
    assert all(document["passwordHash"].startswith("pbkdf2_sha256$") for document in documents)


def test_session_persists_across_instances(identity_store: IdentityStore, storage) -> None:
    identity_store.authenticate("admin@entnt.in", "admin123")

    reloaded = IdentityStore(storage)

    assert reloaded.current_session() is not None
    assert reloaded.current_session().email == "admin@entnt.in"


def test_end_session_clears_persisted_record(identity_store: IdentityStore, storage) -> None:
    identity_store.authenticate("admin@entnt.in", "admin123")

    identity_store.end_session()

    assert identity_store.current_session() is None
    assert storage.get_json(CURRENT_USER_KEY) is None
    assert IdentityStore(storage).current_session() is None


def test_patient_users_link_to_seed_patients(identity_store: IdentityStore, seeded_store) -> None:
    patient_ids = [patient.id for patient in seeded_store.patients()]

    assert identity_store.dangling_patient_links(patient_ids) == []
    assert len(identity_store.dangling_patient_links(["p1"])) == 6


def test_corrupt_session_payload_is_discarded(identity_store: IdentityStore, storage) -> None:
    storage.set_raw(CURRENT_USER_KEY, "{not json")

    assert IdentityStore(storage).current_session() is None


def test_duplicate_emails_are_rejected(storage) -> None:
    def duplicate_seed():
        return [
            {"id": "1", "role": "Admin", "email": "a@b.co", "passwordHash": "x"},
            {"id": "2", "role": "Admin", "email": "a@b.co", "passwordHash": "y"},
        ]

    with pytest.raises(ValueError):
        IdentityStore(storage, seed_factory=duplicate_seed)


def test_invalid_stored_users_are_replaced_by_seed(storage) -> None:
    storage.set_json(USERS_KEY, [{"id": "1", "role": "Dentist", "email": "x@y.co"}])

    store = IdentityStore(storage)

    assert len(store.users()) == len(SEED_CREDENTIALS)
    assert store.authenticate("admin@entnt.in", "admin123") is not None
    assert len(storage.get_json(USERS_KEY)) == len(SEED_CREDENTIALS)


def test_concurrent_logins_leave_one_consistent_session(identity_store: IdentityStore, storage) -> None:
    credentials = [("admin@entnt.in", "admin123"), ("jane@gmail.com", "patient123")]
    workers = [
        threading.Thread(target=identity_store.authenticate, args=credential)
        for credential in credentials * 2
    ]
    for worker in workers:
        worker.start()
    for worker in workers:
        worker.join()

    current = identity_store.current_session()
    assert current is not None
    assert storage.get_json(CURRENT_USER_KEY)["id"] == current.id
