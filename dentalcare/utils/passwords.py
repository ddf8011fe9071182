"""Salted password hashing for seed credentials."""

import hashlib
import secrets

HASH_ALGORITHM = "pbkdf2_sha256"
HASH_ITERATIONS = 120_000


def hash_password(password: str, salt: bytes | None = None) -> str:
    """Return ``algorithm$iterations$salt_hex$digest_hex`` for ``password``."""

    salt = salt or secrets.token_bytes(16)
    digest = hashlib.pbkdf2_hmac("sha256", password.encode(), salt, HASH_ITERATIONS)
    return f"{HASH_ALGORITHM}${HASH_ITERATIONS}${salt.hex()}${digest.hex()}"


def verify_password(password: str, encoded: str) -> bool:
    """Check ``password`` against an encoded hash in constant time."""

    try:
        algorithm, iterations, salt_hex, digest_hex = encoded.split("$")
        salt = bytes.fromhex(salt_hex)
        rounds = int(iterations)
    except ValueError:
        return False

    if algorithm != HASH_ALGORITHM:
        return False

    candidate = hashlib.pbkdf2_hmac("sha256", password.encode(), salt, rounds)
    return secrets.compare_digest(candidate.hex(), digest_hex)
