"""Exceptions raised by the dentalcare stores."""


class ClinicError(Exception):
    """Base class for store errors."""


class PersistenceError(ClinicError):
    """Raised when a collection could not be written to storage."""

    def __init__(self, key: str) -> None:
        super().__init__(f"Failed to persist {key!r}")
        self.key = key
