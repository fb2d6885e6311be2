"""Application error taxonomy shared by repositories, workflows and routes."""

from typing import Any


class PoseidonError(Exception):
    """Base class for recoverable application errors; carries a user-facing message."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class ValidationFailed(PoseidonError):
    """Raised when submitted form data breaks one or more field rules."""

    def __init__(self, errors: list[Any], record: Any = None) -> None:
        self.errors = errors
        self.record = record
        super().__init__(f"{len(errors)} field(s) failed validation")


class RecordNotFound(PoseidonError):
    """Raised when a record id does not exist (or was deleted concurrently)."""

    def __init__(self, kind: str, record_id: int) -> None:
        self.kind = kind
        self.record_id = record_id
        super().__init__(f"No such {kind} with id {record_id}.")


class RecordConflict(PoseidonError):
    """Raised when a write would break a uniqueness rule."""


class DuplicateUsername(RecordConflict):
    """Raised when a username is already taken by another user."""

    def __init__(self, username: str) -> None:
        self.username = username
        super().__init__(f"Username {username} already exists.")


class InvalidCredentials(PoseidonError):
    """Raised for an unknown username or a wrong password (deliberately indistinguishable)."""

    def __init__(self) -> None:
        super().__init__("Invalid username or password.")


class PersistenceFailure(PoseidonError):
    """Raised by repositories in place of any database error."""

    def __init__(self, message: str, cause: Exception | None = None) -> None:
        self.cause = cause
        super().__init__(message)
