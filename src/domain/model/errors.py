"""Domain-level exceptions.

Services raise these errors to express business rule violations.
Route handlers catch them and map to appropriate HTTP status codes.
Lookups never raise for a missing record; they return None instead.
"""

from domain.model.registration import FieldError


class DomainError(Exception):
    """Base class for all domain errors."""


class DuplicateError(DomainError):
    """Entity with the same unique key already exists."""


class PermissionDeniedError(DomainError):
    """Caller lacks permission for the requested action."""


class ValidationError(DomainError):
    """Input violates one or more validation rules.

    ``errors`` keeps every field failure in the order the fields were checked,
    so callers can report them all at once.
    """

    def __init__(self, message: str = "Validation failed", errors: list[FieldError] | None = None):
        self.errors = list(errors or [])
        super().__init__(message)


class DuplicateEmailError(DuplicateError):
    """A non-deleted user already holds this email."""

    def __init__(self, email: str):
        self.email = email
        super().__init__("User with this email already exists")


class BannedAccountError(PermissionDeniedError):
    """Credentials belong to a banned account."""

    def __init__(self, user_id: str):
        self.user_id = user_id
        super().__init__("User account is banned")


class StorageError(DomainError):
    """The persistence layer failed (unavailable, timeout, driver error)."""
