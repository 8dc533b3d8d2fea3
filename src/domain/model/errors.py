"""Domain-level exceptions.

Services raise these errors to express business rule violations.
Route handlers catch them and map to appropriate HTTP status codes.
"""


class DomainError(Exception):
    """Base class for all domain errors."""


class NotFoundError(DomainError):
    """Requested entity does not exist."""

    def __init__(self, message: str = "User not found"):
        super().__init__(message)


class DuplicateError(DomainError):
    """Entity with the same unique key already exists."""

    def __init__(self, message: str = "User already exists"):
        super().__init__(message)


class InvalidCredentialsError(DomainError):
    """Supplied password does not match the stored hash."""

    def __init__(self, message: str = "Invalid password"):
        super().__init__(message)


class StorageError(Exception):
    """Persistence backend failed (connection loss, write error, ...).

    Deliberately not a DomainError: callers retry or report it, they do not
    treat it as a business outcome.
    """
