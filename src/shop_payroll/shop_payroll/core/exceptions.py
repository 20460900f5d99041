class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class AuthenticationError(DomainError):
    """Raised when login credentials are invalid."""


class NotFoundError(DomainError):
    """Raised when the targeted employee or entry does not exist."""


class DuplicateDateError(DomainError):
    """Raised when an entry for the same (employee, date) already exists and the merge policy is reject."""


class ConflictError(DomainError):
    """Raised when a concurrent write on the same (employee, date) won first.

    Callers are expected to re-read and retry.
    """


class MissingRuleError(DomainError):
    """Raised when no compensation rule exists for a position (configuration defect)."""


class StorageUnavailable(DomainError):
    """Raised when the persistence backend fails; eligible for caller-side retry."""
