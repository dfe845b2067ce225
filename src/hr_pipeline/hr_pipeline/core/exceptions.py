class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when request input is invalid; nothing is processed."""


class NotFoundError(ValidationError):
    """Raised when a referenced record does not exist."""


class RowError(DomainError):
    """Raised when a single import row cannot be mapped.

    Only the import runner catches it; the message ends up in the job's error list.
    """
