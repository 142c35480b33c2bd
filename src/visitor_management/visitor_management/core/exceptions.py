class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or a required field is missing."""


class NotFoundError(DomainError):
    """Raised when the requested record does not exist."""
