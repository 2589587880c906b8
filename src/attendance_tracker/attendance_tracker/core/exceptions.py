class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class AuthenticationError(DomainError):
    """Raised when credentials or bearer tokens are missing, invalid or expired."""


class ConflictError(DomainError):
    """Raised when a unique resource (e.g. a registered email) already exists."""


class NotFoundError(DomainError):
    """Raised when the target of an operation does not exist."""


class ConfigurationError(Exception):
    """Raised at startup when timetable or rotation configuration is inconsistent."""
