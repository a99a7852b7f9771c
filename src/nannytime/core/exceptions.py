class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class AuthenticationError(DomainError):
    """Raised when login credentials are invalid."""


class NotAuthenticatedError(DomainError):
    """Raised when a mutating call is attempted without a session."""


class NotFoundError(DomainError):
    """Raised when an operation references a shift/profile that does not exist."""


class AlreadyClosedError(DomainError):
    """Raised when clocking out of a shift that already has an end time."""


class StoreError(DomainError):
    """Raised on transport/auth failures of the backing store."""
