class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class DuplicatePeriodError(DomainError):
    """Raised when a fee was already generated for the requested month/year."""


class FutureDateError(DomainError):
    """Raised when attendance is recorded for a date after today."""


class AuthenticationError(DomainError):
    """Raised when login credentials are invalid."""


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""


class RemoteOperationError(DomainError):
    """Raised when the backing store fails during a read or write."""
