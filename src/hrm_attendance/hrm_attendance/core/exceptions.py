class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""


class RecordNotFoundError(DomainError):
    """Raised when an attendance record or request does not exist."""


class StateTransitionError(DomainError):
    """Raised when a clock/break action is not allowed in the record's current state."""
