class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class NotFoundError(DomainError):
    """Raised when a task or request row does not exist (or is not visible to the actor)."""


class ConflictError(DomainError):
    """Raised when a request has already left the pending state."""


class AuthenticationError(DomainError):
    """Raised when no actor is attached to the request."""


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""


class StoreError(Exception):
    """Raised when the backing store fails; never shown to callers verbatim."""
