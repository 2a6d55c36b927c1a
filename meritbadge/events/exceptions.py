"""Exceptions raised by the event services."""

class EventServiceError(Exception):
    """Base exception for event service errors."""
    pass

class FilterValidationError(EventServiceError, ValueError):
    """Raised when filter input is malformed or contradictory."""
    pass

class UnauthorizedError(EventServiceError):
    """Raised when an operation needs a signed-in user and none is present."""
    pass
