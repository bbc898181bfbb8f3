from __future__ import annotations

from typing import Any, Optional


class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""


class ForbiddenError(AuthorizationError):
    """Identity or role check failed for a self-service action."""


class NotFoundError(DomainError):
    """Unknown teacher, holiday or ledger record."""


class AlreadyMarkedError(DomainError):
    """Attendance for the day already exists; carries the existing record."""

    def __init__(self, message: str, record: Any = None):
        super().__init__(message)
        self.record = record


class WindowClosedError(ValidationError):
    """Self-mark submitted after the cutoff for the requested status."""


class LocationRequiredError(ValidationError):
    pass


class LocationOutOfRangeError(ValidationError):
    def __init__(self, message: str, distance_km: Optional[float] = None):
        super().__init__(message)
        self.distance_km = distance_km


class InvalidTimeFormatError(ValidationError):
    pass


class LeaveLimitExceededError(ValidationError):
    pass


class DuplicateKeyError(DomainError):
    """Storage rejected an insert on the (teacher, day) unique key.

    Writers recover from it locally; it is never returned to API callers.
    """


class NotificationError(DomainError):
    """A single notification could not be delivered."""
