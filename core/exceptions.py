"""
Domain exceptions shared by all apps

Each exception carries a stable error code in ``extensions`` so the GraphQL
layer can expose it to clients and map it to an HTTP status code.
"""
from typing import Any, Dict, Optional


class SchedulingError(Exception):
    """Base class for every error returned to API callers"""
    code = "SCHEDULING_ERROR"

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        self.extensions = {"code": self.code}
        if self.details:
            self.extensions["details"] = self.details
        super().__init__(message)


class NotFoundError(SchedulingError):
    """Referenced teacher, student or booking does not exist"""
    code = "NOT_FOUND"


class FormatError(SchedulingError):
    """Malformed time string, date or identifier"""
    code = "BAD_FORMAT"


class AvailabilityError(SchedulingError):
    """Requested window is outside the teacher's permitted availability"""
    code = "UNAVAILABLE"


class ConflictError(SchedulingError):
    """Overlap with an existing scheduled booking or a duplicate record"""
    code = "CONFLICT"


class DailyLimitError(ConflictError, AvailabilityError):
    """Part-time teacher already has a scheduled booking on that date"""
    code = "CONFLICT"


class BookingStateError(SchedulingError):
    """Booking is completed or cancelled and can no longer be rescheduled"""
    code = "INVALID_STATE"


class AuthenticationError(SchedulingError):
    """Missing, expired or revoked credentials"""
    code = "UNAUTHENTICATED"


class PermissionDeniedError(SchedulingError):
    """Authenticated user lacks the required rights"""
    code = "FORBIDDEN"
