"""Domain error codes for the eventbooking module."""

from dataclasses import dataclass
from enum import Enum


class ErrorCode(Enum):
    """Domain error codes."""

    VALIDATION_FAILED = "VALIDATION_FAILED"
    INVALID_EVENT_ID = "INVALID_EVENT_ID"
    EVENT_NOT_FOUND = "EVENT_NOT_FOUND"
    DUPLICATE_BOOKING = "DUPLICATE_BOOKING"
    CAPACITY_EXCEEDED = "CAPACITY_EXCEEDED"
    UPLOAD_FAILED = "UPLOAD_FAILED"
    INTERNAL_ERROR = "INTERNAL_ERROR"


@dataclass(eq=False)
class DomainError(Exception):
    """Base domain error with code and user-safe message."""

    code: ErrorCode
    message: str

    def __str__(self) -> str:
        return f"{self.code.value}: {self.message}"


class ValidationError(DomainError):
    """Raised when client input breaks a validation rule."""

    def __init__(self, field: str, reason: str) -> None:
        super().__init__(
            code=ErrorCode.VALIDATION_FAILED,
            message=f"{field}: {reason}",
        )
        self.field = field
        self.reason = reason


class InvalidEventIdError(DomainError):
    """Raised when an event ID is invalid."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.INVALID_EVENT_ID,
            message="Invalid event ID format",
        )


class EventNotFoundError(DomainError):
    """Raised when an event is not found."""

    def __init__(self, event_ref: str) -> None:
        super().__init__(
            code=ErrorCode.EVENT_NOT_FOUND,
            message="Event not found",
        )
        self.event_ref = event_ref


class ConflictError(DomainError):
    """Raised when a booking collides with existing state."""

    kind = ""


class DuplicateBookingError(ConflictError):
    """Raised when the email already holds a booking for the event."""

    kind = "duplicate"

    def __init__(self, event_id: str, email: str) -> None:
        super().__init__(
            code=ErrorCode.DUPLICATE_BOOKING,
            message="This email is already booked for the event",
        )
        self.event_id = event_id
        self.email = email


class CapacityExceededError(ConflictError):
    """Raised when the event has no capacity left."""

    kind = "capacity_exceeded"

    def __init__(self, event_id: str) -> None:
        super().__init__(
            code=ErrorCode.CAPACITY_EXCEEDED,
            message="The event is fully booked",
        )
        self.event_id = event_id


class UploadError(DomainError):
    """Raised when the image blob store fails or refuses an upload.

    ``kind`` is ``transport`` for network failures and timeouts, ``rejected``
    when the blob store refused the content.
    """

    def __init__(self, kind: str, detail: str = "") -> None:
        super().__init__(
            code=ErrorCode.UPLOAD_FAILED,
            message="Image upload failed",
        )
        self.kind = kind
        self.detail = detail


class InternalError(DomainError):
    """Raised for persistence failures that are not otherwise classified."""

    def __init__(self, detail: str = "") -> None:
        super().__init__(
            code=ErrorCode.INTERNAL_ERROR,
            message="Internal server error",
        )
        self.detail = detail


class StoreConflictError(InternalError):
    """Raised when a freshly assigned identifier already exists."""
