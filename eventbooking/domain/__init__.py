from eventbooking.domain.models import (
    Booking,
    Event,
    EventSummary,
    ImageAttachment,
    ValidatedBooking,
    ValidatedEvent,
)
from eventbooking.domain.value_objects import BookingId, Capacity, EventId, EventMode

__all__ = [
    "Event",
    "EventSummary",
    "Booking",
    "ImageAttachment",
    "ValidatedEvent",
    "ValidatedBooking",
    "EventId",
    "BookingId",
    "EventMode",
    "Capacity",
]
