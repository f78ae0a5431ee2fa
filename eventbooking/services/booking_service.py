"""Booking service."""

from collections.abc import Callable, Mapping
from datetime import datetime
from typing import Any

import structlog
from django.utils import timezone

from eventbooking.domain import Booking
from eventbooking.domain.errors import ConflictError
from eventbooking.domain.validation import validate_booking_input
from eventbooking.services.event_service import EventService
from eventbooking.stores.interfaces import BookingLedger

logger = structlog.get_logger(__name__)


class BookingService:
    """Service for booking seats against events."""

    def __init__(
        self,
        events: EventService,
        ledger: BookingLedger,
        clock: Callable[[], datetime] = timezone.now,
    ) -> None:
        self._events = events
        self._ledger = ledger
        self._clock = clock

    def create_booking(self, data: Mapping[str, Any]) -> Booking:
        """Book ``data["email"]`` onto the event named by ``eventId`` or ``slug``.

        Raises:
            ValidationError: If the email or event reference is missing or malformed.
            EventNotFoundError: If the event does not exist.
            DuplicateBookingError: If the email already booked the event.
            CapacityExceededError: If the event is fully booked.
        """
        validated = validate_booking_input(data)
        event = self._events.get_event(validated.event_ref)

        try:
            booking = self._ledger.create(event.id, validated.email, created_at=self._clock())
        except ConflictError as exc:
            logger.info("booking_rejected", event_id=str(event.id), kind=exc.kind)
            raise

        logger.info("booking_created", event_id=str(event.id), booking_id=str(booking.id))
        return booking

    def count_for_event(self, ref: str) -> int:
        """Return how many bookings the event holds."""
        event = self._events.get_event(ref)
        return self._ledger.count_for_event(event.id)
