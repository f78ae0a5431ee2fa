"""Django ORM implementation of the BookingLedger.

Duplicate bookings are prevented by the (event, email) unique constraint,
so two racing requests for the same pair yield one row and one
DuplicateBookingError. The insert happens first, then capacity is enforced
exactly through a conditional UPDATE on Event.booking_count in the same
transaction; a full event rolls the insert back.
"""

import uuid
from datetime import datetime

import structlog
from django.db import DatabaseError, IntegrityError, transaction
from django.db.models import F, Q

from eventbooking import models
from eventbooking.domain import Booking, BookingId, EventId
from eventbooking.domain.errors import (
    CapacityExceededError,
    DuplicateBookingError,
    EventNotFoundError,
    InternalError,
)
from eventbooking.stores.interfaces import BookingLedger

logger = structlog.get_logger(__name__)


class DjangoBookingLedger(BookingLedger):
    """Relational booking ledger using Django ORM."""

    def create(self, event_id: EventId, email: str, created_at: datetime) -> Booking:
        try:
            with transaction.atomic():
                row = self._book(event_id, email, created_at)
        except DatabaseError as exc:
            logger.exception("store_error", operation="create_booking")
            raise InternalError(str(exc)) from exc
        return to_booking(row)

    def count_for_event(self, event_id: EventId) -> int:
        try:
            return models.Booking.objects.filter(event_id=event_id.value).count()
        except DatabaseError as exc:
            logger.exception("store_error", operation="count_bookings")
            raise InternalError(str(exc)) from exc

    def _already_booked(self, event_id: EventId, email: str) -> bool:
        return models.Booking.objects.filter(event_id=event_id.value, email=email).exists()

    def _book(self, event_id: EventId, email: str, created_at: datetime) -> models.Booking:
        events = models.Event.objects.filter(pk=event_id.value)
        if not events.exists():
            raise EventNotFoundError(str(event_id))

        if self._already_booked(event_id, email):
            raise DuplicateBookingError(str(event_id), email)

        # Insert before claiming a seat so a racing duplicate is reported as
        # such even when it races for the last seat.
        try:
            with transaction.atomic():
                row = models.Booking.objects.create(
                    id=uuid.uuid4(),
                    event_id=event_id.value,
                    email=email,
                    created_at=created_at,
                )
        except IntegrityError:
            raise DuplicateBookingError(str(event_id), email) from None

        admitted = events.filter(
            Q(capacity__isnull=True) | Q(booking_count__lt=F("capacity"))
        ).update(booking_count=F("booking_count") + 1)
        if not admitted:
            # Raising out of the enclosing atomic block discards the insert.
            raise CapacityExceededError(str(event_id))
        return row


def to_booking(row: models.Booking) -> Booking:
    return Booking(
        id=BookingId(row.id),
        event_id=EventId(row.event_id),
        email=row.email,
        created_at=row.created_at,
    )
