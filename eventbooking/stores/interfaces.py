"""Store interfaces (repository pattern).

Stores must be swappable and return domain models.
"""

from abc import ABC, abstractmethod
from datetime import datetime

from eventbooking.domain import Booking, Event, EventId, EventSummary, ValidatedEvent


class EventStore(ABC):
    """Interface for event persistence operations."""

    @abstractmethod
    def create(self, event: ValidatedEvent, image_url: str, created_at: datetime) -> Event:
        """Persist a new event, assigning its id and a unique slug.

        Raises:
            StoreConflictError: If the assigned id already exists.
            InternalError: If the write fails for any other reason.
        """
        ...

    @abstractmethod
    def get_by_id(self, event_id: EventId) -> Event | None:
        """Return an event by ID, or None if not found."""
        ...

    @abstractmethod
    def get_by_slug(self, slug: str) -> Event | None:
        """Return an event by slug, or None if not found."""
        ...

    @abstractmethod
    def list_summaries(self) -> list[EventSummary]:
        """Return all events ordered by created_at descending."""
        ...


class BookingLedger(ABC):
    """Interface for booking persistence operations."""

    @abstractmethod
    def create(self, event_id: EventId, email: str, created_at: datetime) -> Booking:
        """Record a booking for an event.

        The duplicate check and the insert are atomic for a given
        (event_id, email) pair.

        Raises:
            EventNotFoundError: If the event does not exist.
            DuplicateBookingError: If the email already booked the event.
            CapacityExceededError: If the event is fully booked.
        """
        ...

    @abstractmethod
    def count_for_event(self, event_id: EventId) -> int:
        """Return the number of bookings held against an event."""
        ...
