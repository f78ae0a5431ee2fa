"""Domain models representing persisted state.

These are pure domain objects with no API input rules.
Django ORM models are in eventbooking/models.py (persistence layer).
"""

from dataclasses import dataclass
from datetime import datetime

from eventbooking.domain.value_objects import BookingId, Capacity, EventId, EventMode


@dataclass(frozen=True)
class Event:
    """Domain representation of an Event."""

    id: EventId
    slug: str
    title: str
    description: str
    overview: str
    venue: str
    location: str
    date: str
    time: str
    starts_at: datetime
    mode: EventMode
    audience: str
    organizer: str
    image_url: str
    tags: tuple[str, ...]
    agenda: tuple[str, ...]
    capacity: Capacity | None
    created_at: datetime


@dataclass(frozen=True)
class EventSummary:
    """Listing view of an Event."""

    id: EventId
    slug: str
    title: str
    image_url: str
    venue: str
    location: str
    date: str
    time: str
    starts_at: datetime
    mode: EventMode
    tags: tuple[str, ...]
    created_at: datetime


@dataclass(frozen=True)
class Booking:
    """Domain representation of a Booking."""

    id: BookingId
    event_id: EventId
    email: str
    created_at: datetime


@dataclass(frozen=True)
class ImageAttachment:
    """Binary image submitted with an event, as handed to the upload gateway."""

    name: str
    content_type: str
    size: int
    file: object


@dataclass(frozen=True)
class ValidatedEvent:
    """Event creation input that passed validation."""

    title: str
    description: str
    overview: str
    venue: str
    location: str
    date: str
    time: str
    starts_at: datetime
    mode: EventMode
    audience: str
    organizer: str
    tags: tuple[str, ...]
    agenda: tuple[str, ...]
    capacity: Capacity | None
    image: ImageAttachment


@dataclass(frozen=True)
class ValidatedBooking:
    """Booking input that passed validation. ``event_ref`` is an id or a slug."""

    event_ref: str
    email: str
