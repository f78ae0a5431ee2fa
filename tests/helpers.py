"""Fakes and payload builders shared by the test modules."""

import uuid
from datetime import datetime, timezone

from django.core.files.uploadedfile import SimpleUploadedFile

from eventbooking.domain import Booking, BookingId, Event, EventId, EventSummary
from eventbooking.domain.errors import (
    CapacityExceededError,
    DuplicateBookingError,
    EventNotFoundError,
    UploadError,
)
from eventbooking.domain.value_objects import slugify_title, suffixed_slug
from eventbooking.gateways.interfaces import ImageUploadGateway
from eventbooking.stores.interfaces import BookingLedger, EventStore

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 32

NOW = datetime(2026, 10, 19, 12, 0, tzinfo=timezone.utc)


def png_upload(name: str = "photo.png") -> SimpleUploadedFile:
    return SimpleUploadedFile(name, PNG_BYTES, content_type="image/png")


def event_fields(**overrides) -> dict:
    fields = {
        "title": "Demo",
        "description": "A description",
        "overview": "Short overview",
        "venue": "Venue 1",
        "location": "Location 1",
        "date": "2099-12-01",
        "time": "12:00",
        "mode": "offline",
        "audience": "Developers",
        "organizer": "Org",
        "tags": '["tag1", "tag2"]',
        "agenda": '["Item 1", "Item 2"]',
    }
    fields.update(overrides)
    return fields


class InMemoryEventStore(EventStore):
    def __init__(self) -> None:
        self.events: dict[EventId, Event] = {}

    def create(self, event, image_url, created_at) -> Event:
        base = slugify_title(event.title)
        taken = {e.slug for e in self.events.values()}
        n = 1
        while suffixed_slug(base, n) in taken:
            n += 1
        stored = Event(
            id=EventId(uuid.uuid4()),
            slug=suffixed_slug(base, n),
            title=event.title,
            description=event.description,
            overview=event.overview,
            venue=event.venue,
            location=event.location,
            date=event.date,
            time=event.time,
            starts_at=event.starts_at,
            mode=event.mode,
            audience=event.audience,
            organizer=event.organizer,
            image_url=image_url,
            tags=event.tags,
            agenda=event.agenda,
            capacity=event.capacity,
            created_at=created_at,
        )
        self.events[stored.id] = stored
        return stored

    def get_by_id(self, event_id):
        return self.events.get(event_id)

    def get_by_slug(self, slug):
        return next((e for e in self.events.values() if e.slug == slug), None)

    def list_summaries(self):
        ordered = sorted(self.events.values(), key=lambda e: e.created_at, reverse=True)
        return [
            EventSummary(
                id=e.id,
                slug=e.slug,
                title=e.title,
                image_url=e.image_url,
                venue=e.venue,
                location=e.location,
                date=e.date,
                time=e.time,
                starts_at=e.starts_at,
                mode=e.mode,
                tags=e.tags,
                created_at=e.created_at,
            )
            for e in ordered
        ]


class InMemoryBookingLedger(BookingLedger):
    def __init__(self, store: InMemoryEventStore) -> None:
        self.store = store
        self.bookings: list[Booking] = []

    def create(self, event_id, email, created_at) -> Booking:
        event = self.store.get_by_id(event_id)
        if event is None:
            raise EventNotFoundError(str(event_id))
        held = [b for b in self.bookings if b.event_id == event_id]
        if any(b.email == email for b in held):
            raise DuplicateBookingError(str(event_id), email)
        if event.capacity is not None and len(held) >= event.capacity.value:
            raise CapacityExceededError(str(event_id))
        booking = Booking(
            id=BookingId(uuid.uuid4()), event_id=event_id, email=email, created_at=created_at
        )
        self.bookings.append(booking)
        return booking

    def count_for_event(self, event_id) -> int:
        return sum(1 for b in self.bookings if b.event_id == event_id)


class FakeImageGateway(ImageUploadGateway):
    def __init__(self, fail_with: UploadError | None = None) -> None:
        self.fail_with = fail_with
        self.uploaded: list[str] = []
        self.deleted: list[str] = []

    def upload(self, image) -> str:
        if self.fail_with is not None:
            raise self.fail_with
        url = f"https://blobs.test/{len(self.uploaded) + 1}-{image.name}"
        self.uploaded.append(url)
        return url

    def delete(self, url) -> None:
        self.deleted.append(url)
