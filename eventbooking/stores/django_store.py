"""Django ORM implementation of the EventStore."""

import uuid
from datetime import datetime

import structlog
from django.db import DatabaseError, IntegrityError, transaction
from django.db.models import Q

from eventbooking import models
from eventbooking.domain import Capacity, Event, EventId, EventMode, EventSummary, ValidatedEvent
from eventbooking.domain.errors import InternalError, StoreConflictError
from eventbooking.domain.value_objects import slugify_title, suffixed_slug
from eventbooking.stores.interfaces import EventStore

logger = structlog.get_logger(__name__)

# Bound on retries when a concurrent writer claims the slug we picked.
SLUG_ATTEMPTS = 5


class DjangoEventStore(EventStore):
    """Relational event store using Django ORM."""

    def create(self, event: ValidatedEvent, image_url: str, created_at: datetime) -> Event:
        base = slugify_title(event.title)
        for attempt in range(1, SLUG_ATTEMPTS + 1):
            try:
                slug = self._free_slug(base)
                row = self._insert(event, slug, image_url, created_at)
            except IntegrityError:
                logger.info("slug_taken_retrying", slug=base, attempt=attempt)
                continue
            except DatabaseError as exc:
                logger.exception("store_error", operation="create_event")
                raise InternalError(str(exc)) from exc
            return to_event(row)

        raise InternalError(f"could not allocate a slug for {base!r}")

    def get_by_id(self, event_id: EventId) -> Event | None:
        row = self._fetch(pk=event_id.value)
        return to_event(row) if row else None

    def get_by_slug(self, slug: str) -> Event | None:
        row = self._fetch(slug=slug)
        return to_event(row) if row else None

    def list_summaries(self) -> list[EventSummary]:
        try:
            rows = list(models.Event.objects.order_by("-created_at"))
        except DatabaseError as exc:
            logger.exception("store_error", operation="list_events")
            raise InternalError(str(exc)) from exc
        return [to_summary(row) for row in rows]

    def _fetch(self, **lookup) -> models.Event | None:
        try:
            return models.Event.objects.filter(**lookup).first()
        except DatabaseError as exc:
            logger.exception("store_error", operation="get_event")
            raise InternalError(str(exc)) from exc

    @staticmethod
    def _free_slug(base: str) -> str:
        taken = set(
            models.Event.objects.filter(
                Q(slug=base) | Q(slug__startswith=f"{base}-")
            ).values_list("slug", flat=True)
        )
        n = 1
        while suffixed_slug(base, n) in taken:
            n += 1
        return suffixed_slug(base, n)

    @staticmethod
    def _insert(
        event: ValidatedEvent, slug: str, image_url: str, created_at: datetime
    ) -> models.Event:
        event_id = uuid.uuid4()
        with transaction.atomic():
            if models.Event.objects.filter(pk=event_id).exists():
                raise StoreConflictError(f"event id {event_id} already assigned")
            row = models.Event.objects.create(
                id=event_id,
                slug=slug,
                title=event.title,
                description=event.description,
                overview=event.overview,
                venue=event.venue,
                location=event.location,
                date=event.date,
                time=event.time,
                starts_at=event.starts_at,
                mode=event.mode.value,
                audience=event.audience,
                organizer=event.organizer,
                image_url=image_url,
                tags=list(event.tags),
                agenda=list(event.agenda),
                capacity=event.capacity.value if event.capacity else None,
                created_at=created_at,
            )
        row.refresh_from_db()
        return row


def to_event(row: models.Event) -> Event:
    return Event(
        id=EventId(row.id),
        slug=row.slug,
        title=row.title,
        description=row.description,
        overview=row.overview,
        venue=row.venue,
        location=row.location,
        date=row.date,
        time=row.time,
        starts_at=row.starts_at,
        mode=EventMode(row.mode),
        audience=row.audience,
        organizer=row.organizer,
        image_url=row.image_url,
        tags=tuple(row.tags),
        agenda=tuple(row.agenda),
        capacity=Capacity(row.capacity) if row.capacity is not None else None,
        created_at=row.created_at,
    )


def to_summary(row: models.Event) -> EventSummary:
    return EventSummary(
        id=EventId(row.id),
        slug=row.slug,
        title=row.title,
        image_url=row.image_url,
        venue=row.venue,
        location=row.location,
        date=row.date,
        time=row.time,
        starts_at=row.starts_at,
        mode=EventMode(row.mode),
        tags=tuple(row.tags),
        created_at=row.created_at,
    )
