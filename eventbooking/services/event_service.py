"""Event service - all business logic lives here.

Services:
- Depend only on interfaces (stores, gateways)
- Validate domain invariants
- Perform orchestration and error mapping
- Return domain models or domain errors
"""

from collections.abc import Callable, Mapping
from datetime import datetime
from typing import Any

import structlog
from django.utils import timezone

from eventbooking.domain import Event, EventId, EventSummary
from eventbooking.domain.errors import EventNotFoundError, InvalidEventIdError, UploadError
from eventbooking.domain.validation import validate_event_input
from eventbooking.gateways.interfaces import ImageUploadGateway
from eventbooking.stores.interfaces import EventStore

logger = structlog.get_logger(__name__)


class EventService:
    """Service for event creation and catalog operations."""

    def __init__(
        self,
        store: EventStore,
        gateway: ImageUploadGateway,
        clock: Callable[[], datetime] = timezone.now,
        reject_past_events: bool = True,
    ) -> None:
        self._store = store
        self._gateway = gateway
        self._clock = clock
        self._reject_past_events = reject_past_events

    def create_event(self, data: Mapping[str, Any], image: Any | None) -> Event:
        """Validate, upload the image, then persist the event.

        Raises:
            ValidationError: If the payload breaks a validation rule.
            UploadError: If the image could not be stored.
            InternalError: If the event could not be persisted.
        """
        now = self._clock()
        validated = validate_event_input(data, image, now, reject_past=self._reject_past_events)

        image_url = self._gateway.upload(validated.image)
        try:
            event = self._store.create(validated, image_url, created_at=now)
        except Exception:
            self._discard_image(image_url)
            raise

        logger.info("event_created", event_id=str(event.id), slug=event.slug)
        return event

    def list_events(self) -> list[EventSummary]:
        """Return all events, newest first."""
        return self._store.list_summaries()

    def get_event(self, ref: str) -> Event:
        """Return an event by ID or, failing that, by slug.

        Raises:
            EventNotFoundError: If neither lookup finds the event.
        """
        try:
            event_id = EventId.from_string(ref)
        except ValueError:
            event = None
        else:
            event = self._store.get_by_id(event_id)
        if event is None:
            event = self._store.get_by_slug(ref)
        if event is None:
            raise EventNotFoundError(ref)
        return event

    def get_event_by_id(self, event_id: str) -> Event:
        """Return an event by ID.

        Raises:
            InvalidEventIdError: If the event_id is not a valid UUID.
            EventNotFoundError: If the event does not exist.
        """
        try:
            parsed = EventId.from_string(event_id)
        except ValueError:
            raise InvalidEventIdError() from None
        event = self._store.get_by_id(parsed)
        if event is None:
            raise EventNotFoundError(event_id)
        return event

    def get_event_by_slug(self, slug: str) -> Event:
        """Return an event by slug.

        Raises:
            EventNotFoundError: If the event does not exist.
        """
        event = self._store.get_by_slug(slug)
        if event is None:
            raise EventNotFoundError(slug)
        return event

    def _discard_image(self, image_url: str) -> None:
        try:
            self._gateway.delete(image_url)
        except UploadError:
            logger.warning("image_cleanup_failed", image_url=image_url, exc_info=True)
