"""Validation layer for event and booking payloads.

Pure transformations: raw field mappings in, validated domain inputs out,
``ValidationError(field, reason)`` on the first rule that fails. Nothing here
touches a store or the blob store.
"""

import json
import re
from collections.abc import Mapping
from datetime import datetime
from typing import Any

from django.core.exceptions import ValidationError as DjangoValidationError
from django.core.validators import EmailValidator
from django.utils import timezone
from django.utils.dateparse import parse_date, parse_time

from eventbooking.domain.errors import ValidationError
from eventbooking.domain.models import ImageAttachment, ValidatedBooking, ValidatedEvent
from eventbooking.domain.value_objects import Capacity, EventMode

REQUIRED_TEXT_FIELDS = (
    "title",
    "description",
    "overview",
    "venue",
    "location",
    "audience",
    "organizer",
)

# Column widths of the persisted Event; longer values would overflow them.
MAX_LENGTHS = {
    "title": 255,
    "venue": 255,
    "location": 255,
    "audience": 255,
    "organizer": 255,
    "date": 32,
    "time": 32,
}

_email_validator = EmailValidator()

# A trailing UTC offset such as "Z", "+02:00" or "-0500".
_UTC_OFFSET = re.compile(r"(?:[zZ]|[+-]\d{2}(?::?\d{2})?)$")


def validate_event_input(
    data: Mapping[str, Any],
    image: Any | None,
    now: datetime,
    reject_past: bool = True,
) -> ValidatedEvent:
    """Validate an event creation payload.

    ``image`` is an uploaded file object exposing ``name``, ``content_type``
    and ``size`` (a Django ``UploadedFile``), or None when none was sent.
    """
    text = {name: _required_text(data, name) for name in REQUIRED_TEXT_FIELDS}

    date_raw = _required_text(data, "date")
    time_raw = _required_text(data, "time")
    starts_at = _parse_start(date_raw, time_raw)
    if reject_past and starts_at < now:
        raise ValidationError("date", "in_past")

    return ValidatedEvent(
        date=date_raw,
        time=time_raw,
        starts_at=starts_at,
        mode=_parse_mode(data.get("mode")),
        tags=parse_tags(data.get("tags")),
        agenda=parse_agenda(data.get("agenda")),
        capacity=_parse_capacity(data.get("capacity")),
        image=_validate_image(image),
        **text,
    )


def validate_booking_input(data: Mapping[str, Any]) -> ValidatedBooking:
    """Validate a booking payload carrying ``eventId`` (or ``slug``) and ``email``."""
    event_ref = _text(data.get("eventId")) or _text(data.get("slug"))
    if not event_ref:
        raise ValidationError("eventId", "required")

    email = _text(data.get("email"))
    if not email:
        raise ValidationError("email", "required")
    try:
        _email_validator(email)
    except DjangoValidationError:
        raise ValidationError("email", "invalid_email") from None

    return ValidatedBooking(event_ref=event_ref, email=email.lower())


def parse_tags(raw: Any) -> tuple[str, ...]:
    """Split tags on commas, trim, drop empties, dedupe case-insensitively."""
    seen: dict[str, None] = {}
    for item in _split_list(raw, "tags", ","):
        seen.setdefault(item.lower(), None)
    return tuple(seen)


def parse_agenda(raw: Any) -> tuple[str, ...]:
    """Split agenda items on newlines, trim, drop empties, keep order."""
    return tuple(_split_list(raw, "agenda", "\n"))


def _split_list(raw: Any, field: str, separator: str) -> list[str]:
    # Multipart clients send JSON-encoded arrays; plain forms send a
    # separator-delimited string.
    if raw is None:
        return []
    if isinstance(raw, str):
        stripped = raw.strip()
        if stripped.startswith("["):
            try:
                raw = json.loads(stripped)
            except json.JSONDecodeError:
                raise ValidationError(field, "invalid_format") from None
        else:
            raw = stripped.split(separator)
    if not isinstance(raw, list | tuple):
        raise ValidationError(field, "invalid_format")

    items = []
    for item in raw:
        if not isinstance(item, str):
            raise ValidationError(field, "invalid_format")
        item = item.strip()
        if item:
            items.append(item)
    return items


def _text(value: Any) -> str:
    return value.strip() if isinstance(value, str) else ""


def _required_text(data: Mapping[str, Any], field: str) -> str:
    value = _text(data.get(field))
    if not value:
        raise ValidationError(field, "required")
    if len(value) > MAX_LENGTHS.get(field, len(value)):
        raise ValidationError(field, "too_long")
    return value


def _parse_start(date_raw: str, time_raw: str) -> datetime:
    try:
        day = parse_date(date_raw)
    except ValueError:
        day = None
    if day is None:
        raise ValidationError("date", "invalid_format")

    try:
        at = parse_time(time_raw)
    except ValueError:
        at = None
    if at is None:
        raise ValidationError("time", "invalid_format")

    # parse_time silently drops offsets; times are wall-clock in the service zone.
    if _UTC_OFFSET.search(time_raw):
        raise ValidationError("time", "invalid_format")

    return timezone.make_aware(datetime.combine(day, at))


def _parse_mode(raw: Any) -> EventMode:
    value = _text(raw).lower()
    if not value:
        raise ValidationError("mode", "required")
    try:
        return EventMode(value)
    except ValueError:
        raise ValidationError("mode", "invalid_enum") from None


def _parse_capacity(raw: Any) -> Capacity | None:
    if raw is None or (isinstance(raw, str) and not raw.strip()):
        return None
    if isinstance(raw, bool) or (isinstance(raw, float) and not raw.is_integer()):
        raise ValidationError("capacity", "invalid")
    try:
        return Capacity(int(raw))
    except (TypeError, ValueError):
        raise ValidationError("capacity", "invalid") from None


def _validate_image(image: Any | None) -> ImageAttachment:
    if image is None or not getattr(image, "size", 0):
        raise ValidationError("image", "required")
    content_type = getattr(image, "content_type", "") or ""
    if not content_type.startswith("image/"):
        raise ValidationError("image", "invalid_type")
    return ImageAttachment(
        name=getattr(image, "name", "") or "image",
        content_type=content_type,
        size=image.size,
        file=image,
    )
