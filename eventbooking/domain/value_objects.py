"""Domain primitives that enforce validity at creation time."""

import re
import unicodedata
from dataclasses import dataclass
from enum import Enum
from typing import Self
from uuid import UUID


@dataclass(frozen=True)
class EventId:
    """Unique identifier for an Event."""

    value: UUID

    @classmethod
    def from_string(cls, value: str) -> Self:
        return cls(value=UUID(value))

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class BookingId:
    """Unique identifier for a Booking."""

    value: UUID

    @classmethod
    def from_string(cls, value: str) -> Self:
        return cls(value=UUID(value))

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class Capacity:
    """Non-negative integer representing the maximum number of bookings."""

    value: int

    def __post_init__(self) -> None:
        if self.value < 0:
            raise ValueError("Capacity cannot be negative")


class EventMode(Enum):
    """How attendees take part in an event."""

    OFFLINE = "offline"
    ONLINE = "online"
    HYBRID = "hybrid"


_NON_ALNUM = re.compile(r"[^a-z0-9]+")

# Leaves room for a "-<n>" suffix inside the 255-character slug column.
SLUG_BASE_MAX_LENGTH = 240


def slugify_title(title: str) -> str:
    """Derive the base slug for an event title.

    Lowercases, folds accents to ASCII, collapses every run of
    non-alphanumerics into a single hyphen, trims hyphens from both ends and
    caps the result at SLUG_BASE_MAX_LENGTH characters.
    """
    folded = unicodedata.normalize("NFKD", title).encode("ascii", "ignore").decode("ascii")
    slug = _NON_ALNUM.sub("-", folded.lower()).strip("-")
    slug = slug[:SLUG_BASE_MAX_LENGTH].rstrip("-")
    return slug or "event"


def suffixed_slug(base: str, n: int) -> str:
    """Return the n-th candidate for a base slug: ``base``, ``base-2``, ..."""
    return base if n <= 1 else f"{base}-{n}"
