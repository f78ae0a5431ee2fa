"""Django ORM models (persistence layer).

These models handle database concerns. Domain logic lives in domain/models.py.
"""

import uuid

from django.db import models


class Event(models.Model):
    """Persistence model for events."""

    class Mode(models.TextChoices):
        OFFLINE = "offline", "Offline"
        ONLINE = "online", "Online"
        HYBRID = "hybrid", "Hybrid"

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    slug = models.SlugField(max_length=255, unique=True)
    title = models.CharField(max_length=255)
    description = models.TextField()
    overview = models.TextField()
    venue = models.CharField(max_length=255)
    location = models.CharField(max_length=255)
    date = models.CharField(max_length=32)
    time = models.CharField(max_length=32)
    starts_at = models.DateTimeField()
    mode = models.CharField(max_length=16, choices=Mode.choices)
    audience = models.CharField(max_length=255)
    organizer = models.CharField(max_length=255)
    image_url = models.URLField(max_length=500)
    tags = models.JSONField(default=list)
    agenda = models.JSONField(default=list)
    capacity = models.PositiveIntegerField(blank=True, null=True)
    # Incremented under a conditional UPDATE when a booking is admitted.
    booking_count = models.PositiveIntegerField(default=0)
    created_at = models.DateTimeField()

    class Meta:
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["-created_at"], name="event_created_at_idx"),
        ]

    def __str__(self) -> str:
        return self.title


class Booking(models.Model):
    """Persistence model for bookings."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    event = models.ForeignKey(Event, on_delete=models.CASCADE, related_name="bookings")
    email = models.EmailField(max_length=254)
    created_at = models.DateTimeField()

    class Meta:
        ordering = ["created_at"]
        constraints = [
            models.UniqueConstraint(
                fields=["event", "email"], name="uniq_booking_event_email"
            ),
        ]
        indexes = [
            models.Index(fields=["event", "created_at"], name="booking_event_created_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.email} - {self.event.title}"
