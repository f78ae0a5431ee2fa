"""Serializers for transforming domain models to API responses."""

from rest_framework import serializers


class EventSummarySerializer(serializers.Serializer):
    """Serializer for EventSummary domain model."""

    id = serializers.UUIDField(source="id.value")
    slug = serializers.CharField()
    title = serializers.CharField()
    imageUrl = serializers.CharField(source="image_url")
    venue = serializers.CharField()
    location = serializers.CharField()
    date = serializers.CharField()
    time = serializers.CharField()
    startsAt = serializers.DateTimeField(source="starts_at")
    mode = serializers.CharField(source="mode.value")
    tags = serializers.ListField(child=serializers.CharField())
    createdAt = serializers.DateTimeField(source="created_at")


class EventSerializer(EventSummarySerializer):
    """Serializer for Event domain model."""

    description = serializers.CharField()
    overview = serializers.CharField()
    audience = serializers.CharField()
    organizer = serializers.CharField()
    agenda = serializers.ListField(child=serializers.CharField())
    capacity = serializers.SerializerMethodField()

    def get_capacity(self, event) -> int | None:
        return event.capacity.value if event.capacity is not None else None


class BookingSerializer(serializers.Serializer):
    """Serializer for Booking domain model."""

    id = serializers.UUIDField(source="id.value")
    eventId = serializers.UUIDField(source="event_id.value")
    email = serializers.EmailField()
    createdAt = serializers.DateTimeField(source="created_at")
