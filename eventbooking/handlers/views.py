"""HTTP handlers (views) - handle HTTP concerns only.

Handlers:
- Parse requests and validate input format
- Call services for business logic
- Let domain errors reach handlers.errors.api_exception_handler
- Never contain business logic
- Never expose internal error details
"""

from collections.abc import Mapping

from django.conf import settings
from django.core.cache import cache
from rest_framework import status
from rest_framework.parsers import FormParser, JSONParser, MultiPartParser
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from eventbooking.gateways import get_image_gateway
from eventbooking.handlers.errors import retry_once
from eventbooking.handlers.serializers import (
    BookingSerializer,
    EventSerializer,
    EventSummarySerializer,
)
from eventbooking.services import BookingService, EventService
from eventbooking.stores import DjangoBookingLedger, DjangoEventStore

EVENT_LIST_KEY = "events:list"


def event_detail_key(ref: str) -> str:
    return f"events:{ref}"


def event_service() -> EventService:
    return EventService(
        store=DjangoEventStore(),
        gateway=get_image_gateway(),
        reject_past_events=settings.EVENTBOOKING.get("REJECT_PAST_EVENTS", True),
    )


def booking_service() -> BookingService:
    return BookingService(events=event_service(), ledger=DjangoBookingLedger())


def _cache_timeout() -> int:
    return int(settings.EVENTBOOKING.get("CACHE_TIMEOUT_SECONDS", 60))


def _payload(request: Request) -> Mapping:
    return request.data if isinstance(request.data, Mapping) else {}


class EventListView(APIView):
    """Handler for GET and POST /api/events"""

    parser_classes = [MultiPartParser, FormParser, JSONParser]

    def get(self, request: Request) -> Response:
        data = cache.get(EVENT_LIST_KEY)
        if data is None:
            data = EventSummarySerializer(event_service().list_events(), many=True).data
            cache.set(EVENT_LIST_KEY, data, _cache_timeout())
        return Response(data)

    def post(self, request: Request) -> Response:
        service = event_service()
        payload = _payload(request)
        image = request.FILES.get("image")
        event = retry_once(lambda: service.create_event(payload, image))
        return Response(EventSerializer(event).data, status=status.HTTP_201_CREATED)


class EventDetailView(APIView):
    """Handler for GET /api/events/{id_or_slug}"""

    def get(self, request: Request, ref: str) -> Response:
        key = event_detail_key(ref)
        data = cache.get(key)
        if data is None:
            event = event_service().get_event(ref)
            data = EventSerializer(event).data
            # Only canonical keys are cached; signals know how to drop them.
            if ref in (event.slug, str(event.id)):
                cache.set(key, data, _cache_timeout())
        return Response(data)


class BookingCreateView(APIView):
    """Handler for POST /api/events/{id_or_slug}/book"""

    parser_classes = [JSONParser, FormParser, MultiPartParser]

    def post(self, request: Request, ref: str) -> Response:
        service = booking_service()
        payload = {"eventId": ref, "email": _payload(request).get("email")}
        booking = retry_once(lambda: service.create_booking(payload))
        return Response(BookingSerializer(booking).data, status=status.HTTP_201_CREATED)


class BookingCountView(APIView):
    """Handler for GET /api/events/{id_or_slug}/bookings"""

    def get(self, request: Request, ref: str) -> Response:
        event = event_service().get_event(ref)
        count = booking_service().count_for_event(str(event.id))
        capacity = event.capacity.value if event.capacity is not None else None
        return Response({"eventId": str(event.id), "count": count, "capacity": capacity})
