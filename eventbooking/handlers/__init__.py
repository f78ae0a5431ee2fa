from eventbooking.handlers.views import (
    BookingCountView,
    BookingCreateView,
    EventDetailView,
    EventListView,
)

__all__ = [
    "EventListView",
    "EventDetailView",
    "BookingCreateView",
    "BookingCountView",
]
