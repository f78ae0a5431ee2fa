from django.urls import path

from eventbooking.handlers import (
    BookingCountView,
    BookingCreateView,
    EventDetailView,
    EventListView,
)

urlpatterns = [
    path("events", EventListView.as_view(), name="event-list"),
    path("events/<str:ref>", EventDetailView.as_view(), name="event-detail"),
    path("events/<str:ref>/book", BookingCreateView.as_view(), name="event-book"),
    path("events/<str:ref>/bookings", BookingCountView.as_view(), name="event-bookings"),
]
