from eventbooking.stores.django_ledger import DjangoBookingLedger
from eventbooking.stores.django_store import DjangoEventStore
from eventbooking.stores.interfaces import BookingLedger, EventStore

__all__ = [
    "EventStore",
    "BookingLedger",
    "DjangoEventStore",
    "DjangoBookingLedger",
]
