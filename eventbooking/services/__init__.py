from eventbooking.services.booking_service import BookingService
from eventbooking.services.event_service import EventService

__all__ = ["EventService", "BookingService"]
