from django.apps import AppConfig


class EventBookingConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "eventbooking"
    verbose_name = "Events and bookings"

    def ready(self) -> None:
        from eventbooking import signals  # noqa: F401
