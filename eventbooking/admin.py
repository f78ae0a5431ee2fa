from django.contrib import admin

from eventbooking.models import Booking, Event


class BookingInline(admin.TabularInline):
    model = Booking
    extra = 0
    can_delete = False
    readonly_fields = ["email", "created_at"]

    def has_add_permission(self, request, obj=None) -> bool:
        return False


@admin.register(Event)
class EventAdmin(admin.ModelAdmin):
    list_display = ["title", "slug", "venue", "starts_at", "capacity", "booking_count", "created_at"]
    list_filter = ["mode"]
    search_fields = ["title", "slug", "location", "organizer"]
    readonly_fields = ["id", "slug", "image_url", "booking_count", "created_at"]
    inlines = [BookingInline]


@admin.register(Booking)
class BookingAdmin(admin.ModelAdmin):
    list_display = ["email", "event", "created_at"]
    list_filter = ["event"]
    search_fields = ["email"]
    readonly_fields = ["id", "event", "email", "created_at"]
