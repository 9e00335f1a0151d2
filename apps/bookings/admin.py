"""Admin registration for bookings."""

from __future__ import annotations

from django.contrib import admin

from .models import Booking


@admin.register(Booking)
class BookingAdmin(admin.ModelAdmin):
    list_display = (
        "id",
        "room",
        "user",
        "status",
        "check_in",
        "check_out",
        "guests",
        "total_price",
        "created_at",
    )
    list_filter = ("status", "check_in", "check_out", "room__hotel__city")
    search_fields = ("id", "room__hotel__name", "user__email")
    readonly_fields = ("total_price", "created_at", "updated_at")
