"""Admin registrations for hotels domain."""

from __future__ import annotations

from django.contrib import admin

from apps.rooms.models import Room

from .models import Hotel


class RoomInline(admin.TabularInline):
    model = Room
    extra = 0
    fields = ("type", "price", "total_rooms", "available_rooms")


@admin.register(Hotel)
class HotelAdmin(admin.ModelAdmin):
    list_display = ("name", "city", "rating", "created_at")
    list_filter = ("city",)
    search_fields = ("name", "city", "address")
    inlines = (RoomInline,)
    readonly_fields = ("created_at", "updated_at")
