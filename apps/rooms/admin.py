"""Admin registrations for rooms domain."""

from __future__ import annotations

from django.contrib import admin

from .models import Room


@admin.register(Room)
class RoomAdmin(admin.ModelAdmin):
    list_display = ("hotel", "type", "price", "total_rooms", "available_rooms")
    list_filter = ("type", "hotel__city")
    search_fields = ("hotel__name", "hotel__city", "description")
    readonly_fields = ("created_at", "updated_at")
