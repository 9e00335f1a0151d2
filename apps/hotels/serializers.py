"""Serializers for the hotels domain."""

from __future__ import annotations

from decimal import Decimal

from rest_framework import serializers  # type: ignore

from apps.rooms.serializers import RoomSummarySerializer

from .models import Hotel


class HotelSerializer(serializers.ModelSerializer):
    """Hotel with its rooms; search results carry only the matching rooms."""

    rooms = serializers.SerializerMethodField()
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)
    updatedAt = serializers.DateTimeField(source="updated_at", read_only=True)

    class Meta:
        model = Hotel
        fields = [
            "id",
            "name",
            "city",
            "address",
            "rating",
            "description",
            "image",
            "rooms",
            "createdAt",
            "updatedAt",
        ]

    def get_rooms(self, obj: Hotel) -> list[dict]:
        rooms = getattr(obj, "matching_rooms", None)
        if rooms is None:
            rooms = obj.rooms.order_by("price")
        return RoomSummarySerializer(rooms, many=True, context=self.context).data


class HotelWriteSerializer(serializers.ModelSerializer):
    rating = serializers.DecimalField(
        max_digits=2,
        decimal_places=1,
        min_value=Decimal("0"),
        max_value=Decimal("5"),
        required=False,
    )

    class Meta:
        model = Hotel
        fields = ["name", "city", "address", "rating", "description", "image"]


class PopularCitySerializer(serializers.Serializer):
    city = serializers.CharField()
    hotelCount = serializers.IntegerField(source="hotel_count")
