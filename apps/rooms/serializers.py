"""Serializers for the rooms domain."""

from __future__ import annotations

from rest_framework import serializers  # type: ignore

from apps.hotels.models import Hotel

from .models import Room


class HotelSummarySerializer(serializers.ModelSerializer):
    class Meta:
        model = Hotel
        fields = ["id", "name", "city", "address", "rating"]


class RoomSummarySerializer(serializers.ModelSerializer):
    """Room as nested under its hotel."""

    totalRooms = serializers.IntegerField(source="total_rooms", read_only=True)
    availableRooms = serializers.IntegerField(source="available_rooms", read_only=True)

    class Meta:
        model = Room
        fields = [
            "id",
            "type",
            "price",
            "totalRooms",
            "availableRooms",
            "description",
            "amenities",
            "images",
        ]


class RoomSerializer(serializers.ModelSerializer):
    hotelId = serializers.UUIDField(source="hotel_id", read_only=True)
    hotel = HotelSummarySerializer(read_only=True)
    totalRooms = serializers.IntegerField(source="total_rooms", read_only=True)
    availableRooms = serializers.IntegerField(source="available_rooms", read_only=True)
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)
    updatedAt = serializers.DateTimeField(source="updated_at", read_only=True)

    class Meta:
        model = Room
        fields = [
            "id",
            "hotelId",
            "hotel",
            "type",
            "price",
            "totalRooms",
            "availableRooms",
            "description",
            "amenities",
            "images",
            "createdAt",
            "updatedAt",
        ]


class RoomWriteSerializer(serializers.ModelSerializer):
    hotelId = serializers.PrimaryKeyRelatedField(
        source="hotel",
        queryset=Hotel.objects.all(),
        pk_field=serializers.UUIDField(),
        error_messages={"does_not_exist": "Hotel not found"},
    )
    totalRooms = serializers.IntegerField(source="total_rooms", min_value=1)
    availableRooms = serializers.IntegerField(source="available_rooms", min_value=0)
    amenities = serializers.ListField(
        child=serializers.CharField(max_length=100), required=False, default=list
    )
    images = serializers.ListField(child=serializers.URLField(), required=False, default=list)

    class Meta:
        model = Room
        fields = [
            "hotelId",
            "type",
            "price",
            "totalRooms",
            "availableRooms",
            "description",
            "amenities",
            "images",
        ]
        extra_kwargs = {
            "price": {"min_value": 0},
        }

    def validate(self, attrs):  # type: ignore
        total = attrs.get("total_rooms", getattr(self.instance, "total_rooms", None))
        available = attrs.get("available_rooms", getattr(self.instance, "available_rooms", None))
        if total is not None and available is not None and available > total:
            raise serializers.ValidationError(
                {"availableRooms": "Available rooms cannot exceed total rooms"}
            )
        return attrs


class RoomTypeCountSerializer(serializers.Serializer):
    type = serializers.CharField()
    count = serializers.IntegerField()


class AvailabilityQuerySerializer(serializers.Serializer):
    checkinDate = serializers.DateField()
    checkoutDate = serializers.DateField()
