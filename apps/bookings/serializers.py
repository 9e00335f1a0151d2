"""Serializers for the booking domain."""

from __future__ import annotations

from django.utils import timezone  # type: ignore
from rest_framework import serializers  # type: ignore

from apps.rooms.models import Room
from apps.rooms.serializers import HotelSummarySerializer

from .domain.entities import MAX_GUESTS, MIN_GUESTS
from .models import Booking


class BookingCreateSerializer(serializers.Serializer):
    """Booking request of the signed-in user."""

    roomId = serializers.UUIDField()
    checkinDate = serializers.DateField()
    checkoutDate = serializers.DateField()
    guests = serializers.IntegerField(
        min_value=MIN_GUESTS,
        max_value=MAX_GUESTS,
        error_messages={
            "min_value": f"Number of guests must be between {MIN_GUESTS} and {MAX_GUESTS}",
            "max_value": f"Number of guests must be between {MIN_GUESTS} and {MAX_GUESTS}",
        },
    )

    def validate_checkinDate(self, value):  # type: ignore
        if value < timezone.localdate():
            raise serializers.ValidationError("Check-in date cannot be in the past")
        return value


class BookingStatusSerializer(serializers.Serializer):
    status = serializers.CharField()


class BookedRoomSerializer(serializers.ModelSerializer):
    hotel = HotelSummarySerializer(read_only=True)

    class Meta:
        model = Room
        fields = ["id", "type", "price", "hotel"]


class BookingUserSerializer(serializers.Serializer):
    id = serializers.IntegerField()
    name = serializers.CharField()
    email = serializers.EmailField()
    phone = serializers.CharField()


class BookingSerializer(serializers.ModelSerializer):
    """Booking with its room, hotel and guest."""

    userId = serializers.IntegerField(source="user_id", read_only=True)
    roomId = serializers.UUIDField(source="room_id", read_only=True)
    checkinDate = serializers.DateField(source="check_in", read_only=True)
    checkoutDate = serializers.DateField(source="check_out", read_only=True)
    totalPrice = serializers.DecimalField(
        source="total_price", max_digits=12, decimal_places=2, read_only=True
    )
    nights = serializers.IntegerField(read_only=True)
    room = BookedRoomSerializer(read_only=True)
    user = BookingUserSerializer(read_only=True)
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)
    updatedAt = serializers.DateTimeField(source="updated_at", read_only=True)

    class Meta:
        model = Booking
        fields = [
            "id",
            "userId",
            "roomId",
            "checkinDate",
            "checkoutDate",
            "guests",
            "nights",
            "totalPrice",
            "status",
            "room",
            "user",
            "createdAt",
            "updatedAt",
        ]
        read_only_fields = fields


class UserBookingSerializer(BookingSerializer):
    """Booking as listed under its owner, without the user block."""

    user = None

    class Meta(BookingSerializer.Meta):
        fields = [name for name in BookingSerializer.Meta.fields if name != "user"]
        read_only_fields = fields


class BookingStatsSerializer(serializers.Serializer):
    totalBookings = serializers.IntegerField()
    pendingBookings = serializers.IntegerField()
    confirmedBookings = serializers.IntegerField()
    cancelledBookings = serializers.IntegerField()
    completedBookings = serializers.IntegerField()
    totalRevenue = serializers.DecimalField(max_digits=14, decimal_places=2)


class BookingListQuerySerializer(serializers.Serializer):
    status = serializers.CharField(required=False, allow_blank=True)
    hotelId = serializers.UUIDField(required=False)
