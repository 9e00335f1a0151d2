"""Serializers for user-related API endpoints."""

from __future__ import annotations

from django.contrib.auth import get_user_model  # type: ignore
from rest_framework import serializers  # type: ignore

from .models import PHONE_VALIDATOR

User = get_user_model()


class UserSerializer(serializers.ModelSerializer):
    """Public profile of an account."""

    createdAt = serializers.DateTimeField(source="created_at", read_only=True)
    updatedAt = serializers.DateTimeField(source="updated_at", read_only=True)

    class Meta:
        model = User
        fields = ["id", "name", "email", "phone", "role", "createdAt", "updatedAt"]
        read_only_fields = ["id", "email", "role"]


class UserListSerializer(UserSerializer):
    """Admin listing row with the number of bookings made."""

    bookingCount = serializers.IntegerField(source="booking_count", read_only=True)

    class Meta(UserSerializer.Meta):
        fields = UserSerializer.Meta.fields + ["bookingCount"]


class ProfileUpdateSerializer(serializers.ModelSerializer):
    """Fields a user may change on their own profile."""

    name = serializers.CharField(min_length=2, max_length=50, required=False)
    phone = serializers.CharField(validators=[PHONE_VALIDATOR], required=False)

    class Meta:
        model = User
        fields = ["name", "phone"]


class UserRoleSerializer(serializers.Serializer):
    role = serializers.ChoiceField(
        choices=User.RoleChoices.choices,
        error_messages={"invalid_choice": "Role must be either USER or ADMIN"},
    )


class UserDetailSerializer(UserSerializer):
    """Admin view of one account with its bookings."""

    bookings = serializers.SerializerMethodField()

    class Meta(UserSerializer.Meta):
        fields = UserSerializer.Meta.fields + ["bookings"]

    def get_bookings(self, obj) -> list[dict]:
        from apps.bookings.serializers import UserBookingSerializer

        bookings = obj.bookings.select_related("room", "room__hotel").order_by("-created_at")
        return UserBookingSerializer(bookings, many=True, context=self.context).data


class TopUserSerializer(serializers.Serializer):
    id = serializers.IntegerField()
    name = serializers.CharField()
    email = serializers.EmailField()
    bookingCount = serializers.IntegerField(source="booking_count")


class UserStatsSerializer(serializers.Serializer):
    totalUsers = serializers.IntegerField()
    adminUsers = serializers.IntegerField()
    regularUsers = serializers.IntegerField()
    recentUsers = serializers.IntegerField()
    topUsers = TopUserSerializer(many=True)
