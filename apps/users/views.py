"""Admin user management API views."""

from __future__ import annotations

import logging
from datetime import timedelta

from django.contrib.auth import get_user_model  # type: ignore
from django.db.models import Count, Q  # type: ignore
from django.utils import timezone  # type: ignore
from rest_framework import mixins, permissions, viewsets  # type: ignore
from rest_framework.decorators import action  # type: ignore
from rest_framework.response import Response  # type: ignore

from apps.bookings.models import Booking
from apps.bookings.serializers import UserBookingSerializer
from apps.bookings.views import filter_by_status
from shared.api.permissions import IsAdmin
from shared.domain.exceptions import DeletionBlocked

from .serializers import (
    UserDetailSerializer,
    UserListSerializer,
    UserRoleSerializer,
    UserStatsSerializer,
)

logger = logging.getLogger(__name__)

User = get_user_model()

RECENT_USERS_DAYS = 30
TOP_USERS_LIMIT = 5


class UserViewSet(
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    mixins.DestroyModelMixin,
    viewsets.GenericViewSet,
):
    """User administration.

    - list with ``role`` and ``search`` (name, email or phone) filters
    - retrieve with bookings
    - role change and deletion
    - summary statistics
    """

    queryset = User.objects.annotate(booking_count=Count("bookings")).order_by("-created_at")
    permission_classes = [permissions.IsAuthenticated, IsAdmin]
    lookup_value_regex = r"\d+"

    def get_serializer_class(self):  # type: ignore
        if self.action == "retrieve":
            return UserDetailSerializer
        if self.action == "role":
            return UserRoleSerializer
        return UserListSerializer

    def get_queryset(self):  # type: ignore
        qs = super().get_queryset()
        if self.action != "list":
            return qs
        role = self.request.query_params.get("role")
        if role:
            qs = qs.filter(role=role.upper())
        search = self.request.query_params.get("search")
        if search:
            qs = qs.filter(
                Q(name__icontains=search) | Q(email__icontains=search) | Q(phone__icontains=search)
            )
        return qs

    def perform_destroy(self, instance):  # type: ignore
        if Booking.objects.active().filter(user=instance).exists():
            raise DeletionBlocked("User has active bookings and cannot be deleted")
        logger.info(f"Deleting user {instance.pk} ({instance.email})")
        instance.delete()

    @action(detail=True, methods=["put"])
    def role(self, request, pk=None):  # type: ignore
        user = self.get_object()
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        user.role = serializer.validated_data["role"]
        user.save(update_fields=["role", "updated_at"])
        logger.info(f"User {user.pk} role set to {user.role} by {request.user.pk}")
        return Response(UserListSerializer(user).data)

    @action(detail=True, methods=["get"])
    def bookings(self, request, pk=None):  # type: ignore
        user = self.get_object()
        queryset = (
            Booking.objects.filter(user=user)
            .select_related("room", "room__hotel")
            .order_by("-created_at")
        )
        queryset = filter_by_status(queryset, request.query_params.get("status"))
        page = self.paginate_queryset(queryset)
        if page is not None:
            serializer = UserBookingSerializer(page, many=True)
            return self.get_paginated_response(serializer.data)
        return Response(UserBookingSerializer(queryset, many=True).data)

    @action(detail=False, methods=["get"], url_path="stats/summary")
    def stats_summary(self, request):  # type: ignore
        since = timezone.now() - timedelta(days=RECENT_USERS_DAYS)
        totals = User.objects.aggregate(
            totalUsers=Count("id"),
            adminUsers=Count("id", filter=Q(role=User.RoleChoices.ADMIN)),
            regularUsers=Count("id", filter=Q(role=User.RoleChoices.USER)),
            recentUsers=Count("id", filter=Q(created_at__gte=since)),
        )
        totals["topUsers"] = (
            User.objects.annotate(booking_count=Count("bookings"))
            .order_by("-booking_count", "id")[:TOP_USERS_LIMIT]
        )
        return Response(UserStatsSerializer(totals).data)
