"""Room API views."""

from __future__ import annotations

import logging

from django.db.models import Count  # type: ignore
from django_filters.rest_framework import DjangoFilterBackend  # type: ignore
from rest_framework import status, viewsets  # type: ignore
from rest_framework.decorators import action  # type: ignore
from rest_framework.response import Response  # type: ignore

from apps.bookings.application.command_handlers import AvailabilityChecker
from apps.bookings.models import Booking
from apps.bookings.repositories import get_booking_store
from shared.api.lookups import UUID_PATTERN
from shared.api.permissions import IsAdminOrReadOnly
from shared.domain.exceptions import DeletionBlocked, MissingParameters

from .filters import RoomFilterSet
from .models import Room
from .serializers import (
    AvailabilityQuerySerializer,
    RoomSerializer,
    RoomTypeCountSerializer,
    RoomWriteSerializer,
)

logger = logging.getLogger(__name__)


class RoomViewSet(viewsets.ModelViewSet):
    """Room listing for everyone; room administration for admins."""

    queryset = Room.objects.select_related("hotel").order_by("price")
    permission_classes = [IsAdminOrReadOnly]
    filter_backends = [DjangoFilterBackend]
    filterset_class = RoomFilterSet
    lookup_value_regex = UUID_PATTERN

    def get_serializer_class(self):  # type: ignore
        if self.action in {"create", "update", "partial_update"}:
            return RoomWriteSerializer
        return RoomSerializer

    def create(self, request, *args, **kwargs):  # type: ignore
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        room = serializer.save()
        logger.info(f"Room {room.id} created in hotel {room.hotel_id}")
        read_serializer = RoomSerializer(room, context=self.get_serializer_context())
        headers = self.get_success_headers(read_serializer.data)
        return Response(read_serializer.data, status=status.HTTP_201_CREATED, headers=headers)

    def update(self, request, *args, **kwargs):  # type: ignore
        partial = kwargs.pop("partial", False)
        room = self.get_object()
        serializer = self.get_serializer(room, data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)
        room = serializer.save()
        return Response(RoomSerializer(room, context=self.get_serializer_context()).data)

    def perform_destroy(self, instance):  # type: ignore
        if Booking.objects.active().filter(room=instance).exists():
            raise DeletionBlocked("Room has active bookings and cannot be deleted")
        logger.info(f"Deleting room {instance.id}")
        instance.delete()

    @action(detail=True, methods=["get"])
    def availability(self, request, pk=None):  # type: ignore
        """Free units of the room for ``checkinDate``..``checkoutDate``."""
        params = request.query_params
        if not params.get("checkinDate") or not params.get("checkoutDate"):
            raise MissingParameters()

        query = AvailabilityQuerySerializer(data=params)
        query.is_valid(raise_exception=True)

        checker = AvailabilityChecker(get_booking_store())
        availability = checker.check(
            pk,
            query.validated_data["checkinDate"],
            query.validated_data["checkoutDate"],
        )
        return Response(availability.to_dict())

    @action(detail=False, methods=["get"])
    def types(self, request):  # type: ignore
        counts = (
            Room.objects.order_by()
            .values("type")
            .annotate(count=Count("id"))
            .order_by("-count", "type")
        )
        return Response(RoomTypeCountSerializer(counts, many=True).data)
