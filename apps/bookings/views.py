"""API views for the booking domain."""

from __future__ import annotations

import logging

from django.db.models import Count, Q  # type: ignore
from rest_framework import permissions, status, viewsets  # type: ignore
from rest_framework.decorators import action  # type: ignore
from rest_framework.response import Response  # type: ignore

from shared.api.lookups import UUID_PATTERN
from shared.api.permissions import IsAdmin
from shared.domain.exceptions import Forbidden
from shared.domain.identity import Actor

from .application.command_handlers import (
    CancelBookingCommand,
    CancelBookingHandler,
    ChangeBookingStatusCommand,
    ChangeBookingStatusHandler,
    CreateBookingCommand,
    CreateBookingHandler,
)
from .domain.entities import BookingStatus
from .models import Booking
from .repositories import get_booking_store
from .serializers import (
    BookingCreateSerializer,
    BookingListQuerySerializer,
    BookingSerializer,
    BookingStatsSerializer,
    BookingStatusSerializer,
)

logger = logging.getLogger(__name__)


def filter_by_status(queryset, value):
    """Narrow to one status when ``value`` is given; bad values raise InvalidStatus."""
    if not value:
        return queryset
    return queryset.filter(status=BookingStatus.parse(value).value)


class BookingViewSet(viewsets.GenericViewSet):
    """Booking placement, listing, cancellation and status management."""

    queryset = Booking.objects.select_related("room", "room__hotel", "user").order_by("-created_at")
    serializer_class = BookingSerializer
    permission_classes = [permissions.IsAuthenticated]
    lookup_value_regex = UUID_PATTERN

    def get_permissions(self):  # type: ignore
        if self.action in {"all_bookings", "change_status", "stats_summary"}:
            return [permissions.IsAuthenticated(), IsAdmin()]
        return super().get_permissions()

    def get_serializer_class(self):  # type: ignore
        if self.action == "create":
            return BookingCreateSerializer
        if self.action == "change_status":
            return BookingStatusSerializer
        return BookingSerializer

    def _respond_with(self, booking_id, status_code=status.HTTP_200_OK):
        booking = self.get_queryset().get(pk=booking_id)
        data = BookingSerializer(booking, context=self.get_serializer_context()).data
        return Response(data, status=status_code)

    def _paginated(self, queryset):
        page = self.paginate_queryset(queryset)
        if page is not None:
            serializer = BookingSerializer(page, many=True, context=self.get_serializer_context())
            return self.get_paginated_response(serializer.data)
        serializer = BookingSerializer(queryset, many=True, context=self.get_serializer_context())
        return Response(serializer.data)

    def create(self, request, *args, **kwargs):  # type: ignore
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        handler = CreateBookingHandler(get_booking_store())
        booking = handler.handle(CreateBookingCommand(
            user_id=request.user.pk,
            room_id=data["roomId"],
            check_in=data["checkinDate"],
            check_out=data["checkoutDate"],
            guests=data["guests"],
        ))
        return self._respond_with(booking.id, status.HTTP_201_CREATED)

    def retrieve(self, request, *args, **kwargs):  # type: ignore
        booking = self.get_object()
        actor = Actor.from_user(request.user)
        if not (actor.is_admin or actor.owns(booking.user_id)):
            raise Forbidden("You can only view your own bookings")
        return Response(BookingSerializer(booking, context=self.get_serializer_context()).data)

    @action(detail=False, methods=["get"], url_path="my-bookings")
    def my_bookings(self, request):  # type: ignore
        queryset = self.get_queryset().filter(user=request.user)
        queryset = filter_by_status(queryset, request.query_params.get("status"))
        return self._paginated(queryset)

    @action(detail=False, methods=["get"], url_path="all")
    def all_bookings(self, request):  # type: ignore
        query = BookingListQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)
        queryset = filter_by_status(self.get_queryset(), query.validated_data.get("status"))
        hotel_id = query.validated_data.get("hotelId")
        if hotel_id:
            queryset = queryset.filter(room__hotel_id=hotel_id)
        return self._paginated(queryset)

    @action(detail=True, methods=["put"], url_path="status")
    def change_status(self, request, pk=None):  # type: ignore
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        handler = ChangeBookingStatusHandler(get_booking_store())
        booking = handler.handle(ChangeBookingStatusCommand(
            actor=Actor.from_user(request.user),
            booking_id=pk,
            status=serializer.validated_data["status"],
        ))
        return self._respond_with(booking.id)

    @action(detail=True, methods=["put"])
    def cancel(self, request, pk=None):  # type: ignore
        handler = CancelBookingHandler(get_booking_store())
        booking = handler.handle(CancelBookingCommand(
            actor=Actor.from_user(request.user),
            booking_id=pk,
        ))
        return self._respond_with(booking.id)

    @action(detail=False, methods=["get"], url_path="stats/summary")
    def stats_summary(self, request):  # type: ignore
        counts = Booking.objects.aggregate(
            totalBookings=Count("id"),
            pendingBookings=Count("id", filter=Q(status=Booking.Status.PENDING)),
            confirmedBookings=Count("id", filter=Q(status=Booking.Status.CONFIRMED)),
            cancelledBookings=Count("id", filter=Q(status=Booking.Status.CANCELLED)),
            completedBookings=Count("id", filter=Q(status=Booking.Status.COMPLETED)),
        )
        counts["totalRevenue"] = Booking.objects.revenue()
        return Response(BookingStatsSerializer(counts).data)
