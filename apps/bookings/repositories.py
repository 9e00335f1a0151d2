"""Django ORM implementation of the booking store."""

from __future__ import annotations

from uuid import UUID

from django.db import transaction  # type: ignore
from django.db.utils import NotSupportedError  # type: ignore
from django.utils import timezone  # type: ignore

from apps.bookings.domain.entities import Booking, BookingStatus
from apps.bookings.domain.ports import BookingStore
from apps.bookings.models import Booking as BookingModel
from apps.rooms.models import Room as RoomModel
from shared.domain.value_objects import DateRange, Money


def _lock_queryset_if_possible(queryset):
    """Apply select_for_update when inside transaction.atomic()."""

    if not transaction.get_connection().in_atomic_block:
        return queryset

    try:
        return queryset.select_for_update()
    except NotSupportedError:
        return queryset


def booking_to_domain(record: BookingModel) -> Booking:
    return Booking(
        id=record.id,
        created_at=record.created_at,
        updated_at=record.updated_at,
        user_id=record.user_id,
        room_id=record.room_id,
        dates=DateRange(record.check_in, record.check_out),
        guests=record.guests,
        total_price=Money(record.total_price),
        status=BookingStatus(record.status),
    )


class DjangoBookingStore(BookingStore):

    def get_room(self, room_id: UUID, lock: bool = False):
        queryset = RoomModel.objects.filter(pk=room_id)
        if lock:
            queryset = _lock_queryset_if_possible(queryset)
        record = queryset.first()
        return record.to_domain() if record else None

    def count_overlapping(self, room_id: UUID, dates: DateRange) -> int:
        return (
            BookingModel.objects.active()
            .filter(room_id=room_id)
            .overlapping(dates.start_date, dates.end_date)
            .count()
        )

    def get_booking(self, booking_id: UUID, lock: bool = False):
        queryset = BookingModel.objects.filter(pk=booking_id)
        if lock:
            queryset = _lock_queryset_if_possible(queryset)
        record = queryset.first()
        return booking_to_domain(record) if record else None

    def add_booking(self, booking: Booking) -> Booking:
        BookingModel.objects.create(
            id=booking.id,
            user_id=booking.user_id,
            room_id=booking.room_id,
            check_in=booking.dates.start_date,
            check_out=booking.dates.end_date,
            guests=booking.guests,
            total_price=booking.total_amount,
            status=booking.status.value,
        )
        return booking

    def save_booking(self, booking: Booking) -> Booking:
        BookingModel.objects.filter(pk=booking.id).update(
            status=booking.status.value,
            guests=booking.guests,
            total_price=booking.total_amount,
            check_in=booking.dates.start_date,
            check_out=booking.dates.end_date,
            updated_at=timezone.now(),
        )
        return booking


def get_booking_store() -> BookingStore:
    return DjangoBookingStore()
