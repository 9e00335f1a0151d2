"""
Booking Command Handlers

Use cases of the booking domain. Each handler receives its
BookingStore and unit-of-work factory explicitly.

Queries:
- AvailabilityChecker: free inventory of a room for a stay

Commands:
- CreateBookingCommand: Place a new PENDING booking
- CancelBookingCommand: Cancel a booking (owner or admin)
- ChangeBookingStatusCommand: Administrative status change
"""

from dataclasses import dataclass
from datetime import date
from uuid import UUID
import logging

from shared.application.uow import DjangoUnitOfWork
from shared.domain.exceptions import NotFound, RoomUnavailable
from shared.domain.identity import Actor
from shared.domain.value_objects import DateRange

from apps.bookings.domain.availability import Availability
from apps.bookings.domain.entities import (
    Booking,
    BookingStatus,
    Room,
    make_date_range,
    validate_guests,
)
from apps.bookings.domain.ports import BookingStore

logger = logging.getLogger(__name__)


# ===== Commands =====

@dataclass
class CreateBookingCommand:
    user_id: int
    room_id: UUID
    check_in: date
    check_out: date
    guests: int


@dataclass
class CancelBookingCommand:
    actor: Actor
    booking_id: UUID


@dataclass
class ChangeBookingStatusCommand:
    actor: Actor
    booking_id: UUID
    status: str


# ===== Queries =====

class AvailabilityChecker:
    """
    Counts how many units of a room are free for a stay.

    Two stays [a, b) and [c, d) overlap iff a < d and c < b; every
    overlapping PENDING or CONFIRMED booking takes one unit.
    """

    def __init__(self, store: BookingStore):
        self.store = store

    def check(self, room_id: UUID, check_in: date, check_out: date) -> Availability:
        dates = make_date_range(check_in, check_out)
        return self.check_range(room_id, dates)

    def check_range(self, room_id: UUID, dates: DateRange, lock: bool = False) -> Availability:
        room = self.store.get_room(room_id, lock=lock)
        if room is None:
            raise NotFound("Room not found")
        return self.availability_for(room, dates)

    def availability_for(self, room: Room, dates: DateRange) -> Availability:
        booked = self.store.count_overlapping(room.id, dates)
        return Availability(
            room_id=room.id,
            dates=dates,
            total_rooms=room.total_rooms,
            booked_count=booked,
        )


# ===== Command Handlers =====

class CreateBookingHandler:
    """
    Places a booking after an availability check.

    1. Validate the stay and guest count
    2. Open the unit of work (one transaction)
    3. Lock the room row and count overlapping active bookings
    4. Price the stay: nightly rate x nights
    5. Insert the PENDING booking, commit, publish events
    """

    def __init__(self, store: BookingStore, uow_factory=DjangoUnitOfWork):
        self.store = store
        self.uow_factory = uow_factory
        self.checker = AvailabilityChecker(store)

    def handle(self, command: CreateBookingCommand) -> Booking:
        dates = make_date_range(command.check_in, command.check_out)
        guests = validate_guests(command.guests)

        logger.info(
            f"Creating booking for room {command.room_id}, "
            f"user {command.user_id}, dates {dates}"
        )

        with self.uow_factory() as uow:
            room = self.store.get_room(command.room_id, lock=True)
            if room is None:
                raise NotFound("Room not found")

            availability = self.checker.availability_for(room, dates)
            if not availability.is_available:
                logger.warning(
                    f"Room {room.id} unavailable for {dates}: "
                    f"{availability.booked_count}/{availability.total_rooms} booked"
                )
                raise RoomUnavailable()

            booking = Booking.place(command.user_id, room, dates, guests)

            uow.collect_events(booking)
            self.store.add_booking(booking)

        logger.info(
            f"Booking {booking.id} created: {booking.nights} nights, "
            f"total {booking.total_price}"
        )
        return booking


class CancelBookingHandler:
    """Cancels a booking on behalf of its owner or an administrator."""

    def __init__(self, store: BookingStore, uow_factory=DjangoUnitOfWork):
        self.store = store
        self.uow_factory = uow_factory

    def handle(self, command: CancelBookingCommand) -> Booking:
        logger.info(f"Cancelling booking {command.booking_id} by user {command.actor.user_id}")

        with self.uow_factory() as uow:
            booking = self.store.get_booking(command.booking_id, lock=True)
            if booking is None:
                raise NotFound("Booking not found")

            booking.cancel(command.actor)

            uow.collect_events(booking)
            self.store.save_booking(booking)

        logger.info(f"Booking {booking.id} cancelled")
        return booking


class ChangeBookingStatusHandler:
    """Moves a booking along the status FSM (administrators only)."""

    def __init__(self, store: BookingStore, uow_factory=DjangoUnitOfWork):
        self.store = store
        self.uow_factory = uow_factory

    def handle(self, command: ChangeBookingStatusCommand) -> Booking:
        new_status = BookingStatus.parse(command.status)

        with self.uow_factory() as uow:
            booking = self.store.get_booking(command.booking_id, lock=True)
            if booking is None:
                raise NotFound("Booking not found")

            booking.change_status(command.actor, new_status)

            uow.collect_events(booking)
            self.store.save_booking(booking)

        logger.info(f"Booking {booking.id} moved to {new_status.value}")
        return booking
