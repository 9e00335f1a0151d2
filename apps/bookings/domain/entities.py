"""
Booking Domain Entities

- BookingStatus: FSM states for the booking lifecycle
- Room: the inventory pool a booking draws from
- Booking: aggregate representing one reservation
"""

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from uuid import UUID

from shared.domain.base import Aggregate
from shared.domain.exceptions import (
    AlreadyCancelled,
    CannotCancel,
    Forbidden,
    InvalidRange,
    InvalidStatus,
    InvalidTransition,
)
from shared.domain.identity import Actor
from shared.domain.value_objects import DateRange, Money

MIN_GUESTS = 1
MAX_GUESTS = 10


class BookingStatus(Enum):
    """
    Booking Status Finite State Machine

    State transitions:
    - PENDING -> CONFIRMED (admin)
    - PENDING -> CANCELLED (owner or admin)
    - CONFIRMED -> CANCELLED (owner or admin)
    - CONFIRMED -> COMPLETED (admin)
    CANCELLED and COMPLETED are terminal.
    """
    PENDING = 'PENDING'
    CONFIRMED = 'CONFIRMED'
    CANCELLED = 'CANCELLED'
    COMPLETED = 'COMPLETED'

    @classmethod
    def parse(cls, value) -> 'BookingStatus':
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).upper())
        except ValueError:
            raise InvalidStatus() from None


# Bookings in these states hold a unit of the room's inventory
ACTIVE_STATUSES = (BookingStatus.PENDING, BookingStatus.CONFIRMED)

ALLOWED_TRANSITIONS = {
    BookingStatus.PENDING: {BookingStatus.CONFIRMED, BookingStatus.CANCELLED},
    BookingStatus.CONFIRMED: {BookingStatus.CANCELLED, BookingStatus.COMPLETED},
    BookingStatus.CANCELLED: set(),
    BookingStatus.COMPLETED: set(),
}


def make_date_range(check_in, check_out) -> DateRange:
    """Build a stay range, reporting an ill-ordered one as InvalidRange."""
    if check_in is None or check_out is None:
        raise InvalidRange("Check-in and check-out dates are required")
    if check_out <= check_in:
        raise InvalidRange("Check-out date must be after check-in date")
    return DateRange(check_in, check_out)


def validate_guests(guests) -> int:
    if isinstance(guests, bool) or not isinstance(guests, int):
        raise InvalidRange("Number of guests must be a whole number")
    if not MIN_GUESTS <= guests <= MAX_GUESTS:
        raise InvalidRange(f"Number of guests must be between {MIN_GUESTS} and {MAX_GUESTS}")
    return guests


@dataclass(frozen=True)
class Room:
    """
    Room inventory pool

    ``total_rooms`` interchangeable units of one type in one hotel.
    ``available_rooms`` is the advertised hint kept by administrators;
    availability is always derived from live bookings instead.
    """
    id: UUID
    hotel_id: UUID
    room_type: str
    price: Money
    total_rooms: int
    available_rooms: int = 0

    def price_for(self, dates: DateRange) -> Money:
        return self.price * dates.nights


@dataclass(kw_only=True, eq=False)
class Booking(Aggregate):
    """
    Booking Aggregate Root

    Key invariants:
    - check_in < check_out (enforced by DateRange)
    - 1 <= guests <= 10
    - CANCELLED and COMPLETED are terminal
    """

    user_id: int
    room_id: UUID
    dates: DateRange
    guests: int
    total_price: Money
    status: BookingStatus = BookingStatus.PENDING

    @classmethod
    def place(cls, user_id: int, room: Room, dates: DateRange, guests: int) -> 'Booking':
        """Create a new PENDING booking priced from the room's nightly rate."""
        from apps.bookings.domain.events import BookingCreated

        booking = cls(
            user_id=user_id,
            room_id=room.id,
            dates=dates,
            guests=validate_guests(guests),
            total_price=room.price_for(dates),
        )
        booking.add_event(BookingCreated(
            aggregate_id=booking.id,
            booking_id=booking.id,
            room_id=room.id,
            user_id=user_id,
            dates=dates,
            total_price=booking.total_price,
        ))
        return booking

    def cancel(self, actor: Actor):
        """
        Cancel on behalf of the owner or an administrator

        Events: BookingCancelled
        """
        if not (actor.is_admin or actor.owns(self.user_id)):
            raise Forbidden("You can only cancel your own bookings")
        if self.status is BookingStatus.CANCELLED:
            raise AlreadyCancelled()
        if self.status is BookingStatus.COMPLETED:
            raise CannotCancel()

        from apps.bookings.domain.events import BookingCancelled

        old_status = self.status
        self.status = BookingStatus.CANCELLED
        self.add_event(BookingCancelled(
            aggregate_id=self.id,
            booking_id=self.id,
            room_id=self.room_id,
            cancelled_by=actor.user_id,
            old_status=old_status.value,
        ))

    def change_status(self, actor: Actor, new_status: BookingStatus):
        """
        Administrative status change along the FSM

        A change to CANCELLED is a cancellation and follows ``cancel``.

        Events: BookingStatusChanged, or BookingCancelled
        """
        if not actor.is_admin:
            raise Forbidden("Admin privileges required")
        if new_status is BookingStatus.CANCELLED:
            self.cancel(actor)
            return
        if new_status not in ALLOWED_TRANSITIONS[self.status]:
            raise InvalidTransition(
                f"Cannot change booking status from {self.status.value} to {new_status.value}"
            )

        from apps.bookings.domain.events import BookingStatusChanged

        old_status = self.status
        self.status = new_status
        self.add_event(BookingStatusChanged(
            aggregate_id=self.id,
            booking_id=self.id,
            old_status=old_status.value,
            new_status=new_status.value,
            changed_by=actor.user_id,
        ))

    def holds_inventory(self) -> bool:
        return self.status in ACTIVE_STATUSES

    @property
    def nights(self) -> int:
        return self.dates.nights

    @property
    def total_amount(self) -> Decimal:
        return self.total_price.amount

    def __str__(self):
        return f"Booking {self.id} ({self.status.value})"

    def __repr__(self):
        return (
            f"Booking(id={self.id}, room_id={self.room_id}, "
            f"status={self.status.value}, dates={self.dates})"
        )
