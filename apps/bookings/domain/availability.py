"""
Room availability

A room row is a pool of ``total_rooms`` interchangeable units, so
availability is a count: every active booking whose stay overlaps the
requested one takes one unit.
"""

from dataclasses import dataclass
from typing import Iterable
from uuid import UUID

from shared.domain.value_objects import DateRange

from apps.bookings.domain.entities import Booking


def count_overlapping(bookings: Iterable[Booking], room_id: UUID, dates: DateRange) -> int:
    """Number of active bookings of ``room_id`` whose stay overlaps ``dates``."""
    return sum(
        1 for booking in bookings
        if booking.room_id == room_id
        and booking.holds_inventory()
        and booking.dates.overlaps_with(dates)
    )


@dataclass(frozen=True)
class Availability:
    """Result of an availability check for one room and one stay."""
    room_id: UUID
    dates: DateRange
    total_rooms: int
    booked_count: int

    @property
    def available_count(self) -> int:
        return max(0, self.total_rooms - self.booked_count)

    @property
    def is_available(self) -> bool:
        return self.available_count > 0

    def to_dict(self) -> dict:
        return {
            'roomId': str(self.room_id),
            'checkinDate': self.dates.start_date.isoformat(),
            'checkoutDate': self.dates.end_date.isoformat(),
            'totalRooms': self.total_rooms,
            'bookedRooms': self.booked_count,
            'availableRooms': self.available_count,
            'isAvailable': self.is_available,
        }
