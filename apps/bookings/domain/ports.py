"""
Booking Store port

Persistence interface the availability checker and the booking command
handlers depend on. The Django ORM implementation lives in
``apps.bookings.repositories``; tests substitute an in-memory store.
"""

from abc import ABC, abstractmethod
from uuid import UUID

from shared.domain.value_objects import DateRange

from apps.bookings.domain.entities import Booking, Room


class BookingStore(ABC):

    @abstractmethod
    def get_room(self, room_id: UUID, lock: bool = False) -> Room | None:
        """
        Load a room

        With ``lock=True`` the room row stays locked until the
        surrounding transaction ends, which serializes concurrent
        bookers of the same room.
        """

    @abstractmethod
    def count_overlapping(self, room_id: UUID, dates: DateRange) -> int:
        """Count PENDING/CONFIRMED bookings of the room overlapping ``dates``."""

    @abstractmethod
    def get_booking(self, booking_id: UUID, lock: bool = False) -> Booking | None:
        """Load a booking, optionally locking its row like ``get_room``"""

    @abstractmethod
    def add_booking(self, booking: Booking) -> Booking:
        """Persist a new booking"""

    @abstractmethod
    def save_booking(self, booking: Booking) -> Booking:
        """Persist changes to an existing booking"""
