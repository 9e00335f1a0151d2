"""
Booking Domain Events

Published through the message bus after the unit of work commits.
"""

from dataclasses import dataclass
from uuid import UUID

from shared.domain.base import DomainEvent
from shared.domain.value_objects import DateRange, Money


@dataclass(kw_only=True)
class BookingCreated(DomainEvent):
    booking_id: UUID
    room_id: UUID
    user_id: int
    dates: DateRange
    total_price: Money

    def to_dict(self) -> dict:
        data = super().to_dict()
        data.update({
            'booking_id': str(self.booking_id),
            'room_id': str(self.room_id),
            'user_id': self.user_id,
            'check_in': self.dates.start_date.isoformat(),
            'check_out': self.dates.end_date.isoformat(),
            'total_price': str(self.total_price.amount),
            'currency': self.total_price.currency,
        })
        return data


@dataclass(kw_only=True)
class BookingCancelled(DomainEvent):
    booking_id: UUID
    room_id: UUID
    cancelled_by: int
    old_status: str

    def to_dict(self) -> dict:
        data = super().to_dict()
        data.update({
            'booking_id': str(self.booking_id),
            'room_id': str(self.room_id),
            'cancelled_by': self.cancelled_by,
            'old_status': self.old_status,
        })
        return data


@dataclass(kw_only=True)
class BookingStatusChanged(DomainEvent):
    booking_id: UUID
    old_status: str
    new_status: str
    changed_by: int

    def to_dict(self) -> dict:
        data = super().to_dict()
        data.update({
            'booking_id': str(self.booking_id),
            'old_status': self.old_status,
            'new_status': self.new_status,
            'changed_by': self.changed_by,
        })
        return data
