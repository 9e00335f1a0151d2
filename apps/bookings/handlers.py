"""
Booking event handlers

Subscribers for booking domain events, registered on the message bus
when the app is ready.
"""

import logging

from shared.application.message_bus import message_bus

from apps.bookings.domain.events import BookingCancelled, BookingCreated, BookingStatusChanged

audit_logger = logging.getLogger("apps.bookings.audit")


def audit_booking_event(event):
    """Write one audit line per booking event."""
    audit_logger.info(
        f"{type(event).__name__} booking={event.booking_id}",
        extra={"booking_event": event.to_dict()},
    )


def register_handlers(bus=message_bus):
    for event_type in (BookingCreated, BookingCancelled, BookingStatusChanged):
        bus.register_event_handler(event_type, audit_booking_event)
