"""Unit tests for availability counting and the booking use cases."""

from __future__ import annotations

from datetime import date
from decimal import Decimal
from uuid import uuid4

from django.test import SimpleTestCase

from shared.domain.exceptions import (
    AlreadyCancelled,
    CannotCancel,
    Forbidden,
    InvalidRange,
    InvalidStatus,
    InvalidTransition,
    NotFound,
    RoomUnavailable,
)
from shared.domain.identity import Actor, Role
from shared.domain.value_objects import DateRange, Money

from apps.bookings.application.command_handlers import (
    AvailabilityChecker,
    CancelBookingCommand,
    CancelBookingHandler,
    ChangeBookingStatusCommand,
    ChangeBookingStatusHandler,
    CreateBookingCommand,
    CreateBookingHandler,
)
from apps.bookings.domain.entities import Booking, BookingStatus, Room
from apps.bookings.domain.events import BookingCancelled, BookingCreated, BookingStatusChanged

from .fakes import FakeUnitOfWork, InMemoryBookingStore

OWNER = Actor(user_id=1)
STRANGER = Actor(user_id=2)
ADMIN = Actor(user_id=99, role=Role.ADMIN)


def make_room(total_rooms=1, price="2000.00"):
    return Room(
        id=uuid4(),
        hotel_id=uuid4(),
        room_type="Deluxe",
        price=Money(Decimal(price)),
        total_rooms=total_rooms,
    )


def make_booking(room, start, end, status=BookingStatus.CONFIRMED, user_id=OWNER.user_id):
    dates = DateRange(start, end)
    return Booking(
        user_id=user_id,
        room_id=room.id,
        dates=dates,
        guests=2,
        total_price=room.price_for(dates),
        status=status,
    )


class DateRangeTests(SimpleTestCase):
    def test_overlapping_stays(self) -> None:
        first = DateRange(date(2024, 1, 10), date(2024, 1, 15))
        self.assertTrue(first.overlaps_with(DateRange(date(2024, 1, 14), date(2024, 1, 20))))

    def test_back_to_back_stays_do_not_overlap(self) -> None:
        first = DateRange(date(2024, 1, 10), date(2024, 1, 15))
        self.assertFalse(first.overlaps_with(DateRange(date(2024, 1, 15), date(2024, 1, 20))))

    def test_nights(self) -> None:
        self.assertEqual(DateRange(date(2024, 1, 10), date(2024, 1, 13)).nights, 3)


class AvailabilityCheckerTests(SimpleTestCase):
    def setUp(self) -> None:
        self.room = make_room(total_rooms=2)
        self.store = InMemoryBookingStore(rooms=[self.room])
        self.checker = AvailabilityChecker(self.store)

    def test_counts_only_active_overlapping_bookings(self) -> None:
        self.store.bookings = {
            b.id: b
            for b in [
                make_booking(self.room, date(2024, 1, 10), date(2024, 1, 15)),
                make_booking(self.room, date(2024, 1, 12), date(2024, 1, 14), BookingStatus.CANCELLED),
                make_booking(self.room, date(2024, 1, 15), date(2024, 1, 18), BookingStatus.PENDING),
                make_booking(self.room, date(2024, 1, 1), date(2024, 1, 5), BookingStatus.COMPLETED),
            ]
        }

        availability = self.checker.check(self.room.id, date(2024, 1, 14), date(2024, 1, 16))

        self.assertEqual(availability.booked_count, 2)
        self.assertEqual(availability.available_count, 0)
        self.assertFalse(availability.is_available)

    def test_free_room_reports_whole_inventory(self) -> None:
        availability = self.checker.check(self.room.id, date(2024, 2, 1), date(2024, 2, 3))

        self.assertEqual(availability.to_dict()["availableRooms"], 2)
        self.assertTrue(availability.is_available)

    def test_available_count_never_negative(self) -> None:
        room = make_room(total_rooms=1)
        self.store.rooms[room.id] = room
        for _ in range(3):
            booking = make_booking(room, date(2024, 3, 1), date(2024, 3, 4))
            self.store.bookings[booking.id] = booking

        availability = self.checker.check(room.id, date(2024, 3, 2), date(2024, 3, 3))

        self.assertEqual(availability.booked_count, 3)
        self.assertEqual(availability.available_count, 0)

    def test_reversed_range_is_invalid(self) -> None:
        with self.assertRaises(InvalidRange):
            self.checker.check(self.room.id, date(2024, 1, 15), date(2024, 1, 15))

    def test_unknown_room(self) -> None:
        with self.assertRaises(NotFound):
            self.checker.check(uuid4(), date(2024, 1, 10), date(2024, 1, 12))


class CreateBookingHandlerTests(SimpleTestCase):
    def setUp(self) -> None:
        FakeUnitOfWork.published = []
        self.room = make_room(total_rooms=1, price="2000.00")
        self.store = InMemoryBookingStore(rooms=[self.room])
        self.handler = CreateBookingHandler(self.store, uow_factory=FakeUnitOfWork)

    def _command(self, check_in, check_out, guests=2, room_id=None):
        return CreateBookingCommand(
            user_id=OWNER.user_id,
            room_id=room_id or self.room.id,
            check_in=check_in,
            check_out=check_out,
            guests=guests,
        )

    def test_prices_nightly_rate_times_nights(self) -> None:
        booking = self.handler.handle(self._command(date(2024, 5, 1), date(2024, 5, 4)))

        self.assertEqual(booking.total_price.amount, Decimal("6000.00"))
        self.assertEqual(booking.status, BookingStatus.PENDING)
        self.assertIn(booking.id, self.store.bookings)
        self.assertEqual(self.store.locked_rooms, [self.room.id])

    def test_publishes_created_event_on_commit(self) -> None:
        booking = self.handler.handle(self._command(date(2024, 5, 1), date(2024, 5, 4)))

        self.assertEqual(len(FakeUnitOfWork.published), 1)
        event = FakeUnitOfWork.published[0]
        self.assertIsInstance(event, BookingCreated)
        self.assertEqual(event.booking_id, booking.id)

    def test_fully_booked_room_is_unavailable(self) -> None:
        existing = make_booking(self.room, date(2024, 5, 1), date(2024, 5, 10))
        self.store.bookings[existing.id] = existing

        with self.assertRaises(RoomUnavailable):
            self.handler.handle(self._command(date(2024, 5, 2), date(2024, 5, 4)))
        self.assertEqual(len(self.store.bookings), 1)
        self.assertEqual(FakeUnitOfWork.published, [])

    def test_inventory_caps_overlapping_bookings(self) -> None:
        room = make_room(total_rooms=3)
        self.store.rooms[room.id] = room

        for _ in range(3):
            self.handler.handle(self._command(date(2024, 6, 1), date(2024, 6, 5), room_id=room.id))

        with self.assertRaises(RoomUnavailable):
            self.handler.handle(self._command(date(2024, 6, 3), date(2024, 6, 4), room_id=room.id))

    def test_checkout_must_follow_checkin(self) -> None:
        with self.assertRaises(InvalidRange):
            self.handler.handle(self._command(date(2024, 5, 4), date(2024, 5, 1)))

    def test_guest_count_bounds(self) -> None:
        for guests in (0, 11):
            with self.subTest(guests=guests):
                with self.assertRaises(InvalidRange):
                    self.handler.handle(self._command(date(2024, 5, 1), date(2024, 5, 2), guests=guests))

    def test_unknown_room(self) -> None:
        with self.assertRaises(NotFound):
            self.handler.handle(self._command(date(2024, 5, 1), date(2024, 5, 2), room_id=uuid4()))


class CancelBookingHandlerTests(SimpleTestCase):
    def setUp(self) -> None:
        FakeUnitOfWork.published = []
        self.room = make_room()
        self.store = InMemoryBookingStore(rooms=[self.room])
        self.handler = CancelBookingHandler(self.store, uow_factory=FakeUnitOfWork)

    def _store_booking(self, status):
        booking = make_booking(self.room, date(2024, 7, 1), date(2024, 7, 3), status)
        self.store.bookings[booking.id] = booking
        return booking

    def test_owner_cancels_pending_booking(self) -> None:
        booking = self._store_booking(BookingStatus.PENDING)

        cancelled = self.handler.handle(CancelBookingCommand(actor=OWNER, booking_id=booking.id))

        self.assertEqual(cancelled.status, BookingStatus.CANCELLED)
        self.assertEqual(self.store.bookings[booking.id].status, BookingStatus.CANCELLED)
        self.assertIsInstance(FakeUnitOfWork.published[0], BookingCancelled)

    def test_second_cancel_is_rejected(self) -> None:
        booking = self._store_booking(BookingStatus.PENDING)
        command = CancelBookingCommand(actor=OWNER, booking_id=booking.id)
        self.handler.handle(command)

        with self.assertRaises(AlreadyCancelled):
            self.handler.handle(command)

    def test_completed_booking_cannot_be_cancelled(self) -> None:
        booking = self._store_booking(BookingStatus.COMPLETED)

        with self.assertRaises(CannotCancel):
            self.handler.handle(CancelBookingCommand(actor=OWNER, booking_id=booking.id))

    def test_stranger_cannot_cancel(self) -> None:
        booking = self._store_booking(BookingStatus.CONFIRMED)

        with self.assertRaises(Forbidden):
            self.handler.handle(CancelBookingCommand(actor=STRANGER, booking_id=booking.id))
        self.assertEqual(self.store.bookings[booking.id].status, BookingStatus.CONFIRMED)

    def test_admin_cancels_any_booking(self) -> None:
        booking = self._store_booking(BookingStatus.CONFIRMED)

        cancelled = self.handler.handle(CancelBookingCommand(actor=ADMIN, booking_id=booking.id))

        self.assertEqual(cancelled.status, BookingStatus.CANCELLED)

    def test_cancelled_booking_frees_inventory(self) -> None:
        booking = self._store_booking(BookingStatus.CONFIRMED)
        checker = AvailabilityChecker(self.store)
        self.assertFalse(checker.check(self.room.id, date(2024, 7, 1), date(2024, 7, 2)).is_available)

        self.handler.handle(CancelBookingCommand(actor=OWNER, booking_id=booking.id))

        self.assertTrue(checker.check(self.room.id, date(2024, 7, 1), date(2024, 7, 2)).is_available)

    def test_unknown_booking(self) -> None:
        with self.assertRaises(NotFound):
            self.handler.handle(CancelBookingCommand(actor=OWNER, booking_id=uuid4()))


class ChangeBookingStatusHandlerTests(SimpleTestCase):
    def setUp(self) -> None:
        FakeUnitOfWork.published = []
        self.room = make_room()
        self.store = InMemoryBookingStore(rooms=[self.room])
        self.handler = ChangeBookingStatusHandler(self.store, uow_factory=FakeUnitOfWork)

    def _store_booking(self, status):
        booking = make_booking(self.room, date(2024, 8, 1), date(2024, 8, 3), status)
        self.store.bookings[booking.id] = booking
        return booking

    def _change(self, booking, status, actor=ADMIN):
        return self.handler.handle(
            ChangeBookingStatusCommand(actor=actor, booking_id=booking.id, status=status)
        )

    def test_allowed_transitions(self) -> None:
        cases = [
            (BookingStatus.PENDING, "CONFIRMED"),
            (BookingStatus.PENDING, "CANCELLED"),
            (BookingStatus.CONFIRMED, "COMPLETED"),
            (BookingStatus.CONFIRMED, "cancelled"),
        ]
        for start, target in cases:
            with self.subTest(start=start, target=target):
                booking = self._change(self._store_booking(start), target)
                self.assertEqual(booking.status.value, target.upper())

    def test_forbidden_transitions(self) -> None:
        cases = [
            (BookingStatus.PENDING, "COMPLETED"),
            (BookingStatus.CANCELLED, "CONFIRMED"),
            (BookingStatus.COMPLETED, "PENDING"),
            (BookingStatus.CONFIRMED, "CONFIRMED"),
        ]
        for start, target in cases:
            with self.subTest(start=start, target=target):
                with self.assertRaises(InvalidTransition):
                    self._change(self._store_booking(start), target)

    def test_cancelled_status_follows_cancellation_rules(self) -> None:
        with self.assertRaises(AlreadyCancelled):
            self._change(self._store_booking(BookingStatus.CANCELLED), "CANCELLED")
        with self.assertRaises(CannotCancel):
            self._change(self._store_booking(BookingStatus.COMPLETED), "CANCELLED")

    def test_cancelled_status_emits_cancelled_event(self) -> None:
        self._change(self._store_booking(BookingStatus.CONFIRMED), "CANCELLED")

        event = FakeUnitOfWork.published[0]
        self.assertIsInstance(event, BookingCancelled)
        self.assertEqual((event.old_status, event.cancelled_by), ("CONFIRMED", ADMIN.user_id))

    def test_unknown_status_value(self) -> None:
        with self.assertRaises(InvalidStatus):
            self._change(self._store_booking(BookingStatus.PENDING), "ARCHIVED")

    def test_requires_admin(self) -> None:
        with self.assertRaises(Forbidden):
            self._change(self._store_booking(BookingStatus.PENDING), "CONFIRMED", actor=OWNER)

    def test_emits_status_changed_event(self) -> None:
        self._change(self._store_booking(BookingStatus.PENDING), "CONFIRMED")

        event = FakeUnitOfWork.published[0]
        self.assertIsInstance(event, BookingStatusChanged)
        self.assertEqual((event.old_status, event.new_status), ("PENDING", "CONFIRMED"))
