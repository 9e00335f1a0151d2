"""Integration tests for booking API endpoints."""

from __future__ import annotations

import json
from datetime import timedelta
from decimal import Decimal

import structlog
from django.conf import settings
from django.urls import NoReverseMatch, reverse
from django.utils import timezone
from rest_framework import status
from rest_framework.test import APITestCase

from apps.bookings.models import Booking
from apps.hotels.models import Hotel
from apps.rooms.models import Room
from apps.users.models import User


class BookingAPITestCase(APITestCase):
    def setUp(self) -> None:
        self.guest = User.objects.create_user(
            email="guest@example.com",
            name="Guest",
            phone="+919800000001",
            password="GuestPass123",
        )
        self.other = User.objects.create_user(
            email="other@example.com",
            name="Other",
            phone="+919800000002",
            password="OtherPass123",
        )
        self.admin = User.objects.create_user(
            email="admin@example.com",
            name="Admin",
            phone="+919800000003",
            password="AdminPass123",
            role=User.RoleChoices.ADMIN,
        )
        self.hotel = Hotel.objects.create(
            name="Sea Breeze",
            city="Goa",
            address="12 Beach Road, Calangute",
            rating=Decimal("4.5"),
        )
        self.room = Room.objects.create(
            hotel=self.hotel,
            type=Room.RoomType.DELUXE,
            price=Decimal("2000.00"),
            total_rooms=1,
            available_rooms=1,
        )
        self.today = timezone.localdate()
        self.list_url = reverse("booking-list")

    def _payload(self, start_offset: int, nights: int, guests: int = 2) -> dict:
        check_in = self.today + timedelta(days=start_offset)
        return {
            "roomId": str(self.room.id),
            "checkinDate": str(check_in),
            "checkoutDate": str(check_in + timedelta(days=nights)),
            "guests": guests,
        }

    def _make_booking(self, user, start_offset: int, nights: int, status_value=Booking.Status.CONFIRMED):
        check_in = self.today + timedelta(days=start_offset)
        return Booking.objects.create(
            user=user,
            room=self.room,
            check_in=check_in,
            check_out=check_in + timedelta(days=nights),
            guests=2,
            total_price=self.room.price * nights,
            status=status_value,
        )


class CreateBookingAPITests(BookingAPITestCase):
    def test_guest_can_create_booking(self) -> None:
        self.client.force_authenticate(self.guest)

        response = self.client.post(self.list_url, self._payload(5, 3), format="json")

        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)
        self.assertEqual(response.data["status"], "PENDING")
        self.assertEqual(response.data["totalPrice"], Decimal("6000.00"))
        self.assertEqual(response.data["room"]["hotel"]["name"], "Sea Breeze")
        booking = Booking.objects.get()
        self.assertEqual(booking.user, self.guest)
        self.assertEqual(booking.nights, 3)

    def test_requires_authentication(self) -> None:
        response = self.client.post(self.list_url, self._payload(5, 3), format="json")

        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)
        self.assertEqual(response.data["error"], "Access Denied")

    def test_prevent_overbooking_on_overlap(self) -> None:
        self.client.force_authenticate(self.guest)
        first = self.client.post(self.list_url, self._payload(5, 3), format="json")
        self.assertEqual(first.status_code, status.HTTP_201_CREATED, first.data)

        conflict = self.client.post(self.list_url, self._payload(6, 3), format="json")

        self.assertEqual(conflict.status_code, status.HTTP_400_BAD_REQUEST, conflict.data)
        self.assertEqual(conflict.data["error"], "Room Not Available")
        self.assertEqual(Booking.objects.count(), 1)

    def test_back_to_back_stay_is_allowed(self) -> None:
        self._make_booking(self.other, 5, 3)
        self.client.force_authenticate(self.guest)

        response = self.client.post(self.list_url, self._payload(8, 2), format="json")

        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)

    def test_cancelled_bookings_do_not_block(self) -> None:
        self._make_booking(self.other, 5, 3, Booking.Status.CANCELLED)
        self.client.force_authenticate(self.guest)

        response = self.client.post(self.list_url, self._payload(5, 3), format="json")

        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)

    def test_checkout_before_checkin(self) -> None:
        self.client.force_authenticate(self.guest)
        payload = self._payload(5, 3)
        payload["checkoutDate"], payload["checkinDate"] = payload["checkinDate"], payload["checkoutDate"]

        response = self.client.post(self.list_url, payload, format="json")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["error"], "Invalid Dates")

    def test_checkin_in_the_past(self) -> None:
        self.client.force_authenticate(self.guest)

        response = self.client.post(self.list_url, self._payload(-2, 3), format="json")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["error"], "Validation Error")
        self.assertIn("checkinDate", response.data["details"])

    def test_guest_count_limit(self) -> None:
        self.client.force_authenticate(self.guest)

        response = self.client.post(self.list_url, self._payload(5, 3, guests=11), format="json")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("guests", response.data["details"])

    def test_unknown_room(self) -> None:
        self.client.force_authenticate(self.guest)
        payload = self._payload(5, 3)
        payload["roomId"] = "00000000-0000-0000-0000-000000000000"

        response = self.client.post(self.list_url, payload, format="json")

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(response.data["message"], "Room not found")


class BookingAccessAPITests(BookingAPITestCase):
    def test_owner_retrieves_booking(self) -> None:
        booking = self._make_booking(self.guest, 5, 2)
        self.client.force_authenticate(self.guest)

        response = self.client.get(reverse("booking-detail", args=[booking.id]))

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertEqual(response.data["id"], str(booking.id))

    def test_other_user_is_denied(self) -> None:
        booking = self._make_booking(self.guest, 5, 2)
        self.client.force_authenticate(self.other)

        response = self.client.get(reverse("booking-detail", args=[booking.id]))

        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_admin_retrieves_any_booking(self) -> None:
        booking = self._make_booking(self.guest, 5, 2)
        self.client.force_authenticate(self.admin)

        response = self.client.get(reverse("booking-detail", args=[booking.id]))

        self.assertEqual(response.status_code, status.HTTP_200_OK)

    def test_my_bookings_lists_own_only(self) -> None:
        self._make_booking(self.guest, 5, 2)
        self._make_booking(self.guest, 10, 2, Booking.Status.CANCELLED)
        self._make_booking(self.other, 20, 2)
        self.client.force_authenticate(self.guest)

        response = self.client.get(reverse("booking-my-bookings"))
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["count"], 2)

        filtered = self.client.get(reverse("booking-my-bookings"), {"status": "cancelled"})
        self.assertEqual(filtered.data["count"], 1)
        self.assertEqual(filtered.data["results"][0]["status"], "CANCELLED")

    def test_all_bookings_is_admin_only(self) -> None:
        self._make_booking(self.guest, 5, 2)
        self.client.force_authenticate(self.guest)
        self.assertEqual(
            self.client.get(reverse("booking-all-bookings")).status_code,
            status.HTTP_403_FORBIDDEN,
        )

        self.client.force_authenticate(self.admin)
        response = self.client.get(reverse("booking-all-bookings"), {"hotelId": str(self.hotel.id)})
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["count"], 1)

    def test_invalid_status_filter(self) -> None:
        self.client.force_authenticate(self.guest)

        response = self.client.get(reverse("booking-my-bookings"), {"status": "ARCHIVED"})

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["error"], "Invalid Status")


class CancelBookingAPITests(BookingAPITestCase):
    def test_owner_cancels_pending_booking(self) -> None:
        booking = self._make_booking(self.guest, 5, 2, Booking.Status.PENDING)
        self.client.force_authenticate(self.guest)

        response = self.client.put(reverse("booking-cancel", args=[booking.id]))

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertEqual(response.data["status"], "CANCELLED")
        booking.refresh_from_db()
        self.assertEqual(booking.status, Booking.Status.CANCELLED)

    def test_second_cancel_fails(self) -> None:
        booking = self._make_booking(self.guest, 5, 2, Booking.Status.CANCELLED)
        self.client.force_authenticate(self.guest)

        response = self.client.put(reverse("booking-cancel", args=[booking.id]))

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["error"], "Already Cancelled")

    def test_completed_booking_cannot_be_cancelled(self) -> None:
        booking = self._make_booking(self.guest, 5, 2, Booking.Status.COMPLETED)
        self.client.force_authenticate(self.guest)

        response = self.client.put(reverse("booking-cancel", args=[booking.id]))

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["message"], "Cannot cancel a completed booking")

    def test_non_owner_cannot_cancel(self) -> None:
        booking = self._make_booking(self.guest, 5, 2)
        self.client.force_authenticate(self.other)

        response = self.client.put(reverse("booking-cancel", args=[booking.id]))

        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        booking.refresh_from_db()
        self.assertEqual(booking.status, Booking.Status.CONFIRMED)

    def test_unknown_booking(self) -> None:
        self.client.force_authenticate(self.guest)

        response = self.client.put(
            reverse("booking-cancel", args=["00000000-0000-0000-0000-000000000000"])
        )

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)


class BookingStatusAPITests(BookingAPITestCase):
    def test_admin_confirms_booking(self) -> None:
        booking = self._make_booking(self.guest, 5, 2, Booking.Status.PENDING)
        self.client.force_authenticate(self.admin)

        response = self.client.put(
            reverse("booking-change-status", args=[booking.id]), {"status": "CONFIRMED"}, format="json"
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertEqual(response.data["status"], "CONFIRMED")

    def test_invalid_transition(self) -> None:
        booking = self._make_booking(self.guest, 5, 2, Booking.Status.CANCELLED)
        self.client.force_authenticate(self.admin)

        response = self.client.put(
            reverse("booking-change-status", args=[booking.id]), {"status": "CONFIRMED"}, format="json"
        )

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["error"], "Invalid Status Transition")

    def test_invalid_status_value(self) -> None:
        booking = self._make_booking(self.guest, 5, 2, Booking.Status.PENDING)
        self.client.force_authenticate(self.admin)

        response = self.client.put(
            reverse("booking-change-status", args=[booking.id]), {"status": "LOST"}, format="json"
        )

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["error"], "Invalid Status")

    def test_regular_user_cannot_change_status(self) -> None:
        booking = self._make_booking(self.guest, 5, 2, Booking.Status.PENDING)
        self.client.force_authenticate(self.guest)

        response = self.client.put(
            reverse("booking-change-status", args=[booking.id]), {"status": "CONFIRMED"}, format="json"
        )

        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_stats_summary(self) -> None:
        self._make_booking(self.guest, 1, 2, Booking.Status.PENDING)
        self._make_booking(self.guest, 3, 2, Booking.Status.CONFIRMED)
        self._make_booking(self.other, 5, 3, Booking.Status.COMPLETED)
        self._make_booking(self.other, 8, 1, Booking.Status.CANCELLED)
        self.client.force_authenticate(self.admin)

        response = self.client.get(reverse("booking-stats-summary"))

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertEqual(response.data["totalBookings"], 4)
        self.assertEqual(response.data["pendingBookings"], 1)
        self.assertEqual(response.data["cancelledBookings"], 1)
        self.assertEqual(response.data["totalRevenue"], Decimal("10000.00"))


class BookingAuditLogTests(BookingAPITestCase):
    """Domain events reach the audit log only after the transaction commits."""

    def _render_json(self, record) -> dict:
        config = settings.LOGGING["formatters"]["json"]
        formatter = structlog.stdlib.ProcessorFormatter(
            processor=config["processor"],
            foreign_pre_chain=config["foreign_pre_chain"],
        )
        return json.loads(formatter.format(record))

    def test_created_booking_is_audited_after_commit(self) -> None:
        self.client.force_authenticate(self.guest)

        with self.assertLogs("apps.bookings.audit", "INFO") as logs:
            with self.captureOnCommitCallbacks(execute=True) as callbacks:
                response = self.client.post(self.list_url, self._payload(5, 3), format="json")

        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)
        self.assertEqual(len(callbacks), 1)
        self.assertEqual(len(logs.records), 1)
        record = logs.records[0]
        self.assertEqual(record.getMessage(), f"BookingCreated booking={response.data['id']}")
        self.assertEqual(record.booking_event["booking_id"], str(response.data["id"]))
        self.assertEqual(record.booking_event["total_price"], "6000.00")

    def test_audit_payload_is_rendered_by_json_formatter(self) -> None:
        self.client.force_authenticate(self.guest)

        with self.assertLogs("apps.bookings.audit", "INFO") as logs:
            with self.captureOnCommitCallbacks(execute=True):
                response = self.client.post(self.list_url, self._payload(5, 2), format="json")

        line = self._render_json(logs.records[0])
        self.assertEqual(line["logger"], "apps.bookings.audit")
        self.assertEqual(line["booking_event"]["event_type"], "BookingCreated")
        self.assertEqual(line["booking_event"]["room_id"], str(self.room.id))
        self.assertEqual(line["booking_event"]["booking_id"], str(response.data["id"]))

    def test_cancellation_is_audited(self) -> None:
        booking = self._make_booking(self.guest, 5, 2, Booking.Status.PENDING)
        self.client.force_authenticate(self.guest)

        with self.assertLogs("apps.bookings.audit", "INFO") as logs:
            with self.captureOnCommitCallbacks(execute=True):
                response = self.client.put(reverse("booking-cancel", args=[booking.id]))

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        event = logs.records[0].booking_event
        self.assertEqual(event["event_type"], "BookingCancelled")
        self.assertEqual(event["old_status"], "PENDING")
        self.assertEqual(event["cancelled_by"], self.guest.id)

    def test_status_change_is_audited(self) -> None:
        booking = self._make_booking(self.guest, 5, 2, Booking.Status.PENDING)
        self.client.force_authenticate(self.admin)

        with self.assertLogs("apps.bookings.audit", "INFO") as logs:
            with self.captureOnCommitCallbacks(execute=True):
                response = self.client.put(
                    reverse("booking-change-status", args=[booking.id]),
                    {"status": "CONFIRMED"},
                    format="json",
                )

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        event = logs.records[0].booking_event
        self.assertEqual(event["event_type"], "BookingStatusChanged")
        self.assertEqual((event["old_status"], event["new_status"]), ("PENDING", "CONFIRMED"))
        self.assertEqual(event["changed_by"], self.admin.id)

    def test_cancel_via_status_follows_cancellation_rules(self) -> None:
        booking = self._make_booking(self.guest, 5, 2, Booking.Status.COMPLETED)
        self.client.force_authenticate(self.admin)

        response = self.client.put(
            reverse("booking-change-status", args=[booking.id]), {"status": "CANCELLED"}, format="json"
        )

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["error"], "Cannot Cancel")

    def test_rejected_booking_publishes_nothing(self) -> None:
        self._make_booking(self.other, 4, 4)
        self.client.force_authenticate(self.guest)

        with self.assertNoLogs("apps.bookings.audit", "INFO"):
            with self.captureOnCommitCallbacks(execute=True) as callbacks:
                response = self.client.post(self.list_url, self._payload(5, 2), format="json")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(callbacks, [])
        self.assertEqual(Booking.objects.count(), 1)


class DetailRouteLookupTests(BookingAPITestCase):
    def test_detail_routes_only_accept_uuids(self) -> None:
        for name in ("hotel-detail", "room-detail", "booking-detail"):
            with self.subTest(route=name):
                with self.assertRaises(NoReverseMatch):
                    reverse(name, args=["not-a-uuid"])
                self.assertTrue(reverse(name, args=[self.room.id]).endswith(f"/{self.room.id}/"))
