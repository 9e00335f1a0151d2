"""Room inventory models."""

from __future__ import annotations

import uuid
from datetime import date

from django.core.validators import MinValueValidator  # type: ignore
from django.db import models  # type: ignore
from django.db.models import Count, F, IntegerField, OuterRef, Subquery  # type: ignore
from django.db.models.functions import Coalesce  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore

from shared.domain.value_objects import Money


class RoomQuerySet(models.QuerySet):

    def annotate_booked(self, check_in: date, check_out: date):
        """Annotate ``booked_rooms``: active bookings overlapping [check_in, check_out)."""
        from apps.bookings.models import Booking  # Local import to prevent circular dependency

        overlapping = (
            Booking.objects.active()
            .overlapping(check_in, check_out)
            .filter(room=OuterRef("pk"))
            .order_by()
            .values("room")
            .annotate(total=Count("pk"))
            .values("total")
        )
        return self.annotate(
            booked_rooms=Coalesce(Subquery(overlapping, output_field=IntegerField()), 0)
        )

    def available_between(self, check_in: date, check_out: date):
        """Rooms with at least one free unit for the whole stay."""
        return self.annotate_booked(check_in, check_out).filter(total_rooms__gt=F("booked_rooms"))


class Room(models.Model):
    """A pool of ``total_rooms`` interchangeable rooms of one type in a hotel."""

    class RoomType(models.TextChoices):
        SINGLE = "Single", _("Single")
        DOUBLE = "Double", _("Double")
        SUITE = "Suite", _("Suite")
        DELUXE = "Deluxe", _("Deluxe")
        PRESIDENTIAL = "Presidential", _("Presidential")

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    hotel = models.ForeignKey(
        "hotels.Hotel",
        on_delete=models.CASCADE,
        related_name="rooms",
    )
    type = models.CharField(max_length=20, choices=RoomType.choices)
    price = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        validators=[MinValueValidator(0)],
        help_text=_("Nightly rate."),
    )
    total_rooms = models.PositiveIntegerField(validators=[MinValueValidator(1)])
    available_rooms = models.PositiveIntegerField(
        default=0,
        help_text=_("Advertised count; live availability is computed from bookings."),
    )
    description = models.TextField(max_length=500, blank=True)
    amenities = models.JSONField(default=list, blank=True)
    images = models.JSONField(default=list, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = RoomQuerySet.as_manager()

    class Meta:
        verbose_name = _("Room")
        verbose_name_plural = _("Rooms")
        ordering = ["price"]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(total_rooms__gte=1),
                name="room_total_rooms_positive",
            ),
            models.CheckConstraint(
                condition=models.Q(available_rooms__lte=F("total_rooms")),
                name="room_available_within_total",
            ),
            models.CheckConstraint(
                condition=models.Q(price__gte=0),
                name="room_price_non_negative",
            ),
        ]
        indexes = [
            models.Index(fields=["hotel", "type"], name="room_hotel_type_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.get_type_display()} @ {self.hotel_id}"

    def to_domain(self):
        from apps.bookings.domain.entities import Room as RoomEntity

        return RoomEntity(
            id=self.id,
            hotel_id=self.hotel_id,
            room_type=self.type,
            price=Money(self.price),
            total_rooms=self.total_rooms,
            available_rooms=self.available_rooms,
        )
