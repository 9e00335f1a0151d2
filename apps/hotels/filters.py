"""FilterSet definitions for hotel search and listing."""

from __future__ import annotations

import django_filters  # type: ignore
from django import forms  # type: ignore
from django.db.models import Prefetch  # type: ignore

from apps.bookings.domain.entities import MAX_GUESTS, MIN_GUESTS
from apps.rooms.models import Room

from .models import Hotel


class HotelSearchForm(forms.Form):

    def clean(self):  # type: ignore
        cleaned = super().clean()
        check_in = cleaned.get("checkinDate")
        check_out = cleaned.get("checkoutDate")
        if check_in and check_out and check_out <= check_in:
            raise forms.ValidationError("Check-out date must be after check-in date")
        return cleaned


class HotelFilterSet(django_filters.FilterSet):
    """
    Public hotel search.

    ``city`` and ``minRating`` narrow the hotels. Price bounds and the
    stay narrow each hotel's nested rooms; when both dates are given,
    hotels left without a free room are dropped.
    """

    city = django_filters.CharFilter(
        field_name="city", lookup_expr="icontains", min_length=2, max_length=50
    )
    minRating = django_filters.NumberFilter(
        field_name="rating", lookup_expr="gte", min_value=0, max_value=5
    )

    # Room-level filters, applied in filter_queryset
    checkinDate = django_filters.DateFilter(method="filter_rooms")
    checkoutDate = django_filters.DateFilter(method="filter_rooms")
    guests = django_filters.NumberFilter(
        method="filter_rooms", min_value=MIN_GUESTS, max_value=MAX_GUESTS
    )
    minPrice = django_filters.NumberFilter(method="filter_rooms", min_value=0)
    maxPrice = django_filters.NumberFilter(method="filter_rooms", min_value=0)

    class Meta:
        model = Hotel
        fields = ["city"]
        form = HotelSearchForm

    def filter_rooms(self, queryset, name, value):  # type: ignore
        return queryset

    def room_queryset(self):
        data = self.form.cleaned_data
        rooms = Room.objects.all()
        if data.get("minPrice") is not None:
            rooms = rooms.filter(price__gte=data["minPrice"])
        if data.get("maxPrice") is not None:
            rooms = rooms.filter(price__lte=data["maxPrice"])
        check_in, check_out = data.get("checkinDate"), data.get("checkoutDate")
        if check_in and check_out:
            rooms = rooms.available_between(check_in, check_out)
        return rooms.order_by("price")

    def filter_queryset(self, queryset):  # type: ignore
        queryset = super().filter_queryset(queryset)
        rooms = self.room_queryset()
        data = self.form.cleaned_data
        if data.get("checkinDate") and data.get("checkoutDate"):
            queryset = queryset.filter(pk__in=rooms.values("hotel_id"))
        return queryset.prefetch_related(Prefetch("rooms", queryset=rooms, to_attr="matching_rooms"))
