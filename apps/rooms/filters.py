"""FilterSet definitions for room listing."""

from __future__ import annotations

import django_filters  # type: ignore

from .models import Room


class RoomFilterSet(django_filters.FilterSet):

    hotelId = django_filters.UUIDFilter(field_name="hotel_id")
    type = django_filters.ChoiceFilter(field_name="type", choices=Room.RoomType.choices)
    minPrice = django_filters.NumberFilter(field_name="price", lookup_expr="gte", min_value=0)
    maxPrice = django_filters.NumberFilter(field_name="price", lookup_expr="lte", min_value=0)

    class Meta:
        model = Room
        fields = ["type"]
