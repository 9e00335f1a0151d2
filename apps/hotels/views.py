"""Hotel API views."""

from __future__ import annotations

import logging

from django.db.models import Count  # type: ignore
from django_filters.rest_framework import DjangoFilterBackend  # type: ignore
from rest_framework import status, viewsets  # type: ignore
from rest_framework.decorators import action  # type: ignore
from rest_framework.response import Response  # type: ignore

from shared.api.lookups import UUID_PATTERN
from shared.api.permissions import IsAdminOrReadOnly

from .filters import HotelFilterSet
from .models import Hotel
from .serializers import HotelSerializer, HotelWriteSerializer, PopularCitySerializer

logger = logging.getLogger(__name__)

POPULAR_CITIES_LIMIT = 10


class HotelViewSet(viewsets.ModelViewSet):
    """Public hotel search and admin hotel management."""

    queryset = Hotel.objects.order_by("-rating", "name")
    permission_classes = [IsAdminOrReadOnly]
    filter_backends = [DjangoFilterBackend]
    filterset_class = HotelFilterSet
    lookup_value_regex = UUID_PATTERN

    def get_serializer_class(self):  # type: ignore
        if self.action in {"create", "update", "partial_update"}:
            return HotelWriteSerializer
        return HotelSerializer

    def create(self, request, *args, **kwargs):  # type: ignore
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        hotel = serializer.save()
        logger.info(f"Hotel {hotel.id} created in {hotel.city}")
        read_serializer = HotelSerializer(hotel, context=self.get_serializer_context())
        headers = self.get_success_headers(read_serializer.data)
        return Response(read_serializer.data, status=status.HTTP_201_CREATED, headers=headers)

    def update(self, request, *args, **kwargs):  # type: ignore
        partial = kwargs.pop("partial", False)
        hotel = self.get_object()
        serializer = self.get_serializer(hotel, data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)
        hotel = serializer.save()
        return Response(HotelSerializer(hotel, context=self.get_serializer_context()).data)

    def perform_destroy(self, instance):  # type: ignore
        logger.info(f"Deleting hotel {instance.id}")
        instance.delete()

    @action(detail=False, methods=["get"], url_path="popular-cities", filter_backends=[])
    def popular_cities(self, request):  # type: ignore
        cities = (
            Hotel.objects.order_by()
            .values("city")
            .annotate(hotel_count=Count("id"))
            .order_by("-hotel_count", "city")[:POPULAR_CITIES_LIMIT]
        )
        return Response(PopularCitySerializer(cities, many=True).data)
