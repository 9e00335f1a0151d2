"""Liveness endpoint."""

from __future__ import annotations

from django.conf import settings  # type: ignore
from django.utils import timezone  # type: ignore
from rest_framework.decorators import api_view, permission_classes, throttle_classes  # type: ignore
from rest_framework.permissions import AllowAny  # type: ignore
from rest_framework.response import Response  # type: ignore


@api_view(["GET"])
@permission_classes([AllowAny])
@throttle_classes([])
def health(request):  # type: ignore
    return Response(
        {
            "status": "OK",
            "timestamp": timezone.now().isoformat(),
            "environment": settings.APP_ENVIRONMENT,
        }
    )
