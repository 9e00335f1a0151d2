"""Permission classes shared by the API apps."""

from __future__ import annotations

from rest_framework import permissions  # type: ignore

from shared.domain.identity import Actor


class IsAdmin(permissions.BasePermission):
    """Only authenticated users with the ADMIN role."""

    message = "Admin privileges required"

    def has_permission(self, request, view) -> bool:  # type: ignore
        user = request.user
        if not user or not user.is_authenticated:
            return False
        return Actor.from_user(user).is_admin


class IsAdminOrReadOnly(IsAdmin):
    """Anyone can read; writes require the ADMIN role."""

    def has_permission(self, request, view) -> bool:  # type: ignore
        if request.method in permissions.SAFE_METHODS:
            return True
        return super().has_permission(request, view)
