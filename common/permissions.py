from rest_framework import permissions

from apps.accounts.gate import grant_for

from .exceptions import Unauthorized


class IsAdminOrReadOnly(permissions.BasePermission):
    """
    Reads are public. Every other method must pass the admin gate.
    A denial is always a 401, also for authenticated non-admin roles, and is
    decided before any object lookup so it never reveals whether a record exists.
    """

    def has_permission(self, request, view):
        if request.method in permissions.SAFE_METHODS:
            return True
        if not grant_for(request.user).granted:
            raise Unauthorized()
        return True


class IsAdmin(permissions.BasePermission):
    """Admin gate for every method, including reads (dashboard-only endpoints)."""

    def has_permission(self, request, view):
        if not grant_for(request.user).granted:
            raise Unauthorized()
        return True


class IsAuthenticatedIdentity(permissions.BasePermission):
    """Any resolved, active identity (own-account endpoints)."""

    def has_permission(self, request, view):
        user = request.user
        if not user or not user.is_authenticated or not user.is_active:
            raise Unauthorized()
        return True
