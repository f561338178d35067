"""
Authorization gate shared by every mutating endpoint and the admin dashboard.

`authorize(session_token)` resolves an opaque credential to an identity and
grants access only to an active ADMIN. It never raises and has no side effects;
callers translate a denial into a 401.
"""
from dataclasses import dataclass
from typing import Any, Optional

from django.contrib.auth import get_user_model
from django.core.exceptions import ValidationError as DjangoValidationError
from rest_framework_simplejwt.exceptions import TokenError
from rest_framework_simplejwt.settings import api_settings
from rest_framework_simplejwt.tokens import AccessToken


@dataclass(frozen=True)
class AuthorizationResult:
    granted: bool
    identity: Optional[Any] = None


def resolve_identity(session_token):
    """Return the active user behind a signed access token, or None."""
    if not session_token:
        return None
    try:
        token = AccessToken(session_token)
    except TokenError:
        # malformed, bad signature or expired
        return None

    user_id = token.get(api_settings.USER_ID_CLAIM)
    if user_id is None:
        return None

    User = get_user_model()
    try:
        return User.objects.filter(**{api_settings.USER_ID_FIELD: user_id}, is_active=True).first()
    except (ValueError, DjangoValidationError):
        return None


def grant_for(identity) -> AuthorizationResult:
    if identity is None or not getattr(identity, "is_authenticated", False):
        return AuthorizationResult(granted=False)
    granted = bool(getattr(identity, "is_admin", False))
    return AuthorizationResult(granted=granted, identity=identity)


def authorize(session_token) -> AuthorizationResult:
    return grant_for(resolve_identity(session_token))
