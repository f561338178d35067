"""
Accounts views: JWT login/refresh/logout and the caller's own profile.

Login issues a SimpleJWT access/refresh pair and also drops the access token in
an HttpOnly cookie so the browser dashboard can call the API without storing it.
"""
import logging

from django.conf import settings
from drf_spectacular.utils import OpenApiResponse, extend_schema
from rest_framework import serializers, status
from rest_framework.permissions import AllowAny
from rest_framework.views import APIView
from rest_framework_simplejwt.exceptions import TokenError
from rest_framework_simplejwt.serializers import TokenRefreshSerializer
from rest_framework_simplejwt.tokens import RefreshToken

from common.exceptions import InvalidCredentials
from common.permissions import IsAuthenticatedIdentity
from common.responses import envelope

from .serializers import (
    ChangePasswordSerializer,
    LoginSerializer,
    ProfileUpdateSerializer,
    UserSerializer,
)

logger = logging.getLogger(__name__)


# -----------------------------
# JWT helpers
# -----------------------------
class JWTTokensSerializer(serializers.Serializer):
    access = serializers.CharField(read_only=True)
    refresh = serializers.CharField(read_only=True)
    tokenType = serializers.CharField(default="Bearer", read_only=True)


def issue_tokens_for_user(user) -> dict:
    refresh = RefreshToken.for_user(user)
    return {
        "access": str(refresh.access_token),
        "refresh": str(refresh),
        "tokenType": "Bearer",
    }


def set_session_cookie(response, access_token: str):
    lifetime = settings.SIMPLE_JWT["ACCESS_TOKEN_LIFETIME"]
    response.set_cookie(
        settings.SESSION_COOKIE_NAME_JWT,
        access_token,
        max_age=int(lifetime.total_seconds()),
        httponly=True,
        secure=settings.SESSION_COOKIE_JWT_SECURE,
        samesite="Strict",
    )
    return response


# -----------------------------
# Auth endpoints
# -----------------------------
@extend_schema(
    summary="Login (email + password) -> returns JWT",
    request=LoginSerializer,
    responses={200: JWTTokensSerializer},
    tags=["Auth"],
)
class LoginView(APIView):
    permission_classes = [AllowAny]

    def post(self, request):
        serializer = LoginSerializer(data=request.data, context={"request": request})
        serializer.is_valid(raise_exception=True)
        user = serializer.validated_data["user"]
        tokens = issue_tokens_for_user(user)
        logger.info("user.login id=%s role=%s", user.id, user.role)

        response = envelope({**tokens, "user": UserSerializer(user).data})
        return set_session_cookie(response, tokens["access"])


class RefreshSerializer(serializers.Serializer):
    refresh = serializers.CharField()


class AccessTokenSerializer(serializers.Serializer):
    access = serializers.CharField(read_only=True)
    tokenType = serializers.CharField(default="Bearer", read_only=True)


@extend_schema(
    summary="Exchange a refresh token for a new access token",
    request=RefreshSerializer,
    responses={200: AccessTokenSerializer},
    tags=["Auth"],
)
class RefreshView(APIView):
    permission_classes = [AllowAny]

    def post(self, request):
        serializer = TokenRefreshSerializer(data=request.data)
        try:
            serializer.is_valid(raise_exception=True)
        except TokenError:
            raise InvalidCredentials("Token is invalid or expired")
        access = serializer.validated_data["access"]
        response = envelope({"access": access, "tokenType": "Bearer"})
        return set_session_cookie(response, access)


@extend_schema(
    summary="Logout (clears the session cookie)",
    request=None,
    responses={200: OpenApiResponse(description="Session cookie cleared; data is null")},
    tags=["Auth"],
)
class LogoutView(APIView):
    permission_classes = [AllowAny]

    def post(self, request):
        response = envelope(None)
        response.delete_cookie(settings.SESSION_COOKIE_NAME_JWT, samesite="Strict")
        return response


# -----------------------------
# Own profile
# -----------------------------
@extend_schema(tags=["Profile"])
class ProfileView(APIView):
    permission_classes = [IsAuthenticatedIdentity]

    @extend_schema(summary="Get the signed-in account", responses={200: UserSerializer})
    def get(self, request):
        return envelope(UserSerializer(request.user).data)

    @extend_schema(summary="Update the signed-in account", request=ProfileUpdateSerializer, responses={200: UserSerializer})
    def put(self, request):
        serializer = ProfileUpdateSerializer(data=request.data, partial=True, context={"request": request})
        serializer.is_valid(raise_exception=True)
        user = serializer.update(request.user, serializer.validated_data)
        logger.info("user.update id=%s fields=%s", user.id, sorted(serializer.validated_data))
        return envelope(UserSerializer(user).data)


@extend_schema(
    summary="Change the signed-in account's password",
    request=ChangePasswordSerializer,
    responses={200: OpenApiResponse(description="Password changed")},
    tags=["Profile"],
)
class ChangePasswordView(APIView):
    permission_classes = [IsAuthenticatedIdentity]

    def post(self, request):
        serializer = ChangePasswordSerializer(data=request.data, context={"request": request})
        serializer.is_valid(raise_exception=True)
        user = serializer.save()
        logger.info("user.password_change id=%s", user.id)
        return envelope({"changed": True}, status=status.HTTP_200_OK)
