# apps/accounts/authentication.py
from django.conf import settings
from rest_framework.exceptions import AuthenticationFailed
from rest_framework_simplejwt.authentication import JWTAuthentication


class SessionTokenAuthentication(JWTAuthentication):
    """
    SimpleJWT authentication that also reads the access token from the
    dashboard's HttpOnly session cookie when no Authorization header is sent.

    Never raises: an unusable credential (malformed, expired, unknown or
    inactive user) leaves the request anonymous, so public reads keep working
    and gated writes are refused by the permission layer.
    """

    def authenticate(self, request):
        try:
            raw_token = self.get_request_token(request)
            if raw_token is None:
                return None
            validated_token = self.get_validated_token(raw_token)
            return self.get_user(validated_token), validated_token
        except AuthenticationFailed:
            # InvalidToken is a subclass
            return None

    def get_request_token(self, request):
        header = self.get_header(request)
        if header is not None:
            return self.get_raw_token(header)
        return request.COOKIES.get(settings.SESSION_COOKIE_NAME_JWT) or None
