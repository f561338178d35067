# accounts/auth_backends.py
from typing import Optional

from django.contrib.auth.backends import ModelBackend

from .models import User


class EmailBackend(ModelBackend):
    """
    Auth with a case-insensitive email address and password.
    Inactive accounts never authenticate.
    """

    def authenticate(self, request, username: Optional[str] = None, password: Optional[str] = None, **kwargs):
        ident = kwargs.get("email") or username
        if not ident or not password:
            return None

        user = User.objects.filter(email__iexact=str(ident).strip(), is_active=True).first()
        if user is None:
            # timing parity with the known-email path
            User().set_password(password)
            return None

        if not user.check_password(password):
            return None

        return user
