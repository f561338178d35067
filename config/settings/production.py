# Production overrides
from .base import *  # noqa
import os
import dj_database_url

DEBUG = False
ALLOWED_HOSTS = os.environ.get("ALLOWED_HOSTS", "").split(",")
SECRET_KEY = os.environ["SECRET_KEY"]
SESSION_COOKIE_JWT_SECURE = True

# Database from DATABASE_URL env var.
DATABASES["default"] = dj_database_url.parse(os.environ["DATABASE_URL"], conn_max_age=600)

# Uploads go to the hosted object store unless explicitly overridden
MEDIA_STORAGE_BACKEND = os.environ.get(
    "MEDIA_STORAGE_BACKEND",
    "apps.media.storage.CloudinaryStorageBackend",
)

SECURE_PROXY_SSL_HEADER = ("HTTP_X_FORWARDED_PROTO", "https")
SESSION_COOKIE_SECURE = True
CSRF_COOKIE_SECURE = True

# Logging: less verbose
LOGGING["root"]["level"] = os.environ.get("LOG_LEVEL", "INFO")
