from .base import *  # noqa

DEBUG = True
ALLOWED_HOSTS = ["*"]
SESSION_COOKIE_JWT_SECURE = False

# Local DB: sqlite from base unless DATABASE_URL is provided.
DATABASE_URL = os.environ.get("DATABASE_URL", None)
if DATABASE_URL:
    import dj_database_url

    DATABASES["default"] = dj_database_url.parse(DATABASE_URL)
