# media/storage.py
import logging
import os
import uuid
from dataclasses import dataclass

import cloudinary.uploader
from cloudinary.exceptions import Error as CloudinaryError
from django.conf import settings
from django.core.files.storage import default_storage
from django.utils.module_loading import import_string

from common.exceptions import UpstreamFailure

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StoredObject:
    url: str
    public_id: str


class StorageBackend:
    """Stores an uploaded file under a folder and returns where it can be fetched."""

    def upload(self, file, folder: str) -> StoredObject:
        raise NotImplementedError


class DjangoStorageBackend(StorageBackend):
    """Writes through Django's default_storage (MEDIA_ROOT locally)."""

    def upload(self, file, folder: str) -> StoredObject:
        ext = os.path.splitext(getattr(file, "name", "") or "")[1].lower()
        key = f"{folder}/{uuid.uuid4().hex}{ext}"
        try:
            saved = default_storage.save(key, file)
            url = default_storage.url(saved)
        except OSError as exc:
            logger.exception("Storage write failed for %s", key)
            raise UpstreamFailure("Storage backend failed") from exc
        return StoredObject(url=url, public_id=saved)


class CloudinaryStorageBackend(StorageBackend):
    """Upload through the Cloudinary SDK; the asset type is detected from the file."""

    def __init__(self, cloud_name=None, api_key=None, api_secret=None, timeout=None):
        self.cloud_name = cloud_name or settings.CLOUDINARY_CLOUD_NAME
        self.api_key = api_key or settings.CLOUDINARY_API_KEY
        self.api_secret = api_secret or settings.CLOUDINARY_API_SECRET
        self.timeout = timeout or settings.STORAGE_TIMEOUT_SECONDS

    def upload(self, file, folder: str) -> StoredObject:
        if not (self.cloud_name and self.api_key and self.api_secret):
            raise UpstreamFailure("Cloudinary credentials are not configured")

        try:
            result = cloudinary.uploader.upload(
                file,
                folder=folder,
                resource_type="auto",
                timeout=self.timeout,
                cloud_name=self.cloud_name,
                api_key=self.api_key,
                api_secret=self.api_secret,
            )
        except (CloudinaryError, OSError) as exc:
            logger.exception("Cloudinary upload failed for folder %s", folder)
            raise UpstreamFailure("Storage backend rejected the upload") from exc

        return StoredObject(url=result["secure_url"], public_id=result["public_id"])


def get_storage_backend() -> StorageBackend:
    return import_string(settings.MEDIA_STORAGE_BACKEND)()
