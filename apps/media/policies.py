# media/policies.py
"""
Upload policy per destination folder. The resume folder takes documents,
every other folder takes images. Shared by POST /upload and the CV schema so
a CV record can never describe a file the upload endpoint would refuse.
"""
from dataclasses import dataclass
from typing import FrozenSet

from django.conf import settings

DEFAULT_FOLDER = "portfolio"
RESUME_FOLDER = "cvs"

IMAGE_TYPES = frozenset({"image/jpeg", "image/png", "image/webp", "image/gif"})
DOCUMENT_TYPES = frozenset({
    "application/pdf",
    "application/msword",
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
})

MB = 1024 * 1024


@dataclass(frozen=True)
class UploadPolicy:
    label: str
    allowed_types: FrozenSet[str]
    max_bytes: int

    def allows_type(self, content_type: str) -> bool:
        return (content_type or "").split(";")[0].strip().lower() in self.allowed_types

    def allows_size(self, size: int) -> bool:
        return 0 <= size <= self.max_bytes

    def type_error(self) -> str:
        return f"Unsupported file type. Allowed {self.label} types: {', '.join(sorted(self.allowed_types))}."

    def size_error(self) -> str:
        return f"File too large. Maximum size is {self.max_bytes // MB}MB."


def image_policy() -> UploadPolicy:
    return UploadPolicy("image", IMAGE_TYPES, settings.UPLOAD_IMAGE_MAX_MB * MB)


def document_policy() -> UploadPolicy:
    return UploadPolicy("document", DOCUMENT_TYPES, settings.UPLOAD_DOCUMENT_MAX_MB * MB)


def policy_for_folder(folder: str) -> UploadPolicy:
    if folder == RESUME_FOLDER:
        return document_policy()
    return image_policy()
