# media/serializers.py
import re

from rest_framework import serializers

from .policies import DEFAULT_FOLDER, policy_for_folder

FOLDER_RE = re.compile(r"^[A-Za-z0-9_\-/]+$")


class UploadSerializer(serializers.Serializer):
    file = serializers.FileField(allow_empty_file=False)
    folder = serializers.CharField(max_length=120, required=False, allow_blank=True, default=DEFAULT_FOLDER)

    def validate_folder(self, value):
        value = (value or DEFAULT_FOLDER).strip("/")
        if not value or not FOLDER_RE.match(value) or ".." in value.split("/"):
            raise serializers.ValidationError("Folder may only contain letters, digits, '_', '-' and '/'.")
        return value

    def validate(self, attrs):
        upload = attrs["file"]
        policy = policy_for_folder(attrs.get("folder") or DEFAULT_FOLDER)
        if not policy.allows_type(getattr(upload, "content_type", "")):
            raise serializers.ValidationError({"file": policy.type_error()})
        if not policy.allows_size(upload.size):
            raise serializers.ValidationError({"file": policy.size_error()})
        return attrs


class StoredObjectSerializer(serializers.Serializer):
    url = serializers.CharField()
    publicId = serializers.CharField(source="public_id")
