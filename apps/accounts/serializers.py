"""
Serializers for accounts: login, own-profile edits and password change.
"""
from django.contrib.auth import authenticate
from django.contrib.auth.password_validation import validate_password
from django.core.exceptions import ValidationError as DjangoValidationError
from rest_framework import serializers

from common.exceptions import InvalidCredentials, RecordConflict

from .models import User


class UserSerializer(serializers.ModelSerializer):
    isActive = serializers.BooleanField(source="is_active", read_only=True)
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)
    updatedAt = serializers.DateTimeField(source="updated_at", read_only=True)

    class Meta:
        model = User
        fields = ["id", "email", "name", "image", "role", "isActive", "createdAt", "updatedAt"]
        read_only_fields = fields


class LoginSerializer(serializers.Serializer):
    email = serializers.EmailField(write_only=True)
    password = serializers.CharField(write_only=True, trim_whitespace=False)

    def validate(self, attrs):
        req = self.context.get("request")
        # auth backends expect the Django HttpRequest, not the DRF wrapper
        if hasattr(req, "_request"):
            req = req._request

        user = authenticate(request=req, email=attrs["email"], password=attrs["password"])
        if user is None:
            raise InvalidCredentials()
        attrs["user"] = user
        return attrs


class ProfileUpdateSerializer(serializers.Serializer):
    name = serializers.CharField(required=False, allow_blank=True, allow_null=True, max_length=200)
    email = serializers.EmailField(required=False)
    image = serializers.URLField(required=False, allow_blank=True, allow_null=True, max_length=500)

    def validate_email(self, value):
        value = value.lower()
        user = self.context["request"].user
        if User.objects.filter(email__iexact=value).exclude(pk=user.pk).exists():
            raise RecordConflict("A user with this email already exists")
        return value

    def validate_image(self, value):
        return value or None

    def update(self, instance, validated_data):
        for attr, value in validated_data.items():
            setattr(instance, attr, value)
        instance.save(update_fields=[*validated_data.keys(), "updated_at"])
        return instance


class ChangePasswordSerializer(serializers.Serializer):
    currentPassword = serializers.CharField(write_only=True, trim_whitespace=False)
    newPassword = serializers.CharField(write_only=True, trim_whitespace=False)
    confirmPassword = serializers.CharField(write_only=True, trim_whitespace=False)

    def validate_currentPassword(self, value):
        if not self.context["request"].user.check_password(value):
            raise serializers.ValidationError("Current password is incorrect.")
        return value

    def validate(self, attrs):
        if attrs["newPassword"] != attrs["confirmPassword"]:
            raise serializers.ValidationError({"confirmPassword": "Passwords do not match."})
        if attrs["newPassword"] == attrs["currentPassword"]:
            raise serializers.ValidationError({"newPassword": "New password must differ from the current one."})
        try:
            validate_password(attrs["newPassword"], user=self.context["request"].user)
        except DjangoValidationError as exc:
            raise serializers.ValidationError({"newPassword": list(exc.messages)})
        return attrs

    def save(self, **kwargs):
        user = self.context["request"].user
        user.set_password(self.validated_data["newPassword"])
        user.save(update_fields=["password", "updated_at"])
        return user
