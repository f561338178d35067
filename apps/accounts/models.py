"""
Accounts models: the administrator identity used to sign into the dashboard.

Every persisted entity in the project shares BaseEntity (UUID primary key plus
server-managed timestamps).
"""
import uuid
from typing import Optional

from django.contrib.auth.models import AbstractBaseUser, BaseUserManager, PermissionsMixin
from django.db import models
from django.utils import timezone


# ---------------------------------------------------------------------
# BaseEntity
# ---------------------------------------------------------------------
class BaseEntity(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    created_at = models.DateTimeField(default=timezone.now, db_index=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        abstract = True
        ordering = ["-created_at"]


# ---------------------------------------------------------------------
# User manager
# ---------------------------------------------------------------------
class UserManager(BaseUserManager):
    use_in_migrations = True

    def _create_user(self, *, email: str, password: Optional[str], **extra):
        if not email:
            raise ValueError("Users must have an email address")
        # createsuperuser passes Django's staff flag; staff status derives from role here
        extra.pop("is_staff", None)

        user = self.model(email=self.normalize_email(email).lower(), **extra)
        if password:
            user.set_password(password)
        else:
            user.set_unusable_password()
        user.save(using=self._db)
        return user

    def create_user(self, email: str, password: Optional[str] = None, **extra):
        extra.setdefault("role", User.Role.VIEWER)
        extra.setdefault("is_superuser", False)
        return self._create_user(email=email, password=password, **extra)

    def create_superuser(self, email: str, password: str, **extra):
        if not password:
            raise ValueError("Superuser must have a password")
        extra.setdefault("role", User.Role.ADMIN)
        extra.setdefault("is_superuser", True)
        if extra.get("role") != User.Role.ADMIN:
            raise ValueError("Superuser must have role=ADMIN.")
        return self._create_user(email=email, password=password, **extra)

    def get_by_natural_key(self, key: str):
        return self.get(email__iexact=key)


# ---------------------------------------------------------------------
# User model
# ---------------------------------------------------------------------
class User(AbstractBaseUser, PermissionsMixin, BaseEntity):
    class Role(models.TextChoices):
        ADMIN = "ADMIN", "Admin"
        VIEWER = "VIEWER", "Viewer"

    email = models.EmailField(unique=True, db_index=True)
    name = models.CharField(max_length=200, blank=True, null=True)
    image = models.URLField(max_length=500, blank=True, null=True)
    role = models.CharField(max_length=20, choices=Role.choices, default=Role.VIEWER, db_index=True)
    is_active = models.BooleanField(default=True)

    objects = UserManager()

    USERNAME_FIELD = "email"
    EMAIL_FIELD = "email"
    REQUIRED_FIELDS = []

    class Meta:
        verbose_name = "User"
        verbose_name_plural = "Users"
        ordering = ["email"]

    def __str__(self) -> str:
        return self.email

    @property
    def is_admin(self) -> bool:
        return self.is_active and self.role == self.Role.ADMIN

    # Django admin reads is_staff to allow sign-in
    @property
    def is_staff(self) -> bool:
        return self.is_admin

    def has_perm(self, perm, obj=None) -> bool:
        if self.is_admin:
            return True
        return super().has_perm(perm, obj)

    def has_module_perms(self, app_label) -> bool:
        if self.is_admin:
            return True
        return super().has_module_perms(app_label)
