"""
Portfolio content models.

PublicProfile and Resume carry a single-active invariant: a partial unique
index allows at most one row with is_active = true per table. The repository
keeps the invariant by sweeping other rows inside the write transaction; the
index turns a lost race into an IntegrityError instead of two active rows.
"""
from django.db import models
from django.db.models import Q

from apps.accounts.models import BaseEntity


class Project(BaseEntity):
    title = models.CharField(max_length=255, unique=True)
    description = models.TextField()
    tech_stack = models.JSONField(default=list)
    github_link = models.URLField(max_length=500, blank=True, null=True)
    live_link = models.URLField(max_length=500, blank=True, null=True)
    images = models.JSONField(default=list)
    awards = models.JSONField(default=list, blank=True)
    category = models.CharField(max_length=120, db_index=True)

    class Meta:
        ordering = ["-created_at"]

    def __str__(self) -> str:
        return self.title


class Honor(BaseEntity):
    title = models.CharField(max_length=255, unique=True)
    description = models.TextField()
    image = models.CharField(max_length=500)
    issued_by = models.CharField(max_length=255)
    issued_at = models.DateTimeField(db_index=True)

    class Meta:
        ordering = ["-issued_at"]

    def __str__(self) -> str:
        return self.title


class Experience(BaseEntity):
    company = models.CharField(max_length=255, unique=True)
    company_link = models.URLField(max_length=500, blank=True, null=True)
    logo = models.CharField(max_length=500)
    period = models.CharField(max_length=120)

    class Meta:
        ordering = ["-created_at"]

    def __str__(self) -> str:
        return self.company


class ExperienceRole(BaseEntity):
    experience = models.ForeignKey(Experience, on_delete=models.CASCADE, related_name="roles")
    title = models.CharField(max_length=255)
    period = models.CharField(max_length=120)
    description = models.JSONField(default=list)
    position = models.PositiveIntegerField(default=0)

    class Meta:
        ordering = ["position", "created_at"]
        indexes = [models.Index(fields=["experience", "position"], name="portfolio_role_position_idx")]

    def __str__(self) -> str:
        return f"{self.title} @ {self.experience_id}"


class Education(BaseEntity):
    institution = models.CharField(max_length=255)
    degree = models.CharField(max_length=255)
    period = models.CharField(max_length=120)
    cgpa = models.CharField(max_length=20, blank=True, null=True)
    logo = models.CharField(max_length=500)
    link = models.URLField(max_length=500, blank=True, null=True)
    core_courses = models.JSONField(default=list)
    is_active = models.BooleanField(default=True, db_index=True)
    display_order = models.PositiveIntegerField(default=0)

    class Meta:
        ordering = ["display_order", "created_at"]

    def __str__(self) -> str:
        return f"{self.degree}, {self.institution}"


class Skill(BaseEntity):
    class IconType(models.TextChoices):
        REACT_ICON = "react-icon", "React icon"
        CUSTOM = "custom", "Custom image"
        TEXT = "text", "Text"

    class Proficiency(models.TextChoices):
        BEGINNER = "beginner", "Beginner"
        INTERMEDIATE = "intermediate", "Intermediate"
        ADVANCED = "advanced", "Advanced"
        EXPERT = "expert", "Expert"

    name = models.CharField(max_length=120)
    category = models.CharField(max_length=120, db_index=True)
    icon_type = models.CharField(max_length=20, choices=IconType.choices)
    icon_name = models.CharField(max_length=120, blank=True, null=True)
    icon_url = models.URLField(max_length=500, blank=True, null=True)
    color = models.CharField(max_length=40, blank=True, null=True)
    proficiency = models.CharField(max_length=20, choices=Proficiency.choices, blank=True, null=True)
    is_active = models.BooleanField(default=True, db_index=True)
    display_order = models.PositiveIntegerField(default=0)

    class Meta:
        ordering = ["category", "display_order", "name"]

    def __str__(self) -> str:
        return self.name


class PublicProfile(BaseEntity):
    name = models.CharField(max_length=200)
    image = models.URLField(max_length=500)
    headlines = models.JSONField(default=list)
    tagline = models.CharField(max_length=500)
    is_active = models.BooleanField(default=True, db_index=True)

    class Meta:
        ordering = ["-updated_at"]
        constraints = [
            models.UniqueConstraint(
                fields=["is_active"],
                condition=Q(is_active=True),
                name="single_active_public_profile",
            ),
        ]

    def __str__(self) -> str:
        return self.name


class Resume(BaseEntity):
    title = models.CharField(max_length=255)
    description = models.TextField()
    download_link = models.URLField(max_length=500)
    file_name = models.CharField(max_length=255, blank=True, null=True)
    file_size = models.PositiveBigIntegerField(blank=True, null=True)
    file_type = models.CharField(max_length=120, blank=True, null=True)
    is_active = models.BooleanField(default=True, db_index=True)

    class Meta:
        ordering = ["-created_at"]
        constraints = [
            models.UniqueConstraint(
                fields=["is_active"],
                condition=Q(is_active=True),
                name="single_active_resume",
            ),
        ]

    def __str__(self) -> str:
        return self.title
