"""
Per-resource schemas. Each serializer declares field names (camelCase on the
wire, mapped to snake_case columns through `source`), types, required-ness and
format constraints; it is run by common.validation.validate for writes and used
as-is to render records.

Unique keys (title, company) are declared explicitly so duplicates reach the
repository and come back as a 409 instead of a field error.
"""
from rest_framework import serializers

from apps.media.policies import policy_for_folder, RESUME_FOLDER

from .models import (
    Education,
    Experience,
    ExperienceRole,
    Honor,
    Project,
    PublicProfile,
    Resume,
    Skill,
)


class OptionalURLField(serializers.URLField):
    """Absolute URL; an empty string is accepted and stored as null."""

    def __init__(self, **kwargs):
        kwargs.setdefault("required", False)
        kwargs.setdefault("allow_blank", True)
        kwargs.setdefault("allow_null", True)
        kwargs.setdefault("max_length", 500)
        super().__init__(**kwargs)

    def run_validation(self, data=serializers.empty):
        value = super().run_validation(data)
        return value or None


class OptionalCharField(serializers.CharField):
    def __init__(self, **kwargs):
        kwargs.setdefault("required", False)
        kwargs.setdefault("allow_blank", True)
        kwargs.setdefault("allow_null", True)
        super().__init__(**kwargs)

    def run_validation(self, data=serializers.empty):
        value = super().run_validation(data)
        return value or None


def string_list(max_length=500, **kwargs):
    """List of non-empty strings; at least one item unless allow_empty is passed."""
    kwargs.setdefault("allow_empty", False)
    return serializers.ListField(child=serializers.CharField(max_length=max_length), **kwargs)


class TimestampedSerializer(serializers.ModelSerializer):
    id = serializers.UUIDField(read_only=True)
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)
    updatedAt = serializers.DateTimeField(source="updated_at", read_only=True)


# -------------------------------------------------------------------
# Project / Honor
# -------------------------------------------------------------------
class ProjectSerializer(TimestampedSerializer):
    title = serializers.CharField(max_length=255)
    description = serializers.CharField()
    techStack = string_list(source="tech_stack", max_length=120)
    githubLink = OptionalURLField(source="github_link")
    liveLink = OptionalURLField(source="live_link")
    images = string_list()
    awards = string_list(allow_empty=True, required=False, default=list)
    category = serializers.CharField(max_length=120)

    class Meta:
        model = Project
        fields = [
            "id", "title", "description", "techStack", "githubLink", "liveLink",
            "images", "awards", "category", "createdAt", "updatedAt",
        ]


class HonorSerializer(TimestampedSerializer):
    title = serializers.CharField(max_length=255)
    description = serializers.CharField()
    image = serializers.CharField(max_length=500)
    issuedBy = serializers.CharField(source="issued_by", max_length=255)
    issuedAt = serializers.DateTimeField(source="issued_at")

    class Meta:
        model = Honor
        fields = ["id", "title", "description", "image", "issuedBy", "issuedAt", "createdAt", "updatedAt"]


# -------------------------------------------------------------------
# Experience (owns its roles)
# -------------------------------------------------------------------
class ExperienceRoleSerializer(serializers.ModelSerializer):
    id = serializers.UUIDField(read_only=True)
    title = serializers.CharField(max_length=255)
    period = serializers.CharField(max_length=120)
    description = string_list(max_length=2000)

    class Meta:
        model = ExperienceRole
        fields = ["id", "title", "period", "description"]


class ExperienceSerializer(TimestampedSerializer):
    company = serializers.CharField(max_length=255)
    companyLink = OptionalURLField(source="company_link")
    logo = serializers.CharField(max_length=500)
    period = serializers.CharField(max_length=120)
    roles = ExperienceRoleSerializer(many=True, allow_empty=False)

    class Meta:
        model = Experience
        fields = ["id", "company", "companyLink", "logo", "period", "roles", "createdAt", "updatedAt"]

    def validate_roles(self, roles):
        if not self.partial:
            return roles
        # nested items inherit partial mode; a replacement role set must still be complete
        strict = ExperienceRoleSerializer(data=self.initial_data.get("roles"), many=True, allow_empty=False)
        strict.is_valid(raise_exception=True)
        return [dict(role) for role in strict.validated_data]


# -------------------------------------------------------------------
# Education / Skill
# -------------------------------------------------------------------
class EducationSerializer(TimestampedSerializer):
    institution = serializers.CharField(max_length=255)
    degree = serializers.CharField(max_length=255)
    period = serializers.CharField(max_length=120)
    cgpa = OptionalCharField(max_length=20)
    logo = serializers.CharField(max_length=500)
    link = OptionalURLField()
    coreCourses = string_list(source="core_courses", max_length=255)
    isActive = serializers.BooleanField(source="is_active", default=True)
    displayOrder = serializers.IntegerField(source="display_order", min_value=0, default=0)

    class Meta:
        model = Education
        fields = [
            "id", "institution", "degree", "period", "cgpa", "logo", "link",
            "coreCourses", "isActive", "displayOrder", "createdAt", "updatedAt",
        ]


class SkillSerializer(TimestampedSerializer):
    name = serializers.CharField(max_length=120)
    category = serializers.CharField(max_length=120)
    iconType = serializers.ChoiceField(source="icon_type", choices=Skill.IconType.choices)
    iconName = OptionalCharField(source="icon_name", max_length=120)
    iconUrl = OptionalURLField(source="icon_url")
    color = OptionalCharField(max_length=40)
    proficiency = serializers.ChoiceField(
        choices=Skill.Proficiency.choices, required=False, allow_null=True, allow_blank=True,
    )
    isActive = serializers.BooleanField(source="is_active", default=True)
    displayOrder = serializers.IntegerField(source="display_order", min_value=0, default=0)

    class Meta:
        model = Skill
        fields = [
            "id", "name", "category", "iconType", "iconName", "iconUrl", "color",
            "proficiency", "isActive", "displayOrder", "createdAt", "updatedAt",
        ]

    def validate_proficiency(self, value):
        return value or None


# -------------------------------------------------------------------
# Single-active resources
# -------------------------------------------------------------------
class PublicProfileSerializer(TimestampedSerializer):
    name = serializers.CharField(max_length=200)
    image = serializers.URLField(max_length=500)
    headlines = string_list()
    tagline = serializers.CharField(max_length=500)
    isActive = serializers.BooleanField(source="is_active", default=True)

    class Meta:
        model = PublicProfile
        fields = ["id", "name", "image", "headlines", "tagline", "isActive", "createdAt", "updatedAt"]


class ResumeSerializer(TimestampedSerializer):
    title = serializers.CharField(max_length=255)
    description = serializers.CharField()
    downloadLink = serializers.URLField(source="download_link", max_length=500)
    fileName = OptionalCharField(source="file_name", max_length=255)
    fileSize = serializers.IntegerField(source="file_size", min_value=0, required=False, allow_null=True)
    fileType = OptionalCharField(source="file_type", max_length=120)
    isActive = serializers.BooleanField(source="is_active", default=True)

    class Meta:
        model = Resume
        fields = [
            "id", "title", "description", "downloadLink", "fileName", "fileSize",
            "fileType", "isActive", "createdAt", "updatedAt",
        ]

    def validate(self, attrs):
        # same policy as POST /upload for the cvs folder
        policy = policy_for_folder(RESUME_FOLDER)
        errors = {}
        file_type = attrs.get("file_type")
        if file_type and not policy.allows_type(file_type):
            errors["fileType"] = policy.type_error()
        file_size = attrs.get("file_size")
        if file_size is not None and not policy.allows_size(file_size):
            errors["fileSize"] = policy.size_error()
        if errors:
            raise serializers.ValidationError(errors)
        return attrs
