import uuid

import django.db.models.deletion
import django.utils.timezone
from django.db import migrations, models


def base_fields():
    return [
        ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
        ("created_at", models.DateTimeField(db_index=True, default=django.utils.timezone.now)),
        ("updated_at", models.DateTimeField(auto_now=True)),
    ]


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Project",
            fields=base_fields() + [
                ("title", models.CharField(max_length=255, unique=True)),
                ("description", models.TextField()),
                ("tech_stack", models.JSONField(default=list)),
                ("github_link", models.URLField(blank=True, max_length=500, null=True)),
                ("live_link", models.URLField(blank=True, max_length=500, null=True)),
                ("images", models.JSONField(default=list)),
                ("awards", models.JSONField(blank=True, default=list)),
                ("category", models.CharField(db_index=True, max_length=120)),
            ],
            options={"ordering": ["-created_at"]},
        ),
        migrations.CreateModel(
            name="Honor",
            fields=base_fields() + [
                ("title", models.CharField(max_length=255, unique=True)),
                ("description", models.TextField()),
                ("image", models.CharField(max_length=500)),
                ("issued_by", models.CharField(max_length=255)),
                ("issued_at", models.DateTimeField(db_index=True)),
            ],
            options={"ordering": ["-issued_at"]},
        ),
        migrations.CreateModel(
            name="Experience",
            fields=base_fields() + [
                ("company", models.CharField(max_length=255, unique=True)),
                ("company_link", models.URLField(blank=True, max_length=500, null=True)),
                ("logo", models.CharField(max_length=500)),
                ("period", models.CharField(max_length=120)),
            ],
            options={"ordering": ["-created_at"]},
        ),
        migrations.CreateModel(
            name="ExperienceRole",
            fields=base_fields() + [
                ("title", models.CharField(max_length=255)),
                ("period", models.CharField(max_length=120)),
                ("description", models.JSONField(default=list)),
                ("position", models.PositiveIntegerField(default=0)),
                (
                    "experience",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="roles",
                        to="portfolio.experience",
                    ),
                ),
            ],
            options={
                "ordering": ["position", "created_at"],
                "indexes": [models.Index(fields=["experience", "position"], name="portfolio_role_position_idx")],
            },
        ),
        migrations.CreateModel(
            name="Education",
            fields=base_fields() + [
                ("institution", models.CharField(max_length=255)),
                ("degree", models.CharField(max_length=255)),
                ("period", models.CharField(max_length=120)),
                ("cgpa", models.CharField(blank=True, max_length=20, null=True)),
                ("logo", models.CharField(max_length=500)),
                ("link", models.URLField(blank=True, max_length=500, null=True)),
                ("core_courses", models.JSONField(default=list)),
                ("is_active", models.BooleanField(db_index=True, default=True)),
                ("display_order", models.PositiveIntegerField(default=0)),
            ],
            options={"ordering": ["display_order", "created_at"]},
        ),
        migrations.CreateModel(
            name="Skill",
            fields=base_fields() + [
                ("name", models.CharField(max_length=120)),
                ("category", models.CharField(db_index=True, max_length=120)),
                (
                    "icon_type",
                    models.CharField(
                        choices=[("react-icon", "React icon"), ("custom", "Custom image"), ("text", "Text")],
                        max_length=20,
                    ),
                ),
                ("icon_name", models.CharField(blank=True, max_length=120, null=True)),
                ("icon_url", models.URLField(blank=True, max_length=500, null=True)),
                ("color", models.CharField(blank=True, max_length=40, null=True)),
                (
                    "proficiency",
                    models.CharField(
                        blank=True,
                        choices=[
                            ("beginner", "Beginner"),
                            ("intermediate", "Intermediate"),
                            ("advanced", "Advanced"),
                            ("expert", "Expert"),
                        ],
                        max_length=20,
                        null=True,
                    ),
                ),
                ("is_active", models.BooleanField(db_index=True, default=True)),
                ("display_order", models.PositiveIntegerField(default=0)),
            ],
            options={"ordering": ["category", "display_order", "name"]},
        ),
        migrations.CreateModel(
            name="PublicProfile",
            fields=base_fields() + [
                ("name", models.CharField(max_length=200)),
                ("image", models.URLField(max_length=500)),
                ("headlines", models.JSONField(default=list)),
                ("tagline", models.CharField(max_length=500)),
                ("is_active", models.BooleanField(db_index=True, default=True)),
            ],
            options={
                "ordering": ["-updated_at"],
                "constraints": [
                    models.UniqueConstraint(
                        condition=models.Q(("is_active", True)),
                        fields=("is_active",),
                        name="single_active_public_profile",
                    ),
                ],
            },
        ),
        migrations.CreateModel(
            name="Resume",
            fields=base_fields() + [
                ("title", models.CharField(max_length=255)),
                ("description", models.TextField()),
                ("download_link", models.URLField(max_length=500)),
                ("file_name", models.CharField(blank=True, max_length=255, null=True)),
                ("file_size", models.PositiveBigIntegerField(blank=True, null=True)),
                ("file_type", models.CharField(blank=True, max_length=120, null=True)),
                ("is_active", models.BooleanField(db_index=True, default=True)),
            ],
            options={
                "ordering": ["-created_at"],
                "constraints": [
                    models.UniqueConstraint(
                        condition=models.Q(("is_active", True)),
                        fields=("is_active",),
                        name="single_active_resume",
                    ),
                ],
            },
        ),
    ]
