# apps/portfolio/management/commands/seed_portfolio.py
import json
from pathlib import Path

from django.conf import settings
from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand, CommandError
from django.db import transaction
from rest_framework.exceptions import ValidationError

from apps.portfolio import repositories
from apps.portfolio.serializers import ExperienceSerializer, HonorSerializer, ProjectSerializer
from common.validation import flatten_errors, validate

DEFAULT_SEED_FILE = Path(__file__).resolve().parents[2] / "seed_data" / "seed.json"


class Command(BaseCommand):
    help = "Create the admin account and upsert portfolio content from a JSON file. Safe to re-run."

    def add_arguments(self, parser):
        parser.add_argument("--file", default=str(DEFAULT_SEED_FILE), help="JSON with projects/honors/experience lists")
        parser.add_argument("--skip-admin", action="store_true", help="Do not touch the admin account")

    def handle(self, *args, **options):
        if not options["skip_admin"]:
            self.ensure_admin()

        path = Path(options["file"])
        try:
            payload = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            raise CommandError(f"Cannot read seed file {path}: {exc}")

        with transaction.atomic():
            projects = self.load(payload.get("projects", []), ProjectSerializer, "projects",
                                 lambda row: repositories.projects.upsert_by_title(row["title"], row))
            honors = self.load(payload.get("honors", []), HonorSerializer, "honors",
                               lambda row: repositories.honors.upsert_by_title(row["title"], row))
            experience = self.load(payload.get("experience", []), ExperienceSerializer, "experience",
                                   lambda row: repositories.experiences.upsert_by_company(row["company"], row))

        self.stdout.write(self.style.SUCCESS(
            f"Seeded {projects} projects, {honors} honors, {experience} experience records."
        ))

    def load(self, rows, schema, section, upsert) -> int:
        for index, row in enumerate(rows):
            try:
                data = validate(row, schema)
            except ValidationError as exc:
                problems = "; ".join(f"{e['field']}: {e['message']}" for e in flatten_errors(exc.detail))
                raise CommandError(f"{section}[{index}] is invalid: {problems}")
            upsert(data)
        return len(rows)

    def ensure_admin(self):
        User = get_user_model()
        email = settings.ADMIN_EMAIL.strip().lower()
        user = User.objects.filter(email__iexact=email).first()
        if user is None:
            if not settings.ADMIN_PASSWORD:
                raise CommandError("ADMIN_PASSWORD must be set to create the admin account.")
            User.objects.create_superuser(email=email, password=settings.ADMIN_PASSWORD, name="Admin User")
            self.stdout.write(f"Created admin {email}")
            return
        # existing password is kept
        if user.role != User.Role.ADMIN or not user.is_active:
            user.role = User.Role.ADMIN
            user.is_active = True
            user.save(update_fields=["role", "is_active", "updated_at"])
        self.stdout.write(f"Admin {email} already present")
