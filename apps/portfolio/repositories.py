# apps/portfolio/repositories.py
"""
Persistence operations for each portfolio resource.

Repositories take already-validated snake_case dicts and return model
instances. Every mutation runs inside transaction.atomic(); multi-step writes
(exclusivity sweep, role replacement, experience delete) commit or roll back
as one unit. Missing or malformed ids raise RecordNotFound, unique-key
violations raise RecordConflict.
"""
import logging
from typing import Any, Dict, Iterable, List, Optional, Sequence

from django.core.exceptions import ValidationError as DjangoValidationError
from django.db import IntegrityError, transaction
from django.db.models import QuerySet
from django.utils import timezone

from common.exceptions import RecordConflict, RecordNotFound

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

logger = logging.getLogger(__name__)


class ResourceRepository:
    def __init__(self, model, name: str, label: Optional[str] = None):
        self.model = model
        self.name = name
        self.label = label or model._meta.verbose_name.title()

    def queryset(self) -> QuerySet:
        return self.model.objects.all()

    def list(self, filters: Optional[Dict[str, Any]] = None, order: Optional[Sequence[str]] = None) -> QuerySet:
        qs = self.queryset()
        if filters:
            qs = qs.filter(**filters)
        if order:
            qs = qs.order_by(*order)
        return qs

    def count(self, **filters) -> int:
        return self.model.objects.filter(**filters).count()

    def get_by_id(self, pk, for_update: bool = False):
        qs = self.queryset()
        if for_update:
            qs = qs.select_for_update()
        try:
            return qs.get(pk=pk)
        except (self.model.DoesNotExist, ValueError, DjangoValidationError):
            raise RecordNotFound(f"{self.label} not found")

    def _save(self, instance, **kwargs):
        try:
            with transaction.atomic():
                instance.save(**kwargs)
        except IntegrityError as exc:
            raise RecordConflict(f"{self.label} conflicts with an existing record") from exc
        return instance

    @transaction.atomic
    def create(self, data: Dict[str, Any]):
        instance = self._save(self.model(**data), force_insert=True)
        logger.info("%s.create id=%s", self.name, instance.pk)
        return instance

    @transaction.atomic
    def update(self, pk, data: Dict[str, Any]):
        instance = self.get_by_id(pk, for_update=True)
        for field, value in data.items():
            setattr(instance, field, value)
        self._save(instance)
        logger.info("%s.update id=%s fields=%s", self.name, instance.pk, sorted(data))
        return instance

    @transaction.atomic
    def delete(self, pk):
        instance = self.get_by_id(pk, for_update=True)
        deleted_pk = instance.pk
        instance.delete()
        # Model.delete() clears the pk; the caller renders the removed record
        instance.pk = deleted_pk
        logger.info("%s.delete id=%s", self.name, deleted_pk)
        return instance


class KeyedRepository(ResourceRepository):
    """Adds an upsert keyed on a unique natural field (title, company)."""

    key_field = "title"

    def __init__(self, model, name: str, key_field: Optional[str] = None, **kwargs):
        super().__init__(model, name, **kwargs)
        if key_field:
            self.key_field = key_field

    @transaction.atomic
    def upsert_by_key(self, key: str, data: Dict[str, Any]):
        defaults = {k: v for k, v in data.items() if k != self.key_field}
        try:
            instance, created = self.model.objects.update_or_create(
                **{self.key_field: key}, defaults=defaults,
            )
        except IntegrityError as exc:
            raise RecordConflict(f"{self.label} conflicts with an existing record") from exc
        logger.info("%s.upsert %s=%r id=%s created=%s", self.name, self.key_field, key, instance.pk, created)
        return instance

    def upsert_by_title(self, title: str, data: Dict[str, Any]):
        return self.upsert_by_key(title, data)


class ExclusiveActiveRepository(ResourceRepository):
    """
    At most one row of the type has is_active = true. Writes lock every row of
    the type in primary-key order before touching any of them, so concurrent
    activations serialize and the last commit wins.
    """

    def _lock_all(self) -> List:
        return list(self.model.objects.select_for_update().order_by("pk").values_list("pk", flat=True))

    def _sweep(self, keep_pk=None) -> int:
        others = self.model.objects.filter(is_active=True)
        if keep_pk is not None:
            others = others.exclude(pk=keep_pk)
        return others.update(is_active=False, updated_at=timezone.now())

    @transaction.atomic
    def deactivate_others(self, keep_pk=None) -> int:
        self._lock_all()
        return self._sweep(keep_pk=keep_pk)

    def get_active(self):
        return self.model.objects.filter(is_active=True).order_by("-updated_at").first()

    @transaction.atomic
    def create(self, data: Dict[str, Any]):
        self._lock_all()
        if data.get("is_active", True):
            data = dict(data, is_active=True)
            swept = self._sweep()
            if swept:
                logger.info("%s.sweep deactivated=%s", self.name, swept)
        return super().create(data)

    @transaction.atomic
    def update(self, pk, data: Dict[str, Any]):
        self._lock_all()
        instance = self.get_by_id(pk, for_update=True)
        if data.get("is_active"):
            swept = self._sweep(keep_pk=instance.pk)
            if swept:
                logger.info("%s.sweep deactivated=%s", self.name, swept)
        return super().update(instance.pk, data)

    @transaction.atomic
    def set_active_exclusive(self, pk):
        self._lock_all()
        instance = self.get_by_id(pk, for_update=True)
        self._sweep(keep_pk=instance.pk)
        instance.is_active = True
        self._save(instance)
        logger.info("%s.activate id=%s", self.name, instance.pk)
        return instance


class ExperienceRepository(KeyedRepository):
    """Experience owns its roles: they are created, replaced and deleted with it."""

    key_field = "company"

    def queryset(self) -> QuerySet:
        return self.model.objects.prefetch_related("roles")

    def _insert_roles(self, experience, roles: Iterable[Dict[str, Any]]) -> List[ExperienceRole]:
        return ExperienceRole.objects.bulk_create([
            ExperienceRole(
                experience=experience,
                title=role["title"],
                period=role["period"],
                description=list(role["description"]),
                position=index,
            )
            for index, role in enumerate(roles)
        ])

    @transaction.atomic
    def create(self, data: Dict[str, Any]):
        data = dict(data)
        roles = data.pop("roles", [])
        experience = super().create(data)
        self._insert_roles(experience, roles)
        return self.get_by_id(experience.pk)

    @transaction.atomic
    def update(self, pk, data: Dict[str, Any]):
        data = dict(data)
        roles = data.pop("roles", None)
        experience = super().update(pk, data)
        if roles is not None:
            self.replace_roles(experience.pk, roles)
        return self.get_by_id(experience.pk)

    @transaction.atomic
    def replace_roles(self, experience_id, roles: Iterable[Dict[str, Any]]) -> List[ExperienceRole]:
        experience = self.get_by_id(experience_id, for_update=True)
        removed, _ = ExperienceRole.objects.filter(experience=experience).delete()
        created = self._insert_roles(experience, roles)
        logger.info("%s.replace_roles id=%s removed=%s inserted=%s", self.name, experience.pk, removed, len(created))
        return list(ExperienceRole.objects.filter(experience=experience))

    @transaction.atomic
    def delete(self, pk):
        experience = self.get_by_id(pk, for_update=True)
        ExperienceRole.objects.filter(experience=experience).delete()
        deleted_pk = experience.pk
        experience.delete()
        experience.pk = deleted_pk
        logger.info("%s.delete id=%s", self.name, deleted_pk)
        return experience

    @transaction.atomic
    def upsert_by_company(self, company: str, data: Dict[str, Any]):
        data = dict(data)
        roles = data.pop("roles", None)
        experience = self.upsert_by_key(company, data)
        if roles is not None:
            self.replace_roles(experience.pk, roles)
        return self.get_by_id(experience.pk)


projects = KeyedRepository(Project, "project")
honors = KeyedRepository(Honor, "honor")
experiences = ExperienceRepository(Experience, "experience")
education = ResourceRepository(Education, "education")
skills = ResourceRepository(Skill, "skill")
public_profiles = ExclusiveActiveRepository(PublicProfile, "public_profile", label="Public profile")
resumes = ExclusiveActiveRepository(Resume, "cv", label="CV")
