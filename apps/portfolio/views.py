# apps/portfolio/views.py
"""
Portfolio gateway. Reads are public, writes go through the admin gate
(common.permissions.IsAdminOrReadOnly) before any body parsing or lookup.
Every viewset validates with its serializer, hands the clean dict to its
repository and answers with the {"success", "data"} envelope.
"""
from django_filters.rest_framework import DjangoFilterBackend
from drf_spectacular.types import OpenApiTypes
from drf_spectacular.utils import OpenApiParameter, extend_schema, extend_schema_view
from rest_framework import viewsets, status
from rest_framework.decorators import action
from rest_framework.views import APIView

from apps.accounts.gate import grant_for
from common.permissions import IsAdmin
from common.responses import envelope
from common.validation import validate

from . import repositories
from .filters import ProjectFilter, ResumeFilter
from .serializers import (
    EducationSerializer,
    ExperienceSerializer,
    HonorSerializer,
    ProjectSerializer,
    PublicProfileSerializer,
    ResumeSerializer,
    SkillSerializer,
)

INCLUDE_INACTIVE_PARAM = OpenApiParameter(
    name="all",
    required=False,
    location=OpenApiParameter.QUERY,
    type=OpenApiTypes.BOOL,
    description="Admins only: include inactive records.",
)


def crud_schema(serializer, tag, list_params=None):
    return extend_schema_view(
        list=extend_schema(summary=f"List {tag}", parameters=list_params, responses={200: serializer(many=True)}, tags=[tag]),
        retrieve=extend_schema(summary=f"Retrieve {tag}", responses={200: serializer}, tags=[tag]),
        create=extend_schema(summary=f"Create {tag}", request=serializer, responses={201: serializer}, tags=[tag]),
        update=extend_schema(
            summary=f"Update {tag}",
            description="Fields are optional; any given field keeps its format constraints.",
            request=serializer,
            responses={200: serializer},
            tags=[tag],
        ),
        destroy=extend_schema(summary=f"Delete {tag}", responses={200: serializer}, tags=[tag]),
    )


class ResourceViewSet(viewsets.GenericViewSet):
    """list / retrieve / create / update (partial schema) / destroy over a repository."""

    repository: repositories.ResourceRepository = None
    filter_backends = [DjangoFilterBackend]
    http_method_names = ["get", "post", "put", "delete", "head", "options"]
    list_filters: dict = {}

    def get_list_filters(self) -> dict:
        return dict(self.list_filters)

    def get_queryset(self):
        return self.repository.list(filters=self.get_list_filters())

    def list(self, request, *args, **kwargs):
        queryset = self.filter_queryset(self.get_queryset())
        return envelope(self.get_serializer(queryset, many=True).data)

    def retrieve(self, request, pk=None, *args, **kwargs):
        instance = self.repository.get_by_id(pk)
        return envelope(self.get_serializer(instance).data)

    def create(self, request, *args, **kwargs):
        data = validate(request.data, self.get_serializer_class(), context=self.get_serializer_context())
        instance = self.repository.create(data)
        return envelope(self.get_serializer(instance).data, status=status.HTTP_201_CREATED)

    def update(self, request, pk=None, *args, **kwargs):
        data = validate(request.data, self.get_serializer_class(), partial=True, context=self.get_serializer_context())
        instance = self.repository.update(pk, data)
        return envelope(self.get_serializer(instance).data)

    def destroy(self, request, pk=None, *args, **kwargs):
        instance = self.repository.delete(pk)
        return envelope(self.get_serializer(instance).data)


class ActiveFlagListMixin:
    """Public lists hide inactive rows; an admin may pass ?all=true to see them."""

    list_filters = {"is_active": True}

    def get_list_filters(self) -> dict:
        request = getattr(self, "request", None)
        if request is not None and request.query_params.get("all", "").lower() in ("1", "true"):
            if grant_for(request.user).granted:
                return {}
        return super().get_list_filters()


class ExclusiveActiveMixin:
    """Single-active resources: GET /active returns the current one, POST /{id}/activate switches it."""

    def current(self):
        active = self.repository.get_active()
        return self.get_serializer(active).data if active is not None else None

    @action(detail=True, methods=["post"])
    def activate(self, request, pk=None):
        instance = self.repository.set_active_exclusive(pk)
        return envelope(self.get_serializer(instance).data)


# -------------------------------------------------------------------
# Collections
# -------------------------------------------------------------------
@crud_schema(ProjectSerializer, "projects")
class ProjectViewSet(ResourceViewSet):
    repository = repositories.projects
    serializer_class = ProjectSerializer
    filterset_class = ProjectFilter


@crud_schema(HonorSerializer, "honors")
class HonorViewSet(ResourceViewSet):
    repository = repositories.honors
    serializer_class = HonorSerializer


@crud_schema(ExperienceSerializer, "experience")
class ExperienceViewSet(ResourceViewSet):
    """Experience records carry their roles; PUT with `roles` replaces the whole set."""

    repository = repositories.experiences
    serializer_class = ExperienceSerializer


@crud_schema(EducationSerializer, "education", list_params=[INCLUDE_INACTIVE_PARAM])
class EducationViewSet(ActiveFlagListMixin, ResourceViewSet):
    repository = repositories.education
    serializer_class = EducationSerializer


@crud_schema(SkillSerializer, "skills", list_params=[INCLUDE_INACTIVE_PARAM])
class SkillViewSet(ActiveFlagListMixin, ResourceViewSet):
    repository = repositories.skills
    serializer_class = SkillSerializer


# -------------------------------------------------------------------
# Single-active resources
# -------------------------------------------------------------------
@crud_schema(PublicProfileSerializer, "public-profile")
class PublicProfileViewSet(ExclusiveActiveMixin, ResourceViewSet):
    repository = repositories.public_profiles
    serializer_class = PublicProfileSerializer

    @extend_schema(
        summary="Active public profile",
        description="The single active profile, or null when none is active.",
        responses={200: PublicProfileSerializer},
        tags=["public-profile"],
    )
    def list(self, request, *args, **kwargs):
        return envelope(self.current())

    @extend_schema(summary="All public profiles", responses={200: PublicProfileSerializer(many=True)}, tags=["public-profile"])
    @action(detail=False, methods=["get"], url_path="all", permission_classes=[IsAdmin])
    def list_all(self, request):
        return envelope(self.get_serializer(self.repository.list(), many=True).data)


@crud_schema(ResumeSerializer, "cvs")
class ResumeViewSet(ExclusiveActiveMixin, ResourceViewSet):
    repository = repositories.resumes
    serializer_class = ResumeSerializer
    filterset_class = ResumeFilter

    @extend_schema(summary="Active CV", responses={200: ResumeSerializer}, tags=["cvs"])
    @action(detail=False, methods=["get"])
    def active(self, request):
        return envelope(self.current())


# -------------------------------------------------------------------
# Dashboard
# -------------------------------------------------------------------
class DashboardStatsView(APIView):
    permission_classes = [IsAdmin]

    @extend_schema(summary="Content counts for the dashboard", tags=["stats"])
    def get(self, request):
        return envelope({
            "projects": repositories.projects.count(),
            "honors": repositories.honors.count(),
            "experience": repositories.experiences.count(),
            "education": repositories.education.count(),
            "skills": repositories.skills.count(),
            "publicProfiles": repositories.public_profiles.count(),
            "cvs": repositories.resumes.count(),
            "activeCv": repositories.resumes.count(is_active=True) > 0,
        })
