# apps/portfolio/urls.py
from django.urls import path, include
from rest_framework.routers import SimpleRouter

from .views import (
    DashboardStatsView,
    EducationViewSet,
    ExperienceViewSet,
    HonorViewSet,
    ProjectViewSet,
    PublicProfileViewSet,
    ResumeViewSet,
    SkillViewSet,
)

router = SimpleRouter(trailing_slash=False)
router.register(r"projects", ProjectViewSet, basename="project")
router.register(r"honors", HonorViewSet, basename="honor")
router.register(r"experience", ExperienceViewSet, basename="experience")
router.register(r"education", EducationViewSet, basename="education")
router.register(r"skills", SkillViewSet, basename="skill")
router.register(r"public-profile", PublicProfileViewSet, basename="public-profile")
router.register(r"cvs", ResumeViewSet, basename="cv")

urlpatterns = [
    path("stats", DashboardStatsView.as_view(), name="dashboard-stats"),
    path("", include(router.urls)),
]
