# apps/portfolio/filters.py
import django_filters

from .models import Project, Resume


class ProjectFilter(django_filters.FilterSet):
    category = django_filters.CharFilter(field_name="category", lookup_expr="iexact")

    class Meta:
        model = Project
        fields = ["category"]


class ResumeFilter(django_filters.FilterSet):
    isActive = django_filters.BooleanFilter(field_name="is_active")

    class Meta:
        model = Resume
        fields = []
