# apps/portfolio/admin.py
from django.contrib import admin

from . import models, repositories


@admin.register(models.Project)
class ProjectAdmin(admin.ModelAdmin):
    list_display = ("title", "category", "created_at")
    search_fields = ("title", "description")
    list_filter = ("category",)
    readonly_fields = ("created_at", "updated_at")


@admin.register(models.Honor)
class HonorAdmin(admin.ModelAdmin):
    list_display = ("title", "issued_by", "issued_at")
    search_fields = ("title", "issued_by")
    readonly_fields = ("created_at", "updated_at")


class ExperienceRoleInline(admin.TabularInline):
    model = models.ExperienceRole
    extra = 0
    fields = ("position", "title", "period", "description")


@admin.register(models.Experience)
class ExperienceAdmin(admin.ModelAdmin):
    list_display = ("company", "period", "created_at")
    search_fields = ("company",)
    inlines = [ExperienceRoleInline]
    readonly_fields = ("created_at", "updated_at")


@admin.register(models.Education)
class EducationAdmin(admin.ModelAdmin):
    list_display = ("institution", "degree", "period", "is_active", "display_order")
    list_filter = ("is_active",)
    list_editable = ("is_active", "display_order")


@admin.register(models.Skill)
class SkillAdmin(admin.ModelAdmin):
    list_display = ("name", "category", "icon_type", "proficiency", "is_active", "display_order")
    list_filter = ("category", "icon_type", "is_active")
    search_fields = ("name",)


class SingleActiveAdmin(admin.ModelAdmin):
    """Saving an active row deactivates the others in the same transaction."""

    repository: repositories.ExclusiveActiveRepository = None
    actions = ["make_active"]
    readonly_fields = ("created_at", "updated_at")

    def save_model(self, request, obj, form, change):
        if obj.is_active:
            self.repository.deactivate_others(keep_pk=obj.pk)
        super().save_model(request, obj, form, change)

    @admin.action(description="Make the selected row the active one")
    def make_active(self, request, queryset):
        if queryset.count() != 1:
            self.message_user(request, "Select exactly one row to activate.", level="warning")
            return
        self.repository.set_active_exclusive(queryset.get().pk)


@admin.register(models.PublicProfile)
class PublicProfileAdmin(SingleActiveAdmin):
    repository = repositories.public_profiles
    list_display = ("name", "tagline", "is_active", "updated_at")


@admin.register(models.Resume)
class ResumeAdmin(SingleActiveAdmin):
    repository = repositories.resumes
    list_display = ("title", "file_name", "is_active", "created_at")
