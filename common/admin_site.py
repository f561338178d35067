"""
Admin dashboard gated by the same rule as the API: an active identity with role ADMIN.
Anonymous or non-admin visitors are redirected to /admin/login/.
"""
from django.contrib import admin
from django.contrib.admin.apps import AdminConfig


class PortfolioAdminSite(admin.AdminSite):
    site_header = "Portfolio Admin"
    site_title = "Portfolio Admin"
    index_title = "Content"

    def has_permission(self, request):
        from apps.accounts.gate import grant_for

        return grant_for(request.user).granted


class PortfolioAdminConfig(AdminConfig):
    default_site = "common.admin_site.PortfolioAdminSite"
