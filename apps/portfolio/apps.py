# apps/portfolio/apps.py
from django.apps import AppConfig


class PortfolioConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "apps.portfolio"
    verbose_name = "Portfolio content"
