# placement/apps.py
from django.apps import AppConfig


class PlacementConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "placement"
    verbose_name = "Placement des élèves"

    def ready(self):
        from .contraintes import enregistrement  # noqa: F401
