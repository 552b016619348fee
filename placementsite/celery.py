import os
from celery import Celery

os.environ.setdefault(
    "DJANGO_SETTINGS_MODULE",
    os.environ.get("DJANGO_SETTINGS_MODULE", "placementsite.settings.dev")
)

# worker : celery -A placementsite worker -l info
app = Celery("placementsite")
app.config_from_object("django.conf:settings", namespace="CELERY")
app.autodiscover_tasks(["placement"])
