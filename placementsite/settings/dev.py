from .base import *
from .base import _entier, _level
import os
from pathlib import Path
from dotenv import load_dotenv

# Load .env.dev into process env for local development only.
load_dotenv(Path(BASE_DIR) / ".env.dev")


DEBUG = True
ALLOWED_HOSTS = []

# variables relues après chargement du .env.dev
CELERY_BROKER_URL = os.getenv("CELERY_BROKER_URL", CELERY_BROKER_URL)
CELERY_RESULT_BACKEND = os.getenv("CELERY_RESULT_BACKEND", CELERY_RESULT_BACKEND)
PLACEMENT_ITERATIONS_MAX = _entier("PLACEMENT_ITERATIONS_MAX", PLACEMENT_ITERATIONS_MAX)
LOGGING["loggers"]["placement"]["level"] = _level("PLACEMENT_LOG_LEVEL", "DEBUG")
