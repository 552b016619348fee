#!/usr/bin/env python
"""Utilitaire Django du service de placement (migrate, runserver, ...)."""
import os
import sys


def main():
    # dev par défaut ; la production fixe DJANGO_SETTINGS_MODULE=placementsite.settings.prod
    os.environ.setdefault("DJANGO_SETTINGS_MODULE", "placementsite.settings.dev")
    try:
        from django.core.management import execute_from_command_line
    except ImportError as exc:
        raise ImportError(
            "Django introuvable : installez le projet (pip install -e .) ou vérifiez le PYTHONPATH."
        ) from exc
    execute_from_command_line(sys.argv)


if __name__ == "__main__":
    main()
