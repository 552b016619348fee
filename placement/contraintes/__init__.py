"""Règles de placement, registre de fabriques et validateur."""
