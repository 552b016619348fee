"""Réglages du service : base commune, puis dev / prod / test."""
