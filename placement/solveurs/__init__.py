"""Solveurs de placement."""
