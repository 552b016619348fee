"""Moteur de placement des élèves sur des pupitres disposés librement."""
