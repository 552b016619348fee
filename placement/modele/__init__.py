"""Modèle en mémoire : pupitres, élèves et géométrie de la salle."""
