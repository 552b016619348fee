from __future__ import annotations

from enum import Enum


class TypeContrainte(str, Enum):
    """Enum centralisant les types logiques de contraintes.

    Hérite de `str` pour une sérialisation JSON directe (valeur = nom stable,
    identique à celui qu'emploie l'interface).
    """

    # Pupitre (élève imposé ou pupitre verrouillé vide)
    SIEGE_IMPOSE = "hard_seat"

    # Binaires (paire d'élèves)
    ELOIGNES = "keep_apart"
    ENSEMBLE = "keep_together"
    DISTANCE = "distance"

    # Groupes de pupitres
    DANS_GROUPE = "must_be_in_group"
    HORS_GROUPE = "cannot_be_in_group"
