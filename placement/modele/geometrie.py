from __future__ import annotations

import math

from .pupitre import Pupitre

# taille d'une case de la grille logique, en pixels
TAILLE_GRILLE: int = 20


def _arrondi(valeur: float) -> int:
    # arrondi « au plus proche », moitiés vers le haut (comme côté navigateur)
    return int(math.floor(valeur + 0.5))


def case_grille(pupitre: Pupitre) -> tuple[int, int]:
    """Retourne la case (colonne, rangée) de la grille occupée par `pupitre`."""
    return _arrondi(pupitre.x / TAILLE_GRILLE), _arrondi(pupitre.y / TAILLE_GRILLE)


def distance_manhattan(a: Pupitre, b: Pupitre) -> int:
    """Calcule la distance de Manhattan entre deux pupitres, en cases."""
    xa, ya = case_grille(a)
    xb, yb = case_grille(b)
    dx: int = abs(xa - xb)
    dy: int = abs(ya - yb)
    return dx + dy


def sont_adjacents(a: Pupitre, b: Pupitre) -> bool:
    """Retourne `True` si les pupitres se touchent (distance de Manhattan <= 1).

    Les voisins en diagonale (décalage (1, 1), distance 2) ne sont pas adjacents.
    """
    return distance_manhattan(a, b) <= 1
