"""
Dispositions rapides de pupitres (coordonnées en pixels logiques).

Reprend les agencements proposés par l'éditeur : rangées, binômes, îlots de
quatre et la variante « 3 + 2 îlots ». Les îlots reçoivent un identifiant de
groupe (`g1`, `g2`, …) exploitable par les contraintes de groupe.
"""
from __future__ import annotations

from typing import List, Optional, Sequence, Tuple

from .modele.pupitre import Pupitre

# origine et pas des rangées
_DEPART_X: int = 200
_DEPART_Y: int = 200
_PAS_RANGEE_X: int = 140
_PAS_RANGEE_Y: int = 100

# pas à l'intérieur d'un îlot, puis entre îlots
_PAS_ILOT_X: int = 125
_PAS_ILOT_Y: int = 70
_PAS_GROUPES_X: int = 280
_PAS_GROUPES_Y: int = 200

# décalages (dx, dy) des pupitres d'un îlot selon sa taille
_FORMES_ILOT: dict[int, Tuple[Tuple[int, int], ...]] = {
    2: ((0, 0), (_PAS_ILOT_X, 0)),
    4: ((0, 0), (_PAS_ILOT_X, 0), (0, _PAS_ILOT_Y), (_PAS_ILOT_X, _PAS_ILOT_Y)),
    6: (
        (0, 0), (_PAS_ILOT_X, 0), (2 * _PAS_ILOT_X, 0),
        (0, _PAS_ILOT_Y), (_PAS_ILOT_X, _PAS_ILOT_Y), (2 * _PAS_ILOT_X, _PAS_ILOT_Y),
    ),
}


def _numeroter(points: Sequence[Tuple[float, float, Optional[str]]]) -> List[Pupitre]:
    return [
        Pupitre(id=f"p{i}", numero=i, x=x, y=y, groupe=groupe)
        for i, (x, y, groupe) in enumerate(points, start=1)
    ]


def disposition_en_rangees(nb_rangees: int, pupitres_par_rangee: int) -> List[Pupitre]:
    """Rangées régulières, numérotées de gauche à droite puis du premier au dernier rang."""
    if nb_rangees < 1 or pupitres_par_rangee < 1:
        raise ValueError("il faut au moins une rangée et un pupitre par rangée")
    points: List[Tuple[float, float, Optional[str]]] = []
    for rangee in range(nb_rangees):
        for colonne in range(pupitres_par_rangee):
            points.append((_DEPART_X + colonne * _PAS_RANGEE_X, _DEPART_Y + rangee * _PAS_RANGEE_Y, None))
    return _numeroter(points)


def disposition_en_ilots(taille_ilot: int, nb_ilots: int) -> List[Pupitre]:
    """Îlots de 2, 4 ou 6 pupitres, trois îlots par ligne."""
    forme = _FORMES_ILOT.get(taille_ilot)
    if forme is None:
        raise ValueError(f"taille d'îlot non prise en charge: {taille_ilot} (2, 4 ou 6)")
    if nb_ilots < 1:
        raise ValueError("il faut au moins un îlot")
    points: List[Tuple[float, float, Optional[str]]] = []
    for ilot in range(nb_ilots):
        gx: int = _DEPART_X + (ilot % 3) * _PAS_GROUPES_X
        gy: int = _DEPART_Y + (ilot // 3) * _PAS_GROUPES_Y
        for dx, dy in forme:
            points.append((gx + dx, gy + dy, f"g{ilot + 1}"))
    return _numeroter(points)


def disposition_trois_plus_deux() -> List[Pupitre]:
    """Cinq îlots de quatre : trois devant, deux derrière (centrés)."""
    depart: int = 160
    forme = _FORMES_ILOT[4]
    points: List[Tuple[float, float, Optional[str]]] = []
    origines: List[Tuple[int, int]] = [(depart + i * _PAS_GROUPES_X, depart) for i in range(3)]
    origines += [(depart + 150 + i * _PAS_GROUPES_X, depart + _PAS_GROUPES_Y) for i in range(2)]
    for numero, (gx, gy) in enumerate(origines, start=1):
        for dx, dy in forme:
            points.append((gx + dx, gy + dy, f"g{numero}"))
    return _numeroter(points)


DISPOSITIONS = {
    "rangees-3x5": lambda: disposition_en_rangees(3, 5),
    "rangees-4x6": lambda: disposition_en_rangees(4, 6),
    "rangees-5x6": lambda: disposition_en_rangees(5, 6),
    "binomes-6": lambda: disposition_en_ilots(2, 6),
    "ilots-4x4": lambda: disposition_en_ilots(4, 4),
    "ilots-3+2": disposition_trois_plus_deux,
}
