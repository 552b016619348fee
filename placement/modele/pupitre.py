from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class FormePupitre(str, Enum):
    """Forme d'un pupitre telle que dessinée côté interface."""

    RECTANGULAIRE = "rectangular"
    ROND = "round"


@dataclass(frozen=True)
class Pupitre:
    """Représente un pupitre posé librement sur le plan de la salle.

    Attributs
    ---------
    id : str
    Identifiant opaque fourni par l'interface.
    numero : int
    Numéro affiché sur le pupitre.
    x, y : float
    Coordonnées en pixels logiques (grille de 20 unités côté calcul).
    forme : FormePupitre
    Rectangulaire ou rond ; sans effet sur le placement.
    eleve_assigne : Optional[str]
    Identifiant de l'occupant actuel, tel que connu de l'interface.
    groupe : Optional[str]
    Identifiant du groupe de pupitres auquel il appartient.
    verrouille_vide : bool
    Pupitre que l'enseignant veut garder libre. Simple marqueur : le solveur
    l'ignore, seule `fabrique_ui.contraintes_depuis_payload` le traduit en
    `SiegeImpose` vide. Un appelant de `resoudre` passe lui-même ce siège.


    Immuable : le moteur ne modifie jamais les pupitres qu'on lui confie,
    il produit une nouvelle affectation.
    """

    id: str
    numero: int
    x: float
    y: float
    forme: FormePupitre = FormePupitre.RECTANGULAIRE
    eleve_assigne: Optional[str] = None
    groupe: Optional[str] = None
    verrouille_vide: bool = False
