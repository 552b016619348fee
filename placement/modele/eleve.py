from __future__ import annotations

from enum import Enum
from typing import Optional


class NiveauScolaire(int, Enum):
    """Échelle ordinale à quatre niveaux (1 = faible … 4 = fort)."""

    FAIBLE = 1
    MOYEN_FAIBLE = 2
    MOYEN_FORT = 3
    FORT = 4

    @classmethod
    def depuis_code(cls, code: Optional[str]) -> Optional["NiveauScolaire"]:
        """Convertit la valeur transmise par l'interface (`low`, `high`, …)."""
        if code is None or str(code).strip() == "":
            return None
        cle: str = str(code).strip().lower().replace("-", "_")
        try:
            return _NIVEAUX_PAR_CODE[cle]
        except KeyError as exc:
            raise ValueError(f"Niveau scolaire inconnu: {code!r}") from exc

    def code(self) -> str:
        return _CODES_PAR_NIVEAU[self]


_NIVEAUX_PAR_CODE: dict[str, NiveauScolaire] = {
    "low": NiveauScolaire.FAIBLE,
    "medium_low": NiveauScolaire.MOYEN_FAIBLE,
    "medium_high": NiveauScolaire.MOYEN_FORT,
    "high": NiveauScolaire.FORT,
}
_CODES_PAR_NIVEAU: dict[NiveauScolaire, str] = {v: k for k, v in _NIVEAUX_PAR_CODE.items()}

# niveau retenu quand l'enseignant n'a rien renseigné
NIVEAU_PAR_DEFAUT: NiveauScolaire = NiveauScolaire.MOYEN_FORT


class Eleve:
    """Modélise un élève à placer.


    Paramètres du constructeur
    --------------------------
    identifiant : str
    Identifiant stable fourni par l'interface (clé des affectations).
    nom : str
    Nom tel que saisi, uniquement pour l'affichage.
    niveau : Optional[NiveauScolaire]
    Niveau scolaire, utilisé seulement par l'heuristique de compatibilité.
    """

    def __init__(self, identifiant: str, nom: str, niveau: Optional[NiveauScolaire] = None) -> None:
        self._identifiant: str = str(identifiant)
        self._nom: str = nom.strip()
        self._niveau: Optional[NiveauScolaire] = niveau

    def identifiant(self) -> str:
        """Retourne l'identifiant de l'élève."""
        return self._identifiant

    def nom(self) -> str:
        """Retourne le nom saisi."""
        return self._nom

    def affichage_nom(self) -> str:
        """Retourne la chaîne à afficher (le nom, ou l'identifiant à défaut)."""
        return self._nom or self._identifiant

    def niveau(self) -> Optional[NiveauScolaire]:
        """Retourne le niveau renseigné, ou `None`."""
        return self._niveau

    def niveau_effectif(self) -> NiveauScolaire:
        """Retourne le niveau renseigné, ou le niveau par défaut."""
        return self._niveau if self._niveau is not None else NIVEAU_PAR_DEFAUT

    # --- Protocole de comparaison / hachage ---
    def __str__(self) -> str:  # pragma: no cover - représentation
        return f"{self.affichage_nom()} [{self._identifiant}]"

    def __repr__(self) -> str:  # pragma: no cover - représentation
        return str(self)

    def __hash__(self) -> int:
        return hash(self._identifiant)

    def __eq__(self, autre: object) -> bool:
        return isinstance(autre, Eleve) and self._identifiant == autre._identifiant
