from __future__ import annotations

from typing import Any, Dict, Mapping, Optional, Sequence

from ..modele.geometrie import distance_manhattan, sont_adjacents
from ..modele.pupitre import Pupitre
from .base import Contrainte, VueAffectation, nom_affiche
from .types import TypeContrainte


class _ContrainteBinaire(Contrainte):
    """Socle commun aux règles portant sur une paire d'élèves."""

    def __init__(self, a: str, b: str) -> None:
        self.a: str = str(a)
        self.b: str = str(b)

    def implique(self) -> Sequence[str]:
        return [self.a, self.b]

    def _pupitres(self, vue: VueAffectation) -> Optional[tuple[Pupitre, Pupitre]]:
        pa: Optional[Pupitre] = vue.pupitre_de(self.a)
        pb: Optional[Pupitre] = vue.pupitre_de(self.b)
        if pa is None or pb is None:
            return None
        return pa, pb

    def code_machine(self) -> Dict[str, Any]:
        return {"type": self.type_contrainte().value, "studentIds": [self.a, self.b]}


class DoiventEtreEloignes(_ContrainteBinaire):
    """Interdit que A et B occupent des pupitres adjacents."""

    def type_contrainte(self) -> TypeContrainte:
        return TypeContrainte.ELOIGNES

    def est_satisfaite(self, vue: VueAffectation) -> bool:
        paire = self._pupitres(vue)
        if paire is None:
            return True
        return not sont_adjacents(*paire)

    def message_violation(self) -> str:
        return f"Séparation non respectée : {self.a} et {self.b} sont assis côte à côte"

    def texte_humain(self, noms: Optional[Mapping[str, str]] = None) -> str:
        return f"{nom_affiche(self.a, noms)} et {nom_affiche(self.b, noms)} doivent être séparés"


class DoiventEtreEnsemble(_ContrainteBinaire):
    """Exige que A et B occupent des pupitres adjacents."""

    def type_contrainte(self) -> TypeContrainte:
        return TypeContrainte.ENSEMBLE

    def est_satisfaite(self, vue: VueAffectation) -> bool:
        paire = self._pupitres(vue)
        if paire is None:
            return True
        return sont_adjacents(*paire)

    def message_violation(self) -> str:
        return f"Regroupement non respecté : {self.a} et {self.b} ne sont pas côte à côte"

    def texte_humain(self, noms: Optional[Mapping[str, str]] = None) -> str:
        return f"{nom_affiche(self.a, noms)} et {nom_affiche(self.b, noms)} doivent être côte à côte"


class DistanceMinimale(_ContrainteBinaire):
    """Exige que A et B soient séparés d'au moins `d` cases (distance de Manhattan)."""

    def __init__(self, a: str, b: str, d: int) -> None:
        if d < 1:
            raise ValueError("d doit être >= 1")
        super().__init__(a, b)
        self.d: int = d

    def type_contrainte(self) -> TypeContrainte:
        return TypeContrainte.DISTANCE

    def est_satisfaite(self, vue: VueAffectation) -> bool:
        paire = self._pupitres(vue)
        if paire is None:
            return True
        return distance_manhattan(*paire) >= self.d

    def message_violation(self) -> str:
        return f"Distance non respectée : {self.a} et {self.b} sont à moins de {self.d} cases"

    def texte_humain(self, noms: Optional[Mapping[str, str]] = None) -> str:
        return (
            f"{nom_affiche(self.a, noms)} et {nom_affiche(self.b, noms)} "
            f"doivent être éloignés d'au moins {self.d} pupitres"
        )

    def code_machine(self) -> Dict[str, Any]:
        code: Dict[str, Any] = super().code_machine()
        code["minDistance"] = self.d
        return code
