from __future__ import annotations

from typing import Any, Dict, Mapping, Optional, Sequence

from ..modele.pupitre import Pupitre
from .base import Contrainte, VueAffectation, nom_affiche
from .types import TypeContrainte


class DoitEtreDansGroupe(Contrainte):
    """Exige que l'élève soit assis à un pupitre du groupe `groupe_id`."""

    def __init__(self, eleve_id: str, groupe_id: str) -> None:
        self.eleve_id: str = str(eleve_id)
        self.groupe_id: str = str(groupe_id)

    def type_contrainte(self) -> TypeContrainte:
        return TypeContrainte.DANS_GROUPE

    def implique(self) -> Sequence[str]:
        return [self.eleve_id]

    def est_satisfaite(self, vue: VueAffectation) -> bool:
        pupitre: Optional[Pupitre] = vue.pupitre_de(self.eleve_id)
        return True if pupitre is None else (pupitre.groupe == self.groupe_id)

    def message_violation(self) -> str:
        return f"Groupe non respecté : {self.eleve_id} doit être dans le groupe {self.groupe_id}"

    def texte_humain(self, noms: Optional[Mapping[str, str]] = None) -> str:
        return f"{nom_affiche(self.eleve_id, noms)} doit être dans le groupe {self.groupe_id}"

    def code_machine(self) -> Dict[str, Any]:
        return {"type": self.type_contrainte().value, "studentIds": [self.eleve_id], "groupId": self.groupe_id}


class NeDoitPasEtreDansGroupe(Contrainte):
    """Interdit à l'élève les pupitres du groupe `groupe_id`."""

    def __init__(self, eleve_id: str, groupe_id: str) -> None:
        self.eleve_id: str = str(eleve_id)
        self.groupe_id: str = str(groupe_id)

    def type_contrainte(self) -> TypeContrainte:
        return TypeContrainte.HORS_GROUPE

    def implique(self) -> Sequence[str]:
        return [self.eleve_id]

    def est_satisfaite(self, vue: VueAffectation) -> bool:
        pupitre: Optional[Pupitre] = vue.pupitre_de(self.eleve_id)
        return True if pupitre is None else (pupitre.groupe != self.groupe_id)

    def message_violation(self) -> str:
        return f"Groupe interdit : {self.eleve_id} ne doit pas être dans le groupe {self.groupe_id}"

    def texte_humain(self, noms: Optional[Mapping[str, str]] = None) -> str:
        return f"{nom_affiche(self.eleve_id, noms)} ne doit pas être dans le groupe {self.groupe_id}"

    def code_machine(self) -> Dict[str, Any]:
        return {"type": self.type_contrainte().value, "studentIds": [self.eleve_id], "groupId": self.groupe_id}
