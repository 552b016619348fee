from __future__ import annotations

from typing import Any, Dict, Mapping, Optional, Sequence

from .base import Contrainte, VueAffectation, nom_affiche
from .types import TypeContrainte


class SiegeImpose(Contrainte):
    """Impose l'occupant d'un pupitre, ou le garde vide si `eleve_id` vaut `None`.

    - Avec élève : l'élève doit se trouver exactement sur ce pupitre ; un élève
      absent de l'affectation est une violation au même titre qu'un élève mal
      placé.
    - Sans élève (« verrouillé vide ») : le pupitre ne doit pas apparaître
      dans l'affectation.
    """

    def __init__(self, pupitre_id: str, eleve_id: Optional[str] = None) -> None:
        self.pupitre_id: str = str(pupitre_id)
        self.eleve_id: Optional[str] = None if eleve_id is None else str(eleve_id)

    def est_verrouille_vide(self) -> bool:
        return self.eleve_id is None

    def type_contrainte(self) -> TypeContrainte:
        return TypeContrainte.SIEGE_IMPOSE

    def implique(self) -> Sequence[str]:
        return [] if self.eleve_id is None else [self.eleve_id]

    def est_satisfaite(self, vue: VueAffectation) -> bool:
        if self.eleve_id is None:
            return not vue.est_occupe(self.pupitre_id)
        return vue.pupitre_id_de(self.eleve_id) == self.pupitre_id

    def message_violation(self) -> str:
        if self.eleve_id is None:
            return f"Pupitre verrouillé vide occupé : le pupitre {self.pupitre_id} doit rester libre"
        return f"Siège imposé non respecté : {self.eleve_id} doit être au pupitre {self.pupitre_id}"

    def texte_humain(self, noms: Optional[Mapping[str, str]] = None) -> str:
        if self.eleve_id is None:
            return f"Le pupitre {self.pupitre_id} doit rester vide"
        return f"{nom_affiche(self.eleve_id, noms)} doit être au pupitre {self.pupitre_id}"

    def code_machine(self) -> Dict[str, Any]:
        return {
            "type": self.type_contrainte().value,
            "deskId": self.pupitre_id,
            "studentIds": self.implique(),
        }
