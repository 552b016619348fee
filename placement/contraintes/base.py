from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional, Sequence

from ..modele.pupitre import Pupitre
from .types import TypeContrainte


@dataclass(frozen=True)
class VueAffectation:
    """Lecture d'une affectation {pupitre -> élève} pendant la validation.

    L'index inverse {élève -> pupitre} est calculé une fois par validation,
    toutes les contraintes le partagent.
    """

    affectation: Mapping[str, str]
    pupitre_par_eleve: Mapping[str, str]
    pupitres: Mapping[str, Pupitre]

    @classmethod
    def construire(cls, affectation: Mapping[str, str], pupitres: Mapping[str, Pupitre]) -> "VueAffectation":
        inverse: Dict[str, str] = {}
        for pupitre_id, eleve_id in affectation.items():
            # un élève placé deux fois : on garde la première occurrence
            inverse.setdefault(eleve_id, pupitre_id)
        return cls(affectation=affectation, pupitre_par_eleve=inverse, pupitres=pupitres)

    def est_occupe(self, pupitre_id: str) -> bool:
        return pupitre_id in self.affectation

    def pupitre_id_de(self, eleve_id: str) -> Optional[str]:
        """Identifiant du pupitre de l'élève, ou `None` s'il n'est pas placé."""
        return self.pupitre_par_eleve.get(eleve_id)

    def pupitre_de(self, eleve_id: str) -> Optional[Pupitre]:
        pupitre_id: Optional[str] = self.pupitre_par_eleve.get(eleve_id)
        if pupitre_id is None:
            return None
        return self.pupitres.get(pupitre_id)


class Contrainte(ABC):
    """Classe de base des règles de placement.

    Méthodes à implémenter
    ----------------------
    - `type_contrainte()` : retourne un membre de `TypeContrainte`.
    - `implique()` : identifiants des élèves concernés (0, 1 ou 2).
    - `est_satisfaite(vue)` : valide l'affectation partielle/complète.
    - `message_violation()` : texte ajouté au rapport quand la règle est violée.
    - `texte_humain(noms)` : texte lisible pour l'interface.
    - `code_machine()` : représentation stable et sérialisable (dict JSON).

    Règle commune : un élève concerné mais pas encore placé ne provoque
    jamais de violation (sauf pour le siège imposé, qui exige l'élève).
    """

    @abstractmethod
    def type_contrainte(self) -> TypeContrainte:
        """Retourne le type logique de la contrainte."""
        raise NotImplementedError

    @abstractmethod
    def implique(self) -> Sequence[str]:
        """Retourne les identifiants des élèves impliqués."""
        raise NotImplementedError

    @abstractmethod
    def est_satisfaite(self, vue: VueAffectation) -> bool:
        """Indique si la contrainte est satisfaite sous l'affectation courante."""
        raise NotImplementedError

    @abstractmethod
    def message_violation(self) -> str:
        raise NotImplementedError

    @abstractmethod
    def texte_humain(self, noms: Optional[Mapping[str, str]] = None) -> str:
        """Texte concis ; `noms` traduit les identifiants d'élèves en noms."""
        raise NotImplementedError

    @abstractmethod
    def code_machine(self) -> Dict[str, Any]:
        """Représentation sérialisable, au format des contraintes de l'interface."""
        raise NotImplementedError

    def __repr__(self) -> str:  # pragma: no cover - représentation
        return f"{self.__class__.__name__}({self.code_machine()!r})"


def nom_affiche(eleve_id: str, noms: Optional[Mapping[str, str]]) -> str:
    """Retourne le nom de l'élève si connu, sinon son identifiant."""
    if noms is None:
        return eleve_id
    return noms.get(eleve_id) or eleve_id
