from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Mapping, Sequence

from ..modele.pupitre import Pupitre
from .base import Contrainte, VueAffectation


@dataclass(frozen=True)
class ResultatValidation:
    """Bilan d'une validation : `valide` et la liste des violations lisibles."""

    valide: bool
    violations: List[str] = field(default_factory=list)


class Validateur:
    """Évalue toutes les contraintes sur une affectation {pupitre -> élève}.

    L'index des pupitres est préparé à la construction, pour que le solveur
    puisse valider à chaque pas sans le reconstruire. Le résultat ne dépend
    que de l'affectation reçue ; `verifications` n'est qu'un compteur.
    """

    def __init__(self, pupitres: Sequence[Pupitre], contraintes: Sequence[Contrainte]) -> None:
        self._pupitres: Dict[str, Pupitre] = {p.id: p for p in pupitres}
        self._contraintes: List[Contrainte] = list(contraintes)
        self.verifications: int = 0

    def valider(self, affectation: Mapping[str, str]) -> ResultatValidation:
        vue: VueAffectation = VueAffectation.construire(affectation, self._pupitres)
        violations: List[str] = []
        for contrainte in self._contraintes:
            self.verifications += 1
            if not contrainte.est_satisfaite(vue):
                violations.append(contrainte.message_violation())
        return ResultatValidation(valide=not violations, violations=violations)

    def est_valide(self, affectation: Mapping[str, str]) -> bool:
        """Comme `valider`, mais s'arrête à la première violation."""
        vue: VueAffectation = VueAffectation.construire(affectation, self._pupitres)
        for contrainte in self._contraintes:
            self.verifications += 1
            if not contrainte.est_satisfaite(vue):
                return False
        return True


def valider(
        affectation: Mapping[str, str],
        pupitres: Sequence[Pupitre],
        contraintes: Sequence[Contrainte],
) -> ResultatValidation:
    """Évalue chaque contrainte et rapporte les violations de `affectation`."""
    return Validateur(pupitres, contraintes).valider(affectation)
