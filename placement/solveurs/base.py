from __future__ import annotations

from abc import ABC, abstractmethod
from enum import Enum
from typing import Any, Dict, List, Optional, Sequence

from ..contraintes.base import Contrainte
from ..modele.eleve import Eleve
from ..modele.pupitre import Pupitre


class NatureErreur(str, Enum):
    """Catégories d'échec d'une résolution."""

    # trop d'élèves pour les pupitres non verrouillés
    CAPACITE = "capacity"
    # conflits de configuration, détectés avant toute recherche
    SIEGE_IMPOSE_DOUBLE = "duplicate_hard_seat"
    GROUPE_TROP_GRAND = "oversized_together_group"
    TYPE_NON_PRIS_EN_CHARGE = "unsupported_constraint"
    REFERENCE_INCONNUE = "unknown_reference"
    # borne d'itérations atteinte ou branches épuisées
    RECHERCHE_EPUISEE = "search_exhausted"
    # la validation finale contredit la recherche : invariant interne rompu
    INCOHERENCE_VALIDATION = "post_validation_mismatch"

    def est_configuration(self) -> bool:
        return self in _NATURES_CONFIGURATION


_NATURES_CONFIGURATION = frozenset({
    NatureErreur.SIEGE_IMPOSE_DOUBLE,
    NatureErreur.GROUPE_TROP_GRAND,
    NatureErreur.TYPE_NON_PRIS_EN_CHARGE,
    NatureErreur.REFERENCE_INCONNUE,
})


class ResultatPlacement:
    """Résultat d'une tentative de placement.

    Attributs
    ---------
    succes : bool
        `True` si toutes les contraintes sont respectées.
    affectation : Dict[str, str]
        {identifiant de pupitre -> identifiant d'élève} ; vide en cas d'échec
        (sauf incohérence de validation, où l'affectation fautive est rendue).
    message_erreur : Optional[str]
        Message lisible en cas d'échec.
    contraintes_conflictuelles : Optional[List[str]]
        Règles probablement en cause, pour les échecs liés aux contraintes.
    nature : Optional[NatureErreur]
        Catégorie de l'échec.
    iterations : int
        Nombre d'appels récursifs de la recherche.
    verifications : int
        Nombre d'évaluations de contraintes effectuées.
    borne_atteinte : bool
        `True` si la recherche s'est arrêtée sur la borne d'itérations.
    """

    def __init__(
            self,
            succes: bool,
            affectation: Optional[Dict[str, str]] = None,
            *,
            message_erreur: Optional[str] = None,
            contraintes_conflictuelles: Optional[List[str]] = None,
            nature: Optional[NatureErreur] = None,
            iterations: int = 0,
            verifications: int = 0,
            borne_atteinte: bool = False,
    ) -> None:
        self.succes: bool = succes
        self.affectation: Dict[str, str] = dict(affectation or {})
        self.message_erreur: Optional[str] = message_erreur
        self.contraintes_conflictuelles: Optional[List[str]] = contraintes_conflictuelles
        self.nature: Optional[NatureErreur] = nature
        self.iterations: int = iterations
        self.verifications: int = verifications
        self.borne_atteinte: bool = borne_atteinte

    @classmethod
    def echec(cls, nature: NatureErreur, message: str, **kwargs: Any) -> "ResultatPlacement":
        return cls(False, {}, message_erreur=message, nature=nature, **kwargs)

    def en_dict(self) -> Dict[str, Any]:
        """Forme JSON attendue par l'interface (clés camelCase)."""
        out: Dict[str, Any] = {"success": self.succes, "assignment": dict(self.affectation)}
        if self.message_erreur is not None:
            out["errorMessage"] = self.message_erreur
        if self.contraintes_conflictuelles is not None:
            out["conflictingConstraints"] = list(self.contraintes_conflictuelles)
        if self.nature is not None:
            out["errorKind"] = self.nature.value
        return out

    def __repr__(self) -> str:  # pragma: no cover - représentation
        return (
            f"ResultatPlacement(succes={self.succes}, nature={self.nature}, "
            f"places={len(self.affectation)}, iterations={self.iterations})"
        )


class Solveur(ABC):
    """Interface abstraite des solveurs de placement."""

    @abstractmethod
    def resoudre(
            self,
            pupitres: Sequence[Pupitre],
            eleves: Sequence[Eleve],
            contraintes: Sequence[Contrainte],
    ) -> ResultatPlacement:
        """Construit une affectation satisfaisant toutes les contraintes, si possible.

        Ne lève pas d'exception pour un problème récupérable côté appelant :
        l'échec est décrit dans le `ResultatPlacement` renvoyé.
        """
        raise NotImplementedError
