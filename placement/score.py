"""
Heuristique de compatibilité pédagogique.

Un pupitre candidat reçoit la somme des compatibilités entre l'élève à placer
et chacun des élèves déjà assis sur un pupitre adjacent. Les paires de
niveaux hétérogènes sont favorisées :

    écart de niveau 1 ou 3 : 100
    écart de niveau 2      : 75
    même niveau            : 50
    autre                  : 25 (n'arrive pas avec quatre niveaux)

Le score ne sert qu'à ordonner les candidats : il n'écarte jamais un pupitre.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Dict, Mapping, Optional, Sequence

from .modele.eleve import Eleve, NIVEAU_PAR_DEFAUT, NiveauScolaire
from .modele.geometrie import sont_adjacents
from .modele.pupitre import Pupitre

_VALEUR_PAR_ECART: Dict[int, int] = {
    0: 50,
    1: 100,
    2: 75,
    3: 100,
}
_VALEUR_AUTRE: int = 25


def compatibilite(niveau_a: NiveauScolaire, niveau_b: NiveauScolaire) -> int:
    """Compatibilité d'une paire d'élèves selon l'écart de leurs niveaux."""
    return _VALEUR_PAR_ECART.get(abs(int(niveau_a) - int(niveau_b)), _VALEUR_AUTRE)


class Evaluateur(ABC):
    """Interface des heuristiques d'ordonnancement des pupitres candidats."""

    @abstractmethod
    def score(
            self,
            eleve_id: str,
            pupitre_id: str,
            eleves: Sequence[Eleve],
            pupitres: Sequence[Pupitre],
            affectation: Mapping[str, str],
    ) -> int:
        """Score (>= 0) du placement de `eleve_id` sur `pupitre_id` ; plus haut = mieux."""
        raise NotImplementedError


class EvaluateurNiveaux(Evaluateur):
    """Favorise les voisins de niveaux scolaires différents."""

    def score(
            self,
            eleve_id: str,
            pupitre_id: str,
            eleves: Sequence[Eleve],
            pupitres: Sequence[Pupitre],
            affectation: Mapping[str, str],
    ) -> int:
        niveaux: Dict[str, NiveauScolaire] = {e.identifiant(): e.niveau_effectif() for e in eleves}
        candidat: Optional[Pupitre] = next((p for p in pupitres if p.id == pupitre_id), None)
        if candidat is None:
            return 0

        niveau: NiveauScolaire = niveaux.get(eleve_id, NIVEAU_PAR_DEFAUT)
        total: int = 0
        for voisin in pupitres:
            if voisin.id == pupitre_id:
                continue
            occupant: Optional[str] = affectation.get(voisin.id)
            if occupant is None or not sont_adjacents(candidat, voisin):
                continue
            total += compatibilite(niveau, niveaux.get(occupant, NIVEAU_PAR_DEFAUT))
        return total
