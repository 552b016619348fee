from __future__ import annotations

import logging
import random
from typing import Dict, FrozenSet, Iterable, List, Mapping, Optional, Sequence, Set

from ..contraintes.base import Contrainte
from ..contraintes.binaires import DoiventEtreEloignes, DoiventEtreEnsemble
from ..contraintes.siege import SiegeImpose
from ..contraintes.types import TypeContrainte
from ..contraintes.validateur import ResultatValidation, Validateur
from ..modele.eleve import Eleve
from ..modele.pupitre import Pupitre
from ..score import Evaluateur
from .base import NatureErreur, ResultatPlacement, Solveur

logger = logging.getLogger(__name__)

# borne de sécurité contre l'explosion combinatoire (appels récursifs par résolution)
ITERATIONS_MAX: int = 50_000

# un pupitre a au plus 4 voisins sur la grille : au-delà de 3 partenaires
# « côte à côte », le groupe ne peut pas être assis
DEGRE_ENSEMBLE_MAX: int = 3

TOUS_LES_TYPES: FrozenSet[TypeContrainte] = frozenset(TypeContrainte)
# jeu de règles minimal, sans « côte à côte » ni groupes de pupitres
TYPES_ESSENTIELS: FrozenSet[TypeContrainte] = frozenset({
    TypeContrainte.SIEGE_IMPOSE,
    TypeContrainte.ELOIGNES,
    TypeContrainte.DISTANCE,
})

_DIAGNOSTIQUEES = (DoiventEtreEloignes, DoiventEtreEnsemble)

MESSAGE_RECHERCHE_EPUISEE: str = (
    "Aucun plan respectant toutes les contraintes n'a été trouvé dans la limite de recherche. "
    "Des contraintes « côte à côte » ou « séparés » peuvent entrer en conflit avec la disposition "
    "des pupitres : essayez d'alléger les contraintes ou de réorganiser la salle, puis relancez."
)


class SolveurRetourArriere(Solveur):
    """Retour arrière (backtracking) borné, avec ordre des pupitres aléatoire ou heuristique.

    Déroulement
    -----------
    1. Vérifications préalables (capacité, sièges imposés en double, groupes
       « côte à côte » trop grands, types non pris en charge, références).
    2. Placement direct des sièges imposés ; leurs pupitres et les pupitres
       verrouillés vides sortent de la réserve.
    3. Recherche en profondeur sur les élèves restants, dans l'ordre reçu :
       élagage par les tiroirs, candidats mélangés (ou triés par score,
       égalités départagées au hasard), validation complète avant de descendre.
    4. Validation finale de l'affectation trouvée.

    Le tirage aléatoire rend deux résolutions successives différentes ; passer
    `graine` (ou `rng`) fixe l'ordre pour les tests.
    """

    def __init__(
            self,
            *,
            graine: Optional[int] = None,
            rng: Optional[random.Random] = None,
            evaluateur: Optional[Evaluateur] = None,
            types_pris_en_charge: Optional[Iterable[TypeContrainte]] = None,
            iterations_max: int = ITERATIONS_MAX,
    ) -> None:
        self.graine: Optional[int] = graine
        self.rng: Optional[random.Random] = rng
        self.evaluateur: Optional[Evaluateur] = evaluateur
        self.types_pris_en_charge: FrozenSet[TypeContrainte] = (
            TOUS_LES_TYPES if types_pris_en_charge is None else frozenset(types_pris_en_charge)
        )
        self.iterations_max: int = iterations_max

    # ------------------------------------------------------------------ API Solveur

    def resoudre(
            self,
            pupitres: Sequence[Pupitre],
            eleves: Sequence[Eleve],
            contraintes: Sequence[Contrainte],
    ) -> ResultatPlacement:
        rng: random.Random = self.rng if self.rng is not None else random.Random(self.graine)
        pupitres = list(pupitres)
        eleves = list(eleves)
        contraintes = list(contraintes)

        logger.info(
            "placement: %d élèves, %d pupitres, %d contraintes",
            len(eleves), len(pupitres), len(contraintes),
        )

        # rien à placer : vrai par vacuité
        if not eleves:
            return ResultatPlacement(True, {})

        erreur: Optional[ResultatPlacement] = self._verifications_prealables(pupitres, eleves, contraintes)
        if erreur is not None:
            logger.info("placement refusé (%s): %s", erreur.nature.value, erreur.message_erreur)
            return erreur

        # ----- placement direct des sièges imposés
        affectation: Dict[str, str] = {}
        exclus: Set[str] = set()
        places: Set[str] = set()
        for c in contraintes:
            if isinstance(c, SiegeImpose):
                exclus.add(c.pupitre_id)
                if c.eleve_id is not None:
                    affectation[c.pupitre_id] = c.eleve_id
                    places.add(c.eleve_id)

        reserve: List[Pupitre] = [p for p in pupitres if p.id not in exclus]
        restants: List[Eleve] = [e for e in eleves if e.identifiant() not in places]

        # ----- recherche
        validateur = Validateur(pupitres, contraintes)
        iterations: int = 0
        borne_atteinte: bool = False

        def ordonner(eleve: Eleve, libres: List[Pupitre]) -> List[Pupitre]:
            candidats: List[Pupitre] = list(libres)
            rng.shuffle(candidats)
            if self.evaluateur is not None:
                scores: Dict[str, int] = {
                    p.id: self.evaluateur.score(eleve.identifiant(), p.id, eleves, pupitres, affectation)
                    for p in candidats
                }
                # tri stable : le mélange ci-dessus départage les égalités
                candidats.sort(key=lambda p: scores[p.id], reverse=True)
            return candidats

        def retour_arriere(i: int) -> bool:
            nonlocal iterations, borne_atteinte
            iterations += 1
            if iterations > self.iterations_max:
                borne_atteinte = True
                return False
            if i == len(restants):
                return True

            eleve: Eleve = restants[i]
            libres: List[Pupitre] = [p for p in reserve if p.id not in affectation]
            if len(libres) < len(restants) - i:
                return False

            for pupitre in ordonner(eleve, libres):
                affectation[pupitre.id] = eleve.identifiant()
                if validateur.est_valide(affectation) and retour_arriere(i + 1):
                    return True
                del affectation[pupitre.id]
                if borne_atteinte:
                    break
            return False

        succes: bool = retour_arriere(0)

        if not succes:
            logger.info(
                "placement: échec après %d itérations (borne atteinte: %s)", iterations, borne_atteinte
            )
            return ResultatPlacement.echec(
                NatureErreur.RECHERCHE_EPUISEE,
                MESSAGE_RECHERCHE_EPUISEE,
                contraintes_conflictuelles=self._diagnostic(contraintes, restants, eleves),
                iterations=iterations,
                verifications=validateur.verifications,
                borne_atteinte=borne_atteinte,
            )

        bilan: ResultatValidation = validateur.valider(affectation)
        if not bilan.valide:
            logger.error("placement: la validation finale contredit la recherche: %s", bilan.violations)
            return ResultatPlacement(
                False,
                affectation,
                message_erreur="; ".join(bilan.violations),
                contraintes_conflictuelles=list(bilan.violations),
                nature=NatureErreur.INCOHERENCE_VALIDATION,
                iterations=iterations,
                verifications=validateur.verifications,
            )

        logger.info("placement: succès en %d itérations", iterations)
        return ResultatPlacement(
            True, affectation, iterations=iterations, verifications=validateur.verifications
        )

    # ------------------------------------------------------------------ vérifications

    def _verifications_prealables(
            self,
            pupitres: Sequence[Pupitre],
            eleves: Sequence[Eleve],
            contraintes: Sequence[Contrainte],
    ) -> Optional[ResultatPlacement]:
        sieges: List[SiegeImpose] = [c for c in contraintes if isinstance(c, SiegeImpose)]

        nb_verrouilles: int = sum(1 for c in sieges if c.est_verrouille_vide())
        disponibles: int = len(pupitres) - nb_verrouilles
        if len(eleves) > disponibles:
            return ResultatPlacement.echec(
                NatureErreur.CAPACITE,
                f"Trop d'élèves ({len(eleves)}) pour les pupitres disponibles ({disponibles}). "
                f"{nb_verrouilles} pupitre(s) verrouillé(s) vide(s). Ajoutez des pupitres, "
                f"retirez des élèves ou déverrouillez des pupitres.",
            )

        pupitres_vus: Set[str] = set()
        eleves_vus: Set[str] = set()
        for c in sieges:
            if c.pupitre_id in pupitres_vus:
                return ResultatPlacement.echec(
                    NatureErreur.SIEGE_IMPOSE_DOUBLE,
                    f"Plusieurs sièges imposés visent le même pupitre ({c.pupitre_id}).",
                )
            pupitres_vus.add(c.pupitre_id)
            if c.eleve_id is not None:
                if c.eleve_id in eleves_vus:
                    return ResultatPlacement.echec(
                        NatureErreur.SIEGE_IMPOSE_DOUBLE,
                        f"L'élève {c.eleve_id} a plusieurs sièges imposés.",
                    )
                eleves_vus.add(c.eleve_id)

        non_pris: List[str] = sorted({
            c.type_contrainte().value for c in contraintes
            if c.type_contrainte() not in self.types_pris_en_charge
        })
        if non_pris:
            return ResultatPlacement.echec(
                NatureErreur.TYPE_NON_PRIS_EN_CHARGE,
                f"Types de contraintes non pris en charge par ce solveur : {', '.join(non_pris)}.",
            )

        if TypeContrainte.ENSEMBLE in self.types_pris_en_charge:
            liens: Dict[str, Set[str]] = {}
            for c in contraintes:
                if isinstance(c, DoiventEtreEnsemble):
                    liens.setdefault(c.a, set()).add(c.b)
                    liens.setdefault(c.b, set()).add(c.a)
            for eleve_id, partenaires in liens.items():
                if len(partenaires) > DEGRE_ENSEMBLE_MAX:
                    return ResultatPlacement.echec(
                        NatureErreur.GROUPE_TROP_GRAND,
                        f"L'élève {eleve_id} doit être côte à côte avec {len(partenaires)} élèves. "
                        f"Un élève ne peut être gardé près que de {DEGRE_ENSEMBLE_MAX} autres au plus "
                        f"pour former un îlot de pupitres valide.",
                    )

        ids_pupitres: Set[str] = {p.id for p in pupitres}
        ids_eleves: Set[str] = {e.identifiant() for e in eleves}
        for c in sieges:
            if c.pupitre_id not in ids_pupitres:
                return ResultatPlacement.echec(
                    NatureErreur.REFERENCE_INCONNUE,
                    f"Siège imposé sur un pupitre inconnu ({c.pupitre_id}).",
                )
            if c.eleve_id is not None and c.eleve_id not in ids_eleves:
                return ResultatPlacement.echec(
                    NatureErreur.REFERENCE_INCONNUE,
                    f"Siège imposé pour un élève absent de la liste ({c.eleve_id}).",
                )
        return None

    @staticmethod
    def _diagnostic(
            contraintes: Sequence[Contrainte],
            restants: Sequence[Eleve],
            eleves: Sequence[Eleve],
    ) -> List[str]:
        """Règles de paire dont les deux élèves faisaient partie de la recherche."""
        ids_restants: Set[str] = {e.identifiant() for e in restants}
        noms: Mapping[str, str] = {e.identifiant(): e.affichage_nom() for e in eleves}
        return [
            c.texte_humain(noms)
            for c in contraintes
            if isinstance(c, _DIAGNOSTIQUEES) and c.a in ids_restants and c.b in ids_restants
        ]


def resoudre(
        pupitres: Sequence[Pupitre],
        eleves: Sequence[Eleve],
        contraintes: Sequence[Contrainte],
        *,
        graine: Optional[int] = None,
        rng: Optional[random.Random] = None,
        evaluateur: Optional[Evaluateur] = None,
        types_pris_en_charge: Optional[Iterable[TypeContrainte]] = None,
        iterations_max: int = ITERATIONS_MAX,
) -> ResultatPlacement:
    """Raccourci : construit un `SolveurRetourArriere` et résout."""
    solveur = SolveurRetourArriere(
        graine=graine,
        rng=rng,
        evaluateur=evaluateur,
        types_pris_en_charge=types_pris_en_charge,
        iterations_max=iterations_max,
    )
    return solveur.resoudre(pupitres, eleves, contraintes)
