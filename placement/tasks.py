from __future__ import annotations

import logging
from typing import Any, Dict, List, Mapping, Tuple

from celery import shared_task
from django.conf import settings

from .contraintes.base import Contrainte
from .contraintes.types import TypeContrainte
from .fabrique_ui import (
    OptionsPlacement,
    contraintes_depuis_payload,
    eleves_depuis_payload,
    options_depuis_payload,
    pupitres_depuis_payload,
)
from .modele.eleve import Eleve
from .modele.pupitre import Pupitre
from .score import EvaluateurNiveaux
from .solveurs.base import ResultatPlacement
from .solveurs.retour_arriere import ITERATIONS_MAX, TOUS_LES_TYPES, SolveurRetourArriere

logger = logging.getLogger(__name__)


# --------------------------------------------------------------------------- helpers de conversion

def lire_payload(
        payload: Mapping[str, Any],
) -> Tuple[List[Pupitre], List[Eleve], List[Contrainte], OptionsPlacement]:
    """
    Traduit le payload UI en pupitres, élèves, contraintes et options.
    Lève `ValueError`/`KeyError` si le payload est mal formé.
    """
    if not isinstance(payload, Mapping):
        raise ValueError("objet JSON attendu")
    pupitres = pupitres_depuis_payload(payload.get("desks") or [])
    eleves = eleves_depuis_payload(payload.get("students") or [])
    contraintes = contraintes_depuis_payload(
        payload.get("constraints") or [],
        pupitres=pupitres,
        eleves=eleves,
    )
    options = options_depuis_payload(payload.get("options"))
    return pupitres, eleves, contraintes, options


def construire_solveur(options: OptionsPlacement) -> SolveurRetourArriere:
    """Instancie le solveur à partir des options normalisées."""
    types = TOUS_LES_TYPES if options.ensemble else TOUS_LES_TYPES - {TypeContrainte.ENSEMBLE}
    iterations_max: int = options.iterations_max or int(
        getattr(settings, "PLACEMENT_ITERATIONS_MAX", ITERATIONS_MAX)
    )
    return SolveurRetourArriere(
        graine=options.graine,
        evaluateur=EvaluateurNiveaux() if options.niveaux else None,
        types_pris_en_charge=types,
        iterations_max=iterations_max,
    )


def placer(payload: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Résolution synchrone d'un payload :
      - traduit le payload UI en pupitres/élèves/contraintes,
      - configure le solveur selon les options,
      - renvoie un dict JSON (statut + résultat au format de l'interface).
    """
    try:
        pupitres, eleves, contraintes, options = lire_payload(payload)
    except (KeyError, ValueError) as exc:
        logger.warning("payload de placement invalide: %s", exc)
        return {"status": "FAILURE", "error": f"Requête invalide : {exc}"}

    res: ResultatPlacement = construire_solveur(options).resoudre(pupitres, eleves, contraintes)

    out: Dict[str, Any] = {"status": "SUCCESS" if res.succes else "FAILURE"}
    out.update(res.en_dict())
    if not res.succes:
        out["error"] = res.message_erreur
    out["iterations"] = res.iterations
    out["seed"] = options.graine
    return out


# --------------------------------------------------------------------------- tâche principale

@shared_task(bind=True)
def t_placer_eleves(self, payload: Dict[str, Any]) -> Dict[str, Any]:
    """Tâche asynchrone de placement ; voir `placer`."""
    logger.info("tâche de placement %s démarrée", getattr(self.request, "id", None))
    return placer(payload)
