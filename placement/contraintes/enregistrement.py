from __future__ import annotations

from typing import Any, List, Mapping

from .binaires import DistanceMinimale, DoiventEtreEloignes, DoiventEtreEnsemble
from .groupes import DoitEtreDansGroupe, NeDoitPasEtreDansGroupe
from .registre import ContexteFabrique, enregistrer
from .siege import SiegeImpose
from .types import TypeContrainte


def _ids_eleves(code: Mapping[str, Any], attendus: int, ctx: ContexteFabrique) -> List[str]:
    """Lit `studentIds` et vérifie le nombre d'élèves attendu."""
    bruts = code.get("studentIds") or []
    if not isinstance(bruts, (list, tuple)):
        raise ValueError(f"contrainte {code.get('type')!r}: 'studentIds' doit être une liste")
    if len(bruts) != attendus:
        raise ValueError(
            f"contrainte {code.get('type')!r}: {attendus} élève(s) attendu(s), {len(bruts)} reçu(s)"
        )
    ids: List[str] = [ctx.eleve(b) for b in bruts]
    if attendus == 2 and ids[0] == ids[1]:
        raise ValueError(f"contrainte {code.get('type')!r}: les deux élèves doivent être distincts")
    return ids


@enregistrer(TypeContrainte.SIEGE_IMPOSE)
def _fab_siege_impose(code: Mapping[str, Any], ctx: ContexteFabrique):
    """
    Construit un siège imposé.

    Champs :
      - deskId : str (obligatoire)
      - studentIds : [] (pupitre verrouillé vide) ou [élève]
    """
    if code.get("deskId") in (None, ""):
        raise ValueError("contrainte 'hard_seat': 'deskId' manquant")
    pupitre_id: str = ctx.pupitre(code["deskId"])
    bruts = code.get("studentIds") or []
    if len(bruts) == 0:
        return SiegeImpose(pupitre_id=pupitre_id)
    (eleve_id,) = _ids_eleves(code, 1, ctx)
    return SiegeImpose(pupitre_id=pupitre_id, eleve_id=eleve_id)


@enregistrer(TypeContrainte.ELOIGNES)
def _fab_eloignes(code: Mapping[str, Any], ctx: ContexteFabrique):
    a, b = _ids_eleves(code, 2, ctx)
    return DoiventEtreEloignes(a=a, b=b)


@enregistrer(TypeContrainte.ENSEMBLE)
def _fab_ensemble(code: Mapping[str, Any], ctx: ContexteFabrique):
    a, b = _ids_eleves(code, 2, ctx)
    return DoiventEtreEnsemble(a=a, b=b)


@enregistrer(TypeContrainte.DISTANCE)
def _fab_distance(code: Mapping[str, Any], ctx: ContexteFabrique):
    """
    Construit une contrainte de distance minimale (Manhattan, en cases).

    Champs :
      - studentIds : [a, b]
      - minDistance : int (>= 1)
    """
    a, b = _ids_eleves(code, 2, ctx)
    try:
        d: int = int(code["minDistance"])
    except (KeyError, TypeError, ValueError) as exc:
        raise ValueError("contrainte 'distance': 'minDistance' entier requis") from exc
    return DistanceMinimale(a=a, b=b, d=d)


@enregistrer(TypeContrainte.DANS_GROUPE)
def _fab_dans_groupe(code: Mapping[str, Any], ctx: ContexteFabrique):
    (eleve_id,) = _ids_eleves(code, 1, ctx)
    if code.get("groupId") in (None, ""):
        raise ValueError("contrainte 'must_be_in_group': 'groupId' manquant")
    return DoitEtreDansGroupe(eleve_id=eleve_id, groupe_id=str(code["groupId"]))


@enregistrer(TypeContrainte.HORS_GROUPE)
def _fab_hors_groupe(code: Mapping[str, Any], ctx: ContexteFabrique):
    (eleve_id,) = _ids_eleves(code, 1, ctx)
    if code.get("groupId") in (None, ""):
        raise ValueError("contrainte 'cannot_be_in_group': 'groupId' manquant")
    return NeDoitPasEtreDansGroupe(eleve_id=eleve_id, groupe_id=str(code["groupId"]))
