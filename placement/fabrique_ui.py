# placement/fabrique_ui.py
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional, Sequence, Set

from .contraintes import enregistrement  # noqa: F401  (enregistre les fabriques)
from .contraintes.base import Contrainte
from .contraintes.registre import ContexteFabrique, contrainte_depuis_code
from .contraintes.siege import SiegeImpose
from .modele.eleve import Eleve, NiveauScolaire
from .modele.pupitre import FormePupitre, Pupitre


@dataclass(frozen=True)
class OptionsPlacement:
    """Options de résolution reçues de l'interface, normalisées."""

    graine: Optional[int] = None
    niveaux: bool = False
    ensemble: bool = True
    iterations_max: Optional[int] = None


# --- helpers ---------------------------------------------------------------

def _booleen(valeur: Any, defaut: bool) -> bool:
    if valeur is None:
        return defaut
    if isinstance(valeur, str):
        return valeur.strip().lower() in {"1", "true", "yes", "on"}
    return bool(valeur)


# --- public ----------------------------------------------------------------

def pupitres_depuis_payload(desks: Sequence[Mapping[str, Any]]) -> List[Pupitre]:
    """
    Convertit la liste `desks` de l'interface en pupitres.

    Champs : id, number, x, y, type ("rectangular" | "round"), groupId,
    lockedEmpty, assignedStudent (id ou objet {"id": ...}).
    """
    out: List[Pupitre] = []
    vus: Set[str] = set()
    for i, d in enumerate(desks or []):
        if not isinstance(d, Mapping):
            raise ValueError(f"pupitre n°{i + 1}: objet attendu")
        if d.get("id") in (None, ""):
            raise ValueError(f"pupitre n°{i + 1}: 'id' manquant")
        pid = str(d["id"])
        if pid in vus:
            raise ValueError(f"identifiant de pupitre en double: {pid!r}")
        vus.add(pid)

        try:
            x = float(d["x"])
            y = float(d["y"])
        except (KeyError, TypeError, ValueError) as exc:
            raise ValueError(f"pupitre {pid!r}: coordonnées x/y invalides") from exc
        # NaN / Infinity passent float() mais pas la grille
        if not (math.isfinite(x) and math.isfinite(y)):
            raise ValueError(f"pupitre {pid!r}: coordonnées x/y invalides")

        try:
            forme = FormePupitre(str(d.get("type") or FormePupitre.RECTANGULAIRE.value))
        except ValueError as exc:
            raise ValueError(f"pupitre {pid!r}: forme inconnue {d.get('type')!r}") from exc

        occupant = d.get("assignedStudent")
        if isinstance(occupant, Mapping):
            occupant = occupant.get("id")

        out.append(Pupitre(
            id=pid,
            numero=int(d.get("number") or i + 1),
            x=x,
            y=y,
            forme=forme,
            eleve_assigne=None if occupant in (None, "") else str(occupant),
            groupe=None if d.get("groupId") in (None, "") else str(d["groupId"]),
            verrouille_vide=_booleen(d.get("lockedEmpty"), False),
        ))
    return out


def eleves_depuis_payload(students: Sequence[Mapping[str, Any]]) -> List[Eleve]:
    """Convertit la liste `students` (id, name, level) en élèves, dans l'ordre reçu."""
    out: List[Eleve] = []
    vus: Set[str] = set()
    for i, s in enumerate(students or []):
        if not isinstance(s, Mapping):
            raise ValueError(f"élève n°{i + 1}: objet attendu")
        if s.get("id") in (None, ""):
            raise ValueError(f"élève n°{i + 1}: 'id' manquant")
        sid = str(s["id"])
        if sid in vus:
            raise ValueError(f"identifiant d'élève en double: {sid!r}")
        vus.add(sid)
        out.append(Eleve(
            identifiant=sid,
            nom=str(s.get("name") or ""),
            niveau=NiveauScolaire.depuis_code(s.get("level")),
        ))
    return out


def contraintes_depuis_payload(
        constraints_ui: Sequence[Mapping[str, Any]],
        *,
        pupitres: Sequence[Pupitre],
        eleves: Sequence[Eleve],
) -> List[Contrainte]:
    """
    Traduit la liste brute des contraintes UI en objets métier via le registre.
    - Ignore les marqueurs UI (type vide ou préfixé par « _ »).
    - Ajoute un siège imposé vide pour chaque pupitre marqué `lockedEmpty`
      qui n'est pas déjà visé par un siège imposé.
    """
    ctx = ContexteFabrique(
        eleves_connus=[e.identifiant() for e in eleves],
        pupitres_connus=[p.id for p in pupitres],
    )

    out: List[Contrainte] = []
    for i, c in enumerate(constraints_ui or []):
        if not isinstance(c, Mapping):
            raise ValueError(f"contrainte n°{i + 1}: objet attendu")
        typ: str = str(c.get("type", "")).strip()
        if not typ or typ.startswith("_"):
            continue
        out.append(contrainte_depuis_code(c, ctx))

    deja: Set[str] = {c.pupitre_id for c in out if isinstance(c, SiegeImpose)}
    for p in pupitres:
        if p.verrouille_vide and p.id not in deja:
            out.append(SiegeImpose(pupitre_id=p.id))
    return out


def options_depuis_payload(options: Optional[Mapping[str, Any]]) -> OptionsPlacement:
    """
    Normalise les options et pose les défauts.

    Champs reconnus (tous facultatifs) :
      - seed: int | null          graine du tirage aléatoire
      - useLevels: bool           ordonne les pupitres par compatibilité de niveaux
      - keepTogether: bool        accepte les contraintes « côte à côte »
      - maxIterations: int        borne de la recherche
    """
    if options is not None and not isinstance(options, Mapping):
        raise ValueError("options: objet attendu")
    o: Dict[str, Any] = dict(options or {})

    graine: Optional[int] = None
    if o.get("seed") is not None:
        try:
            graine = int(o["seed"])
        except (TypeError, ValueError) as exc:
            raise ValueError(f"option 'seed' invalide: {o['seed']!r}") from exc

    iterations_max: Optional[int] = None
    if o.get("maxIterations") is not None:
        try:
            iterations_max = int(o["maxIterations"])
        except (TypeError, ValueError) as exc:
            raise ValueError(f"option 'maxIterations' invalide: {o['maxIterations']!r}") from exc
        if iterations_max < 1:
            raise ValueError("option 'maxIterations' doit être >= 1")

    return OptionsPlacement(
        graine=graine,
        niveaux=_booleen(o.get("useLevels"), False),
        ensemble=_booleen(o.get("keepTogether"), True),
        iterations_max=iterations_max,
    )
