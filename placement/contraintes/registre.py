from __future__ import annotations

from typing import Any, Callable, Collection, Dict, List, Mapping, Optional

from .base import Contrainte
from .types import TypeContrainte

FabriqueContrainte = Callable[[Mapping[str, Any], "ContexteFabrique"], Contrainte]


class ContexteFabrique:
    """Contexte nécessaire pour reconstruire une contrainte à partir d'un dict.

    Attributs
    ---------
    eleves_connus : Optional[Collection[str]]
        Identifiants d'élèves acceptés ; `None` désactive la vérification.
    pupitres_connus : Optional[Collection[str]]
        Identifiants de pupitres acceptés ; `None` désactive la vérification.
    """

    def __init__(
            self,
            eleves_connus: Optional[Collection[str]] = None,
            pupitres_connus: Optional[Collection[str]] = None,
    ) -> None:
        self.eleves_connus: Optional[frozenset[str]] = (
            None if eleves_connus is None else frozenset(str(e) for e in eleves_connus)
        )
        self.pupitres_connus: Optional[frozenset[str]] = (
            None if pupitres_connus is None else frozenset(str(p) for p in pupitres_connus)
        )

    def eleve(self, eleve_id: Any) -> str:
        """Normalise un identifiant d'élève ; lève `KeyError` s'il est inconnu."""
        sid: str = str(eleve_id)
        if self.eleves_connus is not None and sid not in self.eleves_connus:
            raise KeyError(f"Élève inconnu: {sid!r}")
        return sid

    def pupitre(self, pupitre_id: Any) -> str:
        """Normalise un identifiant de pupitre ; lève `KeyError` s'il est inconnu."""
        pid: str = str(pupitre_id)
        if self.pupitres_connus is not None and pid not in self.pupitres_connus:
            raise KeyError(f"Pupitre inconnu: {pid!r}")
        return pid


_REGISTRE: Dict[TypeContrainte, FabriqueContrainte] = {}


def enregistrer(type_c: TypeContrainte):
    """Décorateur enregistrant une fabrique pour un `TypeContrainte`."""

    def deco(fabrique: FabriqueContrainte) -> FabriqueContrainte:
        _REGISTRE[type_c] = fabrique
        return fabrique

    return deco


def fabrique_de(type_c: TypeContrainte) -> Optional[FabriqueContrainte]:
    """Retourne la fabrique enregistrée pour `type_c`, ou `None` si absente."""
    return _REGISTRE.get(type_c)


def types_enregistres() -> List[TypeContrainte]:
    """Types pour lesquels une fabrique est disponible."""
    return list(_REGISTRE)


def contrainte_depuis_code(code: Mapping[str, Any], contexte: ContexteFabrique) -> Contrainte:
    """Reconstitue une contrainte à partir d'un dictionnaire « code_machine ».

    Lève `ValueError` si le type est inconnu, `KeyError` si aucune fabrique
    n'est enregistrée pour ce type.
    """
    type_valeur: str = str(code.get("type", ""))
    try:
        type_c: TypeContrainte = TypeContrainte(type_valeur)
    except ValueError as exc:
        raise ValueError(f"Type de contrainte inconnu: {type_valeur!r}") from exc

    fab: Optional[FabriqueContrainte] = _REGISTRE.get(type_c)
    if fab is None:
        raise KeyError(f"Aucune fabrique enregistrée pour le type {type_c}")
    return fab(code, contexte)
