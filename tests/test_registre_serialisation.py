from __future__ import annotations

import json

import pytest

from placement.contraintes import enregistrement  # noqa: F401
from placement.contraintes.binaires import DistanceMinimale, DoiventEtreEloignes, DoiventEtreEnsemble
from placement.contraintes.groupes import DoitEtreDansGroupe, NeDoitPasEtreDansGroupe
from placement.contraintes.registre import ContexteFabrique, contrainte_depuis_code, types_enregistres
from placement.contraintes.siege import SiegeImpose
from placement.contraintes.types import TypeContrainte

CTX = ContexteFabrique(eleves_connus=["a", "b"], pupitres_connus=["p1", "p2"])


def test_tous_les_types_ont_une_fabrique():
    assert set(types_enregistres()) == set(TypeContrainte)


def test_aller_retour_json():
    contraintes = [
        SiegeImpose("p1", "a"),
        SiegeImpose("p2"),
        DoiventEtreEloignes("a", "b"),
        DoiventEtreEnsemble("a", "b"),
        DistanceMinimale("a", "b", 4),
        DoitEtreDansGroupe("a", "g1"),
        NeDoitPasEtreDansGroupe("b", "g2"),
    ]
    codes = json.loads(json.dumps([c.code_machine() for c in contraintes]))
    reconstruites = [contrainte_depuis_code(code, CTX) for code in codes]
    for c1, c2 in zip(contraintes, reconstruites):
        assert type(c1) is type(c2)
        assert c1.code_machine() == c2.code_machine()


def test_type_inconnu():
    with pytest.raises(ValueError):
        contrainte_depuis_code({"type": "same_table", "studentIds": ["a", "b"]}, CTX)


def test_references_inconnues():
    with pytest.raises(KeyError):
        contrainte_depuis_code({"type": "keep_apart", "studentIds": ["a", "zz"]}, CTX)
    with pytest.raises(KeyError):
        contrainte_depuis_code({"type": "hard_seat", "deskId": "p9", "studentIds": ["a"]}, CTX)


@pytest.mark.parametrize("code", [
    {"type": "keep_apart", "studentIds": ["a"]},
    {"type": "keep_apart", "studentIds": ["a", "a"]},
    {"type": "distance", "studentIds": ["a", "b"]},
    {"type": "distance", "studentIds": ["a", "b"], "minDistance": 0},
    {"type": "hard_seat", "studentIds": ["a"]},
    {"type": "must_be_in_group", "studentIds": ["a"]},
])
def test_codes_mal_formes(code):
    with pytest.raises(ValueError):
        contrainte_depuis_code(code, CTX)


def test_contexte_sans_verification():
    c = contrainte_depuis_code({"type": "keep_together", "studentIds": [1, 2]}, ContexteFabrique())
    assert c.implique() == ["1", "2"]
