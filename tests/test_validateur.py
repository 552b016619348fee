from __future__ import annotations

from placement.contraintes.binaires import DoiventEtreEloignes, DoiventEtreEnsemble
from placement.contraintes.siege import SiegeImpose
from placement.contraintes.validateur import Validateur, valider

from conftest import pupitres_en_ligne

PUPITRES = pupitres_en_ligne(0, 20, 100)


def test_aucune_contrainte():
    assert valider({"p1": "a"}, PUPITRES, []).valide is True


def test_toutes_les_violations_sont_rapportees():
    contraintes = [
        DoiventEtreEloignes("a", "b"),
        SiegeImpose("p3", "c"),
        SiegeImpose("p2"),
    ]
    bilan = valider({"p1": "a", "p2": "b"}, PUPITRES, contraintes)
    assert bilan.valide is False
    assert len(bilan.violations) == 3
    assert any("a et b" in v for v in bilan.violations)


def test_affectation_partielle_valide():
    contraintes = [DoiventEtreEloignes("a", "b"), DoiventEtreEnsemble("a", "c")]
    assert valider({"p1": "a"}, PUPITRES, contraintes).valide is True


def test_est_valide_s_arrete_a_la_premiere_violation():
    v = Validateur(PUPITRES, [SiegeImpose("p2"), SiegeImpose("p3")])
    assert v.est_valide({"p2": "a", "p3": "b"}) is False
    assert v.verifications == 1
    v.valider({"p2": "a", "p3": "b"})
    assert v.verifications == 3
