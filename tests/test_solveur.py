from __future__ import annotations

import random

import pytest

from placement.contraintes.base import Contrainte
from placement.contraintes.binaires import DistanceMinimale, DoiventEtreEloignes, DoiventEtreEnsemble
from placement.contraintes.groupes import DoitEtreDansGroupe, NeDoitPasEtreDansGroupe
from placement.contraintes.siege import SiegeImpose
from placement.contraintes.types import TypeContrainte
from placement.contraintes.validateur import valider
from placement.dispositions import disposition_en_ilots, disposition_en_rangees
from placement.modele.eleve import Eleve, NiveauScolaire
from placement.modele.pupitre import Pupitre
from placement.score import EvaluateurNiveaux
from placement.solveurs.base import NatureErreur
from placement.solveurs.retour_arriere import TYPES_ESSENTIELS, SolveurRetourArriere, resoudre

from conftest import pupitres_en_ligne


def _eleves(n: int) -> list[Eleve]:
    return [Eleve(f"e{i}", f"Élève {i}") for i in range(1, n + 1)]


def _verifier_plan(res, pupitres, eleves, contraintes):
    """Chaque élève une seule fois, sur un pupitre connu, toutes contraintes respectées."""
    assert res.succes, res.message_erreur
    ids_pupitres = {p.id for p in pupitres}
    assert set(res.affectation) <= ids_pupitres
    assert sorted(res.affectation.values()) == sorted(e.identifiant() for e in eleves)
    assert valider(res.affectation, pupitres, contraintes).valide


def test_liste_vide_reussit():
    res = resoudre(pupitres_en_ligne(0, 100), [], [])
    assert res.succes is True
    assert res.affectation == {}
    assert resoudre([], [], []).succes is True


def test_capacite_insuffisante():
    res = resoudre(pupitres_en_ligne(0, 100), _eleves(3), [])
    assert res.succes is False
    assert res.nature is NatureErreur.CAPACITE
    assert "(3)" in res.message_erreur and "(2)" in res.message_erreur
    assert res.iterations == 0


def test_pupitres_verrouilles_reduisent_la_capacite():
    res = resoudre(pupitres_en_ligne(0, 100), _eleves(2), [SiegeImpose("p2")])
    assert res.nature is NatureErreur.CAPACITE
    assert "1 pupitre(s) verrouillé(s)" in res.message_erreur


def test_siege_impose_en_double():
    pupitres = pupitres_en_ligne(0, 100, 200)
    res = resoudre(pupitres, _eleves(2), [SiegeImpose("p1", "e1"), SiegeImpose("p1", "e2")])
    assert res.nature is NatureErreur.SIEGE_IMPOSE_DOUBLE
    assert "p1" in res.message_erreur

    res = resoudre(pupitres, _eleves(2), [SiegeImpose("p1", "e1"), SiegeImpose("p2", "e1")])
    assert res.nature is NatureErreur.SIEGE_IMPOSE_DOUBLE
    assert res.nature.est_configuration()


def test_references_inconnues():
    pupitres = pupitres_en_ligne(0, 100)
    res = resoudre(pupitres, _eleves(1), [SiegeImpose("p9", "e1")])
    assert res.nature is NatureErreur.REFERENCE_INCONNUE
    res = resoudre(pupitres, _eleves(1), [SiegeImpose("p1", "zz")])
    assert res.nature is NatureErreur.REFERENCE_INCONNUE


def test_trop_de_partenaires_cote_a_cote():
    pupitres = pupitres_en_ligne(0, 100, 200, 300, 400)
    contraintes = [DoiventEtreEnsemble("e1", f"e{i}") for i in range(2, 6)]
    res = resoudre(pupitres, _eleves(5), contraintes)
    assert res.nature is NatureErreur.GROUPE_TROP_GRAND
    assert "e1" in res.message_erreur


def test_type_non_pris_en_charge():
    pupitres = disposition_en_ilots(2, 2)
    res = resoudre(pupitres, _eleves(2), [DoitEtreDansGroupe("e1", "g1")], types_pris_en_charge=TYPES_ESSENTIELS)
    assert res.nature is NatureErreur.TYPE_NON_PRIS_EN_CHARGE
    assert "must_be_in_group" in res.message_erreur


def test_eloignes_satisfaisable(alice_bob):
    # 5 cases d'écart : jamais adjacents
    pupitres = pupitres_en_ligne(0, 100)
    contraintes = [DoiventEtreEloignes("a", "b")]
    for graine in range(5):
        res = resoudre(pupitres, alice_bob, contraintes, graine=graine)
        _verifier_plan(res, pupitres, alice_bob, contraintes)
        assert set(res.affectation) == {"p1", "p2"}


def test_eloignes_impossible_diagnostique(alice_bob):
    pupitres = pupitres_en_ligne(0, 20)
    res = resoudre(pupitres, alice_bob, [DoiventEtreEloignes("a", "b")], graine=1)
    assert res.succes is False
    assert res.nature is NatureErreur.RECHERCHE_EPUISEE
    assert res.affectation == {}
    assert res.borne_atteinte is False
    assert res.contraintes_conflictuelles == ["Alice et Bob doivent être séparés"]
    assert res.en_dict()["errorKind"] == "search_exhausted"


def test_diagnostic_ignore_les_eleves_deja_places(alice_bob):
    pupitres = pupitres_en_ligne(0, 20)
    contraintes = [SiegeImpose("p1", "a"), DoiventEtreEloignes("a", "b")]
    res = resoudre(pupitres, alice_bob, contraintes)
    assert res.nature is NatureErreur.RECHERCHE_EPUISEE
    assert res.contraintes_conflictuelles == []


def test_ensemble_choisit_la_paire_adjacente(alice_bob):
    pupitres = pupitres_en_ligne(0, 100, 200, 220)
    contraintes = [DoiventEtreEnsemble("a", "b")]
    for graine in range(5):
        res = resoudre(pupitres, alice_bob, contraintes, graine=graine)
        _verifier_plan(res, pupitres, alice_bob, contraintes)
        assert set(res.affectation) == {"p3", "p4"}


def test_siege_impose_et_pupitre_verrouille():
    pupitres = pupitres_en_ligne(0, 100, 200, 300)
    eleves = _eleves(3)
    contraintes = [SiegeImpose("p4", "e3"), SiegeImpose("p2")]
    for graine in range(5):
        res = resoudre(pupitres, eleves, contraintes, graine=graine)
        _verifier_plan(res, pupitres, eleves, contraintes)
        assert res.affectation["p4"] == "e3"
        assert "p2" not in res.affectation


def test_contraintes_melangees_sur_rangees():
    pupitres = disposition_en_rangees(3, 5)
    eleves = _eleves(12)
    contraintes = [
        SiegeImpose("p1", "e1"),
        SiegeImpose("p15"),
        DistanceMinimale("e2", "e3", d=15),
        DoiventEtreEloignes("e4", "e5"),
    ]
    for graine in range(5):
        res = resoudre(pupitres, eleves, contraintes, graine=graine)
        _verifier_plan(res, pupitres, eleves, contraintes)


def test_groupes_sur_ilots():
    pupitres = disposition_en_ilots(4, 3)
    eleves = _eleves(8)
    contraintes = [DoitEtreDansGroupe("e1", "g3"), NeDoitPasEtreDansGroupe("e2", "g1")]
    res = resoudre(pupitres, eleves, contraintes, graine=11)
    _verifier_plan(res, pupitres, eleves, contraintes)
    groupes = {p.id: p.groupe for p in pupitres}
    par_eleve = {e: p for p, e in res.affectation.items()}
    assert groupes[par_eleve["e1"]] == "g3"
    assert groupes[par_eleve["e2"]] != "g1"


def test_meme_graine_meme_plan():
    pupitres = disposition_en_rangees(4, 6)
    eleves = _eleves(20)
    r1 = resoudre(pupitres, eleves, [], graine=123)
    r2 = resoudre(pupitres, eleves, [], graine=123)
    assert r1.affectation == r2.affectation


def test_generateur_fourni_par_l_appelant():
    pupitres = disposition_en_rangees(2, 5)
    eleves = _eleves(6)
    r1 = SolveurRetourArriere(rng=random.Random(5)).resoudre(pupitres, eleves, [])
    r2 = SolveurRetourArriere(rng=random.Random(5)).resoudre(pupitres, eleves, [])
    assert r1.affectation == r2.affectation


def test_borne_d_iterations(alice_bob):
    pupitres = pupitres_en_ligne(0, 100)
    res = resoudre(pupitres, alice_bob, [], iterations_max=1)
    assert res.succes is False
    assert res.borne_atteinte is True
    assert res.nature is NatureErreur.RECHERCHE_EPUISEE


def test_evaluateur_prefere_le_voisin_complementaire():
    # p1 tenu par un élève fort ; p2 adjacent, p3 isolé
    pupitres = pupitres_en_ligne(0, 20, 400)
    eleves = [Eleve("f", "Fort", NiveauScolaire.FORT), Eleve("x", "Faible", NiveauScolaire.FAIBLE)]
    contraintes = [SiegeImpose("p1", "f")]
    for graine in range(5):
        res = resoudre(pupitres, eleves, contraintes, graine=graine, evaluateur=EvaluateurNiveaux())
        assert res.succes
        assert res.affectation == {"p1": "f", "p2": "x"}


def test_grande_classe_sans_contrainte():
    pupitres = disposition_en_rangees(5, 6)
    eleves = _eleves(30)
    res = resoudre(pupitres, eleves, [], graine=0)
    _verifier_plan(res, pupitres, eleves, [])
    assert res.iterations == 31


@pytest.mark.parametrize("graine", [0, 1, 2])
def test_resultat_serialisable(graine, alice_bob):
    res = resoudre(pupitres_en_ligne(0, 100), alice_bob, [], graine=graine)
    out = res.en_dict()
    assert out["success"] is True
    assert set(out) == {"success", "assignment"}


def test_pupitre_verrouille_aller_retour(alice_bob):
    pupitres = pupitres_en_ligne(0, 100, 200)
    contraintes = [SiegeImpose("p2")]
    res = resoudre(pupitres, alice_bob, contraintes, graine=4)
    _verifier_plan(res, pupitres, alice_bob, contraintes)
    assert set(res.affectation) == {"p1", "p3"}


class _SatisfaiteUneFois(Contrainte):
    """Satisfaite au premier appel seulement : la validation finale la contredit."""

    def __init__(self) -> None:
        self.appels = 0

    def type_contrainte(self):
        return TypeContrainte.ELOIGNES

    def implique(self):
        return []

    def est_satisfaite(self, vue):
        self.appels += 1
        return self.appels == 1

    def message_violation(self):
        return "règle instable"

    def texte_humain(self, noms=None):
        return "règle instable"

    def code_machine(self):
        return {"type": "keep_apart", "studentIds": []}


def test_validation_finale_contredit_la_recherche():
    pupitres = pupitres_en_ligne(0)
    eleves = _eleves(1)
    res = resoudre(pupitres, eleves, [_SatisfaiteUneFois()], graine=0)
    assert res.succes is False
    assert res.nature is NatureErreur.INCOHERENCE_VALIDATION
    assert res.affectation == {"p1": "e1"}
    assert res.contraintes_conflictuelles == ["règle instable"]
    out = res.en_dict()
    assert out["errorKind"] == "post_validation_mismatch"
    assert out["assignment"] == {"p1": "e1"}


def test_marqueur_verrouille_vide_ignore_par_le_solveur():
    # seul un SiegeImpose vide garde le pupitre libre
    pupitres = [Pupitre(id="p1", numero=1, x=0, y=0, verrouille_vide=True)]
    res = resoudre(pupitres, _eleves(1), [], graine=0)
    assert res.succes
    assert res.affectation == {"p1": "e1"}
    assert resoudre(pupitres, _eleves(1), [SiegeImpose("p1")]).nature is NatureErreur.CAPACITE
