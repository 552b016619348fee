from __future__ import annotations

from placement.modele.eleve import Eleve, NiveauScolaire as N
from placement.score import EvaluateurNiveaux, compatibilite

from conftest import pupitres_en_ligne


def test_table_de_compatibilite():
    assert compatibilite(N.FAIBLE, N.FAIBLE) == 50
    assert compatibilite(N.FAIBLE, N.MOYEN_FAIBLE) == 100
    assert compatibilite(N.FAIBLE, N.MOYEN_FORT) == 75
    assert compatibilite(N.FORT, N.FAIBLE) == 100
    assert compatibilite(N.MOYEN_FORT, N.MOYEN_FAIBLE) == compatibilite(N.MOYEN_FAIBLE, N.MOYEN_FORT)


def test_score_somme_des_voisins():
    # p2 au milieu de p1 et p3 ; p4 éloigné
    pupitres = pupitres_en_ligne(0, 20, 40, 400)
    eleves = [Eleve("x", "X", N.FAIBLE), Eleve("f", "F", N.FORT), Eleve("m", "M", N.FAIBLE), Eleve("z", "Z")]
    ev = EvaluateurNiveaux()
    affectation = {"p1": "f", "p3": "m", "p4": "z"}
    assert ev.score("x", "p2", eleves, pupitres, affectation) == 100 + 50
    assert ev.score("x", "p2", eleves, pupitres, {}) == 0


def test_niveau_absent_et_pupitre_inconnu():
    pupitres = pupitres_en_ligne(0, 20)
    eleves = [Eleve("x", "X", N.FAIBLE), Eleve("y", "Y")]
    ev = EvaluateurNiveaux()
    # niveau par défaut : moyen fort, écart 2
    assert ev.score("x", "p2", eleves, pupitres, {"p1": "y"}) == 75
    assert ev.score("x", "p9", eleves, pupitres, {"p1": "y"}) == 0
