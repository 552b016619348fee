from __future__ import annotations

import json
from typing import List, Optional

from .contraintes.binaires import DistanceMinimale, DoiventEtreEloignes
from .contraintes.groupes import DoitEtreDansGroupe
from .contraintes.registre import ContexteFabrique, contrainte_depuis_code
from .contraintes.siege import SiegeImpose
from .contraintes.validateur import valider
from .dispositions import disposition_en_ilots
from .modele.eleve import Eleve, NiveauScolaire
from .modele.pupitre import Pupitre
from .score import EvaluateurNiveaux
from .solveurs.retour_arriere import resoudre

from .contraintes import enregistrement  # noqa: F401  (enregistre les fabriques)


def construire_exemple(graine: Optional[int] = 42) -> int:
    """
    construit une salle en îlots, une liste d'élèves, un jeu de contraintes et lance le solveur.

    affiche l'affectation si une solution est trouvée, et un export JSON des contraintes.
    retourne 0 en cas de succès, 1 sinon.
    """
    # salle : 4 îlots de 4 pupitres (groupes g1 à g4)
    pupitres: List[Pupitre] = disposition_en_ilots(taille_ilot=4, nb_ilots=4)

    # élèves : 14 élèves, niveaux répartis sur les quatre paliers
    niveaux = list(NiveauScolaire)
    eleves: List[Eleve] = [
        Eleve(identifiant=f"e{i + 1}", nom=f"Élève {chr(65 + i)}", niveau=niveaux[i % len(niveaux)])
        for i in range(14)
    ]

    contraintes = [
        SiegeImpose(pupitre_id="p1", eleve_id="e1"),
        SiegeImpose(pupitre_id="p16"),
        DoiventEtreEloignes(a="e2", b="e3"),
        DistanceMinimale(a="e4", b="e5", d=20),
        DoitEtreDansGroupe(eleve_id="e6", groupe_id="g2"),
    ]

    res = resoudre(pupitres, eleves, contraintes, graine=graine, evaluateur=EvaluateurNiveaux())

    if not res.succes:
        print(f"aucune solution trouvée : {res.message_erreur}")
        for texte in res.contraintes_conflictuelles or []:
            print(f" - {texte}")
        return 1

    # affichage de l'affectation, pupitre par pupitre
    noms = {e.identifiant(): e.affichage_nom() for e in eleves}
    print(f"=== affectation trouvée ({res.iterations} itérations) ===")
    for p in pupitres:
        occupant = res.affectation.get(p.id)
        libelle = noms.get(occupant, occupant) if occupant else "(vide)"
        print(f" - pupitre {p.numero:2d} [{p.groupe}] -> {libelle}")

    assert valider(res.affectation, pupitres, contraintes).valide

    # export JSON « code_machine » + démonstration de rechargement via la fabrique
    codes = [c.code_machine() for c in contraintes]
    print("\n=== export JSON des contraintes ===")
    print(json.dumps(codes, ensure_ascii=False, indent=2))

    ctx = ContexteFabrique(eleves_connus=noms, pupitres_connus=[p.id for p in pupitres])
    reconstruites = [contrainte_depuis_code(code, ctx) for code in codes]
    assert all(c1.code_machine() == c2.code_machine() for c1, c2 in zip(contraintes, reconstruites))
    print("\n(reconstruction via fabrique : OK)")
    return 0
