from __future__ import annotations

import json
from pathlib import Path

import pytest

from placement.modele.eleve import Eleve
from placement.modele.pupitre import Pupitre

DATA = Path(__file__).parent / "data"


def charger_payload(nom: str) -> dict:
    return json.loads((DATA / nom).read_text(encoding="utf-8"))


def pupitres_en_ligne(*xs: float, y: float = 0) -> list[Pupitre]:
    """Pupitres p1, p2, … posés sur une même ligne aux abscisses données."""
    return [Pupitre(id=f"p{i}", numero=i, x=x, y=y) for i, x in enumerate(xs, start=1)]


@pytest.fixture
def alice_bob() -> list[Eleve]:
    return [Eleve("a", "Alice"), Eleve("b", "Bob")]
