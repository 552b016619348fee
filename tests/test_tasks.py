from __future__ import annotations

import pytest

from placement.tasks import placer, t_placer_eleves

from conftest import charger_payload


def test_placer_payload_mixte():
    payload = charger_payload("payload_mix.json")
    out = placer(payload)
    assert out["status"] == "SUCCESS", out
    assert out["success"] is True
    assignment = out["assignment"]
    assert assignment["d1"] == "s1"
    assert "d8" not in assignment
    assert sorted(assignment.values()) == ["s1", "s2", "s3", "s4", "s5", "s6"]
    assert out["seed"] == 3


def test_placer_payload_invalide():
    out = placer({"desks": [{"id": "a"}], "students": []})
    assert out["status"] == "FAILURE"
    assert out["error"].startswith("Requête invalide")


def test_placer_capacite():
    payload = charger_payload("payload_min.json")
    payload["desks"] = payload["desks"][:2]
    out = placer(payload)
    assert out["status"] == "FAILURE"
    assert out["success"] is False
    assert out["errorKind"] == "capacity"
    assert out["error"] == out["errorMessage"]


def test_keep_together_desactive():
    payload = charger_payload("payload_mix.json")
    payload["options"]["keepTogether"] = False
    out = placer(payload)
    assert out["errorKind"] == "unsupported_constraint"


def test_borne_depuis_les_reglages(settings):
    settings.PLACEMENT_ITERATIONS_MAX = 1
    out = placer(charger_payload("payload_min.json"))
    assert out["status"] == "FAILURE"
    assert out["errorKind"] == "search_exhausted"


def test_tache_celery_eager():
    res = t_placer_eleves.apply(args=(charger_payload("payload_min.json"),))
    out = res.get()
    assert out["status"] == "SUCCESS"
    assert len(out["assignment"]) == 3


@pytest.mark.parametrize("payload", [
    {"desks": [{"id": "p1", "x": "nan", "y": 0}], "students": [{"id": "a"}], "constraints": []},
    {"desks": [{"id": "p1", "x": "Infinity", "y": 0}], "students": [{"id": "a"}], "constraints": []},
    {"desks": [{"id": "p1", "x": 0, "y": 0}], "students": ["a"], "constraints": []},
    {"desks": [{"id": "p1", "x": 0, "y": 0}], "students": [{"id": "a"}], "constraints": [["a", "b"]]},
    ["pas", "un", "objet"],
])
def test_payload_mal_forme_rend_un_echec(payload):
    out = placer(payload)
    assert out["status"] == "FAILURE"
    assert out["error"].startswith("Requête invalide")
