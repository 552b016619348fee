# placement/views.py
"""
Vues de l'application "placement".

Contenu :
- Sonde de santé (sante)
- Démarrage et polling d'une tâche Celery de placement (solve_start / solve_status)
- Validation synchrone d'une affectation existante (valider_plan)
"""
from __future__ import annotations

import json
import logging
from typing import Any, Dict

from django.http import HttpRequest, HttpResponse, JsonResponse
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_GET, require_POST

from .contraintes.validateur import ResultatValidation, valider
from .tasks import lire_payload

logger = logging.getLogger(__name__)


def _lire_json(request: HttpRequest) -> Dict[str, Any]:
    """Décode le corps JSON ; lève `ValueError` s'il est invalide."""
    try:
        data = json.loads((request.body or b"{}").decode("utf-8"))
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise ValueError("JSON invalide") from exc
    if not isinstance(data, dict):
        raise ValueError("objet JSON attendu")
    return data


@require_GET
def sante(request: HttpRequest) -> HttpResponse:
    """
    Sonde de santé (sans DB ni cache), pour le load balancer.
    """
    return JsonResponse({"ok": True, "service": "placement", "version": 1})


# ---------------------------------------------------------------------------
# Celery : démarrage + polling
# ---------------------------------------------------------------------------

@csrf_exempt
@require_POST
def solve_start(request: HttpRequest) -> HttpResponse:
    """
    Lance la tâche Celery de placement :
    - Body : JSON {desks, students, constraints, options}
    - Réponse : {"task_id": "..."} à poller via solve_status
    """
    from .tasks import t_placer_eleves

    try:
        data = _lire_json(request)
    except ValueError as exc:
        return JsonResponse({"error": str(exc)}, status=400)
    task = t_placer_eleves.delay(data)
    return JsonResponse({"task_id": task.id})


@require_GET
def solve_status(request: HttpRequest, task_id: str) -> HttpResponse:
    """
    Polling d'état (PENDING / STARTED / SUCCESS / FAILURE).
    Une fois la tâche terminée, renvoie le résultat du placement.
    """
    from celery.result import AsyncResult

    ar = AsyncResult(task_id)
    if ar.state in ("PENDING", "RECEIVED", "STARTED", "RETRY"):
        return JsonResponse({"status": ar.state})
    if ar.state == "SUCCESS":
        return JsonResponse(ar.result)  # type: ignore[arg-type]

    # la tâche elle-même a levé une exception
    logger.error("tâche de placement %s en échec: %r", task_id, ar.result)
    return JsonResponse({"status": "FAILURE", "error": str(ar.result) or "échec."})


# ---------------------------------------------------------------------------
# Validation synchrone
# ---------------------------------------------------------------------------

@csrf_exempt
@require_POST
def valider_plan(request: HttpRequest) -> HttpResponse:
    """
    Vérifie une affectation existante contre les contraintes.
    - Body : JSON {desks, students, constraints, assignment: {deskId: studentId}}
    - Réponse : {"valid": bool, "violations": [...]}
    """
    try:
        data = _lire_json(request)
        pupitres, _eleves, contraintes, _options = lire_payload(data)
        brute = data.get("assignment") or {}
        if not isinstance(brute, dict):
            raise ValueError("'assignment': objet {pupitre: élève} attendu")
        affectation = {str(k): str(v) for k, v in brute.items()}
    except (KeyError, ValueError) as exc:
        return JsonResponse({"error": str(exc)}, status=400)

    bilan: ResultatValidation = valider(affectation, pupitres, contraintes)
    return JsonResponse({"valid": bilan.valide, "violations": bilan.violations})
