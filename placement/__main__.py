# placement/__main__.py
from __future__ import annotations

import argparse
import json
import os
import sys
from pathlib import Path


def _run_exemple(args: argparse.Namespace) -> int:
    from .exemples import construire_exemple

    return construire_exemple(graine=args.graine)


def _run_resoudre(args: argparse.Namespace) -> int:
    # les réglages Django fournissent la borne d'itérations par défaut
    os.environ.setdefault("DJANGO_SETTINGS_MODULE", "placementsite.settings.dev")
    from .tasks import placer

    try:
        payload = json.loads(Path(args.fichier).read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        print(f"Impossible de lire {args.fichier} : {e}", file=sys.stderr)
        return 2

    if args.graine is not None:
        payload.setdefault("options", {})["seed"] = args.graine

    resultat = placer(payload)
    print(json.dumps(resultat, ensure_ascii=False, indent=2))
    return 0 if resultat.get("status") == "SUCCESS" else 1


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="placement",
        description="Placement des élèves sur les pupitres : exemple et résolution de fichiers JSON."
    )
    sub = parser.add_subparsers(dest="cmd")

    p_ex = sub.add_parser("exemple", help="Exécute le scénario d'exemple.")
    p_ex.add_argument("--graine", type=int, default=42, help="Graine du tirage aléatoire.")
    p_ex.set_defaults(func=_run_exemple)

    p_res = sub.add_parser("resoudre", help="Résout un payload JSON {desks, students, constraints, options}.")
    p_res.add_argument("fichier", help="Chemin du fichier JSON.")
    p_res.add_argument("--graine", type=int, default=None, help="Graine (remplace options.seed).")
    p_res.set_defaults(func=_run_resoudre)

    # défaut: si aucune sous-commande n'est fournie, on lance l'exemple
    args = parser.parse_args(argv)
    if not args.cmd:
        return _run_exemple(argparse.Namespace(graine=42))

    return args.func(args)


if __name__ == "__main__":
    raise SystemExit(main())
