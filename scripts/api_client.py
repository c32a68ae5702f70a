"""Lightweight REST client for the sbcchem API."""

from __future__ import annotations

import argparse
import json
from pathlib import Path

import httpx


def load_squad(path: Path) -> dict:
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise SystemExit(f"Invalid squad JSON: {exc}") from exc


def main() -> None:
    parser = argparse.ArgumentParser(description="Interact with the sbcchem REST API")
    parser.add_argument("base_url", help="Base URL of the API, e.g. http://localhost:8000")
    parser.add_argument("squad", type=Path, nargs="?", help="Squad JSON (formation, players, requirements)")
    parser.add_argument("--chemistry-only", action="store_true", help="Fetch chemistry without validating")
    parser.add_argument("--list-formations", action="store_true", help="List known formations and exit")
    args = parser.parse_args()

    with httpx.Client(base_url=args.base_url) as client:
        if args.list_formations:
            resp = client.get("/formations")
            resp.raise_for_status()
            for formation in resp.json():
                print(f"{formation['formation_id']}: {' '.join(formation['positions'])}")
            return

        if args.squad is None:
            raise SystemExit("squad file is required unless using --list-formations")

        squad = load_squad(args.squad)
        resp = client.post("/chemistry", json=squad)
        if resp.status_code == 400:
            raise SystemExit(f"squad rejected: {resp.json()['detail']}")
        resp.raise_for_status()
        report = resp.json()
        print(f"Chemistry {report['chemistry']}/{report['max_chemistry']}, rating {report['rating']}")

        if args.chemistry_only:
            return

        resp = client.post("/validate", json=squad)
        resp.raise_for_status()
        result = resp.json()
        if result["valid"]:
            print("All requirements met")
        for issue in result["issues"]:
            print(f"- {issue}")
        if result["missing_players"]:
            print(f"Players still needed: {result['missing_players']}")


if __name__ == "__main__":
    main()
