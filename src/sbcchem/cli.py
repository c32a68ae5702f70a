"""Command-line interface for scoring and validating a squad file."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

from pydantic import ValidationError

from sbcchem.chemistry import ChemistryEngine
from sbcchem.config_loader import load_rules
from sbcchem.ingest import SquadDocument
from sbcchem.models import InvalidInput, Requirements
from sbcchem.validation import RequirementValidator


logger = logging.getLogger(__name__)

EXIT_VALID = 0
EXIT_INVALID = 1
EXIT_BAD_INPUT = 2


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Score squad chemistry and check challenge requirements")
    parser.add_argument("squad", type=Path, help="Path to squad JSON (formation, players, requirements)")
    parser.add_argument("--rules", type=Path, default=None, help="Rule set JSON (defaults to $SBCCHEM_RULES)")
    parser.add_argument("--formation", default=None, help="Override the squad's formation id")
    parser.add_argument(
        "--requirements",
        type=Path,
        default=None,
        help="Requirements JSON; replaces the requirements embedded in the squad file",
    )
    parser.add_argument("--json", action="store_true", help="Print a JSON report instead of text")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = _parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        rules = load_rules(args.rules)
        document = SquadDocument.load(args.squad)
        if args.formation:
            document = document.model_copy(update={"formation": args.formation})
        requirements = None
        if args.requirements:
            requirements = Requirements.model_validate(
                json.loads(args.requirements.read_text(encoding="utf-8"))
            )
        requirements = document.requirements_for(requirements)
        squad = document.to_squad(rules.formations)
    except (InvalidInput, ValidationError, json.JSONDecodeError, OSError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return EXIT_BAD_INPUT

    engine = ChemistryEngine(rules)
    validator = RequirementValidator(engine)
    chemistry = engine.squad_chemistry(squad)
    rating = engine.team_rating(squad)
    result = validator.validate(squad, requirements)
    missing = validator.missing_players(squad, requirements)

    if args.json:
        report = {
            "formation": squad.formation_id,
            "chemistry": chemistry.total,
            "per_slot": list(chemistry.per_slot),
            "rating": rating,
            "missing_players": missing,
            "valid": result.valid,
            "issues": result.issues,
        }
        print(json.dumps(report, indent=2))
    else:
        print(f"Formation {squad.formation_id}")
        for slot, score in zip(squad.slots, chemistry.per_slot):
            occupant = slot.occupant
            label = "-" if occupant is None else f"{occupant.name or occupant.id} ({occupant.position.value}, {occupant.rating})"
            print(f"  {slot.index:>2} {slot.required_position.value:<3} {label:<40} chem {score}")
        print(f"Team chemistry {chemistry.total}/{engine.config.max_team_chemistry}, rating {rating}")
        if missing:
            print(f"Players still needed: {missing}")
        if result.valid:
            print("All requirements met")
        else:
            for issue in result.issues:
                print(f"- {issue}")

    return EXIT_VALID if result.valid else EXIT_INVALID


if __name__ == "__main__":
    raise SystemExit(main())
