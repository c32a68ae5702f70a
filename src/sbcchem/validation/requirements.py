"""Check a squad against challenge requirements."""

from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass, field
from typing import Callable, Iterable, List, Optional, Sequence

from sbcchem.chemistry import ChemistryEngine
from sbcchem.config import default_formation_id
from sbcchem.models import Player, Quality, Rarity, Requirements, Squad


logger = logging.getLogger(__name__)

_RARE_TIERS = frozenset({Rarity.RARE, Rarity.SPECIAL})


@dataclass
class ValidationResult:
    """Outcome of a validation run; ``issues`` keeps the check order."""

    valid: bool = True
    issues: List[str] = field(default_factory=list)


def _largest_group(players: Iterable[Player], key: Callable[[Player], Optional[str]]) -> int:
    counts = Counter(value for value in map(key, players) if value is not None)
    return max(counts.values(), default=0)


def _count(players: Sequence[Player], predicate: Callable[[Player], bool]) -> int:
    return sum(1 for player in players if predicate(player))


class RequirementValidator:
    """Evaluates every requirement independently so one call reports all issues."""

    def __init__(
        self,
        engine: Optional[ChemistryEngine] = None,
        *,
        default_formation: Optional[str] = None,
    ) -> None:
        self.engine = engine or ChemistryEngine()
        self.default_formation = default_formation or default_formation_id(self.engine.rules.formations)

    def validate(self, squad: Squad, requirements: Requirements) -> ValidationResult:
        issues: List[str] = []
        occupants = squad.occupants()

        if requirements.min_rating is not None:
            rating = self.engine.team_rating(squad)
            if rating < requirements.min_rating:
                issues.append(f"Team rating {rating} is below minimum {requirements.min_rating}")

        if requirements.min_chemistry is not None:
            formation_id = requirements.formation or self.default_formation
            if formation_id not in self.engine.rules.formations:
                logger.warning("No links defined for formation %s; chemistry counts positions only", formation_id)
            chemistry = self.engine.team_chemistry(squad.with_formation(formation_id))
            if chemistry < requirements.min_chemistry:
                issues.append(f"Team chemistry {chemistry} is below minimum {requirements.min_chemistry}")

        caps = (
            ("league", requirements.max_players_from_same_league, lambda p: p.league),
            ("club", requirements.max_players_from_same_club, lambda p: p.club),
            ("nation", requirements.max_players_from_same_nation, lambda p: p.nation),
        )
        for label, limit, key in caps:
            if limit is None:
                continue
            largest = _largest_group(occupants, key)
            if largest > limit:
                issues.append(f"Too many players from same {label}: {largest} (max {limit})")

        minimums = (
            ("Gold", requirements.min_gold_players, lambda p: p.quality is Quality.GOLD),
            ("Silver", requirements.min_silver_players, lambda p: p.quality is Quality.SILVER),
            ("Bronze", requirements.min_bronze_players, lambda p: p.quality is Quality.BRONZE),
            ("Rare", requirements.min_rare_players, lambda p: p.rarity in _RARE_TIERS),
        )
        for label, minimum, predicate in minimums:
            if minimum is None:
                continue
            have = _count(occupants, predicate)
            if have < minimum:
                issues.append(f"{label} players {have} is below minimum {minimum}")

        if issues:
            logger.debug("Squad failed %d requirement(s)", len(issues))
        return ValidationResult(valid=not issues, issues=issues)

    def missing_players(self, squad: Squad, requirements: Requirements) -> int:
        """Occupants still needed to reach the required player count."""

        return max(0, requirements.number_of_players - len(squad.occupants()))


def validate(
    squad: Squad,
    requirements: Requirements,
    validator: Optional[RequirementValidator] = None,
) -> ValidationResult:
    return (validator or RequirementValidator()).validate(squad, requirements)
