"""Per-player and team chemistry for an eleven-slot squad."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Tuple

from sbcchem.config import DEFAULT_RULES, ChemistryConfig, PositionFit, RuleSet
from sbcchem.models import SQUAD_SIZE, InvalidInput, Player, Position, Squad

from .links import link


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SquadChemistry:
    total: int
    per_slot: Tuple[int, ...]


class ChemistryEngine:
    """Chemistry calculator bound to one rule set.

    Every method is a pure function of its arguments and the rules the engine
    was built with; squads are never modified.
    """

    def __init__(self, rules: RuleSet = DEFAULT_RULES) -> None:
        self.rules = rules

    @property
    def config(self) -> ChemistryConfig:
        return self.rules.config

    def classify(self, player_position: Position | str, slot_position: Position | str) -> PositionFit:
        return self.rules.compatibility.classify(player_position, slot_position)

    def link(self, first: Optional[Player], second: Optional[Player]) -> int:
        return link(first, second, self.rules.config)

    def _position_adjustment(self, fit: PositionFit) -> int:
        if fit is PositionFit.WRONG:
            return -self.config.out_of_position_penalty
        if fit is PositionFit.COMPATIBLE:
            return -self.config.wrong_position_penalty
        return 0

    def player_chemistry(self, player: Player, slot_index: int, squad: Squad) -> int:
        """Chemistry ``player`` would have in ``slot_index`` of ``squad``."""

        if not 0 <= slot_index < SQUAD_SIZE:
            raise InvalidInput(f"Slot index {slot_index} outside 0-{SQUAD_SIZE - 1}")

        slot = squad.slots[slot_index]
        score = self._position_adjustment(self.classify(player.position, slot.required_position))

        for neighbour in self.rules.formations.adjacent(squad.formation_id, slot_index):
            occupant = squad.slots[neighbour].occupant
            if occupant is not None:
                score += self.link(player, occupant)

        return max(0, min(score, self.config.max_player_chemistry))

    def squad_chemistry(self, squad: Squad) -> SquadChemistry:
        if squad.formation_id not in self.rules.formations:
            logger.debug("No links defined for formation %s", squad.formation_id)

        per_slot = tuple(
            0 if slot.occupant is None else self.player_chemistry(slot.occupant, slot.index, squad)
            for slot in squad.slots
        )
        return SquadChemistry(total=sum(per_slot), per_slot=per_slot)

    def team_chemistry(self, squad: Squad) -> int:
        return self.squad_chemistry(squad).total

    def team_rating(self, squad: Squad) -> int:
        """Mean occupant rating rounded half up; 0 for an empty squad."""

        ratings = [player.rating for player in squad.occupants()]
        if not ratings:
            return 0
        count = len(ratings)
        return (2 * sum(ratings) + count) // (2 * count)
