"""Slot position compatibility table."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import FrozenSet, Iterable, List, Mapping, Tuple, Union

from sbcchem.models import Position, parse_position


logger = logging.getLogger(__name__)

PositionCode = Union[str, Position]


class PositionFit(str, Enum):
    PERFECT = "perfect"
    COMPATIBLE = "compatible"
    WRONG = "wrong"


# Keyed by the slot's required position; read as "this slot accepts".
_SLOT_ACCEPTS: Mapping[str, Tuple[str, ...]] = {
    "GK": ("GK",),
    "LWB": ("LWB", "LB", "LM"),
    "LB": ("LB", "LWB", "CB"),
    "CB": ("CB", "LB", "RB"),
    "RB": ("RB", "RWB", "CB"),
    "RWB": ("RWB", "RB", "RM"),
    "LM": ("LM", "LW", "LWB", "CM"),
    "CDM": ("CDM", "CM", "CB"),
    "CM": ("CM", "CDM", "CAM", "LM", "RM"),
    "CAM": ("CAM", "CM", "CF", "LW", "RW"),
    "RM": ("RM", "RW", "RWB", "CM"),
    "LW": ("LW", "LM", "LF", "ST"),
    "CF": ("CF", "CAM", "ST"),
    "ST": ("ST", "CF", "LW", "RW"),
    "RW": ("RW", "RM", "RF", "ST"),
    "LF": ("LF", "LW", "ST"),
    "RF": ("RF", "RW", "ST"),
}


@dataclass(frozen=True)
class PositionCompatibility:
    """Which natural positions each slot accepts without the full penalty."""

    accepts: Mapping[Position, FrozenSet[Position]]

    @classmethod
    def from_table(cls, table: Mapping[PositionCode, Iterable[PositionCode]]) -> "PositionCompatibility":
        accepts = {
            parse_position(slot): frozenset(parse_position(code) for code in codes)
            for slot, codes in table.items()
        }
        compatibility = cls(accepts=MappingProxyType(accepts))
        one_way = compatibility.asymmetric_pairs()
        if one_way:
            logger.debug("Compatibility table has %d one-way pairs", len(one_way))
        return compatibility

    def classify(self, player_position: PositionCode, slot_position: PositionCode) -> PositionFit:
        player = parse_position(player_position)
        slot = parse_position(slot_position)
        if player is slot:
            return PositionFit.PERFECT
        if player in self.accepts.get(slot, frozenset()):
            return PositionFit.COMPATIBLE
        return PositionFit.WRONG

    def asymmetric_pairs(self) -> List[Tuple[Position, Position]]:
        """Return ``(slot, player)`` pairs accepted in one direction only."""

        pairs = []
        for slot, players in self.accepts.items():
            for player in players:
                if player is slot:
                    continue
                if slot not in self.accepts.get(player, frozenset()):
                    pairs.append((slot, player))
        return sorted(pairs, key=lambda pair: (pair[0].value, pair[1].value))

    def to_table(self) -> dict[str, list[str]]:
        return {
            slot.value: sorted(code.value for code in codes)
            for slot, codes in self.accepts.items()
        }


DEFAULT_COMPATIBILITY = PositionCompatibility.from_table(_SLOT_ACCEPTS)


def classify(
    player_position: PositionCode,
    slot_position: PositionCode,
    compatibility: PositionCompatibility = DEFAULT_COMPATIBILITY,
) -> PositionFit:
    return compatibility.classify(player_position, slot_position)
