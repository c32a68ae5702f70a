"""Pairwise chemistry links between squad members."""

from __future__ import annotations

from typing import Optional

from sbcchem.config import DEFAULT_CHEMISTRY_CONFIG, ChemistryConfig
from sbcchem.models import Player


def _shared(first: Optional[str], second: Optional[str]) -> bool:
    return first is not None and second is not None and first == second


def link(
    first: Optional[Player],
    second: Optional[Player],
    config: ChemistryConfig = DEFAULT_CHEMISTRY_CONFIG,
) -> int:
    """Link strength between two players; symmetric in its arguments."""

    if first is None or second is None:
        return config.link_dead

    same_club = _shared(first.club, second.club)
    same_nation = _shared(first.nation, second.nation)
    same_league = _shared(first.league, second.league)

    if same_club and same_nation:
        return config.link_strong
    if same_club or same_nation or same_league:
        return config.link_medium
    return config.link_dead
