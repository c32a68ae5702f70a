"""Chemistry scoring constants."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ChemistryConfig:
    max_player_chemistry: int = 3
    max_team_chemistry: int = 33
    link_strong: int = 2
    link_medium: int = 1
    link_dead: int = 0
    wrong_position_penalty: int = 1
    out_of_position_penalty: int = 3


DEFAULT_CHEMISTRY_CONFIG = ChemistryConfig()
