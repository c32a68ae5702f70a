"""Records shared by the engine, ingest and API layers."""

from .errors import InvalidInput
from .player import (
    GOLD_MIN_RATING,
    SILVER_MIN_RATING,
    Player,
    Position,
    Quality,
    Rarity,
    parse_position,
    quality_for_rating,
)
from .requirements import Requirements
from .squad import SQUAD_SIZE, FormationSlot, Squad

__all__ = [
    "FormationSlot",
    "GOLD_MIN_RATING",
    "InvalidInput",
    "Player",
    "Position",
    "Quality",
    "Rarity",
    "Requirements",
    "SILVER_MIN_RATING",
    "SQUAD_SIZE",
    "Squad",
    "parse_position",
    "quality_for_rating",
]
