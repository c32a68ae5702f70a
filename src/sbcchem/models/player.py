"""Canonical player record consumed by the chemistry engine."""

from __future__ import annotations

from enum import Enum
from typing import Any, Optional, Union

from pydantic import BaseModel, Field, field_validator, model_validator
from pydantic.config import ConfigDict

from .errors import InvalidInput


class Position(str, Enum):
    GK = "GK"
    LB = "LB"
    LWB = "LWB"
    CB = "CB"
    RB = "RB"
    RWB = "RWB"
    LM = "LM"
    CDM = "CDM"
    CM = "CM"
    CAM = "CAM"
    RM = "RM"
    LW = "LW"
    CF = "CF"
    ST = "ST"
    RW = "RW"
    LF = "LF"
    RF = "RF"


class Quality(str, Enum):
    BRONZE = "bronze"
    SILVER = "silver"
    GOLD = "gold"


class Rarity(str, Enum):
    COMMON = "common"
    RARE = "rare"
    SPECIAL = "special"


SILVER_MIN_RATING = 65
GOLD_MIN_RATING = 75


def quality_for_rating(rating: int) -> Quality:
    """Map an overall rating onto its card tier."""

    if rating >= GOLD_MIN_RATING:
        return Quality.GOLD
    if rating >= SILVER_MIN_RATING:
        return Quality.SILVER
    return Quality.BRONZE


def parse_position(value: Union[str, Position]) -> Position:
    """Resolve a position code, raising InvalidInput for unknown codes."""

    if isinstance(value, Position):
        return value
    if isinstance(value, str):
        try:
            return Position(value.strip().upper())
        except ValueError:
            pass
    raise InvalidInput(f"Unknown position code {value!r}")


class Player(BaseModel):
    """Normalized player card used by chemistry and requirement checks."""

    id: str = Field(..., min_length=1)
    rating: int = Field(..., ge=0, le=99)
    position: Position
    name: Optional[str] = None
    club: Optional[str] = None
    nation: Optional[str] = None
    league: Optional[str] = None
    quality: Optional[Quality] = None
    rarity: Rarity = Rarity.COMMON

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="before")
    @classmethod
    def _derive_quality(cls, data: Any) -> Any:
        if not isinstance(data, dict) or data.get("quality") is not None:
            return data
        try:
            rating = int(data["rating"])
        except (KeyError, TypeError, ValueError):
            return data
        return {**data, "quality": quality_for_rating(rating)}

    @field_validator("id", "club", "nation", "league", mode="before")
    @classmethod
    def _identifier_text(cls, value: Any) -> Any:
        # Payloads carry numeric ids; compare everything as text.
        if value is None or isinstance(value, bool):
            return value
        if isinstance(value, (int, str)):
            text = str(value).strip()
            return text or None
        return value

    @field_validator("position", mode="before")
    @classmethod
    def _position_code(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.strip().upper()
        return value

    @field_validator("quality", "rarity", mode="before")
    @classmethod
    def _lower_tier(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.strip().lower()
        return value
