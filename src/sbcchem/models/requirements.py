"""Challenge requirements as scraped from the challenge view."""

from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator
from pydantic.alias_generators import to_camel
from pydantic.config import ConfigDict


class Requirements(BaseModel):
    """Optional constraints; ``None`` means the challenge does not constrain it.

    Accepts both snake_case names and the scraper's camelCase keys
    (``minRating``, ``maxPlayersFromSameClub``, ...). Unknown keys are ignored.
    """

    min_rating: Optional[int] = Field(default=None, ge=0, le=99)
    min_chemistry: Optional[int] = Field(default=None, ge=0)
    max_players_from_same_league: Optional[int] = Field(default=None, ge=0)
    max_players_from_same_club: Optional[int] = Field(default=None, ge=0)
    max_players_from_same_nation: Optional[int] = Field(default=None, ge=0)
    formation: Optional[str] = None
    number_of_players: int = Field(default=11, ge=0, le=11)
    min_gold_players: Optional[int] = Field(default=None, ge=0)
    min_silver_players: Optional[int] = Field(default=None, ge=0)
    min_bronze_players: Optional[int] = Field(default=None, ge=0)
    min_rare_players: Optional[int] = Field(default=None, ge=0)

    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        alias_generator=to_camel,
    )

    @field_validator("formation", mode="before")
    @classmethod
    def _blank_formation(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.strip() or None
        return value

    @field_validator("number_of_players", mode="before")
    @classmethod
    def _default_player_count(cls, value: Any) -> Any:
        return 11 if value is None else value
