from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel


class SlotChemistryResponse(BaseModel):
    index: int
    required_position: str
    player_id: Optional[str]
    chemistry: int


class ChemistryResponse(BaseModel):
    formation: str
    chemistry: int
    max_chemistry: int
    rating: int
    slots: List[SlotChemistryResponse]


class ValidationResponse(BaseModel):
    valid: bool
    issues: List[str]
    missing_players: int
    chemistry: int
    rating: int


class FormationResponse(BaseModel):
    formation_id: str
    positions: List[str]
    links: List[List[int]]
