"""Squad documents: a formation, up to eleven players and the requirements."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from sbcchem.config import DEFAULT_FORMATION_ID, DEFAULT_FORMATIONS, FormationGraph
from sbcchem.models import SQUAD_SIZE, Requirements, Squad

from .items import player_from_item


class SquadDocument(BaseModel):
    """Squad as exchanged with the automation layer.

    ``players`` holds Player-shaped objects or raw items, in slot order, with
    ``null`` for empty slots. ``positions`` overrides the formation's default
    slot layout.
    """

    formation: str = DEFAULT_FORMATION_ID
    positions: Optional[List[str]] = None
    players: List[Optional[Dict[str, Any]]] = Field(default_factory=list, max_length=SQUAD_SIZE)
    requirements: Requirements = Field(default_factory=Requirements)

    @classmethod
    def load(cls, path: Path) -> "SquadDocument":
        return cls.model_validate(json.loads(path.read_text(encoding="utf-8")))

    def to_squad(self, graph: FormationGraph = DEFAULT_FORMATIONS) -> Squad:
        players = [None if item is None else player_from_item(item) for item in self.players]
        if self.positions is not None:
            return Squad.from_positions(self.formation, self.positions, players)
        return Squad.from_formation(self.formation, players, graph=graph)

    def requirements_for(self, requirements: Optional[Requirements] = None) -> Requirements:
        """Requirements to validate against, scored on this document's formation.

        An explicit ``formation`` in the requirements still wins.
        """

        if requirements is None:
            requirements = self.requirements
        if requirements.formation is None:
            return requirements.model_copy(update={"formation": self.formation})
        return requirements
