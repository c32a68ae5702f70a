"""REST API exposing squad chemistry and requirement checks."""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import FastAPI, HTTPException
from pydantic import ValidationError

from sbcchem.api.schemas import (
    ChemistryResponse,
    FormationResponse,
    SlotChemistryResponse,
    ValidationResponse,
)
from sbcchem.chemistry import ChemistryEngine
from sbcchem.config import RuleSet
from sbcchem.config_loader import load_rules
from sbcchem.ingest import SquadDocument
from sbcchem.models import InvalidInput, Squad
from sbcchem.validation import RequirementValidator


logger = logging.getLogger(__name__)


def create_app(rules: Optional[RuleSet] = None) -> FastAPI:
    app = FastAPI(title="sbcchem")
    rules = rules or load_rules()
    engine = ChemistryEngine(rules)
    validator = RequirementValidator(engine)
    app.state.rules = rules

    def to_squad(document: SquadDocument) -> Squad:
        try:
            return document.to_squad(rules.formations)
        except (InvalidInput, ValidationError) as exc:
            logger.info("Rejected squad document: %s", exc)
            raise HTTPException(status_code=400, detail=str(exc)) from exc

    @app.get("/health")
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    @app.get("/formations", response_model=list[FormationResponse])
    async def formations() -> list[FormationResponse]:
        return [
            FormationResponse(
                formation_id=formation.formation_id,
                positions=[position.value for position in formation.positions],
                links=[list(pair) for pair in formation.links()],
            )
            for formation in sorted(rules.formations, key=lambda item: item.formation_id)
        ]

    @app.post("/chemistry", response_model=ChemistryResponse)
    async def chemistry(document: SquadDocument) -> ChemistryResponse:
        squad = to_squad(document)
        result = engine.squad_chemistry(squad)
        return ChemistryResponse(
            formation=squad.formation_id,
            chemistry=result.total,
            max_chemistry=engine.config.max_team_chemistry,
            rating=engine.team_rating(squad),
            slots=[
                SlotChemistryResponse(
                    index=slot.index,
                    required_position=slot.required_position.value,
                    player_id=None if slot.occupant is None else slot.occupant.id,
                    chemistry=score,
                )
                for slot, score in zip(squad.slots, result.per_slot)
            ],
        )

    @app.post("/validate", response_model=ValidationResponse)
    async def validate(document: SquadDocument) -> ValidationResponse:
        squad = to_squad(document)
        requirements = document.requirements_for()
        result = validator.validate(squad, requirements)
        return ValidationResponse(
            valid=result.valid,
            issues=result.issues,
            missing_players=validator.missing_players(squad, requirements),
            chemistry=engine.team_chemistry(squad),
            rating=engine.team_rating(squad),
        )

    return app
