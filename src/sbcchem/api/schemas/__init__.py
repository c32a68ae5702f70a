"""Pydantic models for API I/O."""

from .chemistry import (
    ChemistryResponse,
    FormationResponse,
    SlotChemistryResponse,
    ValidationResponse,
)

__all__ = [
    "ChemistryResponse",
    "FormationResponse",
    "SlotChemistryResponse",
    "ValidationResponse",
]
