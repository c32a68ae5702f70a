"""Squad chemistry and challenge requirement validation."""

from .chemistry import ChemistryEngine, SquadChemistry
from .config import DEFAULT_RULES, RuleSet
from .models import FormationSlot, InvalidInput, Player, Requirements, Squad
from .validation import RequirementValidator, ValidationResult

__all__ = [
    "ChemistryEngine",
    "DEFAULT_RULES",
    "FormationSlot",
    "InvalidInput",
    "Player",
    "RequirementValidator",
    "Requirements",
    "RuleSet",
    "Squad",
    "SquadChemistry",
    "ValidationResult",
]
