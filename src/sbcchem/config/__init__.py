"""Chemistry rule tables and their defaults."""

from .chemistry import DEFAULT_CHEMISTRY_CONFIG, ChemistryConfig
from .formations import (
    DEFAULT_FORMATION_ID,
    DEFAULT_FORMATIONS,
    Formation,
    FormationGraph,
    adjacent,
    asymmetric_links,
)
from .positions import DEFAULT_COMPATIBILITY, PositionCompatibility, PositionFit, classify
from .rules import DEFAULT_RULES, RuleSet, default_formation_id, rules_path_from_env

__all__ = [
    "ChemistryConfig",
    "DEFAULT_CHEMISTRY_CONFIG",
    "DEFAULT_COMPATIBILITY",
    "DEFAULT_FORMATIONS",
    "DEFAULT_FORMATION_ID",
    "DEFAULT_RULES",
    "Formation",
    "FormationGraph",
    "PositionCompatibility",
    "PositionFit",
    "RuleSet",
    "adjacent",
    "asymmetric_links",
    "classify",
    "default_formation_id",
    "rules_path_from_env",
]
