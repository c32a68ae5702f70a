"""Chemistry scoring built on the configured rule set."""

from .engine import ChemistryEngine, SquadChemistry
from .links import link

__all__ = ["ChemistryEngine", "SquadChemistry", "link"]
