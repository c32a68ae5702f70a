"""Rule set bundle injected into the chemistry engine."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Optional

from .chemistry import DEFAULT_CHEMISTRY_CONFIG, ChemistryConfig
from .formations import DEFAULT_FORMATION_ID, DEFAULT_FORMATIONS, Formation, FormationGraph
from .positions import DEFAULT_COMPATIBILITY, PositionCompatibility


logger = logging.getLogger(__name__)

_RULES_ENV = "SBCCHEM_RULES"
_DEFAULT_FORMATION_ENV = "SBCCHEM_DEFAULT_FORMATION"


@dataclass(frozen=True)
class RuleSet:
    config: ChemistryConfig = DEFAULT_CHEMISTRY_CONFIG
    compatibility: PositionCompatibility = DEFAULT_COMPATIBILITY
    formations: FormationGraph = field(default=DEFAULT_FORMATIONS, compare=False)

    def with_formation(self, formation: Formation) -> "RuleSet":
        return replace(self, formations=self.formations.register(formation))


DEFAULT_RULES = RuleSet()


def rules_path_from_env() -> Optional[Path]:
    raw = os.getenv(_RULES_ENV)
    if not raw:
        return None
    path = Path(raw).expanduser()
    if not path.is_file():
        logger.warning("%s points at missing file %s; using default rules", _RULES_ENV, raw)
        return None
    return path


def default_formation_id(formations: FormationGraph = DEFAULT_FORMATIONS) -> str:
    """Formation assumed when requirements name none."""

    raw = os.getenv(_DEFAULT_FORMATION_ENV)
    if raw is None:
        return DEFAULT_FORMATION_ID
    candidate = raw.strip()
    if candidate not in formations:
        logger.warning(
            "Unknown formation for %s: %s; using default %s",
            _DEFAULT_FORMATION_ENV,
            raw,
            DEFAULT_FORMATION_ID,
        )
        return DEFAULT_FORMATION_ID
    return candidate
