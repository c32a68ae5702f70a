"""Persist and load alternate chemistry rule sets."""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Tuple

from sbcchem.config import (
    DEFAULT_CHEMISTRY_CONFIG,
    DEFAULT_COMPATIBILITY,
    DEFAULT_FORMATIONS,
    ChemistryConfig,
    Formation,
    FormationGraph,
    PositionCompatibility,
    RuleSet,
    rules_path_from_env,
)
from sbcchem.models import InvalidInput


def _require_mapping(what: str, value: Any) -> Mapping[str, Any]:
    if not isinstance(value, Mapping):
        raise InvalidInput(f"{what} must be a JSON object, got {type(value).__name__}")
    return value


def _slot_index(formation_id: str, raw: Any) -> int:
    if isinstance(raw, bool):
        raise InvalidInput(f"Formation {formation_id!r} has non-numeric slot {raw!r}")
    try:
        return int(raw)
    except (TypeError, ValueError):
        raise InvalidInput(f"Formation {formation_id!r} has non-numeric slot {raw!r}") from None


def _link(formation_id: str, pair: Any) -> Tuple[int, int]:
    if not isinstance(pair, (list, tuple)) or len(pair) != 2:
        raise InvalidInput(f"Formation {formation_id!r} link {pair!r} is not a slot pair")
    return _slot_index(formation_id, pair[0]), _slot_index(formation_id, pair[1])


def _formation_from_payload(formation_id: str, payload: Any, *, symmetrize: bool) -> Formation:
    payload = _require_mapping(f"Formation {formation_id!r}", payload)
    positions = payload.get("positions")
    if not isinstance(positions, list):
        raise InvalidInput(f"Formation {formation_id!r} is missing its positions list")

    if "links" in payload:
        links = payload["links"]
        if not isinstance(links, list):
            raise InvalidInput(f"Formation {formation_id!r} links must be a list of slot pairs")
        return Formation.from_links(formation_id, positions, [_link(formation_id, pair) for pair in links])

    adjacency = {}
    table = _require_mapping(f"Formation {formation_id!r} adjacency", payload.get("adjacency") or {})
    for slot, neighbours in table.items():
        if not isinstance(neighbours, list):
            raise InvalidInput(f"Formation {formation_id!r} slot {slot!r} neighbours must be a list")
        adjacency[_slot_index(formation_id, slot)] = [_slot_index(formation_id, n) for n in neighbours]
    return Formation.from_adjacency(formation_id, positions, adjacency, symmetrize=symmetrize)


def _chemistry_config(settings: Mapping[str, Any]) -> ChemistryConfig:
    known = {item.name for item in fields(ChemistryConfig)}
    unknown = set(settings) - known
    if unknown:
        raise InvalidInput(f"Unknown chemistry settings: {', '.join(sorted(unknown))}")
    for name, value in settings.items():
        if isinstance(value, bool) or not isinstance(value, int):
            raise InvalidInput(f"Chemistry setting {name} must be an integer, got {value!r}")
    return ChemistryConfig(**{**asdict(DEFAULT_CHEMISTRY_CONFIG), **settings})


def _compatibility(table: Mapping[str, Any]) -> PositionCompatibility:
    for slot, codes in table.items():
        if not isinstance(codes, list):
            raise InvalidInput(f"Compatibility for {slot!r} must be a list of positions")
    return PositionCompatibility.from_table(table)


@dataclass
class RuleSetProfile:
    chemistry: Dict[str, int] = field(default_factory=dict)
    compatibility: Dict[str, List[str]] = field(default_factory=dict)
    formations: Dict[str, Dict[str, Any]] = field(default_factory=dict)
    symmetrize: bool = True

    @classmethod
    def load(cls, path: Path) -> "RuleSetProfile":
        data = json.loads(path.read_text(encoding="utf-8"))
        if not isinstance(data, dict):
            raise InvalidInput(f"Rule set {path} must be a JSON object")
        return cls(
            chemistry=data.get("chemistry", {}),
            compatibility=data.get("compatibility", {}),
            formations=data.get("formations", {}),
            symmetrize=bool(data.get("symmetrize", True)),
        )

    @classmethod
    def from_rules(cls, rules: RuleSet) -> "RuleSetProfile":
        return cls(
            chemistry=asdict(rules.config),
            compatibility=rules.compatibility.to_table(),
            formations={
                formation.formation_id: {
                    "positions": [position.value for position in formation.positions],
                    "links": [list(pair) for pair in formation.links()],
                }
                for formation in rules.formations
            },
        )

    def save(self, path: Path) -> None:
        payload = {
            "chemistry": self.chemistry,
            "compatibility": self.compatibility,
            "formations": self.formations,
            "symmetrize": self.symmetrize,
        }
        path.write_text(json.dumps(payload, indent=2), encoding="utf-8")

    def to_rules(self) -> RuleSet:
        """Build a rule set; sections left empty keep the defaults."""

        config = _chemistry_config(_require_mapping("chemistry", self.chemistry))

        compatibility: PositionCompatibility = DEFAULT_COMPATIBILITY
        if _require_mapping("compatibility", self.compatibility):
            compatibility = _compatibility(self.compatibility)

        formations: FormationGraph = DEFAULT_FORMATIONS
        if _require_mapping("formations", self.formations):
            formations = FormationGraph(
                _formation_from_payload(formation_id, payload, symmetrize=self.symmetrize)
                for formation_id, payload in self.formations.items()
            )

        return RuleSet(config=config, compatibility=compatibility, formations=formations)


def load_rules(path: Optional[Path] = None) -> RuleSet:
    """Load rules from ``path``, then ``SBCCHEM_RULES``, else the defaults."""

    resolved = path or rules_path_from_env()
    if resolved is None:
        return RuleSet()
    return RuleSetProfile.load(resolved).to_rules()
