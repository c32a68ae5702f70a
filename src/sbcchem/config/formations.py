"""Formation layouts and the chemistry links between their slots.

Each formation is pure data: eleven default slot positions plus the set of
slots every slot links to. New formations are added to ``_FORMATION_LINKS``
(or registered at runtime) without touching the chemistry engine.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from types import MappingProxyType
from typing import Dict, FrozenSet, Iterable, List, Mapping, Optional, Sequence, Tuple

from sbcchem.models import SQUAD_SIZE, InvalidInput, Position, parse_position


logger = logging.getLogger(__name__)

Link = Tuple[int, int]


def asymmetric_links(adjacency: Mapping[int, Iterable[int]]) -> List[Link]:
    """Return ``(a, b)`` pairs where ``a`` lists ``b`` but ``b`` does not list ``a``."""

    pairs = []
    for slot, neighbours in adjacency.items():
        for neighbour in neighbours:
            if slot not in adjacency.get(neighbour, ()):
                pairs.append((slot, neighbour))
    return sorted(set(pairs))


def _check_slot(formation_id: str, slot: int) -> int:
    if isinstance(slot, bool) or not isinstance(slot, int) or not 0 <= slot < SQUAD_SIZE:
        raise InvalidInput(f"Formation {formation_id!r} references slot {slot!r}")
    return slot


@dataclass(frozen=True)
class Formation:
    formation_id: str
    positions: Tuple[Position, ...]
    adjacency: Mapping[int, FrozenSet[int]]

    @classmethod
    def from_adjacency(
        cls,
        formation_id: str,
        positions: Sequence[str | Position],
        adjacency: Mapping[int, Iterable[int]],
        *,
        symmetrize: bool = True,
    ) -> "Formation":
        """Build a formation from a per-slot neighbour table.

        One-way links are logged. They are mirrored unless ``symmetrize`` is
        false, which keeps an intentionally directed table as supplied.
        """

        layout = tuple(parse_position(code) for code in positions)
        if len(layout) != SQUAD_SIZE:
            raise InvalidInput(
                f"Formation {formation_id!r} needs {SQUAD_SIZE} positions, got {len(layout)}"
            )

        table: Dict[int, set[int]] = {index: set() for index in range(SQUAD_SIZE)}
        for slot, neighbours in adjacency.items():
            slot = _check_slot(formation_id, slot)
            for neighbour in neighbours:
                neighbour = _check_slot(formation_id, neighbour)
                if neighbour == slot:
                    raise InvalidInput(f"Formation {formation_id!r} links slot {slot} to itself")
                table[slot].add(neighbour)

        for slot, neighbour in asymmetric_links(table):
            logger.warning(
                "Formation %s links slot %d to %d but not back%s",
                formation_id,
                slot,
                neighbour,
                "; mirroring" if symmetrize else "",
            )
            if symmetrize:
                table[neighbour].add(slot)

        frozen = {slot: frozenset(neighbours) for slot, neighbours in table.items()}
        return cls(formation_id=formation_id, positions=layout, adjacency=MappingProxyType(frozen))

    @classmethod
    def from_links(
        cls,
        formation_id: str,
        positions: Sequence[str | Position],
        links: Iterable[Link],
    ) -> "Formation":
        """Build a formation from undirected slot pairs."""

        table: Dict[int, set[int]] = {}
        for first, second in links:
            table.setdefault(first, set()).add(second)
            table.setdefault(second, set()).add(first)
        return cls.from_adjacency(formation_id, positions, table)

    def neighbours(self, slot_index: int) -> FrozenSet[int]:
        return self.adjacency.get(slot_index, frozenset())

    def links(self) -> List[Link]:
        return sorted(
            (slot, neighbour)
            for slot, neighbours in self.adjacency.items()
            for neighbour in neighbours
            if slot < neighbour
        )

    def is_symmetric(self) -> bool:
        return not asymmetric_links(self.adjacency)


class FormationGraph:
    """Read-only registry of formations keyed by formation id."""

    def __init__(self, formations: Iterable[Formation] = ()) -> None:
        self._formations: Mapping[str, Formation] = MappingProxyType(
            {formation.formation_id: formation for formation in formations}
        )

    def __contains__(self, formation_id: object) -> bool:
        return formation_id in self._formations

    def __iter__(self):
        return iter(self._formations.values())

    def __len__(self) -> int:
        return len(self._formations)

    def formation_ids(self) -> List[str]:
        return sorted(self._formations)

    def get(self, formation_id: str) -> Optional[Formation]:
        return self._formations.get(formation_id)

    def adjacent(self, formation_id: str, slot_index: int) -> FrozenSet[int]:
        """Slots linked to ``slot_index``; empty for unknown formations or slots."""

        formation = self._formations.get(formation_id)
        if formation is None:
            return frozenset()
        return formation.neighbours(slot_index)

    def layout(self, formation_id: str) -> Optional[Tuple[Position, ...]]:
        formation = self._formations.get(formation_id)
        return formation.positions if formation is not None else None

    def register(self, formation: Formation) -> "FormationGraph":
        """Return a new graph that also contains ``formation``."""

        merged = dict(self._formations)
        merged[formation.formation_id] = formation
        return FormationGraph(merged.values())


_FORMATION_LINKS: Mapping[str, Tuple[Tuple[str, ...], Tuple[Link, ...]]] = {
    # First directed 4-3-3 table with its five one-way links mirrored.
    "4-3-3": (
        ("GK", "LB", "CB", "CB", "RB", "CDM", "LM", "CAM", "RM", "LW", "ST"),
        (
            (0, 1),
            (1, 2), (1, 3), (1, 4), (2, 3), (3, 4),
            (2, 5), (3, 5), (4, 6),
            (5, 6), (5, 7), (5, 8),
            (6, 9), (7, 8), (7, 9), (7, 10),
            (8, 9), (8, 10), (9, 10),
        ),
    ),
    "4-4-2": (
        ("GK", "LB", "CB", "CB", "RB", "LM", "CM", "CM", "RM", "ST", "ST"),
        (
            (0, 2), (0, 3),
            (1, 2), (2, 3), (3, 4),
            (1, 5), (2, 6), (3, 7), (4, 8),
            (5, 6), (6, 7), (7, 8),
            (5, 9), (6, 9), (7, 10), (8, 10),
            (9, 10),
        ),
    ),
    "4-2-3-1": (
        ("GK", "LB", "CB", "CB", "RB", "CDM", "CDM", "LM", "CAM", "RM", "ST"),
        (
            (0, 2), (0, 3),
            (1, 2), (2, 3), (3, 4),
            (1, 7), (2, 5), (3, 6), (4, 9),
            (5, 6), (5, 7), (6, 9), (5, 8), (6, 8),
            (7, 8), (8, 9),
            (7, 10), (8, 10), (9, 10),
        ),
    ),
    "3-5-2": (
        ("GK", "CB", "CB", "CB", "LM", "CDM", "CAM", "CDM", "RM", "ST", "ST"),
        (
            (0, 1), (0, 2), (0, 3),
            (1, 2), (2, 3),
            (1, 4), (1, 5), (2, 5), (2, 7), (3, 7), (3, 8),
            (4, 5), (5, 6), (6, 7), (7, 8),
            (4, 9), (6, 9), (6, 10), (8, 10),
            (9, 10),
        ),
    ),
}


DEFAULT_FORMATION_ID = "4-3-3"

DEFAULT_FORMATIONS = FormationGraph(
    Formation.from_links(formation_id, positions, links)
    for formation_id, (positions, links) in _FORMATION_LINKS.items()
)


def adjacent(
    formation_id: str,
    slot_index: int,
    graph: FormationGraph = DEFAULT_FORMATIONS,
) -> FrozenSet[int]:
    return graph.adjacent(formation_id, slot_index)
