"""Squad containers: eleven ordered formation slots and their occupants."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import TYPE_CHECKING, Iterable, Iterator, Optional, Sequence, Tuple, Union

from .errors import InvalidInput
from .player import Player, Position, parse_position

if TYPE_CHECKING:
    from sbcchem.config.formations import FormationGraph


SQUAD_SIZE = 11


@dataclass(frozen=True)
class FormationSlot:
    index: int
    required_position: Position
    occupant: Optional[Player] = None

    def __post_init__(self) -> None:
        if not 0 <= self.index < SQUAD_SIZE:
            raise InvalidInput(f"Slot index {self.index} outside 0-{SQUAD_SIZE - 1}")
        object.__setattr__(self, "required_position", parse_position(self.required_position))


@dataclass(frozen=True)
class Squad:
    """Exactly eleven slots laid out for one formation."""

    formation_id: str
    slots: Tuple[FormationSlot, ...]

    def __post_init__(self) -> None:
        slots = tuple(self.slots)
        if len(slots) != SQUAD_SIZE:
            raise InvalidInput(f"Squad must have {SQUAD_SIZE} slots, got {len(slots)}")
        for position, slot in enumerate(slots):
            if slot.index != position:
                raise InvalidInput(f"Slot at position {position} has index {slot.index}")
        object.__setattr__(self, "slots", slots)

    @classmethod
    def from_formation(
        cls,
        formation_id: str,
        players: Sequence[Optional[Player]] = (),
        *,
        graph: "FormationGraph | None" = None,
    ) -> "Squad":
        """Build a squad using the formation's default slot positions."""

        if graph is None:
            from sbcchem.config.formations import DEFAULT_FORMATIONS

            graph = DEFAULT_FORMATIONS

        layout = graph.layout(formation_id)
        if layout is None:
            raise InvalidInput(f"No slot layout registered for formation {formation_id!r}")
        if len(players) > SQUAD_SIZE:
            raise InvalidInput(f"Squad holds at most {SQUAD_SIZE} players, got {len(players)}")

        padded = list(players) + [None] * (SQUAD_SIZE - len(players))
        slots = tuple(
            FormationSlot(index=index, required_position=position, occupant=occupant)
            for index, (position, occupant) in enumerate(zip(layout, padded))
        )
        return cls(formation_id=formation_id, slots=slots)

    @classmethod
    def from_positions(
        cls,
        formation_id: str,
        positions: Iterable[Union[str, Position]],
        players: Sequence[Optional[Player]] = (),
    ) -> "Squad":
        position_list = list(positions)
        if len(players) > len(position_list):
            raise InvalidInput(f"{len(players)} players for {len(position_list)} slots")
        padded = list(players) + [None] * max(0, len(position_list) - len(players))
        slots = tuple(
            FormationSlot(index=index, required_position=position, occupant=occupant)
            for index, (position, occupant) in enumerate(zip(position_list, padded))
        )
        return cls(formation_id=formation_id, slots=slots)

    def __len__(self) -> int:
        return len(self.slots)

    def __iter__(self) -> Iterator[FormationSlot]:
        return iter(self.slots)

    def __getitem__(self, index: int) -> FormationSlot:
        return self.slots[index]

    def occupants(self) -> list[Player]:
        return [slot.occupant for slot in self.slots if slot.occupant is not None]

    def occupied_indices(self) -> list[int]:
        return [slot.index for slot in self.slots if slot.occupant is not None]

    def with_occupant(self, index: int, player: Optional[Player]) -> "Squad":
        if not 0 <= index < SQUAD_SIZE:
            raise InvalidInput(f"Slot index {index} outside 0-{SQUAD_SIZE - 1}")
        slots = list(self.slots)
        slots[index] = replace(slots[index], occupant=player)
        return replace(self, slots=tuple(slots))

    def with_formation(self, formation_id: str) -> "Squad":
        return replace(self, formation_id=formation_id)
