import logging

import pytest

from sbcchem.config import DEFAULT_FORMATIONS, Formation, FormationGraph, adjacent, asymmetric_links
from sbcchem.models import InvalidInput, Position


LEGACY_POSITIONS = ("GK", "LB", "CB", "CB", "RB", "CDM", "LM", "CAM", "RM", "LW", "ST")

# Directed 4-3-3 table as it was first written; several links only go one way.
LEGACY_ADJACENCY = {
    0: [1],
    1: [0, 2, 3, 4],
    2: [1, 3, 5],
    3: [2, 4, 5],
    4: [3, 1, 6],
    5: [2, 3, 7, 8],
    6: [4, 5, 9],
    7: [5, 8, 10],
    8: [5, 7, 9],
    9: [6, 7, 10],
    10: [7, 9, 8],
}


@pytest.mark.parametrize("formation_id", ["4-3-3", "4-4-2", "4-2-3-1", "3-5-2"])
def test_shipped_formations_are_symmetric(formation_id):
    formation = DEFAULT_FORMATIONS.get(formation_id)

    assert formation is not None
    assert len(formation.positions) == 11
    assert formation.positions[0] is Position.GK
    assert formation.is_symmetric()
    for slot in range(11):
        assert formation.neighbours(slot), f"slot {slot} has no links"


def test_adjacent_lookup():
    assert adjacent("4-3-3", 0) == frozenset({1})
    assert adjacent("4-3-3", 9) == frozenset({6, 7, 8, 10})


def test_unknown_formation_or_slot_has_no_links():
    assert adjacent("5-4-1", 3) == frozenset()
    assert adjacent("4-3-3", 11) == frozenset()
    assert adjacent("4-3-3", -1) == frozenset()


def test_asymmetric_links_lists_one_way_pairs():
    assert asymmetric_links(LEGACY_ADJACENCY) == [(1, 3), (6, 5), (8, 9), (9, 7), (10, 8)]


def test_one_way_links_are_logged_and_mirrored(caplog):
    with caplog.at_level(logging.WARNING, logger="sbcchem.config.formations"):
        formation = Formation.from_adjacency("legacy", LEGACY_POSITIONS, LEGACY_ADJACENCY)

    assert len(caplog.records) == 5
    assert formation.is_symmetric()
    assert 1 in formation.neighbours(3)
    assert 9 in formation.neighbours(8)


def test_directed_table_can_be_kept(caplog):
    with caplog.at_level(logging.WARNING, logger="sbcchem.config.formations"):
        formation = Formation.from_adjacency(
            "legacy", LEGACY_POSITIONS, LEGACY_ADJACENCY, symmetrize=False
        )

    assert len(caplog.records) == 5
    assert not formation.is_symmetric()
    assert 3 in formation.neighbours(1)
    assert 1 not in formation.neighbours(3)


def test_shipped_433_is_the_mirrored_directed_table():
    mirrored = Formation.from_adjacency("4-3-3", LEGACY_POSITIONS, LEGACY_ADJACENCY)
    shipped = DEFAULT_FORMATIONS.get("4-3-3")

    assert shipped.positions == mirrored.positions
    assert dict(shipped.adjacency) == dict(mirrored.adjacency)


@pytest.mark.parametrize(
    "adjacency",
    [{0: [0]}, {0: [11]}, {12: [1]}, {0: ["1"]}],
)
def test_malformed_tables_raise(adjacency):
    with pytest.raises(InvalidInput):
        Formation.from_adjacency("bad", LEGACY_POSITIONS, adjacency)


def test_layout_must_have_eleven_positions():
    with pytest.raises(InvalidInput):
        Formation.from_links("short", LEGACY_POSITIONS[:10], [(0, 1)])


def test_register_returns_new_graph():
    extra = Formation.from_adjacency("legacy", LEGACY_POSITIONS, LEGACY_ADJACENCY)
    graph = DEFAULT_FORMATIONS.register(extra)

    assert "legacy" in graph
    assert "legacy" not in DEFAULT_FORMATIONS
    assert graph.formation_ids() == ["3-5-2", "4-2-3-1", "4-3-3", "4-4-2", "legacy"]
    assert graph.layout("legacy")[5] is Position.CDM
    assert FormationGraph().layout("4-3-3") is None
