import logging
import random

import pytest

from sbcchem.chemistry import ChemistryEngine
from sbcchem.models import Player, Requirements, Squad
from sbcchem.validation import RequirementValidator, validate


def _player(pid: str, position: str = "CB", *, rating: int = 80, club=None, nation=None, league=None, rarity="common") -> Player:
    return Player(
        id=pid,
        rating=rating,
        position=position,
        club=club,
        nation=nation,
        league=league,
        rarity=rarity,
    )


def _squad(players, formation: str = "4-3-3") -> Squad:
    return Squad.from_formation(formation, players)


def test_empty_requirements_are_always_met():
    rng = random.Random(7)
    for round_index in range(50):
        players = [
            None if rng.random() < 0.3 else _player(f"p{round_index}-{slot}", rating=rng.randint(0, 99), club=rng.choice(["A", "B"]))
            for slot in range(11)
        ]
        result = validate(_squad(players), Requirements())
        assert result.valid is True
        assert result.issues == []


def test_club_cap_reports_count_and_limit():
    players = [
        _player("a", club="ACME", nation="N1", league="L1"),
        _player("b", club="ACME", nation="N2", league="L2"),
        _player("c", club="ACME", nation="N3", league="L3"),
    ]
    result = validate(_squad(players), Requirements(max_players_from_same_club=2))

    assert result.valid is False
    assert result.issues == ["Too many players from same club: 3 (max 2)"]


def test_empty_squad_fails_rating_and_chemistry():
    squad = _squad([])
    result = validate(squad, Requirements(min_rating=50, min_chemistry=1))

    assert result.valid is False
    assert result.issues == [
        "Team rating 0 is below minimum 50",
        "Team chemistry 0 is below minimum 1",
    ]


def test_every_failure_is_reported_in_order():
    players = [_player(f"p{index}", rating=60, club="C", nation="N", league="L") for index in range(3)]
    requirements = Requirements(
        min_rating=70,
        min_chemistry=30,
        max_players_from_same_league=1,
        max_players_from_same_club=1,
        max_players_from_same_nation=1,
        min_gold_players=1,
        min_silver_players=1,
        min_bronze_players=5,
        min_rare_players=1,
    )
    result = validate(_squad(players), requirements)

    assert result.valid is False
    assert result.issues == [
        "Team rating 60 is below minimum 70",
        "Team chemistry 5 is below minimum 30",
        "Too many players from same league: 3 (max 1)",
        "Too many players from same club: 3 (max 1)",
        "Too many players from same nation: 3 (max 1)",
        "Gold players 0 is below minimum 1",
        "Silver players 0 is below minimum 1",
        "Bronze players 3 is below minimum 5",
        "Rare players 0 is below minimum 1",
    ]


def test_null_groups_do_not_count_towards_caps():
    players = [_player(f"p{index}") for index in range(5)]
    result = validate(
        _squad(players),
        Requirements(max_players_from_same_league=1, max_players_from_same_club=1, max_players_from_same_nation=1),
    )
    assert result.valid is True


def test_passing_squad():
    players = [
        _player("gk", "GK", rating=84, club="C1", nation="N", league="L", rarity="rare"),
        _player("lb", "LB", rating=82, club="C2", nation="N", league="L"),
        _player("cb", "CB", rating=70, club="C3", nation="N", league="L"),
    ]
    requirements = Requirements.model_validate(
        {
            "minRating": 78,
            "minChemistry": 3,
            "maxPlayersFromSameClub": 1,
            "minGoldPlayers": 2,
            "minSilverPlayers": 1,
            "minRarePlayers": 1,
            "exactLeague": None,
        }
    )
    result = validate(_squad(players), requirements)

    assert result.issues == []
    assert result.valid is True


def test_special_cards_count_as_rare():
    players = [_player("a", rarity="special"), _player("b", rarity="rare"), _player("c")]
    assert validate(_squad(players), Requirements(min_rare_players=2)).valid
    assert not validate(_squad(players), Requirements(min_rare_players=3)).valid


def test_chemistry_uses_required_formation():
    # Slots 0 and 2 are linked in 3-5-2 but not in 4-3-3.
    squad = _squad(
        [_player("gk", "GK", club="C", nation="N"), None, _player("cb", "CB", club="C", nation="N")],
        formation="3-5-2",
    )

    assert ChemistryEngine().team_chemistry(squad) == 4
    assert validate(squad, Requirements(min_chemistry=4, formation="3-5-2")).valid
    assert validate(squad, Requirements(min_chemistry=1)).issues == [
        "Team chemistry 0 is below minimum 1",
    ]


def test_unknown_required_formation_is_logged(caplog):
    players = [_player("a", "GK", club="C", nation="N"), None, _player("b", "CB", club="C", nation="N")]
    with caplog.at_level(logging.WARNING, logger="sbcchem.validation.requirements"):
        result = validate(_squad(players), Requirements(min_chemistry=1, formation="9-9-9"))

    assert result.issues == ["Team chemistry 0 is below minimum 1"]
    assert "9-9-9" in caplog.text


def test_default_formation_from_environment(monkeypatch):
    monkeypatch.setenv("SBCCHEM_DEFAULT_FORMATION", "4-4-2")
    assert RequirementValidator().default_formation == "4-4-2"

    monkeypatch.setenv("SBCCHEM_DEFAULT_FORMATION", "1-1-1")
    assert RequirementValidator().default_formation == "4-3-3"


@pytest.mark.parametrize(("count", "expected"), [(0, 11), (4, 7), (11, 0)])
def test_missing_players(count, expected):
    squad = _squad([_player(f"p{index}") for index in range(count)])
    assert RequirementValidator().missing_players(squad, Requirements()) == expected


def test_missing_players_uses_requested_count():
    squad = _squad([_player("a"), _player("b")])
    requirements = Requirements(numberOfPlayers=1)
    assert RequirementValidator().missing_players(squad, requirements) == 0
