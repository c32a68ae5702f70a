import json
from pathlib import Path

from sbcchem.cli import EXIT_BAD_INPUT, EXIT_INVALID, EXIT_VALID, main


def _squad_file(tmp_path: Path, **overrides) -> Path:
    payload = {
        "formation": "4-3-3",
        "players": [
            {"id": "gk", "name": "Keeper", "rating": 80, "position": "GK", "club": "C", "nation": "N"},
            {"id": "lb", "name": "Fullback", "rating": 82, "position": "LB", "club": "C", "nation": "N"},
        ],
        "requirements": {"minRating": 75},
    }
    payload.update(overrides)
    path = tmp_path / "squad.json"
    path.write_text(json.dumps(payload), encoding="utf-8")
    return path


def test_cli_text_report(tmp_path: Path, capsys):
    code = main([str(_squad_file(tmp_path))])
    out = capsys.readouterr().out

    assert code == EXIT_VALID
    assert "Formation 4-3-3" in out
    assert "Keeper (GK, 80)" in out
    assert "Team chemistry 4/33, rating 81" in out
    assert "Players still needed: 9" in out
    assert "All requirements met" in out


def test_cli_json_report_with_failures(tmp_path: Path, capsys):
    squad = _squad_file(tmp_path, requirements={"minRating": 85, "maxPlayersFromSameClub": 1})
    code = main([str(squad), "--json"])
    report = json.loads(capsys.readouterr().out)

    assert code == EXIT_INVALID
    assert report["valid"] is False
    assert report["per_slot"][:3] == [2, 2, 0]
    assert report["issues"] == [
        "Team rating 81 is below minimum 85",
        "Too many players from same club: 2 (max 1)",
    ]


def test_cli_requirements_file_overrides_embedded(tmp_path: Path, capsys):
    requirements = tmp_path / "requirements.json"
    requirements.write_text(json.dumps({"minChemistry": 10}), encoding="utf-8")

    code = main([str(_squad_file(tmp_path)), "--requirements", str(requirements), "--json"])
    report = json.loads(capsys.readouterr().out)

    assert code == EXIT_INVALID
    assert report["issues"] == ["Team chemistry 4 is below minimum 10"]


def test_cli_formation_override(tmp_path: Path, capsys):
    code = main([str(_squad_file(tmp_path)), "--formation", "4-4-2", "--json"])
    report = json.loads(capsys.readouterr().out)

    assert code == EXIT_VALID
    assert report["formation"] == "4-4-2"


def test_cli_validates_on_the_squad_formation(tmp_path: Path, capsys):
    # GK and CB link in 3-5-2 only
    squad = _squad_file(
        tmp_path,
        formation="3-5-2",
        players=[
            {"id": "gk", "rating": 80, "position": "GK", "club": "C", "nation": "N"},
            None,
            {"id": "cb", "rating": 82, "position": "CB", "club": "C", "nation": "N"},
        ],
        requirements={"minChemistry": 2},
    )
    code = main([str(squad), "--json"])
    report = json.loads(capsys.readouterr().out)

    assert code == EXIT_VALID
    assert report["chemistry"] == 4
    assert report["issues"] == []


def test_cli_rejects_malformed_rules(tmp_path: Path, capsys):
    rules = tmp_path / "rules.json"
    rules.write_text(json.dumps({"formations": [{"positions": ["GK"] * 11}]}), encoding="utf-8")

    assert main([str(_squad_file(tmp_path)), "--rules", str(rules)]) == EXIT_BAD_INPUT
    assert "error:" in capsys.readouterr().err


def test_cli_bad_input(tmp_path: Path, capsys):
    bad_position = _squad_file(tmp_path, players=[{"id": "x", "rating": 70, "position": "SW"}])
    assert main([str(bad_position)]) == EXIT_BAD_INPUT
    assert "error:" in capsys.readouterr().err

    assert main([str(tmp_path / "missing.json")]) == EXIT_BAD_INPUT

    broken = tmp_path / "broken.json"
    broken.write_text("{", encoding="utf-8")
    assert main([str(broken)]) == EXIT_BAD_INPUT
