from __future__ import annotations

import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from iota.cards import Card
from iota.cli.main import app
from iota.cli.replay import ReplayFormatError, parse_replay, run_replay
from iota.position import Position
from iota.rules import InvalidPlacement

runner = CliRunner()


def _write_replay(tmp_path: Path, turns: list[list[dict[str, object]]]) -> Path:
    path = tmp_path / "replay.json"
    path.write_text(json.dumps({"turns": turns}), encoding="utf-8")
    return path


def _placement(card: str, row: int, col: int) -> dict[str, object]:
    return {"card": card, "row": row, "col": col}


VALID_TURNS = [
    [_placement("RC1", 0, 0)],
    [_placement("RS2", 0, 1), _placement("RT3", 0, 2)],
]


def test_parse_replay_builds_actions() -> None:
    turns = parse_replay({"turns": VALID_TURNS})
    assert [len(turn) for turn in turns] == [1, 2]
    assert turns[1][1].card == Card.from_code("RT3")
    assert turns[1][1].position == Position(0, 2)


@pytest.mark.parametrize(
    "document",
    [
        [],
        {"turns": "RC1"},
        {"turns": [[]]},
        {"turns": [["RC1"]]},
        {"turns": [[{"card": "RC1", "row": 0}]]},
        {"turns": [[{"card": "ZZ9", "row": 0, "col": 0}]]},
        {"turns": [[{"card": "RC1", "row": "0", "col": 0}]]},
        {"turns": [[{"card": "RC1", "row": True, "col": 0}]]},
    ],
)
def test_parse_replay_rejects_malformed_documents(document: object) -> None:
    with pytest.raises(ReplayFormatError):
        parse_replay(document)


def test_run_replay_scores_each_turn() -> None:
    result = run_replay(parse_replay({"turns": VALID_TURNS}))
    assert result.scores == [0, 9]
    assert result.total == 9
    assert len(result.grid) == 3


def test_run_replay_propagates_rejections() -> None:
    turns = parse_replay({"turns": [[_placement("RC1", 0, 0)], [_placement("GS2", 2, 2)]]})
    with pytest.raises(InvalidPlacement):
        run_replay(turns)


def test_replay_command_prints_scores(tmp_path: Path) -> None:
    result = runner.invoke(app, ["replay", str(_write_replay(tmp_path, VALID_TURNS))])
    assert result.exit_code == 0
    assert "Turn Scores" in result.output
    assert "9" in result.output


def test_replay_command_reports_rejections(tmp_path: Path) -> None:
    turns = VALID_TURNS + [[_placement("BS3", 0, 3)]]
    result = runner.invoke(app, ["replay", str(_write_replay(tmp_path, turns))])
    assert result.exit_code == 1
    assert "Rejected" in result.output


def test_replay_command_rejects_malformed_file(tmp_path: Path) -> None:
    path = tmp_path / "broken.json"
    path.write_text("{not json", encoding="utf-8")
    result = runner.invoke(app, ["replay", str(path)])
    assert result.exit_code == 2


def test_replay_command_rejects_undecodable_file(tmp_path: Path) -> None:
    path = tmp_path / "binary.json"
    path.write_bytes(b"\xff\xfe{")
    result = runner.invoke(app, ["replay", str(path)])
    assert result.exit_code == 2
    assert not isinstance(result.exception, UnicodeDecodeError)


def test_check_command(tmp_path: Path) -> None:
    path = _write_replay(tmp_path, VALID_TURNS)
    allowed = runner.invoke(app, ["check", str(path), "RX4", "0", "3"])
    assert allowed.exit_code == 0
    assert "fits" in allowed.output

    refused = runner.invoke(app, ["check", str(path), "BS3", "0", "3"])
    assert refused.exit_code == 1
    assert "cannot go" in refused.output
    assert "blue square 3" in refused.output


def test_hints_command(tmp_path: Path) -> None:
    path = _write_replay(tmp_path, VALID_TURNS)
    result = runner.invoke(app, ["hints", str(path), "RX4", "GC2"])
    assert result.exit_code == 0
    assert "Legal Placements" in result.output
    assert "Best" in result.output
