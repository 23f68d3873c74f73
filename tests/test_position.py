from __future__ import annotations

from iota.position import ORIGIN, Position


def test_neighbor_functions() -> None:
    position = Position(2, -3)
    assert position.right_of() == Position(2, -2)
    assert position.left_of() == Position(2, -4)
    assert position.below() == Position(3, -3)
    assert position.above() == Position(1, -3)
    assert set(position.neighbors()) == {
        Position(2, -2),
        Position(2, -4),
        Position(3, -3),
        Position(1, -3),
    }


def test_positions_hash_by_coordinates() -> None:
    assert Position(0, 0) == ORIGIN
    assert {Position(1, 2): "x"}[Position(1, 2)] == "x"
    assert sorted([Position(1, 0), Position(0, 5), Position(0, -1)]) == [
        Position(0, -1),
        Position(0, 5),
        Position(1, 0),
    ]
