"""Grid coordinates."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final


@dataclass(frozen=True, slots=True, order=True)
class Position:
    """Row/column coordinate on the unbounded grid."""

    row: int
    col: int

    def right_of(self) -> "Position":
        return Position(self.row, self.col + 1)

    def left_of(self) -> "Position":
        return Position(self.row, self.col - 1)

    def below(self) -> "Position":
        return Position(self.row + 1, self.col)

    def above(self) -> "Position":
        return Position(self.row - 1, self.col)

    def neighbors(self) -> tuple["Position", "Position", "Position", "Position"]:
        """Return the four orthogonal neighbors: left, right, above, below."""

        return (self.left_of(), self.right_of(), self.above(), self.below())

    def __str__(self) -> str:
        return f"({self.row}, {self.col})"


ORIGIN: Final[Position] = Position(0, 0)
