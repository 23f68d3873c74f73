"""Rule constants, configuration, and error types for the Iota grid."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Final, Iterable

from .cards import total_face_value

if TYPE_CHECKING:
    from .cards import Card
    from .position import Position

__all__ = [
    "MAX_LINE_LENGTH",
    "GridConfig",
    "DEFAULT_GRID_CONFIG",
    "PlacementRejection",
    "IllegalState",
    "InvalidArgument",
    "InvalidPlacement",
    "score",
]

MAX_LINE_LENGTH: Final[int] = 4


@dataclass(frozen=True, slots=True)
class GridConfig:
    """Runtime configuration for a single grid."""

    max_line_length: int = MAX_LINE_LENGTH
    exclude_present_candidates: bool = True

    def __post_init__(self) -> None:
        if not 2 <= self.max_line_length <= MAX_LINE_LENGTH:
            raise ValueError(f"max_line_length must be between 2 and {MAX_LINE_LENGTH}")


DEFAULT_GRID_CONFIG: Final[GridConfig] = GridConfig()


class PlacementRejection(str, Enum):
    """Reasons a placement can be refused."""

    OCCUPIED = "occupied"
    NOT_AT_ORIGIN = "not_at_origin"
    LINE_TOO_LONG = "line_too_long"
    CONFLICTING_MATCH = "conflicting_match"
    DISCONNECTED = "disconnected"
    WILDCARD_CONFLICT = "wildcard_conflict"

    def describe(self) -> str:
        return self.value.replace("_", " ")


class IllegalState(RuntimeError):
    """Raised when an operation is attempted on a grid in the wrong state."""


class InvalidArgument(TypeError):
    """Raised when a card or position argument is missing or of the wrong type."""


class InvalidPlacement(ValueError):
    """Raised when a card cannot be placed at the requested position."""

    def __init__(self, card: "Card", position: "Position", reason: PlacementRejection) -> None:
        super().__init__(f"cannot place {card} at {position}: {reason.describe()}")
        self.card = card
        self.position = position
        self.reason = reason


def score(scoring_cards: Iterable["Card"]) -> int:
    """Return the points earned for the scoring cards of one or more placements."""

    return total_face_value(scoring_cards)
