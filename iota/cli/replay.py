"""Loading and applying JSON placement scripts."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Sequence

from ..actions import PlacementAction
from ..cards import Card
from ..grid import Grid
from ..position import Position
from ..rules import DEFAULT_GRID_CONFIG, GridConfig

logger = logging.getLogger(__name__)


class ReplayFormatError(ValueError):
    """Raised when a replay document does not follow the expected layout."""


@dataclass(slots=True)
class ReplayResult:
    """Grid after a replay together with the points of each turn."""

    grid: Grid
    scores: list[int] = field(default_factory=list)

    @property
    def total(self) -> int:
        return sum(self.scores)


def _parse_placement(raw: Any, turn_number: int) -> PlacementAction:
    if not isinstance(raw, dict):
        raise ReplayFormatError(f"turn {turn_number}: placements must be objects")
    try:
        card = Card.from_code(str(raw["card"]))
        row = raw["row"]
        col = raw["col"]
    except KeyError as exc:
        raise ReplayFormatError(f"turn {turn_number}: missing field {exc.args[0]!r}") from exc
    except ValueError as exc:
        raise ReplayFormatError(f"turn {turn_number}: {exc}") from exc
    if not all(isinstance(v, int) and not isinstance(v, bool) for v in (row, col)):
        raise ReplayFormatError(f"turn {turn_number}: row and col must be integers")
    return PlacementAction(card=card, position=Position(row, col))


def parse_replay(document: Any) -> list[list[PlacementAction]]:
    """Convert a decoded replay document into per-turn placement lists."""

    if not isinstance(document, dict) or not isinstance(document.get("turns"), list):
        raise ReplayFormatError("replay must be an object with a 'turns' list")
    turns: list[list[PlacementAction]] = []
    for turn_number, raw_turn in enumerate(document["turns"], start=1):
        if not isinstance(raw_turn, list) or not raw_turn:
            raise ReplayFormatError(f"turn {turn_number}: expected a non-empty list of placements")
        turns.append([_parse_placement(raw, turn_number) for raw in raw_turn])
    return turns


def load_replay(path: Path) -> list[list[PlacementAction]]:
    """Read and parse the replay stored at ``path``."""

    try:
        document = json.loads(path.read_text(encoding="utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise ReplayFormatError(f"{path}: {exc}") from exc
    return parse_replay(document)


def run_replay(
    turns: Sequence[Sequence[PlacementAction]],
    config: GridConfig = DEFAULT_GRID_CONFIG,
) -> ReplayResult:
    """Apply ``turns`` to a fresh grid, one atomic sequence per turn."""

    result = ReplayResult(grid=Grid(config=config))
    for turn_number, turn in enumerate(turns, start=1):
        points = result.grid.place_sequence(turn)
        logger.debug("turn %d scored %d point(s)", turn_number, points)
        result.scores.append(points)
    return result
