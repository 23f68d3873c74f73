"""Legal placement generation for an orchestration layer."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from .cards import Card
from .grid import Grid
from .position import ORIGIN, Position
from .rules import score


@dataclass(frozen=True, slots=True)
class PlacementAction:
    """Action describing a card and the position it goes to."""

    card: Card
    position: Position


def frontier(grid: Grid) -> list[Position]:
    """Return the empty positions orthogonally adjacent to a placed card."""

    if grid.is_empty:
        return [ORIGIN]
    open_positions: set[Position] = set()
    for position in grid:
        for neighbor in position.neighbors():
            if neighbor not in grid:
                open_positions.add(neighbor)
    return sorted(open_positions)


def legal_placements(grid: Grid, card: Card) -> list[PlacementAction]:
    """Return every position ``card`` may currently be placed at."""

    return [
        PlacementAction(card=card, position=position)
        for position in frontier(grid)
        if grid.is_placement_allowed(card, position)
    ]


def legal_actions(grid: Grid, hand: Iterable[Card]) -> list[PlacementAction]:
    """Return the legal single placements for every distinct card in ``hand``."""

    seen: set[Card] = set()
    actions: list[PlacementAction] = []
    for card in hand:
        if card in seen:
            continue
        seen.add(card)
        actions.extend(legal_placements(grid, card))
    return actions


def best_single_placement(grid: Grid, hand: Iterable[Card]) -> tuple[PlacementAction, int] | None:
    """Return the highest scoring single placement from ``hand``.

    Ties keep the first action found, so the result is deterministic for a
    given hand order.
    """

    best: tuple[PlacementAction, int] | None = None
    for action in legal_actions(grid, hand):
        points = score(grid.preview(action.card, action.position))
        if best is None or points > best[1]:
            best = (action, points)
    return best
