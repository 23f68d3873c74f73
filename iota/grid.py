"""Sparse card grid with transactional placement validation."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, Iterable, Iterator, Protocol, Tuple, Union

from .cards import Card
from .line import Line, LineItem, line_cards
from .matching import CardDomain, deduce_match_type
from .position import ORIGIN, Position
from .rules import (
    DEFAULT_GRID_CONFIG,
    GridConfig,
    IllegalState,
    InvalidArgument,
    InvalidPlacement,
    PlacementRejection,
    score,
)

__all__ = ["Grid", "Axis", "PlacementProtocol", "PlacementItem", "HORIZONTAL", "VERTICAL"]

logger = logging.getLogger(__name__)

Step = Callable[[Position], Position]
Axis = Tuple[Step, Step]


class PlacementProtocol(Protocol):
    """Structural protocol for anything naming a card and its target position."""

    @property
    def card(self) -> Card:  # pragma: no cover - protocol only
        ...

    @property
    def position(self) -> Position:  # pragma: no cover - protocol only
        ...


PlacementItem = Union[PlacementProtocol, Tuple[Card, Position]]

# (towards the start of the line, towards its end)
HORIZONTAL: Axis = (Position.left_of, Position.right_of)
VERTICAL: Axis = (Position.above, Position.below)


def _require_card(card: object) -> Card:
    if not isinstance(card, Card):
        raise InvalidArgument(f"expected a Card, got {card!r}")
    return card


def _is_coordinate(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _require_position(position: object) -> Position:
    if isinstance(position, Position):
        return position
    if isinstance(position, tuple) and len(position) == 2 and all(_is_coordinate(v) for v in position):
        return Position(position[0], position[1])
    raise InvalidArgument(f"expected a Position, got {position!r}")


def _unpack_item(item: PlacementItem) -> tuple[Card, Position]:
    if isinstance(item, tuple):
        if len(item) != 2:
            raise InvalidArgument("placement items must be (card, position) pairs")
        return _require_card(item[0]), _require_position(item[1])
    return _require_card(item.card), _require_position(item.position)


@dataclass(slots=True)
class Grid:
    """Cards placed on an unbounded grid, keyed by position.

    The grid only changes through :meth:`start`, :meth:`place` and
    :meth:`place_sequence`, and a card is committed only after the whole
    placement has been validated. A rejected placement leaves the grid as it
    was.
    """

    config: GridConfig = DEFAULT_GRID_CONFIG
    domain: CardDomain = field(default_factory=CardDomain.standard)
    _cells: dict[Position, Card] = field(init=False, default_factory=dict, repr=False)

    # Read-only view

    def __len__(self) -> int:
        return len(self._cells)

    def __contains__(self, position: object) -> bool:
        return position in self._cells

    def __iter__(self) -> Iterator[Position]:
        return iter(self._cells)

    @property
    def is_empty(self) -> bool:
        return not self._cells

    def card_at(self, position: Position) -> Card | None:
        return self._cells.get(position)

    def positions(self) -> list[Position]:
        return sorted(self._cells)

    def items(self) -> list[tuple[Position, Card]]:
        return sorted(self._cells.items())

    def bounds(self) -> tuple[Position, Position] | None:
        """Return the (top-left, bottom-right) corners of the occupied area."""

        if not self._cells:
            return None
        rows = [position.row for position in self._cells]
        cols = [position.col for position in self._cells]
        return Position(min(rows), min(cols)), Position(max(rows), max(cols))

    def copy(self) -> "Grid":
        """Return an independent grid holding the same cards."""

        clone = Grid(config=self.config, domain=self.domain)
        clone._cells.update(self._cells)
        return clone

    # Commands

    def start(self, card: Card) -> None:
        """Place the opening card at the origin."""

        card = _require_card(card)
        if self._cells:
            raise IllegalState("the grid has already been started")
        self._cells[ORIGIN] = card
        logger.debug("started grid with %s", card)

    def check(self, card: Card, position: Position) -> PlacementRejection | None:
        """Return why ``card`` may not go to ``position``, or ``None`` if it may."""

        effect = _PlacementEffect.build(self, _require_card(card), _require_position(position))
        return effect.rejection

    def is_placement_allowed(self, card: Card, position: Position) -> bool:
        return self.check(card, position) is None

    def preview(self, card: Card, position: Position) -> list[Card]:
        """Return the scoring cards ``place`` would return, without committing."""

        effect = self._validated_effect(card, position)
        return effect.scoring_cards()

    def place(self, card: Card, position: Position) -> list[Card]:
        """Validate and commit a placement, returning its scoring cards.

        The horizontal line comes first, then the vertical one; a line only
        scores when it holds more than one card.
        """

        effect = self._validated_effect(card, position)
        self._cells[effect.position] = effect.card
        logger.debug("placed %s at %s", effect.card, effect.position)
        return effect.scoring_cards()

    def place_sequence(self, items: Iterable[PlacementItem]) -> int:
        """Place every item in order and return the points earned.

        Either every placement is committed or none is: on the first invalid
        placement the grid is restored and the error propagates.
        """

        pairs = [_unpack_item(item) for item in items]
        if not pairs:
            raise ValueError("placement sequence must not be empty")
        snapshot = dict(self._cells)
        scoring_cards: list[Card] = []
        try:
            for card, position in pairs:
                scoring_cards.extend(self.place(card, position))
        except InvalidPlacement:
            self._cells.clear()
            self._cells.update(snapshot)
            logger.debug("rolled back sequence of %d placement(s)", len(pairs))
            raise
        return score(scoring_cards)

    # Line construction

    def line_through(self, card: Card, position: Position, axis: Axis) -> Line | None:
        """Return the line along ``axis`` with ``card`` at ``position``.

        ``None`` means the line would be too long or its cards match neither
        discipline.
        """

        line, _ = self._line_through(card, position, axis)
        return line

    def _scan(self, start: Position, step: Step, limit: int) -> list[LineItem]:
        items: list[LineItem] = []
        position = step(start)
        while position in self._cells and len(items) < limit:
            items.append(LineItem(self._cells[position], position))
            position = step(position)
        return items

    def _line_through(
        self, card: Card, position: Position, axis: Axis
    ) -> tuple[Line | None, PlacementRejection | None]:
        backward, forward = axis
        max_length = self.config.max_line_length
        before = self._scan(position, backward, max_length)
        after = self._scan(position, forward, max_length)
        if not before and not after:
            return Line.single_card(card, position), None
        if len(before) + 1 + len(after) > max_length:
            return None, PlacementRejection.LINE_TOO_LONG
        items = tuple(reversed(before)) + (LineItem(card, position),) + tuple(after)
        match_type = deduce_match_type([item.card for item in items], max_length)
        if match_type is None:
            return None, PlacementRejection.CONFLICTING_MATCH
        return Line(items, match_type), None

    def _validated_effect(self, card: Card, position: Position) -> "_PlacementEffect":
        effect = _PlacementEffect.build(self, _require_card(card), _require_position(position))
        if effect.rejection is not None:
            logger.debug("rejected %s at %s: %s", effect.card, effect.position, effect.rejection.describe())
            raise InvalidPlacement(effect.card, effect.position, effect.rejection)
        return effect


@dataclass(slots=True)
class _PlacementEffect:
    """Lines a prospective placement would form and whether they are valid."""

    card: Card
    position: Position
    horizontal: Line | None
    vertical: Line | None
    rejection: PlacementRejection | None

    @classmethod
    def build(cls, grid: Grid, card: Card, position: Position) -> "_PlacementEffect":
        if grid.is_empty:
            # The opening card always sits at the origin.
            single = Line.single_card(card, position)
            rejection = None if position == ORIGIN else PlacementRejection.NOT_AT_ORIGIN
            return cls(card, position, single, single, rejection)
        if position in grid:
            return cls(card, position, None, None, PlacementRejection.OCCUPIED)

        horizontal, rejection = grid._line_through(card, position, HORIZONTAL)
        if horizontal is None:
            return cls(card, position, None, None, rejection)
        vertical, rejection = grid._line_through(card, position, VERTICAL)
        if vertical is None:
            return cls(card, position, horizontal, None, rejection)
        if not horizontal.is_scoring and not vertical.is_scoring:
            return cls(card, position, horizontal, vertical, PlacementRejection.DISCONNECTED)

        effect = cls(card, position, horizontal, vertical, None)
        if not (
            effect._wildcards_consistent(grid, horizontal, VERTICAL)
            and effect._wildcards_consistent(grid, vertical, HORIZONTAL)
        ):
            effect.rejection = PlacementRejection.WILDCARD_CONFLICT
        return effect

    def _wildcards_consistent(self, grid: Grid, line: Line, crossing_axis: Axis) -> bool:
        # Each wildcard in ``line`` must be able to stand for one card that
        # also fits the line crossing it.
        exclude_present = grid.config.exclude_present_candidates
        line_candidates: int | None = None
        for item in line.wildcard_items():
            crossing, _ = grid._line_through(item.card, item.position, crossing_axis)
            if crossing is None:
                return False
            if not crossing.is_scoring:
                continue
            if line_candidates is None:
                line_candidates = line.candidates_for_next_card(grid.domain, exclude_present=exclude_present)
            crossing_candidates = crossing.candidates_for_next_card(grid.domain, exclude_present=exclude_present)
            if not line_candidates & crossing_candidates:
                return False
        return True

    def scoring_cards(self) -> list[Card]:
        if self.rejection is not None or self.horizontal is None or self.vertical is None:
            raise IllegalState("scoring cards requested for an invalid placement")
        return line_cards([self.horizontal, self.vertical])
