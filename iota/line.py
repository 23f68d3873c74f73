"""Lines of cards along a single grid axis."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from .cards import Card
from .matching import CardDomain, MatchType
from .position import Position


@dataclass(frozen=True, slots=True)
class LineItem:
    """A card together with the position it occupies (or would occupy)."""

    card: Card
    position: Position


@dataclass(frozen=True, slots=True)
class Line:
    """Contiguous run of cards along one axis with its deduced match type."""

    items: tuple[LineItem, ...]
    match_type: MatchType

    @classmethod
    def single_card(cls, card: Card, position: Position) -> "Line":
        return cls((LineItem(card, position),), MatchType.UNDETERMINED)

    def __len__(self) -> int:
        return len(self.items)

    @property
    def is_scoring(self) -> bool:
        """Return ``True`` when the line holds more than one card."""

        return len(self.items) > 1

    def cards(self) -> list[Card]:
        return [item.card for item in self.items]

    def positions(self) -> list[Position]:
        return [item.position for item in self.items]

    def wildcard_items(self) -> list[LineItem]:
        return [item for item in self.items if item.card.is_wildcard]

    def candidates_for_next_card(self, domain: CardDomain, *, exclude_present: bool = True) -> int:
        """Return the candidate mask for an open slot in this line."""

        return domain.candidates(self.match_type, self.cards(), exclude_present=exclude_present)


def line_cards(lines: Sequence[Line]) -> list[Card]:
    """Concatenate the cards of every scoring line in ``lines``."""

    cards: list[Card] = []
    for line in lines:
        if line.is_scoring:
            cards.extend(line.cards())
    return cards
