"""Line match-type deduction and candidate computation."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Sequence

import numpy as np

from . import encoding
from .cards import Card, Property, mask_from_cards
from .rules import MAX_LINE_LENGTH

__all__ = [
    "MatchType",
    "CardDomain",
    "deduce_match_type",
    "common_properties",
    "used_properties",
]


class MatchType(str, Enum):
    """Discipline the concrete cards of a line must obey."""

    SAME = "same"
    DIFFERENT = "different"
    UNDETERMINED = "undetermined"


def deduce_match_type(cards: Sequence[Card], max_length: int = MAX_LINE_LENGTH) -> MatchType | None:
    """Return the match type of ``cards`` or ``None`` when the line is invalid.

    SAME means every concrete card shares at least one property, DIFFERENT that
    no two concrete cards share any property. A line with at most one concrete
    card is UNDETERMINED since any extension is still possible. Wildcards
    contribute nothing to either check.
    """

    if len(cards) > max_length:
        return None
    concrete = [card for card in cards if not card.is_wildcard]
    if len(concrete) <= 1:
        return MatchType.UNDETERMINED

    common: frozenset[Property] | None = None
    seen: set[Property] = set()
    all_unique = True
    for card in concrete:
        properties = card.match_properties()
        if common is None:
            common = properties
            seen.update(properties)
            continue
        common = card.match(common)
        if all_unique:
            expected = len(seen) + len(properties)
            seen.update(properties)
            if len(seen) < expected:
                all_unique = False

    if common:
        return MatchType.SAME
    if all_unique:
        return MatchType.DIFFERENT
    return None


def common_properties(cards: Sequence[Card]) -> frozenset[Property]:
    """Return the properties shared by every concrete card in ``cards``."""

    common: frozenset[Property] | None = None
    for card in cards:
        if card.is_wildcard:
            continue
        common = card.match_properties() if common is None else card.match(common)
    return common or frozenset()


def used_properties(cards: Sequence[Card]) -> frozenset[Property]:
    """Return every property carried by some card in ``cards``."""

    used: set[Property] = set()
    for card in cards:
        used.update(card.match_properties())
    return frozenset(used)


@dataclass(frozen=True, slots=True, eq=False)
class CardDomain:
    """Finite domain of concrete cards a wildcard may stand for.

    ``matrix`` holds one boolean row per card identifier and one column per
    property, as produced by :func:`encoding.property_matrix`.
    """

    matrix: np.ndarray

    def __post_init__(self) -> None:
        if self.matrix.ndim != 2 or self.matrix.shape[1] != encoding.PROPERTY_COUNT:
            raise ValueError("domain matrix must have one column per property")

    @classmethod
    def standard(cls) -> "CardDomain":
        """Return the domain of all 64 concrete cards."""

        return cls(encoding.property_matrix())

    @property
    def size(self) -> int:
        return int(self.matrix.shape[0])

    @property
    def full_mask(self) -> int:
        return (1 << self.size) - 1

    def cards_with_any(self, properties: frozenset[Property]) -> int:
        """Return the mask of cards carrying at least one of ``properties``."""

        if not properties:
            return 0
        columns = sorted(prop.column for prop in properties)
        return encoding.mask_from_flags(self.matrix[:, columns].any(axis=1))

    def cards_with_none(self, properties: frozenset[Property]) -> int:
        """Return the mask of cards carrying none of ``properties``."""

        if not properties:
            return self.full_mask
        columns = sorted(prop.column for prop in properties)
        return encoding.mask_from_flags(~self.matrix[:, columns].any(axis=1))

    def candidates(
        self,
        match_type: MatchType,
        cards: Sequence[Card],
        *,
        exclude_present: bool = True,
    ) -> int:
        """Return the mask of concrete cards that could fill an open slot of a line.

        ``cards`` are the cards already in the line; wildcards among them are
        ignored. With ``exclude_present`` a card already in the line is never a
        candidate.
        """

        if match_type is MatchType.SAME:
            mask = self.cards_with_any(common_properties(cards))
        elif match_type is MatchType.DIFFERENT:
            mask = self.cards_with_none(used_properties(cards))
        else:
            mask = self.full_mask
        if exclude_present:
            mask &= ~mask_from_cards(cards)
        return mask
