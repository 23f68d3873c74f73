"""Tests covering match-type deduction and candidate sets."""

from __future__ import annotations

import numpy as np
import pytest

from iota.cards import Card, Color, Property, Shape, cards_from_mask
from iota.matching import CardDomain, MatchType, common_properties, deduce_match_type, used_properties


def _cards(*codes: str) -> list[Card]:
    return [Card.from_code(code) for code in codes]


@pytest.mark.parametrize(
    ("codes", "expected"),
    [
        ((), MatchType.UNDETERMINED),
        (("RC1",), MatchType.UNDETERMINED),
        (("**", "**"), MatchType.UNDETERMINED),
        (("RC1", "**", "**", "**"), MatchType.UNDETERMINED),
        (("RC1", "RS2"), MatchType.SAME),
        (("RC1", "**", "RS2"), MatchType.SAME),
        (("**", "RC1", "RS2", "RT3"), MatchType.SAME),
        (("RC1", "GS2"), MatchType.DIFFERENT),
        (("RC1", "GS2", "BT3", "YX4"), MatchType.DIFFERENT),
        (("**", "GS2", "**", "YX4"), MatchType.DIFFERENT),
        (("RC1", "RS2", "BS3"), None),
        (("RC1", "GC2", "BS3"), None),
        (("RC1", "GS2", "BT1"), None),
    ],
)
def test_deduce_match_type(codes: tuple[str, ...], expected: MatchType | None) -> None:
    assert deduce_match_type(_cards(*codes)) is expected


def test_lines_longer_than_four_are_invalid() -> None:
    assert deduce_match_type(_cards("**", "**", "**", "**", "**")) is None
    assert deduce_match_type(_cards("RC1", "RC2", "RC3", "RC4", "RS1")) is None


def test_shorter_limit_is_respected() -> None:
    assert deduce_match_type(_cards("RC1", "RS2", "RT3"), max_length=2) is None
    assert deduce_match_type(_cards("RC1", "RS2"), max_length=2) is MatchType.SAME


def test_deduction_is_deterministic() -> None:
    line = _cards("RC1", "**", "RS2", "RT3")
    assert deduce_match_type(line) is deduce_match_type(list(line))


def test_identical_cards_share_every_property() -> None:
    assert deduce_match_type(_cards("RC1", "RC1")) is MatchType.SAME


def test_common_and_used_properties() -> None:
    line = _cards("RC1", "**", "RS2")
    assert common_properties(line) == {Property.of_color(Color.RED)}
    assert used_properties(line) == {
        Property.of_color(Color.RED),
        Property.of_shape(Shape.CIRCLE),
        Property.of_shape(Shape.SQUARE),
        Property.of_face_value(1),
        Property.of_face_value(2),
    }
    assert common_properties(_cards("**")) == frozenset()


def test_standard_domain() -> None:
    domain = CardDomain.standard()
    assert domain.size == 64
    assert domain.full_mask == (1 << 64) - 1


def test_domain_requires_one_column_per_property() -> None:
    with pytest.raises(ValueError):
        CardDomain(np.zeros((64, 3), dtype=np.bool_))


def test_same_candidates_share_the_common_property() -> None:
    domain = CardDomain.standard()
    line = _cards("RC1", "**", "RS2")
    candidates = cards_from_mask(domain.candidates(MatchType.SAME, line))
    assert len(candidates) == 14
    assert all(card.color is Color.RED for card in candidates)
    assert Card.from_code("RC1") not in candidates


def test_same_candidates_with_several_common_properties() -> None:
    domain = CardDomain.standard()
    candidates = cards_from_mask(domain.candidates(MatchType.SAME, _cards("RC1", "RC2")))
    # Red or circle, minus the two cards already in the line.
    assert len(candidates) == 16 + 16 - 4 - 2
    assert all(card.color is Color.RED or card.shape is Shape.CIRCLE for card in candidates)


def test_different_candidates_avoid_every_used_property() -> None:
    domain = CardDomain.standard()
    candidates = cards_from_mask(domain.candidates(MatchType.DIFFERENT, _cards("RC1", "GS2")))
    assert len(candidates) == 8
    for card in candidates:
        assert card.color in (Color.BLUE, Color.YELLOW)
        assert card.shape in (Shape.TRIANGLE, Shape.CROSS)
        assert card.face_value in (3, 4)


def test_undetermined_candidates_are_every_card() -> None:
    domain = CardDomain.standard()
    line = _cards("RC1", "**")
    assert len(cards_from_mask(domain.candidates(MatchType.UNDETERMINED, line))) == 63
    assert domain.candidates(MatchType.UNDETERMINED, line, exclude_present=False) == domain.full_mask


def test_present_cards_can_be_kept_as_candidates() -> None:
    domain = CardDomain.standard()
    line = _cards("RC1", "RS2")
    mask = domain.candidates(MatchType.SAME, line, exclude_present=False)
    assert Card.from_code("RC1") in cards_from_mask(mask)
    assert len(cards_from_mask(mask)) == 16
