"""Card identifier encoding utilities for Iota."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final, Iterable, Iterator

import numpy as np

COLORS: Final[list[str]] = ["R", "G", "B", "Y"]
SHAPES: Final[list[str]] = ["C", "S", "T", "X"]
FACE_VALUES: Final[list[int]] = [1, 2, 3, 4]
COLOR_TO_IDX: Final[dict[str, int]] = {color: idx for idx, color in enumerate(COLORS)}
SHAPE_TO_IDX: Final[dict[str, int]] = {shape: idx for idx, shape in enumerate(SHAPES)}
CONCRETE_CARD_COUNT: Final[int] = len(COLORS) * len(SHAPES) * len(FACE_VALUES)
WILDCARD_IDS: Final[tuple[int, int]] = (64, 65)
DECK_CARD_COUNT: Final[int] = CONCRETE_CARD_COUNT + len(WILDCARD_IDS)

# Property columns: colors first, then shapes, then face values.
COLOR_OFFSET: Final[int] = 0
SHAPE_OFFSET: Final[int] = len(COLORS)
FACE_VALUE_OFFSET: Final[int] = len(COLORS) + len(SHAPES)
PROPERTY_COUNT: Final[int] = len(COLORS) + len(SHAPES) + len(FACE_VALUES)


@dataclass(frozen=True, slots=True)
class CardDecoding:
    """Typed container describing a decoded card identifier."""

    is_wildcard: bool
    color_idx: int
    shape_idx: int
    face_value: int


def card_id(color_idx: int, shape_idx: int, face_value: int) -> int:
    """Encode a color, shape, and face value into a card identifier."""

    if not 0 <= color_idx < len(COLORS):
        raise ValueError("color_idx out of range")
    if not 0 <= shape_idx < len(SHAPES):
        raise ValueError("shape_idx out of range")
    if face_value not in FACE_VALUES:
        raise ValueError("face_value out of range")
    return color_idx * 16 + shape_idx * 4 + (face_value - 1)


def decode_id(card_identifier: int) -> CardDecoding:
    """Decode a card identifier into its properties."""

    _validate_card_identifier(card_identifier)
    if card_identifier in WILDCARD_IDS:
        return CardDecoding(True, -1, -1, 0)
    color_idx, remainder = divmod(card_identifier, 16)
    shape_idx, value_idx = divmod(remainder, 4)
    return CardDecoding(False, color_idx, shape_idx, value_idx + 1)


def property_columns(card_identifier: int) -> tuple[int, int, int]:
    """Return the property matrix columns set for a concrete card."""

    decoded = decode_id(card_identifier)
    if decoded.is_wildcard:
        raise ValueError("wildcards have no property columns")
    return (
        COLOR_OFFSET + decoded.color_idx,
        SHAPE_OFFSET + decoded.shape_idx,
        FACE_VALUE_OFFSET + decoded.face_value - 1,
    )


def property_matrix() -> np.ndarray:
    """Return a boolean matrix with one row per concrete card and one column per property."""

    matrix = np.zeros((CONCRETE_CARD_COUNT, PROPERTY_COUNT), dtype=np.bool_)
    for identifier in range(CONCRETE_CARD_COUNT):
        matrix[identifier, list(property_columns(identifier))] = True
    return matrix


def _validate_card_identifier(card_identifier: int) -> None:
    if card_identifier < 0 or card_identifier >= DECK_CARD_COUNT:
        raise ValueError(f"card identifier {card_identifier} out of range")


def mask_from_cards(cards: Iterable[int]) -> int:
    """Return a bit-mask representing the provided card identifiers."""

    mask = 0
    for card_identifier in cards:
        _validate_card_identifier(card_identifier)
        mask |= 1 << card_identifier
    return mask


def mask_from_flags(flags: np.ndarray) -> int:
    """Return a bit-mask with bit ``i`` set where ``flags[i]`` is true."""

    mask = 0
    for card_identifier in np.flatnonzero(flags):
        mask |= 1 << int(card_identifier)
    return mask


def iter_cards(mask: int) -> Iterator[int]:
    """Yield all card identifiers present in ``mask``."""

    for card_identifier in range(DECK_CARD_COUNT):
        if (mask >> card_identifier) & 1:
            yield card_identifier
