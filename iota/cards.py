"""Card abstractions and helpers for Iota."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Final, Iterable, Iterator

from . import encoding

WILDCARD_FACE_VALUE: Final[int] = 0
NUMBER_OF_WILDCARDS: Final[int] = len(encoding.WILDCARD_IDS)
WILDCARD_CODE: Final[str] = "**"


class Color(str, Enum):
    """Enumeration of the four card colors."""

    RED = "R"
    GREEN = "G"
    BLUE = "B"
    YELLOW = "Y"

    @property
    def index(self) -> int:
        return encoding.COLOR_TO_IDX[self.value]


class Shape(str, Enum):
    """Enumeration of the four card shapes."""

    CIRCLE = "C"
    SQUARE = "S"
    TRIANGLE = "T"
    CROSS = "X"

    @property
    def index(self) -> int:
        return encoding.SHAPE_TO_IDX[self.value]


class PropertyKind(str, Enum):
    """Categories a match property can belong to."""

    COLOR = "color"
    SHAPE = "shape"
    FACE_VALUE = "face_value"


@dataclass(frozen=True, slots=True)
class Property:
    """A single tagged match property.

    The ``kind`` tag keeps values from different categories apart, so the face
    value ``1`` and, say, a color can never compare equal.
    """

    kind: PropertyKind
    value: Color | Shape | int

    @classmethod
    def of_color(cls, color: Color) -> "Property":
        return cls(PropertyKind.COLOR, color)

    @classmethod
    def of_shape(cls, shape: Shape) -> "Property":
        return cls(PropertyKind.SHAPE, shape)

    @classmethod
    def of_face_value(cls, face_value: int) -> "Property":
        return cls(PropertyKind.FACE_VALUE, face_value)

    @property
    def column(self) -> int:
        """Return the column of this property in :func:`encoding.property_matrix`."""

        if self.kind is PropertyKind.COLOR:
            return encoding.COLOR_OFFSET + Color(self.value).index
        if self.kind is PropertyKind.SHAPE:
            return encoding.SHAPE_OFFSET + Shape(self.value).index
        return encoding.FACE_VALUE_OFFSET + int(self.value) - 1


@dataclass(frozen=True, slots=True)
class Card:
    """Value object describing a concrete Iota card or a wildcard."""

    color: Color | None
    shape: Shape | None
    face_value: int

    def __post_init__(self) -> None:
        if self.color is None and self.shape is None:
            if self.face_value != WILDCARD_FACE_VALUE:
                raise ValueError("wildcards carry no face value")
            return
        if self.color is None or self.shape is None:
            raise ValueError("a concrete card needs both a color and a shape")
        if self.face_value not in encoding.FACE_VALUES:
            raise ValueError(f"face value {self.face_value} out of range")

    @classmethod
    def concrete(cls, color: Color, shape: Shape, face_value: int) -> "Card":
        return cls(color=color, shape=shape, face_value=face_value)

    @classmethod
    def wildcard(cls) -> "Card":
        return cls(color=None, shape=None, face_value=WILDCARD_FACE_VALUE)

    @classmethod
    def from_identifier(cls, card_identifier: int) -> "Card":
        decoded = encoding.decode_id(card_identifier)
        if decoded.is_wildcard:
            return cls.wildcard()
        return cls(
            color=Color(encoding.COLORS[decoded.color_idx]),
            shape=Shape(encoding.SHAPES[decoded.shape_idx]),
            face_value=decoded.face_value,
        )

    @classmethod
    def from_code(cls, code: str) -> "Card":
        """Parse a card code such as ``RC1`` (red circle, one) or ``**``."""

        text = code.strip().upper()
        if text == WILDCARD_CODE:
            return cls.wildcard()
        if len(text) != 3:
            raise ValueError(f"invalid card code '{code}'")
        color_symbol, shape_symbol, value_symbol = text
        try:
            color = Color(color_symbol)
            shape = Shape(shape_symbol)
            face_value = int(value_symbol)
        except ValueError as exc:
            raise ValueError(f"invalid card code '{code}'") from exc
        return cls(color=color, shape=shape, face_value=face_value)

    @property
    def is_wildcard(self) -> bool:
        """Return ``True`` when the card is a wildcard."""

        return self.color is None

    @property
    def identifier(self) -> int:
        if self.is_wildcard:
            return encoding.WILDCARD_IDS[0]
        return encoding.card_id(self.color.index, self.shape.index, self.face_value)

    @property
    def code(self) -> str:
        if self.is_wildcard:
            return WILDCARD_CODE
        return f"{self.color.value}{self.shape.value}{self.face_value}"

    def match_properties(self) -> frozenset[Property]:
        """Return the properties this card contributes to line matching."""

        if self.is_wildcard:
            return frozenset()
        return frozenset(
            (
                Property.of_color(self.color),
                Property.of_shape(self.shape),
                Property.of_face_value(self.face_value),
            )
        )

    def match(self, prior_common: frozenset[Property]) -> frozenset[Property]:
        """Intersect ``prior_common`` with this card's properties.

        A wildcard satisfies any common property and returns the input as is.
        """

        if self.is_wildcard:
            return prior_common
        return prior_common & self.match_properties()

    def label(self) -> str:
        """Spell the card out, e.g. ``green cross 2``."""

        if self.is_wildcard:
            return "wildcard"
        return f"{self.color.name.lower()} {self.shape.name.lower()} {self.face_value}"

    def __str__(self) -> str:
        return self.code


def iter_concrete_cards() -> Iterator[Card]:
    """Yield every concrete card in identifier order."""

    for card_identifier in range(encoding.CONCRETE_CARD_COUNT):
        yield Card.from_identifier(card_identifier)


def mask_from_cards(cards: Iterable[Card]) -> int:
    """Return the identifier bit-mask of the concrete cards in ``cards``."""

    return encoding.mask_from_cards(card.identifier for card in cards if not card.is_wildcard)


def cards_from_mask(mask: int) -> list[Card]:
    return [Card.from_identifier(card_identifier) for card_identifier in encoding.iter_cards(mask)]


def total_face_value(cards: Iterable[Card]) -> int:
    """Sum the face values of ``cards``, counting repeats."""

    return sum(card.face_value for card in cards)
