"""Card abstractions and helpers for Blitz."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterator


class Suit(str, Enum):
    """The four suits, declared in the order used for grouping."""

    SPADE = "S"
    HEART = "H"
    DIAMOND = "D"
    CLUB = "C"

    @property
    def symbol(self) -> str:
        return _SUIT_SYMBOLS[self]

    @property
    def order(self) -> int:
        return _SUIT_ORDER[self]


_SUIT_SYMBOLS = {
    Suit.SPADE: "♠",
    Suit.HEART: "♥",
    Suit.DIAMOND: "♦",
    Suit.CLUB: "♣",
}
_SUIT_ORDER = {suit: idx for idx, suit in enumerate(Suit)}


class Face(str, Enum):
    """Card faces from Ace to King."""

    ACE = "A"
    TWO = "2"
    THREE = "3"
    FOUR = "4"
    FIVE = "5"
    SIX = "6"
    SEVEN = "7"
    EIGHT = "8"
    NINE = "9"
    TEN = "10"
    JACK = "J"
    QUEEN = "Q"
    KING = "K"

    @property
    def blitz_value(self) -> int:
        """Return the scoring value of the face."""

        if self is Face.ACE:
            return 11
        if self in (Face.JACK, Face.QUEEN, Face.KING):
            return 10
        return int(self.value)


@dataclass(frozen=True, slots=True)
class Card:
    """Value object describing a physical card."""

    suit: Suit
    face: Face

    @classmethod
    def from_code(cls, code: str) -> "Card":
        """Parse a short code such as ``AS`` or ``10h``."""

        normalized = code.strip().upper()
        if len(normalized) < 2:
            raise ValueError(f"invalid card code '{code}'")
        try:
            return cls(suit=Suit(normalized[-1]), face=Face(normalized[:-1]))
        except ValueError:
            raise ValueError(f"invalid card code '{code}'") from None

    @property
    def blitz_value(self) -> int:
        return self.face.blitz_value

    @property
    def code(self) -> str:
        return f"{self.face.value}{self.suit.value}"

    def label(self) -> str:
        """Create a display label suitable for CLI representations."""

        return f"{self.face.value}{self.suit.symbol}"

    def __str__(self) -> str:
        return self.label()


def iter_full_deck() -> Iterator[Card]:
    """Yield the 52 cards in suit-major, face-minor order."""

    for suit in Suit:
        for face in Face:
            yield Card(suit=suit, face=face)
