"""Three-card hands and their scoring."""

from __future__ import annotations

from typing import Final, Iterable, Iterator, Sequence

from .cards import Card, Suit
from .deck import Deck
from .errors import InvalidHandIndex, NotEnoughCardsInDeck

HAND_SIZE: Final[int] = 3


def suit_totals(cards: Iterable[Card]) -> dict[Suit, int]:
    """Return the summed card value of each suit present, in suit order."""

    totals: dict[Suit, int] = {}
    for card in sorted(cards, key=lambda c: c.suit.order):
        totals[card.suit] = totals.get(card.suit, 0) + card.blitz_value
    return totals


class Hand:
    """Exactly three card slots that can be swapped one at a time."""

    __slots__ = ("_cards",)

    def __init__(self, cards: Sequence[Card]) -> None:
        if len(cards) != HAND_SIZE:
            raise ValueError(f"a hand holds exactly {HAND_SIZE} cards, got {len(cards)}")
        self._cards: list[Card] = list(cards)

    @classmethod
    def deal(cls, deck: Deck) -> "Hand":
        """Pop three cards from ``deck`` and return them as a hand."""

        if len(deck) < HAND_SIZE:
            raise NotEnoughCardsInDeck()
        return cls([deck.pop() for _ in range(HAND_SIZE)])

    @property
    def cards(self) -> tuple[Card, ...]:
        return tuple(self._cards)

    def replace(self, index: int, card: Card) -> Card:
        """Put ``card`` in slot ``index`` and return the card it displaced."""

        if not 0 <= index < HAND_SIZE:
            raise InvalidHandIndex(index)
        displaced = self._cards[index]
        self._cards[index] = card
        return displaced

    def suit_totals(self) -> dict[Suit, int]:
        return suit_totals(self._cards)

    def value(self) -> int:
        """Return the best single-suit total held in the hand."""

        return max(self.suit_totals().values(), default=0)

    def copy(self) -> "Hand":
        return Hand(self._cards)

    def __iter__(self) -> Iterator[Card]:
        return iter(self._cards)

    def __len__(self) -> int:
        return HAND_SIZE

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Hand):
            return NotImplemented
        return self._cards == other._cards

    def __repr__(self) -> str:
        return f"Hand({' '.join(card.code for card in self._cards)})"
