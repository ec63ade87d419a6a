"""Ordered card stacks used for the draw and discard piles."""

from __future__ import annotations

import random
from typing import Iterable, Iterator

from .cards import Card, iter_full_deck
from .errors import DeckEmpty


class Deck:
    """A stack of cards whose top is the end of the underlying list."""

    __slots__ = ("_cards",)

    def __init__(self, cards: Iterable[Card] = ()) -> None:
        self._cards: list[Card] = list(cards)

    @classmethod
    def new_52(cls) -> "Deck":
        """Return an unshuffled deck holding every suit and face once."""

        return cls(iter_full_deck())

    @property
    def cards(self) -> tuple[Card, ...]:
        """Return the cards bottom-to-top without modifying the deck."""

        return tuple(self._cards)

    def push(self, card: Card) -> None:
        self._cards.append(card)

    def pop(self) -> Card:
        """Remove and return the top card."""

        if not self._cards:
            raise DeckEmpty()
        return self._cards.pop()

    def top(self) -> Card | None:
        """Return the top card without removing it."""

        return self._cards[-1] if self._cards else None

    def merge(self, other: "Deck") -> None:
        """Move every card of ``other`` onto this deck, leaving ``other`` empty."""

        self._cards.extend(other._cards)
        other._cards.clear()

    def shuffle(self, rng: random.Random | None = None) -> None:
        (rng or random).shuffle(self._cards)

    def __len__(self) -> int:
        return len(self._cards)

    def __iter__(self) -> Iterator[Card]:
        # Iteration consumes the deck in pop order.
        while self._cards:
            yield self._cards.pop()

    def __repr__(self) -> str:
        return f"Deck({len(self._cards)} cards)"
