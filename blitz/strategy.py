"""Heuristic computer opponent for Blitz."""

from __future__ import annotations

from dataclasses import dataclass

from .actions import Draw, DrawDiscard, Knock, Turn
from .cards import Card
from .hand import HAND_SIZE, Hand, suit_totals
from .state import Started

__all__ = ["GreedyPolicy", "best_swap", "weakest_slot"]


def _value_with(hand: Hand, index: int, card: Card) -> int:
    trial = hand.copy()
    trial.replace(index, card)
    return trial.value()


def best_swap(hand: Hand, card: Card) -> tuple[int, int]:
    """Return ``(slot, value)`` for the best place to put ``card`` in ``hand``."""

    options = [(_value_with(hand, index, card), -index) for index in range(HAND_SIZE)]
    value, negative_index = max(options)
    return -negative_index, value


def weakest_slot(hand: Hand) -> int:
    """Return the slot whose card contributes least to the hand.

    The card is judged by the value the other two cards keep on their own,
    falling back to its own blitz value when that ties.
    """

    cards = hand.cards

    def keep_value(index: int) -> tuple[int, int]:
        rest = [card for slot, card in enumerate(cards) if slot != index]
        return max(suit_totals(rest).values()), -cards[index].blitz_value

    return max(range(HAND_SIZE), key=keep_value)


@dataclass(slots=True)
class GreedyPolicy:
    """One-ply policy that grabs useful discards and knocks on a strong hand."""

    knock_threshold: int = 27
    discard_gain: int = 1

    def choose(self, hand: Hand, discard: Card | None, state: Started) -> Turn:
        """Return the turn to play holding ``hand`` with ``discard`` visible."""

        current = hand.value()
        if discard is not None:
            slot, value = best_swap(hand, discard)
            if value - current >= self.discard_gain:
                return DrawDiscard(slot)
        if state.knocked is None and current >= self.knock_threshold:
            return Knock()
        return Draw(weakest_slot(hand))
