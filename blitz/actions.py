"""Turn actions a player may take during a round."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Union

from .hand import HAND_SIZE
from .state import Started

if TYPE_CHECKING:
    from .game import Game

__all__ = ["Draw", "DrawDiscard", "Knock", "Turn", "legal_turns"]


@dataclass(frozen=True, slots=True)
class Draw:
    """Take the top card of the deck into hand slot ``index``."""

    index: int


@dataclass(frozen=True, slots=True)
class DrawDiscard:
    """Take the visible discard into hand slot ``index``."""

    index: int


@dataclass(frozen=True, slots=True)
class Knock:
    """Give every other live player one final turn."""


Turn = Union[Draw, DrawDiscard, Knock]


def legal_turns(game: "Game") -> list[Turn]:
    """Return every turn the current player may take right now."""

    state = game.state
    if not isinstance(state, Started) or game.stalled:
        return []

    turns: list[Turn] = [Draw(index) for index in range(HAND_SIZE)]
    if game.discard_size:
        turns.extend(DrawDiscard(index) for index in range(HAND_SIZE))
    if state.knocked is None:
        turns.append(Knock())
    return turns

