"""Exceptions raised by the Blitz rules engine."""

from __future__ import annotations

__all__ = [
    "BlitzError",
    "DeckEmpty",
    "NotEnoughCardsInDeck",
    "InvalidHandIndex",
    "GameAlreadyStarted",
    "GameNotStarted",
    "RoundNotStarted",
    "MaxPlayersReached",
    "InvalidPlayerIndex",
    "PlayerAlreadyKnocked",
    "NoMorePlayers",
    "NoHands",
]


class BlitzError(RuntimeError):
    """Base class for every rule violation reported by the engine."""


class DeckEmpty(BlitzError):
    """Raised when a card is requested from an empty pile."""

    def __init__(self) -> None:
        super().__init__("deck is empty")


class NotEnoughCardsInDeck(BlitzError):
    """Raised when a hand cannot be dealt from the remaining cards."""

    def __init__(self) -> None:
        super().__init__("not enough cards in deck")


class InvalidHandIndex(BlitzError):
    """Raised when a hand slot outside ``0..2`` is addressed."""

    def __init__(self, index: int) -> None:
        super().__init__(f"invalid hand index: {index}")
        self.index = index


class GameAlreadyStarted(BlitzError):
    def __init__(self) -> None:
        super().__init__("game already started")


class GameNotStarted(BlitzError):
    def __init__(self) -> None:
        super().__init__("game has not been started")


class RoundNotStarted(BlitzError):
    def __init__(self) -> None:
        super().__init__("round has not been started")


class MaxPlayersReached(BlitzError):
    def __init__(self) -> None:
        super().__init__("maximum number of players reached")


class InvalidPlayerIndex(BlitzError):
    """Raised when a roster position does not name a seated player."""

    def __init__(self, index: int) -> None:
        super().__init__(f"invalid player: {index}")
        self.index = index


class PlayerAlreadyKnocked(BlitzError):
    """Raised on a second knock within the same round."""

    def __init__(self, player_index: int) -> None:
        super().__init__(f"player {player_index} has already knocked")
        self.player_index = player_index


class NoMorePlayers(BlitzError):
    def __init__(self) -> None:
        super().__init__("no more players left")


class NoHands(BlitzError):
    def __init__(self) -> None:
        super().__init__("no hands have been dealt")
