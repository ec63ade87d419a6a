"""Rule utilities and constants for Blitz."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final, Sequence

from .errors import NoHands, NoMorePlayers
from .player import STARTING_LIVES, Player

__all__ = [
    "BlitzConfig",
    "DEFAULT_CONFIG",
    "RoundOutcome",
    "lose_lives",
    "next_live_index",
    "first_live_index",
    "is_blitz",
    "lowest_score",
    "resolve_round",
]


@dataclass(frozen=True, slots=True)
class BlitzConfig:
    """Table limits and penalties that parametrise a game."""

    max_players: int = 6
    starting_lives: int = STARTING_LIVES
    blitz_score: int = 31
    knock_penalty: int = 2
    loss_penalty: int = 1

    def __post_init__(self) -> None:
        if self.max_players < 1:
            raise ValueError("max_players must be positive")
        if self.starting_lives < 1:
            raise ValueError("starting_lives must be positive")
        if self.knock_penalty < 0 or self.loss_penalty < 0:
            raise ValueError("penalties must not be negative")


DEFAULT_CONFIG: Final[BlitzConfig] = BlitzConfig()


@dataclass(frozen=True, slots=True)
class RoundOutcome:
    """Life changes computed for one round, before they are applied."""

    blitz: bool
    scores: dict[int, int]
    lives_lost: dict[int, int]
    lives_after: dict[int, int]
    eliminated: tuple[int, ...]

    @property
    def survivors(self) -> tuple[int, ...]:
        return tuple(idx for idx, lives in self.lives_after.items() if lives > 0)


def lose_lives(lives: int, amount: int) -> int:
    """Subtract ``amount`` from ``lives`` saturating at zero."""

    return max(0, lives - amount)


def next_live_index(current: int, players: Sequence[Player]) -> int:
    """Return the next seat after ``current`` whose player still has lives."""

    count = len(players)
    for step in range(1, count + 1):
        candidate = (current + step) % count
        if players[candidate].is_alive:
            return candidate
    raise NoMorePlayers()


def first_live_index(players: Sequence[Player]) -> int:
    """Return the lowest seat whose player still has lives."""

    return next_live_index(-1, players)


def is_blitz(players: Sequence[Player], blitz_score: int = DEFAULT_CONFIG.blitz_score) -> bool:
    return any(p.hand is not None and p.hand.value() == blitz_score for p in players)


def lowest_score(players: Sequence[Player]) -> int:
    """Return the lowest hand value among dealt players."""

    values = [p.hand.value() for p in players if p.hand is not None]
    if not values:
        raise NoHands()
    return min(values)


def resolve_round(
    players: Sequence[Player],
    knocked: int | None,
    config: BlitzConfig = DEFAULT_CONFIG,
) -> RoundOutcome:
    """Decide who loses how many lives without touching ``players``.

    Only dealt players take part. On a blitz every hand short of the blitz
    score loses; otherwise every hand tied at the lowest score loses. A losing
    knocker pays ``knock_penalty`` instead of ``loss_penalty``.
    """

    blitz = is_blitz(players, config.blitz_score)
    lowest = lowest_score(players)

    scores: dict[int, int] = {}
    lives_lost: dict[int, int] = {}
    lives_after: dict[int, int] = {}
    eliminated: list[int] = []
    for idx, player in enumerate(players):
        lives_after[idx] = player.lives
        if player.hand is None:
            continue
        score = player.hand.value()
        scores[idx] = score
        survives = score == config.blitz_score if blitz else score > lowest
        if survives:
            lives_lost[idx] = 0
            continue
        penalty = config.knock_penalty if knocked == idx else config.loss_penalty
        remaining = lose_lives(player.lives, penalty)
        lives_lost[idx] = player.lives - remaining
        lives_after[idx] = remaining
        if remaining == 0 and player.lives > 0:
            eliminated.append(idx)

    return RoundOutcome(
        blitz=blitz,
        scores=scores,
        lives_lost=lives_lost,
        lives_after=lives_after,
        eliminated=tuple(eliminated),
    )
