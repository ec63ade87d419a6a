"""Phases of a Blitz game."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from .player import Player

__all__ = ["Waiting", "Started", "RoundEnded", "GameEnded", "GameState"]


@dataclass(frozen=True, slots=True)
class Waiting:
    """Players may join or leave; no cards are in play."""


@dataclass(frozen=True, slots=True)
class Started:
    """A round is in progress."""

    turn: int
    knocked: int | None = None


@dataclass(frozen=True, slots=True)
class RoundEnded:
    """A round was resolved and more than one player is still alive."""

    eliminated: tuple[Player, ...] = ()


@dataclass(frozen=True, slots=True)
class GameEnded:
    """Exactly one player kept any lives."""

    winner: Player


GameState = Union[Waiting, Started, RoundEnded, GameEnded]
