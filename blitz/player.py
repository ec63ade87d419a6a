"""Seated player records."""

from __future__ import annotations

from dataclasses import dataclass

from .hand import Hand

STARTING_LIVES = 4


@dataclass(slots=True)
class Player:
    """Identity, life counter and current hand of a seated player."""

    id: str
    name: str
    lives: int = STARTING_LIVES
    hand: Hand | None = None

    @property
    def is_alive(self) -> bool:
        return self.lives > 0

    def copy(self) -> "Player":
        """Return a snapshot that later game mutations do not affect."""

        return Player(
            id=self.id,
            name=self.name,
            lives=self.lives,
            hand=self.hand.copy() if self.hand is not None else None,
        )
