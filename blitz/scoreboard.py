"""Helpers for tracking multi-round Blitz match results."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Sequence

__all__ = ["PlayerRoundScore", "RoundSummary", "PlayerMatchTotal", "MatchHistory"]


@dataclass(frozen=True, slots=True)
class PlayerRoundScore:
    """Per-player result of a single resolved round."""

    player_id: str
    hand_value: int
    lives_lost: int
    lives_remaining: int
    eliminated: bool = False


@dataclass(frozen=True, slots=True)
class RoundSummary:
    """Summary captured after a single round."""

    round_number: int
    blitz: bool
    knocked_by: str | None
    scores: Sequence[PlayerRoundScore]

    @property
    def losers(self) -> tuple[str, ...]:
        return tuple(score.player_id for score in self.scores if score.lives_lost > 0)


@dataclass(frozen=True, slots=True)
class PlayerMatchTotal:
    """Aggregate totals accumulated across all recorded rounds."""

    player_id: str
    rounds_played: int
    rounds_lost: int
    lives_lost: int
    blitzes: int


@dataclass(slots=True)
class MatchHistory:
    """Mutable tracker that accumulates round summaries for a match."""

    rounds: list[RoundSummary] = field(default_factory=list)

    def record(self, summary: RoundSummary) -> None:
        """Record ``summary``; round numbers must increase."""

        if self.rounds and summary.round_number <= self.rounds[-1].round_number:
            raise ValueError("round numbers must be strictly increasing")
        self.rounds.append(summary)

    def clear(self) -> None:
        self.rounds.clear()

    def totals(self) -> list[PlayerMatchTotal]:
        """Return cumulative totals in order of first appearance."""

        order: list[str] = []
        stats: dict[str, list[int]] = {}
        for summary in self.rounds:
            for score in summary.scores:
                if score.player_id not in stats:
                    order.append(score.player_id)
                    stats[score.player_id] = [0, 0, 0, 0]
                bucket = stats[score.player_id]
                bucket[0] += 1
                if score.lives_lost > 0:
                    bucket[1] += 1
                bucket[2] += score.lives_lost
                if summary.blitz and score.lives_lost == 0:
                    bucket[3] += 1

        return [
            PlayerMatchTotal(
                player_id=player_id,
                rounds_played=stats[player_id][0],
                rounds_lost=stats[player_id][1],
                lives_lost=stats[player_id][2],
                blitzes=stats[player_id][3],
            )
            for player_id in order
        ]
