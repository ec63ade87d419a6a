"""Self-play harness for comparing Blitz policies."""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from typing import Sequence

from . import scoreboard
from .actions import Knock, Turn
from .errors import NoMorePlayers
from .game import Game
from .player import Player
from .rules import DEFAULT_CONFIG, BlitzConfig
from .state import GameEnded, Started
from .strategy import GreedyPolicy

__all__ = ["SeatBreakdown", "SelfPlayReport", "GameResult", "play_game", "run_self_play"]

logger = logging.getLogger(__name__)

DEFAULT_TURN_LIMIT = 200


@dataclass(frozen=True, slots=True)
class SeatBreakdown:
    """Aggregate statistics collected for a single seat across a benchmark."""

    seat: int
    wins: int
    rounds_lost: int
    lives_lost: int
    blitzes: int


@dataclass(slots=True)
class SelfPlayReport:
    """Summary of a batch of self-play games."""

    games: int
    rounds: int = 0
    blitz_rounds: int = 0
    knocks: int = 0
    forced_knocks: int = 0
    draws: int = 0
    seats: list[SeatBreakdown] = field(default_factory=list)


def _choose_turn(game: Game, policy: GreedyPolicy, state: Started) -> Turn:
    player = game.players[state.turn]
    if player.hand is None:  # pragma: no cover - defensive guard
        raise RuntimeError("current player has no hand")
    return policy.choose(player.hand, game.get_discard(), state)


@dataclass(frozen=True, slots=True)
class GameResult:
    """Outcome of a single self-play game."""

    game: Game
    winner_seat: int | None
    forced_knocks: int


def play_game(
    policies: Sequence[GreedyPolicy],
    rng: random.Random,
    *,
    config: BlitzConfig = DEFAULT_CONFIG,
    turn_limit: int = DEFAULT_TURN_LIMIT,
) -> GameResult:
    """Play one full game between ``policies``.

    A round that runs past ``turn_limit`` turns without a knock has a knock
    forced on the current player. A final round that eliminates everybody is
    reported as a draw (``winner_seat is None``).
    """

    if not policies:
        raise ValueError("at least one policy is required")
    players = [Player(id=f"p{seat}", name=f"P{seat}") for seat in range(len(policies))]
    game = Game(players[0], config=config, rng=rng)
    for player in players[1:]:
        game.join(player)

    forced = 0
    try:
        while not isinstance(game.state, GameEnded):
            game.start_round()
            turns_this_round = 0
            while isinstance(game.state, Started):
                state = game.state
                turns_this_round += 1
                if turns_this_round > turn_limit and state.knocked is None:
                    forced += 1
                    game.play_turn(Knock())
                    continue
                game.play_turn(_choose_turn(game, policies[state.turn], state))
    except NoMorePlayers:
        logger.debug("round %d eliminated every remaining player", game.round)
        return GameResult(game=game, winner_seat=None, forced_knocks=forced)

    state = game.state
    assert isinstance(state, GameEnded)
    return GameResult(
        game=game,
        winner_seat=game.player_index(state.winner.id),
        forced_knocks=forced,
    )


def run_self_play(
    games: int,
    policies: Sequence[GreedyPolicy],
    *,
    seed: int = 123,
    config: BlitzConfig = DEFAULT_CONFIG,
    turn_limit: int = DEFAULT_TURN_LIMIT,
) -> SelfPlayReport:
    """Play ``games`` complete games and aggregate the results per seat."""

    if games <= 0:
        raise ValueError("games must be positive")
    if len(policies) > config.max_players:
        raise ValueError(f"at most {config.max_players} seats are supported")

    rng = random.Random(seed)
    report = SelfPlayReport(games=games)
    wins = [0 for _ in policies]
    history = scoreboard.MatchHistory()
    round_offset = 0

    for game_number in range(1, games + 1):
        result = play_game(policies, rng, config=config, turn_limit=turn_limit)
        game = result.game
        winner_seat = result.winner_seat
        if winner_seat is None:
            report.draws += 1
        else:
            wins[winner_seat] += 1
        report.forced_knocks += result.forced_knocks
        for summary in game.history.rounds:
            report.rounds += 1
            if summary.blitz:
                report.blitz_rounds += 1
            if summary.knocked_by is not None:
                report.knocks += 1
            history.record(
                scoreboard.RoundSummary(
                    round_number=round_offset + summary.round_number,
                    blitz=summary.blitz,
                    knocked_by=summary.knocked_by,
                    scores=summary.scores,
                )
            )
        round_offset += game.round
        logger.debug("game %d won by seat %s after %d round(s)", game_number, winner_seat, game.round)

    totals = {total.player_id: total for total in history.totals()}
    for seat in range(len(policies)):
        total = totals.get(f"p{seat}")
        report.seats.append(
            SeatBreakdown(
                seat=seat,
                wins=wins[seat],
                rounds_lost=total.rounds_lost if total else 0,
                lives_lost=total.lives_lost if total else 0,
                blitzes=total.blitzes if total else 0,
            )
        )
    return report
