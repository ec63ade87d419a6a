"""The Blitz game orchestrator and state machine."""

from __future__ import annotations

import logging
import random

from . import rules
from .actions import Draw, DrawDiscard, Knock, Turn
from .cards import Card
from .deck import Deck
from .errors import (
    DeckEmpty,
    GameAlreadyStarted,
    GameNotStarted,
    InvalidHandIndex,
    InvalidPlayerIndex,
    MaxPlayersReached,
    NoMorePlayers,
    PlayerAlreadyKnocked,
    RoundNotStarted,
)
from .hand import HAND_SIZE, Hand
from .player import Player
from .rules import DEFAULT_CONFIG, BlitzConfig
from .scoreboard import MatchHistory, PlayerRoundScore, RoundSummary
from .state import GameEnded, GameState, RoundEnded, Started, Waiting

__all__ = ["Game"]

logger = logging.getLogger(__name__)


class Game:
    """A single Blitz match.

    ``Game`` owns the roster, the draw deck and the discard pile, and is the
    only place where lives and hands change. Callers drive it through
    :meth:`join`, :meth:`leave`, :meth:`start_round`, :meth:`play_turn` and
    :meth:`reset`; every rule violation is raised as a
    :class:`~blitz.errors.BlitzError`.
    """

    def __init__(
        self,
        founder: Player,
        *,
        config: BlitzConfig = DEFAULT_CONFIG,
        rng: random.Random | None = None,
    ) -> None:
        self.config = config
        self._rng = rng or random.Random()
        self._players: list[Player] = [founder]
        self._player_map: dict[str, int] = {founder.id: 0}
        self._deck = self._fresh_deck()
        self._discard = Deck()
        self._round = 0
        self._state: GameState = Waiting()
        self._stalled = False
        self.history = MatchHistory()

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    @property
    def state(self) -> GameState:
        return self._state

    @property
    def players(self) -> tuple[Player, ...]:
        return tuple(self._players)

    @property
    def round(self) -> int:
        return self._round

    @property
    def stalled(self) -> bool:
        """True after a resolution that would have eliminated everybody."""

        return self._stalled

    @property
    def deck_size(self) -> int:
        return len(self._deck)

    @property
    def discard_size(self) -> int:
        return len(self._discard)

    def player(self, player_id: str) -> Player | None:
        index = self._player_map.get(player_id)
        return self._players[index] if index is not None else None

    def player_index(self, player_id: str) -> int | None:
        return self._player_map.get(player_id)

    def current_player(self) -> Player | None:
        """Return the player whose turn it is, or ``None`` outside a round."""

        if not isinstance(self._state, Started):
            return None
        return self._players[self._state.turn]

    def get_discard(self) -> Card:
        """Return the visible discard card."""

        card = self._discard.top()
        if card is None:
            raise DeckEmpty()
        return card

    # ------------------------------------------------------------------
    # Lobby
    # ------------------------------------------------------------------

    def join(self, player: Player) -> None:
        if not isinstance(self._state, Waiting):
            raise GameAlreadyStarted()
        if len(self._players) >= self.config.max_players:
            raise MaxPlayersReached()
        self._player_map[player.id] = len(self._players)
        self._players.append(player)
        logger.debug("player %s joined at seat %d", player.id, len(self._players) - 1)

    def leave(self, player_index: int) -> None:
        if not isinstance(self._state, Waiting):
            raise GameAlreadyStarted()
        if not 0 <= player_index < len(self._players):
            raise InvalidPlayerIndex(player_index)
        removed = self._players.pop(player_index)
        self._player_map = {player.id: idx for idx, player in enumerate(self._players)}
        logger.debug("player %s left seat %d", removed.id, player_index)

    # ------------------------------------------------------------------
    # Rounds
    # ------------------------------------------------------------------

    def start_round(self) -> None:
        """Deal a new round from ``Waiting`` or ``RoundEnded``."""

        state = self._state
        if isinstance(state, Waiting):
            if not self._players:
                raise NoMorePlayers()
            for player in self._players:
                player.lives = self.config.starting_lives
                player.hand = Hand.deal(self._deck)
        elif isinstance(state, RoundEnded):
            self._deck = self._fresh_deck()
            self._discard = Deck()
            for player in self._players:
                player.hand = Hand.deal(self._deck) if player.lives > 0 else None
        else:
            raise GameAlreadyStarted()

        self._discard.push(self._deck.pop())
        self._round += 1
        self._state = Started(turn=rules.first_live_index(self._players), knocked=None)
        logger.debug(
            "round %d started with %d live player(s), discard %s",
            self._round,
            sum(1 for player in self._players if player.lives > 0),
            self._discard.top(),
        )

    def play_turn(self, turn: Turn) -> None:
        """Apply ``turn`` for the current player and advance the game."""

        state = self._state
        if isinstance(state, RoundEnded):
            raise RoundNotStarted()
        if not isinstance(state, Started):
            raise GameNotStarted()
        if self._stalled:
            raise NoMorePlayers()

        actor = state.turn
        if not 0 <= actor < len(self._players):
            raise InvalidPlayerIndex(actor)
        knocked = state.knocked

        if isinstance(turn, (Draw, DrawDiscard)):
            hand = self._players[actor].hand
            # Started guarantees every live player holds a hand.
            assert hand is not None
            if not 0 <= turn.index < HAND_SIZE:
                raise InvalidHandIndex(turn.index)
            if isinstance(turn, Draw):
                if not len(self._deck):
                    self._reshuffle()
                drawn = self._deck.pop()
            else:
                drawn = self._discard.pop()
            self._discard.push(hand.replace(turn.index, drawn))
            logger.debug("player %d drew %s into slot %d (value %d)", actor, drawn, turn.index, hand.value())
            if hand.value() == self.config.blitz_score:
                logger.info("player %d blitzed", actor)
                self._end_round(knocked)
                return
        elif isinstance(turn, Knock):
            if knocked is not None:
                raise PlayerAlreadyKnocked(knocked)
            knocked = actor
            logger.debug("player %d knocked", actor)
        else:
            raise TypeError(f"unsupported turn {turn!r}")

        next_turn = rules.next_live_index(actor, self._players)
        if knocked is not None and next_turn == knocked:
            self._end_round(knocked)
            return
        self._state = Started(turn=next_turn, knocked=knocked)

    def reset(self) -> None:
        """Return to ``Waiting`` with full lives and a fresh deck."""

        self._deck = self._fresh_deck()
        self._discard = Deck()
        for player in self._players:
            player.lives = self.config.starting_lives
            player.hand = None
        self._round = 0
        self.history.clear()
        self._stalled = False
        self._state = Waiting()
        logger.debug("game reset with %d player(s)", len(self._players))

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _fresh_deck(self) -> Deck:
        deck = Deck.new_52()
        deck.shuffle(self._rng)
        return deck

    def _end_round(self, knocked: int | None) -> None:
        """Resolve the round in play; ``knocked`` is the knocker on record, if any.

        When nobody would survive, nothing is applied and the round stays
        stalled in its current ``Started`` state until :meth:`reset`.
        """

        if not isinstance(self._state, Started):
            raise RoundNotStarted()

        outcome = rules.resolve_round(self._players, knocked, self.config)
        survivors = outcome.survivors
        if not survivors:
            self._stalled = True
            raise NoMorePlayers()

        for idx, lives in outcome.lives_after.items():
            self._players[idx].lives = lives

        self.history.record(
            RoundSummary(
                round_number=self._round,
                blitz=outcome.blitz,
                knocked_by=self._players[knocked].id if knocked is not None else None,
                scores=[
                    PlayerRoundScore(
                        player_id=self._players[idx].id,
                        hand_value=score,
                        lives_lost=outcome.lives_lost[idx],
                        lives_remaining=outcome.lives_after[idx],
                        eliminated=idx in outcome.eliminated,
                    )
                    for idx, score in outcome.scores.items()
                ],
            )
        )

        if len(survivors) == 1:
            winner = self._players[survivors[0]]
            self._state = GameEnded(winner=winner.copy())
            logger.info("round %d ended; %s wins the game", self._round, winner.name)
        else:
            eliminated = tuple(self._players[idx].copy() for idx in outcome.eliminated)
            self._state = RoundEnded(eliminated=eliminated)
            logger.info(
                "round %d ended; eliminated: %s",
                self._round,
                ", ".join(player.name for player in eliminated) or "none",
            )

    def _reshuffle(self) -> None:
        """Rebuild the deck from the discard pile, keeping its top card visible."""

        top = self._discard.top()
        if top is None:
            raise DeckEmpty()
        self._discard.pop()
        self._deck.merge(self._discard)
        self._discard.push(top)
        if not len(self._deck):
            raise DeckEmpty()
        self._deck.shuffle(self._rng)
        logger.debug("reshuffled %d discarded card(s) into the deck", len(self._deck))
