from __future__ import annotations

import random

import pytest

from blitz.actions import Draw, DrawDiscard, Knock, legal_turns
from blitz.cards import Card
from blitz.deck import Deck
from blitz.errors import (
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
from blitz.game import Game
from blitz.hand import Hand
from blitz.player import Player
from blitz.state import GameEnded, RoundEnded, Started, Waiting


def _hand(codes: str) -> Hand:
    return Hand([Card.from_code(code) for code in codes.split()])


def _new_game(num_players: int, seed: int = 0) -> Game:
    game = Game(Player(id="p0", name="P0"), rng=random.Random(seed))
    for idx in range(1, num_players):
        game.join(Player(id=f"p{idx}", name=f"P{idx}"))
    return game


def _started_game(*hands: str) -> Game:
    game = _new_game(len(hands))
    game.start_round()
    for player, codes in zip(game.players, hands):
        player.hand = _hand(codes)
    return game


def _stack_deck(game: Game, code: str) -> None:
    game._deck.push(Card.from_code(code))


def test_new_game_waits_with_full_deck() -> None:
    game = _new_game(1)

    assert game.state == Waiting()
    assert game.deck_size == 52
    assert game.discard_size == 0
    assert game.round == 0
    assert game.player("p0") is game.players[0]
    assert game.player("missing") is None
    with pytest.raises(DeckEmpty):
        game.get_discard()


def test_join_stops_at_six_players() -> None:
    game = _new_game(6)

    with pytest.raises(MaxPlayersReached):
        game.join(Player(id="p6", name="P6"))
    assert len(game.players) == 6


def test_leave_rebuilds_player_index() -> None:
    game = _new_game(3)

    game.leave(0)

    assert [player.id for player in game.players] == ["p1", "p2"]
    assert game.player_index("p1") == 0
    assert game.player_index("p2") == 1
    assert game.player("p0") is None


def test_leave_rejects_unknown_seat() -> None:
    game = _new_game(2)

    with pytest.raises(InvalidPlayerIndex) as excinfo:
        game.leave(5)
    assert excinfo.value.index == 5


def test_lobby_is_closed_once_started() -> None:
    game = _new_game(2)
    game.start_round()

    with pytest.raises(GameAlreadyStarted):
        game.join(Player(id="late", name="Late"))
    with pytest.raises(GameAlreadyStarted):
        game.leave(0)
    with pytest.raises(GameAlreadyStarted):
        game.start_round()


@pytest.mark.parametrize("num_players", [1, 3, 6])
def test_start_round_deals_every_player(num_players: int) -> None:
    game = _new_game(num_players)
    game.players[0].lives = 1

    game.start_round()

    assert game.deck_size == 52 - (3 * num_players + 1)
    assert game.discard_size == 1
    assert game.state == Started(turn=0, knocked=None)
    assert game.round == 1
    for player in game.players:
        assert player.hand is not None
        assert len(player.hand.cards) == 3
        assert player.lives == 4
    assert game.current_player() is game.players[0]


def test_start_round_without_players_fails() -> None:
    game = _new_game(1)
    game.leave(0)

    with pytest.raises(NoMorePlayers):
        game.start_round()


def test_play_turn_outside_a_round() -> None:
    game = _new_game(2)

    with pytest.raises(GameNotStarted):
        game.play_turn(Knock())


def test_draw_swaps_card_and_advances_turn() -> None:
    game = _started_game("2H 3C 4D", "5H 6C 7D")
    _stack_deck(game, "8S")
    deck_size = game.deck_size

    game.play_turn(Draw(1))

    assert game.players[0].hand == _hand("2H 8S 4D")
    assert game.get_discard() == Card.from_code("3C")
    assert game.deck_size == deck_size - 1
    assert game.discard_size == 2
    assert game.state == Started(turn=1, knocked=None)


def test_draw_discard_takes_visible_card() -> None:
    game = _started_game("2H 3C 4D", "5H 6C 7D")
    visible = game.get_discard()

    game.play_turn(DrawDiscard(0))

    assert game.players[0].hand is not None
    assert game.players[0].hand.cards[0] == visible
    assert game.get_discard() == Card.from_code("2H")
    assert game.discard_size == 1


def test_invalid_hand_index_changes_nothing() -> None:
    game = _started_game("2H 3C 4D", "5H 6C 7D")
    deck_size = game.deck_size

    with pytest.raises(InvalidHandIndex):
        game.play_turn(Draw(3))

    assert game.deck_size == deck_size
    assert game.players[0].hand == _hand("2H 3C 4D")
    assert game.state == Started(turn=0, knocked=None)


def test_drawing_to_31_ends_the_round_immediately() -> None:
    game = _started_game("KS QS 2H", "5H 6C 7D", "9C 8C 4D")
    _stack_deck(game, "AS")

    game.play_turn(Draw(2))

    assert game.state == RoundEnded(eliminated=())
    assert [player.lives for player in game.players] == [4, 3, 3]
    summary = game.history.rounds[-1]
    assert summary.blitz
    assert summary.losers == ("p1", "p2")


def test_taking_discard_to_31_ends_the_round() -> None:
    game = _started_game("KS QS 2H", "5H 6C 7D")
    game._discard.push(Card.from_code("AS"))

    game.play_turn(DrawDiscard(2))

    assert isinstance(game.state, RoundEnded)
    assert [player.lives for player in game.players] == [4, 3]
    assert game.get_discard() == Card.from_code("2H")


def test_knock_gives_everyone_else_one_turn() -> None:
    game = _started_game("KS QS 9S", "2H 3C 4D", "5H 6C 7D")

    game.play_turn(Knock())
    assert game.state == Started(turn=1, knocked=0)

    _stack_deck(game, "2D")
    game.play_turn(Draw(0))
    assert game.state == Started(turn=2, knocked=0)

    _stack_deck(game, "2D")
    game.play_turn(Draw(0))

    assert game.state == RoundEnded(eliminated=())
    assert [player.lives for player in game.players] == [4, 3, 4]
    assert game.history.rounds[-1].knocked_by == "p0"


def test_second_knock_is_rejected() -> None:
    game = _started_game("KS QS 9S", "2H 3C 4D", "5H 6C 7D")
    game.play_turn(Knock())

    with pytest.raises(PlayerAlreadyKnocked) as excinfo:
        game.play_turn(Knock())

    assert excinfo.value.player_index == 0
    assert game.state == Started(turn=1, knocked=0)


def test_losing_knocker_pays_double_and_ties_all_lose() -> None:
    game = _started_game("2H 3C 4D", "4H 2C 3D", "KS QS 9S")

    game.play_turn(Knock())
    _stack_deck(game, "4S")
    game.play_turn(Draw(0))
    _stack_deck(game, "9H")
    game.play_turn(Draw(2))

    assert isinstance(game.state, RoundEnded)
    assert [player.lives for player in game.players] == [2, 3, 4]


def test_elimination_excludes_player_from_next_round() -> None:
    game = _started_game("KS QS 9S", "2H 3C 4D", "5H 6C 7D")
    game.players[1].lives = 1

    game.play_turn(Knock())
    _stack_deck(game, "2D")
    game.play_turn(Draw(0))
    _stack_deck(game, "2D")
    game.play_turn(Draw(0))

    state = game.state
    assert isinstance(state, RoundEnded)
    assert [player.id for player in state.eliminated] == ["p1"]
    assert game.players[1].lives == 0

    game.start_round()

    assert game.round == 2
    assert game.players[1].hand is None
    assert game.deck_size == 52 - (3 * 2 + 1)
    assert game.state == Started(turn=0, knocked=None)
    _stack_deck(game, "2C")
    game.play_turn(Draw(0))
    assert game.state == Started(turn=2, knocked=None)


def test_first_turn_skips_eliminated_founder() -> None:
    game = _started_game("2H 3C 4D", "KS QS 9S", "KH QH 9H")
    game.players[0].lives = 1

    game.play_turn(Knock())
    _stack_deck(game, "2D")
    game.play_turn(Draw(0))
    _stack_deck(game, "2D")
    game.play_turn(Draw(0))

    assert isinstance(game.state, RoundEnded)
    game.start_round()
    assert game.state == Started(turn=1, knocked=None)
    assert game.players[0].hand is None


def test_last_survivor_wins_the_game() -> None:
    game = _started_game("KS QS 9S", "2H 3C 4D")
    game.players[1].lives = 1

    game.play_turn(Knock())
    _stack_deck(game, "2D")
    game.play_turn(Draw(0))

    state = game.state
    assert isinstance(state, GameEnded)
    assert state.winner.id == "p0"
    with pytest.raises(GameNotStarted):
        game.play_turn(Knock())
    with pytest.raises(GameAlreadyStarted):
        game.start_round()


def test_play_turn_after_round_end_requires_new_round() -> None:
    game = _started_game("KS QS 9S", "2H 3C 4D", "5H 6C 7D")
    game.play_turn(Knock())
    _stack_deck(game, "2D")
    game.play_turn(Draw(0))
    _stack_deck(game, "2D")
    game.play_turn(Draw(0))

    with pytest.raises(RoundNotStarted):
        game.play_turn(Knock())
    assert legal_turns(game) == []


def test_everyone_eliminated_stalls_round_until_reset() -> None:
    game = _started_game("2H 3C 4D", "4H 2C 3D")
    for player in game.players:
        player.lives = 1

    game.play_turn(Knock())
    _stack_deck(game, "4S")
    with pytest.raises(NoMorePlayers):
        game.play_turn(Draw(0))

    assert game.stalled
    assert game.state == Started(turn=1, knocked=0)
    assert game.players[1].hand == _hand("4S 2C 3D")
    assert [player.lives for player in game.players] == [1, 1]
    assert game.history.rounds == []
    assert legal_turns(game) == []

    with pytest.raises(NoMorePlayers):
        game.play_turn(Draw(0))
    with pytest.raises(NoMorePlayers):
        game.play_turn(Knock())
    assert game.state == Started(turn=1, knocked=0)

    game.reset()
    assert not game.stalled
    assert game.state == Waiting()


def test_reshuffle_keeps_visible_discard() -> None:
    game = _started_game("2H 3C 4D", "5H 6C 7D")
    top = game.get_discard()
    buried = list(game._deck)
    game._discard = Deck(buried + [top])

    game._reshuffle()

    assert game.get_discard() == top
    assert game.discard_size == 1
    assert game.deck_size == len(buried)


def test_draw_from_empty_deck_reshuffles_first() -> None:
    game = _started_game("2H 3C 4D", "5H 6C 7D")
    top = game.get_discard()
    buried = list(game._deck)
    game._discard = Deck(buried + [top])

    game.play_turn(Draw(0))

    assert game.deck_size + game.discard_size == 52 - 6
    assert game.discard_size == 2
    assert game.get_discard() == Card.from_code("2H")


def test_draw_fails_when_nothing_can_be_reshuffled() -> None:
    game = _started_game("2H 3C 4D", "5H 6C 7D")
    top = game.get_discard()
    list(game._deck)

    with pytest.raises(DeckEmpty):
        game.play_turn(Draw(0))

    assert game.get_discard() == top
    assert game.discard_size == 1
    assert game.players[0].hand == _hand("2H 3C 4D")


@pytest.mark.parametrize("phase", ["waiting", "started", "round_ended", "game_ended"])
def test_reset_from_any_phase(phase: str) -> None:
    if phase == "waiting":
        game = _new_game(2)
    else:
        game = _started_game("KS QS 9S", "2H 3C 4D", "5H 6C 7D")
        if phase == "game_ended":
            game.players[2].lives = 0
            game.players[2].hand = None
            game.players[1].lives = 1
        if phase != "started":
            game.play_turn(Knock())
            _stack_deck(game, "2D")
            game.play_turn(Draw(0))
            if isinstance(game.state, Started):
                _stack_deck(game, "2D")
                game.play_turn(Draw(0))

    game.reset()

    assert game.state == Waiting()
    assert game.round == 0
    assert game.deck_size == 52
    assert game.discard_size == 0
    assert game.history.rounds == []
    for player in game.players:
        assert player.lives == 4
        assert player.hand is None


def test_legal_turns_drop_knock_after_a_knock() -> None:
    game = _started_game("KS QS 9S", "2H 3C 4D")

    assert Knock() in legal_turns(game)
    assert len(legal_turns(game)) == 7

    game.play_turn(Knock())

    assert Knock() not in legal_turns(game)
