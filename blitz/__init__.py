"""Top-level package for the Blitz game engine."""

from . import actions, cards, deck, errors, game, hand, player, rules, scoreboard, state
from .actions import Draw, DrawDiscard, Knock, Turn
from .cards import Card, Face, Suit
from .deck import Deck
from .game import Game
from .hand import Hand
from .player import Player
from .state import GameEnded, GameState, RoundEnded, Started, Waiting

__all__ = [
    "actions",
    "cards",
    "deck",
    "errors",
    "game",
    "hand",
    "player",
    "rules",
    "scoreboard",
    "state",
    "Card",
    "Deck",
    "Draw",
    "DrawDiscard",
    "Face",
    "Game",
    "GameEnded",
    "GameState",
    "Hand",
    "Knock",
    "Player",
    "RoundEnded",
    "Started",
    "Suit",
    "Turn",
    "Waiting",
]
