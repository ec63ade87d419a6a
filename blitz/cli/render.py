"""Rendering helpers dedicated to the CLI experience."""

from __future__ import annotations

from typing import Iterable, Sequence

from rich.console import RenderableType
from rich.panel import Panel

from ..cards import Card, Suit
from ..game import Game
from .views import GameSummaryView

_SUIT_COLORS = {
    Suit.SPADE: "cyan",
    Suit.HEART: "red",
    Suit.DIAMOND: "magenta",
    Suit.CLUB: "green",
}


def format_card(card: Card) -> str:
    """Return a Rich-rendered label for ``card``."""

    color = _SUIT_COLORS.get(card.suit, "white")
    return f"[{color}]{card.label()}[/{color}]"


def render_game(
    game: Game,
    roles: Sequence[str],
    *,
    reveal_players: Iterable[int] | None = None,
    title: str = "Blitz",
) -> RenderableType:
    """Return a Rich panel describing the current table state."""

    view = GameSummaryView(
        game=game,
        roles=roles,
        reveal_players=set(reveal_players or set()),
        card_formatter=format_card,
    )
    return Panel(view.render(), title=title, padding=(0, 1), border_style="cyan")
