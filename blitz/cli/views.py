"""Composable view primitives for the Blitz CLI."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Sequence, Set

from rich import box
from rich.console import Group, RenderableType
from rich.panel import Panel
from rich.table import Table

from ..cards import Card
from ..game import Game
from ..hand import Hand
from ..state import GameEnded, RoundEnded, Started, Waiting


@dataclass(slots=True)
class GameSummaryView:
    """Renderable summarising the current table state."""

    game: Game
    roles: Sequence[str]
    reveal_players: Set[int]
    card_formatter: Callable[[Card], str]

    def _hand_markup(self, hand: Hand | None, visible: bool) -> str:
        if hand is None:
            return "—"
        if not visible:
            return f"{len(hand)} cards"
        return " ".join(self.card_formatter(card) for card in hand)

    def _phase_label(self) -> str:
        state = self.game.state
        if isinstance(state, Waiting):
            return "Waiting for players"
        if isinstance(state, Started):
            return f"Round {self.game.round} in play"
        if isinstance(state, RoundEnded):
            return f"Round {self.game.round} finished"
        if isinstance(state, GameEnded):
            return f"{state.winner.name} won"
        raise TypeError(f"unknown game state {state!r}")

    def _metadata_panel(self) -> Panel:
        grid = Table.grid(expand=True)
        grid.add_column(justify="left")
        grid.add_row(f"[cyan]Phase[/cyan]: {self._phase_label()}")
        grid.add_row(f"[cyan]Deck[/cyan]: {self.game.deck_size} card(s)")
        if self.game.discard_size:
            top_card = self.card_formatter(self.game.get_discard())
            grid.add_row(f"[cyan]Discard[/cyan]: {top_card} ({self.game.discard_size} card(s))")
        else:
            grid.add_row("[cyan]Discard[/cyan]: —")
        return Panel(grid, title="Table State", box=box.SQUARE, border_style="blue")

    def render(self) -> RenderableType:
        state = self.game.state
        turn = state.turn if isinstance(state, Started) else None
        knocked = state.knocked if isinstance(state, Started) else None
        round_over = isinstance(state, (RoundEnded, GameEnded))

        table = Table(box=box.ROUNDED, expand=True)
        table.add_column("Player", justify="left", style="bold")
        table.add_column("Role", justify="left")
        table.add_column("Lives", justify="left")
        table.add_column("Hand", justify="left")
        table.add_column("Value", justify="right")
        table.add_column("Status", justify="left")

        for idx, player in enumerate(self.game.players):
            visible = round_over or idx in self.reveal_players
            role = self.roles[idx] if idx < len(self.roles) else "?"
            value = str(player.hand.value()) if player.hand is not None and visible else ""
            if not player.is_alive:
                status = "[dim]eliminated[/dim]"
            elif idx == turn:
                status = "[yellow]to act[/yellow]"
            else:
                status = ""
            if idx == knocked:
                status = f"{status} [red]knocked[/red]".strip()
            table.add_row(
                player.name,
                role,
                "[red]♥[/red]" * player.lives or "[dim]0[/dim]",
                self._hand_markup(player.hand, visible),
                value,
                status,
            )

        return Group(self._metadata_panel(), table)
