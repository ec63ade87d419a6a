"""Typer entry-point wiring for the Blitz CLI."""

from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Sequence

import typer
from rich import box
from rich.console import Console
from rich.table import Table

from .. import actions, benchmark, scoreboard
from ..actions import Draw, DrawDiscard, Knock, Turn
from ..errors import BlitzError, NoMorePlayers
from ..game import Game
from ..hand import HAND_SIZE
from ..logging_utils import LOG_LEVEL, setup_logging
from ..player import Player
from ..state import GameEnded, RoundEnded, Started
from ..strategy import GreedyPolicy
from .render import format_card, render_game


@dataclass(slots=True)
class PlayerContext:
    """Runtime metadata describing each seated player."""

    label: str
    role: str  # "Human" or "AI"


app = typer.Typer(add_completion=False, rich_markup_mode="rich")
console = Console()

MAX_EVENT_LOG = 12


def _append_event(log: list[str], message: str) -> None:
    """Append ``message`` to ``log`` maintaining a bounded log length."""

    log.append(message)
    excess = len(log) - MAX_EVENT_LOG
    if excess > 0:
        del log[:excess]


def _parse_turn(text: str) -> Turn:
    """Parse human input such as ``d2`` (draw into slot 2), ``p1`` or ``k``.

    Slots are numbered from 1 for humans and converted to hand indices.
    """

    command = text.strip().lower()
    if command in {"k", "knock"}:
        return Knock()
    if len(command) >= 2 and command[0] in {"d", "p"} and command[1:].isdigit():
        slot = int(command[1:])
        if not 1 <= slot <= HAND_SIZE:
            raise ValueError(f"slot must be between 1 and {HAND_SIZE}")
        if command[0] == "d":
            return Draw(slot - 1)
        return DrawDiscard(slot - 1)
    raise ValueError(f"unrecognised action '{text}'")


def _describe_turn(turn: Turn, game: Game) -> str:
    if isinstance(turn, DrawDiscard):
        return f"takes {format_card(game.get_discard())} into slot {turn.index + 1}"
    if isinstance(turn, Draw):
        return f"draws from the deck into slot {turn.index + 1}"
    return "[red]knocks[/red]"


def _actor_label(ctx: PlayerContext) -> str:
    return f"[yellow]{ctx.label}[/yellow]" if ctx.role == "Human" else f"[cyan]{ctx.label}[/cyan]"


def _action_help(game: Game) -> str:
    legal = actions.legal_turns(game)
    parts = [f"d1-d{HAND_SIZE} draw from deck"]
    if any(isinstance(turn, DrawDiscard) for turn in legal):
        parts.append(f"p1-p{HAND_SIZE} take {game.get_discard().label()}")
    if any(isinstance(turn, Knock) for turn in legal):
        parts.append("k knock")
    return ", ".join(parts)


def _render_round_summary(summary: scoreboard.RoundSummary, game: Game) -> Table:
    """Return a Rich table describing the outcome of a round."""

    title = f"Round {summary.round_number} Summary"
    if summary.blitz:
        title += " (Blitz!)"
    table = Table(title=title, box=box.SIMPLE_HEAVY)
    table.add_column("Player", justify="center")
    table.add_column("Hand", justify="right")
    table.add_column("Lives lost", justify="right")
    table.add_column("Lives left", justify="right")
    table.add_column("Note", justify="left")

    for score in summary.scores:
        player = game.player(score.player_id)
        name = player.name if player is not None else score.player_id
        notes: list[str] = []
        if summary.knocked_by == score.player_id:
            notes.append("knocked")
        if score.eliminated:
            notes.append("[red]eliminated[/red]")
        table.add_row(
            name,
            str(score.hand_value),
            str(score.lives_lost),
            str(score.lives_remaining),
            ", ".join(notes),
        )
    return table


def _render_match_summary(history: scoreboard.MatchHistory, game: Game) -> Table:
    table = Table(title="Match Totals", box=box.SIMPLE_HEAVY)
    table.add_column("Player", justify="center")
    table.add_column("Rounds", justify="right")
    table.add_column("Lost", justify="right")
    table.add_column("Lives lost", justify="right")
    table.add_column("Blitzes", justify="right")
    for total in history.totals():
        player = game.player(total.player_id)
        table.add_row(
            player.name if player is not None else total.player_id,
            str(total.rounds_played),
            str(total.rounds_lost),
            str(total.lives_lost),
            str(total.blitzes),
        )
    return table


def _human_turn(game: Game, seat: int, roles: Sequence[str], events: Sequence[str]) -> Turn:
    console.print(render_game(game, roles, reveal_players=[seat], title="Table"))
    for line in events[-MAX_EVENT_LOG:]:
        console.print(f"  {line}")
    while True:
        text = typer.prompt(f"Your move ({_action_help(game)})")
        try:
            return _parse_turn(text)
        except ValueError as exc:
            console.print(f"[red]{exc}[/red]")


def _run_game(
    game: Game,
    players_ctx: Sequence[PlayerContext],
    policy: GreedyPolicy,
    *,
    interactive: bool,
) -> None:
    roles = [ctx.role for ctx in players_ctx]
    events: list[str] = []

    while not isinstance(game.state, GameEnded):
        game.start_round()
        _append_event(events, f"[bold]Round {game.round}[/bold] dealt, discard {format_card(game.get_discard())}")

        while isinstance(game.state, Started):
            state = game.state
            ctx = players_ctx[state.turn]
            player = game.players[state.turn]
            if ctx.role == "Human":
                turn = _human_turn(game, state.turn, roles, events)
            else:
                assert player.hand is not None
                turn = policy.choose(player.hand, game.get_discard(), state)
            description = _describe_turn(turn, game)
            try:
                game.play_turn(turn)
            except NoMorePlayers:
                raise
            except BlitzError as exc:
                console.print(f"[red]{exc}[/red]")
                continue
            _append_event(events, f"{_actor_label(ctx)} {description}")

        console.print(render_game(game, roles, title="Showdown"))
        if game.history.rounds:
            console.print(_render_round_summary(game.history.rounds[-1], game))

        if isinstance(game.state, RoundEnded) and interactive:
            if not typer.confirm("Deal the next round?", default=True):
                raise typer.Exit()

    state = game.state
    assert isinstance(state, GameEnded)
    console.print(f"[bold green]{state.winner.name} wins the game![/bold green]")
    console.print(_render_match_summary(game.history, game))


@app.command()
def play(
    players: int = typer.Option(3, min=1, max=6, help="Number of seated players."),
    humans: int = typer.Option(1, min=0, help="Human-controlled seats starting from P0."),
    seed: int | None = typer.Option(None, help="Random seed for reproducible games (omit for randomness)."),
    knock_threshold: int = typer.Option(27, min=0, max=31, help="Hand value at which AI seats knock."),
    log_level: str = typer.Option(LOG_LEVEL, help="Log level for engine diagnostics."),
) -> None:
    """Play a hot-seat game of Blitz against AI opponents."""

    if humans > players:
        raise typer.BadParameter("Humans cannot exceed the total number of players.")
    setup_logging(log_level)

    players_ctx = [
        PlayerContext(label=f"P{idx}", role="Human" if idx < humans else "AI") for idx in range(players)
    ]
    seated = [Player(id=f"p{idx}", name=ctx.label) for idx, ctx in enumerate(players_ctx)]
    rng = random.Random(seed) if seed is not None else random.Random()
    game = Game(seated[0], rng=rng)
    for player in seated[1:]:
        game.join(player)

    try:
        _run_game(game, players_ctx, GreedyPolicy(knock_threshold=knock_threshold), interactive=humans > 0)
    except NoMorePlayers:
        console.print("[bold yellow]Every remaining player was eliminated. The game is a draw.[/bold yellow]")


@app.command("simulate")
def simulate_cli(
    games: int = typer.Option(100, min=1, help="Number of complete games to play."),
    players: int = typer.Option(4, min=1, max=6, help="Number of AI seats."),
    seed: int = typer.Option(123, help="Random seed for the simulation."),
    knock_threshold: int = typer.Option(27, min=0, max=31, help="Hand value at which seats knock."),
    turn_limit: int = typer.Option(benchmark.DEFAULT_TURN_LIMIT, min=1, help="Turns per round before a knock is forced."),
    log_level: str = typer.Option(LOG_LEVEL, help="Log level for engine diagnostics."),
) -> None:
    """Run AI-only games and summarise the results per seat."""

    setup_logging(log_level)
    policies = [GreedyPolicy(knock_threshold=knock_threshold) for _ in range(players)]
    report = benchmark.run_self_play(games, policies, seed=seed, turn_limit=turn_limit)

    table = Table(title="Self-play Summary", box=box.SIMPLE_HEAVY)
    table.add_column("Seat", justify="center")
    table.add_column("Wins", justify="right")
    table.add_column("Rounds lost", justify="right")
    table.add_column("Lives lost", justify="right")
    table.add_column("Blitzes", justify="right")
    for seat in report.seats:
        table.add_row(
            f"P{seat.seat}",
            str(seat.wins),
            str(seat.rounds_lost),
            str(seat.lives_lost),
            str(seat.blitzes),
        )
    console.print(table)
    console.print(
        f"[cyan]{report.games} game(s), {report.rounds} round(s) simulated; "
        f"{report.blitz_rounds} blitz(es), {report.knocks} knock(s), "
        f"{report.forced_knocks} forced, {report.draws} draw(s).[/cyan]"
    )


def main() -> None:
    """Entry-point for ``python -m blitz.cli``."""

    app()


if __name__ == "__main__":  # pragma: no cover - CLI invocation
    main()
