from __future__ import annotations

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from catan_practice.config import DraftConfig
from catan_practice.domain.codec import DecodeError
from catan_practice.domain.validation import pip_value, vertex_pip_total
from catan_practice.game.engine import DraftSession
from catan_practice.game.policies import PipGreedyPolicy
from catan_practice.game.rules import legal_road_edges, legal_settlement_vertices
from catan_practice.game.state import DraftPhase, GameState

from .labels import TERRAIN_STYLES, current_player_label, phase_label, player_style

RECENT_EVENT_COUNT = 6
HINT_LIMIT = 12

HELP_TEXT = (
    "Commands:\n"
    "  s <vertex>      place a settlement\n"
    "  r <a> <b>       place a road between vertices a and b\n"
    "  u               undo the last placement\n"
    "  n               generate a new board\n"
    "  save            print the board save string\n"
    "  load <string>   load a board from a save string\n"
    "  auto            let the simulated players finish the draft\n"
    "  hints           list every legal placement\n"
    "  q               quit"
)


def board_table(state: GameState) -> Table:
    topology = state.board.topology
    table = Table(title="Board")
    table.add_column("Hex", justify="right")
    table.add_column("Terrain")
    table.add_column("Number", justify="right")
    table.add_column("Pips", justify="right")
    table.add_column("Corners")
    for tile in state.board.tiles:
        corners = []
        for vertex_id in topology.hex_vertex_ids[tile.id]:
            owner = state.settlement_owner(vertex_id)
            if owner is None:
                corners.append(str(vertex_id))
            else:
                corners.append(f"[bold {player_style(owner)}]{vertex_id}*[/]")
        table.add_row(
            str(tile.id),
            f"[{TERRAIN_STYLES[tile.terrain]}]{tile.terrain.value}[/]",
            "-" if tile.token_number is None else str(tile.token_number),
            str(pip_value(tile.token_number)),
            " ".join(corners),
        )
    return table


def status_table(session: DraftSession) -> Table:
    state = session.state
    table = Table(title="Draft", show_header=False)
    table.add_column("Field")
    table.add_column("Value")
    table.add_row("Current player", current_player_label(state))
    table.add_row("Phase", phase_label(state))
    table.add_row("Settlements", str(state.settlement_count()))
    table.add_row("Roads", str(state.road_count()))
    table.add_row("Undo", "available" if session.can_undo() else "-")
    return table


def hint_lines(state: GameState) -> list[str]:
    if state.phase is DraftPhase.PLACING_SETTLEMENT:
        tiles = state.board.tiles
        ranked = sorted(
            legal_settlement_vertices(state),
            key=lambda vertex_id: (-vertex_pip_total(tiles, vertex_id), vertex_id),
        )
        return [f"V{vertex_id} ({vertex_pip_total(tiles, vertex_id)} pips)" for vertex_id in ranked]
    if state.phase is DraftPhase.PLACING_ROAD:
        return [f"{first}-{second}" for first, second in sorted(legal_road_edges(state))]
    return []


def render(session: DraftSession, console: Console) -> None:
    console.print(board_table(session.state))
    console.print(status_table(session))
    hints = hint_lines(session.state)
    if hints:
        shown = ", ".join(hints[:HINT_LIMIT])
        more = f" (+{len(hints) - HINT_LIMIT} more)" if len(hints) > HINT_LIMIT else ""
        console.print(f"[cyan]Legal:[/cyan] {shown}{more}")
    for line in session.state.event_log[-RECENT_EVENT_COUNT:]:
        console.print(f"[dim]{line}[/dim]")


def execute_command(session: DraftSession, line: str, console: Console, *, seat: int | None = None) -> bool:
    """Run one prompt command; return False when the user asked to quit."""
    parts = line.strip().split(maxsplit=1)
    if not parts:
        return True
    command = parts[0].lower()
    argument = parts[1] if len(parts) > 1 else ""

    if command in ("q", "quit", "exit"):
        return False

    if command in ("h", "help", "?"):
        console.print(HELP_TEXT)
    elif command == "s":
        vertex_id = _parse_ints(argument, 1, console)
        if vertex_id is not None and not session.place_settlement(vertex_id[0]):
            _report_rejection(session, console)
    elif command == "r":
        edge = _parse_ints(argument, 2, console)
        if edge is not None and not session.place_road((edge[0], edge[1])):
            _report_rejection(session, console)
    elif command == "u":
        if not session.undo():
            console.print("[yellow]Nothing to undo.[/yellow]")
        elif seat is not None:
            # Undo back through simulated turns to the seat being practised.
            while session.can_undo() and session.state.current_player_id != seat:
                session.undo()
    elif command == "n":
        if session.requires_new_board_confirmation() and not click.confirm(
            "Discard all placements and generate a new board?", default=False
        ):
            return True
        session.new_board()
    elif command == "save":
        console.print(session.save_board(), soft_wrap=True, highlight=False)
    elif command == "load":
        if session.requires_new_board_confirmation() and not click.confirm(
            "Discard all placements and load this board?", default=False
        ):
            return True
        try:
            session.load_board(argument)
        except DecodeError as exc:
            console.print(f"[red]Could not load board:[/red] {escape(str(exc))}")
            return True
    elif command == "auto":
        session.autoplay()
    elif command == "hints":
        console.print(", ".join(hint_lines(session.state)) or "No placements available.")
        return True
    else:
        console.print(f"[red]Unknown command:[/red] {escape(command)}. Type 'help' for commands.")
        return True

    if seat is not None:
        session.autoplay(until_player=seat)
    return True


def run_practice(session: DraftSession, console: Console, *, seat: int | None = None) -> None:
    if seat is not None:
        session.autoplay(until_player=seat)
    console.print(HELP_TEXT)
    while True:
        render(session, console)
        line = click.prompt("command", default="", show_default=False)
        if not execute_command(session, line, console, seat=seat):
            break


@click.command()
@click.option("--seed", type=int, default=None, help="Seed for reproducible boards.")
@click.option("--skip-roads", is_flag=True, default=False, help="Draft settlements only.")
@click.option("--board", "board_text", default=None, help="Start from a saved board string.")
@click.option(
    "--seat",
    type=click.IntRange(1, 4),
    default=None,
    help="Practise one seat and let the other players be simulated.",
)
def main(seed: int | None, skip_roads: bool, board_text: str | None, seat: int | None) -> None:
    """Practise the opening settlement and road draft."""
    config = DraftConfig(skip_roads=skip_roads, seed=seed)
    policies = None
    if seat is not None:
        policies = {
            player_id: PipGreedyPolicy()
            for player_id in range(1, config.player_count + 1)
            if player_id != seat
        }
    session = DraftSession(config, policies=policies)
    if board_text:
        try:
            session.load_board(board_text)
        except DecodeError as exc:
            raise click.BadParameter(str(exc), param_hint="--board") from exc

    run_practice(session, Console(), seat=seat)


def _parse_ints(argument: str, count: int, console: Console) -> list[int] | None:
    tokens = argument.replace("-", " ").split()
    if len(tokens) != count or not all(token.isascii() and token.isdigit() for token in tokens):
        console.print(f"[red]Expected {count} vertex number(s), got {escape(repr(argument))}.[/red]")
        return None
    return [int(token) for token in tokens]


def _report_rejection(session: DraftSession, console: Console) -> None:
    rejection = session.last_rejection
    reason = rejection.reason if rejection is not None else "Placement rejected."
    console.print(f"[red]{escape(reason)}[/red]")
