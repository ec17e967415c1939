from collections.abc import Iterable
from datetime import datetime

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from pitch_tracker.domain.lineup import LineupEntry
from pitch_tracker.domain.pitch import PitchEvent
from pitch_tracker.domain.pitch_stats import PitchSummary, PitchTypeLine, format_rate
from pitch_tracker.domain.session import SessionState

console = Console(highlight=False)
err_console = Console(stderr=True, highlight=False)


def print_error(message: str) -> None:
    err_console.print(f"[red bold]Error:[/red bold] {escape(message)}")


def print_warning(message: str) -> None:
    err_console.print(f"[yellow bold]Warning:[/yellow bold] {escape(message)}")


def _local_datetime(timestamp_ms: int) -> datetime:
    return datetime.fromtimestamp(timestamp_ms / 1000)


def batter_label(batter: LineupEntry | None, fallback: str = "(none)") -> str:
    return batter.label if batter is not None else fallback


def game_line(state: SessionState) -> str:
    if state.game is None:
        return "No game started."
    created = _local_datetime(state.game.created_at).strftime("%Y-%m-%d %H:%M")
    line = f"Game: {state.game.opponent or 'Opponent'} • {created}"
    if state.game.field:
        line += f" • {state.game.field}"
    return line


def print_status(state: SessionState) -> None:
    console.print(escape(game_line(state)))
    pitcher = state.pitcher.name if state.pitcher is not None else "(none)"
    console.print(f"Pitcher: [bold]{escape(pitcher)}[/bold]")
    console.print(f"Batter: [bold]{escape(batter_label(state.current_batter))}[/bold]")


def print_lineup(state: SessionState) -> None:
    if not state.lineup:
        console.print("No batters yet. Add them with [bold]add-batter[/bold].")
        return
    table = Table(show_edge=False, pad_edge=False)
    table.add_column("#", justify="right")
    table.add_column("Name")
    table.add_column("Bats")
    table.add_column("ID", style="dim")
    table.add_column("")
    for batter in state.lineup_by_number():
        marker = "[green]at bat[/green]" if batter.id == state.active_batter_id else ""
        table.add_row(str(batter.number), escape(batter.name), batter.bats.value, batter.id, marker)
    console.print(table)


def print_stats(summary: PitchSummary, breakdown: Iterable[PitchTypeLine]) -> None:
    if summary.total == 0:
        console.print("No pitches yet.")
        return
    console.print(
        f"Total Pitches: [bold]{summary.total}[/bold]  "
        f"Strike%: [bold]{format_rate(summary.strike_rate)}[/bold]  "
        f"Whiffs: [bold]{summary.whiffs}[/bold]"
    )
    table = Table(show_edge=False, pad_edge=False)
    table.add_column("Pitch")
    table.add_column("Total", justify="right")
    table.add_column("Strike%", justify="right")
    table.add_column("Whiff%", justify="right")
    for line in breakdown:
        table.add_row(
            f"[bold]{line.pitch_type.value}[/bold]",
            str(line.total),
            format_rate(line.strike_rate),
            format_rate(line.whiff_rate),
        )
    console.print(table)


def print_recent(state: SessionState, events: Iterable[PitchEvent]) -> None:
    table = Table(show_edge=False, pad_edge=False)
    table.add_column("Time")
    table.add_column("P")
    table.add_column("B")
    table.add_column("Type")
    table.add_column("Zone", justify="right")
    table.add_column("Result")
    rows = 0
    for event in events:
        table.add_row(
            _local_datetime(event.timestamp).strftime("%H:%M:%S"),
            escape(event.pitcher),
            escape(batter_label(state.batter(event.batter_id), fallback="(batter)")),
            f"[bold]{event.pitch_type.value}[/bold]",
            str(event.zone),
            event.result.value,
        )
        rows += 1
    if rows == 0:
        console.print("No pitches yet.")
        return
    console.print(table)


def print_pitch_logged(event: PitchEvent, batter: LineupEntry | None, count: int) -> None:
    console.print(
        f"[bold green]Logged[/bold green] pitch {count}: "
        f"{event.pitch_type.value} zone {event.zone} {event.result.value} "
        f"({escape(event.pitcher)} to {escape(batter_label(batter, fallback='(batter)'))})"
    )
