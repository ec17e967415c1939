from collections.abc import Callable, Iterator
from contextlib import contextmanager
from enum import StrEnum
from typing import Annotated, TypeVar

import typer

from pitch_tracker.cli._logging import configure_logging
from pitch_tracker.cli._output import (
    console,
    print_error,
    print_lineup,
    print_pitch_logged,
    print_recent,
    print_stats,
    print_status,
    print_warning,
)
from pitch_tracker.cli.factory import SessionContext, build_session_context
from pitch_tracker.config import TrackerSettings, create_config, load_settings
from pitch_tracker.domain.lineup import BatsHand
from pitch_tracker.domain.pitch import PitchResult, PitchType
from pitch_tracker.domain.pitch_stats import pitch_type_breakdown, recent_events, summarize
from pitch_tracker.domain.session import SessionState
from pitch_tracker.exceptions import ConfigError, PersistenceError, PreconditionError, ValidationError
from pitch_tracker.services.pitch_entry import PendingState

T = TypeVar("T")
E = TypeVar("E", bound=StrEnum)

app = typer.Typer(name="pitch-tracker", help="Pitch Tracker: pitch-by-pitch scorekeeping")


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Enable DEBUG logging")] = False,
    db: Annotated[str | None, typer.Option("--db", help="Session database path")] = None,
    config: Annotated[str, typer.Option("--config", help="YAML config file")] = "pitch_tracker.yaml",
) -> None:
    """Pitch Tracker: pitch-by-pitch scorekeeping."""
    configure_logging(verbose=verbose)
    try:
        ctx.obj = load_settings(create_config(yaml_path=config, db_path=db))
    except ConfigError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e
    if ctx.invoked_subcommand is None:
        raise typer.Exit()


@contextmanager
def _session(ctx: typer.Context) -> Iterator[SessionContext]:
    settings: TrackerSettings = ctx.obj
    try:
        with build_session_context(settings) as session:
            yield session
    except (ValidationError, PreconditionError) as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e
    except PersistenceError as e:
        print_warning(str(e))


def _saving(action: Callable[[], T]) -> T | None:
    """Run a store mutation, reporting a failed write as a warning."""
    try:
        return action()
    except PersistenceError as e:
        print_warning(f"{e} Changes are kept until this command exits.")
        return None


def _require_game(state: SessionState) -> None:
    if state.game is None:
        raise PreconditionError("Start a game first.")


def _resolve_batter(state: SessionState, token: str) -> str:
    """Accept a lineup id, or a jersey number worn by exactly one batter."""
    if state.batter(token) is not None:
        return token
    text = token.strip().lstrip("#")
    if text.isdigit():
        matches = [b for b in state.lineup if b.number == int(text)]
        if len(matches) == 1:
            return matches[0].id
        if len(matches) > 1:
            raise ValidationError(f"More than one batter wears #{text}; use the batter id.")
    return token


def _match(enum: type[E], token: str) -> E | str:
    lowered = token.strip().lower()
    return next((member for member in enum if member.value.lower() == lowered), token)


@app.command("new-game")
def new_game(
    ctx: typer.Context,
    opponent: Annotated[str, typer.Option("--opponent", "-o", help="Opponent name")] = "",
    field: Annotated[str, typer.Option("--field", "-f", help="Field name")] = "",
) -> None:
    """Start a new game. Lineup, pitcher and pitch history are kept."""
    with _session(ctx) as session:
        _saving(lambda: session.store.start_game(opponent, field))
        print_status(session.store.snapshot())


@app.command()
def reset(
    ctx: typer.Context,
    yes: Annotated[bool, typer.Option("--yes", "-y", help="Skip the confirmation prompt")] = False,
) -> None:
    """Delete ALL saved data for this session."""
    if not yes:
        typer.confirm("Delete ALL saved data on this device?", abort=True)
    with _session(ctx) as session:
        _saving(session.store.reset_all)
        console.print("[bold green]Session cleared[/bold green]")


@app.command("add-batter")
def add_batter(
    ctx: typer.Context,
    number: Annotated[str, typer.Argument(help="Jersey number")],
    name: Annotated[str, typer.Argument(help="Batter name")],
    bats: Annotated[str, typer.Option("--bats", "-b", help="Left, Right or Switch")] = BatsHand.RIGHT.value,
) -> None:
    """Add a batter to the lineup."""
    with _session(ctx) as session:
        _require_game(session.store.snapshot())
        _saving(lambda: session.store.add_batter(number, name, bats))
        state = session.store.snapshot()
        added = state.lineup[-1]
        console.print(f"[bold green]Added[/bold green] {added.label} ({added.bats.value})")
        print_lineup(state)


@app.command("remove-batter")
def remove_batter(
    ctx: typer.Context,
    batter: Annotated[str, typer.Argument(help="Batter id or jersey number")],
) -> None:
    """Remove a batter from the lineup. Logged pitches are kept."""
    with _session(ctx) as session:
        batter_id = _resolve_batter(session.store.snapshot(), batter)
        _saving(lambda: session.store.remove_batter(batter_id))
        print_lineup(session.store.snapshot())


@app.command("set-pitcher")
def set_pitcher(
    ctx: typer.Context,
    name: Annotated[str, typer.Argument(help="Pitcher name")],
) -> None:
    """Set the active pitcher."""
    with _session(ctx) as session:
        _require_game(session.store.snapshot())
        _saving(lambda: session.store.set_pitcher(name))
        print_status(session.store.snapshot())


@app.command("set-batter")
def set_batter(
    ctx: typer.Context,
    batter: Annotated[str, typer.Argument(help="Batter id or jersey number")],
) -> None:
    """Set the batter currently at bat."""
    with _session(ctx) as session:
        state = session.store.snapshot()
        _require_game(state)
        if not state.lineup:
            raise PreconditionError("Add batters first.")
        batter_id = _resolve_batter(state, batter)
        _saving(lambda: session.store.set_active_batter(batter_id))
        print_status(session.store.snapshot())


@app.command()
def pitch(
    ctx: typer.Context,
    pitch_type: Annotated[str, typer.Argument(help="Pitch type (FB, 2S, CH, SL, CB, CUT)")],
    zone: Annotated[str, typer.Argument(help="Zone 1-9")],
    result: Annotated[str, typer.Argument(help="Result (Ball, CStr, SwStr, Foul, InPlay-Out, 1B, 2B, 3B, HR)")],
) -> None:
    """Log one pitch against the active pitcher and batter."""
    with _session(ctx) as session:
        entry = session.entry
        entry.choose_pitch(_match(PitchType, pitch_type))
        entry.choose_zone(zone)
        _saving(lambda: entry.choose_result(_match(PitchResult, result)))
        state = session.store.snapshot()
        print_pitch_logged(state.pitches[-1], state.current_batter, len(state.pitches))


@app.command()
def undo(ctx: typer.Context) -> None:
    """Remove the most recently logged pitch."""
    with _session(ctx) as session:
        before = session.store.snapshot().pitches
        if not before:
            console.print("No pitches to undo.")
            return
        _saving(session.store.undo_last)
        removed = before[-1]
        console.print(
            f"[bold yellow]Removed[/bold yellow] {removed.pitch_type.value} zone {removed.zone} {removed.result.value}"
        )


@app.command()
def status(ctx: typer.Context) -> None:
    """Show the game, pitcher, batter and lineup."""
    with _session(ctx) as session:
        state = session.store.snapshot()
        print_status(state)
        print_lineup(state)


@app.command()
def stats(ctx: typer.Context) -> None:
    """Show strike and whiff rates, overall and per pitch type."""
    with _session(ctx) as session:
        pitches = session.store.snapshot().pitches
        print_stats(summarize(pitches), pitch_type_breakdown(pitches))


@app.command()
def recent(
    ctx: typer.Context,
    limit: Annotated[int | None, typer.Option("--limit", "-n", help="Number of pitches to show")] = None,
) -> None:
    """Show the most recent pitches, newest first."""
    with _session(ctx) as session:
        state = session.store.snapshot()
        n = limit if limit is not None else session.settings.recent_limit
        print_recent(state, recent_events(state.pitches, n))


_PROMPTS: dict[PendingState, str] = {
    PendingState.EMPTY: "Pitch type (" + "/".join(p.value for p in PitchType) + ")",
    PendingState.PITCH_CHOSEN: "Zone (1-9)",
    PendingState.PITCH_AND_ZONE_CHOSEN: "Result (" + "/".join(r.value for r in PitchResult) + ")",
}


@app.command()
def live(ctx: typer.Context) -> None:
    """Log pitches interactively: type, then zone, then result.

    Enter ``u`` to undo the last pitch, ``c`` to clear the selection and ``q``
    to quit. A pitch type may be re-entered at any point to change it, and a
    zone number once a pitch type is chosen.
    """
    with _session(ctx) as session:
        store = session.store
        entry = session.entry
        print_status(store.snapshot())
        while True:
            console.print(f"[dim]{entry.describe()}[/dim]")
            try:
                token = typer.prompt(_PROMPTS[entry.state]).strip()
            except typer.Abort:
                break
            command = token.lower()
            if command == "q":
                break
            try:
                if command == "u":
                    count = len(store.snapshot().pitches)
                    _saving(store.undo_last)
                    undone = len(store.snapshot().pitches) < count
                    console.print("Undid last pitch." if undone else "No pitches to undo.")
                elif command == "c":
                    entry.clear()
                elif isinstance(choice := _match(PitchType, token), PitchType):
                    entry.choose_pitch(choice)
                elif entry.state is PendingState.PITCH_CHOSEN or token.isdigit():
                    entry.choose_zone(token)
                else:
                    count = len(store.snapshot().pitches)
                    _saving(lambda: entry.choose_result(_match(PitchResult, token)))
                    state = store.snapshot()
                    if len(state.pitches) > count:
                        print_pitch_logged(state.pitches[-1], state.current_batter, len(state.pitches))
            except (ValidationError, PreconditionError) as e:
                print_error(str(e))
        pitches = store.snapshot().pitches
        print_stats(summarize(pitches), pitch_type_breakdown(pitches))
