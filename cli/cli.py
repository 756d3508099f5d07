"""CLI for the Diamond Plans practice core.

Developer CLI to generate a practice plan from a stored-shape JSON payload,
check a stored plan's timeline, and rehearse a live practice in the terminal
through the same PracticeSession the app uses.
"""

import time
import uuid
from pathlib import Path
from typing import TypeVar

import typer
from loguru import logger
from pydantic import BaseModel, ValidationError
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from diamond_plans.config.settings import settings
from diamond_plans.core.logger import setup_logger
from diamond_plans.domain.enums import SessionState
from diamond_plans.domain.models import PracticePlan, Segment
from diamond_plans.live.session import PracticeSession
from diamond_plans.live.time_source import format_time, scaled_clock
from diamond_plans.planning.errors import PlanningInvariantError
from diamond_plans.planning.observability import log_invariant_failure
from diamond_plans.planning.service import generate_plan_from_input
from diamond_plans.planning.validate import validate_agenda
from diamond_plans.schemas.plan import GroupingInputSchema, PracticePlanSchema

ModelT = TypeVar("ModelT", bound=BaseModel)

# Initialize Rich console for output
console = Console()

# Initialize Typer app
app = typer.Typer(
    name="diamond-plans",
    help="Diamond Plans - practice plan generator and live practice runner",
    add_completion=False,
)


@app.callback()
def main(
    log_level: str = typer.Option(settings.log_level, "--log-level", help="Log level for this run"),
) -> None:
    """Configure logging before any command runs."""
    setup_logger(level=log_level.upper(), log_file=settings.log_file)


def _load_model(path: Path, model: type[ModelT]) -> ModelT:
    try:
        return model.model_validate_json(path.read_text(encoding="utf-8"))
    except ValidationError as e:
        console.print(f"[red]Invalid {model.__name__} in {path}:[/red]")
        console.print(str(e))
        raise typer.Exit(code=1) from e


def _names(payload: GroupingInputSchema) -> dict[str, str]:
    names = {p.id: p.name for p in payload.present_players}
    names.update({c.id: c.full_name for c in payload.present_coaches})
    return names


def _label(ids: tuple[str, ...], names: dict[str, str]) -> str:
    return ", ".join(names.get(i, i) for i in ids) or "-"


def _render_plan(plan: PracticePlan, names: dict[str, str]) -> None:
    if plan.is_error:
        console.print(Panel(plan.segments[0].station_name, title="Practice unavailable", style="red"))
        return

    title = f"Practice plan ({plan.format.value})"
    if plan.num_stations:
        title += f" - {plan.num_stations} stations x {plan.num_rotations} rotations"

    table = Table(title=title)
    table.add_column("#", justify="right")
    table.add_column("Start", justify="right")
    table.add_column("Min", justify="right")
    table.add_column("Type")
    table.add_column("Name")
    table.add_column("Coaches")
    table.add_column("Players")

    for segment in plan.segments:
        table.add_row(
            str(segment.segment_order),
            format_time(segment.start_offset_minutes * 60_000),
            str(segment.duration_minutes),
            segment.segment_type.value,
            segment.station_name,
            _label(segment.coach_ids, names),
            str(len(segment.player_ids)),
        )
        for station in segment.stations:
            table.add_row(
                "",
                "",
                "",
                "",
                f"  - {station.station_name}",
                _label(station.coach_ids, names),
                _label(station.player_ids, names),
            )

    console.print(table)
    if plan.floating_coach_ids:
        console.print(f"Floating: {_label(plan.floating_coach_ids, names)}")
    console.print(f"Team game: {plan.team_game_duration} min, total {plan.total_duration_minutes} min")


@app.command()
def plan(
    input_path: Path = typer.Argument(..., exists=True, dir_okay=False, readable=True, help="GroupingInput JSON"),
    seed: int | None = typer.Option(None, "--seed", help="Seed for reproducible grouping"),
    as_json: bool = typer.Option(False, "--json", help="Print the stored-shape plan as JSON"),
) -> None:
    """Generate a practice plan."""
    payload = _load_model(input_path, GroupingInputSchema)
    stored = generate_plan_from_input(payload, seed=seed)

    if as_json:
        typer.echo(stored.model_dump_json(indent=2))
        return

    _render_plan(stored.to_domain(), _names(payload))


@app.command()
def validate(
    plan_path: Path = typer.Argument(..., exists=True, dir_okay=False, readable=True, help="PracticePlan JSON"),
) -> None:
    """Check a stored plan's timeline invariants."""
    stored = _load_model(plan_path, PracticePlanSchema)
    segments = stored.to_domain().segments

    try:
        validate_agenda(segments)
    except PlanningInvariantError as e:
        log_invariant_failure(e, stored.format, plan_path=str(plan_path), segments=len(segments))
        console.print(f"[red]{e.code}[/red]: {', '.join(e.details)}")
        raise typer.Exit(code=1) from e

    console.print(f"[green]OK[/green] {len(segments)} segments, {sum(s.duration_minutes for s in segments)} min")


@app.command()
def run(
    input_path: Path = typer.Argument(..., exists=True, dir_okay=False, readable=True, help="GroupingInput JSON"),
    seed: int | None = typer.Option(None, "--seed", help="Seed for reproducible grouping"),
    speed: float = typer.Option(60.0, "--speed", min=0.001, help="Clock speed-up (60 = one practice minute per second)"),
    tick: float | None = typer.Option(None, "--tick", min=0.0, help="Seconds between ticks"),
) -> None:
    """Generate a plan and play it back as a live practice."""
    payload = _load_model(input_path, GroupingInputSchema)
    plan_ = generate_plan_from_input(payload, seed=seed).to_domain()

    if plan_.is_error:
        _render_plan(plan_, {})
        raise typer.Exit(code=1)

    interval = settings.tick_interval_seconds if tick is None else tick

    def on_warning() -> None:
        console.print("  [yellow]30 seconds left[/yellow]")

    def on_segment_complete(segment: Segment) -> None:
        console.print(f"  [green]done[/green] {segment.station_name}")

    session = PracticeSession(
        clock=scaled_clock(speed),
        on_warning=on_warning,
        on_segment_complete=on_segment_complete,
    )
    session_id = str(uuid.uuid4())
    session.start_practice(session_id, plan_.segments)
    logger.info("Rehearsing practice", session_id=session_id, speed=speed, tick=interval)

    shown = -1
    while session.state != SessionState.COMPLETED:
        snapshot = session.tick()
        if snapshot.current_index != shown and snapshot.state != SessionState.COMPLETED:
            shown = snapshot.current_index
            current = snapshot.current_segment
            if current is not None:
                console.print(
                    f"[bold]{shown + 1}/{snapshot.total_segments}[/bold] "
                    f"{current.station_name} ({current.duration_minutes} min)"
                )
        time.sleep(interval)

    console.print("[bold green]Practice complete[/bold green]")


if __name__ == "__main__":
    app()
