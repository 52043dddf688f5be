"""
Typer CLI for the adaptive course path engine.

Runs the engine over a learner snapshot exported from the store.

Commands:
    coursepath path SNAPSHOT --course ID       - Adaptive path through a course
    coursepath analyze SNAPSHOT --course ID    - Classify recent checkpoint answers
    coursepath recommend SNAPSHOT              - Recommend courses to enroll in

Usage:
    coursepath --help
    coursepath path data/learner.json --course c-101
    coursepath analyze data/learner.json --course c-101 --json
    python -m src.cli.main recommend data/learner.json
"""

from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Any, NoReturn

import typer
from loguru import logger
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from config import get_settings
from src.adaptive.errors import AdaptiveEngineError
from src.adaptive.learning_engine import LearningEngine
from src.adaptive.models import AdaptivePathView, PerformanceLevel, PerformanceUpdate
from src.adaptive.snapshot import LearnerSnapshot, load_snapshot

app = typer.Typer(
    name="coursepath",
    help="Adaptive course paths from learner background, goals and checkpoint performance",
    no_args_is_help=True,
)
console = Console()


# =============================================================================
# Setup
# =============================================================================


def configure_logging(verbose: bool = False) -> None:
    """Route loguru to stderr (and the configured log file) at the settings level."""
    settings = get_settings()
    level = "DEBUG" if verbose else settings.log_level
    logger.remove()
    logger.add(
        sys.stderr,
        level=level,
        format="<dim>{time:HH:mm:ss}</dim> | <level>{level: <8}</level> | {message}",
    )
    if settings.log_file:
        logger.add(settings.log_file, level=level, rotation="10 MB")


@app.callback()
def main_callback(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show engine decisions"),
) -> None:
    configure_logging(verbose)


def _load(snapshot_path: Path) -> LearnerSnapshot:
    try:
        return load_snapshot(snapshot_path)
    except AdaptiveEngineError as e:
        _fail(e)


def _fail(error: Exception) -> NoReturn:
    console.print(f"[red]Error: {escape(str(error))}[/red]")
    raise typer.Exit(1)


def _echo_json(data: dict[str, Any]) -> None:
    typer.echo(json.dumps(data, indent=2))


def _flag(value: bool) -> str:
    return "[green]yes[/green]" if value else "[dim]no[/dim]"


# =============================================================================
# Display Helpers
# =============================================================================


def render_path(view: AdaptivePathView) -> None:
    path = view.adaptive_path
    console.print(
        f"\n[bold]{view.course.title}[/bold] "
        f"([cyan]{view.course.difficulty.value}[/cyan]) - "
        f"{view.user.background.value} learner, goal: {view.user.career_goal.display_name}"
    )
    level = view.user.performance_level
    console.print(
        f"Performance: [{level.color}]{level.value}[/{level.color}]  "
        f"Pace: [bold]{path.recommended_pace.value}[/bold]  "
        f"Start: module #{path.starting_module}  "
        f"Modules: {path.total_modules}\n"
    )

    table = Table(title="Learning Path")
    table.add_column("#", justify="right")
    table.add_column("Module")
    table.add_column("Difficulty")
    table.add_column("Unlocked", justify="center")
    table.add_column("Recommended", justify="center")
    table.add_column("Minutes", justify="right")
    for module in path.modules:
        table.add_row(
            str(module.order),
            module.title,
            module.difficulty.value,
            _flag(module.is_unlocked),
            _flag(module.is_recommended),
            str(module.estimated_time),
        )
    console.print(table)

    if path.career_recommendations:
        console.print("\n[bold]Career-relevant modules[/bold]")
        for rec in path.career_recommendations:
            console.print(f"  - {rec.title} [dim]({rec.relevance})[/dim]")

    console.print("\n[bold]Recommendations[/bold]")
    for line in view.recommendations:
        console.print(f"  - {line}")


def render_update(update: PerformanceUpdate) -> None:
    if not update.updated:
        console.print("[yellow]No recent answers - performance unchanged[/yellow]")
        return

    level = update.performance_level or PerformanceLevel.AVERAGE
    table = Table(title="Performance", show_header=False)
    table.add_column("Metric")
    table.add_column("Value")
    table.add_row("Answers analyzed", str(update.answers_analyzed))
    table.add_row("Success rate", f"{update.success_rate:.1f}%")
    table.add_row("Average time", f"{update.average_time_seconds:.1f}s")
    table.add_row("Level", f"[{level.color}]{level.value}[/{level.color}]")
    table.add_row("Pace", update.recommended_pace.value if update.recommended_pace else "-")
    table.add_row("Weak areas", ", ".join(update.weak_areas) or "-")
    console.print(table)


# =============================================================================
# Commands
# =============================================================================


@app.command()
def path(
    snapshot_path: Path = typer.Argument(..., help="Learner snapshot JSON file"),
    course_id: str = typer.Option(..., "--course", "-c", help="Course id"),
    as_json: bool = typer.Option(False, "--json", help="Print the camelCase JSON view"),
) -> None:
    """Generate the adaptive learning path for a course."""
    snapshot = _load(snapshot_path)
    engine = LearningEngine.from_settings()
    try:
        course = snapshot.get_course(course_id)
        view = engine.generate_adaptive_path(
            snapshot.learner,
            course,
            snapshot.modules_for(course_id),
            snapshot.progress_for(course_id),
        )
    except AdaptiveEngineError as e:
        _fail(e)

    if as_json:
        _echo_json(view.to_json_dict())
    else:
        render_path(view)


@app.command()
def analyze(
    snapshot_path: Path = typer.Argument(..., help="Learner snapshot JSON file"),
    course_id: str = typer.Option(..., "--course", "-c", help="Course id"),
    as_json: bool = typer.Option(False, "--json", help="Print the update as JSON"),
) -> None:
    """Classify recent checkpoint answers and show the updated progress and profile."""
    snapshot = _load(snapshot_path)
    engine = LearningEngine.from_settings()
    try:
        snapshot.get_course(course_id)
    except AdaptiveEngineError as e:
        _fail(e)

    progress = snapshot.progress_for(course_id)
    if progress is None:
        # Not enrolled: no progress record to classify against
        update = PerformanceUpdate.unchanged()
        learner = updated_progress = None
    else:
        learner, updated_progress, update = engine.update_learner(
            snapshot.learner, progress, snapshot.answers
        )

    if as_json:
        _echo_json({
            "update": update.to_json_dict(),
            "progress": updated_progress.to_json_dict() if updated_progress else None,
            "learner": learner.to_json_dict() if learner else None,
        })
        return

    if updated_progress is None:
        console.print(f"[dim]Learner is not enrolled in {course_id}; nothing to analyze[/dim]")
        return
    render_update(update)
    if update.updated:
        console.print(f"Average quiz score: [bold]{learner.average_quiz_score:.1f}%[/bold]")


@app.command()
def recommend(
    snapshot_path: Path = typer.Argument(..., help="Learner snapshot JSON file"),
    as_json: bool = typer.Option(False, "--json", help="Print recommendations as JSON"),
) -> None:
    """Recommend courses the learner is not enrolled in."""
    snapshot = _load(snapshot_path)
    engine = LearningEngine.from_settings()
    result = engine.recommend_courses(
        snapshot.learner,
        snapshot.courses,
        snapshot.enrolled_course_ids(),
    )

    if as_json:
        _echo_json(result.to_json_dict())
        return

    if not result.courses:
        console.print("[yellow]No matching courses[/yellow]")
        return

    table = Table(title="Recommended Courses")
    table.add_column("Course")
    table.add_column("Difficulty")
    table.add_column("Rating", justify="right")
    table.add_column("Students", justify="right")
    for course in result.courses:
        table.add_row(
            course.title,
            course.difficulty_level.value,
            f"{course.average_rating:.1f}",
            str(course.enrolled_students),
        )
    console.print(table)


# =============================================================================
# Entry Point
# =============================================================================


def main() -> None:
    """CLI entry point."""
    app()


if __name__ == "__main__":
    main()
