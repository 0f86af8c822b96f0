"""CLI for the workout conflict engine.

Developer CLI to run conflict detection locally against JSON files holding an
options bundle and (optionally) a context snapshot, using the same engine
code path as embedding applications.
"""

import json
from pathlib import Path
from typing import Any

import typer
from loguru import logger
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from workout_conflicts.config.settings import settings
from pydantic import ValidationError

from workout_conflicts.conflicts import (
    ConflictDetectionEngine,
    ConflictRecord,
    ConflictThresholds,
    build_rule_set,
    review_configuration,
)
from workout_conflicts.core.logger import setup_logger

# Initialize Rich console for output
console = Console()

# Initialize Typer app
app = typer.Typer(
    name="workout-conflicts",
    help="Workout conflict engine CLI - check customization options for conflicts",
    add_completion=False,
)

SEVERITY_STYLES = {"high": "bold red", "medium": "yellow", "low": "cyan"}


@app.callback()
def main(
    log_level: str = typer.Option(settings.log_level, "--log-level", help="Logging level (DEBUG, INFO, WARNING, ERROR)"),
) -> None:
    """Configure logging before running a command."""
    setup_logger(level=log_level.upper(), log_file=settings.log_file)


def _load_json(path: Path | None, label: str) -> dict[str, Any]:
    """Load a JSON object from a file, exiting with code 1 on failure."""
    if path is None:
        return {}
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        console.print(f"[red]Error:[/red] could not read {label} file {path}: {e}")
        logger.error(f"Failed to load {label} file", path=str(path))
        raise typer.Exit(1) from e
    if not isinstance(data, dict):
        console.print(f"[red]Error:[/red] {label} file {path} must contain a JSON object")
        raise typer.Exit(1)
    return data


def _thresholds() -> ConflictThresholds:
    """Resolve thresholds from settings, exiting with code 1 on inconsistent overrides."""
    try:
        return settings.thresholds()
    except ValidationError as e:
        console.print(f"[red]Error:[/red] invalid threshold overrides in environment: {e.errors()[0]['msg']}")
        logger.error("Invalid threshold overrides", errors=e.error_count())
        raise typer.Exit(1) from e


def _engine(thresholds: ConflictThresholds) -> ConflictDetectionEngine:
    return ConflictDetectionEngine(build_rule_set(thresholds))


def _conflict_table(title: str, records: list[ConflictRecord]) -> Table:
    table = Table(title=title, show_lines=True)
    table.add_column("Severity")
    table.add_column("Type")
    table.add_column("Components")
    table.add_column("Description")
    table.add_column("Resolution")
    table.add_column("Confidence", justify="right")
    for record in records:
        table.add_row(
            Text(record.severity, style=SEVERITY_STYLES[record.severity]),
            record.type,
            ", ".join(record.components),
            record.description,
            record.suggested_resolution,
            f"{record.confidence:.2f}",
        )
    return table


@app.command()
def check(
    options_file: Path = typer.Argument(..., help="JSON file holding the options bundle"),
    context_file: Path = typer.Option(None, "--context", "-c", help="JSON file holding the context snapshot"),
    aggregate: bool = typer.Option(settings.aggregate_by_default, "--aggregate/--raw", help="Merge duplicate conflicts"),
    as_json: bool = typer.Option(False, "--json", help="Print records as JSON"),
) -> None:
    """Detect conflicts for an options bundle.

    Examples:
        python cli/cli.py check options.json --context context.json
        python cli/cli.py check options.json --json
    """
    options = _load_json(options_file, "options")
    context = _load_json(context_file, "context")

    records = _engine(_thresholds()).detect_conflicts(options, context, aggregate=aggregate)

    if as_json:
        typer.echo(json.dumps([record.model_dump(mode="json", by_alias=True) for record in records], indent=2))
        return

    if not records:
        console.print(Panel(Text("No conflicts detected", style="bold green"), border_style="green"))
        return
    console.print(_conflict_table(f"{len(records)} conflict(s) detected", records))


@app.command()
def review(
    options_file: Path = typer.Argument(..., help="JSON file holding the options bundle"),
    context_file: Path = typer.Option(None, "--context", "-c", help="JSON file holding the context snapshot"),
) -> None:
    """Review an options bundle: critical issues, warnings, notes and suggestions."""
    options = _load_json(options_file, "options")
    context = _load_json(context_file, "context")

    thresholds = _thresholds()
    result = review_configuration(options, context, engine=_engine(thresholds), thresholds=thresholds)

    if result.is_valid:
        console.print(Panel(Text("Configuration is valid", style="bold green"), border_style="green"))
    else:
        console.print(
            Panel(
                Text("Configuration has critical issues", style="bold red"),
                subtitle=f"{len(result.critical_issues)} critical issue(s)",
                border_style="red",
            )
        )
    for title, records in (
        ("Critical issues", result.critical_issues),
        ("Warnings", result.warnings),
        ("Notes", result.notes),
    ):
        if records:
            console.print(_conflict_table(title, records))

    if result.suggestions:
        table = Table(title="Suggestions", show_lines=True)
        table.add_column("Suggestion")
        table.add_column("Recommendation")
        table.add_column("Confidence", justify="right")
        for insight in result.suggestions:
            table.add_row(insight.message, insight.recommendation, f"{insight.confidence:.2f}")
        console.print(table)


@app.command()
def rules() -> None:
    """List registered rules in evaluation order."""
    table = Table(title="Conflict rules")
    table.add_column("#", justify="right")
    table.add_column("Group")
    table.add_column("Rule")
    table.add_column("Category")
    for index, rule in enumerate(_engine(_thresholds()).rule_set, start=1):
        table.add_row(str(index), rule.group, rule.name, rule.category)
    console.print(table)


if __name__ == "__main__":
    app()
