"""CLI interface using Typer."""

from __future__ import annotations

import json
from pathlib import Path
from typing import NoReturn, Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from maxcalorie.config.settings import (
    OUTPUT_FORMATS,
    Settings,
    default_config_path,
    get_settings,
)
from maxcalorie.data.loader import load_food_database
from maxcalorie.data.prefilter import filter_catalog
from maxcalorie.export.formatters import JSONFormatter, TextFormatter, format_foods
from maxcalorie.logging_config import configure_logging
from maxcalorie.optimizer.exhaustive import exhaustive_select
from maxcalorie.optimizer.greedy import greedy_select
from maxcalorie.optimizer.models import (
    FoodCatalog,
    MaxCalorieError,
    SearchCancelledError,
    Selection,
)

app = typer.Typer(
    help="Choose the foods with the most calories that fit within a weight limit",
    no_args_is_help=True,
)
console = Console()

config_app = typer.Typer(help="Manage configuration")
app.add_typer(config_app, name="config")


# ============================================================================
# Helpers
# ============================================================================


def current_settings(ctx: typer.Context) -> Settings:
    """Return settings loaded by the main callback."""
    if ctx.obj is None:
        ctx.obj = get_settings()
    return ctx.obj


def fail(message: str) -> NoReturn:
    """Print an error and exit with status 1."""
    console.print(f"[red]Error: {escape(message)}[/red]")
    raise typer.Exit(1)


def load_catalog(settings: Settings, database: Optional[Path]) -> FoodCatalog:
    """Load the food database named on the command line or in settings."""
    path = database or settings.database.path
    if path is None:
        fail("No food database given and database.path is not configured")

    try:
        return load_food_database(
            path,
            delimiter=settings.database.delimiter,
            has_header=settings.database.has_header,
        )
    except MaxCalorieError as e:
        fail(str(e))


def prefiltered(
    settings: Settings,
    catalog: FoodCatalog,
    min_calories: Optional[float],
    max_calories: Optional[float],
    max_count: Optional[int],
) -> FoodCatalog:
    """Apply the pre-filter, filling missing bounds from settings."""
    return filter_catalog(
        catalog,
        min_calories=(
            min_calories if min_calories is not None else settings.prefilter.min_calories
        ),
        max_calories=(
            max_calories if max_calories is not None else settings.prefilter.max_calories
        ),
        max_count=max_count if max_count is not None else settings.prefilter.max_count,
    )


def run_exhaustive(
    settings: Settings,
    catalog: FoodCatalog,
    capacity: float,
    time_limit: Optional[float],
) -> Selection:
    """Run exhaustive search, turning solver errors into CLI errors."""
    try:
        return exhaustive_select(
            catalog,
            capacity,
            max_items=settings.exhaustive.max_items,
            time_limit=time_limit if time_limit is not None else settings.exhaustive.time_limit,
        )
    except SearchCancelledError as e:
        fail(f"{e} (best so far: {e.best.total_calories:g} calories)")
    except MaxCalorieError as e:
        fail(str(e))


def resolve_format(settings: Settings, output_format: Optional[str]) -> str:
    """Return the output format to use, failing before any work on a bad one."""
    fmt = output_format or settings.defaults.output_format
    if fmt not in OUTPUT_FORMATS:
        fail(f"Unknown output format: {fmt} (choose from {', '.join(OUTPUT_FORMATS)})")
    return fmt


def emit(
    foods,
    fmt: str,
    title: str,
    capacity: Optional[float] = None,
    strategy: Optional[str] = None,
) -> None:
    """Print a catalog or selection in the given format."""
    text = format_foods(
        foods,
        output_format=fmt,
        title=title,
        capacity=capacity,
        strategy=strategy,
        console=console,
    )
    if text is not None:
        print(text)


FORMAT_HELP = "Output format: table, json, text"


# ============================================================================
# Main Commands
# ============================================================================


@app.callback()
def main(
    ctx: typer.Context,
    config_path: Optional[Path] = typer.Option(
        None, "--config", help="Path to config.yaml"
    ),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Show debug logging"
    ),
) -> None:
    """Load settings and set up logging for every command."""
    try:
        settings = Settings.load(config_path)
    except (ValueError, OSError) as e:
        fail(f"Invalid configuration: {e}")

    ctx.obj = settings
    configure_logging("DEBUG" if verbose else settings.logging.level)


@app.command()
def show(
    ctx: typer.Context,
    database: Optional[Path] = typer.Argument(
        None, help="Path to the food database"
    ),
    min_calories: Optional[float] = typer.Option(
        None, "--min-calories", help="Only foods with at least this many calories"
    ),
    max_calories: Optional[float] = typer.Option(
        None, "--max-calories", help="Only foods with at most this many calories"
    ),
    max_count: Optional[int] = typer.Option(
        None, "--max-count", "-n", help="Show at most this many foods"
    ),
    output_format: Optional[str] = typer.Option(
        None, "--format", "-f", help=FORMAT_HELP
    ),
) -> None:
    """Show the food database, optionally filtered."""
    settings = current_settings(ctx)
    fmt = resolve_format(settings, output_format)
    catalog = load_catalog(settings, database)

    # Filter only when asked to
    if min_calories is not None or max_calories is not None or max_count is not None:
        catalog = filter_catalog(
            catalog,
            min_calories=min_calories if min_calories is not None else float("-inf"),
            max_calories=max_calories if max_calories is not None else float("inf"),
            max_count=max_count if max_count is not None else len(catalog),
        )

    emit(catalog, fmt, title=f"Foods ({len(catalog)})")


@app.command()
def greedy(
    ctx: typer.Context,
    database: Optional[Path] = typer.Argument(
        None, help="Path to the food database"
    ),
    capacity: float = typer.Option(
        ..., "--capacity", "-c", help="Maximum total weight in ounces"
    ),
    output_format: Optional[str] = typer.Option(
        None, "--format", "-f", help=FORMAT_HELP
    ),
) -> None:
    """Choose foods by calories per ounce (fast, not always optimal)."""
    settings = current_settings(ctx)
    fmt = resolve_format(settings, output_format)
    catalog = load_catalog(settings, database)
    selection = greedy_select(catalog, capacity)
    emit(
        selection,
        fmt,
        title=f"Greedy selection (capacity {capacity:g} oz)",
        capacity=capacity,
        strategy="greedy",
    )


@app.command()
def exhaustive(
    ctx: typer.Context,
    database: Optional[Path] = typer.Argument(
        None, help="Path to the food database"
    ),
    capacity: float = typer.Option(
        ..., "--capacity", "-c", help="Maximum total weight in ounces"
    ),
    min_calories: Optional[float] = typer.Option(
        None, "--min-calories", help="Pre-filter: minimum calories per food"
    ),
    max_calories: Optional[float] = typer.Option(
        None, "--max-calories", help="Pre-filter: maximum calories per food"
    ),
    max_count: Optional[int] = typer.Option(
        None, "--max-count", "-n", help="Pre-filter: number of foods to search"
    ),
    time_limit: Optional[float] = typer.Option(
        None, "--time-limit", help="Give up after this many seconds"
    ),
    output_format: Optional[str] = typer.Option(
        None, "--format", "-f", help=FORMAT_HELP
    ),
) -> None:
    """Find the optimal foods by trying every subset of a filtered catalog."""
    settings = current_settings(ctx)
    fmt = resolve_format(settings, output_format)
    catalog = prefiltered(
        settings, load_catalog(settings, database), min_calories, max_calories, max_count
    )
    selection = run_exhaustive(settings, catalog, capacity, time_limit)
    emit(
        selection,
        fmt,
        title=f"Exhaustive selection (capacity {capacity:g} oz, {len(catalog)} foods searched)",
        capacity=capacity,
        strategy="exhaustive",
    )


@app.command()
def compare(
    ctx: typer.Context,
    database: Optional[Path] = typer.Argument(
        None, help="Path to the food database"
    ),
    capacity: float = typer.Option(
        ..., "--capacity", "-c", help="Maximum total weight in ounces"
    ),
    min_calories: Optional[float] = typer.Option(
        None, "--min-calories", help="Pre-filter: minimum calories per food"
    ),
    max_calories: Optional[float] = typer.Option(
        None, "--max-calories", help="Pre-filter: maximum calories per food"
    ),
    max_count: Optional[int] = typer.Option(
        None, "--max-count", "-n", help="Pre-filter: number of foods to search"
    ),
    time_limit: Optional[float] = typer.Option(
        None, "--time-limit", help="Give up on exhaustive search after this many seconds"
    ),
    output_format: Optional[str] = typer.Option(
        None, "--format", "-f", help=FORMAT_HELP
    ),
) -> None:
    """Run both solvers on the same filtered catalog and compare totals."""
    settings = current_settings(ctx)
    fmt = resolve_format(settings, output_format)
    catalog = prefiltered(
        settings, load_catalog(settings, database), min_calories, max_calories, max_count
    )
    results = {
        "greedy": greedy_select(catalog, capacity),
        "exhaustive": run_exhaustive(settings, catalog, capacity, time_limit),
    }

    if fmt == "json":
        formatter = JSONFormatter()
        data = {
            name: json.loads(formatter.format(sel, capacity=capacity, strategy=name))
            for name, sel in results.items()
        }
        print(json.dumps(data, indent=2))
    elif fmt == "text":
        formatter = TextFormatter()
        for name, sel in results.items():
            print(f"=== {name} ===")
            print(formatter.format(sel))
    else:
        table = Table(title=f"Solver comparison (capacity {capacity:g} oz, {len(catalog)} foods)")
        table.add_column("Strategy", style="cyan")
        table.add_column("Foods", justify="right")
        table.add_column("Weight (oz)", justify="right")
        table.add_column("Calories", justify="right", style="green")
        for name, sel in results.items():
            table.add_row(
                name,
                str(len(sel)),
                f"{sel.total_weight:.2f}",
                f"{sel.total_calories:.1f}",
            )
        console.print(table)

        gap = results["exhaustive"].total_calories - results["greedy"].total_calories
        if gap > 0:
            console.print(f"[yellow]Greedy is {gap:g} calories short of optimal[/yellow]")
        else:
            console.print("[green]Greedy matches the optimal total[/green]")


# ============================================================================
# Config Commands
# ============================================================================


@config_app.command("show")
def config_show(ctx: typer.Context) -> None:
    """Show the active configuration as YAML."""
    import yaml

    settings = current_settings(ctx)
    print(yaml.dump(settings.to_dict(), default_flow_style=False, sort_keys=False))


@config_app.command("init")
def config_init(
    path: Optional[Path] = typer.Option(
        None, "--path", help="Where to write config.yaml"
    ),
    force: bool = typer.Option(
        False, "--force", help="Overwrite an existing file"
    ),
) -> None:
    """Write a config file with default settings."""
    target = path or default_config_path()
    if target.exists() and not force:
        fail(f"{target} already exists (use --force to overwrite)")

    Settings().save(target)
    console.print(f"[green]Wrote default configuration to {target}[/green]")


if __name__ == "__main__":
    app()
