"""Sparkplay CLI."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Annotated, Any

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from sparkplay import __version__
from sparkplay._constants import DEFAULT_CONFIG
from sparkplay.codegen import generate_code
from sparkplay.config import (
    ClusterSize,
    ConfigError,
    DatasetSize,
    FileFormat,
    JoinType,
    Level,
    PartitionStrategy,
    SimulationConfig,
    SkewKey,
    TableName,
    generate_example_config_yaml,
    get_level,
    list_levels,
    load_config,
    load_levels,
    value_text,
)
from sparkplay.session import PlaygroundState, RunResult, evaluate
from sparkplay.simulator import challenge_tip, config_hints, performance_tip, stage_volumes
from sparkplay.sweep import sweep as run_sweep

logger = logging.getLogger(__name__)

app = typer.Typer(
    name="sparkplay",
    help="Explore how Spark configuration knobs change job cost",
    add_completion=False,
    no_args_is_help=True,
    rich_markup_mode="rich",
    epilog="[dim]Workflow: init -> simulate -> sweep -> levels -> simulate --level[/dim]",
)

console = Console()
# Log records go to stderr so --json output stays parseable
err_console = Console(stderr=True)


# =============================================================================
# Helper Functions
# =============================================================================


def print_success(message: str) -> None:
    """Print a success message."""
    console.print(f"[green]OK[/green] {message}")


def print_error(message: str) -> None:
    """Print an error message."""
    console.print(f"[red]ERROR[/red] {escape(message)}")


def print_warning(message: str) -> None:
    """Print a warning message."""
    console.print(f"[yellow]WARN[/yellow] {message}")


def print_info(message: str) -> None:
    """Print an info message."""
    console.print(f"[blue]...[/blue] {message}")


def resolve_config_path(
    config_file: Path | None,
    file_option: Path | None = None,
) -> Path | None:
    """Resolve config file path, using ./sparkplay.yaml as default.

    Supports both positional argument and --file/-f option.
    If both are provided, --file takes precedence. Returns None when nothing
    was given and no default file exists (the built-in defaults apply).
    """
    path = file_option or config_file
    if path is not None:
        return path

    default = Path(DEFAULT_CONFIG)
    if default.exists():
        return default
    return None


def load_config_or_exit(path: Path | None) -> SimulationConfig:
    """Load a config file, or the defaults when *path* is None."""
    if path is None:
        return SimulationConfig()
    try:
        cfg = load_config(path)
    except ConfigError as e:
        print_error(str(e))
        raise typer.Exit(1)  # noqa: B904

    for name, value in cfg.unknown_fields().items():
        print_warning(
            f"{name}={escape(repr(value))} is not a known value; the neutral default applies"
        )
    return cfg


def resolve_level(level_id: str | None, levels_file: Path | None) -> Level | None:
    """Look up *level_id* among built-in levels or those in *levels_file*."""
    if level_id is None:
        return None
    try:
        levels = load_levels(levels_file) if levels_file else None
    except ConfigError as e:
        print_error(str(e))
        raise typer.Exit(1)  # noqa: B904
    try:
        return get_level(level_id, levels)
    except KeyError as e:
        print_error(str(e.args[0]))
        raise typer.Exit(1)  # noqa: B904


def _timeline_table(result: RunResult) -> Table:
    table = Table(title="Network Timeline")
    table.add_column("Stage", style="cyan")
    table.add_column("Network (MB)", justify="right")
    for s in result.metrics.network_timeline:
        table.add_row(s.stage.value, f"{s.network_mb:,}")
    table.add_row("[bold]Total[/bold]", f"[bold]{result.metrics.total_network_mb:,}[/bold]")
    return table


def _print_result(result: RunResult, show_hints: bool = True) -> None:
    m = result.metrics
    summary = (
        f"[bold]Estimated time:[/bold] {m.time}\n"
        f"[bold]CPU:[/bold] {m.cpu}%\n"
        f"[bold]Memory:[/bold] {m.memory}%"
    )
    console.print(Panel(summary, title="Performance Summary", expand=False))
    console.print(_timeline_table(result))
    console.print(f"[dim]Tip:[/dim] {performance_tip(m.time)}")

    if result.level is not None and result.score is not None:
        max_points = f"{result.level.max_points:g}"
        console.print(
            Panel(
                f"[bold]Score:[/bold] {result.score} / {max_points}\n"
                f"{challenge_tip(result.score, result.level)}",
                title=escape(result.level.title),
                expand=False,
            )
        )

    if show_hints:
        for hint in config_hints(result.config, stage_volumes(result.config)):
            print_info(escape(hint))


def _apply_overrides(cfg: SimulationConfig, overrides: dict[str, Any]) -> SimulationConfig:
    changes = {k: v for k, v in overrides.items() if v is not None}
    if not changes:
        return cfg
    logger.debug("Applying overrides: %s", changes)
    return cfg.evolve(**changes)


# =============================================================================
# Commands
# =============================================================================


@app.callback()
def main(
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Enable debug logging"),
    ] = False,
) -> None:
    """Spark Playground: a deterministic cost model for a Spark join job."""
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(message)s",
            datefmt="[%X]",
            handlers=[RichHandler(console=err_console, show_path=False)],
        )


@app.command()
def version() -> None:
    """Show version information."""
    console.print(f"Sparkplay version {__version__}")


@app.command()
def init(
    output: Annotated[
        Path,
        typer.Option("--output", "-o", help="Where to write the configuration file"),
    ] = Path(DEFAULT_CONFIG),
    force: Annotated[
        bool,
        typer.Option("--force", help="Overwrite an existing file"),
    ] = False,
) -> None:
    """Write a starter configuration file with every knob documented."""
    if output.exists() and not force:
        print_error(f"{output} already exists (use --force to overwrite)")
        raise typer.Exit(1)
    output.write_text(generate_example_config_yaml())
    print_success(f"Wrote {output}")
    print_info(f"Next: sparkplay simulate {output}")


@app.command()
def validate(
    config_file: Annotated[
        Path | None,
        typer.Argument(help="Path to configuration YAML file (default: ./sparkplay.yaml)"),
    ] = None,
    file_option: Annotated[
        Path | None,
        typer.Option("--file", "-f", help="Path to configuration YAML file"),
    ] = None,
) -> None:
    """Validate a configuration file."""
    path = resolve_config_path(config_file, file_option)
    if path is None:
        print_error(f"No config file specified and ./{DEFAULT_CONFIG} not found")
        print_info("Create one with: sparkplay init")
        raise typer.Exit(1)

    cfg = load_config_or_exit(path)
    print_success(f"{path} is valid")
    table = Table(show_header=False)
    for key, value in cfg.to_wire().items():
        table.add_row(key, escape(str(value)))
    console.print(table)


@app.command()
def simulate(
    config_file: Annotated[
        Path | None,
        typer.Argument(help="Path to configuration YAML file (default: ./sparkplay.yaml)"),
    ] = None,
    file_option: Annotated[
        Path | None,
        typer.Option("--file", "-f", help="Path to configuration YAML file"),
    ] = None,
    level_id: Annotated[
        str | None,
        typer.Option("--level", "-l", help="Challenge level id; replaces the configuration"),
    ] = None,
    levels_file: Annotated[
        Path | None,
        typer.Option("--levels-file", help="YAML file with custom challenge levels"),
    ] = None,
    cluster: Annotated[ClusterSize | None, typer.Option("--cluster")] = None,
    dataset: Annotated[DatasetSize | None, typer.Option("--dataset")] = None,
    file_format: Annotated[FileFormat | None, typer.Option("--format")] = None,
    partition: Annotated[PartitionStrategy | None, typer.Option("--partition")] = None,
    join: Annotated[JoinType | None, typer.Option("--join")] = None,
    primary: Annotated[TableName | None, typer.Option("--primary")] = None,
    secondary: Annotated[TableName | None, typer.Option("--secondary")] = None,
    cache: Annotated[bool | None, typer.Option("--cache/--no-cache")] = None,
    aqe: Annotated[bool | None, typer.Option("--aqe/--no-aqe")] = None,
    skew: Annotated[bool | None, typer.Option("--skew/--no-skew")] = None,
    skew_key: Annotated[SkewKey | None, typer.Option("--skew-key")] = None,
    as_json: Annotated[
        bool,
        typer.Option("--json", help="Print the result as JSON"),
    ] = False,
) -> None:
    """Estimate time, CPU, memory and network traffic for a configuration.

    Knob options are applied on top of the configuration file (or the
    level's start configuration when --level is given).

    Examples:

        sparkplay simulate --dataset Large --cluster Large --aqe
        sparkplay simulate --level skew-buster --format Parquet --partition Good
    """
    cfg = load_config_or_exit(resolve_config_path(config_file, file_option))
    state = PlaygroundState(config=cfg)
    level = resolve_level(level_id, levels_file)
    if level is not None:
        state = state.select_level(level)

    state = state.with_config(
        _apply_overrides(
            state.config,
            {
                "cluster_size": cluster,
                "dataset_size": dataset,
                "file_format": file_format,
                "partition_strategy": partition,
                "join_type": join,
                "join_primary": primary,
                "join_secondary": secondary,
                "use_cache": cache,
                "aqe_enabled": aqe,
                "skewed": skew,
                "skew_key": skew_key,
            },
        )
    )
    result = evaluate(state)

    if as_json:
        typer.echo(json.dumps(result.to_dict(), indent=2))
        return
    _print_result(result)


@app.command()
def levels(
    levels_file: Annotated[
        Path | None,
        typer.Option("--levels-file", help="YAML file with custom challenge levels"),
    ] = None,
) -> None:
    """List challenge levels."""
    if levels_file is not None:
        try:
            available = load_levels(levels_file)
        except ConfigError as e:
            print_error(str(e))
            raise typer.Exit(1)  # noqa: B904
    else:
        available = list_levels()

    table = Table(title="Challenge Levels")
    table.add_column("ID", style="cyan", no_wrap=True)
    table.add_column("Title")
    table.add_column("Max", justify="right")
    table.add_column("Difficulty", justify="right")
    for level in available:
        table.add_row(
            escape(level.id),
            escape(level.title),
            f"{level.max_points:g}",
            f"{level.difficulty:g}",
        )
    console.print(table)


@app.command()
def code(
    config_file: Annotated[
        Path | None,
        typer.Argument(help="Path to configuration YAML file (default: ./sparkplay.yaml)"),
    ] = None,
    file_option: Annotated[
        Path | None,
        typer.Option("--file", "-f", help="Path to configuration YAML file"),
    ] = None,
) -> None:
    """Print the PySpark program a configuration stands for."""
    cfg = load_config_or_exit(resolve_config_path(config_file, file_option))
    typer.echo(generate_code(cfg))


@app.command()
def sweep(
    field: Annotated[
        str,
        typer.Argument(help="Knob to vary, e.g. clusterSize, joinType, useCache"),
    ],
    config_file: Annotated[
        Path | None,
        typer.Argument(help="Path to configuration YAML file (default: ./sparkplay.yaml)"),
    ] = None,
    file_option: Annotated[
        Path | None,
        typer.Option("--file", "-f", help="Path to configuration YAML file"),
    ] = None,
) -> None:
    """Compare every value of one knob with the rest of the config fixed."""
    cfg = load_config_or_exit(resolve_config_path(config_file, file_option))
    try:
        points = run_sweep(cfg, field)
    except KeyError as e:
        print_error(str(e.args[0]))
        raise typer.Exit(1)  # noqa: B904

    table = Table(title=f"Sweep: {field}")
    table.add_column("Value", style="cyan")
    table.add_column("Time", justify="right")
    table.add_column("CPU %", justify="right")
    table.add_column("Mem %", justify="right")
    table.add_column("Network (MB)", justify="right")
    for p in points:
        table.add_row(
            value_text(p.value),
            str(p.metrics.time),
            str(p.metrics.cpu),
            str(p.metrics.memory),
            f"{p.metrics.total_network_mb:,}",
        )
    console.print(table)


if __name__ == "__main__":
    app()
