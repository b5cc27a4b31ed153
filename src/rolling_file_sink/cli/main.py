"""CLI entry point for rolling-file-sink.

Invoked as::

    rolling-sink [OPTIONS] COMMAND [ARGS]...

or during development::

    python -m rolling_file_sink.cli.main

Commands
--------
- init     Write a default sink.yaml
- write    Format a message and append it to the current log file
- sweep    Run one retention sweep
- status   Show the active file, the alias and the dated files on disk
- version  Show version information
"""
from __future__ import annotations

import sys
from pathlib import Path

import click
import yaml
from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from rolling_file_sink.config.loader import ConfigLoader, SinkSettings
from rolling_file_sink.errors import RollingFileError

console = Console()
err_console = Console(stderr=True)

_DEFAULT_CONFIG = Path("sink.yaml")


def _load_settings(config_path: str) -> SinkSettings:
    loader = ConfigLoader()
    cfg_path = Path(config_path)
    return loader.load(cfg_path) if cfg_path.exists() else loader.defaults()


_config_option = click.option(
    "--config",
    "-c",
    "config_path",
    default=str(_DEFAULT_CONFIG),
    show_default=True,
    type=click.Path(),
    help="Path to sink.yaml.",
)


# ---------------------------------------------------------------------------
# Root command group
# ---------------------------------------------------------------------------


@click.group()
@click.version_option(package_name="rolling-file-sink")
def cli() -> None:
    """Rolling file sink CLI — daily log files, alias and retention tools."""


# ---------------------------------------------------------------------------
# version
# ---------------------------------------------------------------------------


@cli.command(name="version")
def version_command() -> None:
    """Show detailed version information."""
    from rolling_file_sink import __version__

    console.print(
        Panel(
            f"[bold]rolling-file-sink[/bold]  v[cyan]{__version__}[/cyan]\n"
            "Date-partitioned log files with a current-log alias and bounded retention.",
            title="Version",
            border_style="blue",
        )
    )


# ---------------------------------------------------------------------------
# init
# ---------------------------------------------------------------------------


@cli.command(name="init")
@click.option(
    "--output",
    "-o",
    type=click.Path(),
    default=str(_DEFAULT_CONFIG),
    show_default=True,
    help="Output sink config file path.",
)
@click.option("--directory", "-d", default="./logs", show_default=True, help="Log directory.")
@click.option("--filename", "-f", default="rolling.log", show_default=True, help="Log file name template.")
@click.option("--max-files", "-n", default=10, show_default=True, type=click.IntRange(min=1), help="Days to keep.")
def init_command(output: str, directory: str, filename: str, max_files: int) -> None:
    """Write a sink configuration file with defaults filled in."""
    from rolling_file_sink.rotation.naming import split_filename

    try:
        base_name, extension = split_filename(filename)
    except ValueError as exc:
        err_console.print(f"[red]Invalid file name:[/red] {exc}")
        sys.exit(1)

    config: dict[str, object] = {
        "version": "1",
        "rotation": {
            "directory": directory,
            "base_name": base_name,
            "extension": extension,
            "retention_count": max_files,
            "alias_enabled": True,
            "atomic_alias": False,
            "use_utc": True,
        },
        "format": {
            "json": True,
            "timestamp": False,
            "colorize": False,
        },
        "check_permissions": True,
        "silent": False,
    }

    output_path = Path(output)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    with output_path.open("w", encoding="utf-8") as fh:
        yaml.dump(config, fh, default_flow_style=False, sort_keys=False, allow_unicode=True)

    console.print(f"[green]Initialised[/green] sink config: [bold]{output_path}[/bold]")
    console.print(f"  Files: [cyan]{directory}/{base_name}.<YYYY-MM-DD>.{extension}[/cyan]")
    console.print(f"  Retention: [cyan]{max_files}[/cyan] day(s)")


# ---------------------------------------------------------------------------
# write
# ---------------------------------------------------------------------------


@cli.command(name="write")
@click.argument("message")
@click.option("--level", "-l", default="info", show_default=True, help="Record level.")
@_config_option
def write_command(message: str, level: str, config_path: str) -> None:
    """Append MESSAGE to the current day's log file."""
    from rolling_file_sink.convenience import RollingFileSink

    try:
        settings = _load_settings(config_path)
        sink = RollingFileSink.from_config(settings)
        path = sink.log(level, message)
    except (RollingFileError, ValueError) as exc:
        err_console.print(f"[red]Write failed:[/red] {exc}")
        sys.exit(1)

    if path is None:
        console.print("[yellow]Sink is silent; nothing written.[/yellow]")
        return
    console.print(f"[green]Appended[/green] to [bold]{path}[/bold]")


# ---------------------------------------------------------------------------
# sweep
# ---------------------------------------------------------------------------


@cli.command(name="sweep")
@_config_option
def sweep_command(config_path: str) -> None:
    """Delete dated log files that fall outside the retention window."""
    from rolling_file_sink.rotation.writer import RollingWriter

    try:
        settings = _load_settings(config_path)
    except ValueError as exc:
        err_console.print(f"[red]Invalid config:[/red] {exc}")
        sys.exit(1)

    writer = RollingWriter(settings.rotation)
    deleted = writer.sweeper.sweep()

    if not deleted:
        console.print("[green]Nothing to delete.[/green]")
        return
    for name in deleted:
        console.print(f"  [red]deleted[/red] {name}")
    console.print(f"Removed [cyan]{len(deleted)}[/cyan] file(s).")


# ---------------------------------------------------------------------------
# status
# ---------------------------------------------------------------------------


@cli.command(name="status")
@_config_option
def status_command(config_path: str) -> None:
    """Show the active file, the alias target and the dated files on disk."""
    from rolling_file_sink.rotation.naming import active_file_name
    from rolling_file_sink.rotation.writer import RollingWriter

    try:
        settings = _load_settings(config_path)
    except ValueError as exc:
        err_console.print(f"[red]Invalid config:[/red] {exc}")
        sys.exit(1)

    rotation = settings.rotation
    writer = RollingWriter(rotation)
    today = writer.today()
    active_name = active_file_name(rotation.base_name, rotation.extension, today)
    alias_target = writer.alias_manager.current_target()

    console.print(
        Panel(
            f"Directory: [bold]{rotation.directory}[/bold]\n"
            f"Active:    [cyan]{active_name}[/cyan]\n"
            f"Alias:     [cyan]{alias_target or '-'}[/cyan]\n"
            f"Retention: [cyan]{rotation.retention_count}[/cyan] day(s)",
            title="Rolling Sink Status",
            border_style="blue",
        )
    )

    names = writer.sweeper.candidates()
    if not names:
        console.print("[yellow]No dated log files found.[/yellow]")
        return

    table = Table(title="Dated Log Files", box=box.SIMPLE)
    table.add_column("File", style="cyan")
    table.add_column("Size", justify="right")
    table.add_column("Status")
    for name in names:
        try:
            size = str((rotation.directory / name).stat().st_size)
        except OSError:
            size = "?"
        retained = writer.sweeper.is_retained(name, today)
        status = "[green]retained[/green]" if retained else "[red]expired[/red]"
        table.add_row(name, size, status)
    console.print(table)


if __name__ == "__main__":
    cli()
