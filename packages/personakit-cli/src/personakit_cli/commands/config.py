from __future__ import annotations

from pathlib import Path

import typer
from rich.console import Console
from rich.syntax import Syntax
from rich.table import Table

console = Console()


def config_command(
    ctx: typer.Context,
    raw: bool = typer.Option(
        False,
        "--raw",
        help="Print the config files as written instead of the merged values",
    ),
) -> None:
    """Show the effective configuration."""
    if raw:
        _print_raw_files()
        return

    config = ctx.find_root().obj.config

    table = Table(
        title="Effective Configuration",
        show_header=True,
        header_style="bold cyan",
    )
    table.add_column("Key", style="bold")
    table.add_column("Value")

    table.add_row("templates.paths", ", ".join(config.templates.paths) or "-")
    table.add_row("templates.pattern", config.templates.pattern)
    table.add_row("selector.default", config.selector.default or "-")
    table.add_row("logging.level", config.logging.level)
    table.add_row("logging.json", str(config.logging.json).lower())

    console.print(table)


def _print_raw_files() -> None:
    global_path = Path.home() / ".personakit" / "config.toml"
    project_path = Path.cwd() / ".personakit" / "config.toml"
    if not project_path.exists():
        project_path = Path.cwd() / "personakit.toml"

    found = False
    for label, path in (("Global", global_path), ("Project", project_path)):
        if not path.exists():
            continue
        found = True
        console.print(f"[bold]{label}[/bold] ({path}):")
        console.print(Syntax(path.read_text(), "toml", theme="monokai"))
        console.print()

    if not found:
        console.print("[yellow]No config files found; using defaults.[/yellow]")
