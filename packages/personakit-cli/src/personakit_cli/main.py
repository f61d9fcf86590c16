from __future__ import annotations

import logging
from pathlib import Path

import typer
from personakit_core import __version__
from personakit_core.config import PersonakitConfig
from personakit_core.errors import ConfigError
from personakit_core.logging import setup_logging

from personakit_cli.commands.config import config_command
from personakit_cli.commands.templates import (
    info_command,
    list_command,
    show_command,
    validate_command,
)
from personakit_cli.state import CLIState

app = typer.Typer(
    name="personakit",
    help="Personakit: a registry of persona templates for coding assistants",
    no_args_is_help=True,
)

app.command("list")(list_command)
app.command("info")(info_command)
app.command("show")(show_command)
app.command("validate")(validate_command)
app.command("config")(config_command)


@app.callback()
def _root(
    ctx: typer.Context,
    path: list[Path] = typer.Option(
        [],
        "--path",
        "-p",
        help="Extra directory to scan for templates (repeatable)",
    ),
    no_defaults: bool = typer.Option(
        False,
        "--no-defaults",
        help="Skip ./personas and ~/.personakit/personas",
    ),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Enable debug logging"
    ),
) -> None:
    """Load configuration and set up logging for every command."""
    try:
        config = PersonakitConfig.load()
    except ConfigError as exc:
        typer.echo(f"Config error: {exc}", err=True)
        raise typer.Exit(2) from None

    logger = setup_logging(
        level="DEBUG" if verbose else config.logging.level,
        json_output=config.logging.json,
    )
    if verbose:
        logger.setLevel(logging.DEBUG)

    ctx.obj = CLIState(
        config=config,
        extra_paths=list(path),
        include_defaults=not no_defaults,
    )


@app.command()
def version() -> None:
    """Show the personakit version."""
    from rich.console import Console
    Console().print(f"personakit {__version__}")


def main() -> None:
    app()


if __name__ == "__main__":
    main()
