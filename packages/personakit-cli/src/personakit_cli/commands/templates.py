"""Template commands: list, info, show, validate."""
from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import typer
from personakit_core.errors import MalformedTemplateError, TemplateNotFoundError
from personakit_templates import TemplateValidator, parse_template_file
from rich.console import Console
from rich.panel import Panel
from rich.syntax import Syntax
from rich.table import Table

if TYPE_CHECKING:
    from personakit_templates import Template, TemplateRegistry
    from personakit_templates.types import LoadFailure

    from personakit_cli.state import CLIState

console = Console()
err_console = Console(stderr=True)

_NO_TEMPLATES_HINT = (
    "Place persona .md files in ./personas/ or ~/.personakit/personas/, "
    "or pass --path."
)


def _state(ctx: typer.Context) -> CLIState:
    return ctx.find_root().obj


def _report_failures(failures: list[LoadFailure]) -> None:
    for failure in failures:
        err_console.print(
            f"[yellow]Skipped[/yellow] {failure.path}: {failure.reason}"
        )


def _not_found(name: str, registry: TemplateRegistry) -> typer.Exit:
    err_console.print(f"[red]Template not found:[/red] '{name}'")
    available = registry.names()
    if available:
        err_console.print(
            f"[dim]Available templates: {', '.join(available)}[/dim]"
        )
    return typer.Exit(1)


def list_command(ctx: typer.Context) -> None:
    """List all discovered templates."""
    registry, report = _state(ctx).build_registry()
    _report_failures(report.failures)

    templates = registry.list_templates()
    if not templates:
        console.print(f"[yellow]No templates found.[/yellow] {_NO_TEMPLATES_HINT}")
        raise typer.Exit(0)

    table = Table(
        title="Persona Templates",
        show_header=True,
        header_style="bold cyan",
    )
    table.add_column("Name", style="bold")
    table.add_column("Version", justify="center")
    table.add_column("Model")
    table.add_column("Description")
    table.add_column("Capabilities")

    for template in templates:
        caps = ", ".join(sorted(template.tool_capabilities)) or "-"
        table.add_row(
            template.name,
            template.version,
            template.model or "-",
            template.description or "-",
            caps,
        )

    console.print(table)
    console.print(f"\n[dim]{len(templates)} template(s) found.[/dim]")


def info_command(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="Exact name of the template"),
) -> None:
    """Show metadata and a body preview for one template."""
    registry, _ = _state(ctx).build_registry()

    try:
        template = registry.get(name)
    except TemplateNotFoundError:
        raise _not_found(name, registry) from None

    console.print(Panel(
        _metadata_text(template),
        title=f"Template: {template.name}",
        border_style="cyan",
    ))

    preview = template.body
    if len(preview) > 500:
        preview = preview[:500] + "\n\n... (truncated)"
    console.print()
    console.print(Panel(
        Syntax(preview, "markdown", theme="monokai", word_wrap=True),
        title="Body (preview)",
        border_style="dim",
    ))


def _metadata_text(template: Template) -> str:
    lines = [
        f"[bold]Name:[/bold]          {template.name}",
        f"[bold]Version:[/bold]       {template.version}",
    ]
    if template.description:
        lines.append(f"[bold]Description:[/bold]   {template.description}")
    if template.tool_capabilities:
        lines.append(
            f"[bold]Capabilities:[/bold]  {', '.join(sorted(template.tool_capabilities))}"
        )
    if template.model:
        lines.append(f"[bold]Model:[/bold]         {template.model}")
    if template.source_path:
        lines.append(f"[bold]Source:[/bold]        {template.source_path}")
    return "\n".join(lines)


def show_command(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="Exact name of the template"),
    default: str | None = typer.Option(
        None,
        "--default",
        "-d",
        help="Template to fall back to when NAME is not registered",
    ),
) -> None:
    """Print a template body verbatim, for piping to a model."""
    state = _state(ctx)
    registry, _ = state.build_registry()
    selector = state.build_selector(registry)

    try:
        template = selector.select(name, default=default)
    except TemplateNotFoundError:
        raise _not_found(name, registry) from None

    # Plain echo: rich markup would rewrite the body
    typer.echo(template.body)


def validate_command(
    ctx: typer.Context,
    path: str | None = typer.Argument(
        None,
        help="Path to a template file. "
        "If omitted, validates all discovered templates.",
    ),
) -> None:
    """Validate template(s) and report errors."""
    validator = TemplateValidator()

    if path is not None:
        _validate_single(Path(path), validator)
    else:
        _validate_all(_state(ctx), validator)


def _validate_single(path: Path, validator: TemplateValidator) -> None:
    """Validate a single template file at *path*."""
    resolved = path.expanduser().resolve()
    if not resolved.is_file():
        console.print(f"[red]Template file not found:[/red] {path}")
        raise typer.Exit(1)

    try:
        template = parse_template_file(resolved)
    except MalformedTemplateError as exc:
        console.print(f"[red]Parse error:[/red] {exc}")
        raise typer.Exit(1) from None

    errors = validator.validate(template)
    _report_validation(template.name, errors)

    if errors:
        raise typer.Exit(1)


def _validate_all(state: CLIState, validator: TemplateValidator) -> None:
    """Validate every discovered template, including ones that failed to load."""
    manifest = state.build_loader().discover()

    if not manifest.templates and not manifest.failures:
        console.print(
            f"[yellow]No templates found to validate.[/yellow] {_NO_TEMPLATES_HINT}"
        )
        raise typer.Exit(0)

    total_errors = 0
    for failure in manifest.failures:
        _report_validation(str(failure.path), [failure.reason])
        total_errors += 1

    for template in manifest.templates:
        errors = validator.validate(template)
        _report_validation(template.name, errors)
        total_errors += len(errors)

    checked = len(manifest.templates) + len(manifest.failures)
    console.print()
    if total_errors == 0:
        console.print(
            f"[green]All {checked} template(s) passed validation.[/green]"
        )
    else:
        console.print(
            f"[red]{total_errors} error(s) across {checked} template(s).[/red]"
        )
        raise typer.Exit(1)


def _report_validation(name: str, errors: list[str]) -> None:
    """Print validation results for a single template."""
    if not errors:
        console.print(f"  [green]OK[/green]  {name}")
    else:
        console.print(f"  [red]FAIL[/red] {name}")
        for err in errors:
            console.print(f"        [red]-[/red] {err}")
