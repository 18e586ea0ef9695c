"""List command for manify CLI."""

from enum import StrEnum
from pathlib import Path
from typing import Annotated, Any

import typer
import yaml
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from manify.cli.utils import load_cli_config, setup_logging
from manify.core.exceptions import ConfigurationError
from manify.docs.manifest import read_commands
from manify.docs.models import CommandDescriptor

app = typer.Typer()
console = Console()


class OutputFormat(StrEnum):
    """Output format options."""

    TABLE = "table"
    JSON = "json"
    YAML = "yaml"


def _descriptor_row(descriptor: CommandDescriptor) -> dict[str, Any]:
    return {
        "command": descriptor.command_name,
        "class": descriptor.class_name or None,
        "file": str(descriptor.source_file) if descriptor.source_file else None,
        "base_directory": str(descriptor.base_directory),
    }


@app.callback(invoke_without_command=True)
def list_commands(
    ctx: typer.Context,
    source: Annotated[
        Path | None,
        typer.Option("--source", "-s", help="Project root holding the manifest"),
    ] = None,
    manifest_name: Annotated[
        str | None,
        typer.Option("--manifest-name", help="Manifest file name [default: composer.json]"),
    ] = None,
    no_plugins: Annotated[
        bool,
        typer.Option("--no-plugins", help="Only read the manifest in the source root"),
    ] = False,
    format: Annotated[
        OutputFormat,
        typer.Option("--format", "-f", help="Output format"),
    ] = OutputFormat.TABLE,
    config: Annotated[
        Path | None,
        typer.Option("--config", "-c", help="Path to pyproject.toml with a [tool.manify] table"),
    ] = None,
) -> None:
    """List the commands declared by the manifests."""
    if ctx.invoked_subcommand is not None:
        return

    settings = load_cli_config(config)
    setup_logging(ctx, settings)

    try:
        descriptors = read_commands(
            source or Path(settings.source),
            manifest_name or settings.manifest_name,
            settings.scan_plugins and not no_plugins,
        )
    except ConfigurationError as e:
        console.print(f"[red]✗[/red] Error: {escape(str(e))}", soft_wrap=True)
        raise typer.Exit(1) from e

    rows = [_descriptor_row(d) for d in descriptors]

    if format == OutputFormat.JSON:
        console.print_json(data=rows)
    elif format == OutputFormat.YAML:
        console.print(yaml.safe_dump(rows, sort_keys=False), markup=False, soft_wrap=True)
    else:
        table = Table(title="Documented Commands", show_header=True, header_style="bold magenta")
        table.add_column("Command", style="cyan", no_wrap=True)
        table.add_column("Class", style="green")
        table.add_column("File", style="yellow")
        table.add_column("Directory", style="white")

        for row in rows:
            table.add_row(
                row["command"],
                row["class"] or "(registry)",
                row["file"] or "-",
                row["base_directory"],
            )

        console.print(table)
