"""Generate command for manify CLI."""

from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.markup import escape

from manify.cli.utils import load_cli_config, setup_logging
from manify.core.exceptions import ConfigurationError
from manify.docs.pipeline import generate_docs

app = typer.Typer()
console = Console()


@app.callback(invoke_without_command=True)
def generate(
    ctx: typer.Context,
    destination: Annotated[
        str | None,
        typer.Option(
            "--destination",
            "-d",
            help="Destination folder for the generated markdown files [default: docs/]",
        ),
    ] = None,
    source: Annotated[
        Path | None,
        typer.Option(
            "--source",
            "-s",
            help="Project root holding the manifest; subdirectories are scanned as plugins",
        ),
    ] = None,
    manifest_name: Annotated[
        str | None,
        typer.Option("--manifest-name", help="Manifest file name [default: composer.json]"),
    ] = None,
    heading_prefix: Annotated[
        str | None,
        typer.Option("--heading-prefix", help="First word of each heading [default: wp]"),
    ] = None,
    no_plugins: Annotated[
        bool,
        typer.Option("--no-plugins", help="Only read the manifest in the source root"),
    ] = False,
    config: Annotated[
        Path | None,
        typer.Option("--config", "-c", help="Path to pyproject.toml with a [tool.manify] table"),
    ] = None,
) -> None:
    """Generate markdown documentation from plugin commands.

    Reads every manifest, documents each declared command class and writes
    one <command>.md file per command.

    Examples:
        manify generate
        manify generate --destination=./generated-docs
        manify generate --source=wp-content/plugins --no-plugins
    """
    if ctx.invoked_subcommand is not None:
        return

    settings = load_cli_config(config)
    setup_logging(ctx, settings)

    destination = destination or settings.destination

    def on_generated(path: Path) -> None:
        console.print(f"Generated: {escape(str(path))}", soft_wrap=True)

    def on_warning(message: str) -> None:
        console.print(f"[yellow]Warning:[/yellow] {escape(message)}", soft_wrap=True)

    try:
        report = generate_docs(
            source or Path(settings.source),
            destination,
            manifest_name=manifest_name or settings.manifest_name,
            heading_prefix=heading_prefix if heading_prefix is not None else settings.heading_prefix,
            scan_plugins=settings.scan_plugins and not no_plugins,
            on_generated=on_generated,
            on_warning=on_warning,
        )
    except ConfigurationError as e:
        console.print(f"[red]✗[/red] Error: {escape(str(e))}", soft_wrap=True)
        raise typer.Exit(1) from e

    if report.commands_found == 0:
        return

    if report.succeeded:
        console.print(
            "[green]✓[/green] Success: Documentation generated successfully. "
            f"{report.generated_count} commands processed."
        )
    else:
        console.print("[yellow]Warning:[/yellow] No documentation was generated.")
