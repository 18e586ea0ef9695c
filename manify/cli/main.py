"""manify CLI - Main entrypoint."""

from enum import StrEnum

import typer
from rich.console import Console

from manify import __version__
from manify.cli.commands import generate_cmd, list_cmd

# Create the main Typer app
app = typer.Typer(
    name="manify",
    help="manify - Generate markdown documentation from plugin command docblocks.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    pretty_exceptions_enable=False,
)

console = Console()

app.add_typer(
    generate_cmd.app,
    name="generate",
    help="Generate markdown documentation from plugin commands",
)
app.add_typer(list_cmd.app, name="list", help="List the commands declared by the manifests")


class LogLevelOption(StrEnum):
    """Log levels accepted on the command line."""

    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"[bold blue]manify[/bold blue] version [green]{__version__}[/green]")
        raise typer.Exit()


@app.callback()
def callback(
    ctx: typer.Context,
    *,
    quiet: bool = typer.Option(False, "-q", "--quiet", help="Only log errors"),
    verbose: bool = typer.Option(False, "-V", "--verbose", help="Enable debug logging"),
    log_level: LogLevelOption | None = typer.Option(None, "--log-level", help="Log level"),
    version: bool = typer.Option(
        False,
        "--version",
        "-v",
        help="Show version and exit",
        callback=_version_callback,
        is_eager=True,
    ),
) -> None:
    """manify - Markdown documentation for plugin commands.

    Global flags are parsed here and stored on `ctx.obj` for subcommands.
    """
    if ctx.obj is None:
        ctx.obj = {}

    effective_level = log_level.value if log_level else None
    if quiet:
        effective_level = "error"
    elif verbose:
        effective_level = "debug"

    ctx.obj.update({
        "quiet": quiet,
        "verbose": verbose,
        "log_level": effective_level,
        "version": __version__,
    })


def main() -> None:
    """Main CLI entrypoint."""
    app()


if __name__ == "__main__":
    main()
