"""CLI helper utilities for manify commands."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Protocol

import typer
from rich.console import Console
from rich.markup import escape

from manify.core.config import ManifyConfig, load_config
from manify.core.exceptions import ConfigurationError
from manify.core.logging import configure_logging


class ContextProtocol(Protocol):
    """Protocol for common interface between Click and Typer contexts."""

    @property
    def obj(self) -> dict[str, Any] | None: ...


console = Console()


def load_cli_config(config_path: Path | None) -> ManifyConfig:
    """Load configuration, exiting with status 1 if it is invalid."""
    try:
        return load_config(config_path)
    except ConfigurationError as e:
        console.print(f"[red]✗[/red] {escape(str(e))}", soft_wrap=True)
        raise typer.Exit(1) from e


def setup_logging(ctx: ContextProtocol | None, config: ManifyConfig) -> None:
    """Configure logging from ``config``, letting global CLI flags win."""
    level = config.logging.level
    obj = getattr(ctx, "obj", None) if ctx is not None else None
    if isinstance(obj, dict) and obj.get("log_level"):
        level = obj["log_level"].upper()

    configure_logging(
        level=level,
        format=config.logging.format,
        output_file=config.logging.output_file,
    )
