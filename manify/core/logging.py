"""Logging for manify, built on Loguru.

Every module logs through ``get_logger(__name__)``; the returned logger is
bound with ``module`` so sinks can show where a record came from. The CLI
calls :func:`configure_logging` once per command with the resolved settings.
Library users who never call it get a stderr sink configured from
``MANIFY_LOG_LEVEL`` and ``MANIFY_LOG_FORMAT``.

Examples
--------
>>> from manify.core.logging import get_logger
>>> logger = get_logger(__name__)
>>> logger.debug("Read {count} command(s)", count=2)

Switch to Rich output::

    from manify.core.logging import configure_logging
    configure_logging(level="INFO", format="rich")
"""

import logging
import os
import sys
from contextlib import suppress
from functools import lru_cache
from pathlib import Path
from typing import TYPE_CHECKING, Any, Literal

if TYPE_CHECKING:
    import types

    from loguru import Logger

from loguru import logger
from rich.logging import RichHandler

LogLevel = Literal["TRACE", "DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
LogFormat = Literal["console", "json", "structured", "rich"]

_CURRENT_CONFIG: dict | None = None
_HANDLER_IDS: list[int] = []

_ORIGIN = "{extra[module]}:{function}:{line}"

# Handler installed by loguru at import time (DEBUG, stderr)
_LOGURU_DEFAULT_HANDLER_ID = 0


def _stderr_sink(
    format: LogFormat, use_color: bool, include_timestamp: bool
) -> tuple[Any, dict[str, Any]]:
    """Return the sink and ``logger.add`` options for a stderr format."""
    if format == "rich":
        handler = RichHandler(
            rich_tracebacks=True,
            markup=False,
            show_time=include_timestamp,
            show_path=False,
        )
        return handler, {"format": "{message}"}

    if format == "json":
        return sys.stderr, {"serialize": True}

    if format == "structured":
        colorize = use_color and sys.stderr.isatty()
        stamp = "<green>{time:YYYY-MM-DD HH:mm:ss}</green> " if include_timestamp else ""
        level = "<level>{level: <8}</level>" if colorize else "{level: <8}"
        line = f"{stamp}[{level}]<cyan>{_ORIGIN}</cyan> | <level>{{message}}</level>"
        return sys.stderr, {"format": line, "colorize": colorize, "filter": _with_module_default}

    stamp = "{time:YYYY-MM-DD HH:mm:ss} " if include_timestamp else ""
    line = f"{stamp}{{level: <8}} | {{extra[module]}} | {{message}}"
    return sys.stderr, {"format": line, "colorize": False, "filter": _with_module_default}


def configure_logging(
    level: LogLevel = "WARNING",
    format: LogFormat = "structured",
    output_file: str | Path | None = None,
    use_color: bool = True,
    include_timestamp: bool = True,
    force_reconfigure: bool = False,
) -> None:
    """Install manify's log sinks.

    Repeating a call with identical settings does nothing, so every CLI
    command can call this unconditionally. The first call also removes the
    stderr handler Loguru installs on import.

    Parameters
    ----------
    level : LogLevel, default="WARNING"
        Minimum level written by every sink
    format : LogFormat, default="structured"
        stderr rendering:
        - "console": plain ``level | module | message`` lines
        - "json": Loguru serialized records
        - "structured": timestamp, level and origin, colored on a TTY
        - "rich": a Rich ``RichHandler``
    output_file : str | Path | None, default=None
        Extra sink receiving serialized JSON records; parent directories are
        created
    use_color : bool, default=True
        Allow colors in the structured format
    include_timestamp : bool, default=True
        Prefix records with the time
    force_reconfigure : bool, default=False
        Replace the sinks even when the settings are unchanged
    """
    global _CURRENT_CONFIG

    settings = {
        "level": level,
        "format": format,
        "output_file": str(output_file) if output_file else None,
        "use_color": use_color,
        "include_timestamp": include_timestamp,
    }
    if settings == _CURRENT_CONFIG and not force_reconfigure:
        return

    _remove_handlers()
    with suppress(ValueError):
        logger.remove(_LOGURU_DEFAULT_HANDLER_ID)

    sink, options = _stderr_sink(format, use_color, include_timestamp)
    _HANDLER_IDS.append(logger.add(sink, level=level, **options))

    if output_file:
        log_path = Path(output_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        _HANDLER_IDS.append(logger.add(log_path, level=level, serialize=True))

    _CURRENT_CONFIG = settings


def _remove_handlers() -> None:
    # Sinks added by others (pytest, applications) are left alone
    for handler_id in _HANDLER_IDS:
        with suppress(ValueError):
            logger.remove(handler_id)
    _HANDLER_IDS.clear()


def _with_module_default(record: dict) -> bool:
    """Use the Loguru record name when a record carries no ``module``."""
    record["extra"].setdefault("module", record["name"])
    return True


@lru_cache(maxsize=256)
def get_logger(name: str) -> "Logger":
    """Return the Loguru logger bound with ``module=name``.

    Parameters
    ----------
    name : str
        Usually ``__name__`` of the caller

    Returns
    -------
    loguru.Logger
        Cached bound logger
    """
    _ensure_configured()
    return logger.bind(module=name)


class _LoguruBridge(logging.Handler):
    """Forward stdlib ``logging`` records to Loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        level: str | int
        try:
            level = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        # Report the frame that called logging, not logging itself
        frame: "types.FrameType | None" = logging.currentframe()
        depth = 2
        while frame is not None and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(level, record.getMessage())


def enable_stdlib_logging_bridge() -> None:
    """Send records of stdlib loggers (third-party libraries) through Loguru."""
    logging.basicConfig(handlers=[_LoguruBridge()], level=0, force=True)


def reset_logging() -> None:
    """Remove manify's sinks and forget the last configuration."""
    global _CURRENT_CONFIG

    _remove_handlers()
    _CURRENT_CONFIG = None


def _ensure_configured() -> None:
    if _CURRENT_CONFIG is not None:
        return
    level = os.getenv("MANIFY_LOG_LEVEL", "WARNING").upper()
    format_type = os.getenv("MANIFY_LOG_FORMAT", "structured").lower()
    configure_logging(level=level, format=format_type)  # type: ignore[arg-type]
