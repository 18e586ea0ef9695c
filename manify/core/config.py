"""Configuration for manify.

Settings come from three layers, later ones winning:

1. Defaults of :class:`ManifyConfig`
2. ``[tool.manify]`` in ``pyproject.toml``
3. ``MANIFY_*`` environment variables

CLI options are applied on top by the commands themselves.

Examples
--------
```toml
[tool.manify]
destination = "docs/commands"
manifest_name = "composer.json"
heading_prefix = "wp"

[tool.manify.logging]
level = "INFO"
format = "rich"
```
"""

from __future__ import annotations

import os
import tomllib
from dataclasses import dataclass, field, fields, replace
from pathlib import Path
from typing import Any, Literal

from manify.core.exceptions import ConfigurationError

_TRUTHY_VALUES = frozenset({"true", "1", "yes", "on", "enabled"})
_FALSY_VALUES = frozenset({"false", "0", "no", "off", "disabled"})

_LOG_LEVELS = ("TRACE", "DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
_LOG_FORMATS = ("console", "json", "structured", "rich")

DEFAULT_DESTINATION = "docs/"
DEFAULT_MANIFEST_NAME = "composer.json"
DEFAULT_HEADING_PREFIX = "wp"


@dataclass(frozen=True, slots=True)
class LoggingConfig:
    """Logging configuration.

    Attributes
    ----------
    level : str, default="WARNING"
        Log level (TRACE, DEBUG, INFO, WARNING, ERROR, CRITICAL)
    format : str, default="structured"
        Output format (console, json, structured, rich)
    output_file : str | None, default=None
        Optional file path to write JSON logs to
    """

    level: Literal["TRACE", "DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "WARNING"
    format: Literal["console", "json", "structured", "rich"] = "structured"
    output_file: str | None = None


@dataclass(frozen=True, slots=True)
class ManifyConfig:
    """Top-level manify configuration.

    Attributes
    ----------
    destination : str
        Directory that receives the generated markdown files
    source : str
        Project root holding the manifest; its subdirectories are scanned
        as plugins
    manifest_name : str
        File name of the JSON manifest in each directory
    heading_prefix : str
        First word of every generated heading (``# wp greet hello``)
    scan_plugins : bool
        Whether subdirectories of ``source`` are scanned for manifests
    logging : LoggingConfig
        Logging settings
    """

    destination: str = DEFAULT_DESTINATION
    source: str = "."
    manifest_name: str = DEFAULT_MANIFEST_NAME
    heading_prefix: str = DEFAULT_HEADING_PREFIX
    scan_plugins: bool = True
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def _parse_bool(name: str, value: Any) -> bool:
    """Parse a boolean from TOML or an environment variable string.

    Raises
    ------
    ConfigurationError
        If the value is not a recognized boolean
    """
    if isinstance(value, bool):
        return value
    normalized = str(value).lower().strip()
    if normalized in _TRUTHY_VALUES:
        return True
    if normalized in _FALSY_VALUES:
        return False
    raise ConfigurationError(name, f"invalid boolean value {value!r}")


def _parse_logging(data: dict[str, Any]) -> LoggingConfig:
    level = str(data.get("level", "WARNING")).upper()
    if level not in _LOG_LEVELS:
        raise ConfigurationError("logging.level", f"unknown level {level!r}")
    fmt = str(data.get("format", "structured")).lower()
    if fmt not in _LOG_FORMATS:
        raise ConfigurationError("logging.format", f"unknown format {fmt!r}")
    output_file = data.get("output_file")
    return LoggingConfig(
        level=level,  # type: ignore[arg-type]
        format=fmt,  # type: ignore[arg-type]
        output_file=str(output_file) if output_file else None,
    )


def _parse_config(data: dict[str, Any]) -> ManifyConfig:
    """Build a ManifyConfig from a ``[tool.manify]`` mapping."""
    known = {f.name for f in fields(ManifyConfig)}
    unknown = sorted(set(data) - known)
    if unknown:
        raise ConfigurationError("tool.manify", f"unknown keys: {', '.join(unknown)}")

    logging_data = data.get("logging", {})
    if not isinstance(logging_data, dict):
        raise ConfigurationError("tool.manify.logging", "must be a table")

    defaults = ManifyConfig()
    return ManifyConfig(
        destination=str(data.get("destination", defaults.destination)),
        source=str(data.get("source", defaults.source)),
        manifest_name=str(data.get("manifest_name", defaults.manifest_name)),
        heading_prefix=str(data.get("heading_prefix", defaults.heading_prefix)),
        scan_plugins=_parse_bool("scan_plugins", data.get("scan_plugins", True)),
        logging=_parse_logging(logging_data),
    )


def _apply_env_overrides(config: ManifyConfig) -> ManifyConfig:
    """Apply ``MANIFY_*`` environment variables on top of ``config``."""
    overrides: dict[str, Any] = {}
    for name in ("destination", "source", "manifest_name", "heading_prefix"):
        value = os.environ.get(f"MANIFY_{name.upper()}")
        if value:
            overrides[name] = value

    scan_plugins = os.environ.get("MANIFY_SCAN_PLUGINS")
    if scan_plugins:
        overrides["scan_plugins"] = _parse_bool("MANIFY_SCAN_PLUGINS", scan_plugins)

    log_level = os.environ.get("MANIFY_LOG_LEVEL")
    log_format = os.environ.get("MANIFY_LOG_FORMAT")
    if log_level or log_format:
        overrides["logging"] = _parse_logging({
            "level": log_level or config.logging.level,
            "format": log_format or config.logging.format,
            "output_file": config.logging.output_file,
        })

    return replace(config, **overrides) if overrides else config


def load_config(path: str | Path | None = None) -> ManifyConfig:
    """Load configuration from pyproject.toml and the environment.

    Parameters
    ----------
    path : str | Path | None
        Explicit pyproject.toml (or flat TOML) path. When None,
        ``./pyproject.toml`` is used if present.

    Returns
    -------
    ManifyConfig
        Resolved configuration

    Raises
    ------
    ConfigurationError
        If an explicit path is missing, or the TOML or its values are invalid
    """
    if path is not None:
        config_path = Path(path)
        if not config_path.is_file():
            raise ConfigurationError("config", f"file not found: {config_path}")
    else:
        config_path = Path.cwd() / "pyproject.toml"

    config = ManifyConfig()
    if config_path.is_file():
        try:
            with config_path.open("rb") as f:
                data = tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            raise ConfigurationError("config", f"invalid TOML in {config_path}: {e}") from e

        if "tool" in data or config_path.name == "pyproject.toml":
            manify_data = data.get("tool", {}).get("manify", {})
        else:
            manify_data = data
        if manify_data:
            config = _parse_config(manify_data)

    return _apply_env_overrides(config)
