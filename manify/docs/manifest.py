"""Manifest reading and discovery.

A manifest is a JSON file (``composer.json`` by default) whose ``extra``
section declares commands in one of two shapes::

    {"extra": {"commands": ["greet", "greet hello"]}}

    {"extra": {"wp-cli-commands": {
        "greet": {"class": "Greet_Command", "file": "src/greet.py"}
    }}}

The list shape names commands of the current project; they are resolved
through the command registry. The keyed shape binds each command to a class
in a file relative to the manifest's directory.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from manify.core.config import DEFAULT_MANIFEST_NAME
from manify.core.exceptions import ConfigurationError
from manify.core.logging import get_logger
from manify.docs.models import CommandDescriptor

logger = get_logger(__name__)

EXTRA_KEY = "extra"
COMMANDS_KEY = "commands"
PLUGIN_COMMANDS_KEY = "wp-cli-commands"


def load_manifest(directory: Path, manifest_name: str = DEFAULT_MANIFEST_NAME) -> dict[str, Any]:
    """Load and validate the manifest in ``directory``.

    Returns
    -------
    dict[str, Any]
        The ``extra`` section

    Raises
    ------
    ConfigurationError
        If the file is missing, is not a JSON object, or has no ``extra`` object
    """
    manifest_path = Path(directory) / manifest_name
    if not manifest_path.is_file():
        raise ConfigurationError("manifest", f"{manifest_name} not found in {directory}")

    try:
        data = json.loads(manifest_path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigurationError("manifest", f"could not read {manifest_path}: {e}") from e
    except json.JSONDecodeError as e:
        raise ConfigurationError("manifest", f"invalid JSON in {manifest_path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigurationError("manifest", f"{manifest_path} must contain a JSON object")

    extra = data.get(EXTRA_KEY)
    if not isinstance(extra, dict):
        raise ConfigurationError("manifest", f"missing '{EXTRA_KEY}' section in {manifest_path}")
    return extra


def _project_commands(commands: Any, directory: Path) -> list[CommandDescriptor]:
    if not isinstance(commands, list):
        raise ConfigurationError("manifest", f"'{COMMANDS_KEY}' must be a list in {directory}")

    descriptors = []
    for entry in commands:
        if not isinstance(entry, str) or not entry.split():
            raise ConfigurationError("manifest", f"invalid command entry {entry!r} in {directory}")
        # "greet hello" documents the whole "greet" command
        descriptors.append(
            CommandDescriptor(command_name=entry.split()[0], base_directory=directory)
        )
    return descriptors


def _plugin_commands(commands: Any, directory: Path) -> list[CommandDescriptor]:
    if not isinstance(commands, dict):
        raise ConfigurationError(
            "manifest", f"'{PLUGIN_COMMANDS_KEY}' must be an object in {directory}"
        )

    descriptors = []
    for key, config in commands.items():
        if not isinstance(config, dict):
            raise ConfigurationError("manifest", f"command '{key}' must be an object")
        class_name = config.get("class")
        if not isinstance(class_name, str) or not class_name:
            raise ConfigurationError("manifest", f"command '{key}' has no 'class'")
        source_file = config.get("file")
        if source_file is not None and (not isinstance(source_file, str) or not source_file):
            raise ConfigurationError("manifest", f"command '{key}' has an invalid 'file'")
        command_name = config.get("command")
        if command_name is None:
            command_name = key
        if not isinstance(command_name, str) or not command_name:
            raise ConfigurationError("manifest", f"command '{key}' has an invalid 'command'")

        descriptors.append(
            CommandDescriptor(
                command_name=command_name,
                class_name=class_name,
                source_file=Path(source_file) if source_file else None,
                base_directory=directory,
            )
        )
    return descriptors


def read_manifest(
    directory: Path, manifest_name: str = DEFAULT_MANIFEST_NAME
) -> list[CommandDescriptor]:
    """Read the command descriptors declared by one manifest.

    Parameters
    ----------
    directory : Path
        Directory containing the manifest
    manifest_name : str
        Manifest file name

    Returns
    -------
    list[CommandDescriptor]
        Project (list-shape) commands first, then plugin (keyed) commands;
        empty when ``extra`` declares neither
    """
    directory = Path(directory)
    extra = load_manifest(directory, manifest_name)

    descriptors: list[CommandDescriptor] = []
    if COMMANDS_KEY in extra:
        descriptors.extend(_project_commands(extra[COMMANDS_KEY], directory))
    if PLUGIN_COMMANDS_KEY in extra:
        descriptors.extend(_plugin_commands(extra[PLUGIN_COMMANDS_KEY], directory))

    logger.debug(
        "Read {count} command(s) from {path}",
        count=len(descriptors),
        path=directory / manifest_name,
    )
    return descriptors


def discover_manifest_dirs(
    source: Path,
    manifest_name: str = DEFAULT_MANIFEST_NAME,
    scan_plugins: bool = True,
) -> list[Path]:
    """Find directories holding a manifest.

    The source root comes first when it has a manifest, followed by its
    immediate subdirectories that have one, sorted by name.

    Raises
    ------
    ConfigurationError
        If ``source`` is not a directory or no manifest is found
    """
    source = Path(source)
    if not source.is_dir():
        raise ConfigurationError("source", f"not a directory: {source}")

    found = []
    if (source / manifest_name).is_file():
        found.append(source)
    if scan_plugins:
        found.extend(
            child
            for child in sorted(source.iterdir())
            if child.is_dir() and (child / manifest_name).is_file()
        )

    if not found:
        raise ConfigurationError("manifest", f"no {manifest_name} found in {source}")
    return found


def _read_plugin_manifest(directory: Path, manifest_name: str) -> list[CommandDescriptor]:
    try:
        descriptors = read_manifest(directory, manifest_name)
    except ConfigurationError as e:
        logger.info("Skipping plugin {path}: {reason}", path=directory, reason=e.reason)
        return []
    if not descriptors:
        logger.debug("Plugin {path} declares no commands", path=directory)
    return descriptors


def read_commands(
    source: Path,
    manifest_name: str = DEFAULT_MANIFEST_NAME,
    scan_plugins: bool = True,
) -> list[CommandDescriptor]:
    """Read descriptors from every manifest under ``source``.

    Problems with the manifest in ``source`` itself are fatal. A plugin
    manifest that is unreadable, has no ``extra`` section or declares invalid
    commands only skips that plugin. Commands already declared by an earlier
    manifest are dropped so that each command name maps to one output file.

    Raises
    ------
    ConfigurationError
        If discovery fails or the manifest in ``source`` is invalid
    """
    source = Path(source)
    descriptors: list[CommandDescriptor] = []
    seen: set[str] = set()
    for directory in discover_manifest_dirs(source, manifest_name, scan_plugins):
        if directory == source:
            found = read_manifest(directory, manifest_name)
        else:
            found = _read_plugin_manifest(directory, manifest_name)

        for descriptor in found:
            if descriptor.command_name in seen:
                logger.debug(
                    "Ignoring duplicate command {name} in {path}",
                    name=descriptor.command_name,
                    path=directory,
                )
                continue
            seen.add(descriptor.command_name)
            descriptors.append(descriptor)
    return descriptors
