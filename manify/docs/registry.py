"""Command providers and the registry that names them.

A provider pairs the descriptor of a command with the documentation records
of its subcommands. The pipeline only talks to providers, so commands can be
documented from a class, from a plugin file, or from explicit records.

Plugins can register commands via pyproject.toml::

    [project.entry-points."manify.commands"]
    greet = "greet_plugin.commands:GreetCommand"

Examples
--------
>>> from manify.docs.registry import CommandRegistry
>>> registry = CommandRegistry()
>>> class Greet:
...     def hello(self):
...         '''Say hi.'''
>>> registry.register("greet", Greet)
>>> registry.names()
['greet']
"""

from __future__ import annotations

from importlib.metadata import entry_points
from typing import Protocol, runtime_checkable

from manify.core.logging import get_logger
from manify.docs.extractors import extract_method_docs
from manify.docs.models import CommandDescriptor, MethodDoc

logger = get_logger(__name__)

ENTRY_POINT_GROUP = "manify.commands"


@runtime_checkable
class CommandProvider(Protocol):
    """Anything that can describe a command and its subcommands."""

    @property
    def descriptor(self) -> CommandDescriptor: ...

    def method_docs(self) -> list[MethodDoc]: ...


class ClassCommandProvider:
    """Provider backed by a command class; docs come from its docstrings."""

    def __init__(self, descriptor: CommandDescriptor, cls: type) -> None:
        self._descriptor = descriptor
        self.cls = cls

    @property
    def descriptor(self) -> CommandDescriptor:
        return self._descriptor

    def method_docs(self) -> list[MethodDoc]:
        return extract_method_docs(self.cls)


class StaticCommandProvider:
    """Provider holding explicit documentation records."""

    def __init__(self, descriptor: CommandDescriptor, docs: list[MethodDoc]) -> None:
        self._descriptor = descriptor
        self._docs = list(docs)

    @property
    def descriptor(self) -> CommandDescriptor:
        return self._descriptor

    def method_docs(self) -> list[MethodDoc]:
        return list(self._docs)


RegistryTarget = type | CommandProvider


class CommandRegistry:
    """Maps command names to command classes or providers."""

    def __init__(self) -> None:
        self._targets: dict[str, RegistryTarget] = {}
        self._entry_points_loaded = False

    def register(self, command_name: str, target: RegistryTarget) -> None:
        """Register a class or provider under ``command_name``.

        Registering the same name again replaces the previous target.
        """
        if command_name in self._targets:
            logger.debug("Replacing registered command {name}", name=command_name)
        self._targets[command_name] = target

    def unregister(self, command_name: str) -> None:
        self._targets.pop(command_name, None)

    def get(self, command_name: str) -> RegistryTarget | None:
        """Look up a command, loading entry points on first miss."""
        if command_name not in self._targets and not self._entry_points_loaded:
            self.load_entry_points()
        return self._targets.get(command_name)

    def names(self) -> list[str]:
        return sorted(self._targets)

    def clear(self) -> None:
        self._targets.clear()
        self._entry_points_loaded = False

    def load_entry_points(self, group: str = ENTRY_POINT_GROUP) -> int:
        """Register commands advertised by installed distributions.

        Broken entry points are logged and skipped. Names already registered
        programmatically win over entry points.

        Returns
        -------
        int
            Number of commands registered from entry points
        """
        self._entry_points_loaded = True
        loaded = 0
        for ep in entry_points(group=group):
            if ep.name in self._targets:
                continue
            try:
                target = ep.load()
            except Exception as e:
                logger.warning(
                    "Failed to load command entry point {name} ({value}): {error}",
                    name=ep.name,
                    value=ep.value,
                    error=e,
                )
                continue
            self._targets[ep.name] = target
            loaded += 1
        return loaded


# Process-wide registry used when callers don't pass their own
registry = CommandRegistry()


def register_command(command_name: str, target: RegistryTarget) -> None:
    """Register a command in the default registry."""
    registry.register(command_name, target)
