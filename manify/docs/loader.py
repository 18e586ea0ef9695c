"""Resolve command descriptors to command providers.

Plugin command files are plain Python modules loaded by path. A file is
executed at most once per process; later descriptors pointing at the same
file reuse the module.
"""

from __future__ import annotations

import hashlib
import importlib
import importlib.util
import sys
from pathlib import Path
from types import ModuleType
from typing import Any

from manify.core.exceptions import ClassNotFoundError
from manify.core.logging import get_logger
from manify.docs.models import CommandDescriptor
from manify.docs.registry import (
    ClassCommandProvider,
    CommandProvider,
    CommandRegistry,
    registry as default_registry,
)

logger = get_logger(__name__)


def _module_name_for(path: Path) -> str:
    digest = hashlib.sha1(str(path).encode("utf-8")).hexdigest()[:12]
    return f"manify_commands_{digest}_{path.stem}"


def load_source_file(path: Path, class_name: str = "") -> ModuleType:
    """Load a Python source file as a module, once.

    The file's directory is put on ``sys.path`` while it executes so that it
    can import its siblings.

    Raises
    ------
    ClassNotFoundError
        If the file is missing or raises while executing
    """
    path = Path(path)
    if not path.is_file():
        raise ClassNotFoundError(class_name, f"Command file not found: {path}")

    resolved = path.resolve()
    module_name = _module_name_for(resolved)
    if module_name in sys.modules:
        return sys.modules[module_name]

    spec = importlib.util.spec_from_file_location(module_name, resolved)
    if spec is None or spec.loader is None:
        raise ClassNotFoundError(class_name, f"Could not load command file: {path}")

    module = importlib.util.module_from_spec(spec)
    sys.modules[module_name] = module

    parent = str(resolved.parent)
    path_added = parent not in sys.path
    if path_added:
        sys.path.insert(0, parent)
    try:
        spec.loader.exec_module(module)
    except Exception as e:
        del sys.modules[module_name]
        raise ClassNotFoundError(class_name, f"Could not load command file {path}: {e}") from e
    finally:
        if path_added and parent in sys.path:
            sys.path.remove(parent)

    logger.debug("Loaded command file {path} as {module}", path=path, module=module_name)
    return module


def resolve_class(module: ModuleType, class_name: str) -> type:
    """Resolve ``class_name`` (possibly dotted, e.g. ``Outer.Inner``) in ``module``.

    Raises
    ------
    ClassNotFoundError
        If the attribute is missing or is not a class
    """
    obj: Any = module
    for part in class_name.split("."):
        try:
            obj = getattr(obj, part)
        except AttributeError:
            raise ClassNotFoundError(class_name) from None
    if not isinstance(obj, type):
        raise ClassNotFoundError(class_name, f"Not a class: {class_name}")
    return obj


def import_class(class_path: str) -> type:
    """Import a class from ``package.module:Class`` or ``package.module.Class``.

    Raises
    ------
    ClassNotFoundError
        If the module cannot be imported or the class is missing
    """
    if ":" in class_path:
        module_path, class_name = class_path.split(":", 1)
    elif "." in class_path:
        module_path, class_name = class_path.rsplit(".", 1)
    else:
        raise ClassNotFoundError(class_path)

    try:
        module = importlib.import_module(module_path)
    except ImportError:
        raise ClassNotFoundError(class_path) from None
    return resolve_class(module, class_name)


def load_provider(
    descriptor: CommandDescriptor,
    registry: CommandRegistry | None = None,
) -> CommandProvider:
    """Turn a descriptor into a provider ready for extraction.

    Descriptors with a source file are loaded from that file. Otherwise the
    registry is consulted by command name, then ``class_name`` is imported as
    a module path.

    Raises
    ------
    ClassNotFoundError
        If no class can be resolved for the descriptor
    """
    registry = registry if registry is not None else default_registry

    source_path = descriptor.source_path
    if source_path is not None:
        module = load_source_file(source_path, descriptor.class_name)
        return ClassCommandProvider(descriptor, resolve_class(module, descriptor.class_name))

    target = registry.get(descriptor.command_name)
    if isinstance(target, type):
        return ClassCommandProvider(descriptor, target)
    if isinstance(target, CommandProvider):
        return target
    if target is not None:
        raise ClassNotFoundError(
            descriptor.command_name,
            f"Registered command is neither a class nor a provider: {descriptor.command_name}",
        )

    if descriptor.class_name:
        return ClassCommandProvider(descriptor, import_class(descriptor.class_name))

    raise ClassNotFoundError(
        descriptor.command_name,
        f"No class registered for command: {descriptor.command_name}",
    )
