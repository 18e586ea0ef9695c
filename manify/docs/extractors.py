"""Docstring extraction from command classes.

Walks the public methods of a command class and turns each documented one
into a :class:`MethodDoc`.
"""

from __future__ import annotations

import inspect
from collections.abc import Callable, Iterator
from typing import Any

from manify.core.logging import get_logger
from manify.docs.docblock import (
    DocParser,
    clean_examples,
    clean_options,
    get_subcommand_name,
    split_sections,
)
from manify.docs.models import MethodDoc

logger = get_logger(__name__)


def iter_public_methods(cls: type) -> Iterator[tuple[str, Callable[..., Any]]]:
    """Yield ``(name, function)`` for the public methods of ``cls``.

    The class's own methods come first in declaration order, followed by
    inherited ones in MRO order. Overridden methods are yielded once, from
    the most derived class. Properties and nested classes are skipped.
    """
    seen: set[str] = set()
    for klass in cls.__mro__:
        if klass is object:
            continue
        for name, attr in vars(klass).items():
            if name.startswith("_") or name in seen:
                continue
            if isinstance(attr, (staticmethod, classmethod)):
                func = attr.__func__
            elif inspect.isfunction(attr):
                func = attr
            else:
                continue
            seen.add(name)
            yield name, func


def extract_method_doc(method_name: str, func: Callable[..., Any]) -> MethodDoc | None:
    """Build the MethodDoc for one method, or None if it has no docstring."""
    docstring = inspect.cleandoc(func.__doc__) if func.__doc__ else ""
    if not docstring.strip():
        return None

    parser = DocParser(docstring)
    options, examples = split_sections(parser.longdesc)

    return MethodDoc(
        method_name=method_name,
        subcommand_name=get_subcommand_name(docstring, method_name),
        short_description=parser.shortdesc,
        options_text=clean_options(options),
        examples_text=clean_examples(examples),
    )


def extract_method_docs(cls: type) -> list[MethodDoc]:
    """Extract documentation for every documented public method of ``cls``."""
    docs = []
    for name, func in iter_public_methods(cls):
        doc = extract_method_doc(name, func)
        if doc is None:
            logger.debug("Skipping undocumented method {cls}.{name}", cls=cls.__name__, name=name)
            continue
        docs.append(doc)
    return docs
