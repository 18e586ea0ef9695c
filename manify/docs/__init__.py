"""Markdown documentation generation for plugin commands.

Reads JSON manifests, resolves the command classes they declare, parses the
docstrings of their public methods and writes one markdown file per command.
"""

from manify.docs.generators import MarkdownGenerator
from manify.docs.manifest import discover_manifest_dirs, read_commands, read_manifest
from manify.docs.models import (
    CommandDescriptor,
    GenerationReport,
    MethodDoc,
    RenderedDocument,
)
from manify.docs.pipeline import generate_docs, render_command
from manify.docs.registry import (
    ClassCommandProvider,
    CommandProvider,
    CommandRegistry,
    StaticCommandProvider,
    register_command,
    registry,
)

__all__ = [
    "ClassCommandProvider",
    "CommandDescriptor",
    "CommandProvider",
    "CommandRegistry",
    "GenerationReport",
    "MarkdownGenerator",
    "MethodDoc",
    "RenderedDocument",
    "StaticCommandProvider",
    "discover_manifest_dirs",
    "generate_docs",
    "read_commands",
    "read_manifest",
    "register_command",
    "registry",
    "render_command",
]
