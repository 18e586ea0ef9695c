"""Documentation pipeline.

manifest → provider → method docs → markdown → file, one command at a time.
Manifest and destination problems abort the run; anything that goes wrong
for a single command is recorded as a warning and the run continues.
"""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

from manify.core.config import (
    DEFAULT_DESTINATION,
    DEFAULT_HEADING_PREFIX,
    DEFAULT_MANIFEST_NAME,
)
from manify.core.exceptions import ClassNotFoundError, FileWriteError
from manify.core.logging import get_logger
from manify.docs.generators import MarkdownGenerator
from manify.docs.loader import load_provider
from manify.docs.manifest import read_commands
from manify.docs.models import CommandDescriptor, GenerationReport, RenderedDocument
from manify.docs.registry import CommandRegistry
from manify.docs.writer import ensure_destination, write_document

logger = get_logger(__name__)

NO_COMMANDS_WARNING = "No commands found in manifest files."


def render_command(
    descriptor: CommandDescriptor,
    heading_prefix: str = DEFAULT_HEADING_PREFIX,
    registry: CommandRegistry | None = None,
) -> RenderedDocument:
    """Render the document for one command without writing it.

    Raises
    ------
    ClassNotFoundError
        If the command class cannot be resolved
    """
    provider = load_provider(descriptor, registry)
    docs = provider.method_docs()
    if not docs:
        logger.warning(
            "Command {name} has no documented methods", name=descriptor.command_name
        )
    return MarkdownGenerator(heading_prefix).render(descriptor.command_name, docs)


def generate_docs(
    source: str | Path = ".",
    destination: str | Path = DEFAULT_DESTINATION,
    *,
    manifest_name: str = DEFAULT_MANIFEST_NAME,
    heading_prefix: str = DEFAULT_HEADING_PREFIX,
    scan_plugins: bool = True,
    registry: CommandRegistry | None = None,
    on_generated: Callable[[Path], None] | None = None,
    on_warning: Callable[[str], None] | None = None,
) -> GenerationReport:
    """Generate one markdown file per command declared under ``source``.

    Parameters
    ----------
    source : str | Path
        Project root; its manifest and those of its immediate
        subdirectories are read
    destination : str | Path
        Output directory, created if missing
    manifest_name : str
        Manifest file name
    heading_prefix : str
        First word of every heading
    scan_plugins : bool
        Read manifests of subdirectories too
    registry : CommandRegistry | None
        Registry for commands without a source file; the default registry
        when None
    on_generated, on_warning : Callable | None
        Progress callbacks, called as files are written or commands skipped.
        Warnings handed to ``on_warning`` are only logged at debug level

    Returns
    -------
    GenerationReport
        Written files and warnings

    Raises
    ------
    ConfigurationError
        If a manifest is missing or invalid, or the destination cannot be
        created
    """
    report = GenerationReport()

    def warn(message: str) -> None:
        report.warnings.append(message)
        if on_warning is None:
            logger.warning(message)
        else:
            logger.debug(message)
            on_warning(message)

    descriptors = read_commands(Path(source), manifest_name, scan_plugins)
    report.commands_found = len(descriptors)
    if not descriptors:
        warn(NO_COMMANDS_WARNING)
        return report

    ensure_destination(destination)

    for descriptor in descriptors:
        try:
            document = render_command(descriptor, heading_prefix, registry)
            path = write_document(destination, document)
        except (ClassNotFoundError, FileWriteError) as e:
            warn(str(e))
            continue

        report.generated.append(path)
        logger.info("Generated {path}", path=path)
        if on_generated is not None:
            on_generated(path)

    return report
