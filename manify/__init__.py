"""manify - markdown documentation for plugin commands.

Reads the commands declared in JSON manifests, parses the WP-CLI style
docblocks of their methods and writes one markdown file per command.
"""

# Version is defined in pyproject.toml and read dynamically
try:
    from importlib.metadata import version

    __version__ = version("manify")
except Exception:
    __version__ = "0.0.0.dev0"  # Fallback for development installs

from manify.core.exceptions import (
    ClassNotFoundError,
    ConfigurationError,
    FileWriteError,
    ManifyError,
)
from manify.docs import (
    CommandDescriptor,
    CommandRegistry,
    GenerationReport,
    MethodDoc,
    generate_docs,
    register_command,
    render_command,
)

__all__ = [
    "ClassNotFoundError",
    "CommandDescriptor",
    "CommandRegistry",
    "ConfigurationError",
    "FileWriteError",
    "GenerationReport",
    "ManifyError",
    "MethodDoc",
    "__version__",
    "generate_docs",
    "register_command",
    "render_command",
]
