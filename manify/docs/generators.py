"""Markdown rendering for command documentation.

One document per command: a level-1 heading per documented subcommand,
its short description, and fenced OPTIONS / EXAMPLES blocks.
"""

from manify.core.config import DEFAULT_HEADING_PREFIX
from manify.docs.docblock import EXAMPLES_MARKER, OPTIONS_MARKER
from manify.docs.models import MethodDoc, RenderedDocument


def wrap_code(content: str) -> str:
    """Wrap ``content`` in a fenced code block."""
    return "\n```\n" + content.strip() + "\n```\n\n"


class MarkdownGenerator:
    """Render MethodDocs into markdown.

    Parameters
    ----------
    heading_prefix : str
        First word of each heading; ``"wp"`` yields ``# wp greet hello``
    """

    def __init__(self, heading_prefix: str = DEFAULT_HEADING_PREFIX) -> None:
        self.heading_prefix = heading_prefix

    def heading(self, command_name: str, subcommand_name: str) -> str:
        parts = [p for p in (self.heading_prefix, command_name, subcommand_name) if p]
        return "# " + " ".join(parts)

    def render_method(self, command_name: str, doc: MethodDoc) -> str:
        """Render one subcommand section."""
        content = f"{self.heading(command_name, doc.subcommand_name)}\n"
        content += "\n"
        content += f"{doc.short_description}\n\n"

        if doc.options_text:
            content += OPTIONS_MARKER
            content += wrap_code(doc.options_text)

        if doc.examples_text:
            content += EXAMPLES_MARKER
            content += wrap_code(doc.examples_text)

        content += "\n"
        return content

    def render(self, command_name: str, docs: list[MethodDoc]) -> RenderedDocument:
        """Render a whole command; methods keep their extraction order."""
        content = "".join(self.render_method(command_name, doc) for doc in docs)
        return RenderedDocument(command_name=command_name, content=content)
