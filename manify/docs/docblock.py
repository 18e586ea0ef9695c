"""Docblock parsing for command docstrings.

Command methods document themselves in the WP-CLI docblock dialect::

    def hello(self, args, assoc_args):
        \"\"\"Say hi.

        ## OPTIONS

        [--name=<name>]
        : Who to greet.

        ## EXAMPLES

            $ wp greet hello --name=Ada

        @subcommand hello
        \"\"\"

Only the ``## OPTIONS`` and ``## EXAMPLES`` markers and the ``@subcommand``
tag are recognised.
"""

from __future__ import annotations

import re

OPTIONS_MARKER = "## OPTIONS"
EXAMPLES_MARKER = "## EXAMPLES"

_SUBCOMMAND_PATTERN = re.compile(r"@subcommand\s+(\S+)")


class DocParser:
    """Split a cleaned docstring into short and long description.

    The short description is the first line unless it starts with ``@``.
    The long description is what follows it, up to the first line that
    starts with ``@``.

    Examples
    --------
    >>> parser = DocParser("Say hi.\\n\\n## OPTIONS\\n\\n<name>\\n\\n@since 1.0")
    >>> parser.shortdesc
    'Say hi.'
    >>> parser.longdesc
    '## OPTIONS\\n\\n<name>'
    """

    def __init__(self, docstring: str) -> None:
        self.docstring = docstring

    @property
    def shortdesc(self) -> str:
        first_line = self.docstring.split("\n", 1)[0]
        if not first_line or first_line.startswith("@"):
            return ""
        return first_line

    @property
    def longdesc(self) -> str:
        shortdesc = self.shortdesc
        if not shortdesc:
            return ""

        lines = []
        for line in self.docstring[len(shortdesc) :].split("\n"):
            if line.startswith("@"):
                break
            lines.append(line)
        return "\n".join(lines).strip()


def get_subcommand_name(docstring: str, method_name: str) -> str:
    """Return the ``@subcommand`` value, or the method name unchanged."""
    match = _SUBCOMMAND_PATTERN.search(docstring)
    if match:
        return match.group(1)
    return method_name


def split_sections(longdesc: str) -> tuple[str, str]:
    """Split a long description into raw options and examples parts.

    Only the first ``## EXAMPLES`` marker is a boundary; later ones stay in
    the examples part.

    Returns
    -------
    tuple[str, str]
        ``(options, examples)``; examples is empty when there is no marker
    """
    options, marker, examples = longdesc.partition(EXAMPLES_MARKER)
    if not marker:
        return longdesc, ""
    return options, examples


def clean_options(options: str) -> str:
    """Drop the redundant ``## OPTIONS`` marker and trim."""
    return options.replace(OPTIONS_MARKER, "").strip()


def clean_examples(examples: str) -> str:
    """Trim every line, keeping blank lines and order, then trim the block."""
    return "\n".join(line.strip() for line in examples.split("\n")).strip()
