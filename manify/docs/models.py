"""Data models for documentation generation.

These Pydantic models carry a command from the manifest through extraction
and rendering to the written file.
"""

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field


class CommandDescriptor(BaseModel):
    """One command declared in a manifest.

    Attributes
    ----------
    command_name : str
        Name used in headings and as the output file stem
    class_name : str
        Class implementing the command; empty when the command is resolved
        through the registry
    source_file : Path | None
        File defining the class, relative to ``base_directory``
    base_directory : Path
        Directory of the manifest that declared the command
    """

    model_config = ConfigDict(frozen=True)

    command_name: str
    class_name: str = ""
    source_file: Path | None = None
    base_directory: Path = Path(".")

    @property
    def source_path(self) -> Path | None:
        """Absolute-or-relative path of the source file, if any."""
        if self.source_file is None:
            return None
        return self.base_directory / self.source_file


class MethodDoc(BaseModel):
    """Documentation extracted from one public method.

    Attributes
    ----------
    method_name : str
        Python attribute name of the method
    subcommand_name : str
        ``@subcommand`` value, or the method name verbatim
    short_description : str
        First line of the docstring
    options_text : str
        Cleaned options section (``## OPTIONS`` marker removed)
    examples_text : str
        Cleaned examples section
    """

    method_name: str
    subcommand_name: str
    short_description: str = ""
    options_text: str = ""
    examples_text: str = ""


class RenderedDocument(BaseModel):
    """Markdown rendered for one command.

    Attributes
    ----------
    command_name : str
        Command the document describes
    content : str
        Markdown text; empty when no method is documented
    """

    model_config = ConfigDict(frozen=True)

    command_name: str
    content: str = ""

    @property
    def file_name(self) -> str:
        """Output file name, ``<command_name>.md``; the name is not escaped."""
        return f"{self.command_name}.md"


class GenerationReport(BaseModel):
    """Outcome of a documentation run.

    Attributes
    ----------
    commands_found : int
        Number of descriptors read from the manifests
    generated : list[Path]
        Files written, in processing order
    warnings : list[str]
        Recoverable problems, one message per skipped command
    """

    commands_found: int = 0
    generated: list[Path] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)

    @property
    def generated_count(self) -> int:
        """Number of files written."""
        return len(self.generated)

    @property
    def succeeded(self) -> bool:
        """Whether at least one document was written."""
        return self.generated_count > 0
