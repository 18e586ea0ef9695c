"""Write rendered documents to the destination directory."""

from pathlib import Path

from manify.core.exceptions import ConfigurationError, FileWriteError
from manify.core.logging import get_logger
from manify.docs.models import RenderedDocument

logger = get_logger(__name__)


def ensure_destination(destination: str | Path) -> Path:
    """Create the destination directory (and parents) if needed.

    Raises
    ------
    ConfigurationError
        If the directory cannot be created
    """
    path = Path(destination)
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise ConfigurationError(
            "destination", f"Could not create destination directory '{destination}': {e}"
        ) from e
    return path


def output_path(destination: str | Path, file_name: str) -> Path:
    """Return ``<destination>/<file_name>``; the name is not escaped."""
    return Path(str(destination).rstrip("/") + "/" + file_name)


def write_document(destination: str | Path, document: RenderedDocument) -> Path:
    """Write ``document`` under ``destination``, replacing any previous file.

    Raises
    ------
    FileWriteError
        If the file cannot be written
    """
    path = output_path(destination, document.file_name)
    try:
        path.write_text(document.content, encoding="utf-8")
    except OSError as e:
        raise FileWriteError(path, e.strerror or str(e)) from e
    logger.debug("Wrote {path} ({size} chars)", path=path, size=len(document.content))
    return path
