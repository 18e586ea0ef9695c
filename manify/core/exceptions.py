"""Exception hierarchy for manify.

All manify exceptions inherit from ManifyError. ConfigurationError aborts a
run; ClassNotFoundError and FileWriteError only skip the affected command.
"""

from __future__ import annotations

from pathlib import Path

# ============================================================================
# Base Exception
# ============================================================================


class ManifyError(Exception):
    """Base exception for all manify errors.

    Catch this to handle every error raised by the documentation pipeline.
    """

    pass


# ============================================================================
# Fatal Errors
# ============================================================================


class ConfigurationError(ManifyError):
    """Raised when a manifest, the configuration or the destination is unusable.

    Examples
    --------
    Example usage::

        raise ConfigurationError("manifest", "composer.json not found in ./plugins/foo")
    """

    def __init__(self, component: str, reason: str) -> None:
        """Initialize configuration error.

        Args
        ----
            component: Name of the configuration item that is invalid
            reason: Explanation of what's wrong
        """
        super().__init__(f"Configuration error in '{component}': {reason}")
        self.component = component
        self.reason = reason


# ============================================================================
# Per-command Errors
# ============================================================================


class ClassNotFoundError(ManifyError):
    """Raised when a command class cannot be loaded or resolved.

    Examples
    --------
    Example usage::

        raise ClassNotFoundError("Greet_Command")
        raise ClassNotFoundError("Greet_Command", "Command file not found: ./greet.py")
    """

    def __init__(self, class_name: str, reason: str | None = None) -> None:
        """Initialize class not found error.

        Args
        ----
            class_name: Name of the class that could not be resolved
            reason: Optional detail replacing the default message
        """
        super().__init__(reason or f"Class not found: {class_name}")
        self.class_name = class_name
        self.reason = reason


class FileWriteError(ManifyError):
    """Raised when a rendered document cannot be written.

    Examples
    --------
    Example usage::

        raise FileWriteError(Path("docs/greet.md"), "Permission denied")
    """

    def __init__(self, path: Path | str, reason: str) -> None:
        """Initialize file write error.

        Args
        ----
            path: Output file that could not be written
            reason: Underlying OS error message
        """
        super().__init__(f"Could not write file: {path} ({reason})")
        self.path = Path(path)
        self.reason = reason
