"""Custom exceptions for Helm Chart Releaser."""


class ReleaserError(Exception):
    """Base class for errors that abort a release run."""


class ConfigurationError(ReleaserError):
    """Raised when flags or repository layout are invalid or ambiguous."""


class PreconditionError(ReleaserError):
    """Raised when a required tool or credential is not available."""


class ToolError(ReleaserError):
    """Raised when an external command exits with a non-zero status."""

    def __init__(self, message: str, command: list = None, returncode: int = None):
        self.command = command or []
        self.returncode = returncode
        super().__init__(message)


class GitOperationError(ReleaserError):
    """Raised when the Git or GitHub clients cannot be set up."""
