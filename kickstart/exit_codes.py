"""
Exit codes and command errors for kickstart.
"""

GENERAL_ERROR = 1
INTERRUPTED = 130


class CommandError(Exception):
    """Base class for errors that end a command with a specific exit code."""
    exit_code = GENERAL_ERROR

    def __init__(self, message, exit_code=None):
        super().__init__(message)
        if exit_code is not None:
            self.exit_code = exit_code


class ValidationError(CommandError):
    """Invalid invocation input, e.g. a package name breaking npm rules."""


class DestinationExistsError(CommandError):
    """The target directory exists and overwriting was not confirmed."""


class FetchError(CommandError):
    """The template archive could not be downloaded."""


class RepositoryNotFoundError(FetchError):
    """The template repository does not exist (HTTP 404)."""


class TemplateStructureError(CommandError):
    """The archive does not look like a template repository."""


class MaterializationError(CommandError):
    """Extracted files could not be written."""


class InstallError(CommandError):
    """Dependency installation failed."""


class VersionControlError(CommandError):
    """The git repository could not be initialized."""

