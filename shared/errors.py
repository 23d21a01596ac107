"""
Error types for the commitlint setup flow.

Every failure is fatal: services raise one of these, the CLI renders it
once and exits with ``exit_code``.
"""

from typing import Optional


class SetupError(RuntimeError):
    """Base class for fatal setup failures."""

    def __init__(self, message: str, *, exit_code: int = 1, suggestion: str = ""):
        super().__init__(message)
        self.exit_code = exit_code
        self.suggestion = suggestion


class EnvironmentSetupError(SetupError):
    """The working environment cannot be set up (no manifest, no TTY)."""


class ManifestError(SetupError):
    """package.json could not be read, parsed or written."""


class ConfigFileError(SetupError):
    """A standalone commitlint config file could not be written."""


class HookFileError(SetupError):
    """The commit-msg hook file could not be read or written."""


class CommandError(SetupError):
    """An external command could not be launched or exited non-zero."""

    def __init__(
        self,
        message: str,
        *,
        command: str,
        returncode: Optional[int] = None,
        suggestion: str = "",
    ):
        # Launch failures and signal deaths (negative codes) exit with 1.
        exit_code = returncode if returncode and returncode > 0 else 1
        super().__init__(message, exit_code=exit_code, suggestion=suggestion)
        self.command = command
        self.returncode = returncode
