"""
Interactive prompts for --ask mode.

Built on ``rich.prompt``: empty input takes the stated default and invalid
input is rejected and asked again.
"""

import sys
from typing import Optional, TextIO

from rich.console import Console
from rich.prompt import Confirm, InvalidResponse, Prompt

from shared.errors import EnvironmentSetupError
from shared.models import PackageManager


class _LineInput:
    """Strips the line ending left by reading answers from a stream."""

    @classmethod
    def get_input(cls, console, prompt, password, stream=None) -> str:
        return super().get_input(console, prompt, password, stream=stream).strip()


class ChoicePrompt(_LineInput, Prompt):
    """Free-text prompt restricted to a fixed set of choices."""


class YesNoConfirm(_LineInput, Confirm):
    """Confirm prompt that also accepts ``yes`` and ``no``."""

    validate_error_message = "[prompt.invalid]Please answer yes or no."

    def process_response(self, value: str) -> bool:
        value = value.strip().lower()
        if value in ("y", "yes"):
            return True
        if value in ("n", "no"):
            return False
        raise InvalidResponse(self.validate_error_message)


def require_interactive(stream: Optional[TextIO] = None) -> None:
    """Fail fast when prompts cannot be answered."""
    stream = stream if stream is not None else sys.stdin
    isatty = getattr(stream, "isatty", None)
    if not (isatty and isatty()):
        raise EnvironmentSetupError(
            "The --ask flag requires an interactive terminal.",
            suggestion="Rerun without --ask to accept the defaults.",
        )


class SetupPrompter:
    """Asks the questions of an interactive setup."""

    def __init__(self, console: Optional[Console] = None, stream: Optional[TextIO] = None):
        self.console = console or Console()
        self.stream = stream

    def confirm(self, label: str, default: bool = True) -> bool:
        return YesNoConfirm.ask(
            label,
            default=default,
            console=self.console,
            stream=self.stream,
        )

    def choose_package_manager(self, default: PackageManager) -> PackageManager:
        answer = ChoicePrompt.ask(
            "Package manager",
            choices=PackageManager.choices(),
            default=default.value,
            case_sensitive=False,
            console=self.console,
            stream=self.stream,
        )
        return PackageManager(answer)
