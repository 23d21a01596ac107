"""
Data models for the commitlint setup flow.

This module provides:
- Package manager identities and their fixed command profiles
- Typed results for external command invocations
- Detected environment state and the user's setup choices
- The step-by-step report printed at the end of a run
"""

import shlex
from enum import Enum
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Union

from pydantic import BaseModel, Field, computed_field, field_validator


class PackageManager(str, Enum):
    """Supported JavaScript package managers."""
    NPM = "npm"
    PNPM = "pnpm"
    YARN = "yarn"
    BUN = "bun"

    @classmethod
    def choices(cls) -> List[str]:
        return [member.value for member in cls]


class StepStatus(Enum):
    """Outcome of a single setup step."""
    DONE = "done"
    SKIPPED = "skipped"
    UNCHANGED = "unchanged"


class CommandSpec(BaseModel):
    """An executable plus its fixed leading arguments."""

    command: str = Field(..., min_length=1, description="Executable name")
    args: List[str] = Field(default_factory=list, description="Fixed arguments")

    def argv(self, extra: Iterable[str] = ()) -> List[str]:
        """Full argument vector with ``extra`` appended."""
        return [self.command, *self.args, *extra]


class PackageManagerProfile(BaseModel):
    """Command templates for one package manager."""

    name: PackageManager
    install: CommandSpec = Field(..., description="Adds dev dependencies")
    hook_init: CommandSpec = Field(..., description="Initialises the hook framework")
    hook_command: str = Field(..., min_length=1, description="Lint invocation for the hook")

    @field_validator("hook_command")
    @classmethod
    def validate_hook_command(cls, v):
        if "\n" in v:
            raise ValueError("Hook command must be a single line")
        return v


PACKAGE_MANAGER_PROFILES: Dict[PackageManager, PackageManagerProfile] = {
    PackageManager.BUN: PackageManagerProfile(
        name=PackageManager.BUN,
        install=CommandSpec(command="bun", args=["add", "-d"]),
        hook_init=CommandSpec(command="bunx", args=["husky"]),
        hook_command='bunx commitlint --edit "$1"',
    ),
    PackageManager.PNPM: PackageManagerProfile(
        name=PackageManager.PNPM,
        install=CommandSpec(command="pnpm", args=["add", "-D"]),
        hook_init=CommandSpec(command="pnpm", args=["exec", "husky"]),
        hook_command='pnpm exec commitlint --edit "$1"',
    ),
    PackageManager.YARN: PackageManagerProfile(
        name=PackageManager.YARN,
        install=CommandSpec(command="yarn", args=["add", "--dev"]),
        hook_init=CommandSpec(command="yarn", args=["husky"]),
        hook_command='yarn commitlint --edit "$1"',
    ),
    PackageManager.NPM: PackageManagerProfile(
        name=PackageManager.NPM,
        install=CommandSpec(command="npm", args=["install", "--save-dev"]),
        hook_init=CommandSpec(command="npx", args=["husky"]),
        hook_command='npx --no -- commitlint --edit "$1"',
    ),
}


def get_profile(name: Union[PackageManager, str]) -> PackageManagerProfile:
    """Profile for ``name``; unknown names fall back to npm."""
    try:
        manager = PackageManager(name)
    except ValueError:
        manager = PackageManager.NPM
    return PACKAGE_MANAGER_PROFILES[manager]


class CommandResult(BaseModel):
    """Result of running an external command.

    ``returncode`` is None when the process never started, in which case
    ``error`` holds the launch failure.
    """

    argv: List[str] = Field(..., min_length=1)
    returncode: Optional[int] = None
    error: Optional[str] = None

    @computed_field
    @property
    def succeeded(self) -> bool:
        return self.error is None and self.returncode == 0

    @property
    def command_line(self) -> str:
        return shlex.join(self.argv)


class EnvironmentState(BaseModel):
    """What the detector found in the project directory."""

    project_dir: Path
    package_manager: PackageManager = PackageManager.NPM
    has_git: bool = False
    has_hook_shim: bool = False

    @computed_field
    @property
    def needs_hook_init(self) -> bool:
        return self.has_git and not self.has_hook_shim


class SetupChoices(BaseModel):
    """Choices that steer a run; prompted for in --ask mode."""

    package_manager: PackageManager = PackageManager.NPM
    wants_hooks: bool = True
    add_config: bool = True


class StepOutcome(BaseModel):
    """One line of the final summary."""

    step: str
    status: StepStatus
    detail: str = ""


class SetupReport(BaseModel):
    """Ordered record of what a run did."""

    package_manager: Optional[PackageManager] = None
    installed: List[str] = Field(default_factory=list)
    outcomes: List[StepOutcome] = Field(default_factory=list)

    def record(self, step: str, status: StepStatus, detail: str = "") -> StepOutcome:
        outcome = StepOutcome(step=step, status=status, detail=detail)
        self.outcomes.append(outcome)
        return outcome

    def outcome(self, step: str) -> Optional[StepOutcome]:
        """Latest outcome recorded for ``step``."""
        for outcome in reversed(self.outcomes):
            if outcome.step == step:
                return outcome
        return None
