"""
Dependency installation through the project's package manager.

External commands run with inherited stdio in the project directory and
block until they exit. Any failure is fatal.
"""

import logging
import shutil
import subprocess
from pathlib import Path
from typing import Iterable, List, Optional

from shared.errors import CommandError
from shared.manifest import Manifest
from shared.models import CommandResult, CommandSpec, PackageManagerProfile

logger = logging.getLogger(__name__)


class CommandRunner:
    """Runs external commands and reports how they ended."""

    def __init__(self, cwd: Optional[Path] = None):
        self.cwd = Path(cwd) if cwd is not None else None

    def run(self, spec: CommandSpec, extra_args: Iterable[str] = ()) -> CommandResult:
        argv = spec.argv(extra_args)
        # Windows needs the resolved npm.cmd / yarn.cmd shim
        executable = shutil.which(spec.command) or spec.command
        logger.info("Running %s", " ".join(argv))
        try:
            completed = subprocess.run(
                [executable, *argv[1:]],
                cwd=str(self.cwd) if self.cwd is not None else None,
                check=False,
            )
        except OSError as e:
            logger.debug("Failed to launch %s: %s", spec.command, e)
            return CommandResult(argv=argv, error=str(e))
        return CommandResult(argv=argv, returncode=completed.returncode)


def ensure_success(result: CommandResult) -> CommandResult:
    """Raise CommandError unless ``result`` succeeded."""
    command = result.argv[0]
    if result.error is not None:
        raise CommandError(
            f"Failed to run {command}: {result.error}",
            command=result.command_line,
            suggestion=f"Make sure {command} is installed and on your PATH.",
        )
    if result.returncode != 0:
        raise CommandError(
            f"{result.command_line} exited with status {result.returncode}",
            command=result.command_line,
            returncode=result.returncode,
        )
    return result


def packages_to_install(
    manifest: Manifest,
    required: Iterable[str],
    hook_framework: Optional[str] = None,
) -> List[str]:
    """Required packages missing from every dependency section.

    ``hook_framework`` is appended when given and not already declared.
    """
    names = list(required)
    if hook_framework:
        names.append(hook_framework)
    return manifest.missing(names)


def install_packages(
    runner: CommandRunner,
    profile: PackageManagerProfile,
    packages: List[str],
) -> Optional[CommandResult]:
    """Install ``packages`` as dev dependencies; no-op for an empty list."""
    if not packages:
        return None
    return ensure_success(runner.run(profile.install, packages))
