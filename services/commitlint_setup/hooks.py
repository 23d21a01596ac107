"""
Husky commit-msg hook management.

The hook is created once and afterwards only ever appended to, and only
when it does not already run commitlint. Reruns leave it untouched.
"""

import logging
from enum import Enum
from pathlib import Path
from typing import Optional

from config.settings import HookSettings
from shared.errors import HookFileError
from shared.models import CommandResult, PackageManagerProfile
from services.commitlint_setup.dependencies import CommandRunner, ensure_success

logger = logging.getLogger(__name__)

HOOK_MODE = 0o755


class HookChange(Enum):
    """What ensure_commit_msg_hook did to the hook file."""
    CREATED = "created"
    UPDATED = "updated"
    UNCHANGED = "unchanged"


def hook_path(project_dir: Path, hooks: HookSettings) -> Path:
    return Path(project_dir) / hooks.directory / hooks.hook_name


def render_hook(hook_command: str, hooks: HookSettings) -> str:
    """Fresh hook script: shebang, shim source line, lint invocation."""
    return "\n".join(
        [
            "#!/bin/sh",
            f'. "$(dirname "$0")/{hooks.shim}"',
            "",
            hook_command,
            "",
        ]
    )


def append_invocation(existing: str, hook_command: str) -> str:
    return f"{existing.rstrip()}\n\n{hook_command}\n"


def initialise_hook_framework(
    runner: CommandRunner, profile: PackageManagerProfile
) -> CommandResult:
    """Run husky's init command, which creates the shim and hook directory."""
    return ensure_success(runner.run(profile.hook_init))


def ensure_commit_msg_hook(
    project_dir: Path,
    hook_command: str,
    hooks: Optional[HookSettings] = None,
) -> HookChange:
    """Make the commit-msg hook run ``hook_command``.

    Raises:
        HookFileError: the hook directory or file could not be read or written.
    """
    hooks = hooks or HookSettings()
    path = hook_path(project_dir, hooks)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)

        if not path.exists():
            path.write_text(render_hook(hook_command, hooks), encoding="utf-8")
            path.chmod(HOOK_MODE)
            logger.debug("Created %s", path)
            return HookChange.CREATED

        existing = path.read_text(encoding="utf-8")
        if hooks.lint_marker in existing:
            return HookChange.UNCHANGED

        path.write_text(append_invocation(existing, hook_command), encoding="utf-8")
        path.chmod(HOOK_MODE)
        logger.debug("Appended lint invocation to %s", path)
        return HookChange.UPDATED
    except (OSError, UnicodeDecodeError) as e:
        raise HookFileError(f"Failed to update {path}: {e}") from e
