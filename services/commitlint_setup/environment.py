"""Filesystem probes for the project being set up."""

import logging
from pathlib import Path
from typing import Optional, Tuple

from config.settings import HookSettings
from shared.models import EnvironmentState, PackageManager

logger = logging.getLogger(__name__)

# Checked in order; the first manager with any lock file present wins.
LOCKFILES: Tuple[Tuple[PackageManager, Tuple[str, ...]], ...] = (
    (PackageManager.BUN, ("bun.lockb", "bun.lock")),
    (PackageManager.PNPM, ("pnpm-lock.yaml",)),
    (PackageManager.YARN, ("yarn.lock",)),
    (PackageManager.NPM, ("package-lock.json", "npm-shrinkwrap.json")),
)

DEFAULT_PACKAGE_MANAGER = PackageManager.NPM

GIT_MARKER = ".git"


def detect_package_manager(project_dir: Path) -> PackageManager:
    """Infer the package manager from lock files, defaulting to npm."""
    project_dir = Path(project_dir)
    for manager, files in LOCKFILES:
        for name in files:
            if (project_dir / name).exists():
                logger.debug("Found %s, using %s", name, manager.value)
                return manager
    return DEFAULT_PACKAGE_MANAGER


def has_git(project_dir: Path) -> bool:
    # .git is a file inside worktrees and submodules
    return (Path(project_dir) / GIT_MARKER).exists()


def hook_shim_path(project_dir: Path, hooks: HookSettings) -> Path:
    return Path(project_dir) / hooks.directory / hooks.shim


def detect_environment(
    project_dir: Path, hooks: Optional[HookSettings] = None
) -> EnvironmentState:
    """Probe ``project_dir`` without touching it."""
    project_dir = Path(project_dir)
    hooks = hooks or HookSettings()
    state = EnvironmentState(
        project_dir=project_dir,
        package_manager=detect_package_manager(project_dir),
        has_git=has_git(project_dir),
        has_hook_shim=hook_shim_path(project_dir, hooks).exists(),
    )
    logger.debug("Detected environment: %s", state.model_dump())
    return state
