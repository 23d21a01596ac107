"""Commitlint configuration: reuse what exists, otherwise write a new one."""

import logging
from pathlib import Path
from typing import Optional

from config.settings import ConfigTarget
from shared.errors import ConfigFileError
from shared.manifest import Manifest
from shared.ruleset import commitlint_block, render_config_module

logger = logging.getLogger(__name__)

CONFIG_FILES = (
    "commitlint.config.js",
    "commitlint.config.cjs",
    "commitlint.config.mjs",
    "commitlint.config.ts",
    "commitlint.config.cts",
    "commitlint.config.mts",
    "commitlint.config.json",
)

STANDALONE_CONFIG = "commitlint.config.js"


def find_config_file(project_dir: Path) -> Optional[Path]:
    """First recognised standalone config file in ``project_dir``."""
    for name in CONFIG_FILES:
        candidate = Path(project_dir) / name
        if candidate.exists():
            return candidate
    return None


def ensure_commitlint_config(
    project_dir: Path,
    manifest: Manifest,
    shared_package: str,
    target: ConfigTarget = ConfigTarget.PACKAGE,
) -> Optional[Path]:
    """Write a config extending ``shared_package`` unless one exists.

    The manifest is written back immediately when it receives the block.

    Returns:
        The path written, or None when an existing config was kept.
    """
    if manifest.has_commitlint_config:
        logger.debug("commitlint block present in %s", manifest.path)
        return None

    existing = find_config_file(project_dir)
    if existing is not None:
        logger.debug("Found %s", existing)
        return None

    if target == ConfigTarget.FILE:
        path = Path(project_dir) / STANDALONE_CONFIG
        try:
            path.write_text(render_config_module(shared_package), encoding="utf-8")
        except OSError as e:
            raise ConfigFileError(f"Failed to write {path}: {e}") from e
        return path

    manifest.set_commitlint_config(commitlint_block(shared_package))
    manifest.save()
    return manifest.path
