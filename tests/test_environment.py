"""
Unit tests for environment detection.
"""

import pytest

from config.settings import HookSettings
from shared.models import PackageManager
from services.commitlint_setup.environment import (
    detect_environment,
    detect_package_manager,
    has_git,
    hook_shim_path,
)


class TestDetectPackageManager:
    """Test cases for lock file based detection."""

    def test_defaults_to_npm(self, tmp_path):
        """Test npm is used when no lock file exists."""
        assert detect_package_manager(tmp_path) == PackageManager.NPM

    @pytest.mark.parametrize(
        "lockfile, expected",
        [
            ("bun.lockb", PackageManager.BUN),
            ("bun.lock", PackageManager.BUN),
            ("pnpm-lock.yaml", PackageManager.PNPM),
            ("yarn.lock", PackageManager.YARN),
            ("package-lock.json", PackageManager.NPM),
            ("npm-shrinkwrap.json", PackageManager.NPM),
        ],
    )
    def test_single_lockfile(self, tmp_path, lockfile, expected):
        """Test each lock file maps to its manager."""
        (tmp_path / lockfile).write_text("", encoding="utf-8")

        assert detect_package_manager(tmp_path) == expected

    def test_priority_order(self, tmp_path):
        """Test bun wins over pnpm, pnpm over yarn, yarn over npm."""
        for name in ("package-lock.json", "yarn.lock"):
            (tmp_path / name).write_text("", encoding="utf-8")
        assert detect_package_manager(tmp_path) == PackageManager.YARN

        (tmp_path / "pnpm-lock.yaml").write_text("", encoding="utf-8")
        assert detect_package_manager(tmp_path) == PackageManager.PNPM

        (tmp_path / "bun.lockb").write_text("", encoding="utf-8")
        assert detect_package_manager(tmp_path) == PackageManager.BUN


class TestGitAndShim:
    """Test cases for git and husky shim probes."""

    def test_git_directory(self, tmp_path):
        """Test a .git directory is detected."""
        assert has_git(tmp_path) is False

        (tmp_path / ".git").mkdir()

        assert has_git(tmp_path) is True

    def test_git_file(self, tmp_path):
        """Test a .git file (worktree) is detected."""
        (tmp_path / ".git").write_text("gitdir: ../repo/.git/worktrees/x\n", encoding="utf-8")

        assert has_git(tmp_path) is True

    def test_hook_shim_path(self, tmp_path):
        """Test the shim path follows the hook settings."""
        assert hook_shim_path(tmp_path, HookSettings()) == tmp_path / ".husky" / "_" / "husky.sh"


class TestDetectEnvironment:
    """Test cases for the combined probe."""

    def test_bare_project(self, tmp_path):
        """Test a project with nothing but a manifest."""
        state = detect_environment(tmp_path, HookSettings())

        assert state.project_dir == tmp_path
        assert state.package_manager == PackageManager.NPM
        assert state.has_git is False
        assert state.has_hook_shim is False
        assert state.needs_hook_init is False

    def test_initialised_husky(self, tmp_path):
        """Test a git project with husky already initialised."""
        (tmp_path / ".git").mkdir()
        shim = tmp_path / ".husky" / "_" / "husky.sh"
        shim.parent.mkdir(parents=True)
        shim.write_text("", encoding="utf-8")
        (tmp_path / "pnpm-lock.yaml").write_text("", encoding="utf-8")

        state = detect_environment(tmp_path, HookSettings())

        assert state.package_manager == PackageManager.PNPM
        assert state.has_git is True
        assert state.has_hook_shim is True
        assert state.needs_hook_init is False

    def test_detection_does_not_modify_project(self, tmp_path):
        """Test detection creates no files."""
        detect_environment(tmp_path, HookSettings())

        assert list(tmp_path.iterdir()) == []


if __name__ == "__main__":
    pytest.main([__file__])
