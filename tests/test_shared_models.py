"""
Unit tests for shared models module.

Covers package manager profiles, command results, environment state and
the setup report.
"""

from pathlib import Path

import pytest

from shared.models import (
    PACKAGE_MANAGER_PROFILES,
    CommandResult,
    CommandSpec,
    EnvironmentState,
    PackageManager,
    PackageManagerProfile,
    SetupChoices,
    SetupReport,
    StepStatus,
    get_profile,
)


class TestPackageManager:
    """Test cases for PackageManager."""

    def test_choices(self):
        """Test the fixed enumeration of managers."""
        assert PackageManager.choices() == ["npm", "pnpm", "yarn", "bun"]

    def test_every_manager_has_a_profile(self):
        """Test every manager maps to a profile of the same name."""
        for manager in PackageManager:
            assert PACKAGE_MANAGER_PROFILES[manager].name == manager


class TestPackageManagerProfiles:
    """Test cases for the command templates."""

    @pytest.mark.parametrize(
        "manager, install, hook_init, hook_command",
        [
            ("npm", ["npm", "install", "--save-dev"], ["npx", "husky"],
             'npx --no -- commitlint --edit "$1"'),
            ("pnpm", ["pnpm", "add", "-D"], ["pnpm", "exec", "husky"],
             'pnpm exec commitlint --edit "$1"'),
            ("yarn", ["yarn", "add", "--dev"], ["yarn", "husky"],
             'yarn commitlint --edit "$1"'),
            ("bun", ["bun", "add", "-d"], ["bunx", "husky"],
             'bunx commitlint --edit "$1"'),
        ],
    )
    def test_profile_templates(self, manager, install, hook_init, hook_command):
        """Test each manager's install, hook init and hook invocation."""
        profile = get_profile(manager)

        assert profile.install.argv() == install
        assert profile.hook_init.argv() == hook_init
        assert profile.hook_command == hook_command

    def test_unknown_manager_falls_back_to_npm(self):
        """Test unknown identities resolve to npm."""
        assert get_profile("deno").name == PackageManager.NPM

    def test_get_profile_accepts_enum(self):
        """Test get_profile with an enum member."""
        assert get_profile(PackageManager.YARN).name == PackageManager.YARN

    def test_hook_command_must_be_single_line(self):
        """Test multi-line hook commands are rejected."""
        with pytest.raises(ValueError):
            PackageManagerProfile(
                name=PackageManager.NPM,
                install=CommandSpec(command="npm"),
                hook_init=CommandSpec(command="npx"),
                hook_command="npx commitlint\nrm -rf /",
            )


class TestCommandSpec:
    """Test cases for CommandSpec."""

    def test_argv_appends_extra_arguments(self):
        """Test extra arguments follow the fixed ones."""
        spec = CommandSpec(command="pnpm", args=["add", "-D"])

        assert spec.argv(["husky"]) == ["pnpm", "add", "-D", "husky"]
        assert spec.args == ["add", "-D"]

    def test_command_must_not_be_empty(self):
        """Test an empty executable name is rejected."""
        with pytest.raises(ValueError):
            CommandSpec(command="")


class TestCommandResult:
    """Test cases for CommandResult."""

    def test_success(self):
        """Test a zero exit without error succeeds."""
        result = CommandResult(argv=["npm", "install"], returncode=0)

        assert result.succeeded is True
        assert result.command_line == "npm install"

    def test_non_zero_exit(self):
        """Test a non-zero exit is a failure."""
        assert CommandResult(argv=["npm"], returncode=2).succeeded is False

    def test_launch_failure(self):
        """Test a launch failure keeps no return code."""
        result = CommandResult(argv=["bun", "add"], error="No such file or directory")

        assert result.succeeded is False
        assert result.returncode is None

    def test_command_line_quotes_arguments(self):
        """Test arguments with spaces are quoted."""
        result = CommandResult(argv=["echo", "two words"], returncode=0)

        assert result.command_line == "echo 'two words'"


class TestEnvironmentState:
    """Test cases for EnvironmentState."""

    @pytest.mark.parametrize(
        "has_git, has_shim, expected",
        [(True, False, True), (True, True, False), (False, False, False)],
    )
    def test_needs_hook_init(self, has_git, has_shim, expected):
        """Test hook init is needed only in git repos without the shim."""
        state = EnvironmentState(
            project_dir=Path("."), has_git=has_git, has_hook_shim=has_shim
        )

        assert state.needs_hook_init is expected

    def test_defaults(self):
        """Test EnvironmentState default values."""
        state = EnvironmentState(project_dir=Path("."))

        assert state.package_manager == PackageManager.NPM
        assert state.has_git is False


class TestSetupChoices:
    """Test cases for SetupChoices."""

    def test_defaults(self):
        """Test every optional action defaults to yes."""
        choices = SetupChoices()

        assert choices.package_manager == PackageManager.NPM
        assert choices.wants_hooks is True
        assert choices.add_config is True


class TestSetupReport:
    """Test cases for SetupReport."""

    def test_record_and_lookup(self):
        """Test outcomes are kept in order and the latest wins on lookup."""
        report = SetupReport()
        report.record("config", StepStatus.SKIPPED, "first")
        report.record("hook", StepStatus.DONE)
        report.record("config", StepStatus.DONE, "second")

        assert [o.step for o in report.outcomes] == ["config", "hook", "config"]
        assert report.outcome("config").detail == "second"
        assert report.outcome("missing") is None
