"""
Commitlint setup service for cbashik-commitlint.

This service provides the single linear setup flow:
- Environment detection (package manager, git, husky shim)
- Optional interactive choices (--ask)
- Commitlint configuration (package.json block or standalone file)
- Dev dependency installation through the detected package manager
- Husky initialisation and the commit-msg hook

Each step reads and updates one explicit ``SetupRun`` state object. Every
step converges: rerunning the flow on an already set-up project changes
nothing.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, TextIO

from rich.console import Console

from config.settings import ConfigTarget, Settings, settings as default_settings
from shared.manifest import MANIFEST_NAME, Manifest
from shared.models import (
    EnvironmentState, PackageManagerProfile, SetupChoices, SetupReport, StepStatus,
    get_profile,
)
from services.commitlint_setup.dependencies import (
    CommandRunner, install_packages, packages_to_install,
)
from services.commitlint_setup.environment import detect_environment
from services.commitlint_setup.hooks import (
    HookChange, ensure_commit_msg_hook, hook_path, initialise_hook_framework,
)
from services.commitlint_setup.lint_config import STANDALONE_CONFIG, ensure_commitlint_config
from services.commitlint_setup.prompts import SetupPrompter, require_interactive

logger = logging.getLogger(__name__)

STEP_PACKAGE_MANAGER = "package manager"
STEP_CONFIG = "commitlint config"
STEP_DEPENDENCIES = "dependencies"
STEP_HOOK_FRAMEWORK = "hook framework"
STEP_HOOK = "commit-msg hook"

_STATUS_STYLES = {
    StepStatus.DONE: "green",
    StepStatus.SKIPPED: "yellow",
    StepStatus.UNCHANGED: "dim",
}


@dataclass
class SetupOptions:
    """Invocation options coming from the CLI."""
    project_dir: Path = field(default_factory=Path.cwd)
    ask: bool = False
    config_target: Optional[ConfigTarget] = None


@dataclass
class SetupRun:
    """Mutable state threaded through the setup steps."""
    options: SetupOptions
    manifest: Manifest
    environment: EnvironmentState
    choices: SetupChoices
    runner: CommandRunner
    profile: Optional[PackageManagerProfile] = None
    install: List[str] = field(default_factory=list)
    needs_hook_dependency: bool = False
    installed: bool = False
    report: SetupReport = field(default_factory=SetupReport)


class CommitlintSetupService:
    """Core setup flow with the project-facing side effects."""

    def __init__(
        self,
        settings: Optional[Settings] = None,
        console: Optional[Console] = None,
        runner: Optional[CommandRunner] = None,
        prompter: Optional[SetupPrompter] = None,
        stdin: Optional[TextIO] = None,
    ):
        self.settings = settings or default_settings
        self.console = console or Console()
        self.runner = runner
        self.prompter = prompter
        self.stdin = stdin

    def run(self, options: SetupOptions) -> SetupReport:
        """Run every step in order and return what was done.

        Raises:
            SetupError: on the first fatal failure. Changes made by earlier
            steps stay on disk.
        """
        if options.ask:
            require_interactive(self.stdin)

        state = self.prepare(options)
        self.choose(state)
        self.configure(state)
        self.install(state)
        self.setup_hooks(state)
        return state.report

    # Steps

    def prepare(self, options: SetupOptions) -> SetupRun:
        project_dir = Path(options.project_dir)
        manifest = Manifest.load(project_dir / MANIFEST_NAME)
        environment = detect_environment(project_dir, self.settings.hooks)

        state = SetupRun(
            options=options,
            manifest=manifest,
            environment=environment,
            choices=SetupChoices(
                package_manager=environment.package_manager,
                wants_hooks=environment.has_git,
            ),
            runner=self.runner or CommandRunner(project_dir),
        )
        state.install = packages_to_install(manifest, self.settings.required_packages)
        logger.debug("Missing required packages: %s", state.install)
        return state

    def choose(self, state: SetupRun) -> None:
        env = state.environment
        choices = state.choices

        if state.options.ask:
            prompter = self._prompter()
            choices.package_manager = prompter.choose_package_manager(env.package_manager)
            if env.has_git:
                choices.wants_hooks = prompter.confirm(
                    "Set up Husky and commit-msg hook?", default=True
                )
            choices.add_config = prompter.confirm(
                f"Add commitlint config to {self._config_label(state)}?", default=True
            )

        hook_framework = self.settings.packages.hook_framework
        state.needs_hook_dependency = (
            choices.wants_hooks
            and env.needs_hook_init
            and not state.manifest.has_dependency(hook_framework)
        )
        if state.needs_hook_dependency and hook_framework not in state.install:
            state.install.append(hook_framework)

        state.profile = get_profile(choices.package_manager)
        state.report.package_manager = choices.package_manager
        self._note(
            state,
            STEP_PACKAGE_MANAGER,
            StepStatus.DONE,
            f"Using package manager: {choices.package_manager.value}",
        )

    def configure(self, state: SetupRun) -> None:
        if not state.choices.add_config:
            self._note(state, STEP_CONFIG, StepStatus.SKIPPED, "Skipping commitlint config setup.")
            return

        written = ensure_commitlint_config(
            state.environment.project_dir,
            state.manifest,
            self.settings.packages.shared_config,
            target=self._config_target(state),
        )
        if written is None:
            self._note(
                state,
                STEP_CONFIG,
                StepStatus.UNCHANGED,
                "commitlint config already present, skipping update.",
            )
        else:
            self._note(
                state, STEP_CONFIG, StepStatus.DONE, f"Added commitlint config to {written.name}."
            )

    def install(self, state: SetupRun) -> None:
        if not state.install:
            self._note(
                state,
                STEP_DEPENDENCIES,
                StepStatus.UNCHANGED,
                "Dependencies already present, skipping install.",
            )
            return

        listing = ", ".join(state.install)
        should_install = True
        if state.options.ask:
            should_install = self._prompter().confirm(
                f"Install dev dependencies ({listing})?", default=True
            )
        if not should_install:
            self._note(state, STEP_DEPENDENCIES, StepStatus.SKIPPED, "Skipping dependency install.")
            return

        self.console.print(f"Installing dev dependencies: {listing}")
        install_packages(state.runner, state.profile, state.install)
        state.installed = True
        state.report.installed = list(state.install)
        self._note(state, STEP_DEPENDENCIES, StepStatus.DONE, f"Installed {listing}.")

    def setup_hooks(self, state: SetupRun) -> None:
        env = state.environment

        if not env.has_git:
            self._note(
                state,
                STEP_HOOK,
                StepStatus.SKIPPED,
                "No .git directory found; skipping Husky setup.",
            )
            return
        if not state.choices.wants_hooks:
            self._note(state, STEP_HOOK, StepStatus.SKIPPED, "Skipping Husky setup by user choice.")
            return
        if state.needs_hook_dependency and not state.installed:
            self._note(
                state,
                STEP_HOOK,
                StepStatus.SKIPPED,
                "Husky is not installed; skipping Husky setup. Install it and rerun init.",
            )
            return

        if env.needs_hook_init:
            self.console.print("Initializing Husky...")
            initialise_hook_framework(state.runner, state.profile)
            self._note(state, STEP_HOOK_FRAMEWORK, StepStatus.DONE, "Initialized Husky.")
        else:
            self._note(
                state,
                STEP_HOOK_FRAMEWORK,
                StepStatus.UNCHANGED,
                "Husky already initialized, skipping install.",
            )

        change = ensure_commit_msg_hook(
            env.project_dir, state.profile.hook_command, self.settings.hooks
        )
        relative = hook_path(Path(), self.settings.hooks).as_posix()
        if change == HookChange.CREATED:
            self._note(state, STEP_HOOK, StepStatus.DONE, f"Created {relative} hook.")
        elif change == HookChange.UPDATED:
            self._note(state, STEP_HOOK, StepStatus.DONE, f"Updated {relative} hook to run commitlint.")
        else:
            self._note(
                state,
                STEP_HOOK,
                StepStatus.UNCHANGED,
                "commit-msg hook already runs commitlint, skipping update.",
            )

    # Helpers

    def _prompter(self) -> SetupPrompter:
        if self.prompter is None:
            self.prompter = SetupPrompter(console=self.console, stream=self.stdin)
        return self.prompter

    def _config_target(self, state: SetupRun) -> ConfigTarget:
        return state.options.config_target or self.settings.config_target

    def _config_label(self, state: SetupRun) -> str:
        if self._config_target(state) == ConfigTarget.FILE:
            return STANDALONE_CONFIG
        return MANIFEST_NAME

    def _note(self, state: SetupRun, step: str, status: StepStatus, message: str) -> None:
        state.report.record(step, status, message)
        logger.info("%s: %s", step, status.value)
        self.console.print(message, style=_STATUS_STYLES[status])
