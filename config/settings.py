"""
Configuration management for the cbashik-commitlint setup tool.

This module provides centralized configuration with:
- Package names installed into the target project
- Hook framework layout (directory, hook name, shim path)
- Logging settings
- Environment overrides (COMMITLINT_INIT_* variables, optional .env file)
"""

from enum import Enum
from functools import lru_cache
from typing import Any, Dict, List, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings
from pydantic_settings import BaseSettings as PydanticBaseSettings


class ConfigTarget(str, Enum):
    """Where a fresh commitlint configuration is written."""
    PACKAGE = "package"
    FILE = "file"


class PackageSettings(BaseSettings):
    """Names of the packages the setup installs."""

    shared_config: str = Field(
        default="@cbashik/commitlint", description="Shared commitlint rule-set package"
    )
    cli: str = Field(default="@commitlint/cli", description="commitlint CLI package")
    hook_framework: str = Field(default="husky", description="Git hook framework package")

    model_config = {"env_prefix": "COMMITLINT_INIT_PACKAGES_"}

    @field_validator("shared_config", "cli", "hook_framework")
    @classmethod
    def validate_package_name(cls, v):
        v = v.strip()
        if not v or " " in v:
            raise ValueError("Package name must be a single non-empty token")
        return v


class HookSettings(BaseSettings):
    """Hook framework layout inside the target project."""

    directory: str = Field(default=".husky", description="Hook directory")
    hook_name: str = Field(default="commit-msg", description="Hook file name")
    shim: str = Field(default="_/husky.sh", description="Shim path relative to the hook directory")
    lint_marker: str = Field(
        default="commitlint", description="Substring marking an existing lint invocation"
    )

    model_config = {"env_prefix": "COMMITLINT_INIT_HOOKS_"}


class MonitoringSettings(BaseSettings):
    """Logging configuration settings."""

    log_level: str = Field(default="WARNING", description="Logging level")
    log_format: str = Field(
        default="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        description="Log record format",
    )

    model_config = {"env_prefix": "COMMITLINT_INIT_MONITORING_"}

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v):
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"Log level must be one of: {valid_levels}")
        return v.upper()


class Settings(PydanticBaseSettings):
    """
    Main settings for the setup tool.

    Every field can be overridden from the environment, e.g.
    ``COMMITLINT_INIT_CONFIG_TARGET=file`` or
    ``COMMITLINT_INIT_MONITORING__LOG_LEVEL=DEBUG``.
    """

    app_name: str = Field(default="cbashik-commitlint", description="Application name")
    version: str = Field(default="1.0.0", description="Application version")
    config_target: ConfigTarget = Field(
        default=ConfigTarget.PACKAGE, description="Embed config in package.json or write a file"
    )

    packages: PackageSettings = Field(default_factory=PackageSettings)
    hooks: HookSettings = Field(default_factory=HookSettings)
    monitoring: MonitoringSettings = Field(default_factory=MonitoringSettings)

    model_config = {
        "env_prefix": "COMMITLINT_INIT_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
        "env_nested_delimiter": "__",
        "extra": "ignore"
    }

    @property
    def required_packages(self) -> List[str]:
        """Packages every project needs, in install order."""
        return [self.packages.shared_config, self.packages.cli]


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached application settings.

    Returns:
        Settings: Application configuration object

    Example:
        >>> settings = get_settings()
        >>> print(settings.packages.shared_config)
    """
    return Settings()


# Global settings instance
settings = get_settings()


def export_config(current: Optional[Settings] = None) -> Dict[str, Any]:
    """
    Export configuration as plain data for logging and diagnostics.

    Returns:
        Dict[str, Any]: Configuration export
    """
    current = current or settings
    return {
        "app_name": current.app_name,
        "version": current.version,
        "config_target": current.config_target.value,
        "packages": {
            "shared_config": current.packages.shared_config,
            "cli": current.packages.cli,
            "hook_framework": current.packages.hook_framework,
        },
        "hooks": {
            "directory": current.hooks.directory,
            "hook_name": current.hooks.hook_name,
            "shim": current.hooks.shim,
            "lint_marker": current.hooks.lint_marker,
        },
        "monitoring": {
            "log_level": current.monitoring.log_level,
        },
    }
