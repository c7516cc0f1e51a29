"""Configuration management for the envmatrix CLI."""

import os
from pathlib import Path
from typing import Any

from envmatrix_cli.core.constants import EnvVars, LogLevel
from envmatrix_common.config import load_merged_config


class ConfigurationError(Exception):
    """Raised when configuration values are malformed."""


class CliConfig:
    """Typed view over the merged project/user configuration.

    Parameters
    ----------
    repo_root : Path
        Project root holding the optional ``.envmatrix.yaml``
    """

    def __init__(self, repo_root: Path) -> None:
        self.repo_root = repo_root
        self._config_data: dict[str, Any] = load_merged_config(repo_root)

    def _section(self, name: str) -> dict[str, Any]:
        section = self._config_data.get(name) or {}
        if not isinstance(section, dict):
            msg = f"Configuration section {name!r} must be a mapping"
            raise ConfigurationError(msg)
        return section

    @property
    def log_level(self) -> LogLevel:
        """Get log level, ``ENVMATRIX_LOG_LEVEL`` taking precedence."""
        level = os.environ.get(EnvVars.LOG_LEVEL) or self._section("defaults").get(
            "log_level",
            LogLevel.WARNING.value,
        )
        try:
            return LogLevel(str(level).upper())
        except ValueError as e:
            msg = f"Unknown log level: {level}"
            raise ConfigurationError(msg) from e

    @property
    def color(self) -> bool:
        """Whether to colour output; any ``NO_COLOR`` value disables it."""
        if os.environ.get(EnvVars.NO_COLOR):
            return False
        return bool(self._section("defaults").get("color", True))

    @property
    def validate(self) -> bool:
        """Whether to validate manifests before running."""
        return bool(self._section("defaults").get("validate", True))

    @property
    def travis_path(self) -> Path:
        """Travis configuration path, relative to the project root."""
        return Path(self._section("matrix").get("travis", ".travis.yml"))

    @property
    def workflow_path(self) -> Path:
        """GitHub Actions workflow path, relative to the project root."""
        return Path(
            self._section("matrix").get("workflow", ".github/workflows/test.yml"),
        )

    @property
    def alias_command(self) -> list[str]:
        """Command printing the version alias listing."""
        command = self._section("aliases").get("command")
        if isinstance(command, str):
            command = command.split()
        if not command or not all(isinstance(part, str) for part in command):
            msg = "aliases.command must be a non-empty list of strings"
            raise ConfigurationError(msg)
        return list(command)

    @property
    def manifest_env_var(self) -> str:
        """Environment variable that carries the selected manifest."""
        env_var = self._section("manifest").get("env_var")
        if not env_var or not isinstance(env_var, str):
            msg = "manifest.env_var must be a non-empty string"
            raise ConfigurationError(msg)
        return env_var
