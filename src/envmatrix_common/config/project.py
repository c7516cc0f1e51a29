"""Project/user YAML configuration loading for envmatrix.

This module locates, loads, and deep-merges configuration from the user
(~/.config/envmatrix/config.yaml) and project (.envmatrix.yaml) files on top of
the built-in defaults.
"""

from __future__ import annotations

import copy
from pathlib import Path
from typing import Any

from envmatrix_common.io import FileOperationError, safe_read_yaml
from envmatrix_logging import get_cli_logger

logger = get_cli_logger(__name__)

PROJECT_CONFIG_NAME = ".envmatrix.yaml"

DEFAULT_CONFIG: dict[str, Any] = {
    "defaults": {
        "log_level": "WARNING",
        "color": True,
        "validate": True,
    },
    "matrix": {
        "travis": ".travis.yml",
        "workflow": ".github/workflows/test.yml",
    },
    "aliases": {
        "command": ["pyenv", "alias", "--list"],
    },
    "manifest": {
        "env_var": "ENVMATRIX_MANIFEST",
    },
}


def deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Deep-merge two dictionaries in place and return ``base``.

    Values from ``override`` take precedence. Nested dicts are merged
    recursively; other values are replaced.
    """
    for key, value in override.items():
        if key in base and isinstance(base[key], dict) and isinstance(value, dict):
            deep_merge(base[key], value)
        else:
            base[key] = value
    return base


def default_config() -> dict[str, Any]:
    """Return a fresh copy of the default configuration structure."""
    return copy.deepcopy(DEFAULT_CONFIG)


def load_yaml(path: Path) -> dict[str, Any]:
    """Load a YAML mapping, returning an empty dict when unavailable.

    Missing, unreadable, or non-mapping files contribute nothing to the merged
    configuration.
    """
    if not path.exists():
        return {}
    try:
        data = safe_read_yaml(path)
    except FileOperationError as e:
        logger.warning("Ignoring configuration file %s: %s", path, e)
        return {}
    if not isinstance(data, dict):
        logger.warning("Ignoring configuration file %s: not a mapping", path)
        return {}
    return data


def get_user_config_path() -> Path:
    """Get path to user-level envmatrix configuration file."""
    return Path.home() / ".config" / "envmatrix" / "config.yaml"


def get_project_config_path(repo_root: Path) -> Path:
    """Get path to project-level envmatrix configuration file."""
    return repo_root / PROJECT_CONFIG_NAME


def load_merged_config(repo_root: Path) -> dict[str, Any]:
    """Load default + user + project YAML config into a single dict."""
    cfg = default_config()

    user_cfg = load_yaml(get_user_config_path())
    if user_cfg:
        deep_merge(cfg, user_cfg)

    project_cfg = load_yaml(get_project_config_path(repo_root))
    if project_cfg:
        deep_merge(cfg, project_cfg)

    return cfg
