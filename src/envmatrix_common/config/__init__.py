"""Shared configuration utilities (envmatrix_common.config).

This package provides the YAML-based project/user configuration loader.
"""

from .project import (
    DEFAULT_CONFIG,
    PROJECT_CONFIG_NAME,
    deep_merge,
    default_config,
    load_merged_config,
)

__all__ = [
    "DEFAULT_CONFIG",
    "PROJECT_CONFIG_NAME",
    "deep_merge",
    "default_config",
    "load_merged_config",
]
