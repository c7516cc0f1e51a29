"""Constants and enums for the envmatrix CLI."""

from enum import Enum


class LogLevel(str, Enum):
    """Supported log levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"


ALL_LOG_LEVELS = list(LogLevel)


class ExitCode:
    """Exit codes for CLI operations."""

    SUCCESS = 0
    GENERAL_ERROR = 1
    NOT_FOUND = 2
    CONFIG_ERROR = 3


class Icons:
    """Unicode icons for CLI output.

    Reserved for errors, headers and status indicators; the matrix report itself
    uses colours only.
    """

    SUCCESS = "✅"
    ERROR = "❌"
    LIST = "📋"
    SKIPPED = "⏭️"


class EnvVars:
    """Environment variable names."""

    LOG_LEVEL = "ENVMATRIX_LOG_LEVEL"
    NO_COLOR = "NO_COLOR"
