"""Services used by the CLI commands."""

from .execution_service import ExecutionService

__all__ = ["ExecutionService"]
