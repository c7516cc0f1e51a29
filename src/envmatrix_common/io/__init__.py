"""File IO helpers."""

from .files import FileOperationError, read_text, safe_read_yaml

__all__ = ["FileOperationError", "read_text", "safe_read_yaml"]
