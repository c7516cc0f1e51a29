"""Safe file operations for envmatrix."""

from pathlib import Path
from typing import Any

import yaml


class FileOperationError(Exception):
    """Raised when file operations fail."""


def safe_read_yaml(path: Path) -> Any:
    """Safely read YAML file with error handling.

    Parameters
    ----------
    path : Path
        Path to YAML file

    Returns
    -------
    Any
        Parsed YAML data, ``{}`` for an empty document

    Raises
    ------
    FileOperationError
        If file cannot be read or parsed
    """
    try:
        if not path.exists():
            msg = f"YAML file does not exist: {path}"
            raise FileOperationError(msg)

        with path.open(encoding="utf-8") as f:
            data = yaml.safe_load(f)
            return data if data is not None else {}

    except yaml.YAMLError as e:
        msg = f"Invalid YAML in {path}: {e}"
        raise FileOperationError(msg) from e
    except OSError as e:
        msg = f"Cannot read YAML file {path}: {e}"
        raise FileOperationError(msg) from e


def read_text(path: Path, errors: str = "strict") -> str:
    """Read a UTF-8 text file.

    Parameters
    ----------
    path : Path
        File to read
    errors : str
        How undecodable bytes are handled, as for :func:`open`

    Returns
    -------
    str
        File contents

    Raises
    ------
    FileOperationError
        If the file cannot be read
    """
    try:
        return path.read_text(encoding="utf-8", errors=errors)
    except OSError as e:
        msg = f"Cannot read file {path}: {e}"
        raise FileOperationError(msg) from e
