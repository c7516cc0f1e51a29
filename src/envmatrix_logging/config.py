"""Logger factory and handler configuration."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

ROOT_LOGGER_NAME = "envmatrix"

DEFAULT_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"

_LOG_DIR = Path(".cache") / "envmatrix" / "log"

# Marks handlers installed by configure_logger so reconfiguration replaces them
_HANDLER_ATTR = "_envmatrix_handler"


def get_log_file_path(log_name: str = "cli") -> Path:
    """Get the path of a named log file (``~/.cache/envmatrix/log/<name>.log``).

    Parameters
    ----------
    log_name : str
        Base name of the log file

    Returns
    -------
    Path
        Absolute log file path
    """
    return Path.home() / _LOG_DIR / f"{log_name}.log"


def get_cli_logger(name: str) -> logging.Logger:
    """Get a logger for ``name``.

    Module names outside the ``envmatrix`` packages are nested under the root
    ``envmatrix`` logger so a single :func:`configure_logger` call covers them.

    Parameters
    ----------
    name : str
        Usually ``__name__`` of the calling module

    Returns
    -------
    logging.Logger
        The logger
    """
    if name == ROOT_LOGGER_NAME or name.startswith(f"{ROOT_LOGGER_NAME}."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")


def _coerce_level(level: str | int) -> int:
    if isinstance(level, int):
        return level
    value = logging.getLevelName(level.upper())
    if not isinstance(value, int):
        msg = f"Unknown log level: {level}"
        raise ValueError(msg)
    return value


def configure_logger(
    name: str = ROOT_LOGGER_NAME,
    level: str | int = "WARNING",
    to_console: bool = False,
    log_file: Path | None = None,
    fmt: str = DEFAULT_FORMAT,
) -> logging.Logger:
    """Configure handlers and level for a logger.

    Calling this again replaces the handlers installed by the previous call, so
    it is safe to invoke once per CLI invocation and once more from tests.

    Parameters
    ----------
    name : str
        Logger name to configure
    level : str | int
        Log level name or number
    to_console : bool
        Whether to log to stderr
    log_file : Path | None
        File to append log records to, if any
    fmt : str
        Log record format

    Returns
    -------
    logging.Logger
        The configured logger

    Raises
    ------
    ValueError
        If ``level`` is not a known level name
    """
    logger = logging.getLogger(name)
    logger.setLevel(_coerce_level(level))

    for handler in list(logger.handlers):
        if getattr(handler, _HANDLER_ATTR, False):
            logger.removeHandler(handler)
            handler.close()

    formatter = logging.Formatter(fmt)

    if to_console:
        console = logging.StreamHandler(sys.stderr)
        console.setFormatter(formatter)
        setattr(console, _HANDLER_ATTR, True)
        logger.addHandler(console)

    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(formatter)
        setattr(file_handler, _HANDLER_ATTR, True)
        logger.addHandler(file_handler)

    if not logger.handlers:
        logger.addHandler(logging.NullHandler())

    return logger
