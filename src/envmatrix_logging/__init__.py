"""Logging setup shared by the envmatrix packages.

Every module obtains its logger through :func:`get_cli_logger` so all output lands
under the ``envmatrix`` logger hierarchy and can be configured in one place.
"""

from envmatrix_logging.config import (
    DEFAULT_FORMAT,
    ROOT_LOGGER_NAME,
    configure_logger,
    get_cli_logger,
    get_log_file_path,
)

__all__ = [
    "DEFAULT_FORMAT",
    "ROOT_LOGGER_NAME",
    "configure_logger",
    "get_cli_logger",
    "get_log_file_path",
]
