"""Custom Click decorators for common CLI patterns."""

import functools
import traceback
from collections.abc import Callable
from typing import Any, TypeVar

import click

from envmatrix.errors import (
    InvalidMatrixDefinitionError,
    MatrixError,
    MissingMatrixDefinitionError,
)
from envmatrix_cli.core.config import ConfigurationError
from envmatrix_cli.core.constants import ExitCode
from envmatrix_cli.core.output import OutputStrategy
from envmatrix_logging import get_cli_logger

logger = get_cli_logger(__name__)

F = TypeVar("F", bound=Callable[..., Any])

CONFIG_ERRORS = (
    ConfigurationError,
    MissingMatrixDefinitionError,
    InvalidMatrixDefinitionError,
)


def _output_for(ctx: click.Context) -> OutputStrategy:
    output = getattr(ctx.obj, "output", None)
    return output if isinstance(output, OutputStrategy) else OutputStrategy()


def handle_exceptions(func: F) -> F:
    """Handle exceptions and convert to appropriate exit codes.

    Parameters
    ----------
    func : Callable
        Function to wrap

    Returns
    -------
    Callable
        Wrapped function
    """

    @functools.wraps(func)
    def wrapper(*args, **kwargs) -> Any:
        try:
            return func(*args, **kwargs)
        except KeyboardInterrupt:
            ctx = click.get_current_context()
            _output_for(ctx).error("Aborted")
            ctx.exit(ExitCode.GENERAL_ERROR)
        except Exception as e:
            # Allow Click's normal exit mechanism to propagate
            if isinstance(e, (click.exceptions.Exit, click.ClickException)):
                raise

            ctx = click.get_current_context()
            output = _output_for(ctx)
            logger.debug("Command failed: %s", e, exc_info=True)

            if isinstance(e, CONFIG_ERRORS):
                output.error(str(e))
                ctx.exit(ExitCode.CONFIG_ERROR)
            elif isinstance(e, MatrixError):
                output.error(str(e))
                ctx.exit(ExitCode.GENERAL_ERROR)
            elif isinstance(e, FileNotFoundError):
                output.error(f"File not found: {e}")
                ctx.exit(ExitCode.NOT_FOUND)
            else:
                output.error(f"Unexpected error: {e}")
                if getattr(ctx.obj, "verbose", False):
                    output.error("Full traceback:")
                    output.error(traceback.format_exc())
                else:
                    output.plain("Re-run with -v for full traceback", err=True)
                ctx.exit(ExitCode.GENERAL_ERROR)

    return wrapper  # type: ignore[return-value]


def matrix_options(func: F) -> F:
    """Add the options shared by commands that load a matrix.

    Parameters
    ----------
    func : Callable
        Function to wrap

    Returns
    -------
    Callable
        Wrapped function with ``--config`` and ``--runtime`` options
    """
    func = click.option(
        "--runtime",
        "runtime",
        metavar="VERSION",
        help="Python version to treat as active (defaults to the running one)",
    )(func)
    return click.option(
        "--config",
        "config_path",
        type=click.Path(dir_okay=False, path_type=str),
        help="Matrix definition file (defaults to .travis.yml, then the workflow)",
    )(func)
