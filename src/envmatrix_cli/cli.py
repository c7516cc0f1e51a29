"""Main CLI entry point for envmatrix.

This module provides the main Click command group and the context object shared
by all subcommands.
"""

from pathlib import Path
from typing import Any

import click

from envmatrix import Matrix
from envmatrix_cli.commands import rows, run
from envmatrix_cli.core.config import CliConfig
from envmatrix_cli.core.constants import ALL_LOG_LEVELS, LogLevel
from envmatrix_cli.core.decorators import handle_exceptions
from envmatrix_cli.core.output import OutputStrategy, Verbosity
from envmatrix_logging import configure_logger, get_cli_logger, get_log_file_path

logger = get_cli_logger(__name__)

TRAVIS_SUFFIXES = ("travis.yml", "travis.yaml")


class Context:
    """CLI context object for sharing state between commands."""

    def __init__(self, repo_root: Path | None = None) -> None:
        """Initialize CLI context.

        Parameters
        ----------
        repo_root : Path, optional
            Project root directory, the working directory by default
        """
        self.verbose: bool = False
        self.repo_root: Path = repo_root or Path.cwd()
        self._config: CliConfig | None = None
        self._output: OutputStrategy | None = None

    @property
    def config(self) -> CliConfig:
        """Get the merged configuration, loading it on first use."""
        if self._config is None:
            self._config = CliConfig(self.repo_root)
        return self._config

    @property
    def output(self) -> OutputStrategy:
        """Get output strategy singleton instance."""
        if self._output is None:
            self._output = OutputStrategy(
                verbosity=Verbosity.from_flags(self.verbose),
                color=self.config.color,
            )
        return self._output

    def build_matrix(
        self,
        config_path: str | None = None,
        **options: Any,
    ) -> Matrix:
        """Load the matrix for this project.

        Parameters
        ----------
        config_path : str | None
            Explicit matrix definition; a name ending in ``travis.yml`` is read
            as Travis configuration, anything else as a workflow file
        **options : Any
            Passed on to :class:`~envmatrix.Matrix`

        Returns
        -------
        Matrix
            The loaded matrix
        """
        options.setdefault("alias_command", self.config.alias_command)
        options.setdefault("env_var", self.config.manifest_env_var)
        options.setdefault("manifest_root", self.repo_root)

        if config_path is None:
            return Matrix.from_ci_config(
                self.repo_root,
                travis_path=self.config.travis_path,
                workflow_path=self.config.workflow_path,
                **options,
            )

        path = Path(config_path)
        if not path.is_absolute():
            path = self.repo_root / path
        if not path.is_file():
            raise FileNotFoundError(str(path))

        if path.name.endswith(TRAVIS_SUFFIXES):
            return Matrix.from_travis_yml(path, **options)
        return Matrix.from_github_actions_yml(path, **options)


def _configure_logging(
    log_level: str | None,
    verbose: bool,
    config: CliConfig,
) -> None:
    level = log_level or (LogLevel.DEBUG.value if verbose else config.log_level.value)
    configure_logger(
        level=level,
        to_console=verbose,
        log_file=get_log_file_path("cli") if verbose else None,
    )


@click.group()
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Enable verbose output and debug logging to stderr",
)
@click.option(
    "--log-level",
    type=click.Choice([level.value for level in ALL_LOG_LEVELS]),
    help="Set logging level",
)
@click.option(
    "--root",
    type=click.Path(file_okay=False, path_type=Path),
    help="Project root (defaults to the current directory)",
)
@click.version_option(package_name="envmatrix")
@click.pass_context
@handle_exceptions
def cli(
    ctx: click.Context,
    verbose: bool,
    log_level: str | None,
    root: Path | None,
) -> None:
    """envmatrix - run tests once per Python version and requirements manifest.

    \b
    Rows whose Python version does not match the running interpreter are
    skipped; a summary of passed, failed and skipped rows ends every run.
    """  # noqa: W605
    ctx.ensure_object(Context)
    matrix_ctx: Context = ctx.obj
    matrix_ctx.verbose = verbose
    if root is not None:
        matrix_ctx.repo_root = root

    _configure_logging(log_level, verbose, matrix_ctx.config)
    logger.debug("envmatrix starting with project root: %s", matrix_ctx.repo_root)


cli.add_command(run.command)
cli.add_command(rows.command)


def main() -> None:
    """Serve as the main entry point for the CLI."""
    cli(prog_name="envmatrix")


if __name__ == "__main__":
    main()
