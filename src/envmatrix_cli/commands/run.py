"""The ``run`` command: execute a command once per compatible matrix row."""

from typing import TYPE_CHECKING

import click

from envmatrix import ManifestSelection, Row
from envmatrix_cli.core.decorators import handle_exceptions, matrix_options
from envmatrix_cli.services import ExecutionService

if TYPE_CHECKING:
    from envmatrix_cli.cli import Context


@click.command(
    name="run",
    context_settings={"ignore_unknown_options": True},
)
@matrix_options
@click.option("--silent", is_flag=True, help="Print no titles or summary")
@click.option(
    "--color/--no-color",
    default=None,
    help="Colour the summary (default from configuration)",
)
@click.option(
    "--validate/--no-validate",
    default=None,
    help="Check every manifest declares envmatrix before running",
)
@click.argument("command_args", nargs=-1, required=True, type=click.UNPROCESSED)
@click.pass_context
@handle_exceptions
def command(
    ctx: click.Context,
    config_path: str | None,
    runtime: str | None,
    silent: bool,
    color: bool | None,
    validate: bool | None,
    command_args: tuple[str, ...],
) -> None:
    """Run COMMAND once for every row matching the active Python.

    \b
    The row's manifest path is exported in ENVMATRIX_MANIFEST while COMMAND
    runs. A row passes when COMMAND exits with status 0.

    \b
    Example:
        envmatrix run -- sh -c 'pip install -r "$ENVMATRIX_MANIFEST" && pytest'
    """  # noqa: W605
    matrix_ctx: Context = ctx.obj
    config = matrix_ctx.config

    matrix = matrix_ctx.build_matrix(
        config_path,
        current_runtime=runtime,
        silent=silent,
        color=config.color if color is None else color,
        validate=config.validate if validate is None else validate,
    )
    executor = ExecutionService(cwd=matrix_ctx.repo_root)

    def run_row(row: Row, selection: ManifestSelection) -> bool:
        matrix_ctx.output.info(
            f"Running {' '.join(command_args)} with {selection.env_var}="
            f"{row.manifest_path}",
        )
        return executor.succeeds(command_args, env=selection.env())

    matrix.run_each(run_row)
