"""The ``rows`` command: show the matrix without running anything."""

from pathlib import Path
from typing import TYPE_CHECKING

import click

from envmatrix import MatrixError, Row
from envmatrix_cli.core.constants import Icons
from envmatrix_cli.core.decorators import handle_exceptions, matrix_options

if TYPE_CHECKING:
    from envmatrix_cli.cli import Context


def _manifest_status(row: Row, base_dir: Path | None) -> str:
    try:
        row.validate(base_dir=base_dir)
    except MatrixError as e:
        return str(e)
    return "ok"


@click.command(name="rows")
@matrix_options
@click.pass_context
@handle_exceptions
def command(
    ctx: click.Context,
    config_path: str | None,
    runtime: str | None,
) -> None:
    """List matrix rows and whether they run on the active Python."""
    matrix_ctx: Context = ctx.obj
    output = matrix_ctx.output

    matrix = matrix_ctx.build_matrix(
        config_path,
        current_runtime=runtime,
        validate=False,
        silent=True,
    )

    output.section(f"Matrix rows for Python {matrix.current_runtime}", Icons.LIST)
    if not matrix.rows:
        output.warning("The matrix defines no rows")
        return

    manifest_width = max(len(row.manifest_path) for row in matrix.rows)
    version_width = max(len(row.requested_version) for row in matrix.rows)

    for row in matrix.rows:
        compatible = row.is_compatible_with(
            matrix.current_runtime,
            matrix.alias_listing(),
        )
        icon = Icons.SUCCESS if compatible else Icons.SKIPPED
        resolved = (
            f" (-> {row.resolved_version})"
            if row.resolved_version != row.requested_version
            else ""
        )
        output.plain(
            f"{icon} {row.manifest_path.ljust(manifest_width)}  "
            f"Python {row.requested_version.ljust(version_width)}{resolved}",
        )
        status = _manifest_status(row, matrix.manifest_root)
        if status != "ok":
            output.warning(f"   {status}")
