"""Load matrix rows from a GitHub Actions workflow file.

Each job's ``strategy.matrix`` contributes rows. The version axis is
``python-version`` (the name ``actions/setup-python`` expects) and the manifest
axis is ``requirements``::

    jobs:
      test:
        strategy:
          matrix:
            python-version: ["3.11.9", "3.12.4"]
            requirements: [requirements/django42.txt]
            include:
              - python-version: "3.13.0"
                requirements: requirements/django51.txt

Include entries that name neither axis only decorate existing combinations in
GitHub's semantics, so they add no rows here.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from envmatrix.loaders._rows import as_list, build_rows, read_mapping
from envmatrix.row import Row
from envmatrix_logging import get_cli_logger

logger = get_cli_logger(__name__)

DEFAULT_PATH = Path(".github") / "workflows" / "test.yml"

VERSION_KEY = "python-version"
MANIFEST_KEY = "requirements"


def _matrices(workflow: dict[str, Any]) -> list[dict[str, Any]]:
    jobs = workflow.get("jobs") or {}
    if not isinstance(jobs, dict):
        return []

    matrices = []
    for job in jobs.values():
        if not isinstance(job, dict):
            continue
        strategy = job.get("strategy") or {}
        matrix = strategy.get("matrix") if isinstance(strategy, dict) else None
        if isinstance(matrix, dict):
            matrices.append(matrix)
    return matrices


def _adds_row(entry: Any) -> bool:
    return not isinstance(entry, dict) or VERSION_KEY in entry or MANIFEST_KEY in entry


def load_rows(path: Path | str = DEFAULT_PATH) -> list[Row]:
    """Build rows from every job matrix of a workflow file.

    Parameters
    ----------
    path : Path | str
        Location of the workflow file

    Returns
    -------
    list[Row]
        Rows in job order, each job's product followed by its includes

    Raises
    ------
    InvalidMatrixDefinitionError
        If the file cannot be parsed or an include entry names only one axis
    """
    path = Path(path)
    workflow = read_mapping(path)

    rows: list[Row] = []
    for matrix in _matrices(workflow):
        rows += build_rows(
            versions=as_list(matrix.get(VERSION_KEY)),
            manifests=as_list(matrix.get(MANIFEST_KEY)),
            includes=[e for e in as_list(matrix.get("include")) if _adds_row(e)],
            excludes=as_list(matrix.get("exclude")),
            version_key=VERSION_KEY,
            manifest_key=MANIFEST_KEY,
            source=path,
        )

    logger.debug("Loaded %d rows from %s", len(rows), path)
    return rows
