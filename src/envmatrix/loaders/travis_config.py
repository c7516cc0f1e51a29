"""Load matrix rows from a Travis CI style ``.travis.yml``.

The file lists the Python versions under ``python`` and the manifests under
``requirements``; every combination becomes a row. ``matrix`` (or its newer name
``jobs``) may hold ``exclude`` entries that drop combinations and ``include``
entries that add rows::

    python:
      - "3.11.9"
      - "3.12.4"
    requirements:
      - requirements/django42.txt
      - requirements/django50.txt
    matrix:
      exclude:
        - python: "3.11.9"
          requirements: requirements/django50.txt
"""

from __future__ import annotations

from pathlib import Path

from envmatrix.loaders._rows import as_list, build_rows, read_mapping
from envmatrix.row import Row
from envmatrix_logging import get_cli_logger

logger = get_cli_logger(__name__)

DEFAULT_PATH = Path(".travis.yml")

VERSION_KEY = "python"
MANIFEST_KEY = "requirements"


def load_rows(path: Path | str = DEFAULT_PATH) -> list[Row]:
    """Build rows from a Travis CI configuration file.

    Parameters
    ----------
    path : Path | str
        Location of the ``.travis.yml`` file

    Returns
    -------
    list[Row]
        Rows in file order

    Raises
    ------
    InvalidMatrixDefinitionError
        If the file cannot be parsed or an include entry is incomplete
    """
    path = Path(path)
    config = read_mapping(path)

    matrix = config.get("matrix") or config.get("jobs") or {}
    if not isinstance(matrix, dict):
        matrix = {}

    rows = build_rows(
        versions=as_list(config.get(VERSION_KEY)),
        manifests=as_list(config.get(MANIFEST_KEY)),
        includes=as_list(matrix.get("include")),
        excludes=as_list(matrix.get("exclude")),
        version_key=VERSION_KEY,
        manifest_key=MANIFEST_KEY,
        source=path,
    )
    logger.debug("Loaded %d rows from %s", len(rows), path)
    return rows
