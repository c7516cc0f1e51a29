"""Run a test suite once per (Python version, requirements manifest) row.

Typical use from a CI job::

    from envmatrix import Matrix

    def run_tests(row, selection):
        return subprocess.call(["pytest"], env=selection.env()) == 0

    Matrix.from_ci_config().run_each(run_tests)
"""

from envmatrix.aliases import (
    AliasSource,
    CommandAliasSource,
    NullAliasSource,
    detect_alias_source,
    parse_alias_listing,
    resolve_alias,
)
from envmatrix.env import (
    MANIFEST_ENV_VAR,
    ManifestSelection,
    current_alias_listing,
    current_runtime_version,
    with_manifest_selected,
)
from envmatrix.errors import (
    AliasResolutionError,
    InvalidMatrixDefinitionError,
    MatrixError,
    MissingManifestError,
    MissingMatrixDefinitionError,
    NoCompatibleRuntimeError,
    SomeRowsFailedError,
    UnusableManifestError,
)
from envmatrix.matrix import Matrix, summarize
from envmatrix.reporter import MatrixOutcome, Outcome, Reporter
from envmatrix.row import Row

__version__ = "0.1.0"

__all__ = [
    "MANIFEST_ENV_VAR",
    "AliasResolutionError",
    "AliasSource",
    "CommandAliasSource",
    "InvalidMatrixDefinitionError",
    "ManifestSelection",
    "Matrix",
    "MatrixError",
    "MatrixOutcome",
    "MissingManifestError",
    "MissingMatrixDefinitionError",
    "NoCompatibleRuntimeError",
    "NullAliasSource",
    "Outcome",
    "Reporter",
    "Row",
    "SomeRowsFailedError",
    "UnusableManifestError",
    "current_alias_listing",
    "current_runtime_version",
    "detect_alias_source",
    "parse_alias_listing",
    "resolve_alias",
    "summarize",
    "with_manifest_selected",
]
