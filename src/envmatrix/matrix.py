"""The matrix engine: run work once per row compatible with this interpreter."""

from __future__ import annotations

from collections.abc import MutableMapping, Sequence
from pathlib import Path
from typing import IO, Any

from envmatrix.aliases import DEFAULT_ALIAS_COMMAND, AliasSource
from envmatrix.env import (
    MANIFEST_ENV_VAR,
    Work,
    current_alias_listing,
    current_runtime_version,
    with_manifest_selected,
)
from envmatrix.errors import (
    MissingMatrixDefinitionError,
    NoCompatibleRuntimeError,
    SomeRowsFailedError,
)
from envmatrix.loaders import github_actions_config, travis_config
from envmatrix.reporter import MatrixOutcome, Outcome, Reporter
from envmatrix.row import Row
from envmatrix_logging import get_cli_logger

logger = get_cli_logger(__name__)


def summarize(compatible_count: int, all_passed: bool | None) -> MatrixOutcome:
    """Decide how a run ended from its aggregates.

    Parameters
    ----------
    compatible_count : int
        Number of rows that matched the active runtime
    all_passed : bool | None
        Whether every compatible row passed

    Returns
    -------
    MatrixOutcome
        ``NONE_COMPATIBLE`` takes precedence over ``SOME_FAILED``
    """
    if compatible_count == 0:
        return MatrixOutcome.NONE_COMPATIBLE
    if not all_passed:
        return MatrixOutcome.SOME_FAILED
    return MatrixOutcome.ALL_PASSED


class Matrix:
    """Runs caller-supplied work for every row the current Python can serve.

    Rows whose requested version (after alias resolution) differs from the
    active runtime are skipped. Each compatible row's work runs with the row's
    manifest selected, and at the end a summary of passed, failed and skipped
    rows is printed.

    Parameters
    ----------
    rows : Sequence[Row]
        Matrix rows, in the order they should run
    current_runtime : str | None
        Version treated as active; the running interpreter's by default
    silent : bool
        Suppress all report output; results and failures are unaffected
    color : bool
        Tint report output with ANSI colours
    validate : bool
        Validate every row's manifest now, raising on the first invalid one
    stream : IO[str] | None
        Report destination, stdout when None
    alias_source : AliasSource | None
        Fixed alias source; when None the alias tool is detected on each check
    alias_command : Sequence[str]
        Command used to detect the alias tool
    env_var : str
        Environment variable that carries the selected manifest
    environ : MutableMapping[str, str] | None
        Environment the selection is applied to, ``os.environ`` by default
    manifest_root : Path | str | None
        Directory relative manifest paths are validated against, the working
        directory when None

    Raises
    ------
    MissingManifestError
        If ``validate`` is set and a row's manifest does not exist
    UnusableManifestError
        If ``validate`` is set and a row's manifest lacks the envmatrix dependency
    """

    def __init__(
        self,
        rows: Sequence[Row],
        *,
        current_runtime: str | None = None,
        silent: bool = False,
        color: bool = True,
        validate: bool = True,
        stream: IO[str] | None = None,
        alias_source: AliasSource | None = None,
        alias_command: Sequence[str] = DEFAULT_ALIAS_COMMAND,
        env_var: str = MANIFEST_ENV_VAR,
        environ: MutableMapping[str, str] | None = None,
        manifest_root: Path | str | None = None,
    ) -> None:
        self.rows: tuple[Row, ...] = tuple(rows)
        self.current_runtime = current_runtime or current_runtime_version()
        self.reporter = Reporter(stream=stream, color=color, silent=silent)
        self.alias_source = alias_source
        self.alias_command = tuple(alias_command)
        self.env_var = env_var
        self.environ = environ
        self.manifest_root = Path(manifest_root) if manifest_root is not None else None

        if validate:
            for row in self.rows:
                row.validate(base_dir=self.manifest_root)

        self.results: dict[Row, Outcome] = {}
        self.compatible_count = 0
        self.all_passed: bool | None = None
        self.version_overrides: dict[str, str] = {}

        logger.debug(
            "Matrix with %d rows for Python %s",
            len(self.rows),
            self.current_runtime,
        )

    @property
    def silent(self) -> bool:
        return self.reporter.silent

    def alias_listing(self) -> str:
        """Fetch the alias listing for one compatibility check."""
        return current_alias_listing(self.alias_source, self.alias_command)

    def run_each(self, work: Work) -> MatrixOutcome:
        """Run ``work`` for each row compatible with the active runtime.

        ``work`` receives the row and the active
        :class:`~envmatrix.env.ManifestSelection`; its truthiness is the row's
        verdict. An exception from ``work`` propagates at once: the manifest
        selection is released, nothing is recorded for that row and no summary
        is printed. Every call starts from empty results, so a matrix can be run
        again.

        Parameters
        ----------
        work : Callable[[Row, ManifestSelection], bool]
            The unit of work to run per compatible row

        Returns
        -------
        MatrixOutcome
            ``MatrixOutcome.ALL_PASSED``

        Raises
        ------
        NoCompatibleRuntimeError
            If no row matched the active runtime, after the summary is printed
        SomeRowsFailedError
            If any compatible row failed, after the summary is printed
        """
        self.results = {}
        self.compatible_count = 0
        self.all_passed = True
        self.version_overrides = {}

        for row in self.rows:
            if not row.is_compatible_with(self.current_runtime, self.alias_listing()):
                logger.info(
                    "Skipping %s: Python %s resolves to %s, running %s",
                    row.manifest_path,
                    row.requested_version,
                    row.resolved_version,
                    self.current_runtime,
                )
                self.results[row] = Outcome.SKIPPED
                continue

            self.compatible_count += 1
            self.version_overrides[self.current_runtime] = row.requested_version

            self.reporter.print_title(row.manifest_path)
            passed = with_manifest_selected(
                row,
                work,
                env_var=self.env_var,
                environ=self.environ,
            )
            self.all_passed = self.all_passed and passed
            self.results[row] = Outcome.SUCCESS if passed else Outcome.FAILED
            logger.info("Row %s: %s", row, self.results[row].value)

        return self._finish()

    def _finish(self) -> MatrixOutcome:
        outcome = summarize(self.compatible_count, self.all_passed)
        self.reporter.print_report(
            self.results,
            outcome,
            self.current_runtime,
            self.version_overrides,
        )

        if outcome is MatrixOutcome.NONE_COMPATIBLE:
            msg = f"No manifests were compatible with Python {self.current_runtime}"
            raise NoCompatibleRuntimeError(msg)
        if outcome is MatrixOutcome.SOME_FAILED:
            failed = [
                row.manifest_path
                for row, result in self.results.items()
                if result is Outcome.FAILED
            ]
            msg = f"Some manifests failed: {', '.join(failed)}"
            raise SomeRowsFailedError(msg)
        return outcome

    @classmethod
    def from_travis_yml(
        cls,
        path: Path | str = travis_config.DEFAULT_PATH,
        **options: Any,
    ) -> Matrix:
        """Build a matrix from a ``.travis.yml`` file."""
        return cls(travis_config.load_rows(path), **options)

    @classmethod
    def from_github_actions_yml(
        cls,
        path: Path | str = github_actions_config.DEFAULT_PATH,
        **options: Any,
    ) -> Matrix:
        """Build a matrix from a GitHub Actions workflow file."""
        return cls(github_actions_config.load_rows(path), **options)

    @classmethod
    def from_ci_config(
        cls,
        root: Path | str = ".",
        travis_path: Path | str = travis_config.DEFAULT_PATH,
        workflow_path: Path | str = github_actions_config.DEFAULT_PATH,
        **options: Any,
    ) -> Matrix:
        """Build a matrix from whichever CI configuration the project has.

        A Travis file is preferred over a workflow file when both exist.

        Parameters
        ----------
        root : Path | str
            Project root the paths are relative to
        travis_path : Path | str
            Travis configuration location
        workflow_path : Path | str
            GitHub Actions workflow location
        **options : Any
            Passed on to the constructor; ``manifest_root`` defaults to ``root``

        Raises
        ------
        MissingMatrixDefinitionError
            If neither file exists
        """
        root = Path(root)
        options.setdefault("manifest_root", root)
        travis_file = root / travis_path
        workflow_file = root / workflow_path

        if travis_file.is_file():
            logger.debug("Using matrix from %s", travis_file)
            return cls.from_travis_yml(travis_file, **options)
        if workflow_file.is_file():
            logger.debug("Using matrix from %s", workflow_file)
            return cls.from_github_actions_yml(workflow_file, **options)

        msg = f"Expected either a {travis_path} or a {workflow_path}"
        raise MissingMatrixDefinitionError(msg)
