"""Rendering of matrix run reports.

Rendering (building the lines) is kept apart from emitting them so the report
can be checked without capturing output, and so the engine alone decides how a
run ends.
"""

from __future__ import annotations

from collections.abc import Mapping
from enum import Enum
from typing import IO, TYPE_CHECKING, Any

import click

if TYPE_CHECKING:
    from envmatrix.row import Row

RUNTIME_LABEL = "Python"

STYLE_HEAD: dict[str, Any] = {"fg": "bright_white", "bg": "blue"}
STYLE_WARNING: dict[str, Any] = {"fg": "yellow"}
STYLE_SUCCESS: dict[str, Any] = {"fg": "green"}
STYLE_FAILURE: dict[str, Any] = {"fg": "red"}


class Outcome(str, Enum):
    """Result recorded for one row."""

    SUCCESS = "Success"
    FAILED = "Failed"
    SKIPPED = "Skipped"


class MatrixOutcome(str, Enum):
    """How a whole run ended."""

    ALL_PASSED = "all_passed"
    SOME_FAILED = "some_failed"
    NONE_COMPATIBLE = "none_compatible"


OUTCOME_STYLES: dict[Outcome, dict[str, Any]] = {
    Outcome.SUCCESS: STYLE_SUCCESS,
    Outcome.FAILED: STYLE_FAILURE,
    Outcome.SKIPPED: STYLE_WARNING,
}


class Reporter:
    """Prints row titles and the end-of-run summary for a matrix.

    Parameters
    ----------
    stream : IO[str] | None
        Where to write, stdout when None
    color : bool
        Whether to tint output with ANSI colours
    silent : bool
        Suppress all output
    """

    def __init__(
        self,
        stream: IO[str] | None = None,
        color: bool = True,
        silent: bool = False,
    ) -> None:
        self.stream = stream
        self.color = color
        self.silent = silent

    def tint(self, message: str, style: Mapping[str, Any]) -> str:
        if not self.color:
            return message
        return click.style(message, **style)

    def render_title(self, title: str) -> list[str]:
        return ["", self.tint(title, STYLE_HEAD), ""]

    def render_table(self, results: Mapping[Row, Outcome]) -> list[str]:
        """Render one line per row, aligned on manifest path and version."""
        manifest_width = max((len(row.manifest_path) for row in results), default=0)
        version_width = max((len(row.requested_version) for row in results), default=0)

        lines = []
        for row, outcome in results.items():
            label = self.tint(outcome.value, OUTCOME_STYLES[outcome])
            lines.append(
                f"- {row.manifest_path.ljust(manifest_width)}  "
                f"{RUNTIME_LABEL} {row.requested_version.ljust(version_width)}  "
                f"{label}",
            )
        return lines

    def render_summary(
        self,
        outcome: MatrixOutcome,
        active_runtime: str,
        version_overrides: Mapping[str, str],
    ) -> str:
        if outcome is MatrixOutcome.NONE_COMPATIBLE:
            return self.tint(
                f"No manifests were compatible with {RUNTIME_LABEL} {active_runtime}",
                STYLE_FAILURE,
            )
        if outcome is MatrixOutcome.SOME_FAILED:
            return self.tint("Some manifests failed", STYLE_FAILURE)

        requested = version_overrides.get(active_runtime, active_runtime)
        return self.tint(
            f"All manifests succeeded for {RUNTIME_LABEL} {requested}",
            STYLE_SUCCESS,
        )

    def render_alias_notes(self, version_overrides: Mapping[str, str]) -> list[str]:
        """Render a note for every active version a row reached through an alias."""
        return [
            self.tint(
                f"{RUNTIME_LABEL} {requested} is an alias for "
                f"{RUNTIME_LABEL} {active} in this environment.",
                STYLE_WARNING,
            )
            for active, requested in version_overrides.items()
            if active != requested
        ]

    def render_report(
        self,
        results: Mapping[Row, Outcome],
        outcome: MatrixOutcome,
        active_runtime: str,
        version_overrides: Mapping[str, str],
    ) -> list[str]:
        """Render the complete end-of-run report."""
        lines = self.render_title("Summary")
        lines += self.render_table(results)
        lines.append("")
        lines.append(self.render_summary(outcome, active_runtime, version_overrides))
        lines += self.render_alias_notes(version_overrides)
        lines.append("")
        return lines

    def print_title(self, title: str) -> None:
        self._echo_lines(self.render_title(title))

    def print_report(
        self,
        results: Mapping[Row, Outcome],
        outcome: MatrixOutcome,
        active_runtime: str,
        version_overrides: Mapping[str, str],
    ) -> None:
        self._echo_lines(
            self.render_report(results, outcome, active_runtime, version_overrides),
        )

    def _echo_lines(self, lines: list[str]) -> None:
        if self.silent:
            return
        for line in lines:
            # color=True keeps ANSI codes when writing to a non-tty stream
            click.echo(line, file=self.stream, color=self.color or None)
