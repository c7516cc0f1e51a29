"""Default output strategy implementation."""

from __future__ import annotations

import shutil

import click

from envmatrix_cli.core.constants import Icons
from envmatrix_cli.core.output.verbosity import Verbosity


class OutputStrategy:
    """Verbosity-aware output for CLI messages.

    The matrix report is written by :class:`envmatrix.reporter.Reporter`; this
    class covers everything the commands say around it.

    | Method  | NORMAL | VERBOSE |
    |---------|--------|---------|
    | error   | Yes    | Yes     |
    | warning | Yes    | Yes     |
    | plain   | Yes    | Yes     |
    | section | Yes    | Yes     |
    | info    | No     | Yes     |

    Parameters
    ----------
    verbosity : Verbosity
        Current verbosity level
    color : bool
        Whether to style messages
    """

    def __init__(
        self,
        verbosity: Verbosity = Verbosity.NORMAL,
        color: bool = True,
    ) -> None:
        self._verbosity = verbosity
        self.color = color

    @property
    def verbosity(self) -> Verbosity:
        """Current verbosity level."""
        return self._verbosity

    def _emit(
        self,
        message: str,
        *,
        err: bool = False,
        style: dict | None = None,
    ) -> None:
        rendered = click.style(message, **style) if style and self.color else message
        click.echo(rendered, err=err)

    def error(self, message: str, to_stderr: bool = True) -> None:
        """Display error message (red). Always visible."""
        self._emit(f"{Icons.ERROR} {message}", err=to_stderr, style={"fg": "red"})

    def warning(self, message: str) -> None:
        """Display warning message (yellow). Always visible."""
        self._emit(message, style={"fg": "yellow"})

    def plain(self, message: str, err: bool = False) -> None:
        """Display plain message without formatting. Always visible."""
        self._emit(message, err=err)

    def section(self, title: str, icon: str | None = None) -> None:
        """Display section heading with separator. Always visible.

        Parameters
        ----------
        title : str
            Section title
        icon : str | None
            Optional icon to display
        """
        width = self._get_separator_width()
        icon_prefix = f"{icon} " if icon else ""
        click.echo("-" * width)
        click.echo(f"{icon_prefix}{title}:")
        click.echo("-" * width)

    def info(self, message: str) -> None:
        """Display info message. Visible at VERBOSE."""
        if self._verbosity >= Verbosity.VERBOSE:
            self._emit(message)

    def _get_separator_width(self) -> int:
        """Get separator width from the terminal, minimum 40."""
        try:
            terminal_size = shutil.get_terminal_size()
            return max(40, terminal_size.columns - 2)
        except Exception:
            return 60
