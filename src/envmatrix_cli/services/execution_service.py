"""Subprocess execution for matrix rows."""

import subprocess
from collections.abc import Sequence
from pathlib import Path
from typing import Any

from envmatrix_cli.core.constants import ExitCode
from envmatrix_logging import get_cli_logger

logger = get_cli_logger(__name__)


class ExecutionService:
    """Runs a row's command and reports its exit status.

    Output is not captured: the command writes straight to the terminal so the
    CI log shows it between the row titles.

    Parameters
    ----------
    cwd : Path | None
        Working directory for every command
    """

    def __init__(self, cwd: Path | None = None) -> None:
        self.cwd = cwd

    def execute(
        self,
        cmd: Sequence[str],
        env: dict[str, str] | None = None,
        **kwargs: Any,
    ) -> subprocess.CompletedProcess:
        r"""Execute a command and wait for it.

        Parameters
        ----------
        cmd : Sequence[str]
            Command to execute
        env : dict[str, str] | None, optional
            Complete environment for the command
        **kwargs : Any
            Additional arguments passed to subprocess.run

        Returns
        -------
        subprocess.CompletedProcess
            Result of command execution; a missing executable yields
            ``ExitCode.NOT_FOUND``
        """
        cmd = list(cmd)
        logger.debug("Executing command: %s", " ".join(cmd))
        if self.cwd:
            logger.debug("Working directory: %s", self.cwd)

        try:
            return subprocess.run(
                cmd,
                cwd=self.cwd,
                env=env,
                check=False,
                **kwargs,
            )
        except FileNotFoundError as e:
            logger.error("Command not found: %s", cmd[0])
            return subprocess.CompletedProcess(cmd, ExitCode.NOT_FOUND, "", str(e))

    def succeeds(
        self,
        cmd: Sequence[str],
        env: dict[str, str] | None = None,
    ) -> bool:
        """Run ``cmd`` and return whether it exited with status 0."""
        result = self.execute(cmd, env=env)
        if result.returncode != 0:
            logger.info(
                "Command exited with %s: %s",
                result.returncode,
                " ".join(result.args),
            )
        return result.returncode == 0
