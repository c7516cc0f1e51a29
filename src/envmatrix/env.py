"""Interaction with the process environment.

Covers discovering the running Python version, fetching the alias listing, and
selecting a row's manifest for the duration of that row's work.
"""

from __future__ import annotations

import os
import platform
from collections.abc import Callable, MutableMapping, Sequence
from types import TracebackType
from typing import TYPE_CHECKING

from envmatrix.aliases import DEFAULT_ALIAS_COMMAND, AliasSource, detect_alias_source
from envmatrix_logging import get_cli_logger

if TYPE_CHECKING:
    from envmatrix.row import Row

logger = get_cli_logger(__name__)

MANIFEST_ENV_VAR = "ENVMATRIX_MANIFEST"

_UNSET = object()


def current_runtime_version() -> str:
    """Return the version of the running interpreter, e.g. ``3.12.4``."""
    return platform.python_version()


def current_alias_listing(
    source: AliasSource | None = None,
    command: Sequence[str] = DEFAULT_ALIAS_COMMAND,
) -> str:
    """Return the current alias listing.

    Parameters
    ----------
    source : AliasSource | None
        Source to query; detected from ``command`` when omitted
    command : Sequence[str]
        Alias tool command used for detection

    Returns
    -------
    str
        Listing text, empty when no alias tool is available
    """
    if source is None:
        source = detect_alias_source(command)
    return source.listing()


class ManifestSelection:
    """Make one manifest the selected one while a block runs.

    On entry the environment variable ``env_var`` is bound to the manifest
    path. On exit, however the block ends, the variable is restored to its
    previous value or removed if it was not set before.

    Parameters
    ----------
    manifest_path : str
        Manifest to select
    env_var : str
        Environment variable that carries the selection
    environ : MutableMapping[str, str] | None
        Environment to modify, ``os.environ`` by default
    """

    def __init__(
        self,
        manifest_path: str,
        env_var: str = MANIFEST_ENV_VAR,
        environ: MutableMapping[str, str] | None = None,
    ) -> None:
        self.manifest_path = manifest_path
        self.env_var = env_var
        self._environ = os.environ if environ is None else environ
        self._previous: object = _UNSET
        self._active = False

    @property
    def active(self) -> bool:
        """Whether the selection is currently applied."""
        return self._active

    def env(self) -> dict[str, str]:
        """Return a copy of the environment with the manifest selected.

        Suitable as the ``env`` argument of a subprocess call.
        """
        env = dict(self._environ)
        env[self.env_var] = self.manifest_path
        return env

    def __enter__(self) -> ManifestSelection:
        if self._active:
            msg = f"Manifest selection for {self.manifest_path} is already active"
            raise RuntimeError(msg)

        self._previous = self._environ.get(self.env_var, _UNSET)
        self._environ[self.env_var] = self.manifest_path
        self._active = True
        logger.debug("Selected manifest %s via %s", self.manifest_path, self.env_var)
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        if self._previous is _UNSET:
            self._environ.pop(self.env_var, None)
        else:
            self._environ[self.env_var] = self._previous  # type: ignore[assignment]
        self._previous = _UNSET
        self._active = False
        logger.debug("Released manifest %s", self.manifest_path)


Work = Callable[["Row", ManifestSelection], bool]


def with_manifest_selected(
    row: Row,
    work: Work,
    env_var: str = MANIFEST_ENV_VAR,
    environ: MutableMapping[str, str] | None = None,
) -> bool:
    """Run ``work`` for ``row`` with the row's manifest selected.

    Parameters
    ----------
    row : Row
        Row whose manifest is selected
    work : Callable[[Row, ManifestSelection], bool]
        Caller-supplied unit of work; its return value is the row's verdict
    env_var : str
        Environment variable that carries the selection
    environ : MutableMapping[str, str] | None
        Environment to modify, ``os.environ`` by default

    Returns
    -------
    bool
        Whether the row passed
    """
    with ManifestSelection(row.manifest_path, env_var=env_var, environ=environ) as sel:
        return bool(work(row, sel))
