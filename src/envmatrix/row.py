"""A single entry of the compatibility matrix."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from envmatrix.aliases import resolve_alias
from envmatrix.errors import MissingManifestError, UnusableManifestError
from envmatrix_common.io import FileOperationError, read_text

# Every manifest must pull in envmatrix itself, or the run cannot report back
DEPENDENCY_MARKER = "envmatrix"


@dataclass(eq=False)
class Row:
    """A Python version paired with the requirements manifest to test it with.

    Rows compare by identity, so two rows with equal fields are still separate
    entries in a run's results.

    Attributes
    ----------
    requested_version : str
        Python version the row declares, possibly an alias
    manifest_path : str
        Path of the requirements manifest for this row
    resolved_version : str | None
        Concrete version ``requested_version`` resolved to during the most
        recent compatibility check
    """

    requested_version: str
    manifest_path: str
    resolved_version: str | None = field(default=None, init=False)

    def __post_init__(self) -> None:
        self.requested_version = str(self.requested_version)
        self.manifest_path = str(self.manifest_path)

    def validate(
        self,
        marker: str = DEPENDENCY_MARKER,
        base_dir: Path | None = None,
    ) -> None:
        """Raise if the manifest is missing or does not declare ``marker``.

        Parameters
        ----------
        marker : str
            Text the manifest must contain
        base_dir : Path | None
            Directory a relative manifest path is resolved against, the working
            directory when None

        Raises
        ------
        MissingManifestError
            If the manifest file does not exist
        UnusableManifestError
            If the manifest cannot be read or does not mention ``marker``
        """
        path = Path(self.manifest_path)
        if base_dir is not None and not path.is_absolute():
            path = Path(base_dir) / path
        if not path.is_file():
            msg = f"Manifest not found: {self.manifest_path}"
            raise MissingManifestError(msg)

        try:
            # Undecodable bytes never hide an ASCII marker
            contents = read_text(path, errors="replace")
        except FileOperationError as e:
            msg = f"Manifest could not be read: {self.manifest_path}"
            raise UnusableManifestError(msg) from e

        if marker not in contents:
            msg = f"Manifest is missing {marker} dependency: {self.manifest_path}"
            raise UnusableManifestError(msg)

    def is_compatible_with(self, active_version: str, alias_listing: str = "") -> bool:
        """Check whether this row can run on ``active_version``.

        Re-resolves on every call and overwrites ``resolved_version``.

        Parameters
        ----------
        active_version : str
            The Python version currently running
        alias_listing : str
            Alias listing text to resolve ``requested_version`` through

        Returns
        -------
        bool
            True if the resolved version equals ``active_version``
        """
        self.resolved_version = resolve_alias(self.requested_version, alias_listing)
        return self.resolved_version == active_version

    def __str__(self) -> str:
        return f"{self.manifest_path} (Python {self.requested_version})"
