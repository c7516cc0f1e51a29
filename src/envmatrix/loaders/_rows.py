"""Helpers shared by the matrix loaders."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from envmatrix.errors import InvalidMatrixDefinitionError
from envmatrix.row import Row
from envmatrix_common.io import FileOperationError, safe_read_yaml


def read_mapping(path: Path) -> dict[str, Any]:
    """Read a YAML file that must contain a mapping at the top level."""
    try:
        data = safe_read_yaml(path)
    except FileOperationError as e:
        raise InvalidMatrixDefinitionError(str(e)) from e

    if not isinstance(data, dict):
        msg = f"Expected a mapping at the top level of {path}"
        raise InvalidMatrixDefinitionError(msg)
    return data


def as_list(value: Any) -> list[Any]:
    """Normalize a scalar-or-list YAML value to a list."""
    if value is None:
        return []
    if isinstance(value, list):
        return value
    return [value]


def as_version(value: Any) -> str:
    # YAML reads an unquoted 3.10 as the float 3.1; quote versions in CI files
    return str(value)


def build_rows(
    versions: list[Any],
    manifests: list[Any],
    includes: list[Any],
    excludes: list[Any],
    version_key: str,
    manifest_key: str,
    source: Path,
) -> list[Row]:
    """Expand a version x manifest product, drop excludes, append includes.

    Parameters
    ----------
    versions : list[Any]
        Version axis of the product
    manifests : list[Any]
        Manifest axis of the product
    includes : list[Any]
        Extra rows, each a mapping with both keys
    excludes : list[Any]
        Rows to remove, each a mapping; a product row is removed when every key
        given in an exclude entry matches
    version_key : str
        Key naming the version inside include/exclude entries
    manifest_key : str
        Key naming the manifest inside include/exclude entries
    source : Path
        File being loaded, used in error messages

    Returns
    -------
    list[Row]
        Rows in product order followed by includes

    Raises
    ------
    InvalidMatrixDefinitionError
        If an include entry is not a mapping with both keys
    """
    exclude_filters = []
    for entry in excludes:
        if not isinstance(entry, dict):
            msg = f"Exclude entries must be mappings in {source}: {entry!r}"
            raise InvalidMatrixDefinitionError(msg)
        exclude_filters.append(
            {key: str(value) for key, value in entry.items()},
        )

    rows = []
    for version in versions:
        for manifest in manifests:
            candidate = {version_key: as_version(version), manifest_key: str(manifest)}
            if any(
                all(candidate.get(key) == value for key, value in entry.items())
                for entry in exclude_filters
            ):
                continue
            rows.append(Row(candidate[version_key], candidate[manifest_key]))

    for entry in includes:
        rows.append(row_from_entry(entry, version_key, manifest_key, source))

    return rows


def row_from_entry(
    entry: Any,
    version_key: str,
    manifest_key: str,
    source: Path,
) -> Row:
    if not isinstance(entry, dict):
        msg = f"Matrix entries must be mappings in {source}: {entry!r}"
        raise InvalidMatrixDefinitionError(msg)

    version = entry.get(version_key)
    manifest = entry.get(manifest_key)
    if version is None or manifest is None:
        msg = (
            f"Matrix entry in {source} needs both {version_key!r} and "
            f"{manifest_key!r}: {entry!r}"
        )
        raise InvalidMatrixDefinitionError(msg)

    return Row(as_version(version), str(manifest))
