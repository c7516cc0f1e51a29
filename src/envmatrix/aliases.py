"""Version alias resolution.

Version managers can point one name at another (``3.12 => 3.12.4``). A row that
asks for ``3.12`` must match an interpreter that reports ``3.12.4``, so requested
versions are followed through the alias listing before they are compared.

The listing is produced by an external tool. Its output is one alias per line in
the form ``NAME => TARGET``; anything else on a line is ignored.
"""

from __future__ import annotations

import re
import shutil
import subprocess
from collections.abc import Sequence
from typing import Protocol, runtime_checkable

from envmatrix.errors import AliasResolutionError
from envmatrix_logging import get_cli_logger

logger = get_cli_logger(__name__)

ALIAS_LINE_PATTERN = re.compile(r"(.+) => (.+)")

DEFAULT_ALIAS_COMMAND: tuple[str, ...] = ("pyenv", "alias", "--list")


def parse_alias_listing(listing: str) -> dict[str, str]:
    """Parse an alias listing into an ordered ``alias -> target`` mapping.

    Parameters
    ----------
    listing : str
        Raw listing text, one ``NAME => TARGET`` entry per line

    Returns
    -------
    dict[str, str]
        Aliases in listing order; a repeated name keeps its last target
    """
    aliases: dict[str, str] = {}
    for line in listing.split("\n"):
        match = ALIAS_LINE_PATTERN.fullmatch(line)
        if match is None:
            continue
        name, target = match.groups()
        aliases[name] = target
    return aliases


def resolve_alias(requested: str, listing: str) -> str:
    """Follow aliases from ``requested`` to the version it currently refers to.

    Resolution stops at a name with no entry in the listing, or at a name that
    is mapped to itself. Chains of any length resolve; only a chain that comes
    back to a name it already passed through is rejected.

    Parameters
    ----------
    requested : str
        Version name to resolve
    listing : str
        Raw alias listing text

    Returns
    -------
    str
        The concrete version name

    Raises
    ------
    AliasResolutionError
        If the chain revisits a name, i.e. the aliases form a cycle
    """
    aliases = parse_alias_listing(listing)
    current = requested
    chain = [current]
    visited = {current}

    while True:
        target = aliases.get(current)
        if target is None or target == current:
            return current
        if target in visited:
            msg = (
                f"Alias chain for {requested!r} is a cycle: "
                f"{' => '.join([*chain, target])}"
            )
            raise AliasResolutionError(msg)
        visited.add(target)
        chain.append(target)
        current = target


@runtime_checkable
class AliasSource(Protocol):
    """Something that can produce the current alias listing."""

    def listing(self) -> str:
        """Return the raw alias listing text."""
        ...


class NullAliasSource:
    """Alias source used when no alias tool is installed."""

    def listing(self) -> str:
        return ""

    def __repr__(self) -> str:
        return "NullAliasSource()"


class CommandAliasSource:
    """Alias source that shells out to an alias tool.

    A failing tool is treated like an empty listing: rows are then compared by
    their literal version names.
    """

    def __init__(self, command: Sequence[str] = DEFAULT_ALIAS_COMMAND) -> None:
        if not command:
            msg = "Alias command must not be empty"
            raise ValueError(msg)
        self.command = list(command)

    def listing(self) -> str:
        try:
            result = subprocess.run(
                self.command,
                capture_output=True,
                text=True,
                check=False,
            )
        except OSError as e:
            logger.warning("Could not run alias command %s: %s", self.command, e)
            return ""

        if result.returncode != 0:
            logger.warning(
                "Alias command %s exited with %s: %s",
                " ".join(self.command),
                result.returncode,
                (result.stderr or "").strip(),
            )
            return ""

        return result.stdout

    def __repr__(self) -> str:
        return f"CommandAliasSource({self.command!r})"


def detect_alias_source(
    command: Sequence[str] = DEFAULT_ALIAS_COMMAND,
) -> AliasSource:
    """Pick the alias source for this environment.

    Parameters
    ----------
    command : Sequence[str]
        Command that prints the alias listing

    Returns
    -------
    AliasSource
        A ``CommandAliasSource`` if the tool is on PATH, else ``NullAliasSource``
    """
    if command and shutil.which(command[0]):
        logger.debug("Using alias tool %s", command[0])
        return CommandAliasSource(command)
    logger.debug("No alias tool found, aliases are disabled")
    return NullAliasSource()
