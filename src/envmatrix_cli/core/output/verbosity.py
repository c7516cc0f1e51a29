"""Verbosity level enum for CLI output."""

from enum import IntEnum


class Verbosity(IntEnum):
    """Verbosity levels for CLI output.

    - NORMAL: Default output (results, errors, warnings)
    - VERBOSE: -v flag (+ operation details)
    """

    NORMAL = 0
    VERBOSE = 1

    @classmethod
    def from_flags(cls, verbose: bool = False) -> "Verbosity":
        """Create Verbosity from CLI flags.

        Parameters
        ----------
        verbose : bool
            Whether -v flag is set

        Returns
        -------
        Verbosity
            Corresponding verbosity level
        """
        return cls.VERBOSE if verbose else cls.NORMAL
