"""Output strategy module for CLI output with verbosity contracts.

Usage
-----
>>> from envmatrix_cli.core.output import OutputStrategy, Verbosity
>>>
>>> output = OutputStrategy(verbosity=Verbosity.VERBOSE)
>>> output.plain("Matrix rows for Python 3.12.4")
>>> output.info("Additional details...")  # Only shown with -v
"""

from envmatrix_cli.core.output.strategy import OutputStrategy
from envmatrix_cli.core.output.verbosity import Verbosity

__all__ = [
    "OutputStrategy",
    "Verbosity",
]
