"""Command line interface for envmatrix."""

from envmatrix import __version__

__all__ = ["__version__"]
