"""Subcommands of the envmatrix CLI."""
