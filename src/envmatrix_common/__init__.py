"""Utilities shared between the envmatrix core and its command line."""
