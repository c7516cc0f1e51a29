"""Exceptions raised by the envmatrix core."""


class MatrixError(Exception):
    """Base class for all envmatrix errors."""


class MissingManifestError(MatrixError):
    """A row's manifest file does not exist."""


class UnusableManifestError(MatrixError):
    """A row's manifest does not declare the envmatrix dependency."""


class NoCompatibleRuntimeError(MatrixError):
    """No row in the matrix matched the active Python version."""


class SomeRowsFailedError(MatrixError):
    """At least one compatible row reported failure."""


class MissingMatrixDefinitionError(MatrixError):
    """No CI configuration file defining the matrix could be found."""


class InvalidMatrixDefinitionError(MatrixError):
    """A CI configuration file exists but does not describe usable rows."""


class AliasResolutionError(MatrixError):
    """An alias chain leads back to a name it already passed through."""
