"""Exceptions raised by id3py."""


class Id3Error(Exception):
    """Base class for every error raised by id3py."""


class InputUnavailableError(Id3Error, OSError):
    """Raised when the source data cannot be read."""


class SchemaViolationError(Id3Error, ValueError):
    """Raised when the input table is not a valid, row-aligned dataset."""


class EmptyDistributionError(Id3Error, ValueError):
    """Raised when entropy is requested over a distribution with no counts."""


class NotFittedError(Id3Error, ValueError):
    """Raised if the estimator is used before fitting."""
