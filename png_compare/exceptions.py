"""Custom exception types for comparison and aggregation."""

from __future__ import annotations


class PngCompareError(RuntimeError):
    """Base class for comparison and aggregation failures."""


class UsageError(PngCompareError):
    """Raised when a command line cannot be parsed (wrong argument count, bad values)."""


class OutputDirectoryCreateError(PngCompareError):
    """Raised when the top-level output directory cannot be created."""


class ImageLoadError(PngCompareError):
    """Raised when an input image cannot be decoded into 8-bit channels."""


class InvalidChannelCountError(PngCompareError):
    """Raised when a single-channel computation receives multi-channel input."""


class DimensionMismatchError(PngCompareError):
    """Raised when two images being compared differ in width or height."""


class ChannelCountMismatchError(PngCompareError):
    """Raised when two images being compared differ in channel count."""


class MissingResultFileError(PngCompareError):
    """Raised when a result directory has no readable info.txt."""


class MalformedResultFileError(PngCompareError):
    """Raised when info.txt cannot be tokenized into two names and a score."""


class InvalidFilterOptionError(PngCompareError):
    """Raised for an unknown score-filter direction."""


class InvalidDirectoryError(PngCompareError):
    """Raised when the aggregation input is not a directory."""


class DestinationCreateError(PngCompareError):
    """Raised when an aggregation destination directory cannot be created."""


class CopyFailedError(PngCompareError):
    """Raised when a selected result file cannot be copied to its destination."""
