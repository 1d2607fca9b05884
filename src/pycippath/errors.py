"""Exceptions raised by the path codec."""
from __future__ import annotations


class PathError(ValueError):
    """Base class for invalid path input."""


class PathParseError(PathError):
    """Raised when a path token is not a decimal integer."""


class PathRangeError(PathError):
    """Raised when a value or payload length does not fit its encoded field."""


class PathInputError(PathError):
    """Raised when path input is structurally invalid."""


__all__ = ["PathError", "PathParseError", "PathRangeError", "PathInputError"]
