"""Compose segments into a single path."""
from __future__ import annotations

from typing import Protocol, Union, runtime_checkable

from .errors import PathInputError, PathRangeError

__all__ = ["BytesProducer", "render_segment", "build_path", "sized_path"]


@runtime_checkable
class BytesProducer(Protocol):
    """Anything that can render itself as a complete path segment."""

    def __bytes__(self) -> bytes:  # pragma: no cover - interface
        """Return the encoded segment."""


Producer = Union[BytesProducer, bytes, bytearray, memoryview]


def render_segment(producer: Producer) -> bytes:
    """Return the bytes of a single producer."""

    if isinstance(producer, (bytes, bytearray, memoryview)):
        return bytes(producer)
    if isinstance(producer, BytesProducer):
        return bytes(producer)
    raise TypeError(
        f"{type(producer).__name__} object cannot be rendered as a path segment."
    )


def build_path(*producers: Producer) -> bytes:
    """Concatenate the rendered producers in order.

    No check is made that the segments form a meaningful address. Errors
    raised while rendering a producer propagate to the caller.
    """

    path = bytearray()
    for producer in producers:
        path += render_segment(producer)
    return bytes(path)


def sized_path(*producers: Producer) -> bytes:
    """Build a path prefixed with its size in 16-bit words."""

    path = build_path(*producers)
    if len(path) % 2:
        raise PathInputError(
            f"Path of {len(path)} bytes is not a whole number of 16-bit words."
        )
    words = len(path) // 2
    if words > 0xFF:
        raise PathRangeError(f"Path of {words} words exceeds the 255 word limit.")
    return bytes((words,)) + path
