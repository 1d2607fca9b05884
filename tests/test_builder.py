from __future__ import annotations

import pytest

from pycippath.builder import BytesProducer, build_path, render_segment, sized_path
from pycippath.errors import PathInputError, PathRangeError
from pycippath.segments import (
    DataSegment,
    LogicalKind,
    LogicalSegment,
    PortSegment,
)


class _NamedObject:
    """Stand-in for a well-known object constant defined outside the codec."""

    def __init__(self, encoded: bytes) -> None:
        self._encoded = encoded

    def __bytes__(self) -> bytes:
        return self._encoded


CONNECTION_MANAGER = _NamedObject(b"\x20\x06")


def instance(value: int) -> LogicalSegment:
    return LogicalSegment(LogicalKind.INSTANCE_ID, value)


def test_named_objects_satisfy_the_producer_protocol() -> None:
    assert isinstance(CONNECTION_MANAGER, BytesProducer)
    assert isinstance(instance(1), BytesProducer)


def test_build_connection_manager_path() -> None:
    assert build_path(CONNECTION_MANAGER) == bytes([0x20, 0x06])
    assert build_path(CONNECTION_MANAGER, instance(1)) == bytes([0x20, 0x06, 0x24, 0x01])


def test_build_path_mixes_segment_types_in_order() -> None:
    path = build_path(PortSegment(1, 0), b"\x20\x02", instance(1), DataSegment.symbol("Tag"))
    assert path == b"\x01\x00\x20\x02\x24\x01\x91\x03Tag\x00"
    assert build_path() == b""


def test_build_path_is_associative() -> None:
    a, b, c = PortSegment(2, "10.0.0.1"), CONNECTION_MANAGER, instance(300)
    assert build_path(a, b, c) == build_path(a, b) + build_path(c)
    assert build_path(a, b, c) == build_path(build_path(a, b), c)
    assert build_path(a, b, c) == build_path(a, build_path(b, c))


def test_build_path_propagates_producer_errors() -> None:
    class _Broken:
        def __bytes__(self) -> bytes:
            raise RuntimeError("cannot render")

    with pytest.raises(RuntimeError, match="cannot render"):
        build_path(CONNECTION_MANAGER, _Broken())

    with pytest.raises(PathRangeError):
        build_path(DataSegment.symbol("x" * 300))


def test_render_segment_rejects_non_producers() -> None:
    with pytest.raises(TypeError):
        render_segment(5)  # type: ignore[arg-type]
    assert render_segment(bytearray(b"\x24\x01")) == b"\x24\x01"


def test_sized_path_prefixes_word_count() -> None:
    assert sized_path(CONNECTION_MANAGER, instance(1)) == bytes([0x02, 0x20, 0x06, 0x24, 0x01])
    with pytest.raises(PathInputError):
        sized_path(b"\x01\x00\x02")
    with pytest.raises(PathRangeError):
        sized_path(bytes(512))
