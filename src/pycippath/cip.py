"""Decode encoded CIP paths back into segments and describe them."""
from __future__ import annotations

import logging
from typing import Dict, List, Tuple, Union

from .errors import PathInputError
from .segments import (
    EXTENDED_LINK_FLAG,
    EXTENDED_PORT,
    PORT_STRUCT,
    WIDTH_STRUCTS,
    DataKind,
    DataSegment,
    EncodingWidth,
    LogicalKind,
    LogicalSegment,
    PortSegment,
    SegmentKind,
    segment_kind_of,
)

_LOGGER = logging.getLogger(__name__)

__all__ = [
    "KNOWN_CLASSES",
    "Segment",
    "decode_path",
    "describe_segment",
    "format_path",
]

Segment = Union[PortSegment, LogicalSegment, DataSegment]


# Frequently encountered object class identifiers, used for labels only.
KNOWN_CLASSES: Dict[int, str] = {
    0x01: "Identity",
    0x02: "Message Router",
    0x04: "Assembly",
    0x06: "Connection Manager",
    0x6B: "Symbol",
    0x6C: "Template",
}

_LOGICAL_LABELS: Dict[LogicalKind, str] = {
    LogicalKind.CLASS_ID: "class",
    LogicalKind.INSTANCE_ID: "instance",
    LogicalKind.MEMBER_ID: "member",
    LogicalKind.CONNECTION_POINT: "connection_point",
    LogicalKind.ATTRIBUTE_ID: "attribute",
    LogicalKind.SPECIAL: "special",
    LogicalKind.SERVICE_ID: "service",
}

def _take(data: memoryview, index: int, count: int, what: str) -> Tuple[bytes, int]:
    end = index + count
    if end > len(data):
        raise PathInputError(f"Path truncated while reading {what} at offset {index}.")
    return bytes(data[index:end]), end


def _skip_pad(data: memoryview, start: int, index: int, padded: bool) -> int:
    if padded and (index - start) % 2:
        _, index = _take(data, index, 1, "pad byte")
    return index


def _decode_port(data: memoryview, start: int, padded: bool) -> Tuple[PortSegment, int]:
    tag = data[start]
    index = start + 1
    link_size = 1
    if tag & EXTENDED_LINK_FLAG:
        raw, index = _take(data, index, 1, "link address size")
        link_size = raw[0]
    port = tag & EXTENDED_PORT
    if port == EXTENDED_PORT:
        raw, index = _take(data, index, PORT_STRUCT.size, "extended port")
        (port,) = PORT_STRUCT.unpack(raw)
    link, index = _take(data, index, link_size, "link address")
    index = _skip_pad(data, start, index, padded)
    return PortSegment(port=port, link=link, padded=padded), index


def _decode_logical(
    data: memoryview, start: int, padded: bool
) -> Tuple[LogicalSegment, int]:
    tag = data[start]
    index = start + 1
    try:
        kind = LogicalKind(tag & 0b000_111_00)
        width = EncodingWidth(tag & 0b000_000_11)
    except ValueError as exc:
        raise PathInputError(
            f"Reserved logical segment 0x{tag:02X} at offset {start}."
        ) from exc
    if padded and width is EncodingWidth.BITS_16:
        _, index = _take(data, index, 1, "pad byte")
    value_struct = WIDTH_STRUCTS[width]
    raw, index = _take(data, index, value_struct.size, "logical value")
    (value,) = value_struct.unpack(raw)
    return LogicalSegment(kind=kind, value=value, padded=padded), index


def _decode_data(data: memoryview, start: int, padded: bool) -> Tuple[DataSegment, int]:
    tag = data[start]
    try:
        kind = DataKind(tag & 0b000_11111)
    except ValueError as exc:
        raise PathInputError(
            f"Unsupported data segment 0x{tag:02X} at offset {start}."
        ) from exc
    raw, index = _take(data, start + 1, 1, "data length")
    payload, index = _take(data, index, raw[0], "data payload")
    index = _skip_pad(data, start, index, padded)
    return DataSegment(kind=kind, payload=payload, padded=padded), index


_DECODERS = {
    SegmentKind.PORT: _decode_port,
    SegmentKind.LOGICAL: _decode_logical,
    SegmentKind.DATA: _decode_data,
}


def decode_path(path: bytes, padded: bool = False) -> List[Segment]:
    """Decode raw path bytes into port, logical and data segments.

    ``padded`` must match the flag the segments were encoded with.
    """

    data = memoryview(bytes(path))
    result: List[Segment] = []
    index = 0
    while index < len(data):
        kind = segment_kind_of(data[index])
        decoder = _DECODERS.get(kind)
        if decoder is None:
            raise PathInputError(
                f"Unsupported {kind.name.lower()} segment 0x{data[index]:02X} at offset {index}."
            )
        segment, index = decoder(data, index, padded)
        _LOGGER.debug("Decoded %r", segment)
        result.append(segment)
    return result


def _describe_link(link: bytes) -> str:
    if len(link) == 1:
        return str(link[0])
    if all(0x20 <= item < 0x7F for item in link):
        return link.decode("ascii")
    return link.hex(" ").upper()


def describe_segment(segment: Segment) -> str:
    """Return a short human readable description of one segment."""

    if isinstance(segment, PortSegment):
        return f"port {segment.port} link {_describe_link(segment.link)}"
    if isinstance(segment, LogicalSegment):
        name = _LOGICAL_LABELS[segment.kind]
        label = KNOWN_CLASSES.get(segment.value) if segment.kind is LogicalKind.CLASS_ID else None
        if label:
            return f"{name} 0x{segment.value:02X} ({label})"
        return f"{name} 0x{segment.value:02X}"
    if segment.kind == DataKind.ANSI_EXTENDED_SYMBOL:
        return f"symbolic({segment.payload.decode('ascii', errors='replace')})"
    return f"data({segment.payload.hex(' ').upper()})"


def format_path(path: bytes, padded: bool = False) -> str:
    """Return a human readable description of a CIP path."""

    return ", ".join(describe_segment(segment) for segment in decode_path(path, padded))
