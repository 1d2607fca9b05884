"""CIP path segment taxonomy and structured segment encoders.

Every segment starts with a single tag byte. The top three bits carry the
segment kind; the remaining bits depend on the kind:

* port segments:    ``000x pppp`` - extended link flag, port (0x0F = extended)
* logical segments: ``001k kkff`` - logical kind, value format (8/16/32 bit)
* data segments:    ``100d 000d`` - data sub-kind (simple or ANSI symbol)
"""
from __future__ import annotations

import struct
from dataclasses import dataclass
from enum import IntEnum
from typing import Dict, Union

from .errors import PathInputError, PathRangeError

__all__ = [
    "SegmentKind",
    "LogicalKind",
    "DataKind",
    "EncodingWidth",
    "EXTENDED_LINK_FLAG",
    "EXTENDED_PORT",
    "segment_kind_of",
    "select_width",
    "encode_data_segment",
    "encode_logical_segment",
    "encode_port_segment",
    "DataSegment",
    "LogicalSegment",
    "PortSegment",
]


class SegmentKind(IntEnum):
    """Segment type bits of a tag byte, plus well-known complete tag values."""

    PORT = 0b000_00000
    LOGICAL = 0b001_00000
    NETWORK = 0b010_00000
    SYMBOLIC = 0b011_00000
    DATA = 0b100_00000
    DATA_TYPE_1 = 0b101_00000
    DATA_TYPE_2 = 0b110_00000

    ELEMENT_8BIT = 0x28
    ELEMENT_16BIT = 0x29
    ELEMENT_32BIT = 0x2A
    CLASS_ID_8BIT = 0x20
    CLASS_ID_16BIT = 0x21
    INSTANCE_ID_8BIT = 0x24
    INSTANCE_ID_16BIT = 0x25
    ATTRIBUTE_ID_8BIT = 0x30
    ATTRIBUTE_ID_16BIT = 0x31
    EXTENDED_SYMBOLIC = 0x91


class LogicalKind(IntEnum):
    """Logical segment type, bits 2-4 of the tag byte."""

    CLASS_ID = 0 << 2
    INSTANCE_ID = 1 << 2
    MEMBER_ID = 2 << 2
    CONNECTION_POINT = 3 << 2
    ATTRIBUTE_ID = 4 << 2
    SPECIAL = 5 << 2
    SERVICE_ID = 6 << 2


class DataKind(IntEnum):
    """Data segment sub-type, bits 0 and 4 of the tag byte."""

    SIMPLE = 0b0000_0000
    ANSI_EXTENDED_SYMBOL = 0b0001_0001


class EncodingWidth(IntEnum):
    """Logical value width; the member value is the tag's format code."""

    BITS_8 = 0
    BITS_16 = 1
    BITS_32 = 2

    @property
    def size(self) -> int:
        """Number of value bytes emitted for this width."""

        return _WIDTH_SIZES[self]


_WIDTH_SIZES: Dict[EncodingWidth, int] = {
    EncodingWidth.BITS_8: 1,
    EncodingWidth.BITS_16: 2,
    EncodingWidth.BITS_32: 4,
}

WIDTH_STRUCTS: Dict[EncodingWidth, struct.Struct] = {
    EncodingWidth.BITS_8: struct.Struct("<B"),
    EncodingWidth.BITS_16: struct.Struct("<H"),
    EncodingWidth.BITS_32: struct.Struct("<I"),
}

_SEGMENT_KIND_MASK = 0b111_00000
PORT_STRUCT = struct.Struct("<H")

#: Port tag bit marking a multi-byte link address preceded by its length.
EXTENDED_LINK_FLAG = 0b000_1_0000
#: Port identifier nibble meaning "port follows as a 16-bit value".
EXTENDED_PORT = 0x0F

LinkAddress = Union[bytes, bytearray, str, int]


def segment_kind_of(tag: int) -> SegmentKind:
    """Return the segment kind encoded in the top three bits of ``tag``."""

    return _coerce(SegmentKind, tag & _SEGMENT_KIND_MASK, "segment kind")


def select_width(value: int) -> EncodingWidth:
    """Pick the narrowest width able to hold the unsigned ``value``."""

    if value < 0:
        raise PathRangeError(f"Segment value {value} cannot be negative.")
    if value <= 0xFF:
        return EncodingWidth.BITS_8
    if value <= 0xFFFF:
        return EncodingWidth.BITS_16
    if value <= 0xFFFF_FFFF:
        return EncodingWidth.BITS_32
    raise PathRangeError(f"Segment value {value} does not fit in 32 bits.")


def encode_data_segment(
    kind: Union[DataKind, int], payload: bytes, padded: bool = False
) -> bytes:
    """Encode a data segment: tag, length byte, payload, optional pad byte."""

    data_kind = _coerce(DataKind, kind, "data segment kind")
    body = bytes(payload)
    if len(body) > 0xFF:
        raise PathRangeError(
            f"Data segment payload of {len(body)} bytes exceeds the 255 byte limit."
        )
    segment = bytearray((SegmentKind.DATA | data_kind, len(body)))
    segment += body
    if padded and len(segment) % 2:
        segment.append(0)
    return bytes(segment)


def encode_logical_segment(
    kind: Union[LogicalKind, int], value: int, padded: bool = False
) -> bytes:
    """Encode a logical segment using the narrowest width for ``value``.

    Only the 16-bit form is ever padded, and its pad byte sits between the
    tag and the value rather than at the end of the segment.
    """

    logical_kind = _coerce(LogicalKind, kind, "logical segment kind")
    width = select_width(value)
    segment = bytearray((SegmentKind.LOGICAL | logical_kind | width,))
    if padded and width is EncodingWidth.BITS_16:
        segment.append(0)
    segment += WIDTH_STRUCTS[width].pack(value)
    return bytes(segment)


def encode_port_segment(link: LinkAddress, port: int, padded: bool = False) -> bytes:
    """Encode a port segment.

    ``link`` is written verbatim. A ``str`` link (typically a dotted IP
    address) is written as its ASCII text and an ``int`` link as one byte.
    """

    link_bytes = _coerce_link(link)
    if not 0 <= port <= 0xFFFF:
        raise PathRangeError(f"Port {port} is outside 0-65535.")
    extended_link = len(link_bytes) > 1
    extended_port = port >= EXTENDED_PORT

    tag = SegmentKind.PORT | (EXTENDED_PORT if extended_port else port)
    if extended_link:
        tag |= EXTENDED_LINK_FLAG
    segment = bytearray((tag,))
    if extended_link:
        segment.append(len(link_bytes))
    if extended_port:
        segment += PORT_STRUCT.pack(port)
    segment += link_bytes
    if padded and len(segment) % 2:
        segment.append(0)
    return bytes(segment)


def _coerce(enum_type, value, label: str):
    try:
        return enum_type(value)
    except ValueError as exc:
        raise PathInputError(f"Unknown {label} {value!r}.") from exc


def _coerce_link(link: LinkAddress) -> bytes:
    if isinstance(link, int):
        if not 0 <= link <= 0xFF:
            raise PathRangeError(f"Link address {link} is outside 0-255.")
        return bytes((link,))
    if isinstance(link, str):
        try:
            data = link.encode("ascii")
        except UnicodeEncodeError as exc:
            raise PathInputError(f"Link address '{link}' is not ASCII.") from exc
    else:
        data = bytes(link)
    if len(data) > 0xFF:
        raise PathRangeError(
            f"Link address of {len(data)} bytes exceeds the 255 byte limit."
        )
    return data


@dataclass(frozen=True, slots=True)
class DataSegment:
    """A data segment carrying a raw payload or an ANSI symbol."""

    kind: DataKind
    payload: bytes
    padded: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(self, "kind", _coerce(DataKind, self.kind, "data segment kind"))
        object.__setattr__(self, "payload", bytes(self.payload))

    @classmethod
    def symbol(cls, name: str, padded: bool = True) -> "DataSegment":
        """Build an ANSI extended symbol segment for a tag name."""

        try:
            payload = name.encode("ascii")
        except UnicodeEncodeError as exc:
            raise PathInputError(f"Symbol '{name}' is not ASCII.") from exc
        return cls(DataKind.ANSI_EXTENDED_SYMBOL, payload, padded)

    def __bytes__(self) -> bytes:
        return encode_data_segment(self.kind, self.payload, self.padded)


@dataclass(frozen=True, slots=True)
class LogicalSegment:
    """A class, instance, attribute or other logical address."""

    kind: LogicalKind
    value: int
    padded: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(self, "kind", _coerce(LogicalKind, self.kind, "logical segment kind"))

    @property
    def width(self) -> EncodingWidth:
        return select_width(self.value)

    def __bytes__(self) -> bytes:
        return encode_logical_segment(self.kind, self.value, self.padded)


@dataclass(frozen=True, slots=True)
class PortSegment:
    """A hop through a device port to a link address."""

    port: int
    link: bytes
    padded: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(self, "link", _coerce_link(self.link))

    def __bytes__(self) -> bytes:
        return encode_port_segment(self.link, self.port, self.padded)
