"""pycippath - encode, parse and decode Common Industrial Protocol (CIP) paths."""

from .builder import BytesProducer, build_path, render_segment, sized_path
from .cip import KNOWN_CLASSES, decode_path, describe_segment, format_path
from .errors import PathError, PathInputError, PathParseError, PathRangeError
from .parser import parse_path
from .segments import (
    DataKind,
    DataSegment,
    EncodingWidth,
    LogicalKind,
    LogicalSegment,
    PortSegment,
    SegmentKind,
    encode_data_segment,
    encode_logical_segment,
    encode_port_segment,
    segment_kind_of,
    select_width,
)

__all__ = [
    "BytesProducer",
    "build_path",
    "render_segment",
    "sized_path",
    "KNOWN_CLASSES",
    "decode_path",
    "describe_segment",
    "format_path",
    "PathError",
    "PathInputError",
    "PathParseError",
    "PathRangeError",
    "parse_path",
    "DataKind",
    "DataSegment",
    "EncodingWidth",
    "LogicalKind",
    "LogicalSegment",
    "PortSegment",
    "SegmentKind",
    "encode_data_segment",
    "encode_logical_segment",
    "encode_port_segment",
    "segment_kind_of",
    "select_width",
]
