"""Parse human-entered path strings such as ``1,0,2,172.25.58.11,1,1``."""
from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import List, Union

from .errors import PathInputError, PathParseError, PathRangeError
from .segments import EXTENDED_LINK_FLAG

_LOGGER = logging.getLogger(__name__)

_NUMBER = re.compile(r"[+-]?[0-9]+")

__all__ = ["parse_path"]


@dataclass(slots=True)
class _PathByte:
    """A single numeric path byte; the link flag is applied on render."""

    value: int
    extended_link: bool = False

    def render(self) -> bytes:
        return bytes((self.value | (EXTENDED_LINK_FLAG if self.extended_link else 0),))


@dataclass(slots=True)
class _LinkLiteral:
    """An IP address written as a length byte followed by its ASCII text."""

    address: bytes
    extended_link: bool = False

    def render(self) -> bytes:
        text = bytearray(self.address)
        if self.extended_link:
            text[-1] |= EXTENDED_LINK_FLAG
        return bytes((len(self.address),)) + bytes(text)


def parse_path(path: str) -> bytes:
    """Convert a comma separated path description to raw path bytes.

    Numeric tokens become single bytes. A token containing a dot is an IP
    address link: the preceding byte gets the extended link flag and the
    address follows as a length byte plus its ASCII characters. Brackets and
    whitespace are ignored. The result is never padded.
    """

    text = "".join(path.split()).replace("[", "").replace("]", "")
    pending: List[Union[_PathByte, _LinkLiteral]] = []

    for token in text.split(","):
        if "." in token:
            pending.append(_parse_link(token, pending))
            continue
        pending.append(_PathByte(_parse_byte(token)))

    return b"".join(item.render() for item in pending)


def _parse_byte(token: str) -> int:
    if not _NUMBER.fullmatch(token):
        raise PathParseError(f"Path element '{token}' is not a decimal number.")
    value = int(token)
    if not 0 <= value <= 0xFF:
        raise PathRangeError(f"Path element {value} is outside 0-255.")
    return value


def _parse_link(token: str, pending: List[Union[_PathByte, _LinkLiteral]]) -> _LinkLiteral:
    if not pending:
        raise PathInputError(
            f"IP address '{token}' must follow a port number in the path."
        )
    try:
        address = token.encode("ascii")
    except UnicodeEncodeError as exc:
        raise PathParseError(f"IP address '{token}' is not ASCII.") from exc
    if len(address) > 0xFF:
        raise PathRangeError(
            f"IP address of {len(address)} characters exceeds the 255 byte limit."
        )
    _LOGGER.debug("Extended link address %s", token)
    pending[-1].extended_link = True
    return _LinkLiteral(address)
