"""Command line interface for pycippath."""
from __future__ import annotations

import logging
from typing import Callable

import click
from rich import box
from rich.console import Console
from rich.table import Table

from .cip import decode_path, describe_segment
from .errors import PathError
from .logging_config import configure_logging
from .parser import parse_path
from .segments import (
    DataKind,
    LogicalKind,
    encode_data_segment,
    encode_logical_segment,
    encode_port_segment,
)

console = Console()
_LOGGER = logging.getLogger(__name__)

_LOGICAL_KINDS = {kind.name.lower(): kind for kind in LogicalKind}


def _hex(data: bytes) -> str:
    return data.hex(" ").upper()


def _run(operation: Callable[[], bytes]) -> None:
    try:
        result = operation()
    except PathError as exc:
        _LOGGER.debug("Path operation failed", exc_info=True)
        raise click.ClickException(str(exc)) from exc
    click.echo(_hex(result))


@click.group()
@click.option("--verbose", is_flag=True, help="Enable verbose logging output.")
def cli(verbose: bool) -> None:
    """Encode, parse and decode CIP paths."""

    configure_logging(verbose=verbose)


@cli.command()
@click.argument("text")
def parse(text: str) -> None:
    """Convert a path string such as 1,0,2,172.25.58.11,1,1 to bytes."""

    _run(lambda: parse_path(text))


@cli.command()
@click.argument("kind", type=click.Choice(sorted(_LOGICAL_KINDS)))
@click.argument("value", type=int)
@click.option("--padded", is_flag=True, help="Word-align the 16-bit form.")
def logical(kind: str, value: int, padded: bool) -> None:
    """Encode a logical segment such as a class or instance ID."""

    _run(lambda: encode_logical_segment(_LOGICAL_KINDS[kind], value, padded))


@cli.command()
@click.argument("port_id", metavar="PORT", type=int)
@click.argument("link")
@click.option("--padded", is_flag=True, help="Pad the segment to an even length.")
def port(port_id: int, link: str, padded: bool) -> None:
    """Encode a port segment; numeric links are one byte, others ASCII text."""

    link_address = int(link) if link.isdigit() else link
    _run(lambda: encode_port_segment(link_address, port_id, padded))


@cli.command()
@click.argument("payload")
@click.option("--ansi", is_flag=True, help="Treat PAYLOAD as an ANSI symbol name.")
@click.option("--padded", is_flag=True, help="Pad the segment to an even length.")
def data(payload: str, ansi: bool, padded: bool) -> None:
    """Encode a data segment; PAYLOAD is hex unless --ansi is given."""

    if ansi:
        if not payload.isascii():
            raise click.BadParameter("Symbol names must be ASCII.", param_hint="PAYLOAD")
        kind = DataKind.ANSI_EXTENDED_SYMBOL
        body = payload.encode("ascii")
    else:
        kind = DataKind.SIMPLE
        try:
            body = bytes.fromhex(payload)
        except ValueError as exc:
            raise click.BadParameter(str(exc), param_hint="PAYLOAD") from exc
    _run(lambda: encode_data_segment(kind, body, padded))


@cli.command()
@click.argument("payload")
@click.option("--padded", is_flag=True, help="Segments were encoded with padding.")
def decode(payload: str, padded: bool) -> None:
    """Decode hex path bytes and list their segments."""

    try:
        raw = bytes.fromhex(payload)
    except ValueError as exc:
        raise click.BadParameter(str(exc), param_hint="PAYLOAD") from exc
    try:
        segments = decode_path(raw, padded=padded)
    except PathError as exc:
        raise click.ClickException(str(exc)) from exc

    table = Table(title="CIP path", box=box.SIMPLE_HEAVY)
    table.add_column("#", justify="right")
    table.add_column("Segment")
    table.add_column("Bytes")
    for index, segment in enumerate(segments):
        table.add_row(str(index), describe_segment(segment), _hex(bytes(segment)))
    console.print(table)


if __name__ == "__main__":  # pragma: no cover
    cli()
