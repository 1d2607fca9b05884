"""CLI integration tests for the path tools."""

from __future__ import annotations

from click.testing import CliRunner

from pycippath.cli import cli


def test_parse_prints_hex() -> None:
    runner = CliRunner()
    result = runner.invoke(cli, ["parse", "1,0,2,172.25.58.11,1,1"])

    assert result.exit_code == 0
    assert result.output.strip() == (
        "01 00 12 0C 31 37 32 2E 32 35 2E 35 38 2E 31 31 01 01"
    )


def test_parse_reports_invalid_paths() -> None:
    runner = CliRunner()
    result = runner.invoke(cli, ["parse", "1,256"])

    assert result.exit_code == 1
    assert "outside 0-255" in result.output


def test_encode_commands() -> None:
    runner = CliRunner()

    logical = runner.invoke(cli, ["logical", "instance_id", "300", "--padded"])
    assert logical.exit_code == 0
    assert logical.output.strip() == "25 00 2C 01"

    port = runner.invoke(cli, ["port", "2", "10.0.0.10", "--padded"])
    assert port.exit_code == 0
    assert port.output.strip() == "12 09 31 30 2E 30 2E 30 2E 31 30 00"

    backplane = runner.invoke(cli, ["port", "1", "0"])
    assert backplane.output.strip() == "01 00"

    data = runner.invoke(cli, ["data", "0102"])
    assert data.output.strip() == "80 02 01 02"

    symbol = runner.invoke(cli, ["data", "Tag", "--ansi", "--padded"])
    assert symbol.output.strip() == "91 03 54 61 67 00"


def test_data_rejects_bad_hex() -> None:
    runner = CliRunner()
    result = runner.invoke(cli, ["data", "zz"])

    assert result.exit_code == 2


def test_decode_renders_segment_table() -> None:
    runner = CliRunner()
    result = runner.invoke(cli, ["decode", "20 06 24 01"])

    assert result.exit_code == 0
    assert "Connection Manager" in result.output
    assert "instance 0x01" in result.output
    assert "24 01" in result.output


def test_decode_reports_truncated_paths() -> None:
    runner = CliRunner()
    result = runner.invoke(cli, ["decode", "25 2C"])

    assert result.exit_code == 1
    assert "truncated" in result.output
