#
# Command Line Tool Tests
#
# Copyright (c) 2026 Shareef Jalloq
# SPDX-License-Identifier: BSD-2-Clause
#

from click.testing import CliRunner

from axil_apb_bridge.axil_apb_bridge import cli


def test_help():
    result = CliRunner().invoke(cli, ["--help"])
    assert result.exit_code == 0
    assert "verilog" in result.output
    assert "simulate" in result.output


def test_verilog_to_file(tmp_path):
    output = tmp_path / "bridge.v"
    result = CliRunner().invoke(cli, ["verilog", "--name", "my_bridge", "-o", str(output)])
    assert result.exit_code == 0, result.output
    text = output.read_text()
    assert "module my_bridge" in text
    assert "fast_clk" in text
    assert "slow_clk" in text


def test_verilog_to_stdout():
    result = CliRunner().invoke(cli, ["verilog", "--depth", "2", "--targets", "2"])
    assert result.exit_code == 0, result.output
    assert "module axil_apb_bridge" in result.output


def test_verilog_rejects_bad_depth():
    result = CliRunner().invoke(cli, ["verilog", "--depth", "3"])
    assert result.exit_code != 0
    assert "power of two" in result.output


def test_simulate_round_trip():
    result = CliRunner().invoke(cli, ["simulate", "--count", "2", "--profile", "ratio4"])
    assert result.exit_code == 0, result.output
    assert "Bridge transactions" in result.output
    assert "OKAY" in result.output
    assert "4 APB transfers" in result.output


def test_simulate_error_address(tmp_path):
    vcd = tmp_path / "sim.vcd"
    result = CliRunner().invoke(cli, [
        "simulate", "--count", "1", "--base", "256",
        "--error-address", "0x100", "--vcd", str(vcd),
    ])
    assert result.exit_code == 0, result.output
    assert "SLVERR" in result.output
    assert vcd.exists()


def test_simulate_rejects_bad_config():
    result = CliRunner().invoke(cli, ["simulate", "--data-width", "12"])
    assert result.exit_code != 0
    assert "Data width" in result.output
