#!/usr/bin/env python3
#
# AXI-Lite APB Bridge - Command Line Tool
#
# Copyright (c) 2026 Shareef Jalloq
# SPDX-License-Identifier: BSD-2-Clause
#

import logging
import random

import rich_click as click
from migen.fhdl.verilog import convert
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from axil_apb_bridge.common import BridgeConfig, BridgeError, Status
from axil_apb_bridge.gateware import AXILiteAPBBridge
from axil_apb_bridge.sim import CLOCK_PROFILES, BridgeBench


# =============================================================================
# Helpers
# =============================================================================

console = Console()


def setup_logging(verbose):
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level    = level,
        format   = "%(message)s",
        datefmt  = "[%X]",
        handlers = [RichHandler(console=console, show_path=False)],
        force    = True,
    )


def config_options(f):
    """Bridge parameters shared by every command."""
    options = [
        click.option("--address-width", default=32, show_default=True, help="Address width in bits"),
        click.option("--data-width", default=32, show_default=True, help="Data width in bits (multiple of 8)"),
        click.option("--depth", "queue_depth", default=4, show_default=True, help="CDC queue depth (power of two >= 2)"),
        click.option("--targets", "num_targets", default=1, show_default=True, help="Number of APB select lines"),
        click.option("--aperture", "target_aperture", default=0x1000, show_default=True, help="Bytes per APB target"),
    ]
    for option in reversed(options):
        f = option(f)
    return f


def parse_addresses(ctx, param, values):
    try:
        return tuple(int(v, 0) for v in values)
    except ValueError as e:
        raise click.BadParameter(str(e))


def make_config(**kwargs):
    try:
        return BridgeConfig(**kwargs)
    except BridgeError as e:
        raise click.ClickException(str(e))


def transaction_table(transactions, title):
    table = Table(
        title=title,
        show_header=True,
        header_style="bold",
        border_style="dim",
    )

    table.add_column("#", style="dim", justify="right")
    table.add_column("Dir", justify="center")
    table.add_column("Address", width=12)
    table.add_column("Data", width=12)
    table.add_column("Status", justify="center")
    table.add_column("Latency", justify="right")

    for i, txn in enumerate(transactions):
        direction = "[yellow]WR[/]" if txn.kind == "write" else "[cyan]RD[/]"
        status    = "[green]OKAY[/]" if txn.status == Status.OK else "[red]SLVERR[/]"
        table.add_row(
            str(i),
            direction,
            f"0x{txn.addr:08X}",
            f"0x{txn.data:08X}",
            status,
            str(txn.latency),
        )
    return table


# =============================================================================
# CLI
# =============================================================================

CONTEXT_SETTINGS = dict(help_option_names=['-h', '--help'])


@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(version="0.1.0")
def cli():
    """AXI-Lite to APB Bridge CLI Tool

    Generate Verilog for the clock domain crossing bridge or exercise it in
    simulation.
    """
    pass


@cli.command(context_settings=CONTEXT_SETTINGS)
@config_options
@click.option("--name", default="axil_apb_bridge", show_default=True, help="Top-level module name")
@click.option("--output", "-o", type=click.Path(dir_okay=False), default=None, help="Output file (default: stdout)")
def verilog(name, output, **kwargs):
    """Write the bridge as Verilog."""
    config = make_config(**kwargs)

    bridge = AXILiteAPBBridge(config)
    conv   = convert(bridge, ios=bridge.get_ios(), name=name)

    if output is None:
        click.echo(str(conv))
    else:
        conv.write(output)
        console.print(f"[bold green]Wrote[/] {name} to {output}")


@cli.command(context_settings=CONTEXT_SETTINGS)
@config_options
@click.option("--profile", "-p", type=click.Choice(list(CLOCK_PROFILES.keys())), default="ratio2", show_default=True, help="Clock profile")
@click.option("--count", "-n", default=4, show_default=True, help="Number of write/read-back pairs")
@click.option("--base", default=0x100, show_default=True, help="First register address")
@click.option("--wait-states", default=0, show_default=True, help="Peripheral wait states")
@click.option("--error-address", "error_addresses", multiple=True, callback=parse_addresses, help="Address answering SLVERR (repeatable)")
@click.option("--seed", default=0, show_default=True, help="Random seed for write data")
@click.option("--vcd", type=click.Path(dir_okay=False), default=None, help="Dump waveforms to a VCD file")
@click.option("--verbose", "-v", is_flag=True, help="Log every transfer")
def simulate(profile, count, base, wait_states, error_addresses, seed, vcd, verbose, **kwargs):
    """Run a write/read-back scenario through the bridge."""
    setup_logging(verbose)
    config = make_config(**kwargs)

    rng    = random.Random(seed)
    bench  = BridgeBench(config, profile=profile, wait_states=wait_states, error_addresses=error_addresses)
    driver = bench.driver
    mask   = (1 << config.data_width) - 1
    stride = config.strobe_width

    mismatches = []

    def scenario():
        for i in range(count):
            addr  = base + i*stride
            value = rng.getrandbits(config.data_width) & mask
            yield from driver.write(addr, value)
            txn = yield from driver.read(addr)
            if txn.status == Status.OK and txn.data != value:
                mismatches.append((addr, value, txn.data))

    try:
        bench.run(fast=[scenario()], vcd_name=vcd)
    except BridgeError as e:
        raise click.ClickException(str(e))

    console.print(transaction_table(driver.transactions, f"Bridge transactions ({bench.profile.name})"))
    console.print(f"{len(bench.monitor.transfers)} APB transfers, {driver.cycle} bus cycles")

    if mismatches:
        for addr, expected, actual in mismatches:
            console.print(f"[red]Mismatch[/] at 0x{addr:08X}: wrote 0x{expected:08X}, read 0x{actual:08X}")
        raise click.ClickException(f"{len(mismatches)} read-back mismatches")

    if vcd:
        console.print(f"Waveforms written to {vcd}")


def main():
    cli()


if __name__ == "__main__":
    main()
