#
# AXI-Lite APB Bridge - Simulation Harness
#
# Copyright (c) 2026 Shareef Jalloq
# SPDX-License-Identifier: BSD-2-Clause
#
# Two-clock run_simulation wrapper and a ready-made bench that surrounds the
# bridge with the driver, peripheral and monitor models.
#

import logging
from dataclasses import dataclass

from migen import run_simulation

from axil_apb_bridge.common import BridgeConfig, ConfigurationError
from axil_apb_bridge.gateware import AXILiteAPBBridge

from .driver import ControlBusDriver
from .monitor import APBProtocolMonitor
from .peripheral import RegisterFilePeripheral

logger = logging.getLogger(__name__)


# =============================================================================
# Clock Profiles
# =============================================================================

@dataclass(frozen=True)
class ClockProfile:
    """Named fast/slow clock periods (simulator time units, even)."""
    name:        str
    fast_period: int
    slow_period: int
    slow_phase:  int = 0
    description: str = ""


CLOCK_PROFILES = {
    "equal": ClockProfile("equal", 10, 10, 0,
        "Same frequency, aligned edges"),
    "offset": ClockProfile("offset", 10, 10, 2,
        "Same frequency, slow clock lagging"),
    "ratio2": ClockProfile("ratio2", 10, 20, 4,
        "Peripheral clock at half the bus clock"),
    "ratio4": ClockProfile("ratio4", 10, 40, 6,
        "Peripheral clock at a quarter of the bus clock"),
    "uneven": ClockProfile("uneven", 10, 26, 8,
        "Non-integer ratio, peripheral slower"),
    "inverted": ClockProfile("inverted", 24, 10, 2,
        "Peripheral clock faster than the bus clock"),
}


def get_clock_profile(name):
    if name not in CLOCK_PROFILES:
        raise ConfigurationError(
            f"Unknown clock profile: {name}. "
            f"Available: {', '.join(CLOCK_PROFILES.keys())}"
        )
    return CLOCK_PROFILES[name]


# =============================================================================
# Simulation
# =============================================================================

def run_bridge_simulation(bridge, fast=(), slow=(), fast_period=10, slow_period=20,
    slow_phase=0, vcd_name=None):
    """
    Run generators against a bridge in its two clock domains.

    The simulation ends once every non-passive generator has returned.
    """
    generators = {
        bridge.cd_fast: list(fast),
        bridge.cd_slow: list(slow),
    }
    clocks = {
        bridge.cd_fast: fast_period,
        bridge.cd_slow: (slow_period, slow_phase),
    }
    logger.debug("Simulating with fast=%d slow=%d (phase %d)", fast_period, slow_period, slow_phase)
    run_simulation(bridge, generators, clocks=clocks, vcd_name=vcd_name)


class BridgeBench:
    """
    Bridge plus the standard simulation models.

    Parameters
    ----------
    config : BridgeConfig, optional
        Bridge parameters. Default BridgeConfig().

    profile : ClockProfile or str
        Clock periods. Default "ratio2".

    wait_states / error_addresses
        Passed to the RegisterFilePeripheral.

    timeout, rng, backpressure
        Passed to the ControlBusDriver.
    """

    def __init__(self, config=None, profile="ratio2", wait_states=0, error_addresses=(),
        timeout=1000, rng=None, backpressure=0.0):
        if isinstance(profile, str):
            profile = get_clock_profile(profile)

        self.config  = config or BridgeConfig()
        self.profile = profile
        self.bridge  = AXILiteAPBBridge(self.config)

        self.driver     = ControlBusDriver(self.bridge.bus, timeout=timeout, rng=rng, backpressure=backpressure)
        self.peripheral = RegisterFilePeripheral(self.bridge.apb, wait_states=wait_states, error_addresses=error_addresses)
        self.monitor    = APBProtocolMonitor(self.bridge.apb)

    def run(self, fast=(), slow=(), vcd_name=None):
        run_bridge_simulation(self.bridge,
            fast        = fast,
            slow        = [self.peripheral.generator(), self.monitor.generator(), *slow],
            fast_period = self.profile.fast_period,
            slow_period = self.profile.slow_period,
            slow_phase  = self.profile.slow_phase,
            vcd_name    = vcd_name,
        )
