#
# AXI-Lite APB Bridge - Simulation Models
#
# Copyright (c) 2026 Shareef Jalloq
# SPDX-License-Identifier: BSD-2-Clause
#

from .driver import ControlBusDriver, Transaction
from .peripheral import RegisterFilePeripheral, APBAccess, merge_strobes
from .monitor import APBProtocolMonitor
from .harness import (
    ClockProfile,
    CLOCK_PROFILES,
    get_clock_profile,
    run_bridge_simulation,
    BridgeBench,
)

__all__ = [
    "ControlBusDriver",
    "Transaction",
    "RegisterFilePeripheral",
    "APBAccess",
    "merge_strobes",
    "APBProtocolMonitor",
    "ClockProfile",
    "CLOCK_PROFILES",
    "get_clock_profile",
    "run_bridge_simulation",
    "BridgeBench",
]
