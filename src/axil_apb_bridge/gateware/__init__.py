#
# AXI-Lite APB Bridge - Gateware Package
#
# Copyright (c) 2026 Shareef Jalloq
# SPDX-License-Identifier: BSD-2-Clause
#
# migen/LiteX implementation of the bridge.
#

from .interfaces import ControlBusInterface, APBInterface
from .cdc import TwoStageSynchronizer, AsyncQueue
from .frontend import FrontEnd
from .arbiter import CommandArbiter
from .backend import BackEnd
from .bridge import AXILiteAPBBridge

__all__ = [
    "ControlBusInterface",
    "APBInterface",
    "TwoStageSynchronizer",
    "AsyncQueue",
    "FrontEnd",
    "CommandArbiter",
    "BackEnd",
    "AXILiteAPBBridge",
]
