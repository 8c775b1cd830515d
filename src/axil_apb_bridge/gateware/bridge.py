#
# AXI-Lite APB Bridge - Top Level
#
# Copyright (c) 2026 Shareef Jalloq
# SPDX-License-Identifier: BSD-2-Clause
#
# Wires the front end (fast domain) to the back end (slow domain) through
# four clock domain crossing queues and the command arbiter.
#
#   bus --> FrontEnd --> wcmd_queue --+
#                    --> rcmd_queue --+--> CommandArbiter --> BackEnd --> apb
#       <-- FrontEnd <-- wrsp_queue <-----------------------+
#                    <-- rrsp_queue <-----------------------+
#

from migen import *

from litex.gen import *

from axil_apb_bridge.common import BridgeConfig

from .arbiter import CommandArbiter
from .backend import BackEnd
from .cdc import AsyncQueue
from .frontend import FrontEnd
from .interfaces import (
    write_command_description,
    read_command_description,
    response_description,
)


class AXILiteAPBBridge(LiteXModule):
    """
    AXI4-Lite to APB bridge across two asynchronous clock domains.

    Parameters
    ----------
    config : BridgeConfig
        Widths, queue depth and target decode. Default BridgeConfig().

    cd_fast : str
        Control bus clock domain. Default "fast".

    cd_slow : str
        Peripheral bus clock domain. Default "slow".

    Interfaces
    ----------
    bus : ControlBusInterface
        Control-bus slave port (cd_fast).
    apb : APBInterface
        Peripheral-bus master port (cd_slow).
    """

    def __init__(self, config=None, cd_fast="fast", cd_slow="slow"):
        self.config  = config = config or BridgeConfig()
        self.cd_fast = cd_fast
        self.cd_slow = cd_slow

        aw, dw, depth = config.address_width, config.data_width, config.queue_depth

        # =====================================================================
        # Fast Domain
        # =====================================================================

        self.frontend = frontend = ClockDomainsRenamer(cd_fast)(FrontEnd(aw, dw))

        # =====================================================================
        # Clock Domain Crossing
        # =====================================================================

        to_slow = {"write": cd_fast, "read": cd_slow}
        to_fast = {"write": cd_slow, "read": cd_fast}

        self.wcmd_queue = wcmd_queue = ClockDomainsRenamer(to_slow)(
            AsyncQueue(write_command_description(aw, dw), depth))
        self.rcmd_queue = rcmd_queue = ClockDomainsRenamer(to_slow)(
            AsyncQueue(read_command_description(aw), depth))
        self.wrsp_queue = wrsp_queue = ClockDomainsRenamer(to_fast)(
            AsyncQueue(response_description(dw), depth))
        self.rrsp_queue = rrsp_queue = ClockDomainsRenamer(to_fast)(
            AsyncQueue(response_description(dw), depth))

        # =====================================================================
        # Slow Domain
        # =====================================================================

        self.arbiter = arbiter = CommandArbiter(aw, dw)
        self.backend = backend = ClockDomainsRenamer(cd_slow)(BackEnd(
            address_width   = aw,
            data_width      = dw,
            num_targets     = config.num_targets,
            target_aperture = config.target_aperture,
        ))

        # =====================================================================
        # Connections
        # =====================================================================

        self.comb += [
            frontend.wcmd_source.connect(wcmd_queue.sink),
            frontend.rcmd_source.connect(rcmd_queue.sink),

            wcmd_queue.source.connect(arbiter.wcmd_sink),
            rcmd_queue.source.connect(arbiter.rcmd_sink),
            arbiter.source.connect(backend.sink),

            backend.wrsp_source.connect(wrsp_queue.sink),
            backend.rrsp_source.connect(rrsp_queue.sink),

            wrsp_queue.source.connect(frontend.wrsp_sink),
            rrsp_queue.source.connect(frontend.rrsp_sink),
        ]

        self.bus = frontend.bus
        self.apb = backend.bus

    def get_ios(self):
        """Top-level ports for Verilog export."""
        return set(self.bus.flatten()) | set(self.apb.flatten())
