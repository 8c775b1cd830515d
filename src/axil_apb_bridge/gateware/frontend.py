#
# AXI-Lite APB Bridge - Front End
#
# Copyright (c) 2026 Shareef Jalloq
# SPDX-License-Identifier: BSD-2-Clause
#
# Control-bus slave in the fast clock domain. Captures one write command and
# one read command, forwards them into the command queues and presents the
# response queues back to the master.
#

from migen import *

from litex.gen import *
from litex.soc.interconnect import stream

from axil_apb_bridge.common import RESP_OKAY, RESP_SLVERR

from .interfaces import (
    ControlBusInterface,
    write_command_description,
    read_command_description,
    response_description,
)


class FrontEnd(LiteXModule):
    """
    Request capture and response presentation.

    Each request channel (AW, W, AR) has a single capture register with a
    valid bit. A channel is ready when its register is empty and its command
    queue can accept, so a full queue holds off the master directly. A write
    command is offered to the write-command queue once both AW and W are
    captured, a read command as soon as AR is captured. When the queue
    accepts, the captures clear in the same tick.

    B and R are driven straight from the head of the response queues. An
    entry is popped only on a completed handshake.

    Parameters
    ----------
    address_width : int
        Control bus address width. Default 32.

    data_width : int
        Control bus data width. Default 32.

    Interfaces
    ----------
    bus : ControlBusInterface
        Slave port to the control-bus master.
    wcmd_source / rcmd_source : stream.Endpoint
        To the write/read command queues.
    wrsp_sink / rrsp_sink : stream.Endpoint
        From the write/read response queues.
    """

    def __init__(self, address_width=32, data_width=32):
        self.bus = bus = ControlBusInterface(address_width, data_width)

        self.wcmd_source = wcmd = stream.Endpoint(write_command_description(address_width, data_width))
        self.rcmd_source = rcmd = stream.Endpoint(read_command_description(address_width))
        self.wrsp_sink   = wrsp = stream.Endpoint(response_description(data_width))
        self.rrsp_sink   = rrsp = stream.Endpoint(response_description(data_width))

        # # #

        # =====================================================================
        # Capture Registers
        # =====================================================================

        self.aw_valid = aw_valid = Signal()
        self.w_valid  = w_valid  = Signal()
        self.ar_valid = ar_valid = Signal()

        aw_addr = Signal(address_width)
        w_data  = Signal(data_width)
        w_strb  = Signal(data_width//8)
        ar_addr = Signal(address_width)

        self.comb += [
            bus.aw.ready.eq(~aw_valid & wcmd.ready),
            bus.w.ready.eq(~w_valid & wcmd.ready),
            bus.ar.ready.eq(~ar_valid & rcmd.ready),
        ]

        self.sync += [
            If(bus.aw.valid & bus.aw.ready,
                aw_valid.eq(1),
                aw_addr.eq(bus.aw.addr),
            ),
            If(bus.w.valid & bus.w.ready,
                w_valid.eq(1),
                w_data.eq(bus.w.data),
                w_strb.eq(bus.w.strb),
            ),
            If(bus.ar.valid & bus.ar.ready,
                ar_valid.eq(1),
                ar_addr.eq(bus.ar.addr),
            ),
        ]

        # =====================================================================
        # Command Enqueue
        # =====================================================================

        self.comb += [
            wcmd.valid.eq(aw_valid & w_valid),
            wcmd.addr.eq(aw_addr),
            wcmd.data.eq(w_data),
            wcmd.strb.eq(w_strb),

            rcmd.valid.eq(ar_valid),
            rcmd.addr.eq(ar_addr),
        ]

        self.sync += [
            If(wcmd.valid & wcmd.ready,
                aw_valid.eq(0),
                w_valid.eq(0),
            ),
            If(rcmd.valid & rcmd.ready,
                ar_valid.eq(0),
            ),
        ]

        # =====================================================================
        # Responses
        # =====================================================================

        self.comb += [
            bus.b.valid.eq(wrsp.valid),
            bus.b.resp.eq(Mux(wrsp.error, RESP_SLVERR, RESP_OKAY)),
            wrsp.ready.eq(bus.b.valid & bus.b.ready),

            bus.r.valid.eq(rrsp.valid),
            bus.r.data.eq(rrsp.data),
            bus.r.resp.eq(Mux(rrsp.error, RESP_SLVERR, RESP_OKAY)),
            rrsp.ready.eq(bus.r.valid & bus.r.ready),
        ]
