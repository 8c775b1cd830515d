#
# AXI-Lite APB Bridge - Back End
#
# Copyright (c) 2026 Shareef Jalloq
# SPDX-License-Identifier: BSD-2-Clause
#
# APB master in the slow clock domain. Runs one request at a time through
# SETUP/ACCESS and hands the result to the response queues.
#

from migen import *

from litex.gen import *
from litex.soc.interconnect import stream

from axil_apb_bridge.common import log2

from .interfaces import APBInterface, request_description, response_description


class BackEnd(LiteXModule):
    """
    APB transaction state machine.

    IDLE -> SETUP -> ACCESS -> IDLE, or ACCESS -> RSP_WAIT -> IDLE when the
    response queue cannot take the result on completion.

    Two holding registers sit between the peripheral and the response
    queues. The output register drives the queue sink and clears the tick
    after the queue takes it. The pending register keeps a completed result
    while the queue is full so that the APB bus can be released; RSP_WAIT
    moves it to the output register once the queue has room. No new request
    is accepted while either register holds a result.

    Peripheral errors are reported in the response, never retried. There is
    no timeout: a peripheral that never raises pready holds ACCESS forever.

    Parameters
    ----------
    address_width : int
        APB address width. Default 32.

    data_width : int
        APB data width. Default 32.

    num_targets : int
        Number of psel lines, power of two. Default 1.

    target_aperture : int
        Bytes per target; the target index comes from the address bits above
        it. Default 0x1000.

    Interfaces
    ----------
    sink : stream.Endpoint
        Arbitrated requests (request_description).
    bus : APBInterface
        Peripheral bus, master side.
    wrsp_source / rrsp_source : stream.Endpoint
        To the write/read response queues.
    """

    def __init__(self, address_width=32, data_width=32, num_targets=1, target_aperture=0x1000):
        sel_bits = log2(num_targets)
        sel_lsb  = log2(target_aperture)

        self.sink = sink = stream.Endpoint(request_description(address_width, data_width))
        self.bus  = bus  = APBInterface(address_width, data_width, num_targets)

        self.wrsp_source = wrsp = stream.Endpoint(response_description(data_width))
        self.rrsp_source = rrsp = stream.Endpoint(response_description(data_width))

        # Status
        self.idle          = Signal()
        self.setup         = Signal()
        self.access        = Signal()
        self.rsp_wait      = Signal()
        self.pending_valid = pending_valid = Signal()
        self.output_valid  = output_valid  = Signal()

        # # #

        # =====================================================================
        # Target Decode
        # =====================================================================

        sel = Signal(num_targets)
        if num_targets == 1:
            self.comb += sel.eq(1)
        else:
            index = sink.addr[sel_lsb:sel_lsb + sel_bits]
            self.comb += Case(index, {i: sel.eq(1 << i) for i in range(num_targets)})

        # =====================================================================
        # Latched Request
        # =====================================================================

        req_we   = Signal()
        req_addr = Signal(address_width)
        req_data = Signal(data_width)
        req_strb = Signal(data_width//8)
        req_sel  = Signal(num_targets)

        drive = [
            bus.paddr.eq(req_addr),
            bus.pwrite.eq(req_we),
            bus.pwdata.eq(req_data),
            bus.pstrb.eq(req_strb),
        ]

        # =====================================================================
        # Response Holding Registers
        # =====================================================================

        pending_data  = Signal(data_width)
        pending_error = Signal()

        output_we    = Signal()
        output_data  = Signal(data_width)
        output_error = Signal()

        # Response queue for the latched request has room.
        rsp_ready = Signal()
        self.comb += rsp_ready.eq(Mux(req_we, wrsp.ready, rrsp.ready))

        load_output   = Signal()
        load_pending  = Signal()
        flush_pending = Signal()
        output_done   = Signal()

        self.comb += [
            wrsp.valid.eq(output_valid & output_we),
            rrsp.valid.eq(output_valid & ~output_we),
            output_done.eq((wrsp.valid & wrsp.ready) | (rrsp.valid & rrsp.ready)),
        ]
        for rsp in [wrsp, rrsp]:
            self.comb += [
                rsp.we.eq(output_we),
                rsp.data.eq(output_data),
                rsp.error.eq(output_error),
            ]

        self.sync += [
            If(output_done,
                output_valid.eq(0),
            ),
            If(load_output,
                output_valid.eq(1),
                output_we.eq(req_we),
                output_data.eq(Mux(req_we, 0, bus.prdata)),
                output_error.eq(bus.pslverr),
            ),
            If(load_pending,
                pending_valid.eq(1),
                pending_data.eq(Mux(req_we, 0, bus.prdata)),
                pending_error.eq(bus.pslverr),
            ),
            If(flush_pending,
                pending_valid.eq(0),
                output_valid.eq(1),
                output_we.eq(req_we),
                output_data.eq(pending_data),
                output_error.eq(pending_error),
            ),
        ]

        # =====================================================================
        # FSM
        # =====================================================================

        self.fsm = fsm = FSM(reset_state="IDLE")
        fsm.act("IDLE",
            sink.ready.eq(~output_valid & ~pending_valid),
            If(sink.valid & sink.ready,
                NextValue(req_we,   sink.we),
                NextValue(req_addr, sink.addr),
                NextValue(req_data, sink.data),
                NextValue(req_strb, sink.strb),
                NextValue(req_sel,  sel),
                NextState("SETUP")
            )
        )

        fsm.act("SETUP",
            bus.psel.eq(req_sel),
            *drive,
            NextState("ACCESS")
        )

        fsm.act("ACCESS",
            bus.psel.eq(req_sel),
            bus.penable.eq(1),
            *drive,
            If(bus.pready,
                If(rsp_ready,
                    load_output.eq(1),
                    NextState("IDLE")
                ).Else(
                    # Release the bus and hold the result.
                    load_pending.eq(1),
                    NextState("RSP_WAIT")
                )
            )
        )

        fsm.act("RSP_WAIT",
            If(rsp_ready,
                flush_pending.eq(1),
                NextState("IDLE")
            )
        )

        self.comb += [
            self.idle.eq(fsm.ongoing("IDLE")),
            self.setup.eq(fsm.ongoing("SETUP")),
            self.access.eq(fsm.ongoing("ACCESS")),
            self.rsp_wait.eq(fsm.ongoing("RSP_WAIT")),
        ]
