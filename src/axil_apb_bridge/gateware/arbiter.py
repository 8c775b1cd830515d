#
# AXI-Lite APB Bridge - Command Arbiter
#
# Copyright (c) 2026 Shareef Jalloq
# SPDX-License-Identifier: BSD-2-Clause
#
# Serializes the write and read command queues onto the back end.
#

from migen import *

from litex.gen import *
from litex.soc.interconnect import stream

from .interfaces import (
    write_command_description,
    read_command_description,
    request_description,
)


class CommandArbiter(LiteXModule):
    """
    Fixed-priority arbiter: writes before reads.

    Purely combinational, re-evaluated every tick. The granted queue is only
    popped when the back end accepts the request in the same tick. A read
    waits for as long as any write command is queued.
    """

    def __init__(self, address_width=32, data_width=32):
        self.wcmd_sink = wcmd = stream.Endpoint(write_command_description(address_width, data_width))
        self.rcmd_sink = rcmd = stream.Endpoint(read_command_description(address_width))
        self.source    = source = stream.Endpoint(request_description(address_width, data_width))

        self.grant_write = Signal()
        self.grant_read  = Signal()

        # # #

        self.comb += [
            self.grant_write.eq(wcmd.valid),
            self.grant_read.eq(~wcmd.valid & rcmd.valid),

            If(self.grant_write,
                source.valid.eq(1),
                source.we.eq(1),
                source.addr.eq(wcmd.addr),
                source.data.eq(wcmd.data),
                source.strb.eq(wcmd.strb),
                wcmd.ready.eq(source.ready),
            ).Elif(self.grant_read,
                source.valid.eq(1),
                source.we.eq(0),
                source.addr.eq(rcmd.addr),
                rcmd.ready.eq(source.ready),
            ),
        ]
