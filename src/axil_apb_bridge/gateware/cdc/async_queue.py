#
# AXI-Lite APB Bridge - Clock Domain Crossing Queue
#
# Copyright (c) 2026 Shareef Jalloq
# SPDX-License-Identifier: BSD-2-Clause
#
# Dual-clock FIFO with Gray-coded pointer exchange and registered full/empty
# flags. The "write" and "read" clock domains are renamed by the instantiating
# module, e.g.:
#
#   ClockDomainsRenamer({"write": "fast", "read": "slow"})(AsyncQueue(...))
#

from migen import *
from migen.genlib.cdc import GrayCounter

from litex.gen import *
from litex.soc.interconnect import stream

from axil_apb_bridge.common import check_queue_depth, log2

from .synchronizer import TwoStageSynchronizer


class AsyncQueue(LiteXModule):
    """
    Clock domain crossing queue.

    Write side (``write`` domain): ``sink`` endpoint, ``full`` flag.
    Read side (``read`` domain): ``source`` endpoint, ``empty`` flag.

    The read side is first-word-fall-through: ``source.valid`` is ``~empty``
    and the head entry is presented without a pop cycle. A push happens when
    ``sink.valid & ~full``, a pop when ``source.ready & ~empty``.

    ``full`` compares the next write Gray pointer with the synchronized read
    Gray pointer with its two MSBs inverted. ``empty`` compares the next read
    Gray pointer with the synchronized write Gray pointer. Both are registered
    in their own domain, so a push becomes visible to the reader after the two
    synchronizer stages plus the flag register.

    Parameters
    ----------
    layout : EndpointDescription or list
        Payload layout of both endpoints.

    depth : int
        Number of entries, power of two >= 2.
    """

    def __init__(self, layout, depth):
        check_queue_depth(depth)

        self.depth = depth

        self.sink   = sink   = stream.Endpoint(layout)
        self.source = source = stream.Endpoint(layout)

        self.full  = Signal()
        self.empty = Signal(reset=1)

        # # #

        abits = log2(depth)
        pbits = abits + 1

        # Pointers: Gray counters, one bit wider than the storage index
        self.wptr = wptr = ClockDomainsRenamer("write")(GrayCounter(pbits))
        self.rptr = rptr = ClockDomainsRenamer("read")(GrayCounter(pbits))

        # Pointer exchange
        self.wq2_rptr = wq2_rptr = Signal(pbits)
        self.rq2_wptr = rq2_wptr = Signal(pbits)
        self.rptr_sync = TwoStageSynchronizer(rptr.q, wq2_rptr, odomain="write")
        self.wptr_sync = TwoStageSynchronizer(wptr.q, rq2_wptr, odomain="read")

        # Handshakes
        self.push = push = Signal()
        self.pop  = pop  = Signal()
        self.comb += [
            sink.ready.eq(~self.full),
            push.eq(sink.valid & ~self.full),
            wptr.ce.eq(push),

            source.valid.eq(~self.empty),
            pop.eq(source.ready & ~self.empty),
            rptr.ce.eq(pop),
        ]

        # Flags
        if abits == 1:
            wq2_rptr_wrapped = Cat(~wq2_rptr)
        else:
            wq2_rptr_wrapped = Cat(wq2_rptr[:-2], ~wq2_rptr[-2:])
        self.sync.write += self.full.eq(wptr.q_next == wq2_rptr_wrapped)
        self.sync.read  += self.empty.eq(rptr.q_next == rq2_wptr)

        # Storage
        payload_width = len(sink.payload.raw_bits())
        storage = Array(Signal(payload_width, reset_less=True) for _ in range(depth))
        self.sync.write += If(push,
            storage[wptr.q_binary[:abits]].eq(sink.payload.raw_bits())
        )
        self.comb += source.payload.raw_bits().eq(storage[rptr.q_binary[:abits]])
