#
# AXI-Lite APB Bridge - Control Bus Driver
#
# Copyright (c) 2026 Shareef Jalloq
# SPDX-License-Identifier: BSD-2-Clause
#
# Upstream master model for migen simulation. All methods are generators
# meant to run in the control bus clock domain, e.g.:
#
#   txn = yield from driver.write(0x100, 0xAAAA0001)
#   txn = yield from driver.read(0x100)
#

import logging
from collections import deque
from dataclasses import dataclass
from typing import Optional

from axil_apb_bridge.common import SimulationTimeout, Status

logger = logging.getLogger(__name__)


# =============================================================================
# Transaction Record
# =============================================================================

@dataclass
class Transaction:
    """One control bus transaction, filled in as it progresses."""
    kind:      str                      # "write" or "read"
    addr:      int
    data:      int = 0
    strb:      int = 0
    status:    Optional[Status] = None
    issued:    int = 0                  # Cycle the request was first driven
    accepted:  Optional[int] = None     # Cycle of the request handshake
    completed: Optional[int] = None     # Cycle of the response handshake

    @property
    def done(self) -> bool:
        return self.completed is not None

    @property
    def latency(self) -> Optional[int]:
        if self.completed is None:
            return None
        return self.completed - self.issued


# =============================================================================
# Driver
# =============================================================================

class ControlBusDriver:
    """
    Control bus master model.

    Requests are issued with ``issue_write``/``issue_read`` and their
    responses collected, in order per channel, with ``wait_write_response``/
    ``wait_read_response``. ``write``/``read`` do both.

    Every wait is bounded by ``timeout`` cycles and raises SimulationTimeout
    when exceeded. Cycles are counted by ``tick``; tests that need delays
    should use ``tick`` too so that the counter stays accurate.

    Parameters
    ----------
    bus : ControlBusInterface
        The bridge's control bus port.

    timeout : int
        Per-wait cycle budget. Default 1000.

    rng : random.Random, optional
        Drives random response backpressure together with ``backpressure``.

    backpressure : float
        Probability of holding B/R ready low in a given cycle. Default 0.
    """

    def __init__(self, bus, timeout=1000, rng=None, backpressure=0.0):
        self.bus          = bus
        self.timeout      = timeout
        self.rng          = rng
        self.backpressure = backpressure

        self.strb_mask = (1 << len(bus.w.strb)) - 1

        self.cycle        = 0
        self.transactions = []

        self._pending_writes = deque()
        self._pending_reads  = deque()

    # -------------------------------------------------------------------------
    # Timing
    # -------------------------------------------------------------------------

    def tick(self, cycles=1):
        for _ in range(cycles):
            yield
            self.cycle += 1

    def _check_timeout(self, start, what):
        if self.cycle - start > self.timeout:
            raise SimulationTimeout(what, self.timeout)

    def _response_ready(self):
        if self.rng is None or not self.backpressure:
            return 1
        return int(self.rng.random() >= self.backpressure)

    # -------------------------------------------------------------------------
    # Requests
    # -------------------------------------------------------------------------

    def issue_write(self, addr, data, strb=None):
        """Drive AW and W together until both have handshaken."""
        bus  = self.bus
        strb = self.strb_mask if strb is None else strb
        txn  = Transaction("write", addr, data=data, strb=strb, issued=self.cycle)

        yield bus.aw.valid.eq(1)
        yield bus.aw.addr.eq(addr)
        yield bus.w.valid.eq(1)
        yield bus.w.data.eq(data)
        yield bus.w.strb.eq(strb)

        aw_done = w_done = False
        start = self.cycle
        while not (aw_done and w_done):
            yield from self.tick()
            if not aw_done and (yield bus.aw.ready):
                aw_done = True
                yield bus.aw.valid.eq(0)
            if not w_done and (yield bus.w.ready):
                w_done = True
                yield bus.w.valid.eq(0)
            if not (aw_done and w_done):
                self._check_timeout(start, f"write request to 0x{addr:08X}")

        txn.accepted = self.cycle
        self._pending_writes.append(txn)
        logger.debug("WR  0x%08X <- 0x%08X strb=0x%X accepted @%d", addr, data, strb, txn.accepted)
        return txn

    def issue_read(self, addr):
        """Drive AR until it has handshaken."""
        bus = self.bus
        txn = Transaction("read", addr, issued=self.cycle)

        yield bus.ar.valid.eq(1)
        yield bus.ar.addr.eq(addr)

        start = self.cycle
        while True:
            yield from self.tick()
            if (yield bus.ar.ready):
                break
            self._check_timeout(start, f"read request to 0x{addr:08X}")
        yield bus.ar.valid.eq(0)

        txn.accepted = self.cycle
        self._pending_reads.append(txn)
        logger.debug("RD  0x%08X accepted @%d", addr, txn.accepted)
        return txn

    # -------------------------------------------------------------------------
    # Responses
    # -------------------------------------------------------------------------

    def _wait_response(self, channel, what):
        ready = self._response_ready()
        yield channel.ready.eq(ready)

        start = self.cycle
        while True:
            yield from self.tick()
            if ready and (yield channel.valid):
                break
            self._check_timeout(start, what)
            ready = self._response_ready()
            yield channel.ready.eq(ready)

        yield channel.ready.eq(0)

    def wait_write_response(self):
        """Collect the B response of the oldest outstanding write."""
        if not self._pending_writes:
            raise RuntimeError("No outstanding write")
        txn = self._pending_writes.popleft()

        yield from self._wait_response(self.bus.b, f"write response from 0x{txn.addr:08X}")
        txn.status    = Status.from_resp((yield self.bus.b.resp))
        txn.completed = self.cycle
        self.transactions.append(txn)

        logger.debug("WR  0x%08X %s after %d cycles", txn.addr, txn.status.name, txn.latency)
        return txn

    def wait_read_response(self):
        """Collect the R response of the oldest outstanding read."""
        if not self._pending_reads:
            raise RuntimeError("No outstanding read")
        txn = self._pending_reads.popleft()

        yield from self._wait_response(self.bus.r, f"read response from 0x{txn.addr:08X}")
        txn.data      = (yield self.bus.r.data)
        txn.status    = Status.from_resp((yield self.bus.r.resp))
        txn.completed = self.cycle
        self.transactions.append(txn)

        logger.debug("RD  0x%08X -> 0x%08X %s after %d cycles",
            txn.addr, txn.data, txn.status.name, txn.latency)
        return txn

    # -------------------------------------------------------------------------
    # Blocking Accesses
    # -------------------------------------------------------------------------

    def write(self, addr, data, strb=None):
        yield from self.issue_write(addr, data, strb)
        return (yield from self.wait_write_response())

    def read(self, addr):
        yield from self.issue_read(addr)
        return (yield from self.wait_read_response())
