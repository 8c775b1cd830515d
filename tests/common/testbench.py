#
# AXI-Lite APB Bridge - Testbench Helpers
#
# Copyright (c) 2026 Shareef Jalloq
# SPDX-License-Identifier: BSD-2-Clause
#
# Small passive observers shared by the gateware tests.
#

from migen import passive

from axil_apb_bridge.common import ProtocolError, Status


class ResponseRecorder:
    """
    Always-ready B/R sink that logs responses in arrival order.

    Each entry is (channel, cycle, status, data) with channel "B" or "R".
    """

    def __init__(self, bus):
        self.bus       = bus
        self.cycle     = 0
        self.responses = []

    def generator(self):
        bus = self.bus

        @passive
        def run():
            yield bus.b.ready.eq(1)
            yield bus.r.ready.eq(1)
            while True:
                yield
                self.cycle += 1
                if (yield bus.b.valid):
                    resp = yield bus.b.resp
                    self.responses.append(("B", self.cycle, Status.from_resp(resp), 0))
                if (yield bus.r.valid):
                    resp = yield bus.r.resp
                    data = yield bus.r.data
                    self.responses.append(("R", self.cycle, Status.from_resp(resp), data))

        return run()

    def channels(self):
        return [channel for channel, *_ in self.responses]


class HandshakeCounter:
    """Counts cycles with valid high and completed handshakes on an endpoint."""

    def __init__(self, endpoint):
        self.endpoint   = endpoint
        self.valid      = 0
        self.handshakes = 0

    def generator(self):
        ep = self.endpoint

        @passive
        def run():
            while True:
                valid = yield ep.valid
                ready = yield ep.ready
                self.valid      += valid
                self.handshakes += valid & ready
                yield

        return run()


class BackEndRecorder:
    """Per-cycle trace of the back end state and peripheral bus drive."""

    def __init__(self, backend, peripheral):
        self.backend    = backend
        self.peripheral = peripheral
        self.trace      = []

    def generator(self):
        backend = self.backend
        bus     = backend.bus

        @passive
        def run():
            while True:
                self.trace.append(dict(
                    rsp_wait = (yield backend.rsp_wait),
                    pending  = (yield backend.pending_valid),
                    psel     = (yield bus.psel),
                    penable  = (yield bus.penable),
                    accesses = len(self.peripheral.accesses),
                ))
                yield

        return run()

    def rsp_wait_cycles(self):
        return [entry for entry in self.trace if entry["rsp_wait"]]


class ResponseValidChecker:
    """
    Per-cycle check that B/R valid is only ever driven from a non-empty
    response queue, whatever the master's ready is doing.

    Runs in the control bus domain and raises ProtocolError on the first
    offending cycle. ``valid`` counts the cycles each channel was valid.
    """

    def __init__(self, bridge):
        self.bridge = bridge
        self.cycles = 0
        self.valid  = {"B": 0, "R": 0}

    def generator(self):
        bus    = self.bridge.bus
        checks = [
            ("B", bus.b, self.bridge.wrsp_queue),
            ("R", bus.r, self.bridge.rrsp_queue),
        ]

        @passive
        def run():
            while True:
                for name, channel, queue in checks:
                    valid = yield channel.valid
                    empty = yield queue.empty
                    if valid and empty:
                        raise ProtocolError(f"{name} valid while its response queue is empty (cycle {self.cycles})")
                    self.valid[name] += valid
                self.cycles += 1
                yield

        return run()
