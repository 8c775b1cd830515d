#
# AXI-Lite APB Bridge - APB Protocol Monitor
#
# Copyright (c) 2026 Shareef Jalloq
# SPDX-License-Identifier: BSD-2-Clause
#
# Passive checker for the peripheral bus. Samples every clock edge and raises
# ProtocolError on the first violation.
#

import logging

from migen import passive

from axil_apb_bridge.common import ProtocolError

from .peripheral import APBAccess

logger = logging.getLogger(__name__)


# Bus phases
IDLE   = "IDLE"
SETUP  = "SETUP"
ACCESS = "ACCESS"


def is_one_hot(value):
    return value != 0 and (value & (value - 1)) == 0


class APBProtocolMonitor:
    """
    APB sequence checker.

    Checks, at every edge:

    - penable is never high without psel.
    - psel is zero or one-hot.
    - SETUP lasts exactly one cycle and is always followed by ACCESS.
    - ACCESS follows SETUP, or an ACCESS cycle without pready.
    - address, direction, write data, strobes and select are stable from
      SETUP until pready.
    - pready and pslverr are only driven during ACCESS.

    Completed transfers are recorded in ``transfers``.
    """

    def __init__(self, bus):
        self.bus       = bus
        self.cycle     = 0
        self.transfers = []

        self.phase = IDLE
        self.ready = 0
        self.ctrl  = None

    def _error(self, message):
        logger.error("APB protocol violation @%d: %s", self.cycle, message)
        raise ProtocolError(f"APB cycle {self.cycle}: {message}")

    def _sample(self):
        bus = self.bus
        psel    = yield bus.psel
        penable = yield bus.penable
        ctrl = (
            psel,
            (yield bus.paddr),
            (yield bus.pwrite),
            (yield bus.pwdata),
            (yield bus.pstrb),
        )
        pready  = yield bus.pready
        pslverr = yield bus.pslverr
        prdata  = yield bus.prdata
        return psel, penable, ctrl, pready, pslverr, prdata

    def check(self, psel, penable, ctrl, pready, pslverr, prdata):
        if penable and not psel:
            self._error("PENABLE asserted without PSEL")
        if psel and not is_one_hot(psel):
            self._error(f"PSEL 0b{psel:b} is not one-hot")

        if not psel:
            phase = IDLE
        elif not penable:
            phase = SETUP
        else:
            phase = ACCESS

        if (pready or pslverr) and phase != ACCESS:
            self._error("PREADY/PSLVERR driven outside ACCESS")

        # Transfer in flight on the previous edge.
        in_flight = self.phase == SETUP or (self.phase == ACCESS and not self.ready)
        if in_flight:
            if phase == SETUP:
                self._error("SETUP longer than one cycle")
            if phase == IDLE:
                self._error(f"Transfer abandoned in {self.phase}")
            if ctrl != self.ctrl:
                self._error("Address/control/data changed before PREADY")
        elif phase == ACCESS:
            self._error("ACCESS not preceded by SETUP")

        if phase == ACCESS and pready:
            sel, addr, write, wdata, strb = ctrl
            self.transfers.append(APBAccess(
                target = sel.bit_length() - 1,
                addr   = addr,
                write  = bool(write),
                data   = wdata if write else prdata,
                strobe = strb if write else 0,
                error  = bool(pslverr),
            ))

        self.phase = phase
        self.ready = pready
        self.ctrl  = ctrl

    def generator(self):
        @passive
        def run():
            while True:
                sample = yield from self._sample()
                self.check(*sample)
                yield
                self.cycle += 1

        return run()
