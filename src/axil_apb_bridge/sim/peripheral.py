#
# AXI-Lite APB Bridge - APB Peripheral Model
#
# Copyright (c) 2026 Shareef Jalloq
# SPDX-License-Identifier: BSD-2-Clause
#
# Register file slave for the peripheral side of the bridge.
#

import logging
from dataclasses import dataclass

from migen import passive

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class APBAccess:
    """A completed APB transfer."""
    target: int
    addr:   int
    write:  bool
    data:   int
    strobe: int
    error:  bool


def merge_strobes(old, new, strobe, nbytes):
    """Replace the bytes of old selected by strobe with those of new."""
    value = old
    for i in range(nbytes):
        if strobe & (1 << i):
            mask  = 0xFF << (8*i)
            value = (value & ~mask) | (new & mask)
    return value


class RegisterFilePeripheral:
    """
    Sparse register file behind an APB slave port.

    Registers are keyed by word address and read as zero until written.
    Writes honour pstrb. Accesses to an address in ``error_addresses``
    complete with pslverr set and leave the register file untouched.

    pready is registered, so an ACCESS phase lasts ``wait_states + 2``
    cycles. While ``stalled`` is set the model never raises pready; tests
    flip it from another generator.

    Parameters
    ----------
    bus : APBInterface
        The bridge's peripheral bus port.

    wait_states : int or callable
        Extra ACCESS cycles per transfer, or a callable returning them.
        Default 0.

    error_addresses : iterable of int
        Byte addresses that respond with an error.
    """

    def __init__(self, bus, wait_states=0, error_addresses=()):
        self.bus             = bus
        self.wait_states     = wait_states
        self.error_addresses = set(error_addresses)
        self.stalled         = False

        self.nbytes    = len(bus.pstrb)
        self.registers = {}
        self.accesses  = []

    def _word(self, addr):
        return addr // self.nbytes

    def peek(self, addr):
        return self.registers.get(self._word(addr), 0)

    def poke(self, addr, value):
        self.registers[self._word(addr)] = value

    def _access(self, target, addr, write, wdata, strobe):
        error = addr in self.error_addresses
        rdata = 0
        if not error:
            if write:
                self.poke(addr, merge_strobes(self.peek(addr), wdata, strobe, self.nbytes))
            else:
                rdata = self.peek(addr)

        access = APBAccess(
            target = target,
            addr   = addr,
            write  = bool(write),
            data   = wdata if write else rdata,
            strobe = strobe if write else 0,
            error  = error,
        )
        self.accesses.append(access)
        logger.debug("APB %s %d:0x%08X 0x%08X%s",
            "WR" if write else "RD", target, addr, access.data, " SLVERR" if error else "")
        return access

    def generator(self):
        bus = self.bus

        @passive
        def run():
            while True:
                psel    = yield bus.psel
                penable = yield bus.penable
                if not (psel and penable) or self.stalled:
                    yield
                    continue

                waits = self.wait_states() if callable(self.wait_states) else self.wait_states
                for _ in range(waits):
                    yield

                access = self._access(
                    target = psel.bit_length() - 1,
                    addr   = (yield bus.paddr),
                    write  = (yield bus.pwrite),
                    wdata  = (yield bus.pwdata),
                    strobe = (yield bus.pstrb),
                )
                yield bus.prdata.eq(0 if access.write else access.data)
                yield bus.pslverr.eq(access.error)
                yield bus.pready.eq(1)
                yield
                yield bus.pready.eq(0)
                yield bus.pslverr.eq(0)
                yield

        return run()
