#
# AXI-Lite APB Bridge - Two-Stage Synchronizer
#
# Copyright (c) 2026 Shareef Jalloq
# SPDX-License-Identifier: BSD-2-Clause
#
# Moves a value into the destination clock domain through two capture
# registers. Only Gray-coded pointers (one bit changes per source tick) may
# be passed through it.
#

from migen import *
from migen.genlib.cdc import MultiReg

from litex.gen import *


class TwoStageSynchronizer(LiteXModule):
    """
    Two-flop synchronizer into ``odomain``.

    ``o`` is the value ``i`` held two destination ticks earlier. There is no
    combinational path from ``i`` to ``o`` and both stages reset to zero.

    Parameters
    ----------
    i : Signal
        Value driven from the source domain.

    o : Signal
        Synchronized value in the destination domain.

    odomain : str
        Destination clock domain. Default "sys".
    """

    def __init__(self, i, o, odomain="sys"):
        self.i = i
        self.o = o

        # # #

        self.specials += MultiReg(i, o, odomain, n=2)
