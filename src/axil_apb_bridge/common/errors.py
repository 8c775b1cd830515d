#
# AXI-Lite APB Bridge - Exceptions
#
# Copyright (c) 2026 Shareef Jalloq
# SPDX-License-Identifier: BSD-2-Clause
#
# Exception hierarchy shared by the gateware builders, simulation models
# and host tools. No gateware dependencies.
#


class BridgeError(Exception):
    """Base class for all bridge errors."""


class ConfigurationError(BridgeError, ValueError):
    """Invalid construction-time parameter (queue depth, widths, targets)."""


class ProtocolError(BridgeError, AssertionError):
    """Bus protocol violation observed by a simulation monitor."""


class SimulationTimeout(BridgeError):
    """A simulation wait exceeded its cycle budget."""

    def __init__(self, what, cycles):
        self.what = what
        self.cycles = cycles
        super().__init__(f"Timed out after {cycles} cycles waiting for {what}")
