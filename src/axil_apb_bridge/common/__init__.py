#
# AXI-Lite APB Bridge - Common Definitions
#
# Copyright (c) 2026 Shareef Jalloq
# SPDX-License-Identifier: BSD-2-Clause
#
# Shared definitions used by the gateware, the simulation models and the
# host tools. This package has no gateware dependencies (no migen/litex).
#

from .config import BridgeConfig, check_queue_depth
from .encoding import (
    RESP_OKAY,
    RESP_SLVERR,
    Status,
    is_power_of_two,
    log2,
)
from .errors import (
    BridgeError,
    ConfigurationError,
    ProtocolError,
    SimulationTimeout,
)

__all__ = [
    # Configuration
    "BridgeConfig",
    "check_queue_depth",
    # Encodings
    "RESP_OKAY",
    "RESP_SLVERR",
    "Status",
    "is_power_of_two",
    "log2",
    # Errors
    "BridgeError",
    "ConfigurationError",
    "ProtocolError",
    "SimulationTimeout",
]
