#
# AXI-Lite APB Bridge - Encodings
#
# Copyright (c) 2026 Shareef Jalloq
# SPDX-License-Identifier: BSD-2-Clause
#
# Response codes and integer helpers shared by the gateware and the
# host-side models. This module must have NO gateware dependencies.
#

from enum import IntEnum

from .errors import ConfigurationError


# =============================================================================
# Response Codes
# =============================================================================

RESP_OKAY   = 0b00
RESP_SLVERR = 0b10


class Status(IntEnum):
    """Upstream response status."""
    OK    = RESP_OKAY
    ERROR = RESP_SLVERR

    @classmethod
    def from_resp(cls, resp: int) -> "Status":
        """Decode a 2-bit resp field. Anything but OKAY is an error."""
        return cls.OK if resp == RESP_OKAY else cls.ERROR


# =============================================================================
# Helpers
# =============================================================================

def is_power_of_two(n: int) -> bool:
    return n > 0 and (n & (n - 1)) == 0


def log2(n: int) -> int:
    """log2 of a power of two."""
    if not is_power_of_two(n):
        raise ConfigurationError(f"Expected a power of two, got {n!r}")
    return n.bit_length() - 1
