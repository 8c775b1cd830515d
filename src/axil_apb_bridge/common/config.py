#
# AXI-Lite APB Bridge - Configuration
#
# Copyright (c) 2026 Shareef Jalloq
# SPDX-License-Identifier: BSD-2-Clause
#
# Construction-time parameters for the bridge. Validation happens when the
# configuration object is created so that a bad parameter never reaches the
# gateware builders.
#

from dataclasses import dataclass, asdict
from typing import Dict, Any

from .encoding import is_power_of_two, log2
from .errors import ConfigurationError


def check_queue_depth(depth: int):
    """Raise ConfigurationError unless depth is a power of two >= 2."""
    if not isinstance(depth, int) or depth < 2 or not is_power_of_two(depth):
        raise ConfigurationError(
            f"Queue depth must be a power of two >= 2, got {depth!r}"
        )


@dataclass(frozen=True)
class BridgeConfig:
    """
    Bridge parameters.

    Parameters
    ----------
    address_width : int
        Address bits on both buses. Default 32.

    data_width : int
        Data bits on both buses, multiple of 8. Default 32.

    queue_depth : int
        Entries per CDC queue (all four queues), power of two >= 2. Default 4.

    num_targets : int
        Number of peripheral select lines, power of two. Default 1.

    target_aperture : int
        Bytes of address space per target. The target index is decoded from
        the address bits directly above the aperture. Default 0x1000.
    """

    address_width:   int = 32
    data_width:      int = 32
    queue_depth:     int = 4
    num_targets:     int = 1
    target_aperture: int = 0x1000

    def __post_init__(self):
        if self.address_width < 1:
            raise ConfigurationError(f"Address width must be positive, got {self.address_width}")
        if self.data_width < 8 or self.data_width % 8:
            raise ConfigurationError(f"Data width must be a multiple of 8, got {self.data_width}")
        check_queue_depth(self.queue_depth)
        if not is_power_of_two(self.num_targets):
            raise ConfigurationError(
                f"Number of targets must be a power of two, got {self.num_targets}"
            )
        if not is_power_of_two(self.target_aperture):
            raise ConfigurationError(
                f"Target aperture must be a power of two, got {self.target_aperture:#x}"
            )
        if self.num_targets > 1 and self.select_lsb + self.select_bits > self.address_width:
            raise ConfigurationError(
                f"{self.num_targets} targets of {self.target_aperture:#x} bytes do not fit "
                f"in a {self.address_width}-bit address"
            )

    @property
    def strobe_width(self) -> int:
        return self.data_width // 8

    @property
    def select_lsb(self) -> int:
        """Lowest address bit of the target index."""
        return log2(self.target_aperture)

    @property
    def select_bits(self) -> int:
        return log2(self.num_targets)

    def target_of(self, address: int) -> int:
        """Target index selected by an address."""
        if self.num_targets == 1:
            return 0
        return (address >> self.select_lsb) & (self.num_targets - 1)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
