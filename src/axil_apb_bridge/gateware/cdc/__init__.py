#
# AXI-Lite APB Bridge - Clock Domain Crossing
#
# Copyright (c) 2026 Shareef Jalloq
# SPDX-License-Identifier: BSD-2-Clause
#

from .synchronizer import TwoStageSynchronizer
from .async_queue import AsyncQueue

__all__ = [
    "TwoStageSynchronizer",
    "AsyncQueue",
]
