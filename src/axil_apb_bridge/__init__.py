#
# AXI-Lite APB Bridge
#
# Copyright (c) 2026 Shareef Jalloq
# SPDX-License-Identifier: BSD-2-Clause
#

__version__ = "0.1.0"
