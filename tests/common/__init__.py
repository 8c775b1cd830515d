#
# AXI-Lite APB Bridge - Shared Test Helpers
#
# Copyright (c) 2026 Shareef Jalloq
# SPDX-License-Identifier: BSD-2-Clause
#
