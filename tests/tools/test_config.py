#
# Configuration Tests
#
# Copyright (c) 2026 Shareef Jalloq
# SPDX-License-Identifier: BSD-2-Clause
#

import pytest

from axil_apb_bridge.common import (
    BridgeConfig,
    BridgeError,
    ConfigurationError,
    Status,
    RESP_OKAY,
    RESP_SLVERR,
    check_queue_depth,
    log2,
)
from axil_apb_bridge.gateware import AXILiteAPBBridge


def test_defaults():
    config = BridgeConfig()
    assert config.to_dict() == {
        "address_width":   32,
        "data_width":      32,
        "queue_depth":     4,
        "num_targets":     1,
        "target_aperture": 0x1000,
    }
    assert config.strobe_width == 4
    assert config.target_of(0xFFFF_FFFC) == 0


@pytest.mark.parametrize("kwargs, message", [
    (dict(queue_depth=3),                        "Queue depth"),
    (dict(queue_depth=1),                        "Queue depth"),
    (dict(data_width=12),                        "Data width"),
    (dict(address_width=0),                      "Address width"),
    (dict(num_targets=3),                        "targets"),
    (dict(target_aperture=0x1800),               "aperture"),
    (dict(address_width=12, num_targets=4),      "do not fit"),
])
def test_invalid_parameters(kwargs, message):
    with pytest.raises(ConfigurationError, match=message):
        BridgeConfig(**kwargs)


def test_error_hierarchy():
    assert issubclass(ConfigurationError, BridgeError)
    assert issubclass(ConfigurationError, ValueError)
    with pytest.raises(ValueError):
        check_queue_depth(6)


def test_target_decode():
    config = BridgeConfig(num_targets=8, target_aperture=0x100)
    assert config.select_lsb == 8
    assert config.select_bits == 3
    assert [config.target_of(a) for a in [0x000, 0x1FC, 0x700, 0x800]] == [0, 1, 7, 0]


def test_status_decode():
    assert Status.from_resp(RESP_OKAY) is Status.OK
    assert Status.from_resp(RESP_SLVERR) is Status.ERROR
    assert Status.from_resp(0b11) is Status.ERROR


def test_log2():
    assert [log2(n) for n in [1, 2, 4, 1024]] == [0, 1, 2, 10]


@pytest.mark.parametrize("n", [0, 3, 0x300, -4])
def test_log2_rejects_non_power_of_two(n):
    with pytest.raises(ConfigurationError):
        log2(n)


def test_bridge_uses_config():
    config = BridgeConfig(address_width=16, data_width=64, queue_depth=8, num_targets=2)
    bridge = AXILiteAPBBridge(config)
    assert len(bridge.bus.aw.addr) == 16
    assert len(bridge.bus.w.strb) == 8
    assert len(bridge.apb.psel) == 2
    assert bridge.wcmd_queue.depth == 8
    assert bridge.rrsp_queue.depth == 8
    assert {bridge.cd_fast, bridge.cd_slow} == {"fast", "slow"}
