#
# Two-Stage Synchronizer and Gray Counter Tests
#
# Copyright (c) 2026 Shareef Jalloq
# SPDX-License-Identifier: BSD-2-Clause
#

import random

from migen import *
from migen.genlib.cdc import GrayCounter

from axil_apb_bridge.gateware.cdc import TwoStageSynchronizer


# =============================================================================
# Test Utilities
# =============================================================================

def gray_encode(value):
    return value ^ (value >> 1)


def gray_decode(gray):
    value = 0
    while gray:
        value ^= gray
        gray >>= 1
    return value


# =============================================================================
# Synchronizer
# =============================================================================

def test_synchronizer_two_tick_latency():
    i, o = Signal(), Signal()
    dut = TwoStageSynchronizer(i, o)
    seen = []

    def gen():
        yield i.eq(1)
        for _ in range(4):
            yield
            seen.append((yield o))
        yield i.eq(0)
        for _ in range(4):
            yield
            seen.append((yield o))

    run_simulation(dut, gen())
    assert seen == [0, 0, 1, 1, 1, 1, 0, 0]


def test_synchronizer_multibit_follows_input():
    i, o = Signal(4), Signal(4)
    dut = TwoStageSynchronizer(i, o)
    values = [gray_encode(n) for n in range(16)]
    seen = []

    def gen():
        for value in values:
            yield i.eq(value)
            yield
            seen.append((yield o))
        for _ in range(3):
            yield
            seen.append((yield o))

    run_simulation(dut, gen())
    # Output lags the input by the two stages plus the sampling edge.
    assert seen[2:2 + len(values)] == values


def test_synchronizer_destination_domain():
    i, o = Signal(), Signal()
    dut = TwoStageSynchronizer(i, o, odomain="dst")
    seen = []

    def src():
        yield i.eq(1)
        yield

    def dst():
        for _ in range(6):
            seen.append((yield o))
            yield

    run_simulation(dut, {"src": [src()], "dst": [dst()]}, clocks={"src": 10, "dst": 30})
    assert seen[0] == 0
    assert seen[-1] == 1


# =============================================================================
# Gray Counter
# =============================================================================

def test_gray_counter_single_bit_steps():
    dut = GrayCounter(3)
    rng = random.Random(7)
    samples = []

    def gen():
        for _ in range(40):
            yield dut.ce.eq(int(rng.random() < 0.6))
            yield
            samples.append(((yield dut.q_binary), (yield dut.q)))

    run_simulation(dut, gen())

    for binary, gray in samples:
        assert gray == gray_encode(binary)
        assert gray_decode(gray) == binary
    for (_, a), (_, b) in zip(samples, samples[1:]):
        assert bin(a ^ b).count("1") <= 1
    # Wrapped at least once.
    assert any(b1 > b2 for (b1, _), (b2, _) in zip(samples, samples[1:]))
