#
# AXI-Lite APB Bridge - Bus Interfaces and Stream Layouts
#
# Copyright (c) 2026 Shareef Jalloq
# SPDX-License-Identifier: BSD-2-Clause
#
# Control-bus (AXI4-Lite style) channels, peripheral-bus (APB style) record
# and the internal command/response stream descriptions carried by the
# CDC queues.
#

from migen import *

from litex.gen import *
from litex.soc.interconnect.stream import Endpoint, EndpointDescription


# =============================================================================
# Control Bus Channel Descriptions
# =============================================================================

def aw_description(address_width):
    return EndpointDescription([("addr", address_width)])


def w_description(data_width):
    return EndpointDescription([
        ("data", data_width),
        ("strb", data_width//8),
    ])


def b_description():
    return EndpointDescription([("resp", 2)])


def ar_description(address_width):
    return EndpointDescription([("addr", address_width)])


def r_description(data_width):
    return EndpointDescription([
        ("data", data_width),
        ("resp", 2),
    ])


# =============================================================================
# Internal Stream Descriptions
# =============================================================================

def write_command_description(address_width, data_width):
    """Paired AW + W capture, carried by the write-command queue."""
    return EndpointDescription([
        ("addr", address_width),
        ("data", data_width),
        ("strb", data_width//8),
    ])


def read_command_description(address_width):
    """AR capture, carried by the read-command queue."""
    return EndpointDescription([("addr", address_width)])


def request_description(address_width, data_width):
    """Arbitrated request presented to the back end."""
    return EndpointDescription([
        ("we",   1),
        ("addr", address_width),
        ("data", data_width),
        ("strb", data_width//8),
    ])


def response_description(data_width):
    """Peripheral result, carried by both response queues."""
    return EndpointDescription([
        ("we",    1),
        ("data",  data_width),
        ("error", 1),
    ])


# =============================================================================
# Control Bus Interface
# =============================================================================

class ControlBusInterface:
    """
    AXI4-Lite style slave port: five independent valid/ready channels.

    aw, w, ar carry requests from the master; b, r carry responses to it.
    Data moves on a channel in the cycle both valid and ready are high.
    """

    def __init__(self, address_width=32, data_width=32):
        self.address_width = address_width
        self.data_width    = data_width

        self.aw = Endpoint(aw_description(address_width))
        self.w  = Endpoint(w_description(data_width))
        self.b  = Endpoint(b_description())
        self.ar = Endpoint(ar_description(address_width))
        self.r  = Endpoint(r_description(data_width))

    @property
    def channels(self):
        return [self.aw, self.w, self.b, self.ar, self.r]

    def flatten(self):
        # Handshake and payload only; first/last are unused on AXI-Lite.
        for channel in self.channels:
            yield channel.valid
            yield channel.ready
            yield from channel.payload.flatten()


# =============================================================================
# APB Interface
# =============================================================================

def apb_layout(address_width, data_width, num_targets):
    return [
        ("paddr",   address_width, DIR_M_TO_S),
        ("psel",    num_targets,   DIR_M_TO_S),
        ("penable", 1,             DIR_M_TO_S),
        ("pwrite",  1,             DIR_M_TO_S),
        ("pwdata",  data_width,    DIR_M_TO_S),
        ("pstrb",   data_width//8, DIR_M_TO_S),
        ("prdata",  data_width,    DIR_S_TO_M),
        ("pready",  1,             DIR_S_TO_M),
        ("pslverr", 1,             DIR_S_TO_M),
    ]


class APBInterface(Record):
    """
    APB (AMBA 3/4) peripheral bus, master view.

    psel is one bit per target. A transfer is one SETUP cycle (psel high,
    penable low) followed by ACCESS cycles (psel and penable high) until the
    peripheral raises pready, optionally with pslverr.
    """

    def __init__(self, address_width=32, data_width=32, num_targets=1, name=None):
        self.address_width = address_width
        self.data_width    = data_width
        self.num_targets   = num_targets
        Record.__init__(self, apb_layout(address_width, data_width, num_targets), name=name)
