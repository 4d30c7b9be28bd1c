#!/usr/bin/env python3
# Copyright 2025 icecake0141
# SPDX-License-Identifier: Apache-2.0
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# This file was created or modified with the assistance of an AI (Large Language Model).
# Review required for correctness, security, and licensing.

"""
Statistics computation for pingu.

This module holds the values the pinger hands to its callbacks: one Packet
per echo reply and a Statistics summary when the run ends. Round-trip times
are Duration values, which print in a compact human form ("12.345ms").
"""

import math
from dataclasses import dataclass, field
from typing import List, Sequence


def _trim(value: float) -> str:
    return f"{value:.3f}".rstrip("0").rstrip(".")


class Duration(float):
    """A span of time in seconds that prints with a unit suffix."""

    def __str__(self) -> str:
        seconds = float(self)
        sign = "-" if seconds < 0 else ""
        seconds = abs(seconds)
        if seconds == 0:
            return "0s"
        if seconds < 1e-6:
            return f"{sign}{round(seconds * 1e9)}ns"
        if seconds < 1e-3:
            return f"{sign}{_trim(seconds * 1e6)}µs"
        if seconds < 1:
            return f"{sign}{_trim(seconds * 1e3)}ms"
        return f"{sign}{_trim(seconds)}s"

    def __format__(self, format_spec: str) -> str:
        if not format_spec:
            return str(self)
        return format(float(self), format_spec)


@dataclass(frozen=True)
class Packet:
    """A single echo reply."""

    seq: int
    nbytes: int
    ip_addr: str
    addr: str
    ttl: int
    rtt: Duration


@dataclass(frozen=True)
class Statistics:
    """Summary of a finished ping session."""

    addr: str
    ip_addr: str
    packets_sent: int
    packets_recv: int
    packet_loss: float
    min_rtt: Duration
    avg_rtt: Duration
    max_rtt: Duration
    stddev_rtt: Duration
    rtts: List[Duration] = field(default_factory=list)


def compute_packet_loss(packets_sent, packets_recv):
    """
    Compute the packet loss percentage.

    Args:
        packets_sent: Number of echo requests sent
        packets_recv: Number of echo replies received

    Returns:
        Loss as a percentage (0.0 to 100.0), 0.0 when nothing was sent
    """
    if packets_sent <= 0:
        return 0.0
    return (packets_sent - packets_recv) / packets_sent * 100.0


def compute_stddev(values, mean):
    """Population standard deviation of values around mean."""
    if not values:
        return 0.0
    variance = sum((value - mean) ** 2 for value in values) / len(values)
    return math.sqrt(variance)


def compute_statistics(
    addr: str,
    ip_addr: str,
    packets_sent: int,
    packets_recv: int,
    rtts: Sequence[float],
) -> Statistics:
    """
    Build a Statistics summary from raw counters and round-trip times.

    Args:
        addr: Host as given by the user
        ip_addr: Resolved address of the host
        packets_sent: Number of echo requests sent
        packets_recv: Number of echo replies received
        rtts: Round-trip times in seconds, one per reply

    Returns:
        Statistics with min/avg/max/stddev as Duration values (zero when
        no reply was received)
    """
    durations = [Duration(rtt) for rtt in rtts]
    if durations:
        min_rtt = min(durations)
        max_rtt = max(durations)
        avg_rtt = sum(durations) / len(durations)
        stddev_rtt = compute_stddev(durations, avg_rtt)
    else:
        min_rtt = max_rtt = avg_rtt = stddev_rtt = 0.0
    return Statistics(
        addr=addr,
        ip_addr=ip_addr,
        packets_sent=packets_sent,
        packets_recv=packets_recv,
        packet_loss=compute_packet_loss(packets_sent, packets_recv),
        min_rtt=Duration(min_rtt),
        avg_rtt=Duration(avg_rtt),
        max_rtt=Duration(max_rtt),
        stddev_rtt=Duration(stddev_rtt),
        rtts=durations,
    )
