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
ICMP echo transport for pingu.

This module sends a single ICMP echo request with scapy (sr) and waits for the
matching echo reply. Sending raw packets needs the cap_net_raw capability
(or root); without it scapy raises PermissionError, which is propagated to
the caller.

The transport follows a small contract:
  - A matching echo reply returns EchoReply(rtt, nbytes, src, ttl)
  - A timeout, or a reply that is not an echo reply for our identifier and
    sequence, returns None (lost packet, not an error)
  - Socket and scapy failures raise OSError / Scapy_Exception
"""

import logging
from typing import NamedTuple, Optional

from scapy.layers.inet import ICMP, IP
from scapy.packet import Raw
from scapy.sendrecv import sr

logger = logging.getLogger(__name__)

# scapy logs interface warnings on import and on every send otherwise.
logging.getLogger("scapy.runtime").setLevel(logging.ERROR)

ICMP_ECHO_REPLY = 0
MAX_PAYLOAD_SIZE = 65507


class EchoReply(NamedTuple):
    """A matched echo reply."""

    rtt: float
    nbytes: int
    src: str
    ttl: int


def build_payload(size: int) -> bytes:
    """Build a deterministic payload of the requested size."""
    return bytes(index & 0xFF for index in range(size))


def echo_request(
    ip_addr: str,
    seq: int,
    ident: int,
    size: int = 56,
    ttl: int = 64,
    timeout: float = 1.0,
) -> Optional[EchoReply]:
    """
    Send one ICMP echo request and wait for its reply.

    Args:
        ip_addr: Destination IPv4 address (already resolved)
        seq: ICMP sequence number (0-65535)
        ident: ICMP identifier (0-65535)
        size: Payload size in bytes (0-65507)
        ttl: IP time to live of the request
        timeout: Seconds to wait for the reply

    Returns:
        EchoReply for a matching reply, None on timeout or mismatch

    Raises:
        ValueError: If seq, ident, size, ttl or timeout is out of range
        OSError: If the raw socket cannot be opened or used
    """
    if not 0 <= seq <= 0xFFFF:
        raise ValueError("seq must be between 0 and 65535.")
    if not 0 <= ident <= 0xFFFF:
        raise ValueError("ident must be between 0 and 65535.")
    if not 0 <= size <= MAX_PAYLOAD_SIZE:
        raise ValueError(f"size must be between 0 and {MAX_PAYLOAD_SIZE}.")
    if not 1 <= ttl <= 255:
        raise ValueError("ttl must be between 1 and 255.")
    if timeout <= 0:
        raise ValueError("timeout must be a positive number of seconds.")

    request = IP(dst=ip_addr, ttl=ttl) / ICMP(id=ident, seq=seq) / Raw(load=build_payload(size))

    answered, _unanswered = sr(request, timeout=timeout, verbose=0)

    if not answered:
        logger.debug("No reply from %s: seq=%d", ip_addr, seq)
        return None
    sent, reply = answered[0]

    if not reply.haslayer(ICMP):
        logger.debug("Non-ICMP answer from %s: seq=%d", reply.src, seq)
        return None
    icmp = reply[ICMP]
    if icmp.type != ICMP_ECHO_REPLY or icmp.id != ident or icmp.seq != seq:
        logger.debug(
            "Unexpected ICMP answer from %s: type=%s id=%s seq=%s",
            reply.src,
            icmp.type,
            icmp.id,
            icmp.seq,
        )
        return None

    # scapy stamps the request when it leaves and the reply when it is sniffed.
    rtt = max(0.0, float(reply.time) - float(sent.sent_time))
    return EchoReply(rtt=rtt, nbytes=len(icmp), src=reply.src, ttl=reply.ttl)
