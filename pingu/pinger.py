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
# Review for correctness and security.

"""
Ping functionality for pingu.

The Pinger owns a ping session against a single host: it resolves the host
once, sends one echo request per interval, reports each reply through the
on_recv callback and the final statistics through on_finish. A session ends
when the requested count is reached or when stop() is called; stop() only
sets an event, so it is safe from a signal handler or another thread.
"""

import logging
import os
import socket
import threading
from typing import Callable, List, Optional

from scapy.error import Scapy_Exception

from pingu.ping_wrapper import echo_request
from pingu.stats import Duration, Packet, Statistics, compute_statistics

logger = logging.getLogger(__name__)

SEQUENCE_MODULO = 65536
JOIN_POLL_INTERVAL = 0.1


class PingerError(RuntimeError):
    """Raised when a ping session cannot be set up or run."""


class ResolveError(PingerError):
    """Raised when the target host cannot be resolved."""

    def __init__(self, host: str, reason: str):
        super().__init__(f"cannot resolve {host!r}: {reason}")
        self.host = host


def resolve_host(host: str) -> str:
    """Resolve a hostname or dotted-quad to an IPv4 address."""
    if not host:
        raise ResolveError(host, "empty host")
    try:
        return socket.gethostbyname(host)
    except (socket.gaierror, socket.herror, UnicodeError) as exc:
        raise ResolveError(host, str(exc)) from exc


class Pinger:
    """ICMP echo session against one host."""

    def __init__(
        self,
        host: str,
        count: int = 0,
        interval: float = 1.0,
        timeout: float = 1.0,
        size: int = 56,
        ttl: int = 64,
    ):
        self.addr = host
        self.ip_addr = resolve_host(host)
        self.count = count
        self.interval = interval
        self.timeout = timeout
        self.size = size
        self.ttl = ttl
        self.ident = os.getpid() & 0xFFFF
        self.on_recv: Optional[Callable[[Packet], None]] = None
        self.on_finish: Optional[Callable[[Statistics], None]] = None
        self.sequence = 0
        self.packets_sent = 0
        self.packets_recv = 0
        self._rtts: List[float] = []
        self._stop_event = threading.Event()

    def stop(self) -> None:
        """Request the run loop to end after the current request."""
        self._stop_event.set()

    @property
    def stopped(self) -> bool:
        return self._stop_event.is_set()

    def statistics(self) -> Statistics:
        return compute_statistics(self.addr, self.ip_addr, self.packets_sent, self.packets_recv, self._rtts)

    def run(self) -> None:
        """
        Run the session until count is reached or stop() is called.

        The send loop runs on a worker thread while the calling thread waits
        for it in short timed joins. A signal handler on the calling thread
        can then call stop() without ever interrupting the loop's own
        Event.wait(), and it runs within JOIN_POLL_INTERVAL of the signal
        whichever thread the signal was delivered to.
        on_recv and on_finish are called from the worker thread; on_finish
        is called exactly once when the loop ends normally.

        Raises:
            PingerError: If sending fails (e.g. no raw-socket privileges)
        """
        errors: List[BaseException] = []

        def _worker() -> None:
            try:
                self._run_loop()
            except Exception as exc:  # pylint: disable=broad-except
                errors.append(exc)

        worker = threading.Thread(target=_worker, name=f"pingu-{self.addr}", daemon=True)
        worker.start()
        while worker.is_alive():
            worker.join(JOIN_POLL_INTERVAL)
        if errors:
            raise errors[0]

    def _run_loop(self) -> None:
        logger.debug("Pinging %s (%s) count=%d interval=%.2fs", self.addr, self.ip_addr, self.count, self.interval)
        try:
            while not self._stop_event.is_set():
                if self.count > 0 and self.packets_sent >= self.count:
                    break
                self._send_one()
                if self.count > 0 and self.packets_sent >= self.count:
                    break
                self._stop_event.wait(self.interval)
        except (OSError, Scapy_Exception) as exc:
            raise PingerError(f"failed to send echo request to {self.ip_addr}: {exc}") from exc

        stats = self.statistics()
        logger.debug("Finished %s: %d sent, %d received", self.addr, stats.packets_sent, stats.packets_recv)
        if self.on_finish is not None:
            self.on_finish(stats)

    def _send_one(self) -> None:
        seq = self.sequence % SEQUENCE_MODULO
        self.sequence += 1
        self.packets_sent += 1
        reply = echo_request(
            self.ip_addr,
            seq,
            self.ident,
            size=self.size,
            ttl=self.ttl,
            timeout=self.timeout,
        )
        if reply is None:
            return
        self.packets_recv += 1
        self._rtts.append(reply.rtt)
        packet = Packet(
            seq=seq,
            nbytes=reply.nbytes,
            ip_addr=reply.src,
            addr=self.addr,
            ttl=reply.ttl,
            rtt=Duration(reply.rtt),
        )
        if self.on_recv is not None:
            self.on_recv(packet)
