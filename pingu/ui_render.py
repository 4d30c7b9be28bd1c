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
UI rendering functions for pingu.

This module turns ping events into terminal text: ANSI color helpers, the
pixel-art renderer that reveals one row of the penguin per reply, and the
formatters for the start banner, per-packet lines and the final report.
"""

import os
import sys
from typing import Optional, Sequence, TextIO, Tuple

from pingu.art import ART_ROWS, MARKER_GLYPH, TAG_COLORS
from pingu.stats import Packet, Statistics

ANSI_RESET = "\x1b[0m"

# Bold bright colors, one per packet/summary field.
FIELD_COLORS = {
    "seq": "93;1",  # Yellow
    "nbytes": "94;1",  # Blue
    "ip_addr": "94;1",  # Blue
    "ttl": "96;1",  # Cyan
    "rtt": "95;1",  # Magenta
    "label": "97;1",  # White
    "sent": "96;1",  # Cyan
    "recv": "94;1",  # Blue
    "loss": "91;1",  # Red
    "min_rtt": "94;1",  # Blue
    "avg_rtt": "96;1",  # Cyan
    "max_rtt": "92;1",  # Green
    "stddev_rtt": "35;1",  # Magenta
}

# ---------------------------------------------------------------------------
# ANSI/Text Utility Functions
# ---------------------------------------------------------------------------


def colorize_text(text: object, codes: str, use_color: bool) -> str:
    """Wrap text in an ANSI SGR sequence when color is enabled."""
    text = str(text)
    if not use_color:
        return text
    return f"\x1b[{codes}m{text}{ANSI_RESET}"


def should_use_color(stream: Optional[TextIO] = None, enabled: bool = True) -> bool:
    """
    Decide whether output to stream should carry ANSI colors.

    Colors are off when disabled by option, when NO_COLOR is set, or when the
    stream is not a terminal.
    """
    if not enabled or "NO_COLOR" in os.environ:
        return False
    stream = stream if stream is not None else sys.stdout
    isatty = getattr(stream, "isatty", None)
    try:
        return bool(isatty and isatty())
    except ValueError:
        # Closed stream
        return False


# ---------------------------------------------------------------------------
# Pixel Art
# ---------------------------------------------------------------------------


def colorize_tag(line: str, tag: str, codes: str, use_color: bool = True) -> str:
    """Replace every occurrence of tag in line with a colored marker glyph."""
    return line.replace(tag, colorize_text(MARKER_GLYPH, codes, use_color))


def render_ascii_art(
    index: int,
    rows: Sequence[str] = ART_ROWS,
    tags: Sequence[Tuple[str, str]] = TAG_COLORS,
    use_color: bool = True,
) -> str:
    """
    Render one row of the pixel art.

    Tags are substituted one pass per tag, in the order given, on the row as
    left by the previous passes. The visible width of the result always
    equals the width of the first row.

    Args:
        index: Row to render, normally the packet sequence number
        rows: The art catalog
        tags: Ordered (tag, ANSI codes) pairs
        use_color: Emit ANSI codes around the marker glyphs

    Returns:
        The rendered row, or a blank row when index is outside the catalog
    """
    if index < 0 or index >= len(rows):
        return " " * len(rows[0])

    line = rows[index]
    for tag, codes in tags:
        line = colorize_tag(line, tag, codes, use_color)
    return line


# ---------------------------------------------------------------------------
# Output Formatting
# ---------------------------------------------------------------------------


def format_banner(addr: str, ip_addr: str) -> str:
    """Build the session start banner."""
    return f"PING {addr} ({ip_addr}):"


def format_packet_line(packet: Packet, use_color: bool = True) -> str:
    """Build the output line for one echo reply, led by its art row."""
    return "{art} seq={seq} {nbytes} bytes from {ip_addr}: ttl={ttl} time={rtt}".format(
        art=render_ascii_art(packet.seq, use_color=use_color),
        seq=colorize_text(packet.seq, FIELD_COLORS["seq"], use_color),
        nbytes=colorize_text(packet.nbytes, FIELD_COLORS["nbytes"], use_color),
        ip_addr=colorize_text(packet.ip_addr, FIELD_COLORS["ip_addr"], use_color),
        ttl=colorize_text(packet.ttl, FIELD_COLORS["ttl"], use_color),
        rtt=colorize_text(packet.rtt, FIELD_COLORS["rtt"], use_color),
    )


def format_summary(stats: Statistics, use_color: bool = True) -> str:
    """
    Build the final statistics report.

    The report starts with an empty line so it separates from the packet
    lines, followed by a header, the packet counters and the round-trip
    line. Values are laid out as the pinger formats them.
    """
    lines = [
        "",
        f"───── {stats.addr} ping statistics ─────",
        "{label} {sent} packets transmitted => {recv} packets received, ({loss} packet loss)".format(
            label=colorize_text("PACKET STATISTICS", FIELD_COLORS["label"], use_color),
            sent=colorize_text(stats.packets_sent, FIELD_COLORS["sent"], use_color),
            recv=colorize_text(stats.packets_recv, FIELD_COLORS["recv"], use_color),
            loss=colorize_text(f"{stats.packet_loss:g}%", FIELD_COLORS["loss"], use_color),
        ),
        "{label}: min={min_rtt} avg={avg_rtt} max={max_rtt} stddev={stddev_rtt}".format(
            label=colorize_text("ROUND TRIP", FIELD_COLORS["label"], use_color),
            min_rtt=colorize_text(stats.min_rtt, FIELD_COLORS["min_rtt"], use_color),
            avg_rtt=colorize_text(stats.avg_rtt, FIELD_COLORS["avg_rtt"], use_color),
            max_rtt=colorize_text(stats.max_rtt, FIELD_COLORS["max_rtt"], use_color),
            stddev_rtt=colorize_text(stats.stddev_rtt, FIELD_COLORS["stddev_rtt"], use_color),
        ),
    ]
    return "\n".join(lines)


def print_packet(packet: Packet, use_color: bool = True, stream: Optional[TextIO] = None) -> None:
    """on_recv callback: write the packet line to stdout."""
    print(format_packet_line(packet, use_color), file=stream if stream is not None else sys.stdout, flush=True)


def print_summary(stats: Statistics, use_color: bool = True, stream: Optional[TextIO] = None) -> None:
    """on_finish callback: write the statistics report to stdout."""
    print(format_summary(stats, use_color), file=stream if stream is not None else sys.stdout, flush=True)
