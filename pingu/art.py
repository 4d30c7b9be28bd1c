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
Pixel-art data for pingu.

ART_ROWS is the penguin revealed one row per received reply. Each row mixes
plain characters ('.' and space) with single-letter color tags that the
renderer replaces with colored marker glyphs.
"""

from typing import Tuple

ART_ROWS: Tuple[str, ...] = (
    " ...        .     ...   ..    ..     .........           ",
    " ...     ....          ..  ..      ... .....  .. ..      ",
    " ...    .......      ...         ... . ..... BBBBBBB     ",
    ".....  ........ .BBBBBBBBBBBBBBB.....  ... BBBBBBBBBB.  .",
    " .... ........BBBBBBBBBBBBBBBBBBBBB.  ... BBBBBBBBBBB    ",
    "      ....... BBWWWWBBBBBBBBBBBBBBBB.... BBBBBBBBBBBB    ",
    ".    .  .... BBWWBBWWBBBBBBBBBBWWWWBB... BBBBBBBBBBB     ",
    "   ..   ....BBBBWWWWBBRRRRRRBBWWBBWWB.. .BBBBBBBBBBB     ",
    "    .       BBBBBBBBRRRRRRRRRRBWWWWBB.   .BBBBBBBBBB     ",
    "   ....     .BBBBBBBBRRRRRRRRBBBBBBBB.      BBBBBBBB     ",
    "  .....      .  BBBBBBBBBBBBBBBBBBBB.        BBBBBBB.    ",
    "......     .. . BBBBBBBBBBBBBBBBBB . .      .BBBBBBB     ",
    "......       BBBBBBBBBBBBBBBBBBBBB  .      .BBBBBBB      ",
    "......   .BBBBBBBBBBBBBBBBBBYYWWBBBBB  ..  BBBBBBB       ",
    "...    . BBBBBBBBBBBBBBBBYWWWWWWWWWBBBBBBBBBBBBBB.       ",
    "       BBBBBBBBBBBBBBBBYWWWWWWWWWWWWWBBBBBBBBB .         ",
    "      BBBBBBBBBBBBBBBYWWWWWWWWWWWWWWWWBB    .            ",
    "     BBBBBBBBBBBBBBBYWWWWWWWWWWWWWWWWWWW  ........       ",
    "  .BBBBBBBBBBBBBBBBYWWWWWWWWWWWWWWWWWWWW    .........    ",
    " .BBBBBBBBBBBBBBBBYWWWWWWWWWWWWWWWWWWWWWW       .... . . ",
)

ART_WIDTH = len(ART_ROWS[0])

# ANSI SGR codes, applied in this order by the renderer.
TAG_COLORS: Tuple[Tuple[str, str], ...] = (
    ("R", "91;1"),  # Bold bright red
    ("Y", "93;1"),  # Bold bright yellow
    ("B", "90;1"),  # Bold bright black
    ("W", "97;1"),  # Bold bright white
)

MARKER_GLYPH = "#"
