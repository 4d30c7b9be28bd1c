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
Unit tests for pingu.ui_render pixel-art rendering.

Covers the art catalog invariants, in-range and out-of-range rendering,
tag substitution and color handling.
"""

import os
import re
import sys
import unittest

# Add parent directory to path to import pingu
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "../..")))

from pingu.art import ART_ROWS, ART_WIDTH, MARKER_GLYPH, TAG_COLORS  # noqa: E402
from pingu.ui_render import ANSI_RESET, colorize_tag, render_ascii_art  # noqa: E402

ANSI_ESCAPE_RE = re.compile(r"\x1b\[[0-9;]*m")

SMALL_ROWS = ("AAAAA", "BBBBB", ".....")
SMALL_TAGS = (("A", "31;1"), ("B", "34;1"))


def strip_ansi(text):
    return ANSI_ESCAPE_RE.sub("", text)


def visible_len(text):
    return len(strip_ansi(text))


class TestArtCatalog(unittest.TestCase):
    """Invariants of the built-in art."""

    def test_rows_have_equal_width(self):
        widths = {len(row) for row in ART_ROWS}
        self.assertEqual(widths, {ART_WIDTH})

    def test_every_tag_has_a_color(self):
        tags = {tag for tag, _codes in TAG_COLORS}
        used = {char for row in ART_ROWS for char in row} - {" ", "."}
        self.assertTrue(used)
        self.assertLessEqual(used, tags)

    def test_tags_are_single_characters(self):
        for tag, _codes in TAG_COLORS:
            self.assertEqual(len(tag), 1)
            self.assertNotIn(tag, (" ", ".", MARKER_GLYPH))


class TestRenderAsciiArt(unittest.TestCase):
    """Tests for render_ascii_art."""

    def test_in_range_rows_keep_visible_width(self):
        for index in range(len(ART_ROWS)):
            rendered = render_ascii_art(index)
            self.assertEqual(visible_len(rendered), ART_WIDTH, msg=f"row {index}")

    def test_in_range_rows_differ_only_at_tags(self):
        tags = {tag for tag, _codes in TAG_COLORS}
        for index, row in enumerate(ART_ROWS):
            plain = strip_ansi(render_ascii_art(index))
            for original, shown in zip(row, plain):
                if original in tags:
                    self.assertEqual(shown, MARKER_GLYPH)
                else:
                    self.assertEqual(shown, original)

    def test_no_tag_survives_rendering(self):
        for index in range(len(ART_ROWS)):
            plain = strip_ansi(render_ascii_art(index))
            for tag, _codes in TAG_COLORS:
                self.assertNotIn(tag, plain)

    def test_out_of_range_is_blank(self):
        for index in (len(ART_ROWS), len(ART_ROWS) + 1, 1000, 65535):
            self.assertEqual(render_ascii_art(index), " " * ART_WIDTH)

    def test_negative_index_is_blank(self):
        self.assertEqual(render_ascii_art(-1), " " * ART_WIDTH)

    def test_rendering_is_repeatable(self):
        for index in (0, 7, 19, 20):
            self.assertEqual(render_ascii_art(index), render_ascii_art(index))

    def test_first_row_has_no_tags(self):
        self.assertEqual(render_ascii_art(0), ART_ROWS[0])

    def test_red_tag_is_colored(self):
        rendered = render_ascii_art(7)
        self.assertIn(f"\x1b[91;1m{MARKER_GLYPH}{ANSI_RESET}", rendered)

    def test_without_color_marker_is_bare(self):
        rendered = render_ascii_art(7, use_color=False)
        self.assertNotIn("\x1b[", rendered)
        self.assertEqual(len(rendered), ART_WIDTH)
        self.assertEqual(rendered, strip_ansi(render_ascii_art(7)))


class TestSmallCatalog(unittest.TestCase):
    """Rendering against a three-row, five-column catalog."""

    def render(self, index):
        return render_ascii_art(index, rows=SMALL_ROWS, tags=SMALL_TAGS)

    def test_first_row_all_red(self):
        self.assertEqual(self.render(0), f"\x1b[31;1m#{ANSI_RESET}" * 5)

    def test_second_row_all_blue(self):
        self.assertEqual(self.render(1), f"\x1b[34;1m#{ANSI_RESET}" * 5)

    def test_untagged_row_unchanged(self):
        self.assertEqual(self.render(2), ".....")

    def test_past_end_is_blank(self):
        self.assertEqual(self.render(5), "     ")

    def test_visible_width_preserved(self):
        for index in range(6):
            self.assertEqual(visible_len(self.render(index)), 5)


class TestColorizeTag(unittest.TestCase):
    """Tests for colorize_tag."""

    def test_replaces_every_occurrence(self):
        result = colorize_tag("xAyAz", "A", "31", use_color=False)
        self.assertEqual(result, "x#y#z")

    def test_leaves_other_characters(self):
        result = colorize_tag(". B .", "A", "31")
        self.assertEqual(result, ". B .")


if __name__ == "__main__":
    unittest.main()
