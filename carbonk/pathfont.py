"""Line-based font: per-glyph widths, character strings and stroke coordinates."""

from __future__ import annotations

import warnings
from typing import Sequence


class PathFont:
    """A stroke font built from flat tables of glyph data.

    ``glyph_char_starts`` and ``glyph_coord_starts`` each hold one more entry
    than there are glyphs; entry ``i`` and ``i + 1`` bound glyph ``i``'s slice
    of ``chars`` and ``coords`` respectively.
    """

    def __init__(
        self,
        glyph_widths: Sequence[float],
        glyph_char_starts: Sequence[int],
        chars: bytes,
        glyph_coord_starts: Sequence[int],
        coords: Sequence[float],
    ):
        self.glyph_widths = list(glyph_widths)
        self.glyph_char_starts = list(glyph_char_starts)
        self.chars = bytes(chars)
        self.glyph_coord_starts = list(glyph_coord_starts)
        self.coords = list(coords)
        self.glyph_map: dict[str, int] = {}

        for index in range(self.glyphs):
            begin = self.glyph_char_starts[index]
            end = self.glyph_char_starts[index + 1]
            text = self.chars[begin:end].decode("utf-8", errors="replace")
            if text in self.glyph_map:
                warnings.warn(f"ignoring duplicate glyph for '{text}'.", stacklevel=2)
                continue
            self.glyph_map[text] = index

    @property
    def glyphs(self) -> int:
        """Number of glyphs in the font."""
        return len(self.glyph_widths)

    def glyph_coords(self, index: int) -> list[float]:
        """The stroke coordinates belonging to glyph ``index``."""
        begin = self.glyph_coord_starts[index]
        end = self.glyph_coord_starts[index + 1]
        return self.coords[begin:end]