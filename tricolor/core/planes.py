"""Split a quantized image into the panel's ink planes.

A red/black panel or two-ink press takes one monochrome mask per ink.
The red-only plane marks red pixels black and clears black pixels to
white; the black-only plane marks both red and black pixels black.
"""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from tricolor.core.palette import TRICOLOR_PALETTE, Ink, Palette
from tricolor.core.pixels import PixelBuffer


@dataclass
class Planes:
    """RGB images derived from one dithering pass."""

    combined: np.ndarray  # (H, W, 3) uint8, tri-color preview
    red_only: np.ndarray
    black_only: np.ndarray

    @property
    def width(self) -> int:
        return int(self.combined.shape[1])

    @property
    def height(self) -> int:
        return int(self.combined.shape[0])


def _mask(rgb: np.ndarray, color: tuple[int, int, int]) -> np.ndarray:
    return np.all(rgb == np.array(color, dtype=np.uint8), axis=2)


def split_planes(quantized: PixelBuffer, palette: Palette = TRICOLOR_PALETTE) -> Planes:
    """Derive combined, red-only and black-only planes from a dithered image."""
    black = palette[Ink.BLACK]
    white = palette[Ink.WHITE]
    red = palette[Ink.RED]

    combined = quantized.rgb()
    is_red = _mask(combined, red)
    is_black = _mask(combined, black)

    red_only = combined.copy()
    red_only[is_red] = black
    red_only[is_black] = white

    black_only = combined.copy()
    black_only[is_red] = black

    return Planes(combined=combined, red_only=red_only, black_only=black_only)
