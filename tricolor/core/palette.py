"""Fixed tri-color palette and nearest-color lookup."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Sequence

import numpy as np

RGB = tuple[int, int, int]


class Ink(IntEnum):
    """Palette indices of the tri-color panel."""

    BLACK = 0
    WHITE = 1
    RED = 2


BLACK: RGB = (0, 0, 0)
WHITE: RGB = (255, 255, 255)
DARK_RED: RGB = (127, 0, 0)


@dataclass(frozen=True)
class Palette:
    """Ordered reference colors. Position in `colors` is the palette index."""

    colors: tuple[RGB, ...]

    def __post_init__(self) -> None:
        if not self.colors:
            raise ValueError("Palette must contain at least one color")
        for color in self.colors:
            if len(color) != 3 or any(not 0 <= c <= 255 for c in color):
                raise ValueError(f"Invalid palette color: {color}")

    def __len__(self) -> int:
        return len(self.colors)

    def __getitem__(self, index: int) -> RGB:
        return self.colors[index]

    def as_array(self) -> np.ndarray:
        """Return colors as a (len, 3) uint8 array."""
        return np.array(self.colors, dtype=np.uint8)


TRICOLOR_PALETTE = Palette((BLACK, WHITE, DARK_RED))


def squared_distance(r: float, g: float, b: float, color: Sequence[int]) -> float:
    """Squared Euclidean distance between (r, g, b) and a palette color."""
    dr = r - color[0]
    dg = g - color[1]
    db = b - color[2]
    return dr * dr + dg * dg + db * db


def nearest_index(
    r: float, g: float, b: float, palette: Palette = TRICOLOR_PALETTE
) -> int:
    """Return the index of the palette color closest to (r, g, b).

    Components may lie outside 0-255 once diffused error has been added;
    they are compared as-is. On a tie the earliest palette entry wins.
    """
    best = 0
    best_err = squared_distance(r, g, b, palette.colors[0])
    for idx in range(1, len(palette.colors)):
        err = squared_distance(r, g, b, palette.colors[idx])
        if err < best_err:
            best_err = err
            best = idx
    return best
