"""Error diffusion dithering onto the tri-color palette.

Error is carried in two scanline accumulators: ``current`` holds what is
owed to pixels of the row being processed, ``next`` collects what the
following row will receive. Weights are in 32nds and each kernel sums to
16, so only half of every residual is passed on.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

import numpy as np

from tricolor.core.palette import TRICOLOR_PALETTE, Ink, Palette, nearest_index
from tricolor.core.pixels import PixelBuffer

ERROR_DIVISOR = 32

CURRENT_ROW = 0
NEXT_ROW = 1

# (target row, column offset, weight)
LEFT_EDGE_KERNEL = ((NEXT_ROW, 0, 7), (NEXT_ROW, 1, 2), (CURRENT_ROW, 1, 7))
RIGHT_EDGE_KERNEL = ((NEXT_ROW, -1, 7), (NEXT_ROW, 0, 9))
INTERIOR_KERNEL = (
    (NEXT_ROW, -1, 3),
    (NEXT_ROW, 0, 5),
    (NEXT_ROW, 1, 1),
    (CURRENT_ROW, 1, 7),
)


@dataclass(frozen=True)
class Window:
    """Region of the source image to render, in source pixel coordinates.

    Parts of the window outside the source are filled with a checkerboard.
    """

    x: int
    y: int
    width: int
    height: int


def kernel_for_column(i: int, width: int) -> tuple[tuple[int, int, int], ...]:
    """Pick the diffusion kernel for window column ``i``.

    The left edge wins when the window is a single column wide.
    """
    if i == 0:
        return LEFT_EDGE_KERNEL
    if i == width - 1:
        return RIGHT_EDGE_KERNEL
    return INTERIOR_KERNEL


def checkerboard_index(i: int, j: int) -> int:
    """Palette index used for positions outside the source image."""
    return Ink.WHITE if (i + j) % 2 == 0 else Ink.BLACK


def dither(
    pixels: PixelBuffer,
    palette: Palette = TRICOLOR_PALETTE,
    window: Window | None = None,
    on_progress: Callable[[int, int], None] | None = None,
) -> PixelBuffer:
    """Quantize ``pixels`` to ``palette`` with error diffusion.

    Args:
        pixels: source RGBA image. Alpha is ignored.
        palette: reference colors. The fixed tri-color set by default.
        window: region to render. Defaults to the whole image.
        on_progress: callback(rows_done, total_rows), called after each row.
            Raising from it stops the pass.

    Returns:
        PixelBuffer of the window's size whose pixels are all palette colors
        with alpha 255.

    Raises:
        ValueError: if the window has non-positive dimensions, or reaches
            outside the source with a palette of fewer than two colors.
    """
    if window is None:
        window = Window(0, 0, pixels.width, pixels.height)
    w, h = window.width, window.height
    if w <= 0 or h <= 0:
        raise ValueError(f"Invalid window dimensions: {w}x{h}")

    src = pixels.data
    src_w, src_h = pixels.width, pixels.height
    outside = (
        window.x < 0
        or window.y < 0
        or window.x + w > src_w
        or window.y + h > src_h
    )
    if outside and len(palette) < 2:
        raise ValueError("Checkerboard fill needs at least two palette colors")

    colors = palette.as_array()
    indices = np.empty((h, w), dtype=np.intp)

    # Ping-pong accumulators; cur/nxt pick the role of each row.
    errors = [[[0.0, 0.0, 0.0] for _ in range(w)] for _ in range(2)]
    cur, nxt = 0, 1

    for j in range(h):
        y = window.y + j
        if y < 0 or y >= src_h:
            indices[j] = [checkerboard_index(i, j) for i in range(w)]
            if on_progress:
                on_progress(j + 1, h)
            continue

        cur, nxt = nxt, cur
        for acc in errors[nxt]:
            acc[0] = acc[1] = acc[2] = 0.0
        rows = (errors[cur], errors[nxt])  # indexed by CURRENT_ROW, NEXT_ROW
        src_row = src[y].tolist()
        row_indices = []

        for i in range(w):
            x = window.x + i
            if x < 0 or x >= src_w:
                row_indices.append(checkerboard_index(i, j))
                continue

            old = rows[CURRENT_ROW][i]
            sr, sg, sb = src_row[x][:3]
            r = sr + old[0]
            g = sg + old[1]
            b = sb + old[2]

            idx = nearest_index(r, g, b, palette)
            row_indices.append(idx)
            pr, pg, pb = palette.colors[idx]
            er, eg, eb = r - pr, g - pg, b - pb

            for row, offset, weight in kernel_for_column(i, w):
                target = i + offset
                if 0 <= target < w:
                    acc = rows[row][target]
                    acc[0] += er * weight / ERROR_DIVISOR
                    acc[1] += eg * weight / ERROR_DIVISOR
                    acc[2] += eb * weight / ERROR_DIVISOR

        indices[j] = row_indices
        if on_progress:
            on_progress(j + 1, h)

    out = np.empty((h, w, 4), dtype=np.uint8)
    out[:, :, :3] = colors[indices]
    out[:, :, 3] = 255
    return PixelBuffer(out)
