"""Save output planes as PNG files."""

from __future__ import annotations

from pathlib import Path
from typing import Callable

import numpy as np
from PIL import Image

from tricolor.core.planes import Planes


class ImageEncodeError(IOError):
    """An output image could not be encoded or written."""


def save_image(rgb: np.ndarray, output_path: Path) -> None:
    """Write an (H, W, 3) uint8 array as an RGB PNG.

    Raises:
        ImageEncodeError: if Pillow cannot encode or write the file.
    """
    try:
        Image.fromarray(rgb).convert("RGB").save(str(output_path), format="PNG")
    except (OSError, ValueError) as e:
        raise ImageEncodeError(f"Cannot write {output_path}: {e}") from e


def save_planes(
    planes: Planes,
    red_path: Path,
    black_path: Path,
    result_path: Path,
    on_saved: Callable[[Path], None] | None = None,
) -> None:
    """Write red-only, black-only and combined planes, in that order.

    Files already written stay on disk if a later write fails.
    """
    for rgb, path in (
        (planes.red_only, red_path),
        (planes.black_only, black_path),
        (planes.combined, result_path),
    ):
        save_image(rgb, path)
        if on_saved:
            on_saved(path)
