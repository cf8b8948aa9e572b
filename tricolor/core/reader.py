"""Load source images into RGBA pixel buffers.

The format is sniffed from file content by Pillow, so the extension does
not matter. Animated inputs contribute their first frame only.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from PIL import Image, UnidentifiedImageError

from tricolor.core.pixels import PixelBuffer


class ImageDecodeError(ValueError):
    """The input file exists but could not be decoded as an image."""


@dataclass
class ImageInfo:
    """Metadata about the loaded file."""

    path: Path
    format: str  # Pillow format name, e.g. "PNG"
    mode: str  # mode before conversion to RGBA
    width: int
    height: int


def load_image(path: str | Path) -> tuple[PixelBuffer, ImageInfo]:
    """Decode an image file to RGBA8.

    Raises:
        FileNotFoundError: if the path does not exist.
        ImageDecodeError: if the file is not a readable image.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"File not found: {path}")

    try:
        with Image.open(path) as img:
            img.load()
            info = ImageInfo(
                path=path,
                format=img.format or "unknown",
                mode=img.mode,
                width=img.width,
                height=img.height,
            )
            pixels = PixelBuffer.from_image(img)
    except (UnidentifiedImageError, OSError) as e:
        raise ImageDecodeError(f"Cannot decode image {path}: {e}") from e

    return pixels, info
