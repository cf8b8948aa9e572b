"""RGBA pixel buffer shared by the ditherer and the plane splitter.

A buffer is a row-major grid of ``width * height`` pixels with four 8-bit
channels each. It can be built from a flat byte sequence, a numpy array or a
Pillow image, and converted back to any of them.
"""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np
from PIL import Image

CHANNELS = 4

# Single-channel modes holding 16-bit samples (Pillow opens 16-bit PNGs as these).
WIDE_GRAY_MODES = ("I;16", "I;16B", "I;16L", "I")


def _check_dimensions(width: int, height: int) -> None:
    if width <= 0 or height <= 0:
        raise ValueError(f"Invalid image dimensions: {width}x{height}")


@dataclass(frozen=True)
class PixelBuffer:
    """RGBA8 image held as an array of shape (height, width, 4)."""

    data: np.ndarray

    def __post_init__(self) -> None:
        if self.data.ndim != 3 or self.data.shape[2] != CHANNELS:
            raise ValueError(
                f"Expected array of shape (height, width, 4), got {self.data.shape}"
            )
        if self.data.dtype != np.uint8:
            raise ValueError(f"Expected uint8 pixels, got {self.data.dtype}")
        _check_dimensions(self.width, self.height)

    @property
    def width(self) -> int:
        return int(self.data.shape[1])

    @property
    def height(self) -> int:
        return int(self.data.shape[0])

    @property
    def size(self) -> tuple[int, int]:
        return self.width, self.height

    @classmethod
    def from_bytes(cls, raw: bytes | bytearray, width: int, height: int) -> PixelBuffer:
        """Wrap a flat RGBA byte sequence.

        Raises:
            ValueError: if the dimensions are not positive or the length is
                not ``width * height * 4``.
        """
        _check_dimensions(width, height)
        expected = width * height * CHANNELS
        if len(raw) != expected:
            raise ValueError(
                f"Pixel data length {len(raw)} does not match "
                f"{width}x{height} RGBA ({expected} bytes)"
            )
        arr = np.frombuffer(bytes(raw), dtype=np.uint8).reshape(height, width, CHANNELS)
        return cls(arr.copy())

    @classmethod
    def from_array(cls, arr: np.ndarray) -> PixelBuffer:
        """Build from an (H, W, 3) or (H, W, 4) uint8 array. RGB gets alpha 255."""
        arr = np.asarray(arr)
        if arr.ndim == 3 and arr.shape[2] == 3:
            alpha = np.full(arr.shape[:2] + (1,), 255, dtype=np.uint8)
            arr = np.concatenate([arr.astype(np.uint8), alpha], axis=2)
        return cls(np.ascontiguousarray(arr, dtype=np.uint8))

    @classmethod
    def from_image(cls, img: Image.Image) -> PixelBuffer:
        """Convert any Pillow image to RGBA8.

        16-bit grayscale samples are scaled to 8 bits rather than clipped.
        """
        if img.mode in WIDE_GRAY_MODES:
            wide = np.array(img).astype(np.float64)
            gray = np.clip(np.round(wide / 257.0), 0, 255).astype(np.uint8)
            return cls.from_array(np.stack([gray, gray, gray], axis=2))
        return cls(np.array(img.convert("RGBA"), dtype=np.uint8))

    def to_bytes(self) -> bytes:
        return self.data.tobytes()

    def to_image(self) -> Image.Image:
        return Image.fromarray(self.data)

    def rgb(self) -> np.ndarray:
        """Copy of the RGB channels, alpha dropped."""
        return self.data[:, :, :3].copy()
