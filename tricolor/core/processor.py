"""Image processing pipeline.

Load → dither → split planes → save.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Callable

from tricolor.core.dither import Window, dither
from tricolor.core.pixels import PixelBuffer
from tricolor.core.planes import Planes, split_planes
from tricolor.core.reader import ImageInfo, load_image
from tricolor.core.writer import save_planes


@dataclass(frozen=True)
class Settings:
    """Input/output locations and the region to render."""

    input_path: Path = Path("input.png")
    red_path: Path = Path("red_image.png")
    black_path: Path = Path("black_image.png")
    result_path: Path = Path("result.png")
    window: Window | None = None


class StageError(Exception):
    """A pipeline stage failed. `stage` is "load", "dither" or "save"."""

    def __init__(self, stage: str, cause: BaseException) -> None:
        super().__init__(f"{stage} failed: {cause}")
        self.stage = stage
        self.cause = cause


@dataclass
class RunResult:
    """Summary of a completed pipeline run."""

    info: ImageInfo
    planes: Planes
    outputs: list[Path]


def process_image(
    pixels: PixelBuffer,
    window: Window | None = None,
    on_progress: Callable[[int, int], None] | None = None,
) -> Planes:
    """Dither an in-memory image and split it into planes."""
    quantized = dither(pixels, window=window, on_progress=on_progress)
    return split_planes(quantized)


def run(
    settings: Settings,
    on_progress: Callable[[int, int], None] | None = None,
    on_saved: Callable[[Path], None] | None = None,
) -> RunResult:
    """Run the whole pipeline once.

    Raises:
        StageError: wrapping the first failure, tagged with its stage.
    """
    try:
        pixels, info = load_image(settings.input_path)
    except Exception as e:
        raise StageError("load", e) from e

    try:
        planes = process_image(pixels, settings.window, on_progress)
    except Exception as e:
        raise StageError("dither", e) from e

    outputs: list[Path] = []

    def _saved(path: Path) -> None:
        outputs.append(path)
        if on_saved:
            on_saved(path)

    try:
        save_planes(
            planes,
            settings.red_path,
            settings.black_path,
            settings.result_path,
            on_saved=_saved,
        )
    except Exception as e:
        raise StageError("save", e) from e

    return RunResult(info=info, planes=planes, outputs=outputs)
