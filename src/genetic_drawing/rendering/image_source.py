"""Target image loading."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Tuple

import numpy as np
from PIL import Image, UnidentifiedImageError

logger = logging.getLogger(__name__)


@dataclass(frozen=True, eq=False)
class TargetImage:
    """Read-only pixel buffer that every fitness evaluation compares against.

    Attributes:
        pixels: uint8 array of shape (height, width, 3).
        source: Full-resolution image used for display, if available.
    """

    pixels: np.ndarray
    source: Optional[Image.Image] = None

    def __post_init__(self):
        if self.pixels.ndim != 3 or self.pixels.shape[2] != 3:
            raise ValueError(f"target pixels must have shape (h, w, 3), got {self.pixels.shape}")
        if self.pixels.dtype != np.uint8:
            raise ValueError(f"target pixels must be uint8, got {self.pixels.dtype}")
        self.pixels.flags.writeable = False

    @property
    def width(self) -> int:
        return int(self.pixels.shape[1])

    @property
    def height(self) -> int:
        return int(self.pixels.shape[0])

    @property
    def size(self) -> Tuple[int, int]:
        return self.width, self.height

    @property
    def source_size(self) -> Tuple[int, int]:
        """Dimensions of the full-resolution image (falls back to target size)."""
        if self.source is None:
            return self.size
        return self.source.size

    def to_image(self) -> Image.Image:
        return Image.fromarray(np.array(self.pixels), mode="RGB")

    @classmethod
    def from_array(cls, pixels: np.ndarray) -> "TargetImage":
        """Wrap an in-memory (h, w, 3) array; the array is copied."""
        return cls(np.array(pixels, dtype=np.uint8, copy=True))


def load_target(path: str | Path, reduction_factor: float = 5) -> TargetImage:
    """Load an image and downscale it to the evolution resolution.

    Args:
        path: Image file readable by Pillow.
        reduction_factor: Source dimensions are divided by this factor.

    Returns:
        TargetImage at ``source size // reduction_factor`` (at least 1x1).

    Raises:
        ValueError: If the file cannot be read or the factor is not positive.
    """
    if reduction_factor <= 0:
        raise ValueError(f"reduction_factor must be > 0, got {reduction_factor}")

    path = Path(path)
    try:
        with Image.open(path) as img:
            source = img.convert("RGB")
    except (FileNotFoundError, UnidentifiedImageError, OSError) as e:
        raise ValueError(f"Cannot read target image {path}: {e}") from e

    width = max(1, int(source.width / reduction_factor))
    height = max(1, int(source.height / reduction_factor))
    reduced = source.resize((width, height), Image.Resampling.LANCZOS)

    logger.info(f"Loaded target {path.name}: {source.width}x{source.height} -> {width}x{height}")

    return TargetImage(np.asarray(reduced, dtype=np.uint8).copy(), source=source)
