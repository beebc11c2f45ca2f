"""
Pixel Histogram

Builds a frequency count per distinct packed color over a decoded pixel grid.
"""

from dataclasses import dataclass
from typing import Dict, Union

import numpy as np
from loguru import logger

from .errors import InvalidInput

# PackedColor -> occurrence count
Histogram = Dict[int, int]


@dataclass(frozen=True)
class PixelGrid:
    """
    A decoded image: an (H, W, 3) uint8 RGB array.

    Grayscale (H, W) and RGBA (H, W, 4) arrays are accepted by from_array;
    alpha is ignored.
    """
    pixels: np.ndarray

    @classmethod
    def from_array(cls, array: np.ndarray) -> "PixelGrid":
        if array is None:
            raise InvalidInput("Pixel grid is missing")

        array = np.asarray(array)
        if array.ndim == 2:
            array = np.stack([array] * 3, axis=-1)
        elif array.ndim == 3 and array.shape[2] == 4:
            array = array[:, :, :3]
        elif array.ndim != 3 or array.shape[2] != 3:
            raise InvalidInput(f"Unsupported pixel grid shape: {array.shape}")

        if array.dtype != np.uint8:
            # Normalized float images would truncate to near-black
            if array.dtype.kind not in "iu":
                raise InvalidInput(f"Pixel grid must hold 8-bit integer channels, got dtype {array.dtype}")
            if array.size and (array.min() < 0 or array.max() > 255):
                raise InvalidInput("Pixel values must be within [0, 255]")
            array = array.astype(np.uint8)

        return cls(np.ascontiguousarray(array))

    @property
    def width(self) -> int:
        return int(self.pixels.shape[1])

    @property
    def height(self) -> int:
        return int(self.pixels.shape[0])

    def packed_at(self, x: int, y: int) -> int:
        """Packed color (R<<16 | G<<8 | B) of the pixel at column x, row y."""
        r, g, b = (int(c) for c in self.pixels[y, x])
        return (r << 16) | (g << 8) | b

    def packed(self) -> np.ndarray:
        """All pixels as packed colors, row-major, shape (H*W,)."""
        rgb = self.pixels.reshape(-1, 3).astype(np.uint32)
        return (rgb[:, 0] << 16) | (rgb[:, 1] << 8) | rgb[:, 2]


def build_histogram(image: Union[PixelGrid, np.ndarray, None]) -> Histogram:
    """
    Count occurrences of every distinct color in the image.

    Args:
        image: Decoded pixel grid (or a raw RGB array)

    Returns:
        Mapping from packed color to its pixel count

    Raises:
        InvalidInput: If the grid is missing or holds no pixels
    """
    if image is None:
        raise InvalidInput("Pixel grid is missing")
    if not isinstance(image, PixelGrid):
        image = PixelGrid.from_array(image)

    if image.width == 0 or image.height == 0:
        raise InvalidInput(f"Pixel grid is empty: {image.width}x{image.height}")

    colors, counts = np.unique(image.packed(), return_counts=True)
    histogram = dict(zip(colors.tolist(), counts.tolist()))

    logger.debug(f"Histogram built: {image.width}x{image.height} pixels, "
                 f"{len(histogram)} distinct colors")

    return histogram
