"""
Palette extraction pipeline.

This module chains the engine stages for one image: histogram building,
palette selection and per-color formatting. Every call is self-contained and
holds no state beyond its own working data.
"""

import time
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Union

import numpy as np
from loguru import logger

from .conversions import NormalizedColor
from .formatting import ColorFormat, FormattedColor, render_formats, resolve_formats
from .histogram import PixelGrid, build_histogram
from .selection import SelectionPolicy, resolve_policy, select_palette


@dataclass
class PaletteColor:
    """One selected color with its frequency and rendered notations."""
    color: NormalizedColor
    packed: int
    count: int
    ratio: float
    formats: Dict[str, FormattedColor] = field(default_factory=dict)

    @property
    def hex(self) -> str:
        return self.color.to_hex()


@dataclass
class PaletteResult:
    """Outcome of one extraction call."""
    width: int
    height: int
    total_pixels: int
    distinct_colors: int
    policy: SelectionPolicy
    palette_size: int
    min_distance: float
    colors: List[PaletteColor]
    timings_ms: Dict[str, float] = field(default_factory=dict)

    @property
    def palette(self) -> List[NormalizedColor]:
        return [entry.color for entry in self.colors]


def extract_palette(image: Union[PixelGrid, np.ndarray, None],
                    palette_size: int = 16,
                    min_distance: float = 50.0,
                    formats: Optional[Iterable[Union[str, ColorFormat]]] = None,
                    policy: Union[str, SelectionPolicy] = SelectionPolicy.DISTINCT) -> PaletteResult:
    """
    Extract an ordered palette from a decoded image and render each color.

    Args:
        image: Decoded pixel grid
        palette_size: Maximum number of colors to return
        min_distance: Minimum pairwise distance (0-255 RGB cube) for the
            distinct policy; ignored by the dominant policy
        formats: Notations to render per color (default: RGB, CMYK, HEX)
        policy: "distinct" or "dominant"

    Returns:
        PaletteResult with colors in selection order

    Raises:
        InvalidInput: If the image is missing or empty, or the policy is unknown
        UnsupportedFormat: If a requested notation is not supported
    """
    policy = resolve_policy(policy)
    # Resolve tags before doing any work so bad requests fail fast
    resolved_formats = resolve_formats(formats if formats is not None
                                       else [ColorFormat.RGB, ColorFormat.CMYK, ColorFormat.HEX])

    grid = image if isinstance(image, PixelGrid) else PixelGrid.from_array(image)

    logger.info(f"Starting palette extraction: {grid.width}x{grid.height}, "
                f"policy={policy.value}, palette_size={palette_size}, min_distance={min_distance}")

    start_time = time.time()
    histogram = build_histogram(grid)
    histogram_ms = (time.time() - start_time) * 1000

    start_time = time.time()
    selected = select_palette(histogram, palette_size, min_distance, policy)
    selection_ms = (time.time() - start_time) * 1000

    start_time = time.time()
    total_pixels = grid.width * grid.height
    colors = []
    for color in selected:
        packed = color.to_packed()
        count = histogram[packed]
        colors.append(PaletteColor(
            color=color,
            packed=packed,
            count=count,
            ratio=count / total_pixels,
            formats=render_formats(color, resolved_formats)
        ))
    formatting_ms = (time.time() - start_time) * 1000

    logger.info(f"Palette extraction complete: {len(colors)} colors "
                f"from {len(histogram)} distinct")

    return PaletteResult(
        width=grid.width,
        height=grid.height,
        total_pixels=total_pixels,
        distinct_colors=len(histogram),
        policy=policy,
        palette_size=palette_size,
        min_distance=min_distance,
        colors=colors,
        timings_ms={
            "histogram": histogram_ms,
            "selection": selection_ms,
            "formatting": formatting_ms
        }
    )
