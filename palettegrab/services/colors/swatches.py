"""
Swatch Rendering Module

Renders an extracted palette as a horizontal strip of color chips for quick
visual inspection of the selection.
"""

import base64
from typing import List, Tuple

import cv2
import numpy as np
from loguru import logger

from .conversions import NormalizedColor


def hex_to_bgr(hex_color: str) -> Tuple[int, int, int]:
    """Convert hex color to BGR tuple for OpenCV."""
    r, g, b = NormalizedColor.from_hex(hex_color).rgb255()
    return (b, g, r)


def render_swatch_strip(hex_colors: List[str],
                        chip_size: int = 40,
                        border_color: Tuple[int, int, int] = (200, 200, 200)) -> str:
    """
    Render a horizontal strip of color swatches in palette order.

    Args:
        hex_colors: List of hex color strings
        chip_size: Size of each color chip in pixels
        border_color: BGR color of the chip separators

    Returns:
        Base64-encoded PNG image string
    """
    if not hex_colors:
        raise ValueError("Empty hex_colors list provided")
    if chip_size <= 0:
        raise ValueError("chip_size must be positive")

    k = len(hex_colors)
    logger.debug(f"Rendering swatch strip with {k} colors, chip_size={chip_size}")

    img = np.zeros((chip_size, chip_size * k, 3), dtype=np.uint8)

    for i, hex_color in enumerate(hex_colors):
        x_start = i * chip_size
        x_end = (i + 1) * chip_size
        img[:, x_start:x_end, :] = hex_to_bgr(hex_color)
        if i > 0:
            cv2.line(img, (x_start, 0), (x_start, chip_size - 1), border_color, 1)

    success, buffer = cv2.imencode('.png', img)
    if not success:
        raise RuntimeError("Failed to encode swatch strip as PNG")

    b64_string = base64.b64encode(buffer.tobytes()).decode('ascii')
    logger.debug(f"Encoded swatch strip: {chip_size * k}×{chip_size} -> {len(b64_string)} chars")

    return b64_string
