"""
Palette Extraction API Orchestrator

Coordinates one extraction request: upload decoding, palette extraction,
optional swatch rendering, logging and metrics.
"""

import time
from typing import Any, Dict, List, Optional

from fastapi import UploadFile

from palettegrab.config import config
from palettegrab.schemas import (
    ColorFormatResponse, FormattedColorEntry, FormattedValue, PaletteEntry, PaletteExtractResponse
)
from palettegrab.services.colors.conversions import NormalizedColor
from palettegrab.services.colors.errors import InvalidInput
from palettegrab.services.colors.extraction import PaletteColor, extract_palette
from palettegrab.services.colors.formatting import FormattedColor, render_formats, resolve_formats
from palettegrab.services.colors.swatches import render_swatch_strip
from palettegrab.services.imaging import read_image
from palettegrab.utils.ids import generate_request_id
from palettegrab.utils.logging import get_logger
from palettegrab.utils.metrics import get_metrics

logger = get_logger()


def _formatted_values(formats: Dict[str, FormattedColor]) -> Dict[str, FormattedValue]:
    return {
        tag: FormattedValue(text=rendered.text, components=[float(c) for c in rendered.components])
        for tag, rendered in formats.items()
    }


def _palette_entry(entry: PaletteColor) -> PaletteEntry:
    return PaletteEntry(
        hex=entry.hex,
        rgb=list(entry.color.rgb255()),
        count=entry.count,
        ratio=float(entry.ratio),
        formats=_formatted_values(entry.formats)
    )


async def handle_extract(file: UploadFile, params: Optional[Dict[str, Any]] = None) -> PaletteExtractResponse:
    """
    Extract a palette from an uploaded image.

    Args:
        file: Uploaded image file
        params: Dictionary of extraction parameters

    Returns:
        PaletteExtractResponse with palette in selection order

    Raises:
        HTTPException: For upload/decoding failures
        InvalidInput, UnsupportedFormat: For contract violations
    """
    params = params or {}
    request_id = generate_request_id("pal")
    start_time = time.time()

    palette_size = params.get('palette_size', config.PALETTE_SIZE)
    min_distance = params.get('min_distance', config.MIN_DISTANCE)
    policy = params.get('policy', config.SELECTION_POLICY)
    formats = params.get('formats') or config.DEFAULT_FORMATS
    include_swatch = params.get('include_swatch', True)

    logger.info("Starting palette extraction", extra={"request_id": request_id})
    metrics = get_metrics()

    try:
        if not config.validate_palette_size(palette_size):
            raise InvalidInput(f"palette_size must be between 1 and 256, got {palette_size}")
        if not config.validate_min_distance(min_distance):
            raise InvalidInput(f"min_distance must be between 0 and {config.MAX_RGB_DISTANCE:.2f}, "
                               f"got {min_distance}")
        if not config.validate_policy(policy):
            raise InvalidInput(f"Unknown selection policy: {policy!r}")

        resolved_formats = resolve_formats(formats)

        grid = await read_image(file)
        decode_time = time.time() - start_time
        logger.info(f"Image decoded: {grid.width}x{grid.height}",
                    extra={"request_id": request_id, "ms_decode": decode_time * 1000})

        result = extract_palette(
            grid,
            palette_size=palette_size,
            min_distance=min_distance,
            formats=resolved_formats,
            policy=policy
        )

        artifacts = None
        if include_swatch and result.colors:
            try:
                swatch_b64 = render_swatch_strip(
                    [entry.hex for entry in result.colors],
                    chip_size=config.SWATCH_CHIP_SIZE
                )
                artifacts = {"swatch_png_b64": swatch_b64}
            except Exception as e:
                logger.warning(f"Swatch generation failed: {str(e)}",
                               extra={"request_id": request_id})

        response = PaletteExtractResponse(
            width=result.width,
            height=result.height,
            total_pixels=result.total_pixels,
            distinct_colors=result.distinct_colors,
            policy=result.policy.value,
            palette_size=result.palette_size,
            min_distance=result.min_distance,
            formats=[fmt.value for fmt in resolved_formats],
            palette=[_palette_entry(entry) for entry in result.colors],
            artifacts=artifacts,
            debug={
                "ms_decode": decode_time * 1000,
                "ms_histogram": result.timings_ms["histogram"],
                "ms_selection": result.timings_ms["selection"],
                "ms_formatting": result.timings_ms["formatting"],
                "request_id": request_id
            }
        )

        total_time = time.time() - start_time
        logger.info("Palette extraction completed successfully",
                    extra={
                        "request_id": request_id,
                        "dims": f"{result.width}x{result.height}",
                        "policy": result.policy.value,
                        "colors": len(result.colors),
                        "distinct_colors": result.distinct_colors,
                        "ms_total": total_time * 1000,
                        "result": "ok"
                    })

        if config.METRICS_ENABLED:
            metrics.increment_counter("palette_extract_requests_total")
            metrics.increment_counter(f"palette_extract_policy_total_{result.policy.value}")
            metrics.record_timing("palette_extract_duration_ms", total_time * 1000)
            metrics.record_timing("histogram_duration_ms", result.timings_ms["histogram"])
            metrics.record_timing("selection_duration_ms", result.timings_ms["selection"])

        return response

    except Exception as e:
        error_time = time.time() - start_time
        logger.error(f"Palette extraction failed: {str(e)}",
                     extra={
                         "request_id": request_id,
                         "ms_total": error_time * 1000,
                         "result": "error",
                         "error_type": type(e).__name__
                     })

        if config.METRICS_ENABLED:
            metrics.increment_counter("palette_extract_failed_total")
            metrics.increment_counter(f"palette_extract_error_{type(e).__name__.lower()}")

        raise


def handle_format(colors: List[str], formats: List[str]) -> ColorFormatResponse:
    """
    Render colors supplied as hex strings in the requested notations.

    Raises:
        InvalidInput: For malformed hex colors
        UnsupportedFormat: For unknown format tags
    """
    resolved_formats = resolve_formats(formats)

    entries = []
    for hex_color in colors:
        color = NormalizedColor.from_hex(hex_color)
        entries.append(FormattedColorEntry(
            hex=color.to_hex(),
            formats=_formatted_values(render_formats(color, resolved_formats))
        ))

    logger.debug(f"Formatted {len(entries)} colors in {len(resolved_formats)} notations")
    return ColorFormatResponse(colors=entries)
