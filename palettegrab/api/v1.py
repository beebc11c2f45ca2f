"""
PaletteGrab v1 API Routes
Implements palette extraction and color formatting endpoints.
"""
from typing import Optional

from fastapi import APIRouter, File, HTTPException, Query, UploadFile

from palettegrab.config import config
from palettegrab.schemas import (
    ColorFormatRequest, ColorFormatResponse, ErrorResponse, FormatListResponse, PaletteExtractResponse
)
from palettegrab.services.colors.errors import PaletteError
from palettegrab.services.colors.extract_api import handle_extract, handle_format
from palettegrab.services.colors.formatting import ColorFormat, resolve_formats

router = APIRouter(prefix="/v1/palette", tags=["Palette"])


@router.get("/formats", response_model=FormatListResponse)
def list_formats():
    """List the supported color notations and the configured defaults."""
    try:
        defaults = [fmt.value for fmt in resolve_formats(config.DEFAULT_FORMATS)]
    except PaletteError as e:
        raise HTTPException(status_code=500, detail=f"Invalid default formats configuration: {str(e)}")
    return FormatListResponse(
        formats=[fmt.value for fmt in ColorFormat],
        default_formats=defaults
    )


@router.post("/extract", response_model=PaletteExtractResponse,
             responses={400: {"model": ErrorResponse}, 415: {"model": ErrorResponse}})
async def extract(
    file: UploadFile = File(..., description="PNG, JPEG, GIF or BMP image"),
    palette_size: int = Query(config.PALETTE_SIZE, ge=1, le=256, description="Maximum number of colors"),
    min_distance: float = Query(config.MIN_DISTANCE, ge=0.0, le=config.MAX_RGB_DISTANCE,
                                description="Minimum RGB distance between selected colors"),
    policy: str = Query(config.SELECTION_POLICY, pattern="^(distinct|dominant)$", description="Selection policy"),
    formats: Optional[str] = Query(None, description="Comma-separated format tags, e.g. RGB,HEX,LAB"),
    include_swatch: bool = Query(True, description="Include swatch strip PNG in response")
):
    """
    Extract a color palette from an uploaded image.

    - **palette_size**: Maximum number of colors to return (1-256)
    - **min_distance**: Minimum Euclidean distance in the 0-255 RGB cube between
      any two selected colors (distinct policy only)
    - **policy**: `distinct` (frequency order with minimum distance) or
      `dominant` (most frequent colors)
    - **formats**: Notations to render per color (RGB, CMYK, HEX, LAB, HSL, XYZ, LUV, HWB)

    Returns the palette in selection order with every requested notation.
    """
    params = {
        'palette_size': palette_size,
        'min_distance': min_distance,
        'policy': policy,
        'formats': formats,
        'include_swatch': include_swatch
    }

    try:
        return await handle_extract(file=file, params=params)
    except PaletteError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.post("/format", response_model=ColorFormatResponse, responses={400: {"model": ErrorResponse}})
def format_colors(request: ColorFormatRequest):
    """Render colors supplied as #RRGGBB in the requested notations."""
    try:
        return handle_format(request.colors, request.formats)
    except PaletteError as e:
        raise HTTPException(status_code=400, detail=str(e))
