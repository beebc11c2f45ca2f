"""
PaletteGrab API Schemas
Pydantic models for palette extraction and formatting request/response validation.
"""
from typing import Dict, List, Optional
from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Health check response."""
    ok: bool = Field(True, description="Service health status")
    version: str = Field(..., description="Service version")
    service: str = Field("palettegrab", description="Service name")


class ErrorResponse(BaseModel):
    """Error response."""
    detail: str = Field(..., description="Error message")


# ============================================================================
# PALETTE EXTRACTION SCHEMAS
# ============================================================================

class FormattedValue(BaseModel):
    """One color rendered in one notation."""
    text: str = Field(..., description="Canonical text, e.g. 'RGB(255, 0, 0)' or '#FF0000'")
    components: List[float] = Field(
        ...,
        description="Numeric components the text was rendered from"
    )


class PaletteEntry(BaseModel):
    """Single selected color with frequency and rendered notations."""
    hex: str = Field(
        ...,
        pattern=r"^#[0-9A-F]{6}$",
        description="Hex color code in format #RRGGBB"
    )
    rgb: List[int] = Field(
        ...,
        min_length=3,
        max_length=3,
        description="8-bit RGB channels"
    )
    count: int = Field(..., ge=1, description="Number of pixels with exactly this color")
    ratio: float = Field(
        ...,
        ge=0.0,
        le=1.0,
        description="Share of image pixels with exactly this color"
    )
    formats: Dict[str, FormattedValue] = Field(
        default_factory=dict,
        description="Rendered notations keyed by format tag"
    )


class PaletteArtifacts(BaseModel):
    """Palette extraction output artifacts."""
    swatch_png_b64: Optional[str] = Field(
        None,
        description="Base64-encoded PNG showing the palette as a strip of chips"
    )


class PaletteDebug(BaseModel):
    """Timing information for the extraction stages."""
    ms_decode: float = Field(..., description="Image decode time in milliseconds")
    ms_histogram: float = Field(..., description="Histogram build time in milliseconds")
    ms_selection: float = Field(..., description="Palette selection time in milliseconds")
    ms_formatting: float = Field(..., description="Formatting time in milliseconds")
    request_id: str = Field(..., description="Request identifier for log correlation")


class PaletteExtractResponse(BaseModel):
    """Main palette extraction response."""
    width: int = Field(..., description="Image width in pixels")
    height: int = Field(..., description="Image height in pixels")
    total_pixels: int = Field(..., description="Number of pixels scanned")
    distinct_colors: int = Field(..., description="Number of distinct colors in the image")
    policy: str = Field(..., description="Selection policy used: 'distinct' or 'dominant'")
    palette_size: int = Field(..., description="Requested maximum palette size")
    min_distance: float = Field(..., description="Minimum pairwise RGB distance used")
    formats: List[str] = Field(..., description="Format tags rendered for each color")
    palette: List[PaletteEntry] = Field(
        ...,
        description="Selected colors in selection order (most frequent first)"
    )
    artifacts: Optional[PaletteArtifacts] = Field(
        None,
        description="Optional artifacts like swatch images"
    )
    debug: PaletteDebug = Field(..., description="Debug information")


# ============================================================================
# COLOR FORMATTING SCHEMAS
# ============================================================================

class ColorFormatRequest(BaseModel):
    """Colors supplied directly for formatting."""
    colors: List[str] = Field(
        ...,
        min_length=1,
        max_length=256,
        description="Colors in format #RRGGBB"
    )
    formats: List[str] = Field(
        ...,
        min_length=1,
        description="Format tags to render, e.g. ['RGB', 'LAB']"
    )


class FormattedColorEntry(BaseModel):
    """All requested notations for one color."""
    hex: str = Field(..., description="Normalized hex color code")
    formats: Dict[str, FormattedValue] = Field(..., description="Rendered notations keyed by format tag")


class ColorFormatResponse(BaseModel):
    """Formatting response."""
    colors: List[FormattedColorEntry]


class FormatListResponse(BaseModel):
    """Supported format tags."""
    formats: List[str]
    default_formats: List[str]
