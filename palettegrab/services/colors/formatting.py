"""
Color Formatting Module

Renders a normalized color as canonical text in one of the supported color
notations, together with the numeric components behind the text.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, Iterable, List, Tuple, Union

from .conversions import (
    NormalizedColor, to_cmyk, to_hsl, to_hwb, to_lab, to_luv, to_rgb255, to_xyz
)
from .errors import UnsupportedFormat


class ColorFormat(str, Enum):
    RGB = "RGB"
    CMYK = "CMYK"
    HEX = "HEX"
    LAB = "LAB"
    HSL = "HSL"
    XYZ = "XYZ"
    LUV = "LUV"
    HWB = "HWB"


@dataclass(frozen=True)
class FormattedColor:
    """Text rendering of a color plus the numbers it was produced from."""
    format: ColorFormat
    text: str
    components: Tuple[float, ...]


def resolve_format(tag: Union[str, ColorFormat]) -> ColorFormat:
    """
    Resolve a format tag received as text (query string, config file).

    Raises:
        UnsupportedFormat: If the tag is not one of the supported notations
    """
    if isinstance(tag, ColorFormat):
        return tag
    if not isinstance(tag, str):
        raise UnsupportedFormat(tag)
    try:
        return ColorFormat(tag.strip().upper())
    except ValueError:
        raise UnsupportedFormat(tag)


def resolve_formats(tags: Union[str, Iterable[Union[str, ColorFormat]]]) -> List[ColorFormat]:
    """
    Resolve a comma-separated string or a sequence of tags, dropping duplicates.
    """
    if isinstance(tags, str):
        tags = [t for t in tags.split(",") if t.strip()]

    resolved = []
    for tag in tags:
        fmt = resolve_format(tag)
        if fmt not in resolved:
            resolved.append(fmt)
    return resolved


def _fixed(value: float) -> str:
    """Two-decimal rendering that never shows '-0.00'."""
    if abs(value) < 0.005:
        value = 0.0
    return f"{value:.2f}"


def _hue(value: float) -> str:
    """Two-decimal hue in [0, 360); values that round up to 360 wrap to 0."""
    value = round(value, 2)
    if value >= 360:
        value = 0.0
    return _fixed(value)


def _render_rgb(color: NormalizedColor) -> FormattedColor:
    r, g, b = color.rgb255()
    return FormattedColor(ColorFormat.RGB, f"RGB({r}, {g}, {b})", (r, g, b))


def _render_hex(color: NormalizedColor) -> FormattedColor:
    r, g, b = color.rgb255()
    return FormattedColor(ColorFormat.HEX, color.to_hex(), (r, g, b))


def _render_cmyk(color: NormalizedColor) -> FormattedColor:
    c, m, y, k = to_cmyk(color.r, color.g, color.b)
    text = f"CMYK({_fixed(c)}%, {_fixed(m)}%, {_fixed(y)}%, {_fixed(k)}%)"
    return FormattedColor(ColorFormat.CMYK, text, (c, m, y, k))


def _render_lab(color: NormalizedColor) -> FormattedColor:
    l, a, b = to_lab(color.r, color.g, color.b)
    return FormattedColor(ColorFormat.LAB, f"LAB({_fixed(l)}, {_fixed(a)}, {_fixed(b)})", (l, a, b))


def _render_hsl(color: NormalizedColor) -> FormattedColor:
    h, s, l = to_hsl(color.r, color.g, color.b)
    return FormattedColor(ColorFormat.HSL, f"HSL({_hue(h)}, {_fixed(s)}%, {_fixed(l)}%)", (h, s, l))


def _render_xyz(color: NormalizedColor) -> FormattedColor:
    x, y, z = to_xyz(color.r, color.g, color.b)
    return FormattedColor(ColorFormat.XYZ, f"XYZ({_fixed(x)}, {_fixed(y)}, {_fixed(z)})", (x, y, z))


def _render_luv(color: NormalizedColor) -> FormattedColor:
    l, u, v = to_luv(color.r, color.g, color.b)
    return FormattedColor(ColorFormat.LUV, f"LUV({_fixed(l)}, {_fixed(u)}, {_fixed(v)})", (l, u, v))


def _render_hwb(color: NormalizedColor) -> FormattedColor:
    h, w, b = to_hwb(color.r, color.g, color.b)
    return FormattedColor(ColorFormat.HWB, f"HWB({_hue(h)}, {_fixed(w)}%, {_fixed(b)}%)", (h, w, b))


_RENDERERS: Dict[ColorFormat, Callable[[NormalizedColor], FormattedColor]] = {
    ColorFormat.RGB: _render_rgb,
    ColorFormat.CMYK: _render_cmyk,
    ColorFormat.HEX: _render_hex,
    ColorFormat.LAB: _render_lab,
    ColorFormat.HSL: _render_hsl,
    ColorFormat.XYZ: _render_xyz,
    ColorFormat.LUV: _render_luv,
    ColorFormat.HWB: _render_hwb,
}


def render_color(color: NormalizedColor, fmt: Union[str, ColorFormat]) -> FormattedColor:
    """Render a color in one notation, keeping the numeric components."""
    return _RENDERERS[resolve_format(fmt)](color)


def format_color(color: NormalizedColor, fmt: Union[str, ColorFormat]) -> str:
    """
    Render a color as canonical text.

    Args:
        color: Color to render
        fmt: Target notation (enum member or tag text)

    Returns:
        Text such as "RGB(255, 0, 0)", "#FF0000" or "HSL(0.00, 100.00%, 50.00%)"

    Raises:
        UnsupportedFormat: For any tag outside the supported notations
    """
    return render_color(color, fmt).text


def render_formats(color: NormalizedColor,
                   formats: Iterable[Union[str, ColorFormat]]) -> Dict[str, FormattedColor]:
    """Render a color in each of the given notations, keyed by tag."""
    rendered = {}
    for fmt in formats:
        resolved = resolve_format(fmt)
        rendered[resolved.value] = _RENDERERS[resolved](color)
    return rendered
