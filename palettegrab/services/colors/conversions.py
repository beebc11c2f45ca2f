"""
Color Space Conversions

Pure numeric conversions from normalized sRGB (each channel in [0, 1]) to the
RGB, CMYK, HEX, XYZ, LAB, LUV, HSL and HWB color models, plus the packed
24-bit integer representation used as histogram key.
"""

import math
from dataclasses import dataclass
from typing import Tuple

import numpy as np

from .errors import InvalidInput

# sRGB (D65) -> CIE XYZ
SRGB_TO_XYZ = np.array([
    [0.4124564, 0.3575761, 0.1804375],
    [0.2126729, 0.7151522, 0.0721750],
    [0.0193339, 0.1191920, 0.9503041],
])

# Reference white D65
REF_X = 95.047
REF_Y = 100.000
REF_Z = 108.883

# Reference white chromaticity (u', v') for CIE LUV
REF_U = 0.19783000664283
REF_V = 0.46831999493879

LAB_EPSILON = 0.008856
LAB_KAPPA = 903.3


def pack_rgb(r: int, g: int, b: int) -> int:
    """Pack 8-bit channels into a single integer (R<<16 | G<<8 | B)."""
    for name, value in (("r", r), ("g", g), ("b", b)):
        if not 0 <= value <= 255:
            raise InvalidInput(f"Channel {name}={value} outside [0, 255]")
    return (int(r) << 16) | (int(g) << 8) | int(b)


def unpack_rgb(packed: int) -> Tuple[int, int, int]:
    """Unpack an integer color into 8-bit (r, g, b). Bits above 24 are ignored."""
    return (packed >> 16) & 0xFF, (packed >> 8) & 0xFF, packed & 0xFF


@dataclass(frozen=True)
class NormalizedColor:
    """An sRGB color with each channel in [0.0, 1.0]."""
    r: float
    g: float
    b: float

    def __post_init__(self):
        for name in ("r", "g", "b"):
            value = getattr(self, name)
            if not 0.0 <= value <= 1.0:
                raise InvalidInput(f"Channel {name}={value} outside [0.0, 1.0]")

    @classmethod
    def from_rgb255(cls, r: int, g: int, b: int) -> "NormalizedColor":
        return cls(r / 255.0, g / 255.0, b / 255.0)

    @classmethod
    def from_packed(cls, packed: int) -> "NormalizedColor":
        return cls.from_rgb255(*unpack_rgb(packed))

    @classmethod
    def from_hex(cls, hex_color: str) -> "NormalizedColor":
        """Parse a color in format #RRGGBB (the leading '#' is optional)."""
        hex_clean = hex_color.strip().lstrip('#')
        if len(hex_clean) != 6:
            raise InvalidInput(f"Invalid hex color format: {hex_color}")
        try:
            r, g, b = (int(hex_clean[i:i + 2], 16) for i in (0, 2, 4))
        except ValueError:
            raise InvalidInput(f"Invalid hex color format: {hex_color}")
        return cls.from_rgb255(r, g, b)

    def rgb255(self) -> Tuple[int, int, int]:
        """Channels scaled to 0-255 and rounded to nearest."""
        return tuple(round(c) for c in to_rgb255(self.r, self.g, self.b))

    def to_packed(self) -> int:
        return pack_rgb(*self.rgb255())

    def to_hex(self) -> str:
        return to_hex(self.r, self.g, self.b)


def to_rgb255(r: float, g: float, b: float) -> Tuple[float, float, float]:
    """Scale channels to [0, 255] without rounding."""
    return r * 255, g * 255, b * 255


def to_cmyk(r: float, g: float, b: float) -> Tuple[float, float, float, float]:
    """
    Convert to CMYK percentages.

    Returns:
        Tuple of (C, M, Y, K), each in [0, 100]
    """
    k = 1 - max(r, g, b)
    if k < 1:
        c = (1 - r - k) / (1 - k)
        m = (1 - g - k) / (1 - k)
        y = (1 - b - k) / (1 - k)
    else:
        c = m = y = 0.0
    return c * 100, m * 100, y * 100, k * 100


def to_hex(r: float, g: float, b: float) -> str:
    """Convert to an uppercase #RRGGBB string, rounding each channel to nearest."""
    r_int, g_int, b_int = (round(c) for c in to_rgb255(r, g, b))
    return f"#{r_int:02X}{g_int:02X}{b_int:02X}"


def _linearize(c: float) -> float:
    """Inverse sRGB gamma companding."""
    if c > 0.04045:
        return ((c + 0.055) / 1.055) ** 2.4
    return c / 12.92


def to_xyz(r: float, g: float, b: float) -> Tuple[float, float, float]:
    """
    Convert to CIE XYZ (D65), scaled so that white has Y = 100.
    """
    linear = np.array([_linearize(r), _linearize(g), _linearize(b)])
    x, y, z = (SRGB_TO_XYZ @ linear) * 100
    return float(x), float(y), float(z)


def _lab_f(t: float) -> float:
    if t > LAB_EPSILON:
        return math.pow(t, 1.0 / 3.0)
    return 7.787 * t + 16.0 / 116.0


def _lightness(y_ratio: float) -> float:
    """CIE lightness L* for Y/Yn."""
    if y_ratio > LAB_EPSILON:
        return 116.0 * math.pow(y_ratio, 1.0 / 3.0) - 16.0
    return LAB_KAPPA * y_ratio


def to_lab(r: float, g: float, b: float) -> Tuple[float, float, float]:
    """
    Convert to CIE L*a*b* relative to reference white D65.

    Returns:
        Tuple of (L, A, B) with L in [0, 100]
    """
    x, y, z = to_xyz(r, g, b)
    xr, yr, zr = x / REF_X, y / REF_Y, z / REF_Z

    lightness = _lightness(yr)
    a = 500.0 * (_lab_f(xr) - _lab_f(yr))
    b_star = 200.0 * (_lab_f(yr) - _lab_f(zr))
    return lightness, a, b_star


def to_luv(r: float, g: float, b: float) -> Tuple[float, float, float]:
    """
    Convert to CIE L*u*v* relative to reference white D65.

    Returns:
        Tuple of (L, U, V)
    """
    x, y, z = to_xyz(r, g, b)
    denominator = x + 15 * y + 3 * z
    if denominator == 0:
        u_prime = v_prime = 0.0
    else:
        u_prime = 4 * x / denominator
        v_prime = 9 * y / denominator

    lightness = _lightness(y / REF_Y)
    u = 13 * lightness * (u_prime - REF_U)
    v = 13 * lightness * (v_prime - REF_V)
    return lightness, u, v


def hue_degrees(r: float, g: float, b: float) -> float:
    """Hue angle in [0, 360) shared by HSL and HWB. Achromatic colors get 0."""
    c_max = max(r, g, b)
    c_min = min(r, g, b)
    delta = c_max - c_min

    if delta == 0:
        return 0.0
    if c_max == r:
        hue = 60 * (((g - b) / delta) % 6)
    elif c_max == g:
        hue = 60 * ((b - r) / delta + 2)
    else:
        hue = 60 * ((r - g) / delta + 4)

    hue %= 360
    return hue


def to_hsl(r: float, g: float, b: float) -> Tuple[float, float, float]:
    """
    Convert to HSL.

    Returns:
        Tuple of (H, S, L) with H in degrees [0, 360) and S, L in [0, 100]
    """
    c_max = max(r, g, b)
    c_min = min(r, g, b)
    delta = c_max - c_min

    lightness = (c_max + c_min) / 2
    if delta == 0:
        saturation = 0.0
    else:
        saturation = delta / (1 - abs(2 * lightness - 1))

    return hue_degrees(r, g, b), saturation * 100, lightness * 100


def to_hwb(r: float, g: float, b: float) -> Tuple[float, float, float]:
    """
    Convert to HWB.

    Returns:
        Tuple of (H, W, B) with H in degrees [0, 360) and W, B in [0, 100]
    """
    whiteness = min(r, g, b)
    blackness = 1 - max(r, g, b)
    return hue_degrees(r, g, b), whiteness * 100, blackness * 100


def euclidean255(a: NormalizedColor, b: NormalizedColor) -> float:
    """Plain Euclidean distance between two colors in the 0-255 RGB cube."""
    ar, ag, ab = to_rgb255(a.r, a.g, a.b)
    br, bg, bb = to_rgb255(b.r, b.g, b.b)
    return math.sqrt((ar - br) ** 2 + (ag - bg) ** 2 + (ab - bb) ** 2)


def packed_distance(p1: int, p2: int) -> float:
    """Euclidean distance between two packed colors in the 0-255 RGB cube."""
    r1, g1, b1 = unpack_rgb(p1)
    r2, g2, b2 = unpack_rgb(p2)
    return math.sqrt((r1 - r2) ** 2 + (g1 - g2) ** 2 + (b1 - b2) ** 2)
