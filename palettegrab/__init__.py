"""
PaletteGrab

Extracts representative color palettes from raster images and renders each
selected color in RGB, CMYK, HEX, LAB, HSL, XYZ, LUV and HWB notation.
"""

__version__ = "1.0.0"
