"""
PaletteGrab Colors Module

Provides the palette extraction engine: pixel histograms, dominant and
distinct color selection, color space conversions and text formatting.
"""

__version__ = "1.0.0"
