"""
Palette engine error taxonomy.

All engine errors are caller contract violations, never transient conditions.
"""


class PaletteError(ValueError):
    """Base class for palette engine errors."""


class InvalidInput(PaletteError):
    """Raised when the pixel grid (or a color value) is missing or malformed."""


class UnsupportedFormat(PaletteError):
    """Raised when a color format tag outside the supported set is requested."""

    def __init__(self, tag):
        self.tag = tag
        super().__init__(f"Unsupported color format: {tag!r}")
