"""
PaletteGrab Configuration
Manages environment variables and defaults for the palette service.
"""
import math
import os
from typing import Literal

from dotenv import load_dotenv

load_dotenv()


class Config:
    """Configuration class for PaletteGrab services."""

    # Upload limits
    MAX_FILE_MB: int = int(os.environ.get("PALETTEGRAB_MAX_FILE_MB", "10"))

    # Palette extraction defaults
    PALETTE_SIZE: int = int(os.environ.get("PALETTEGRAB_PALETTE_SIZE", "16"))
    MIN_DISTANCE: float = float(os.environ.get("PALETTEGRAB_MIN_DISTANCE", "50"))
    SELECTION_POLICY: Literal["dominant", "distinct"] = os.environ.get(
        "PALETTEGRAB_SELECTION_POLICY", "distinct").strip().lower()
    # Comma-separated format tags, resolved at runtime
    DEFAULT_FORMATS: str = os.environ.get("PALETTEGRAB_DEFAULT_FORMATS", "RGB,CMYK,HEX")

    # Swatch artifacts
    SWATCH_CHIP_SIZE: int = int(os.environ.get("PALETTEGRAB_SWATCH_CHIP_SIZE", "40"))

    # Logging and metrics
    LOG_LEVEL: str = os.environ.get("PALETTEGRAB_LOG_LEVEL", "INFO")
    METRICS_ENABLED: bool = bool(int(os.environ.get("PALETTEGRAB_METRICS_ENABLED", "1")))

    # CORS settings
    ALLOWED_ORIGINS: str = os.environ.get("PALETTEGRAB_ALLOWED_ORIGINS", "")

    # Supported image formats
    SUPPORTED_MIME_TYPES = ["image/jpeg", "image/png", "image/gif", "image/bmp"]
    SUPPORTED_EXTENSIONS = {".jpg", ".jpeg", ".png", ".gif", ".bmp"}

    # Largest distance inside the 0-255 RGB cube
    MAX_RGB_DISTANCE: float = 255 * math.sqrt(3)

    @classmethod
    def validate_palette_size(cls, size: int) -> bool:
        """Validate palette size parameter."""
        return 1 <= size <= 256

    @classmethod
    def validate_min_distance(cls, distance: float) -> bool:
        """Validate minimum color distance parameter."""
        return 0.0 <= distance <= cls.MAX_RGB_DISTANCE

    @classmethod
    def validate_policy(cls, policy: str) -> bool:
        """Validate selection policy parameter."""
        return isinstance(policy, str) and policy.strip().lower() in ["dominant", "distinct"]

    @classmethod
    def validate_defaults(cls) -> None:
        """Fail fast on environment defaults that every request would rely on."""
        if not cls.validate_policy(cls.SELECTION_POLICY):
            raise ValueError(f"Invalid PALETTEGRAB_SELECTION_POLICY: {cls.SELECTION_POLICY!r}")
        if not cls.validate_palette_size(cls.PALETTE_SIZE):
            raise ValueError(f"Invalid PALETTEGRAB_PALETTE_SIZE: {cls.PALETTE_SIZE}")
        if not cls.validate_min_distance(cls.MIN_DISTANCE):
            raise ValueError(f"Invalid PALETTEGRAB_MIN_DISTANCE: {cls.MIN_DISTANCE}")


# Global config instance
config = Config()
config.validate_defaults()
