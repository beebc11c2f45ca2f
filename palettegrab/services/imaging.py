"""
PaletteGrab Imaging Utilities
Handles upload validation and decoding into pixel grids.
"""
import io

import numpy as np
from fastapi import HTTPException, UploadFile
from PIL import Image

from palettegrab.config import config
from palettegrab.services.colors.histogram import PixelGrid


def validate_file_upload(file: UploadFile) -> None:
    """
    Validate uploaded file for format compliance.

    Args:
        file: FastAPI UploadFile object

    Raises:
        HTTPException: 400 for oversized files, 415 for unsupported formats
    """
    # Check file size (file.size might be None for some clients)
    if getattr(file, 'size', None) and file.size > config.MAX_FILE_MB * 1024 * 1024:
        raise HTTPException(
            status_code=400,
            detail=f"File too large. Maximum size: {config.MAX_FILE_MB}MB"
        )

    # Validate MIME type
    if file.content_type not in config.SUPPORTED_MIME_TYPES:
        raise HTTPException(
            status_code=415,
            detail=f"Unsupported media type. Supported: {', '.join(config.SUPPORTED_MIME_TYPES)}"
        )

    # Validate file extension
    if file.filename:
        ext = file.filename.lower().split('.')[-1] if '.' in file.filename else ''
        if f".{ext}" not in config.SUPPORTED_EXTENSIONS:
            raise HTTPException(
                status_code=415,
                detail=f"Unsupported file extension. Supported: {', '.join(sorted(config.SUPPORTED_EXTENSIONS))}"
            )


def validate_magic_bytes(file_bytes: bytes) -> str:
    """
    Validate file magic bytes to ensure it's actually an image.

    Args:
        file_bytes: Raw file bytes

    Returns:
        Detected MIME type

    Raises:
        HTTPException: 400 for invalid/corrupt files
    """
    if len(file_bytes) < 8:
        raise HTTPException(status_code=400, detail="File too small or corrupt")

    if file_bytes.startswith(b'\xff\xd8\xff'):
        return "image/jpeg"
    elif file_bytes.startswith(b'\x89PNG\r\n\x1a\n'):
        return "image/png"
    elif file_bytes.startswith((b'GIF87a', b'GIF89a')):
        return "image/gif"
    elif file_bytes.startswith(b'BM'):
        return "image/bmp"
    else:
        raise HTTPException(
            status_code=400,
            detail="Invalid image file. Magic bytes don't match supported formats."
        )


def decode_image_bytes(file_bytes: bytes) -> PixelGrid:
    """
    Decode image bytes into an RGB pixel grid.

    Raises:
        HTTPException: 400 for decode errors or empty images
    """
    validate_magic_bytes(file_bytes)

    try:
        pil_image = Image.open(io.BytesIO(file_bytes))

        # Alpha and palette modes are flattened to plain RGB
        if pil_image.mode != 'RGB':
            pil_image = pil_image.convert('RGB')

        rgb_array = np.array(pil_image)

    except Exception as e:
        raise HTTPException(
            status_code=400,
            detail=f"Failed to decode image: {str(e)}"
        )

    if rgb_array.size == 0:
        raise HTTPException(status_code=400, detail="Decoded image has no pixels")

    return PixelGrid.from_array(rgb_array)


async def read_image(file: UploadFile) -> PixelGrid:
    """
    Safely read and decode an uploaded image file.

    Args:
        file: FastAPI UploadFile object

    Returns:
        Decoded RGB pixel grid

    Raises:
        HTTPException: 400 for read/decode errors
    """
    validate_file_upload(file)

    try:
        file_bytes = await file.read()
    except Exception as e:
        raise HTTPException(status_code=400, detail=f"Failed to read file: {str(e)}")

    # Validate file size after reading
    if len(file_bytes) > config.MAX_FILE_MB * 1024 * 1024:
        raise HTTPException(
            status_code=400,
            detail=f"File too large. Maximum size: {config.MAX_FILE_MB}MB"
        )

    return decode_image_bytes(file_bytes)
