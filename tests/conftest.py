"""
Test configuration and fixtures for PaletteGrab tests.
"""
import cv2
import numpy as np
import pytest
from fastapi.testclient import TestClient

from main import app


@pytest.fixture
def test_client():
    """Create test client for the FastAPI app."""
    return TestClient(app)


@pytest.fixture(autouse=True)
def reset_metrics():
    """Reset metrics before each test."""
    from palettegrab.utils.metrics import reset_metrics
    reset_metrics()


def encode_png(rgb: np.ndarray) -> bytes:
    """Encode an RGB uint8 array as PNG bytes."""
    success, buffer = cv2.imencode('.png', cv2.cvtColor(rgb, cv2.COLOR_RGB2BGR))
    assert success
    return buffer.tobytes()


@pytest.fixture
def red_blue_image():
    """10x10 RGB image: 60 red, 30 blue and 10 near-red pixels."""
    img = np.zeros((10, 10, 3), dtype=np.uint8)
    img[:6, :] = (255, 0, 0)     # Red
    img[6:9, :] = (0, 0, 255)    # Blue
    img[9, :] = (250, 5, 5)      # Near-red
    return img
