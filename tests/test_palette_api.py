"""
API integration tests for palette endpoints.

Tests the complete palette API:
- Upload extraction with both selection policies
- Format tag handling and error mapping
- Direct formatting of hex colors
- Metrics recording
"""

import base64

import numpy as np
import pytest

from tests.conftest import encode_png


class TestPaletteExtractAPI:
    """Test the /v1/palette/extract endpoint"""

    @pytest.fixture
    def upload(self, red_blue_image):
        return {"file": ("palette.png", encode_png(red_blue_image), "image/png")}

    def test_extract_default_parameters(self, test_client, upload):
        response = test_client.post("/v1/palette/extract", files=upload)

        assert response.status_code == 200
        data = response.json()

        assert data["width"] == 10
        assert data["height"] == 10
        assert data["total_pixels"] == 100
        assert data["distinct_colors"] == 3
        assert data["policy"] == "distinct"
        assert data["formats"] == ["RGB", "CMYK", "HEX"]

        palette = data["palette"]
        assert [entry["hex"] for entry in palette] == ["#FF0000", "#0000FF"]
        assert [entry["ratio"] for entry in palette] == [0.6, 0.3]
        assert palette[0]["rgb"] == [255, 0, 0]
        assert palette[0]["formats"]["RGB"]["text"] == "RGB(255, 0, 0)"
        assert palette[1]["formats"]["CMYK"]["text"] == "CMYK(100.00%, 100.00%, 0.00%, 0.00%)"

        assert "request_id" in data["debug"]
        assert data["debug"]["request_id"].startswith("pal-")

    def test_extract_includes_swatch(self, test_client, upload):
        response = test_client.post("/v1/palette/extract", files=upload)
        swatch = response.json()["artifacts"]["swatch_png_b64"]
        assert base64.b64decode(swatch).startswith(b'\x89PNG')

    def test_extract_without_swatch(self, test_client, upload):
        response = test_client.post("/v1/palette/extract?include_swatch=false", files=upload)
        assert response.status_code == 200
        assert response.json()["artifacts"] is None

    def test_extract_dominant_policy(self, test_client, upload):
        response = test_client.post("/v1/palette/extract?policy=dominant&palette_size=3", files=upload)

        assert response.status_code == 200
        palette = response.json()["palette"]
        assert [entry["hex"] for entry in palette] == ["#FF0000", "#0000FF", "#FA0505"]
        assert [entry["count"] for entry in palette] == [60, 30, 10]

    def test_extract_requested_formats(self, test_client, upload):
        response = test_client.post("/v1/palette/extract?formats=lab,hwb", files=upload)

        assert response.status_code == 200
        data = response.json()
        assert data["formats"] == ["LAB", "HWB"]
        red = data["palette"][0]["formats"]
        assert red["LAB"]["text"] == "LAB(53.24, 80.09, 67.20)"
        assert red["HWB"]["text"] == "HWB(0.00, 0.00%, 0.00%)"

    def test_extract_unsupported_format(self, test_client, upload):
        response = test_client.post("/v1/palette/extract?formats=RGB,NCOL", files=upload)

        assert response.status_code == 400
        assert "NCOL" in response.json()["detail"]

    def test_extract_invalid_policy(self, test_client, upload):
        response = test_client.post("/v1/palette/extract?policy=random", files=upload)
        assert response.status_code == 422

    def test_extract_palette_size_out_of_range(self, test_client, upload):
        response = test_client.post("/v1/palette/extract?palette_size=0", files=upload)
        assert response.status_code == 422

    def test_extract_unsupported_media_type(self, test_client):
        response = test_client.post(
            "/v1/palette/extract",
            files={"file": ("notes.txt", b"just some text", "text/plain")}
        )
        assert response.status_code == 415

    def test_extract_bad_magic_bytes(self, test_client):
        response = test_client.post(
            "/v1/palette/extract",
            files={"file": ("fake.png", b"definitely not a png file", "image/png")}
        )
        assert response.status_code == 400

    def test_extract_single_color_image(self, test_client):
        img = np.full((6, 4, 3), (12, 34, 56), dtype=np.uint8)
        response = test_client.post(
            "/v1/palette/extract",
            files={"file": ("flat.png", encode_png(img), "image/png")}
        )

        assert response.status_code == 200
        data = response.json()
        assert data["width"] == 4
        assert data["height"] == 6
        assert len(data["palette"]) == 1
        assert data["palette"][0]["hex"] == "#0C2238"
        assert data["palette"][0]["ratio"] == 1.0


class TestPaletteFormatAPI:
    """Test the /v1/palette/format and /v1/palette/formats endpoints"""

    def test_list_formats(self, test_client):
        response = test_client.get("/v1/palette/formats")

        assert response.status_code == 200
        data = response.json()
        assert data["formats"] == ["RGB", "CMYK", "HEX", "LAB", "HSL", "XYZ", "LUV", "HWB"]
        assert data["default_formats"] == ["RGB", "CMYK", "HEX"]

    def test_format_colors(self, test_client):
        response = test_client.post(
            "/v1/palette/format",
            json={"colors": ["#ff0000", "000000"], "formats": ["rgb", "XYZ"]}
        )

        assert response.status_code == 200
        colors = response.json()["colors"]
        assert [entry["hex"] for entry in colors] == ["#FF0000", "#000000"]
        assert colors[0]["formats"]["RGB"]["text"] == "RGB(255, 0, 0)"
        assert colors[0]["formats"]["XYZ"]["text"] == "XYZ(41.25, 21.27, 1.93)"
        assert colors[1]["formats"]["XYZ"]["components"] == [0.0, 0.0, 0.0]

    def test_format_unsupported_tag(self, test_client):
        response = test_client.post(
            "/v1/palette/format",
            json={"colors": ["#FF0000"], "formats": ["NCOL"]}
        )
        assert response.status_code == 400

    def test_format_malformed_hex(self, test_client):
        response = test_client.post(
            "/v1/palette/format",
            json={"colors": ["#XYZXYZ"], "formats": ["RGB"]}
        )
        assert response.status_code == 400

    def test_format_requires_colors(self, test_client):
        response = test_client.post("/v1/palette/format", json={"colors": [], "formats": ["RGB"]})
        assert response.status_code == 422


class TestPaletteMetrics:
    """Test metrics recorded by extraction requests"""

    def test_successful_request_is_counted(self, test_client, red_blue_image):
        files = {"file": ("palette.png", encode_png(red_blue_image), "image/png")}
        assert test_client.post("/v1/palette/extract", files=files).status_code == 200

        summary = test_client.get("/metrics").json()
        assert summary["counters"]["palette_extract_requests_total"] == 1
        assert summary["counters"]["palette_extract_policy_total_distinct"] == 1
        assert summary["timing_stats"]["palette_extract_duration_ms"]["count"] == 1

    def test_failed_request_is_counted(self, test_client):
        files = {"file": ("fake.png", b"definitely not a png file", "image/png")}
        assert test_client.post("/v1/palette/extract", files=files).status_code == 400

        counters = test_client.get("/metrics").json()["counters"]
        assert counters["palette_extract_failed_total"] == 1
        assert counters["palette_extract_error_httpexception"] == 1
        assert "palette_extract_requests_total" not in counters
