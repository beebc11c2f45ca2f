"""
Test health and metrics endpoints.
"""
from palettegrab import __version__
from palettegrab.config import config


def test_health_check(test_client):
    """Test health check reports the service and version."""
    response = test_client.get("/healthz")

    assert response.status_code == 200
    data = response.json()

    assert data["ok"] is True
    assert data["version"] == __version__
    assert data["service"] == "palettegrab"


def test_metrics_summary(test_client):
    """Test metrics summary shape on a fresh collector."""
    response = test_client.get("/metrics")

    assert response.status_code == 200
    data = response.json()
    assert data["counters"] == {}
    assert data["timing_stats"] == {}
    assert data["uptime_seconds"] >= 0


def test_metrics_disabled(test_client, monkeypatch):
    """Test metrics endpoint is hidden when metrics are disabled."""
    monkeypatch.setattr(config, "METRICS_ENABLED", False)

    response = test_client.get("/metrics")
    assert response.status_code == 404
