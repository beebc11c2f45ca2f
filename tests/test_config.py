"""
Test configuration defaults and validators.
"""
import pytest

from palettegrab.config import Config


class TestConfigValidation:
    """Test validation of environment-driven defaults"""

    def test_shipped_defaults_are_valid(self):
        Config.validate_defaults()

    def test_policy_is_case_insensitive(self):
        assert Config.validate_policy("Dominant")
        assert Config.validate_policy(" distinct ")
        assert not Config.validate_policy("random")
        assert not Config.validate_policy(None)

    def test_bad_selection_policy_fails(self, monkeypatch):
        monkeypatch.setattr(Config, "SELECTION_POLICY", "random")
        with pytest.raises(ValueError, match="PALETTEGRAB_SELECTION_POLICY"):
            Config.validate_defaults()

    def test_bad_palette_size_fails(self, monkeypatch):
        monkeypatch.setattr(Config, "PALETTE_SIZE", 0)
        with pytest.raises(ValueError, match="PALETTEGRAB_PALETTE_SIZE"):
            Config.validate_defaults()

    def test_bad_min_distance_fails(self, monkeypatch):
        monkeypatch.setattr(Config, "MIN_DISTANCE", -1.0)
        with pytest.raises(ValueError, match="PALETTEGRAB_MIN_DISTANCE"):
            Config.validate_defaults()
