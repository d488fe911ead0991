"""Tests for configuration defaults, validation and environment overrides."""

import pytest

from geoglobe.config import ConfigError, GlobeConfig


class TestGlobeConfig:

    def test_defaults(self):
        config = GlobeConfig()
        assert config.radius_fraction == 0.35
        assert config.perspective_distance == 600.0
        assert config.auto_rotation_step == 0.002
        assert config.pulse_step == 0.015
        assert config.drag_sensitivity == 0.01
        assert config.connection_probability == 0.4

    @pytest.mark.parametrize("overrides", [
        {"radius_fraction": 0.0},
        {"radius_fraction": 0.6},
        {"perspective_distance": -1.0},
        {"connection_probability": 1.5},
        {"grid_lat_step": 0.0},
        {"frame_interval_ms": 0},
    ])
    def test_rejects_out_of_range(self, overrides):
        with pytest.raises(ConfigError):
            GlobeConfig(**overrides)

    def test_config_error_is_value_error(self):
        with pytest.raises(ValueError):
            GlobeConfig(radius_fraction=2.0)


class TestFromEnv:

    def test_empty_environment_gives_defaults(self):
        assert GlobeConfig.from_env({}) == GlobeConfig()

    def test_overrides(self):
        config = GlobeConfig.from_env({
            "GEOGLOBE_DRAG_SENSITIVITY": "0.02",
            "GEOGLOBE_FRAME_INTERVAL_MS": "33",
            "UNRELATED": "x",
        })
        assert config.drag_sensitivity == 0.02
        assert config.frame_interval_ms == 33
        assert isinstance(config.frame_interval_ms, int)

    def test_unparseable_value(self):
        with pytest.raises(ConfigError, match="GEOGLOBE_PULSE_STEP"):
            GlobeConfig.from_env({"GEOGLOBE_PULSE_STEP": "fast"})

    def test_out_of_range_value(self):
        with pytest.raises(ConfigError):
            GlobeConfig.from_env({"GEOGLOBE_CONNECTION_PROBABILITY": "-0.1"})

    def test_reads_process_environment(self, monkeypatch):
        monkeypatch.setenv("GEOGLOBE_RADIUS_FRACTION", "0.25")
        assert GlobeConfig.from_env().radius_fraction == 0.25
