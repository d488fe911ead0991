"""
Configuration for the globe visualizer.
"""
import logging
import os
from dataclasses import dataclass, fields, replace

logger = logging.getLogger(__name__)

ENV_PREFIX = "GEOGLOBE_"


class ConfigError(ValueError):
    """Raised when a configuration value is out of range."""
    pass


@dataclass(frozen=True)
class GlobeConfig:
    """Tunable constants for geometry, animation and drawing."""

    # Geometry
    radius_fraction: float = 0.35
    perspective_distance: float = 600.0
    grid_lat_step: float = 5.0
    grid_lon_step: float = 5.0
    grid_band_step: float = 30.0

    # Visibility factors, a point is shown when z > -radius * factor
    border_visibility: float = 0.7
    connection_visibility: float = 0.3
    city_visibility: float = 0.5
    grid_visibility: float = 1.0
    grid_line_visibility: float = 0.5
    grid_dot_visibility: float = 0.3

    # Animation
    auto_rotation_step: float = 0.002
    pulse_step: float = 0.015
    frame_interval_ms: int = 16
    flow_speed: float = 0.5
    flow_index_spacing: float = 0.1

    # Interaction
    drag_sensitivity: float = 0.01

    # Network
    connection_probability: float = 0.4
    curve_lift: float = 0.2

    def __post_init__(self):
        if not 0 < self.radius_fraction <= 0.5:
            raise ConfigError(f"radius_fraction must be in (0, 0.5], got {self.radius_fraction}")
        if self.perspective_distance <= 0:
            raise ConfigError(f"perspective_distance must be positive, got {self.perspective_distance}")
        if not 0.0 <= self.connection_probability <= 1.0:
            raise ConfigError(
                f"connection_probability must be in [0, 1], got {self.connection_probability}"
            )
        for name in ("grid_lat_step", "grid_lon_step", "grid_band_step"):
            value = getattr(self, name)
            if value <= 0:
                raise ConfigError(f"{name} must be positive, got {value}")
        if self.frame_interval_ms < 1:
            raise ConfigError(f"frame_interval_ms must be >= 1, got {self.frame_interval_ms}")

    @classmethod
    def from_env(cls, environ=None) -> "GlobeConfig":
        """Build a config with overrides from GEOGLOBE_* environment variables.

        e.g. GEOGLOBE_DRAG_SENSITIVITY=0.02

        Raises:
            ConfigError: If a variable cannot be parsed or is out of range
        """
        environ = os.environ if environ is None else environ
        overrides = {}
        for f in fields(cls):
            key = ENV_PREFIX + f.name.upper()
            raw = environ.get(key)
            if raw is None:
                continue
            try:
                overrides[f.name] = int(raw) if f.type in (int, "int") else float(raw)
            except ValueError:
                raise ConfigError(f"{key}={raw!r} is not a number") from None
            logger.debug(f"Config override {key}={raw}")
        return replace(cls(), **overrides)
