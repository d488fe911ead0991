"""Data model for the globe: static geography, per-mount view state."""

from dataclasses import dataclass, field
from typing import NamedTuple

import numpy as np


@dataclass(frozen=True)
class GeoPoint:
    """Geographic coordinate in degrees."""

    lat: float  # -90..90
    lon: float  # -180..180


class Point3D(NamedTuple):
    """Cartesian point on (or derived from) the sphere.

    For one-off points, rotate_points accepts and returns it. Bulk geometry
    stays in (N,3) arrays.
    """

    x: float
    y: float
    z: float

    def as_array(self) -> np.ndarray:
        return np.array(self, dtype=float)

    def norm(self) -> float:
        return float(np.linalg.norm(self.as_array()))


@dataclass(frozen=True)
class City:
    """Named point of interest with a community size."""

    name: str
    location: GeoPoint
    color: str  # "#RRGGBB" colour token
    users: int


@dataclass(frozen=True)
class ContinentOutline:
    """Ordered border polyline of a continent or region."""

    name: str
    vertices: tuple[GeoPoint, ...]


@dataclass(frozen=True)
class Connection:
    """Unordered pair of cities, stored as indices into the city table."""

    source: int
    target: int

    def __post_init__(self):
        if self.source > self.target:
            lo, hi = self.target, self.source
            object.__setattr__(self, "source", lo)
            object.__setattr__(self, "target", hi)


@dataclass
class RotationState:
    """User driven rotation in radians."""

    pitch: float = 0.0
    yaw: float = 0.0


@dataclass
class AnimationPhase:
    """Frame clocks advanced by the animation loop."""

    auto_rotation_angle: float = 0.0
    pulse_phase: float = 0.0


@dataclass
class InteractionState:
    is_dragging: bool = False
    is_hovering: bool = False
    last_position: tuple[float, float] | None = None

    @property
    def suspends_auto_rotation(self) -> bool:
        return self.is_dragging or self.is_hovering


@dataclass
class GlobeState:
    """Mutable view state owned by one mounted globe."""

    rotation: RotationState = field(default_factory=RotationState)
    phase: AnimationPhase = field(default_factory=AnimationPhase)
    interaction: InteractionState = field(default_factory=InteractionState)

    def view_angles(self) -> tuple[float, float]:
        """Effective (pitch, yaw): auto-rotation is added on top of the user's yaw."""
        return (self.rotation.pitch,
                self.rotation.yaw + self.phase.auto_rotation_angle)

    @property
    def pulse(self) -> float:
        """Halo pulse factor in [0, 1]."""
        return float(np.sin(self.phase.pulse_phase) * 0.5 + 0.5)
