import logging
from dataclasses import dataclass
from itertools import combinations

import numpy as np

from geoglobe.camera import PerspectiveCamera
from geoglobe.config import GlobeConfig
from geoglobe.coord_utils import geo_points_to_array, lat_lon_grid, spherical_to_cartesian
from geoglobe.models import City, Connection, ContinentOutline

logger = logging.getLogger(__name__)


def sample_connections(n_cities: int, probability: float = 0.4,
                       rng: np.random.Generator | None = None) -> tuple[Connection, ...]:
    """Pick city pairs to link, each pair independently with the given probability

    Parameters
    ----------
    n_cities : int
        Number of cities in the table
    probability : float
        Chance of including any given pair
    rng : np.random.Generator
        Random source, seed it for a reproducible network

    Returns
    -------
    connections : tuple[Connection]
        In (i, j) lexicographic order
    """
    rng = np.random.default_rng() if rng is None else rng
    pairs = list(combinations(range(n_cities), 2))
    draws = rng.random(len(pairs))
    connections = tuple(Connection(i, j) for (i, j), u in zip(pairs, draws) if u < probability)
    logger.debug(f"Sampled {len(connections)} of {len(pairs)} city pairs")
    return connections


# =============================================================================
# Outline
# =============================================================================

@dataclass(frozen=True, eq=False)
class OutlineGeometry:
    """Continent outline projected onto the sphere"""
    name: str
    points: np.ndarray  # (N,3)


# =============================================================================
# Scene Container
# =============================================================================

@dataclass(frozen=True, eq=False)
class GlobeScene:
    """Static geometry for one mount of the globe

    Everything here is computed once at setup. Per frame, the renderer rotates
    and projects these arrays without modifying them.

    Attributes
    ----------
    width, height : float
        Drawing surface size in logical pixels
    radius : float
        Sphere radius in logical pixels
    cities : tuple[City]
    city_points : np.ndarray
        (N,3) city positions
    outlines : tuple[OutlineGeometry]
    grid_lats, grid_lons : np.ndarray
        Grid coordinates in degrees
    grid_points : np.ndarray
        (M,3) grid positions
    connections : tuple[Connection]
    """
    width: float
    height: float
    radius: float
    cities: tuple
    city_points: np.ndarray
    outlines: tuple
    grid_lats: np.ndarray
    grid_lons: np.ndarray
    grid_points: np.ndarray
    connections: tuple
    perspective_distance: float = 600.0

    @property
    def center(self) -> tuple[float, float]:
        return self.width / 2, self.height / 2

    @property
    def camera(self) -> PerspectiveCamera:
        cx, cy = self.center
        return PerspectiveCamera(cx, cy, self.perspective_distance)

    @property
    def silhouette_radius(self) -> float:
        """Projected radius of the sphere outline, every front feature falls inside it"""
        return self.camera.silhouette_radius(self.radius)


def build_scene(width: float, height: float,
                cities: tuple[City, ...],
                outlines: tuple[ContinentOutline, ...],
                connections: tuple[Connection, ...] = (),
                config: GlobeConfig | None = None) -> GlobeScene:
    """Project all static geography onto a sphere sized for the surface

    Parameters
    ----------
    width, height : float
        Surface size in logical pixels
    cities : tuple[City]
    outlines : tuple[ContinentOutline]
    connections : tuple[Connection]
        Must index into cities
    config : GlobeConfig
    """
    config = GlobeConfig() if config is None else config
    radius = min(width, height) * config.radius_fraction

    for conn in connections:
        if conn.target >= len(cities):
            raise IndexError(f"Connection {conn} refers to a city that does not exist")

    city_points = geo_points_to_array([c.location for c in cities], radius)
    outline_geometry = tuple(
        OutlineGeometry(o.name, geo_points_to_array(o.vertices, radius)) for o in outlines
    )
    grid_lats, grid_lons = lat_lon_grid(config.grid_lat_step, config.grid_lon_step)
    grid_points = np.column_stack(spherical_to_cartesian(grid_lats, grid_lons, radius))

    return GlobeScene(
        width=float(width),
        height=float(height),
        radius=float(radius),
        cities=tuple(cities),
        city_points=city_points,
        outlines=outline_geometry,
        grid_lats=grid_lats,
        grid_lons=grid_lons,
        grid_points=grid_points,
        connections=tuple(connections),
        # eye stays outside the sphere on large surfaces
        perspective_distance=max(config.perspective_distance, 2.0 * radius),
    )
