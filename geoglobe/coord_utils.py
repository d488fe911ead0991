import numpy as np

from geoglobe.models import GeoPoint, Point3D


def spherical_to_cartesian(lat, lon, r:float):
    """Convert geographic coordinates to cartesian coordinates on a sphere

    Parameters
    ----------
    lat : float | np.ndarray
        Latitude in degrees
    lon : float | np.ndarray
        Longitude in degrees
    r : float
        Sphere radius

    Returns
    -------
    x : float | np.ndarray
    y : float | np.ndarray
    z : float | np.ndarray
        z points along the polar axis
    """
    lat_rad = np.radians(lat)
    lon_rad = np.radians(lon)

    x = r * np.cos(lat_rad) * np.cos(lon_rad)
    y = r * np.cos(lat_rad) * np.sin(lon_rad)
    z = r * np.sin(lat_rad)

    return x, y, z


def geo_to_point(geo: GeoPoint, r: float) -> Point3D:
    """Project a single GeoPoint onto a sphere of radius r

    Single point helper for callers and tests. Scenes use geo_points_to_array.
    """
    x, y, z = spherical_to_cartesian(geo.lat, geo.lon, r)
    return Point3D(float(x), float(y), float(z))


def geo_points_to_array(geos, r: float) -> np.ndarray:
    """Project a sequence of GeoPoints

    Returns
    -------
    points : np.ndarray
        (N,3) array of x,y,z
    """
    if not geos:
        return np.empty((0, 3))
    lats = np.array([g.lat for g in geos], dtype=float)
    lons = np.array([g.lon for g in geos], dtype=float)
    return np.column_stack(spherical_to_cartesian(lats, lons, r))


def lat_lon_grid(lat_step: float = 5.0, lon_step: float = 5.0) -> tuple[np.ndarray, np.ndarray]:
    """Regular lat/lon grid covering the whole sphere, end points included

    Parameters
    ----------
    lat_step : float
        Degrees between parallels
    lon_step : float
        Degrees between meridians

    Returns
    -------
    lats : np.ndarray
    lons : np.ndarray
        Flattened, latitude major
    """
    n_lat = int(round(180.0 / lat_step))
    n_lon = int(round(360.0 / lon_step))
    lat_values = np.linspace(-90.0, 90.0, n_lat + 1)
    lon_values = np.linspace(-180.0, 180.0, n_lon + 1)
    lats, lons = np.meshgrid(lat_values, lon_values, indexing='ij')
    return lats.ravel(), lons.ravel()


def rotate_points(points, pitch: float, yaw: float):
    """Rotate points about the vertical axis (yaw) then the horizontal axis (pitch)

    Parameters
    ----------
    points : Point3D | np.ndarray
        Single point or (N,3) array
    pitch : float
        Radians about the horizontal axis, acts on (y, z)
    yaw : float
        Radians about the vertical axis, acts on (x, z)

    Returns
    -------
    rotated : Point3D | np.ndarray
        New object of the same kind as the input
    """
    single = isinstance(points, Point3D)
    p = np.asarray(points, dtype=float)
    x, y, z = p[..., 0], p[..., 1], p[..., 2]

    cos_yaw, sin_yaw = np.cos(yaw), np.sin(yaw)
    x1 = x * cos_yaw - z * sin_yaw
    z1 = x * sin_yaw + z * cos_yaw

    cos_pitch, sin_pitch = np.cos(pitch), np.sin(pitch)
    y2 = y * cos_pitch - z1 * sin_pitch
    z2 = y * sin_pitch + z1 * cos_pitch

    if single:
        return Point3D(float(x1), float(y2), float(z2))
    return np.stack([x1, y2, z2], axis=-1)
