from dataclasses import dataclass

import numpy as np


@dataclass(frozen=True)
class ProjectedPoints:
    """Screen coordinates of projected points

    Attributes
    ----------
    x, y : np.ndarray
        Screen coordinates in logical pixels
    scale : np.ndarray
        Perspective scale factor
    z : np.ndarray
        Post-rotation depth, kept for visibility tests
    """
    x: np.ndarray
    y: np.ndarray
    scale: np.ndarray
    z: np.ndarray

    def __len__(self):
        return len(self.z)

    def xy(self, i: int) -> tuple[float, float]:
        return float(self.x[i]), float(self.y[i])


def is_front_facing(z, radius: float, factor: float):
    '''True where z lies above the visibility threshold -radius * factor'''
    return z > -radius * factor


class PerspectiveCamera:
    '''Fixed distance perspective projection onto the drawing surface

    z is measured toward the viewer, so a point with larger z is closer to the
    camera and is never drawn smaller than a point behind it.
    '''

    def __init__(self, center_x: float, center_y: float, distance: float = 600.0):
        '''
        Parameters
        ----------
        center_x : float
            Screen x of the sphere center
        center_y : float
            Screen y of the sphere center
        distance : float
            Distance from the eye to the sphere center, must exceed the radius
        '''
        self.center_x = center_x
        self.center_y = center_y
        self.distance = distance

    def scale(self, z):
        return self.distance / (self.distance - z)

    def silhouette_radius(self, radius: float) -> float:
        '''Screen radius of the outline of a sphere centred on the view axis

        The limb lies slightly in front of the centre plane (z = r^2 / d), so the
        projected sphere is larger than its radius.
        '''
        d = self.distance
        return radius * d / float(np.sqrt(d * d - radius * radius))

    def project(self, points) -> ProjectedPoints:
        """Project rotated points

        Parameters
        ----------
        points : np.ndarray | Point3D
            (N,3) array or a single point

        Returns
        -------
        projected : ProjectedPoints
        """
        p = np.atleast_2d(np.asarray(points, dtype=float))
        z = p[:, 2]
        scale = self.scale(z)
        return ProjectedPoints(
            x=p[:, 0] * scale + self.center_x,
            y=p[:, 1] * scale + self.center_y,
            scale=scale,
            z=z,
        )
