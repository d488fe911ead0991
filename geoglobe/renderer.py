"""Scene renderer: turns view state plus static geometry into draw commands.

Layers are emitted back to front:

    sphere base, atmosphere, continent borders, connection network,
    lat/lon grid, city markers, outer glow ring.

``render_frame`` has no side effects; the painter backend executes its output.
"""

import numpy as np

from geoglobe.camera import ProjectedPoints, is_front_facing
from geoglobe.config import GlobeConfig
from geoglobe.coord_utils import rotate_points
from geoglobe.draw_commands import (
    Clear,
    Color,
    DrawText,
    FillCircle,
    FillRoundRect,
    GradientStop,
    LinearGradient,
    RadialGradient,
    StrokeCircle,
    StrokePolyline,
    StrokeQuadCurve,
)
from geoglobe.models import GlobeState
from geoglobe.scene import GlobeScene

_PURPLE = Color(139, 92, 246)
_BLUE = Color(59, 130, 246)
_WHITE = Color(255, 255, 255)
_BLACK = Color(0, 0, 0)

_SPHERE_STOPS = (
    GradientStop(0.0, Color.from_hex('#1a1f3a')),
    GradientStop(0.3, Color.from_hex('#0f172a')),
    GradientStop(0.7, Color.from_hex('#020617')),
    GradientStop(1.0, Color.from_hex('#000000')),
)
_ATMOSPHERE_STOPS = (
    GradientStop(0.0, _PURPLE.with_alpha(0.3)),
    GradientStop(0.5, _BLUE.with_alpha(0.15)),
    GradientStop(1.0, _PURPLE.with_alpha(0.0)),
)
_OUTER_RING_STOPS = (
    GradientStop(0.0, _PURPLE.with_alpha(0.0)),
    GradientStop(0.5, _PURPLE.with_alpha(0.2)),
    GradientStop(1.0, _PURPLE.with_alpha(0.0)),
)

# City marker geometry in logical pixels
_HALO_BASE = 24.0
_HALO_PULSE = 10.0
_RING_RADIUS = 13.0
_INNER_RING_RADIUS = 10.0
_DOT_RADIUS = 7.0


def _runs(indices) -> list[list[int]]:
    """Split sorted indices into runs of consecutive values."""
    runs = []
    for i in indices:
        if runs and i == runs[-1][-1] + 1:
            runs[-1].append(i)
        else:
            runs.append([i])
    return runs


def _project(points: np.ndarray, pitch: float, yaw: float, scene: GlobeScene) -> ProjectedPoints:
    return scene.camera.project(rotate_points(points, pitch, yaw))


def _sphere_layers(scene: GlobeScene) -> list:
    cx, cy = scene.center
    r = scene.silhouette_radius
    base = RadialGradient(cx - r * 0.3, cy - r * 0.3, max(0.0, r * 0.1),
                          cx, cy, max(1.0, r), _SPHERE_STOPS)
    atmosphere = RadialGradient(cx, cy, max(0.0, r * 0.95),
                                cx, cy, max(1.0, r * 1.15), _ATMOSPHERE_STOPS)
    return [FillCircle(cx, cy, r, base), FillCircle(cx, cy, r * 1.15, atmosphere)]


def _border_layer(scene: GlobeScene, pitch: float, yaw: float, config: GlobeConfig) -> list:
    commands = []
    for outline in scene.outlines:
        proj = _project(outline.points, pitch, yaw, scene)
        visible = np.flatnonzero(is_front_facing(proj.z, scene.radius, config.border_visibility))
        if len(visible) <= 2:
            continue
        # never bridge a gap left by vertices that rotated behind the sphere
        for run in _runs(visible):
            if len(run) < 2:
                continue
            commands.append(StrokePolyline(
                points=tuple(proj.xy(i) for i in run),
                stroke=_PURPLE.with_alpha(0.5),
                width=2.0,
                round_caps=True,
                glow_blur=8.0,
                glow_color=_PURPLE.with_alpha(0.6),
            ))
    return commands


def flow_offset(pulse_phase: float, index: int, config: GlobeConfig) -> float:
    """Position in [0, 1) of the highlight travelling along connection `index`"""
    return (pulse_phase * config.flow_speed + index * config.flow_index_spacing) % 1.0


def _merge_coincident_stops(stops) -> tuple:
    """Keep one stop per offset, the colour that faces the inside of the gradient

    QGradient keeps a single colour per position. Of several stops at 0 the last
    one borders the interior, at 1 the first one does.
    """
    merged = []
    for stop in stops:
        if merged and merged[-1].offset == stop.offset:
            if stop.offset < 1.0:
                merged[-1] = stop
            continue
        merged.append(stop)
    return tuple(merged)


def _connection_layer(scene: GlobeScene, state: GlobeState, pitch: float, yaw: float,
                      config: GlobeConfig) -> list:
    if not scene.connections:
        return []
    proj = _project(scene.city_points, pitch, yaw, scene)
    front = is_front_facing(proj.z, scene.radius, config.connection_visibility)

    commands = []
    for index, conn in enumerate(scene.connections):
        if not (front[conn.source] and front[conn.target]):
            continue
        (x0, y0), (x1, y1) = proj.xy(conn.source), proj.xy(conn.target)
        offset = flow_offset(state.phase.pulse_phase, index, config)
        gradient = LinearGradient(x0, y0, x1, y1, _merge_coincident_stops((
            GradientStop(0.0, _PURPLE.with_alpha(0.1)),
            GradientStop(max(0.0, offset - 0.1), _PURPLE.with_alpha(0.1)),
            GradientStop(offset, _PURPLE.with_alpha(0.6)),
            GradientStop(min(1.0, offset + 0.1), _PURPLE.with_alpha(0.1)),
            GradientStop(1.0, _BLUE.with_alpha(0.1)),
        )))
        distance = float(np.hypot(x1 - x0, y1 - y0))
        control = ((x0 + x1) / 2, (y0 + y1) / 2 - distance * config.curve_lift)
        commands.append(StrokeQuadCurve((x0, y0), control, (x1, y1), gradient, 1.5))
    return commands


def _grid_layer(scene: GlobeScene, pitch: float, yaw: float, config: GlobeConfig) -> list:
    r = scene.radius
    proj = _project(scene.grid_points, pitch, yaw, scene)
    shown = np.flatnonzero(is_front_facing(proj.z, r, config.grid_visibility))
    lats = scene.grid_lats[shown]

    commands = []
    line_color = _PURPLE.with_alpha(0.1)
    tolerance = config.grid_lat_step / 2
    for band in np.arange(-90.0, 90.0 + 1e-9, config.grid_band_step):
        in_band = shown[np.abs(lats - band) < tolerance]
        in_band = in_band[np.argsort(scene.grid_lons[in_band], kind='stable')]
        front = is_front_facing(proj.z[in_band], r, config.grid_line_visibility)
        # positions within the band, so runs follow longitude order
        for run in _runs(np.flatnonzero(front)):
            if len(run) < 2:
                continue
            commands.append(StrokePolyline(
                points=tuple(proj.xy(in_band[k]) for k in run),
                stroke=line_color,
                width=0.5,
            ))

    for i in shown:
        z = float(proj.z[i])
        if not is_front_facing(z, r, config.grid_dot_visibility):
            continue
        opacity = max(0.0, (z + r) / (2 * r))
        x, y = proj.xy(i)
        commands.append(FillCircle(x, y, 0.8, _PURPLE.with_alpha(opacity * 0.2)))
    return commands


def _city_marker(x: float, y: float, z: float, radius: float, pulse: float, city) -> list:
    color = Color.from_hex(city.color)
    opacity = max(0.3, (z + radius) / (2 * radius))

    glow_size = max(1.0, _HALO_BASE + pulse * _HALO_PULSE)
    halo = RadialGradient(x, y, 0.0, x, y, glow_size, (
        GradientStop(0.0, color.with_alpha(0x90 / 255)),
        GradientStop(0.4, color.with_alpha(0x60 / 255)),
        GradientStop(0.7, color.with_alpha(0x20 / 255)),
        GradientStop(1.0, color.with_alpha(0.0)),
    ))
    dot = RadialGradient(x, y, 0.0, x, y, _DOT_RADIUS, (
        GradientStop(0.0, _WHITE),
        GradientStop(0.5, color),
        GradientStop(1.0, color),
    ))
    commands = [
        FillCircle(x, y, glow_size, halo),
        StrokeCircle(x, y, _RING_RADIUS, color.with_alpha(opacity), 2.5),
        StrokeCircle(x, y, _INNER_RING_RADIUS, _WHITE.with_alpha(opacity * 0.6), 1.0),
        FillCircle(x, y, _DOT_RADIUS, dot),
    ]
    if z > 0:
        commands.append(FillRoundRect(x + 16, y - 8, 32, 16, 8, _BLACK.with_alpha(0.8)))
        commands.append(DrawText(x + 32, y, f"{city.users}", color, 10))
    return commands


def _city_layer(scene: GlobeScene, state: GlobeState, pitch: float, yaw: float,
                config: GlobeConfig) -> list:
    if not scene.cities:
        return []
    proj = _project(scene.city_points, pitch, yaw, scene)
    pulse = state.pulse
    commands = []
    for i, city in enumerate(scene.cities):
        z = float(proj.z[i])
        if not is_front_facing(z, scene.radius, config.city_visibility):
            continue
        x, y = proj.xy(i)
        commands.extend(_city_marker(x, y, z, scene.radius, pulse, city))
    return commands


def _outer_glow(scene: GlobeScene) -> StrokeCircle:
    cx, cy = scene.center
    r = scene.silhouette_radius
    ring = RadialGradient(cx, cy, max(0.0, r - 10), cx, cy, max(1.0, r + 20), _OUTER_RING_STOPS)
    return StrokeCircle(cx, cy, r + 5, ring, 30.0)


def render_frame(state: GlobeState, scene: GlobeScene, config: GlobeConfig | None = None) -> list:
    """Compute the draw commands for one frame

    Parameters
    ----------
    state : GlobeState
        Rotation and animation clocks, read only
    scene : GlobeScene
        Static geometry of the current mount
    config : GlobeConfig

    Returns
    -------
    commands : list[DrawCommand]
        Back to front; the first is always Clear
    """
    config = GlobeConfig() if config is None else config
    pitch, yaw = state.view_angles()

    commands = [Clear(scene.width, scene.height)]
    commands.extend(_sphere_layers(scene))
    commands.extend(_border_layer(scene, pitch, yaw, config))
    commands.extend(_connection_layer(scene, state, pitch, yaw, config))
    commands.extend(_grid_layer(scene, pitch, yaw, config))
    commands.extend(_city_layer(scene, state, pitch, yaw, config))
    commands.append(_outer_glow(scene))
    return commands


def visible_cities(state: GlobeState, scene: GlobeScene, config: GlobeConfig | None = None) -> list[str]:
    """Names of the cities currently drawn on the front of the globe"""
    config = GlobeConfig() if config is None else config
    if not scene.cities:
        return []
    pitch, yaw = state.view_angles()
    proj = _project(scene.city_points, pitch, yaw, scene)
    front = is_front_facing(proj.z, scene.radius, config.city_visibility)
    return [city.name for city, f in zip(scene.cities, front) if f]
