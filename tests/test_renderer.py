"""Tests for the draw command sequence produced per frame."""

import math

import numpy as np
import pytest

from geoglobe.datasets import CITIES, CONTINENT_OUTLINES
from geoglobe.draw_commands import (
    Clear,
    DrawText,
    FillCircle,
    FillRoundRect,
    LinearGradient,
    RadialGradient,
    StrokeCircle,
    StrokePolyline,
    StrokeQuadCurve,
)
from geoglobe.models import Connection, GlobeState
from geoglobe.renderer import flow_offset, render_frame, visible_cities
from geoglobe.scene import build_scene


def of_type(commands, kind):
    return [c for c in commands if isinstance(c, kind)]


def borders(commands):
    return [c for c in commands if isinstance(c, StrokePolyline) and c.glow_blur > 0]


def grid_lines(commands):
    return [c for c in commands if isinstance(c, StrokePolyline) and c.glow_blur == 0]


class TestFrameStructure:

    @pytest.fixture
    def scene(self):
        connections = (Connection(0, 1), Connection(2, 9))
        return build_scene(600, 600, CITIES, CONTINENT_OUTLINES, connections)

    def test_background_layers_first(self, scene, config):
        commands = render_frame(GlobeState(), scene, config)
        assert commands[0] == Clear(600.0, 600.0)
        base, atmosphere = commands[1], commands[2]
        assert isinstance(base, FillCircle) and isinstance(base.fill, RadialGradient)
        assert base.radius == pytest.approx(scene.silhouette_radius)
        assert atmosphere.radius == pytest.approx(scene.silhouette_radius * 1.15)

    def test_outer_glow_ring_last(self, scene, config):
        ring = render_frame(GlobeState(), scene, config)[-1]
        assert isinstance(ring, StrokeCircle)
        assert ring.radius == pytest.approx(scene.silhouette_radius + 5)
        assert ring.width == 30.0

    def test_layer_order(self, scene, config):
        commands = render_frame(GlobeState(), scene, config)
        kinds = [type(c) for c in commands]
        last_border = max(i for i, c in enumerate(commands)
                          if isinstance(c, StrokePolyline) and c.glow_blur > 0)
        first_grid_line = kinds.index(StrokePolyline, last_border + 1)
        first_badge = kinds.index(FillRoundRect)
        assert last_border < first_grid_line < first_badge

    def test_front_features_stay_on_the_disc(self, scene, config):
        state = GlobeState()
        state.rotation.pitch = 0.35
        state.rotation.yaw = 1.1
        commands = render_frame(state, scene, config)
        cx, cy = scene.center
        disc = commands[1].radius
        points = [p for c in borders(commands) for p in c.points]
        points += [(c.cx, c.cy) for c in of_type(commands, StrokeCircle) if c.radius == 13.0]
        assert points
        assert max(math.hypot(x - cx, y - cy) for x, y in points) <= disc + 1e-9

    def test_frame_is_pure(self, scene, config):
        state = GlobeState()
        state.rotation.yaw = 0.4
        state.phase.pulse_phase = 1.3
        first = render_frame(state, scene, config)
        second = render_frame(state, scene, config)
        assert first == second
        assert state.rotation.yaw == 0.4
        assert state.phase.pulse_phase == 1.3


class TestCityMarkers:

    @pytest.fixture
    def scene(self, pole_cities):
        return build_scene(400, 400, pole_cities, ())

    def test_back_facing_city_is_skipped(self, scene, config):
        commands = render_frame(GlobeState(), scene, config)
        texts = of_type(commands, DrawText)
        assert [t.text for t in texts] == ["85"]
        assert visible_cities(GlobeState(), scene, config) == ["North"]

    def test_marker_layers(self, scene, config):
        commands = render_frame(GlobeState(), scene, config)
        cx, cy = scene.center
        rings = [c for c in of_type(commands, StrokeCircle) if c.radius in (13.0, 10.0)]
        assert [r.radius for r in rings] == [13.0, 10.0]
        assert all((r.cx, r.cy) == pytest.approx((cx, cy)) for r in rings)
        badge = of_type(commands, FillRoundRect)[0]
        assert (badge.x, badge.y, badge.width, badge.height) == pytest.approx((cx + 16, cy - 8, 32, 16))
        label = of_type(commands, DrawText)[0]
        assert (label.x, label.y) == pytest.approx((cx + 32, cy))

    def test_halo_follows_pulse(self, scene, config):
        state = GlobeState()
        state.phase.pulse_phase = math.pi / 2
        commands = render_frame(state, scene, config)
        assert any(isinstance(c, FillCircle) and c.radius == pytest.approx(34.0) for c in commands)
        state.phase.pulse_phase = -math.pi / 2
        commands = render_frame(state, scene, config)
        assert any(isinstance(c, FillCircle) and c.radius == pytest.approx(24.0) for c in commands)

    def test_rotation_hides_city(self, scene, config):
        state = GlobeState()
        state.rotation.yaw = math.pi
        assert visible_cities(state, scene, config) == ["South"]
        assert [t.text for t in of_type(render_frame(state, scene, config), DrawText)] == ["12"]

    def test_no_badge_near_horizon(self, config):
        from geoglobe.models import City, GeoPoint

        scene = build_scene(400, 400, (City("Edge", GeoPoint(-10.0, 0.0), "#10B981", 5),), ())
        commands = render_frame(GlobeState(), scene, config)
        assert of_type(commands, FillRoundRect) == []
        assert len([c for c in of_type(commands, StrokeCircle) if c.radius == 13.0]) == 1


class TestConnections:

    def test_curve_between_front_facing_cities(self, northern_cities, config):
        scene = build_scene(500, 500, northern_cities, (), (Connection(0, 1),))
        curves = of_type(render_frame(GlobeState(), scene, config), StrokeQuadCurve)
        assert len(curves) == 1
        curve = curves[0]
        (x0, y0), (x1, y1) = curve.start, curve.end
        distance = math.hypot(x1 - x0, y1 - y0)
        assert curve.control == pytest.approx(((x0 + x1) / 2, (y0 + y1) / 2 - 0.2 * distance))
        assert isinstance(curve.stroke, LinearGradient)
        assert curve.width == 1.5

    def test_hidden_endpoint_drops_connection(self, pole_cities, config):
        scene = build_scene(500, 500, pole_cities, (), (Connection(0, 1),))
        assert of_type(render_frame(GlobeState(), scene, config), StrokeQuadCurve) == []

    def test_flow_highlight_moves_with_pulse(self, northern_cities, config):
        scene = build_scene(500, 500, northern_cities, (), (Connection(0, 1), Connection(0, 2)))
        state = GlobeState()
        state.phase.pulse_phase = 0.5
        curves = of_type(render_frame(state, scene, config), StrokeQuadCurve)
        peaks = [max(c.stroke.stops, key=lambda s: s.color.a).offset for c in curves]
        assert peaks == pytest.approx([0.25, 0.35])

    @pytest.mark.parametrize("pulse_phase", [0.0, 0.1, 0.5, 1.8, 1.9, 1.98])
    def test_one_stop_per_offset(self, northern_cities, config, pulse_phase):
        scene = build_scene(500, 500, northern_cities, (), (Connection(0, 1),))
        state = GlobeState()
        state.phase.pulse_phase = pulse_phase
        curve = of_type(render_frame(state, scene, config), StrokeQuadCurve)[0]
        offsets = [s.offset for s in curve.stroke.stops]
        assert offsets == sorted(set(offsets))
        assert offsets[0] == 0.0 and offsets[-1] == 1.0

    def test_highlight_near_end_fades_to_purple(self, northern_cities, config):
        scene = build_scene(500, 500, northern_cities, (), (Connection(0, 1),))
        state = GlobeState()
        state.phase.pulse_phase = 1.9
        stops = of_type(render_frame(state, scene, config), StrokeQuadCurve)[0].stroke.stops
        assert [s.offset for s in stops] == pytest.approx([0.0, 0.85, 0.95, 1.0])
        assert stops[-1].color[:3] == (139, 92, 246)

    def test_highlight_at_start_keeps_peak(self, northern_cities, config):
        scene = build_scene(500, 500, northern_cities, (), (Connection(0, 1),))
        stops = of_type(render_frame(GlobeState(), scene, config), StrokeQuadCurve)[0].stroke.stops
        assert stops[0].offset == 0.0
        assert stops[0].color.a == pytest.approx(0.6)
        assert len(stops) == 3

    @pytest.mark.parametrize("phase,index,expected", [
        (0.0, 0, 0.0),
        (0.0, 3, 0.3),
        (2.5, 0, 0.25),
        (1.9, 2, 0.15),
    ])
    def test_flow_offset_wraps(self, config, phase, index, expected):
        offset = flow_offset(phase, index, config)
        assert 0.0 <= offset < 1.0
        assert offset == pytest.approx(expected)


class TestBorders:

    def test_gap_splits_outline(self, gapped_outline, config):
        scene = build_scene(500, 500, (), (gapped_outline,))
        paths = borders(render_frame(GlobeState(), scene, config))
        assert [len(p.points) for p in paths] == [2, 2]
        assert all(p.round_caps for p in paths)

    def test_fully_visible_outline_is_one_path(self, config):
        from geoglobe.models import ContinentOutline, GeoPoint

        ring = ContinentOutline("Ring", tuple(GeoPoint(70, lon) for lon in range(0, 361, 30)))
        scene = build_scene(500, 500, (), (ring,))
        paths = borders(render_frame(GlobeState(), scene, config))
        assert len(paths) == 1
        assert len(paths[0].points) == 13

    def test_outline_needs_three_visible_vertices(self, config):
        from geoglobe.models import ContinentOutline, GeoPoint

        sliver = ContinentOutline("Sliver", (GeoPoint(60, 0), GeoPoint(60, 10), GeoPoint(-89, 0)))
        scene = build_scene(500, 500, (), (sliver,))
        assert borders(render_frame(GlobeState(), scene, config)) == []


class TestGrid:

    def test_equator_band_is_a_full_circle(self, config):
        scene = build_scene(500, 500, (), ())
        cx, cy = scene.center
        lines = grid_lines(render_frame(GlobeState(), scene, config))
        full = [line for line in lines if len(line.points) == 73]
        equator = [line for line in full
                   if np.allclose([math.hypot(x - cx, y - cy) for x, y in line.points], scene.radius)]
        assert len(equator) == 1

    def test_grid_dot_alpha_bounded(self, config):
        scene = build_scene(500, 500, (), ())
        dots = [c for c in render_frame(GlobeState(), scene, config)
                if isinstance(c, FillCircle) and c.radius == 0.8]
        assert dots
        assert all(0.0 <= d.fill.a <= 0.2 for d in dots)

    def test_back_of_grid_has_no_dots(self, config):
        scene = build_scene(500, 500, (), ())
        state = GlobeState()
        dots = [c for c in render_frame(state, scene, config)
                if isinstance(c, FillCircle) and c.radius == 0.8]
        # at rest z = r sin(lat), dots need z > -0.3 r
        expected = int(np.sum(np.sin(np.radians(scene.grid_lats)) > -0.3))
        assert len(dots) == expected
