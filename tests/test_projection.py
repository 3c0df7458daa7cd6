"""Tests for camera projection."""

import math

import numpy as np
import pytest

from prime_spiral3d.visualization.projection import (
    CameraState,
    Viewport,
    clamp_zoom,
    project,
    project_arrays,
)
from prime_spiral3d.visualization.spirals import Point3D, helix_coordinates


VIEWPORT = Viewport(800, 600)


class TestViewport:
    """Tests for Viewport."""

    def test_scale(self):
        """Test scale is 0.12 of the smaller side."""
        assert VIEWPORT.scale == pytest.approx(72.0)
        assert Viewport(300, 1000).scale == pytest.approx(36.0)

    def test_invalid_size(self):
        """Test non-positive sizes raise ValueError."""
        with pytest.raises(ValueError):
            Viewport(0, 100)
        with pytest.raises(ValueError):
            Viewport(100, -1)


class TestCameraState:
    """Tests for CameraState."""

    def test_defaults(self):
        """Test the initial pose."""
        camera = CameraState()
        assert (camera.rotation_x, camera.rotation_y, camera.zoom) == (0.0, 0.0, 1.0)

    def test_reset(self):
        """Test reset returns to the initial pose."""
        camera = CameraState(1.0, -2.0, 3.0)
        camera.reset()
        assert camera == CameraState()

    def test_copy_is_independent(self):
        """Test copies do not share state."""
        camera = CameraState(0.5, 0.5, 2.0)
        other = camera.copy()
        other.zoom = 1.0
        assert camera.zoom == 2.0

    def test_clamp_zoom(self):
        """Test zoom clamping bounds."""
        assert clamp_zoom(0.0) == 0.1
        assert clamp_zoom(10.0) == 5.0
        assert clamp_zoom(1.5) == 1.5


class TestProject:
    """Tests for single-point projection."""

    def test_identity_orthographic(self):
        """Test no rotation, zoom 1, no perspective ignores z."""
        camera = CameraState()
        for z in (-5.0, 0.0, 3.0):
            p = project(Point3D(1, 2.0, -1.5, z), camera, VIEWPORT, perspective=False)
            assert p.screen_x == pytest.approx(400 + 2.0 * 72)
            assert p.screen_y == pytest.approx(300 - 1.5 * 72)
            assert p.depth == pytest.approx(z)
            assert p.perspective_scale == 1.0

    def test_zoom_scales_offset(self):
        """Test zoom multiplies the distance from the centre."""
        p = project(Point3D(1, 1.0, 0.0, 0.0), CameraState(zoom=2.0), VIEWPORT, perspective=False)
        assert p.screen_x == pytest.approx(400 + 144)

    def test_perspective_factor(self):
        """Test perspective scale is 1 / (1 + 0.1 * depth)."""
        p = project(Point3D(1, 1.0, 1.0, 2.0), CameraState(), VIEWPORT, perspective=True)
        persp = 1 / 1.2
        assert p.perspective_scale == pytest.approx(persp)
        assert p.screen_x == pytest.approx(400 + 72 * persp)
        assert p.screen_y == pytest.approx(300 + 72 * persp)

    def test_rotation_about_x(self):
        """Test rotating +y by pi/2 about X moves it into depth."""
        p = project(Point3D(1, 0.0, 1.0, 0.0), CameraState(rotation_x=math.pi / 2), VIEWPORT, perspective=False)
        assert p.screen_y == pytest.approx(300)
        assert p.depth == pytest.approx(1.0)

    def test_rotation_about_y(self):
        """Test rotating +x by pi/2 about Y sends it to depth -1."""
        p = project(Point3D(1, 1.0, 0.0, 0.0), CameraState(rotation_y=math.pi / 2), VIEWPORT, perspective=False)
        assert p.screen_x == pytest.approx(400)
        assert p.depth == pytest.approx(-1.0)

    def test_rotation_order(self):
        """Test X rotation is applied before Y rotation."""
        rx, ry = 0.3, 1.1
        x, y, z = 0.7, -0.4, 1.9
        y1 = y * math.cos(rx) - z * math.sin(rx)
        z1 = y * math.sin(rx) + z * math.cos(rx)
        x2 = x * math.cos(ry) + z1 * math.sin(ry)
        z2 = -x * math.sin(ry) + z1 * math.cos(ry)
        persp = 1 / (1 + z2 * 0.1)
        scale = 600 * 0.12 * 1.5

        p = project(Point3D(1, x, y, z), CameraState(rx, ry, 1.5), VIEWPORT, perspective=True)
        assert p.screen_x == pytest.approx(400 + x2 * scale * persp)
        assert p.screen_y == pytest.approx(300 + y1 * scale * persp)
        assert p.depth == pytest.approx(z2)
        assert p.perspective_scale == pytest.approx(persp)


class TestProjectArrays:
    """Tests for vectorised projection."""

    def test_matches_single_point(self):
        """Test array projection equals per-point projection."""
        cloud = helix_coordinates(50)
        camera = CameraState(0.4, -0.9, 1.3)
        sx, sy, depth, persp = project_arrays(cloud.x, cloud.y, cloud.z, camera, VIEWPORT, True)
        for i, point in enumerate(cloud):
            p = project(point, camera, VIEWPORT, True)
            assert sx[i] == pytest.approx(p.screen_x)
            assert sy[i] == pytest.approx(p.screen_y)
            assert depth[i] == pytest.approx(p.depth)
            assert persp[i] == pytest.approx(p.perspective_scale)

    def test_orthographic_scale_is_one(self):
        """Test perspective off gives a scale of one everywhere."""
        _, _, _, persp = project_arrays(np.zeros(3), np.zeros(3), np.arange(3.0), CameraState(), VIEWPORT, False)
        np.testing.assert_array_equal(persp, np.ones(3))
