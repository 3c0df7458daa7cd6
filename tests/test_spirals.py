"""Tests for the 3D spiral generators."""

import math

import numpy as np
import pytest

from prime_spiral3d.visualization.spirals import (
    ConicalParams,
    HelixParams,
    LayeredParams,
    Point3D,
    PointCloud,
    SphericalParams,
    SpiralMode,
    conical_coordinates,
    default_params,
    generate_points,
    helix_coordinates,
    layer_statistics,
    layered_coordinates,
    spherical_coordinates,
)

ALL_MODES = list(SpiralMode)


class TestAllModes:
    """Properties shared by every generator."""

    @pytest.mark.parametrize("mode", ALL_MODES)
    @pytest.mark.parametrize("n", [0, 1, 2, 7, 200, 1001])
    def test_length_and_indices(self, mode, n):
        """Test output length equals n and indices are 1..n."""
        cloud = generate_points(mode, n)
        assert len(cloud) == n
        np.testing.assert_array_equal(cloud.index, np.arange(1, n + 1))

    @pytest.mark.parametrize("mode", ALL_MODES)
    def test_empty_for_zero(self, mode):
        """Test that n=0 yields an empty cloud."""
        cloud = generate_points(mode, 0)
        assert len(cloud) == 0
        assert list(cloud) == []

    @pytest.mark.parametrize("mode", ALL_MODES)
    def test_deterministic(self, mode):
        """Test identical inputs give identical outputs."""
        a = generate_points(mode, 500)
        b = generate_points(mode, 500)
        np.testing.assert_array_equal(a.x, b.x)
        np.testing.assert_array_equal(a.y, b.y)
        np.testing.assert_array_equal(a.z, b.z)

    @pytest.mark.parametrize("mode", ALL_MODES)
    def test_negative_n_rejected(self, mode):
        """Test that a negative n raises ValueError."""
        with pytest.raises(ValueError):
            generate_points(mode, -1)

    def test_non_integer_n_rejected(self):
        """Test that a float n raises ValueError."""
        with pytest.raises(ValueError):
            helix_coordinates(2.5)

    def test_mode_from_string(self):
        """Test modes can be given by name."""
        assert len(generate_points("layered", 10)) == 10

    def test_unknown_mode(self):
        """Test unknown mode raises ValueError."""
        with pytest.raises(ValueError):
            generate_points("torus", 10)

    def test_wrong_params_type(self):
        """Test params from another family raise TypeError."""
        with pytest.raises(TypeError):
            generate_points(SpiralMode.HELIX, 10, LayeredParams())

    def test_default_params(self):
        """Test default parameters per mode."""
        assert default_params("helix") == HelixParams(0.35, 1.0, 0.08)
        assert default_params("spherical") == SphericalParams(0.35)
        assert default_params("conical") == ConicalParams(0.35, 0.8, 0.04, 0.03)
        assert default_params("layered") == LayeredParams(0.35, 200, 6.0)


class TestPointCloud:
    """Tests for the PointCloud container."""

    def test_indexing_returns_point(self):
        """Test that items are Point3D with plain types."""
        p = helix_coordinates(3)[0]
        assert isinstance(p, Point3D)
        assert p.index == 1
        assert type(p.index) is int
        assert type(p.x) is float

    def test_iteration_order(self):
        """Test iteration yields points in index order."""
        assert [p.index for p in helix_coordinates(5)] == [1, 2, 3, 4, 5]

    def test_immutable_arrays(self):
        """Test coordinate arrays are read-only."""
        cloud = helix_coordinates(5)
        with pytest.raises(ValueError):
            cloud.x[0] = 42.0

    def test_empty(self):
        """Test empty cloud."""
        assert len(PointCloud.empty()) == 0


class TestHelix:
    """Tests for the cylindrical helix."""

    def test_first_point(self):
        """Test n=1 with step 0.35, radius 1, pitch 0.08."""
        p = helix_coordinates(1, step_angle=0.35, radius=1.0, pitch=0.08)[0]
        assert p.x == pytest.approx(math.cos(0.35))
        assert p.x == pytest.approx(0.9394, abs=1e-4)
        assert p.y == pytest.approx(0.3429, abs=1e-4)
        assert p.z == pytest.approx(0.028)

    def test_constant_radius(self):
        """Test every point lies on the cylinder."""
        cloud = helix_coordinates(300, radius=2.5)
        np.testing.assert_allclose(np.hypot(cloud.x, cloud.y), 2.5)

    def test_height_increases(self):
        """Test height rises linearly with n."""
        cloud = helix_coordinates(100, step_angle=0.5, pitch=0.1)
        np.testing.assert_allclose(cloud.z, 0.05 * np.arange(1, 101))


class TestSpherical:
    """Tests for the spherical spiral."""

    def test_single_point_at_pole(self):
        """Test N=1 sits at z=-1 with x=y=0."""
        p = spherical_coordinates(1, step_angle=1.234)[0]
        assert p.z == -1.0
        assert p.x == pytest.approx(0.0, abs=1e-12)
        assert p.y == pytest.approx(0.0, abs=1e-12)

    def test_z_spans_unit_interval(self):
        """Test z runs uniformly from -1 to 1."""
        cloud = spherical_coordinates(5)
        np.testing.assert_allclose(cloud.z, [-1.0, -0.5, 0.0, 0.5, 1.0])

    def test_points_on_unit_sphere(self):
        """Test every point has unit norm."""
        cloud = spherical_coordinates(1000)
        norms = np.sqrt(cloud.x ** 2 + cloud.y ** 2 + cloud.z ** 2)
        np.testing.assert_allclose(norms, 1.0)


class TestConical:
    """Tests for the conical Archimedean spiral."""

    def test_first_point(self):
        """Test n=1 with default parameters."""
        p = conical_coordinates(1)[0]
        r = 0.8 + 0.04 * 0.35
        assert p.x == pytest.approx(r * math.cos(0.35))
        assert p.y == pytest.approx(r * math.sin(0.35))
        assert p.z == pytest.approx(0.03 * 0.35)

    def test_radius_grows_linearly(self):
        """Test radius equals a + b*t."""
        cloud = conical_coordinates(200, step_angle=0.2, a=1.0, b=0.1, c=0.0)
        t = 0.2 * np.arange(1, 201)
        np.testing.assert_allclose(np.hypot(cloud.x, cloud.y), 1.0 + 0.1 * t)
        np.testing.assert_allclose(cloud.z, 0.0)


class TestLayered:
    """Tests for the layered-time spiral."""

    def test_layer_boundaries(self):
        """Test n=1 and n=200 in layer 0, n=201 in layer 1."""
        cloud = layered_coordinates(450, block_size=200, layer_radius=6.0)
        assert cloud[0].z == 0
        assert cloud[199].z == 0
        assert cloud[200].z == 1
        assert cloud[449].z == 2

    def test_ring_position_resets(self):
        """Test idx-in-layer restarts at 0 on a new layer."""
        cloud = layered_coordinates(201, block_size=200, layer_radius=6.0)
        assert cloud[200].x == pytest.approx(6.0)
        assert cloud[200].y == pytest.approx(0.0)
        assert cloud[0].x == pytest.approx(6.0)

    def test_block_size_floor(self):
        """Test block sizes below 1 behave like 1."""
        for size in (0, -5):
            cloud = layered_coordinates(4, block_size=size)
            np.testing.assert_array_equal(cloud.z, [0, 1, 2, 3])

    def test_constant_radius(self):
        """Test every ring has the layer radius."""
        cloud = layered_coordinates(1000, block_size=50, layer_radius=3.0)
        np.testing.assert_allclose(np.hypot(cloud.x, cloud.y), 3.0)


class TestLayerStatistics:
    """Tests for per-layer prime statistics."""

    def test_layers(self):
        """Test layer bounds and prime counts."""
        stats = layer_statistics(25, block_size=10)
        assert [(s['start'], s['end']) for s in stats] == [(1, 10), (11, 20), (21, 25)]
        assert [s['primes'] for s in stats] == [4, 4, 1]
        assert stats[2]['density'] == pytest.approx(1 / 5)

    def test_totals_match_sieve(self):
        """Test per-layer counts sum to the total prime count."""
        stats = layer_statistics(2000, block_size=200)
        assert sum(s['primes'] for s in stats) == 303
        assert len(stats) == 10

    def test_empty(self):
        """Test no layers for n=0."""
        assert layer_statistics(0) == []
