"""Unit tests for voxel cluster geometry.

Tests cover:
- Voxel counts from full, empty and partial silhouettes
- Lattice placement and mask orientation
- Mask shape validation
- Intersection and lower bound over the sub-spheres
- Random clusters
"""

import numpy as np
import pytest

from tinytracer.core.ray import Ray
from tinytracer.core.vector import Vector
from tinytracer.geometry.voxel import VoxelCluster


def full(rows, cols):
    return np.ones((rows, cols), dtype=bool)


class TestVoxelCounts:
    """Tests for building the sub-spheres from masks."""

    def test_full_cube(self):
        """Test that all-solid masks give width x height x depth voxels."""
        cluster = VoxelCluster(Vector.ZERO, full(8, 8), full(8, 8), full(8, 8))
        assert len(cluster.voxels) == 8 * 8 * 8

    def test_full_box_non_cubic(self):
        width, height, depth = 3, 4, 5
        cluster = VoxelCluster(
            Vector.ZERO,
            full(height, width),
            full(depth, width),
            full(height, depth),
        )
        assert (cluster.pixel_width, cluster.pixel_height, cluster.pixel_depth) == (3, 4, 5)
        assert len(cluster.voxels) == width * height * depth

    @pytest.mark.parametrize("empty_mask", ["front", "top", "side"])
    def test_any_empty_mask_gives_no_voxels(self, empty_mask):
        masks = {"front": full(8, 8), "top": full(8, 8), "side": full(8, 8)}
        masks[empty_mask] = np.zeros((8, 8), dtype=bool)
        cluster = VoxelCluster(Vector.ZERO, **masks)
        assert cluster.voxels == []

    def test_accepts_nested_lists(self):
        mask = [[1, 1], [1, 1]]
        cluster = VoxelCluster(Vector.ZERO, mask, mask, mask)
        assert len(cluster.voxels) == 8


class TestVoxelPlacement:
    """Tests for where voxels are placed."""

    def test_single_voxel_orientation(self):
        """Test that mask row 0 is the top of the lattice."""
        # 2x2x2 lattice with only cell (x=1, y=1, z=0) solid
        front = [[0, 1], [0, 0]]  # row 0 (top, y=1), column x=1
        top = [[0, 1], [0, 0]]  # z=0, x=1
        side = [[1, 0], [0, 0]]  # row 0 (top, y=1), z=0
        cluster = VoxelCluster(Vector(10.0, 20.0, 30.0), front, top, side, voxel_distance=32.0, voxel_radius=25.0)

        assert len(cluster.voxels) == 1
        voxel = cluster.voxels[0]
        assert voxel.center == Vector(42.0, 52.0, 30.0)
        assert voxel.radius == 25.0

    def test_spacing(self):
        mask = full(1, 2)
        top = full(1, 2)
        side = full(1, 1)
        cluster = VoxelCluster(Vector.ZERO, mask, top, side, voxel_distance=5.0, voxel_radius=1.0)
        centers = sorted(v.center.x for v in cluster.voxels)
        assert centers == [0.0, 5.0]


class TestVoxelValidation:
    """Tests for mask shape checks."""

    def test_top_width_mismatch(self):
        with pytest.raises(ValueError, match="top mask"):
            VoxelCluster(Vector.ZERO, full(4, 4), full(4, 3), full(4, 4))

    def test_side_shape_mismatch(self):
        with pytest.raises(ValueError, match="side mask"):
            VoxelCluster(Vector.ZERO, full(4, 4), full(4, 4), full(3, 4))

    def test_non_2d_mask(self):
        with pytest.raises(ValueError, match="2-dimensional"):
            VoxelCluster(Vector.ZERO, np.ones((2, 2, 2)), full(2, 2), full(2, 2))


class TestVoxelIntersection:
    """Tests for intersection through the sub-spheres."""

    def test_first_hit_is_closest_voxel(self):
        cluster = VoxelCluster(Vector(0.0, 0.0, 100.0), full(1, 1), full(3, 1), full(1, 3), voxel_distance=10.0, voxel_radius=2.0)
        hit = cluster.first_hit(Ray(Vector.ZERO, Vector.Z))
        assert hit is not None
        assert abs(hit.t - 98.0) < 1e-9
        assert hit.normal == -Vector.Z
        assert len(cluster.all_hits(Ray(Vector.ZERO, Vector.Z))) == 3

    def test_miss(self):
        cluster = VoxelCluster(Vector(0.0, 0.0, 100.0), full(2, 2), full(2, 2), full(2, 2))
        ray = Ray(Vector.ZERO, Vector.Y)
        assert cluster.first_hit(ray) is None
        assert cluster.first_possible_hit_t(ray) is None

    def test_lower_bound_is_minimum(self):
        cluster = VoxelCluster(Vector(0.0, 0.0, 100.0), full(1, 1), full(3, 1), full(1, 3), voxel_distance=10.0, voxel_radius=2.0)
        bound = cluster.first_possible_hit_t(Ray(Vector.ZERO, Vector.Z))
        assert bound == pytest.approx(98.0)

    def test_empty_cluster_never_hit(self):
        empty = np.zeros((2, 2), dtype=bool)
        cluster = VoxelCluster(Vector.ZERO, empty, empty, empty)
        ray = Ray(Vector(0.0, 0.0, -10.0), Vector.Z)
        assert cluster.first_hit(ray) is None
        assert cluster.first_possible_hit_t(ray) is None


class TestVoxelRandom:
    """Tests for random clusters."""

    def test_random_shapes(self, rng):
        cluster = VoxelCluster.random(Vector.ZERO, rng, size=6, fill=0.9)
        assert cluster.front.shape == (6, 6)
        assert cluster.top.shape == (6, 6)
        assert cluster.side.shape == (6, 6)
        assert 0 < len(cluster.voxels) <= 6 * 6 * 6

    def test_fill_one_is_full(self, rng):
        cluster = VoxelCluster.random(Vector.ZERO, rng, size=4, fill=1.0)
        assert len(cluster.voxels) == 64

    def test_fill_zero_is_empty(self, rng):
        cluster = VoxelCluster.random(Vector.ZERO, rng, size=4, fill=0.0)
        assert cluster.voxels == []

    def test_to_dict_masks(self):
        cluster = VoxelCluster(Vector.ZERO, [[1, 0]], [[1, 1]], [[1]])
        data = cluster.to_dict()
        assert data["type"] == "voxel_cluster"
        assert data["front"] == [[1, 0]]
        assert data["top"] == [[1, 1]]
        assert data["side"] == [[1]]
