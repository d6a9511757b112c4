"""Unit tests for the camera module.

Tests cover:
- LensCamera ray generation (center, corners, field of view)
- PinholeCamera ray generation and validation
- Camera serialization round trip
"""

import math

import pytest

from tinytracer.camera import LensCamera, PinholeCamera, camera_from_dict
from tinytracer.core.vector import Vector


class TestLensCamera:
    """Tests for the lens camera looking along +Z."""

    def test_center_ray(self):
        camera = LensCamera()
        ray = camera.get_ray(0.5, 0.5)
        assert ray.origin == Vector.ZERO
        assert ray.direction == Vector.Z

    def test_focal_point_behind_lens(self):
        camera = LensCamera(location=Vector(1.0, 2.0, 3.0), depth=4.0)
        assert camera.focal_point == Vector(1.0, 2.0, -1.0)

    def test_corner_rays(self):
        camera = LensCamera()
        bottom_left = camera.get_ray(0.0, 0.0)
        top_right = camera.get_ray(1.0, 1.0)

        assert bottom_left.origin == Vector(-0.5, -0.5, 0.0)
        assert top_right.origin == Vector(0.5, 0.5, 0.0)
        assert bottom_left.direction.x < 0.0
        assert bottom_left.direction.y < 0.0
        assert top_right.direction.x > 0.0
        assert top_right.direction.y > 0.0

    def test_field_of_view(self):
        """Test that the edge ray angle is atan(half width / depth)."""
        camera = LensCamera(depth=2.0)
        ray = camera.get_ray(1.0, 0.5)
        angle = math.atan2(ray.direction.x, ray.direction.z)
        assert angle == pytest.approx(math.atan(0.5 / 2.0))

    def test_deeper_focal_point_narrows_view(self):
        wide = LensCamera(depth=1.0).get_ray(1.0, 0.5)
        narrow = LensCamera(depth=4.0).get_ray(1.0, 0.5)
        assert narrow.direction.x < wide.direction.x

    def test_fractions_outside_unit_range(self):
        ray = LensCamera().get_ray(-0.01, 1.01)
        assert ray.origin.x < -0.5
        assert ray.origin.y > 0.5


class TestPinholeCamera:
    """Tests for the look-at camera."""

    def make_camera(self, **overrides):
        params = dict(
            lookfrom=(0.0, 0.0, 3.0),
            lookat=(0.0, 0.0, 0.0),
            vup=(0.0, 1.0, 0.0),
            vfov=90.0,
            aspect_ratio=1.0,
        )
        params.update(overrides)
        return PinholeCamera(**params)

    def test_center_ray_points_at_target(self):
        ray = self.make_camera().get_ray(0.5, 0.5)
        assert ray.origin == Vector(0.0, 0.0, 3.0)
        assert ray.direction.z == pytest.approx(-1.0)
        assert abs(ray.direction.x) < 1e-12
        assert abs(ray.direction.y) < 1e-12

    def test_vertical_fov(self):
        """Test that the top edge ray makes half the vertical FOV with the axis."""
        ray = self.make_camera(vfov=60.0).get_ray(0.5, 1.0)
        angle = math.degrees(math.atan2(ray.direction.y, -ray.direction.z))
        assert angle == pytest.approx(30.0)

    def test_aspect_ratio_widens_horizontally(self):
        camera = self.make_camera(aspect_ratio=2.0)
        right = camera.get_ray(1.0, 0.5)
        top = camera.get_ray(0.5, 1.0)
        assert right.direction.x / -right.direction.z == pytest.approx(2.0)
        assert top.direction.y / -top.direction.z == pytest.approx(1.0)

    @pytest.mark.parametrize("vfov", [0.0, 180.0, -10.0])
    def test_invalid_vfov(self, vfov):
        with pytest.raises(ValueError, match="vfov"):
            self.make_camera(vfov=vfov)

    def test_invalid_aspect_ratio(self):
        with pytest.raises(ValueError, match="aspect_ratio"):
            self.make_camera(aspect_ratio=0.0)

    def test_coincident_points(self):
        with pytest.raises(ValueError, match="different"):
            self.make_camera(lookat=(0.0, 0.0, 3.0))

    def test_parallel_vup(self):
        with pytest.raises(ValueError, match="parallel"):
            self.make_camera(vup=(0.0, 0.0, 1.0))


class TestCameraSerialization:
    """Tests for to_dict / camera_from_dict."""

    def test_lens_round_trip(self):
        camera = LensCamera(location=Vector(1.0, 2.0, 3.0), depth=3.0, width=2.0, height=1.5)
        assert camera_from_dict(camera.to_dict()) == camera

    def test_pinhole_round_trip(self):
        camera = PinholeCamera((1.0, 2.0, 3.0), (0.0, 0.0, 0.0), (0.0, 1.0, 0.0), 45.0, 1.5)
        restored = camera_from_dict(camera.to_dict())
        assert restored == camera
        assert restored.get_ray(0.2, 0.7).direction == camera.get_ray(0.2, 0.7).direction

    def test_unknown_type(self):
        with pytest.raises(ValueError, match="Unknown camera type"):
            camera_from_dict({"type": "fisheye"})
