"""Unit tests for Ray and Hit records."""

import pytest

from tinytracer.core.ray import Hit, Ray
from tinytracer.core.vector import Vector


class TestRay:
    """Tests for ray construction and evaluation."""

    def test_direction_is_normalized(self):
        ray = Ray(Vector(1.0, 2.0, 3.0), Vector(0.0, 0.0, 10.0))
        assert ray.direction == Vector(0.0, 0.0, 1.0)
        assert ray.origin == Vector(1.0, 2.0, 3.0)

    def test_default_bounce_count(self):
        assert Ray(Vector.ZERO, Vector.X).bounce_count == 0

    def test_bounce_count(self):
        assert Ray(Vector.ZERO, Vector.X, bounce_count=3).bounce_count == 3

    def test_negative_bounce_count_rejected(self):
        with pytest.raises(ValueError):
            Ray(Vector.ZERO, Vector.X, bounce_count=-1)

    def test_at(self):
        ray = Ray(Vector(1.0, 0.0, 0.0), Vector(0.0, 2.0, 0.0))
        assert ray.at(0.0) == Vector(1.0, 0.0, 0.0)
        assert ray.at(2.5) == Vector(1.0, 2.5, 0.0)
        assert ray.at(-1.0) == Vector(1.0, -1.0, 0.0)

    def test_zero_direction_stays_zero(self):
        assert Ray(Vector.ZERO, Vector.ZERO).direction == Vector.ZERO


class TestHit:
    """Tests for the hit record."""

    def test_fields(self):
        ray = Ray(Vector.ZERO, Vector.Z)
        hit = Hit(ray=ray, t=2.0, location=ray.at(2.0), normal=-Vector.Z)
        assert hit.ray is ray
        assert hit.t == 2.0
        assert hit.location == Vector(0.0, 0.0, 2.0)
        assert hit.normal == Vector(0.0, 0.0, -1.0)

    def test_frozen(self):
        ray = Ray(Vector.ZERO, Vector.Z)
        hit = Hit(ray=ray, t=1.0, location=ray.at(1.0), normal=Vector.Z)
        with pytest.raises(AttributeError):
            hit.t = 5.0
