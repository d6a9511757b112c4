"""Unit tests for render settings and background functions.

Tests cover:
- RenderSettings defaults and validation
- Fan-out halving with bounce depth
- sky_gradient and flat_background
"""

import pytest

from tinytracer.core.color import Color
from tinytracer.core.ray import Ray
from tinytracer.core.settings import (
    DISPLAY_GAMMA,
    RenderMode,
    RenderSettings,
    flat_background,
    sky_gradient,
)
from tinytracer.core.vector import Vector


class TestRenderSettings:
    """Tests for RenderSettings."""

    def test_defaults(self):
        settings = RenderSettings()
        assert settings.max_bounces == 16
        assert settings.max_samples_per_bounce == 4
        assert settings.gamma == DISPLAY_GAMMA
        assert settings.mode == RenderMode.ADAPTIVE
        assert settings.max_samples_per_pixel == 0
        assert settings.prune_by_lower_bound is True
        assert settings.background is sky_gradient
        assert settings.terminal_color == Color.BLACK

    @pytest.mark.parametrize(
        "field, value",
        [
            ("max_bounces", 0),
            ("max_samples_per_bounce", 0),
            ("samples_per_pixel", 0),
            ("gamma", 0.0),
            ("gamma", float("inf")),
            ("warmup_passes", -1),
            ("precision_interval", 0),
            ("max_samples_per_pixel", -1),
        ],
    )
    def test_invalid_values(self, field, value):
        with pytest.raises(ValueError, match=field):
            RenderSettings(**{field: value})

    def test_with_changes_validates(self):
        settings = RenderSettings().with_changes(max_bounces=3)
        assert settings.max_bounces == 3
        with pytest.raises(ValueError):
            settings.with_changes(max_bounces=0)

    def test_background_ignored_in_equality(self):
        assert RenderSettings() == RenderSettings(background=flat_background(Color.RED))


class TestSamplesPerBounce:
    """Tests for the halving fan-out."""

    @pytest.mark.parametrize(
        "previous_hits, expected",
        [(0, 4), (1, 2), (2, 1), (3, 1), (10, 1)],
    )
    def test_halves_to_one(self, previous_hits, expected):
        assert RenderSettings(max_samples_per_bounce=4).samples_per_bounce(previous_hits) == expected

    def test_rounds_up(self):
        settings = RenderSettings(max_samples_per_bounce=5)
        assert [settings.samples_per_bounce(n) for n in range(4)] == [5, 3, 2, 1]


class TestBackgrounds:
    """Tests for the background functions."""

    def test_sky_gradient_horizon(self):
        color = sky_gradient(Ray(Vector.ZERO, Vector.Z))
        assert color.to_tuple() == pytest.approx((0.25, 0.55, 1.0))

    def test_sky_gradient_straight_down(self):
        """Test that -Y and the horizon share a = 0.25."""
        down = sky_gradient(Ray(Vector.ZERO, -Vector.Y))
        assert down == sky_gradient(Ray(Vector.ZERO, Vector.Z))

    def test_sky_gradient_brighter_upwards(self):
        up = sky_gradient(Ray(Vector.ZERO, Vector(0.0, 1.0, 1.0)))
        level = sky_gradient(Ray(Vector.ZERO, Vector.Z))
        assert up.r > level.r

    def test_flat_background(self):
        background = flat_background(Color.CYAN)
        assert background(Ray(Vector.ZERO, Vector.X)) == Color.CYAN
        assert background(Ray(Vector.ZERO, -Vector.Y)) == Color.CYAN
