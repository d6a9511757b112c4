"""Unit tests for the Color value type.

Tests cover:
- Channel clamping and rejection of non-finite channels
- 8-bit truncation
- Weighted blending and its error cases
- Multiply and screen compositing
- The rgb() shorthand
"""

import math

import pytest

from tinytracer.core.color import Color, rgb
from tinytracer.core.errors import EmptyBlendError, InvalidValueError


class TestColorConstruction:
    """Tests for creating colors."""

    def test_clamps_channels(self):
        """Test that out-of-range channels saturate instead of failing."""
        assert Color(-1.0, 2.0, 0.5) == Color(0.0, 1.0, 0.5)

    @pytest.mark.parametrize("value", [-1e9, -0.5, 0.0, 0.3, 1.0, 7.0, 1e9])
    def test_channels_always_in_unit_range(self, value):
        c = Color(value, value, value)
        for channel in c:
            assert 0.0 <= channel <= 1.0

    @pytest.mark.parametrize("bad", [math.nan, math.inf, -math.inf])
    def test_rejects_non_finite(self, bad):
        with pytest.raises(InvalidValueError):
            Color(0.0, bad, 0.0)

    def test_immutable(self):
        with pytest.raises(AttributeError):
            Color.RED.r = 0.0

    def test_constants(self):
        assert Color.BLACK.to_tuple() == (0.0, 0.0, 0.0)
        assert Color.WHITE.to_tuple() == (1.0, 1.0, 1.0)
        assert Color.MAGENTA.to_tuple() == (1.0, 0.0, 1.0)
        assert Color.CYAN.to_tuple() == (0.0, 1.0, 1.0)
        assert Color.YELLOW.to_tuple() == (1.0, 1.0, 0.0)

    def test_from_sequence(self):
        assert Color.from_sequence([0.1, 0.2, 0.3]) == Color(0.1, 0.2, 0.3)


class TestColor8Bit:
    """Tests for 8-bit channel truncation."""

    def test_truncates(self):
        c = Color(1.0, 0.5, 0.0)
        assert c.r8 == 255
        assert c.g8 == 127
        assert c.b8 == 0

    def test_just_below_step(self):
        c = Color(0.999, 0.01, 0.0039)
        assert c.r8 == 254
        assert c.g8 == 2
        assert c.b8 == 0


class TestColorBlend:
    """Tests for weighted blending."""

    def test_unweighted_average(self):
        a = Color(0.2, 0.4, 0.6)
        b = Color(0.4, 0.0, 1.0)
        blended = Color.blend([(1.0, a), (1.0, b)])
        assert blended.r == pytest.approx(0.3)
        assert blended.g == pytest.approx(0.2)
        assert blended.b == pytest.approx(0.8)

    def test_bare_colors_have_unit_weight(self):
        a = Color(0.2, 0.4, 0.6)
        b = Color(0.4, 0.0, 1.0)
        assert Color.blend([a, b]) == Color.blend([(1.0, a), (1.0, b)])

    def test_weighting(self):
        """Test that a weight of 2 counts twice as much as a weight of 1."""
        blended = Color.blend([(2.0, Color.BLACK), (1.0, Color.WHITE)])
        for channel in blended:
            assert channel == pytest.approx(1.0 / 3.0)

    def test_zero_weight_entry_is_ignored(self):
        assert Color.blend([(1.0, Color.RED), (0.0, Color.WHITE)]) == Color.RED

    def test_accepts_generator(self):
        assert Color.blend(Color.BLUE for _ in range(3)) == Color.BLUE

    def test_empty_blend_raises(self):
        with pytest.raises(EmptyBlendError):
            Color.blend([])

    def test_zero_total_weight_raises(self):
        with pytest.raises(EmptyBlendError):
            Color.blend([(0.0, Color.RED), (0.0, Color.BLUE)])


class TestColorCompositing:
    """Tests for multiply, screen, pow and scale."""

    def test_multiply(self):
        result = Color.multiply(Color(0.5, 1.0, 0.2), Color(0.5, 0.3, 1.0))
        assert result.r == pytest.approx(0.25)
        assert result.g == pytest.approx(0.3)
        assert result.b == pytest.approx(0.2)

    def test_multiply_identity_is_white(self):
        c = Color(0.1, 0.2, 0.3)
        assert Color.multiply(c, Color.WHITE) == c

    def test_screen(self):
        result = Color.screen(Color(0.5, 0.0, 1.0), Color(0.5, 0.3, 0.2))
        assert result.r == pytest.approx(0.75)
        assert result.g == pytest.approx(0.3)
        assert result.b == pytest.approx(1.0)

    def test_screen_identity_is_black(self):
        c = Color(0.1, 0.2, 0.3)
        result = Color.screen(c, Color.BLACK)
        for got, expected in zip(result, c):
            assert got == pytest.approx(expected)

    def test_screen_never_darkens(self):
        a = Color(0.2, 0.5, 0.7)
        b = Color(0.4, 0.1, 0.0)
        result = Color.screen(a, b)
        for out, x, y in zip(result, a, b):
            assert out >= max(x, y) - 1e-12

    def test_pow(self):
        c = Color(0.25, 1.0, 0.0).pow(0.5)
        assert c.r == pytest.approx(0.5)
        assert c.g == 1.0
        assert c.b == 0.0

    def test_scale_clamps(self):
        assert Color(0.5, 0.25, 0.8).scale(2.0) == Color(1.0, 0.5, 1.0)


class TestRgb:
    """Tests for the rgb() shorthand."""

    def test_full(self):
        assert rgb(0.1, 0.2, 0.3) == Color(0.1, 0.2, 0.3)

    def test_gray(self):
        assert rgb(0.5) == Color(0.5, 0.5, 0.5)

    def test_blue_defaults_to_mean(self):
        c = rgb(0.2, 0.4)
        assert (c.r, c.g) == (0.2, 0.4)
        assert c.b == pytest.approx(0.3)
