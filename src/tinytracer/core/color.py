"""RGB color with channels saturated to [0, 1].

Channel values outside [0, 1] are clamped at construction; this saturation is
deliberate. Non-finite channels are rejected instead, since they can only come
from a bug upstream.

The compositing helpers mirror the operations the tracer needs:

    blend:    weighted per-channel average
    multiply: per-channel product (a surface filtering light)
    screen:   1 - prod(1 - c) (a surface adding light)

Example:
    >>> from tinytracer.core.color import Color
    >>> Color(-1.0, 2.0, 0.5) == Color(0.0, 1.0, 0.5)
    True
    >>> Color.blend([(2.0, Color.BLACK), (1.0, Color.WHITE)]).r
    0.3333333333333333
"""

from __future__ import annotations

import math
from collections.abc import Iterable, Iterator
from typing import Any, Union

from tinytracer.core.errors import EmptyBlendError, InvalidValueError

# A blend entry is either a bare color (weight 1) or a (weight, color) pair.
BlendEntry = Union["Color", tuple[float, "Color"]]


def _clamp(value: float) -> float:
    return min(1.0, max(0.0, value))


class Color:
    """An RGB color with float channels in [0, 1].

    Attributes:
        r: Red channel.
        g: Green channel.
        b: Blue channel.
    """

    __slots__ = ("r", "g", "b")

    BLACK: Color
    BLUE: Color
    GREEN: Color
    CYAN: Color
    RED: Color
    MAGENTA: Color
    YELLOW: Color
    WHITE: Color

    def __init__(self, r: float, g: float, b: float) -> None:
        for name, value in (("r", r), ("g", g), ("b", b)):
            if not math.isfinite(value):
                raise InvalidValueError(f"Color channel {name} is {value}")
        object.__setattr__(self, "r", _clamp(float(r)))
        object.__setattr__(self, "g", _clamp(float(g)))
        object.__setattr__(self, "b", _clamp(float(b)))

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    # =========================================================================
    # 8-bit channels
    # =========================================================================

    @property
    def r8(self) -> int:
        """Red channel truncated to an 8-bit integer."""
        return int(math.floor(self.r * 255)) & 0xFF

    @property
    def g8(self) -> int:
        """Green channel truncated to an 8-bit integer."""
        return int(math.floor(self.g * 255)) & 0xFF

    @property
    def b8(self) -> int:
        """Blue channel truncated to an 8-bit integer."""
        return int(math.floor(self.b * 255)) & 0xFF

    # =========================================================================
    # Transforms
    # =========================================================================

    def pow(self, exponent: float) -> Color:
        """Raise each channel to an exponent, e.g. for gamma encoding.

        Args:
            exponent: The exponent (0.45 approximates sRGB display encoding).

        Returns:
            A new color with each channel raised to the exponent.
        """
        return Color(self.r**exponent, self.g**exponent, self.b**exponent)

    def scale(self, factor: float) -> Color:
        """Multiply each channel by a scalar (result is clamped)."""
        return Color(self.r * factor, self.g * factor, self.b * factor)

    @staticmethod
    def blend(colors: Iterable[BlendEntry]) -> Color:
        """Compute the weighted per-channel average of colors.

        Args:
            colors: Colors to average. Each entry is either a Color (weight 1)
                or a ``(weight, color)`` pair.

        Returns:
            The weighted average color.

        Raises:
            EmptyBlendError: If no entries are given or the weights do not sum
                to a positive value.
        """
        r = g = b = 0.0
        total = 0.0
        count = 0
        for entry in colors:
            if isinstance(entry, Color):
                weight, color = 1.0, entry
            else:
                weight, color = entry
            r += weight * color.r
            g += weight * color.g
            b += weight * color.b
            total += weight
            count += 1

        if count == 0:
            raise EmptyBlendError("Cannot blend an empty list of colors")
        if total <= 0.0:
            raise EmptyBlendError(f"Cannot blend colors with total weight {total}")

        return Color(r / total, g / total, b / total)

    @staticmethod
    def multiply(*colors: Color) -> Color:
        """Combine colors multiplicatively (white is the identity)."""
        r = g = b = 1.0
        for c in colors:
            r *= c.r
            g *= c.g
            b *= c.b
        return Color(r, g, b)

    @staticmethod
    def screen(*colors: Color) -> Color:
        """Combine colors by screen compositing (black is the identity)."""
        r = g = b = 1.0
        for c in colors:
            r *= 1.0 - c.r
            g *= 1.0 - c.g
            b *= 1.0 - c.b
        return Color(1.0 - r, 1.0 - g, 1.0 - b)

    # =========================================================================
    # Value semantics
    # =========================================================================

    def __iter__(self) -> Iterator[float]:
        yield self.r
        yield self.g
        yield self.b

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Color):
            return NotImplemented
        return self.r == other.r and self.g == other.g and self.b == other.b

    def __hash__(self) -> int:
        return hash((self.r, self.g, self.b))

    def __repr__(self) -> str:
        return f"Color({self.r}, {self.g}, {self.b})"

    def to_tuple(self) -> tuple[float, float, float]:
        return (self.r, self.g, self.b)

    @classmethod
    def from_sequence(cls, values: Any) -> Color:
        """Build a color from any 3-element sequence."""
        r, g, b = values
        return cls(float(r), float(g), float(b))


Color.BLACK = Color(0.0, 0.0, 0.0)
Color.BLUE = Color(0.0, 0.0, 1.0)
Color.GREEN = Color(0.0, 1.0, 0.0)
Color.CYAN = Color(0.0, 1.0, 1.0)
Color.RED = Color(1.0, 0.0, 0.0)
Color.MAGENTA = Color(1.0, 0.0, 1.0)
Color.YELLOW = Color(1.0, 1.0, 0.0)
Color.WHITE = Color(1.0, 1.0, 1.0)


def rgb(r: float, g: float | None = None, b: float | None = None) -> Color:
    """Shorthand color constructor.

    ``g`` defaults to ``r`` and ``b`` defaults to the mean of ``r`` and ``g``,
    so ``rgb(0.5)`` is a mid gray.
    """
    if g is None:
        g = r
    if b is None:
        b = (r + g) / 2
    return Color(r, g, b)
