"""Immutable 3D vector and random direction sampling.

Vectors are plain value objects: every operation returns a new instance and
construction rejects non-finite components, so a NaN can never leak into the
tracer through a position or direction.

Example:
    >>> from tinytracer.core.vector import Vector
    >>> v = Vector(3.0, 0.0, 4.0)
    >>> v.magnitude()
    5.0
    >>> v.direction()
    Vector(0.6, 0.0, 0.8)
"""

from __future__ import annotations

import math
from collections.abc import Iterator
from typing import Any

from tinytracer.core.errors import InvalidValueError


class Vector:
    """A vector in 3D space with finite float components.

    The magnitude is computed eagerly at construction; ``direction()`` returns
    the vector itself when it is already unit length (or zero).

    Attributes:
        x: The x component.
        y: The y component.
        z: The z component.
    """

    __slots__ = ("x", "y", "z", "_magnitude")

    ZERO: Vector
    X: Vector
    Y: Vector
    Z: Vector

    def __init__(self, x: float, y: float, z: float) -> None:
        for name, value in (("x", x), ("y", y), ("z", z)):
            if not math.isfinite(value):
                raise InvalidValueError(f"Vector component {name} is {value}")
        object.__setattr__(self, "x", float(x))
        object.__setattr__(self, "y", float(y))
        object.__setattr__(self, "z", float(z))
        object.__setattr__(self, "_magnitude", math.hypot(x, y, z))

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    # =========================================================================
    # Derived values
    # =========================================================================

    def magnitude(self) -> float:
        """Return the Euclidean length of the vector."""
        return self._magnitude

    def direction(self) -> Vector:
        """Return the directionally-equivalent unit vector.

        Returns:
            A unit vector, or the zero vector itself if the magnitude is 0.
        """
        magnitude = self._magnitude
        if magnitude == 0.0 or magnitude == 1.0:
            return self
        return Vector(self.x / magnitude, self.y / magnitude, self.z / magnitude)

    # =========================================================================
    # Arithmetic
    # =========================================================================

    def negative(self) -> Vector:
        return Vector(-self.x, -self.y, -self.z)

    def add(self, other: Vector) -> Vector:
        return Vector(self.x + other.x, self.y + other.y, self.z + other.z)

    def sub(self, other: Vector) -> Vector:
        return Vector(self.x - other.x, self.y - other.y, self.z - other.z)

    def scale(self, factor: float) -> Vector:
        return Vector(self.x * factor, self.y * factor, self.z * factor)

    def dot(self, other: Vector) -> float:
        return self.x * other.x + self.y * other.y + self.z * other.z

    def cross(self, other: Vector) -> Vector:
        """Return the cross product (perpendicular to both operands)."""
        return Vector(
            self.y * other.z - self.z * other.y,
            self.z * other.x - self.x * other.z,
            self.x * other.y - self.y * other.x,
        )

    def __add__(self, other: Vector) -> Vector:
        return self.add(other)

    def __sub__(self, other: Vector) -> Vector:
        return self.sub(other)

    def __mul__(self, factor: float) -> Vector:
        return self.scale(factor)

    def __rmul__(self, factor: float) -> Vector:
        return self.scale(factor)

    def __truediv__(self, divisor: float) -> Vector:
        return Vector(self.x / divisor, self.y / divisor, self.z / divisor)

    def __neg__(self) -> Vector:
        return self.negative()

    # =========================================================================
    # Value semantics
    # =========================================================================

    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y
        yield self.z

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Vector):
            return NotImplemented
        return self.x == other.x and self.y == other.y and self.z == other.z

    def __hash__(self) -> int:
        return hash((self.x, self.y, self.z))

    def __repr__(self) -> str:
        return f"Vector({self.x}, {self.y}, {self.z})"

    def to_tuple(self) -> tuple[float, float, float]:
        return (self.x, self.y, self.z)

    @classmethod
    def from_sequence(cls, values: Any) -> Vector:
        """Build a vector from any 3-element sequence (tuple, list, array)."""
        x, y, z = values
        return cls(float(x), float(y), float(z))


Vector.ZERO = Vector(0.0, 0.0, 0.0)
Vector.X = Vector(1.0, 0.0, 0.0)
Vector.Y = Vector(0.0, 1.0, 0.0)
Vector.Z = Vector(0.0, 0.0, 1.0)


def random_unit_vector(rng: Any) -> Vector:
    """Generate a random unit vector uniformly distributed over the sphere.

    Points are drawn uniformly in the cube [-0.5, 0.5]^3 and rejected unless
    they fall inside the inscribed sphere, which avoids the bias towards the
    cube's corner directions.

    Args:
        rng: Random source with a ``random()`` method returning floats in
            [0, 1) (``numpy.random.Generator`` or ``random.Random``).

    Returns:
        A unit-length vector.
    """
    while True:
        p = Vector(rng.random() - 0.5, rng.random() - 0.5, rng.random() - 0.5)
        magnitude = p.magnitude()
        if 0.0 < magnitude <= 0.5:
            return p.direction()
